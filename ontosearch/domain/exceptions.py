"""Domain-specific exceptions — framework-independent."""


class UnsupportedQueryTypeError(Exception):
    """Raised when a query type is combined with an incompatible constructor or value."""

    def __init__(self, query_type: object, reason: str = ""):
        self.query_type = query_type
        self.reason = reason
        message = f"Unsupported query type: {getattr(query_type, 'value', query_type)}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class IndexIOError(Exception):
    """Raised by index adapters when the underlying store fails.

    Never retried internally — the caller decides whether to re-run the evaluation.
    """

    def __init__(self, operation: str, message: str):
        self.operation = operation
        self.message = message
        super().__init__(f"Index {operation} failed: {message}")


class QueryEvaluationError(Exception):
    """Raised when a query tree cannot be evaluated against the index."""


class EvaluationCancelledError(Exception):
    """Raised when the progress listener requested cancellation.

    Not a QueryEvaluationError: a cancelled evaluation is neither a failure
    nor an empty result.
    """

    def __init__(self, completed_queries: int = 0):
        self.completed_queries = completed_queries
        super().__init__(f"Evaluation cancelled after {completed_queries} sub-queries")
