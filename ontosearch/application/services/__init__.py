from .query_factory import QueryFactory, FilteredQueryBuilder, UserQueryBuilder
from .query_evaluator import QueryEvaluator
from .universe_cache import UniverseCache
from .progress import NullProgressListener, CancellableProgressListener
from .search_service import SearchService

__all__ = [
    "QueryFactory",
    "FilteredQueryBuilder",
    "UserQueryBuilder",
    "QueryEvaluator",
    "UniverseCache",
    "NullProgressListener",
    "CancellableProgressListener",
    "SearchService",
]
