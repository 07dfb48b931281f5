"""Search API controller — endpoints for composing and evaluating queries."""

from fastapi import APIRouter, Depends, HTTPException, status

from ontosearch.application.schemas.search import (
    BasicFilterSchema,
    NegatedFilterSchema,
    QueryTypesSchema,
    SearchRequest,
    SearchResponse,
    UserQuerySchema,
)
from ontosearch.application.services import CancellableProgressListener, QueryFactory, SearchService
from ontosearch.domain.entities import (
    NON_VALUE_QUERY_TYPES,
    VALUE_QUERY_TYPES,
    PropertyRef,
    SearchOutcome,
    UserQuery,
)
from ontosearch.domain.exceptions import QueryEvaluationError, UnsupportedQueryTypeError
from ontosearch.infrastructure.dependencies import get_search_service

router = APIRouter(prefix="/search", tags=["search"])


# ── Helpers ──────────────────────────────────────────────────────────


def _to_user_query(schema: UserQuerySchema, factory: QueryFactory) -> UserQuery:
    """Map a request query tree to a domain UserQuery, depth-first."""
    builder = factory.user_query_builder()
    for item in schema.filters:
        if isinstance(item, BasicFilterSchema):
            builder.add_basic_query(
                PropertyRef(iri=item.property_ref.iri, kind=item.property_ref.kind),
                item.type,
                item.value,
                negated=item.negated,
            )
        elif isinstance(item, NegatedFilterSchema):
            builder.add_negated_query(_to_user_query(item.query, factory))
        else:
            builder.add_nested_query(_to_user_query(item.query, factory), item.relation)
    return builder.build(schema.match_mode)


def _to_response(outcome: SearchOutcome) -> SearchResponse:
    return SearchResponse(
        status=outcome.status,
        entities=sorted(outcome.entities),
        total=outcome.total,
        completed_queries=outcome.completed_queries,
        duration_ms=outcome.duration_ms,
    )


# ── Endpoints ────────────────────────────────────────────────────────


@router.get("/query-types", response_model=QueryTypesSchema)
async def list_query_types():
    """List the value and non-value query types."""
    return QueryTypesSchema(
        value_types=sorted(VALUE_QUERY_TYPES, key=lambda t: t.value),
        non_value_types=sorted(NON_VALUE_QUERY_TYPES, key=lambda t: t.value),
    )


@router.post("", response_model=SearchResponse)
def search(
    body: SearchRequest,
    service: SearchService = Depends(get_search_service),
):
    """Evaluate a composed query tree against the index.

    A cancelled evaluation (deadline exceeded) is reported with
    ``status="cancelled"`` and no entities.
    """
    try:
        query = _to_user_query(body.query, service.factory)
    except (UnsupportedQueryTypeError, ValueError) as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(exc),
        )

    listener = None
    if body.timeout_seconds is not None:
        listener = CancellableProgressListener(body.timeout_seconds)

    try:
        outcome = service.search(query, listener)
    except QueryEvaluationError as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=str(exc),
        )

    return _to_response(outcome)
