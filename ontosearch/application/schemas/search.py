"""Pydantic schemas for search API requests and responses."""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ontosearch.domain.entities import MatchMode, PropertyKind, QueryType, SearchStatus

# Deepest negated/nested chain accepted in a request.
MAX_QUERY_DEPTH = 16


# ── Request Schemas ──────────────────────────────────────────────────


class PropertySchema(BaseModel):
    """A property referenced by a leaf filter."""

    iri: str = Field(..., min_length=1)
    kind: PropertyKind


class BasicFilterSchema(BaseModel):
    """A (property, operator, value) leaf filter."""

    model_config = ConfigDict(populate_by_name=True)

    kind: Literal["basic"] = "basic"
    property_ref: PropertySchema = Field(..., alias="property")
    type: QueryType
    value: str | None = Field(default=None, description="Required for value query types only")
    negated: bool = Field(default=False, description="Exclude values matching the text")


class NegatedFilterSchema(BaseModel):
    """Complement of a nested user query."""

    kind: Literal["negated"]
    query: "UserQuerySchema"


class NestedFilterSchema(BaseModel):
    """Entities holding ``relation`` towards a filler matching ``query``."""

    kind: Literal["nested"]
    relation: str = Field(..., min_length=1, description="IRI of the restricted object property")
    query: "UserQuerySchema"


FilterSchema = Annotated[
    Union[BasicFilterSchema, NegatedFilterSchema, NestedFilterSchema],
    Field(discriminator="kind"),
]


class UserQuerySchema(BaseModel):
    """An ordered list of filters and the mode that combines them."""

    match_mode: MatchMode = MatchMode.ALL
    filters: list[FilterSchema] = []


NegatedFilterSchema.model_rebuild()
NestedFilterSchema.model_rebuild()
UserQuerySchema.model_rebuild()


def query_depth(query: UserQuerySchema) -> int:
    """Levels of user queries in a request tree; a flat query has depth 1."""
    deepest = 0
    pending = [(query, 1)]
    while pending:
        current, depth = pending.pop()
        deepest = max(deepest, depth)
        for item in current.filters:
            if not isinstance(item, BasicFilterSchema):
                pending.append((item.query, depth + 1))
    return deepest


class SearchRequest(BaseModel):
    """Request body for evaluating a composed query."""

    query: UserQuerySchema
    timeout_seconds: float | None = Field(
        default=None,
        gt=0,
        le=600,
        description="Overrides the configured evaluation deadline",
    )

    @model_validator(mode="after")
    def _limit_depth(self) -> "SearchRequest":
        if query_depth(self.query) > MAX_QUERY_DEPTH:
            raise ValueError(f"query nesting exceeds {MAX_QUERY_DEPTH} levels")
        return self


# ── Response Schemas ─────────────────────────────────────────────────


class SearchResponse(BaseModel):
    """Outcome of an evaluation; ``cancelled`` never means "no matches"."""

    status: SearchStatus
    entities: list[str] = []
    total: int = 0
    completed_queries: int = 0
    duration_ms: int = 0


class QueryTypesSchema(BaseModel):
    """The two disjoint groups of query types."""

    value_types: list[QueryType]
    non_value_types: list[QueryType]
