from .search import (
    PropertySchema,
    BasicFilterSchema,
    NegatedFilterSchema,
    NestedFilterSchema,
    UserQuerySchema,
    SearchRequest,
    SearchResponse,
    QueryTypesSchema,
)

__all__ = [
    "PropertySchema",
    "BasicFilterSchema",
    "NegatedFilterSchema",
    "NestedFilterSchema",
    "UserQuerySchema",
    "SearchRequest",
    "SearchResponse",
    "QueryTypesSchema",
]
