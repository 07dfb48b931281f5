from .index_searcher import IndexSearcher
from .search_context import SearchContext
from .progress_listener import SearchProgressListener

__all__ = [
    "IndexSearcher",
    "SearchContext",
    "SearchProgressListener",
]
