"""Abstract interface (port) for the inverted index."""

from abc import ABC, abstractmethod

from ontosearch.domain.entities import DocumentRef, IndexDocument, IndexQuery


class IndexSearcher(ABC):
    """Port for index access — implemented in the infrastructure layer.

    Both operations may block on I/O and raise ``IndexIOError`` when the
    underlying store fails.
    """

    @abstractmethod
    def search(self, query: IndexQuery) -> list[DocumentRef]:
        """Return references to every document matching the query.

        Args:
            query: The leaf index query to run.

        Returns:
            Opaque document references, in the adapter's hit order.
        """
        ...

    @abstractmethod
    def fetch(self, ref: DocumentRef) -> IndexDocument:
        """Load the document behind a reference returned by ``search``."""
        ...
