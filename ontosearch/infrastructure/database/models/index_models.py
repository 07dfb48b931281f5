"""SQLAlchemy ORM models for the inverted index.

One row per document and one row per (field, value) pair. The tables are
written by the indexer; the search engine only reads them.
"""

from sqlalchemy import (
    Column,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import relationship

from ontosearch.infrastructure.database.base import Base


class IndexDocumentModel(Base):
    """An indexed record describing one entity, relation, or annotation occurrence."""

    __tablename__ = "index_documents"

    id = Column(Integer, primary_key=True, autoincrement=True)

    fields = relationship(
        "IndexFieldModel",
        back_populates="document",
        cascade="all, delete-orphan",
        order_by="IndexFieldModel.id",
        lazy="selectin",
    )


class IndexFieldModel(Base):
    """A single field value on an indexed document."""

    __tablename__ = "index_document_fields"
    __table_args__ = (
        Index("ix_index_document_fields_name_value", "name", "value"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    document_id = Column(
        Integer,
        ForeignKey("index_documents.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name = Column(String(100), nullable=False)
    value = Column(Text, nullable=False)

    document = relationship("IndexDocumentModel", back_populates="fields")
