"""SQLAlchemy ORM models for the signatures of the ontologies in scope."""

from sqlalchemy import (
    Boolean,
    Column,
    ForeignKey,
    Integer,
    String,
)
from sqlalchemy.orm import relationship

from ontosearch.infrastructure.database.base import Base


class OntologyModel(Base):
    """A loaded ontology."""

    __tablename__ = "ontologies"

    iri = Column(String(500), primary_key=True)

    entities = relationship(
        "OntologyEntityModel",
        back_populates="ontology",
        cascade="all, delete-orphan",
        lazy="selectin",
    )


class OntologyEntityModel(Base):
    """An entity declared in an ontology's signature."""

    __tablename__ = "ontology_entities"

    id = Column(Integer, primary_key=True, autoincrement=True)
    ontology_iri = Column(
        String(500),
        ForeignKey("ontologies.iri", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    entity_iri = Column(String(500), nullable=False, index=True)
    is_class = Column(Boolean, nullable=False, default=False)

    ontology = relationship("OntologyModel", back_populates="entities")
