from .index_models import IndexDocumentModel, IndexFieldModel
from .ontology_models import OntologyModel, OntologyEntityModel

__all__ = [
    "IndexDocumentModel",
    "IndexFieldModel",
    "OntologyModel",
    "OntologyEntityModel",
]
