from polydoc.connection import conn, connect, disconnect
from polydoc.errors import (
    PolydocError,
    InvalidClassError,
    NotEmbeddableError,
    ModelNotFoundError,
    IndexNotFoundError,
    DocumentNotFoundError,
    NotConnectedError,
)
from polydoc.model import Document, Embedded, ResultSet
from polydoc.schema.association import Reference, Referenced, Collection, Embed, EmbedCollection
from polydoc.schema.attribute import Attribute
from polydoc.schema.model_registry import check_associations

__version__ = "0.1.0"
__all__ = [
    "conn", "connect", "disconnect",
    "Document", "Embedded", "ResultSet",
    "Attribute", "Reference", "Referenced", "Collection", "Embed", "EmbedCollection",
    "check_associations",
    "PolydocError", "InvalidClassError", "NotEmbeddableError", "ModelNotFoundError",
    "IndexNotFoundError", "DocumentNotFoundError", "NotConnectedError",
]
