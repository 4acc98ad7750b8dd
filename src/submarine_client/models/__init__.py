from .store import LocalModel, ModelStore, ResourceKey
from .synchronizer import is_document, is_embedded_document, synchronize

__all__ = [
    "LocalModel",
    "ModelStore",
    "ResourceKey",
    "is_document",
    "is_embedded_document",
    "synchronize",
]
