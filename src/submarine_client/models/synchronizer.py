"""
JSON:API response synchronization.

Normalizes decoded API responses into live models held by a
:class:`ModelStore`. Attribute values may themselves be JSON:API documents
(an embedded sub-resource, for example), so every synchronized model gets a
second pass over its attributes.
"""

from typing import Any, Mapping, Set

from .store import LocalModel, ModelStore, ResourceKey


def is_document(body: Any) -> bool:
    """Return True if ``body`` has the shape of a JSON:API document."""
    return isinstance(body, Mapping) and "data" in body


def is_embedded_document(value: Any) -> bool:
    """
    Return True if an attribute value is a JSON:API document.

    Stricter than :func:`is_document`: ``data`` must hold a resource object
    or a list of them, so an ordinary object that happens to have a ``data``
    key is left alone.
    """
    if not is_document(value):
        return False
    data = value["data"]
    if isinstance(data, list):
        return all(_is_resource_object(item) for item in data)
    return _is_resource_object(data)


def _is_resource_object(value: Any) -> bool:
    return isinstance(value, Mapping) and "type" in value and "id" in value


def synchronize(store: ModelStore, body: Any) -> Any:
    """
    Synchronize a decoded response body into ``store``.

    Args:
        store: Model store to upsert into
        body: Decoded JSON body (any JSON value)

    Returns:
        ``body`` itself when it is not a JSON:API document; otherwise the
        synchronized model, or list of models, in the cardinality of ``data``

    Raises:
        ValueError: If the document or one of its resources is malformed
    """
    if not is_document(body):
        return body
    return _synchronize(store, body, set())


def _synchronize(store: ModelStore, document: Mapping[str, Any], visiting: Set[ResourceKey]) -> Any:
    synchronized = store.sync(document)

    if isinstance(synchronized, list):
        for model in synchronized:
            _synchronize_attributes(store, model, visiting)
    elif synchronized is not None:
        _synchronize_attributes(store, synchronized, visiting)

    return synchronized


def _synchronize_attributes(store: ModelStore, model: LocalModel, visiting: Set[ResourceKey]) -> None:
    # a model already on the current path is not re-entered
    if model.key in visiting:
        return
    visiting.add(model.key)
    try:
        for name, value in list(model.attributes.items()):
            if is_embedded_document(value):
                model.attributes[name] = _synchronize(store, value, visiting)
    finally:
        visiting.discard(model.key)
