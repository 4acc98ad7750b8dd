"""
Local Model Store

In-memory, identity-keyed registry of every JSON:API resource a client has
seen. Each resource lives exactly once in the store under its
``(type, id)`` key; re-syncing a resource mutates that instance in place so
references held by callers observe the update.

Relationships are stored as keys, not as embedded models, and resolved
through the store on access:

    store.sync(document)
    subscription = store.find("subscription", "1212")
    subscription.relationships["payment_method"]   # ResourceKey("payment_method", "345")
    subscription.related("payment_method")         # live LocalModel
"""

from typing import Any, Dict, Iterator, List, Mapping, NamedTuple, Optional, Union

from ..utils import logger


class ResourceKey(NamedTuple):
    type: str
    id: str


Linkage = Union[None, ResourceKey, List[ResourceKey]]


class LocalModel:
    """
    Identity-stable representation of one JSON:API resource.

    ``type`` and ``id`` are read-only. ``attributes``, ``relationships``,
    ``meta`` and ``links`` are plain dicts updated by every sync. Attribute
    values can be read as items (``model["status"]``) or, when the name does
    not clash with a method, as attributes (``model.status``).
    """

    def __init__(self, type: str, id: str, store: Optional["ModelStore"] = None):
        self._key = ResourceKey(str(type), str(id))
        self._store = store
        self.attributes: Dict[str, Any] = {}
        self.relationships: Dict[str, Linkage] = {}
        self.meta: Dict[str, Any] = {}
        self.links: Dict[str, Any] = {}

    @property
    def type(self) -> str:
        return self._key.type

    @property
    def id(self) -> str:
        return self._key.id

    @property
    def key(self) -> ResourceKey:
        return self._key

    def __getitem__(self, name: str) -> Any:
        return self.attributes[name]

    def __contains__(self, name: str) -> bool:
        return name in self.attributes

    def __getattr__(self, name: str) -> Any:
        # only reached when regular lookup fails
        if name.startswith("_"):
            raise AttributeError(name)
        attributes = self.__dict__.get("attributes", {})
        if name in attributes:
            return attributes[name]
        if name in self.__dict__.get("relationships", {}):
            return self.related(name)
        raise AttributeError(f"{type(self).__name__} {self._key.type!r} has no attribute {name!r}")

    def get(self, name: str, default: Any = None) -> Any:
        return self.attributes.get(name, default)

    def related(self, name: str) -> Union[None, "LocalModel", List["LocalModel"]]:
        """
        Resolve a relationship to live models.

        Args:
            name: Relationship name

        Returns:
            None for an empty to-one relationship, a model for a to-one
            relationship, a list of models for a to-many relationship

        Raises:
            KeyError: If the model has no such relationship
            RuntimeError: If the model is not attached to a store
        """
        if self._store is None:
            raise RuntimeError(f"{self!r} is not attached to a model store")
        linkage = self.relationships[name]
        if linkage is None:
            return None
        if isinstance(linkage, list):
            return [self._store[key] for key in linkage]
        return self._store[linkage]

    def to_dict(self) -> Dict[str, Any]:
        """Return the model as a JSON:API resource object."""
        def _identifier(key: ResourceKey) -> Dict[str, str]:
            return {"type": key.type, "id": key.id}

        relationships = {}
        for name, linkage in self.relationships.items():
            if linkage is None:
                relationships[name] = {"data": None}
            elif isinstance(linkage, list):
                relationships[name] = {"data": [_identifier(k) for k in linkage]}
            else:
                relationships[name] = {"data": _identifier(linkage)}

        resource: Dict[str, Any] = {
            "type": self.type,
            "id": self.id,
            "attributes": dict(self.attributes),
        }
        if relationships:
            resource["relationships"] = relationships
        if self.meta:
            resource["meta"] = dict(self.meta)
        if self.links:
            resource["links"] = dict(self.links)
        return resource

    def __repr__(self) -> str:
        return f"LocalModel(type={self.type!r}, id={self.id!r})"


class ModelStore:
    """
    Registry of local models keyed by ``(type, id)``.

    The store only grows; there is no eviction.
    """

    def __init__(self) -> None:
        self._models: Dict[ResourceKey, LocalModel] = {}

    @staticmethod
    def key_for(type: Any, id: Any) -> ResourceKey:
        return ResourceKey(str(type), str(id))

    # =========================================================================
    # Lookup
    # =========================================================================

    def find(self, type: str, id: Any) -> Optional[LocalModel]:
        return self._models.get(self.key_for(type, id))

    def find_all(self, type: str) -> List[LocalModel]:
        return [model for key, model in self._models.items() if key.type == type]

    def get_or_create(self, type: str, id: Any) -> LocalModel:
        key = self.key_for(type, id)
        model = self._models.get(key)
        if model is None:
            model = LocalModel(key.type, key.id, store=self)
            self._models[key] = model
        return model

    def __getitem__(self, key: ResourceKey) -> LocalModel:
        return self._models[key]

    def __contains__(self, item: Union[ResourceKey, LocalModel]) -> bool:
        if isinstance(item, LocalModel):
            return self._models.get(item.key) is item
        return item in self._models

    def __len__(self) -> int:
        return len(self._models)

    def __iter__(self) -> Iterator[LocalModel]:
        return iter(list(self._models.values()))

    # =========================================================================
    # Synchronization
    # =========================================================================

    def sync(self, document: Mapping[str, Any]) -> Union[None, LocalModel, List[LocalModel]]:
        """
        Upsert a JSON:API document into the store.

        Side-loaded ``included`` resources are merged first, then ``data``.

        Args:
            document: Decoded JSON:API document with a ``data`` member

        Returns:
            The model for a single resource, a list of models for a resource
            collection, None when ``data`` is null

        Raises:
            ValueError: If the document or one of its resources is malformed
        """
        if not isinstance(document, Mapping) or "data" not in document:
            raise ValueError("JSON:API document must be an object with a 'data' member")

        included = document.get("included") or []
        if not isinstance(included, list):
            raise ValueError(f"'included' must be a list of resource objects: {included!r}")
        for resource in included:
            self.sync_resource(resource)

        data = document["data"]
        if data is None:
            result = None
        elif isinstance(data, list):
            result = [self.sync_resource(resource) for resource in data]
        else:
            result = self.sync_resource(data)

        logger.debug(
            "Synchronized document: %d included, store holds %d models",
            len(included), len(self._models),
        )
        return result

    def sync_resource(self, resource: Mapping[str, Any]) -> LocalModel:
        """
        Merge one resource object into the store and return its model.
        """
        if not isinstance(resource, Mapping) or "type" not in resource or "id" not in resource:
            raise ValueError(f"Resource object requires 'type' and 'id': {resource!r}")

        members = {}
        for member in ("attributes", "relationships", "meta", "links"):
            value = resource.get(member) or {}
            if not isinstance(value, Mapping):
                raise ValueError(f"Resource member {member!r} must be an object: {value!r}")
            members[member] = value

        model = self.get_or_create(resource["type"], resource["id"])
        model.attributes.update(members["attributes"])

        for name, relationship in members["relationships"].items():
            # links-only relationships carry no linkage to store
            if isinstance(relationship, Mapping) and "data" in relationship:
                model.relationships[name] = self._link(relationship["data"])

        model.meta.update(members["meta"])
        model.links.update(members["links"])
        return model

    def _link(self, linkage: Any) -> Linkage:
        if linkage is None:
            return None
        if isinstance(linkage, list):
            return [self._link_one(identifier) for identifier in linkage]
        return self._link_one(linkage)

    def _link_one(self, identifier: Mapping[str, Any]) -> ResourceKey:
        if not isinstance(identifier, Mapping) or "type" not in identifier or "id" not in identifier:
            raise ValueError(f"Resource identifier requires 'type' and 'id': {identifier!r}")
        # targets that were not side-loaded still get an entry so no key dangles
        return self.get_or_create(identifier["type"], identifier["id"]).key
