"""Module for an in memory object store client."""

import copy
import itertools
import logging
import threading
import uuid
from typing import Any, TypeVar

from kube_builders.exceptions import AlreadyExistsError, ObjectNotFoundError
from kube_builders.resource import BaseResource, NamedResource

from .client import StoreClient

_LOGGER = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseResource)


class InMemoryClient(StoreClient):
    """In-memory implementation of the StoreClient interface.

    Resources are held in their serialized form keyed by NamedResource, so
    values handed out by the client never share state with values stored in it.
    Every write assigns a new `metadata.resourceVersion`.
    """

    def __init__(self) -> None:
        """Initialize the InMemoryClient."""
        self._objects: dict[NamedResource, dict[str, Any]] = {}
        self._versions = itertools.count(1)
        self._lock = threading.Lock()

    def get(self, resource_id: NamedResource, cls: type[T]) -> T:
        """Retrieve a resource by identity and type."""
        _LOGGER.debug("Getting %s", resource_id)
        with self._lock:
            if (doc := self._objects.get(resource_id)) is None:
                raise ObjectNotFoundError(f"{resource_id} not found")
            return cls.from_dict(copy.deepcopy(doc))

    def create(self, obj: BaseResource) -> None:
        """Create a new resource in the store."""
        resource_id = obj.resource_id
        _LOGGER.debug("Creating %s", resource_id)
        with self._lock:
            if resource_id in self._objects:
                raise AlreadyExistsError(f"{resource_id} already exists")
            doc = obj.to_dict()
            doc["metadata"]["uid"] = str(uuid.uuid4())
            doc["metadata"]["resourceVersion"] = str(next(self._versions))
            self._objects[resource_id] = doc

    def update(self, obj: T) -> T:
        """Replace an existing resource and return the stored result."""
        resource_id = obj.resource_id
        _LOGGER.debug("Updating %s", resource_id)
        with self._lock:
            if (existing := self._objects.get(resource_id)) is None:
                raise ObjectNotFoundError(f"{resource_id} not found")
            doc = obj.to_dict()
            doc["metadata"]["uid"] = existing["metadata"].get("uid")
            doc["metadata"]["resourceVersion"] = str(next(self._versions))
            self._objects[resource_id] = doc
            return type(obj).from_dict(copy.deepcopy(doc))

    def delete(self, resource_id: NamedResource, cls: type[BaseResource]) -> None:
        """Remove a resource from the store."""
        _LOGGER.debug("Deleting %s", resource_id)
        with self._lock:
            if self._objects.pop(resource_id, None) is None:
                raise ObjectNotFoundError(f"{resource_id} not found")

    def list_objects(self, kind: str | None = None) -> list[NamedResource]:
        """List the identity of all resources in the store, optionally filtered by kind."""
        with self._lock:
            return sorted(
                resource_id
                for resource_id in self._objects
                if kind is None or resource_id.kind == kind
            )
