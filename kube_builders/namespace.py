"""Builder for Namespace resources."""

import logging

from .builder import ResourceBuilder
from .chain import chained
from .client import StoreClient
from .exceptions import BuilderValidationError
from .schemes.core import Namespace

__all__ = [
    "NamespaceBuilder",
]

_LOGGER = logging.getLogger(__name__)


class NamespaceBuilder(ResourceBuilder[Namespace]):
    """Builder for a cluster scoped Namespace."""

    resource_cls = Namespace

    def __init__(self, client: StoreClient | None, name: str) -> None:
        """Initialize a builder for the named namespace."""
        super().__init__(client, name)

    @chained
    def with_label(self, key: str, value: str) -> None:
        """Add a label to the namespace."""
        _LOGGER.debug("Adding label %s=%s to namespace %s", key, value, self.resource_id.name)
        if not key:
            raise BuilderValidationError("'key' of the namespace label cannot be empty")
        metadata = self._definition().metadata
        metadata.labels = {**(metadata.labels or {}), key: value}

    @chained
    def with_multiple_labels(self, labels: dict[str, str]) -> None:
        """Add several labels to the namespace."""
        _LOGGER.debug("Adding labels %s to namespace %s", labels, self.resource_id.name)
        if not labels:
            raise BuilderValidationError("namespace labels cannot be empty")
        if any(not key for key in labels):
            raise BuilderValidationError("'key' of the namespace label cannot be empty")
        metadata = self._definition().metadata
        metadata.labels = {**(metadata.labels or {}), **labels}
