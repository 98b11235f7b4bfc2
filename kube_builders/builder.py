"""Library for driving the lifecycle of a single resource in the object store.

A builder pairs the desired state of one resource (`definition`) with the
state last observed in the store (`object`). Callers compose the definition,
then invoke one of the lifecycle operations which validate the builder,
consult the store and update the observed state.

Example usage:
```
from kube_builders.client import InMemoryClient
from kube_builders.metallb import BGPPeerBuilder

client = InMemoryClient()
peer = BGPPeerBuilder(client, "peer-one", "metallb-system", "10.0.0.1", 64500, 64501)
peer.with_password("secret").create()
assert peer.exists()
peer.delete()
```

Configuration errors (an empty name, a missing client, invalid setter input)
are recorded once and make the builder unusable for the rest of its life:
every later operation raises the same error without contacting the store.
"""

import copy
from dataclasses import dataclass
from enum import StrEnum
import logging
from typing import ClassVar, Generic, Self, TypeVar, cast

from .client import StoreClient
from .exceptions import (
    BuilderException,
    BuilderValidationError,
    ObjectNotFoundError,
    StoreError,
)
from .resource import BaseResource, NamedResource, ObjectMeta

__all__ = [
    "ResourceBuilder",
    "BuilderState",
    "Presence",
    "ExistenceCheck",
    "undefined_resource_message",
]

_LOGGER = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseResource)


def undefined_resource_message(kind: str) -> str:
    """Return the error message for a builder without a definition."""
    return f"can not redefine the undefined {kind}"


class BuilderState(StrEnum):
    """The state of a builder relative to the store."""

    UNBOUND = "Unbound"
    """The builder has a recorded error or no definition."""

    BOUND = "Bound"
    """The builder has a definition but no observed object."""

    SYNCED = "Synced"
    """The builder has a definition and the object last observed in the store."""


class Presence(StrEnum):
    """Outcome of looking up a resource in the store."""

    PRESENT = "Present"
    ABSENT = "Absent"
    UNKNOWN = "Unknown"


@dataclass
class ExistenceCheck:
    """Result of a resource lookup, with the store error when it was inconclusive."""

    presence: Presence
    error: StoreError | None = None

    def __bool__(self) -> bool:
        """Return False only when the store definitively reported the resource absent."""
        return self.presence != Presence.ABSENT


class ResourceBuilder(Generic[T]):
    """Base class for builders of a single resource kind.

    Subclasses set `resource_cls` to the schema class of the kind they manage
    and add chained `with_*` setters for composing the definition.
    """

    resource_cls: ClassVar[type[BaseResource]]
    """The schema class of the managed resource."""

    def __init__(self, client: StoreClient | None, name: str, namespace: str = "") -> None:
        """Initialize a builder with a fresh definition.

        The namespace is ignored for cluster scoped kinds. The store is not
        contacted.
        """
        kind = self.resource_cls.kind
        _LOGGER.debug(
            "Initializing new %s builder with name: %s, namespace: %s",
            kind,
            name,
            namespace,
        )
        if not self.resource_cls.namespaced:
            namespace = ""
        self._client = client
        self._resource_id = NamedResource(kind, namespace or None, name)
        self.definition: T | None = cast(
            T, self.resource_cls(metadata=ObjectMeta(name=name, namespace=namespace or None))
        )
        self.object: T | None = None
        self.error: BuilderException | None = None

        if not name:
            self._poison(BuilderValidationError(f"{kind} 'name' cannot be empty"))
        if self.resource_cls.namespaced and not namespace:
            self._poison(BuilderValidationError(f"{kind} 'namespace' cannot be empty"))
        if client is None:
            self._poison(BuilderValidationError(f"{kind} builder cannot have nil client"))

    @classmethod
    def pull(cls, client: StoreClient | None, name: str, namespace: str = "") -> Self:
        """Load an existing resource from the store into a new builder.

        The fetched object becomes the definition of the returned builder.
        Subclass specific constructor arguments are not required: the builder
        is created by `_from_identity`, which subclasses with extra instance
        state override.

        Raises:
            BuilderValidationError: If the identity or client is invalid.
            ObjectNotFoundError: If the resource does not exist.
            StoreError: If the store could not be queried.
        """
        kind = cls.resource_cls.kind
        _LOGGER.debug(
            "Pulling existing %s name %s under namespace %s", kind, name, namespace
        )
        builder = cls._from_identity(client, name, namespace)
        if builder.error is not None:
            raise BuilderValidationError(
                f"failed to pull {kind} object due to the following error: {builder.error}"
            ) from builder.error
        check = builder._lookup()
        if check.presence == Presence.ABSENT:
            if cls.resource_cls.namespaced:
                raise ObjectNotFoundError(
                    f"{kind} object {name} does not exist in namespace {namespace}"
                )
            raise ObjectNotFoundError(f"{kind} object {name} does not exist")
        if check.error is not None:
            raise check.error
        builder.definition = copy.deepcopy(builder.object)
        return builder

    @classmethod
    def _from_identity(cls, client: StoreClient | None, name: str, namespace: str) -> Self:
        """Return a builder with a fresh definition, bypassing the subclass constructor."""
        builder = cls.__new__(cls)
        ResourceBuilder.__init__(builder, client, name, namespace)
        return builder

    @property
    def resource_id(self) -> NamedResource:
        """Return the identity of the managed resource."""
        return self._resource_id

    @property
    def state(self) -> BuilderState:
        """Return the state of the builder relative to the store."""
        if self.error is not None or self.definition is None:
            return BuilderState.UNBOUND
        if self.object is None:
            return BuilderState.BOUND
        return BuilderState.SYNCED

    def _poison(self, err: BuilderException) -> None:
        if self.error is None:
            _LOGGER.debug("The %s builder has error message: %s", self._resource_id.kind, err)
            self.error = err

    def _definition(self) -> T:
        """Return the definition for use by a setter."""
        if self.definition is None:
            raise BuilderValidationError(undefined_resource_message(self._resource_id.kind))
        return self.definition

    def validate(self) -> None:
        """Check that the builder is usable before touching the store.

        Raises:
            BuilderException: The recorded error of the builder, a
                BuilderValidationError for configuration errors or the
                FragmentError of a rule that failed to build.
        """
        kind = self._resource_id.kind
        if self.definition is None:
            self._poison(BuilderValidationError(undefined_resource_message(kind)))
        elif self.definition.resource_id != self._resource_id:
            self._poison(
                BuilderValidationError(
                    f"{kind} identity cannot change from {self._resource_id} "
                    f"to {self.definition.resource_id}"
                )
            )
        if self._client is None:
            self._poison(BuilderValidationError(f"{kind} builder cannot have nil client"))
        if self.error is not None:
            raise self.error.with_traceback(None)

    @property
    def client(self) -> StoreClient:
        """Return the store client of a validated builder."""
        return cast(StoreClient, self._client)

    def _lookup(self) -> ExistenceCheck:
        """Fetch the resource and record it as the observed object."""
        _LOGGER.debug("Checking if %s exists", self._resource_id)
        try:
            self.object = cast(
                T, self.client.get(self._resource_id, self.resource_cls)
            )
        except ObjectNotFoundError:
            self.object = None
            return ExistenceCheck(Presence.ABSENT)
        except StoreError as err:
            _LOGGER.debug("Lookup of %s was inconclusive: %s", self._resource_id, err)
            self.object = None
            return ExistenceCheck(Presence.UNKNOWN, err)
        return ExistenceCheck(Presence.PRESENT)

    def exists(self) -> bool:
        """Check whether the resource exists in the store.

        This never raises. A builder with an error reports False, while a store
        error other than not-found reports True since the resource may exist.
        Use `presence` to tell these cases apart.
        """
        try:
            self.validate()
        except BuilderException:
            return False
        return bool(self._lookup())

    def presence(self) -> ExistenceCheck:
        """Look up the resource and report whether it is present, absent or unknown.

        Raises:
            BuilderException: The recorded error of the builder.
        """
        self.validate()
        return self._lookup()

    def get(self) -> T:
        """Fetch the current state of the resource from the store.

        The observed `object` of the builder is left unchanged.
        """
        self.validate()
        _LOGGER.debug("Getting %s", self._resource_id)
        return cast(T, self.client.get(self._resource_id, self.resource_cls))

    def create(self) -> Self:
        """Create the resource from the definition unless it already exists."""
        self.validate()
        definition = self._definition()
        _LOGGER.debug("Creating %s", self._resource_id)
        check = self._lookup()
        if check.presence == Presence.UNKNOWN:
            _LOGGER.warning(
                "Skipping create of %s which may already exist: %s",
                self._resource_id,
                check.error,
            )
        if check:
            return self
        self.client.create(copy.deepcopy(definition))
        self.object = copy.deepcopy(definition)
        return self

    def update(self) -> Self:
        """Replace the resource in the store with the definition."""
        self.validate()
        definition = self._definition()
        _LOGGER.debug("Updating %s", self._resource_id)
        self.object = self.client.update(copy.deepcopy(definition))
        return self

    def delete(self) -> Self:
        """Remove the resource from the store.

        Raises:
            ObjectNotFoundError: If the resource does not exist.
            StoreError: If the store fails to delete the resource.
        """
        self.validate()
        kind = self._resource_id.kind
        _LOGGER.debug("Deleting %s", self._resource_id)
        if not self._lookup():
            raise ObjectNotFoundError(f"{kind} cannot be deleted because it does not exist")
        try:
            self.client.delete(self._resource_id, self.resource_cls)
        except StoreError as err:
            raise StoreError(f"cannot delete {kind}: {err}") from err
        self.object = None
        return self
