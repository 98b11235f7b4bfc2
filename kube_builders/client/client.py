"""Client interface to the remote object store."""

from abc import ABC, abstractmethod
from typing import TypeVar

from kube_builders.resource import BaseResource, NamedResource

T = TypeVar("T", bound=BaseResource)


class StoreClient(ABC):
    """Abstract base class for the typed get/create/update/delete object store API.

    Every call is a single blocking round trip. Implementations decide on
    transport, deadlines and whether they are safe for concurrent use.
    """

    @abstractmethod
    def get(self, resource_id: NamedResource, cls: type[T]) -> T:
        """Retrieve a resource by identity and type.

        Raises:
            ObjectNotFoundError: If the resource is not in the store.
            StoreError: For any other failure talking to the store.
        """

    @abstractmethod
    def create(self, obj: BaseResource) -> None:
        """Create a new resource in the store.

        Raises:
            AlreadyExistsError: If a resource with the same identity exists.
            StoreError: For any other failure talking to the store.
        """

    @abstractmethod
    def update(self, obj: T) -> T:
        """Replace an existing resource and return the stored result.

        Raises:
            ObjectNotFoundError: If the resource is not in the store.
            StoreError: For any other failure talking to the store.
        """

    @abstractmethod
    def delete(self, resource_id: NamedResource, cls: type[BaseResource]) -> None:
        """Remove a resource from the store.

        Raises:
            ObjectNotFoundError: If the resource is not in the store.
            StoreError: For any other failure talking to the store.
        """
