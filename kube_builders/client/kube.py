"""Store client backed by a live Kubernetes API server.

The dynamic client resolves each schema class by its `apiVersion` and `kind`
through API discovery, so custom resources work as long as their CRD is
installed in the cluster. Errors from the Kubernetes client library are
translated into this library's exceptions and chained from the original.
"""

from collections.abc import Generator
from contextlib import contextmanager
import logging
from typing import Any, TypeVar

from kubernetes import config
from kubernetes.dynamic import DynamicClient
from kubernetes.dynamic.exceptions import (
    ConflictError,
    DynamicApiError,
    NotFoundError,
    ResourceNotFoundError,
)
from mashumaro.exceptions import InvalidFieldValue, MissingField
from urllib3.exceptions import HTTPError

from kube_builders.exceptions import (
    AlreadyExistsError,
    BuilderValidationError,
    ObjectNotFoundError,
    StoreError,
)
from kube_builders.resource import BaseResource, NamedResource

from .client import StoreClient

_LOGGER = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseResource)


@contextmanager
def _translate_errors(action: str, resource_id: NamedResource) -> Generator[None, None, None]:
    """Raise errors of the kubernetes client as StoreError subclasses."""
    try:
        yield
    except NotFoundError as err:
        raise ObjectNotFoundError(f"{resource_id} not found") from err
    except ConflictError as err:
        if action == "create":
            raise AlreadyExistsError(f"{resource_id} already exists") from err
        raise StoreError(f"cannot {action} {resource_id}: {err.summary()}") from err
    except DynamicApiError as err:
        raise StoreError(f"cannot {action} {resource_id}: {err.summary()}") from err
    except ResourceNotFoundError as err:
        raise StoreError(
            f"cannot {action} {resource_id}: {resource_id.kind} is not served by the cluster"
        ) from err
    except HTTPError as err:
        raise StoreError(f"cannot {action} {resource_id}: {err}") from err
    except (MissingField, InvalidFieldValue, BuilderValidationError) as err:
        raise StoreError(
            f"cannot {action} {resource_id}: the cluster returned an invalid object: {err}"
        ) from err


class KubernetesClient(StoreClient):
    """StoreClient implementation using the kubernetes dynamic client."""

    def __init__(
        self, dynamic_client: DynamicClient, request_timeout: float | None = None
    ) -> None:
        """Initialize KubernetesClient.

        Args:
            dynamic_client: The dynamic client used for all requests.
            request_timeout: Optional deadline in seconds applied to every request.
        """
        self._dynamic_client = dynamic_client
        self._request_timeout = request_timeout

    @classmethod
    def from_kubeconfig(
        cls,
        config_file: str | None = None,
        context: str | None = None,
        request_timeout: float | None = None,
    ) -> "KubernetesClient":
        """Create a client from a kubeconfig file and optional context name."""
        api_client = config.new_client_from_config(
            config_file=config_file, context=context
        )
        return cls(DynamicClient(api_client), request_timeout=request_timeout)

    def _api(self, cls: type[BaseResource]) -> Any:
        """Return the dynamic resource api for a schema class."""
        return self._dynamic_client.resources.get(
            api_version=cls.api_version, kind=cls.kind
        )

    def _options(self) -> dict[str, Any]:
        if self._request_timeout is None:
            return {}
        return {"_request_timeout": self._request_timeout}

    def get(self, resource_id: NamedResource, cls: type[T]) -> T:
        """Retrieve a resource by identity and type."""
        _LOGGER.debug("Getting %s", resource_id)
        with _translate_errors("get", resource_id):
            result = self._api(cls).get(
                name=resource_id.name,
                namespace=resource_id.namespace,
                **self._options(),
            )
            resource = cls.from_dict(result.to_dict())
        return resource

    def create(self, obj: BaseResource) -> None:
        """Create a new resource in the store."""
        resource_id = obj.resource_id
        _LOGGER.debug("Creating %s", resource_id)
        with _translate_errors("create", resource_id):
            self._api(type(obj)).create(
                body=obj.to_dict(), namespace=resource_id.namespace, **self._options()
            )

    def update(self, obj: T) -> T:
        """Replace an existing resource and return the stored result."""
        resource_id = obj.resource_id
        _LOGGER.debug("Updating %s", resource_id)
        with _translate_errors("update", resource_id):
            result = self._api(type(obj)).replace(
                body=obj.to_dict(), namespace=resource_id.namespace, **self._options()
            )
            updated = type(obj).from_dict(result.to_dict())
        return updated

    def delete(self, resource_id: NamedResource, cls: type[BaseResource]) -> None:
        """Remove a resource from the store."""
        _LOGGER.debug("Deleting %s", resource_id)
        with _translate_errors("delete", resource_id):
            self._api(cls).delete(
                name=resource_id.name,
                namespace=resource_id.namespace,
                **self._options(),
            )
