"""
The client module provides the capability the builders use to reach the remote object store.

- Uses NamedResource as the key for all objects.
- Exchanges values as dataclass instances from the schema catalog.
- Exposes exactly four blocking calls: get, create, update and delete.

The `KubernetesClient` lives in `kube_builders.client.kube` and is imported
from there so that the `kubernetes` package stays an optional dependency.
"""

from .client import StoreClient
from .in_memory import InMemoryClient

__all__ = [
    "StoreClient",
    "InMemoryClient",
]
