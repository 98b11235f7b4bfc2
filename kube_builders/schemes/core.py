"""Schema of core kubernetes kinds."""

from dataclasses import dataclass, field
from typing import ClassVar

from kube_builders.resource import BaseResource, BaseSchema

__all__ = [
    "Namespace",
    "NamespaceSpec",
    "NamespaceStatus",
]


@dataclass
class NamespaceSpec(BaseSchema):
    """Desired state of a Namespace."""

    finalizers: list[str] | None = None
    """Finalizers that must be empty before the namespace is removed."""


@dataclass
class NamespaceStatus(BaseSchema):
    """Observed state of a Namespace."""

    phase: str | None = None
    """The lifecycle phase e.g. `Active` or `Terminating`."""


@dataclass
class Namespace(BaseResource):
    """A cluster scoped grouping of namespaced resources."""

    api_version: ClassVar[str] = "v1"
    kind: ClassVar[str] = "Namespace"
    namespaced: ClassVar[bool] = False

    spec: NamespaceSpec = field(default_factory=NamespaceSpec)
    status: NamespaceStatus | None = None
