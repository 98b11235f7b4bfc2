"""Schema of the ArgoCD operator kinds."""

from dataclasses import dataclass, field
from typing import Any, ClassVar

from kube_builders.resource import BaseResource

__all__ = [
    "ArgoCD",
]


@dataclass
class ArgoCD(BaseResource):
    """An Argo CD instance managed by the argocd-operator.

    The spec of this kind is large and versioned with the operator, so it is
    carried as a raw mapping to preserve every field across pull and update.
    """

    api_version: ClassVar[str] = "argoproj.io/v1alpha1"
    kind: ClassVar[str] = "ArgoCD"

    spec: dict[str, Any] = field(default_factory=dict)
    status: dict[str, Any] | None = None
