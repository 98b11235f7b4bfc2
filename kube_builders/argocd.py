"""Builder for ArgoCD instances managed by the argocd-operator."""

from .builder import ResourceBuilder
from .schemes.argocd import ArgoCD

__all__ = [
    "ArgoCDBuilder",
]


class ArgoCDBuilder(ResourceBuilder[ArgoCD]):
    """Builder for an ArgoCD instance.

    The spec is assigned directly e.g. `builder.definition.spec["server"] = {...}`.
    """

    resource_cls = ArgoCD
