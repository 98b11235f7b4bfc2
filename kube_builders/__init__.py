"""
.. include:: ../README.md
"""

__all__ = [
    "builder",
    "client",
    "exceptions",
    "ingress",
    "resource",
    "schemes",
    "namespace",
    "argocd",
    "networkpolicy",
    "metallb",
    "profile",
]
