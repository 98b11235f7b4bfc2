"""
The schemes module holds the schema catalog: one dataclass per resource kind.

Values of these classes are what the builders hold as `definition` and
`object`, and what store clients exchange with the remote store.
"""

from .argocd import ArgoCD
from .core import Namespace
from .metallb import BFDProfile, BGPAdvertisement, BGPPeer, IPAddressPool
from .networkpolicy import MultiNetworkPolicy, MultiNetworkPolicyIngressRule

__all__ = [
    "ArgoCD",
    "Namespace",
    "BFDProfile",
    "BGPAdvertisement",
    "BGPPeer",
    "IPAddressPool",
    "MultiNetworkPolicy",
    "MultiNetworkPolicyIngressRule",
]
