"""Library for assembling MultiNetworkPolicy ingress rules from fragments.

Example usage:
```
from kube_builders.ingress import IngressRuleBuilder
from kube_builders.resource import LabelSelector

rule = (
    IngressRuleBuilder()
    .with_port_and_protocol(5001, "TCP")
    .with_peer_pod_selector_and_cidr(
        LabelSelector(match_labels={"app": "client"}), "192.168.0.0/24"
    )
    .build()
)
```

An invalid fragment does not interrupt the chain. It is recorded and every
later call is skipped, then `build()` raises a `FragmentError`.
"""

from collections.abc import Callable
import copy
import ipaddress
import logging

from .chain import chained
from .exceptions import BuilderException, FragmentError
from .resource import LabelSelector
from .schemes.networkpolicy import (
    IPBlock,
    MultiNetworkPolicyIngressRule,
    MultiNetworkPolicyPeer,
    MultiNetworkPolicyPort,
)

__all__ = [
    "IngressAdditionalOption",
    "IngressRuleBuilder",
]

_LOGGER = logging.getLogger(__name__)

MAX_PORT = 65535


def _check_cidr(cidr: str) -> None:
    """Raise if the value is not an address with a prefix length."""
    if "/" not in cidr:
        raise FragmentError(f"Invalid CIDR argument {cidr}")
    try:
        ipaddress.ip_network(cidr, strict=False)
    except ValueError as err:
        raise FragmentError(f"Invalid CIDR argument {cidr}") from err


class IngressRuleBuilder:
    """Builder for a MultiNetworkPolicyIngressRule."""

    def __init__(self) -> None:
        """Initialize an empty ingress rule."""
        _LOGGER.debug("Initializing new ingress rule structure")
        self._rule = MultiNetworkPolicyIngressRule()
        self.error: BuilderException | None = None

    @chained
    def with_port_and_protocol(self, port: int, protocol: str = "TCP") -> None:
        """Allow traffic on a port and protocol."""
        _LOGGER.debug("Adding port %s protocol %s to ingress rule", port, protocol)
        if port == 0:
            raise FragmentError("Invalid port number can not be 0")
        if not 0 < port <= MAX_PORT:
            raise FragmentError(f"Invalid port number {port}")
        self._rule.ports = [
            *(self._rule.ports or []),
            MultiNetworkPolicyPort(protocol=protocol, port=port),
        ]

    @chained
    def with_peer_pod_selector(self, pod_selector: LabelSelector) -> None:
        """Allow traffic from the pods matching a selector, as a new peer."""
        _LOGGER.debug("Adding peer pod selector %s to ingress rule", pod_selector)
        self._rule.from_ = [
            *(self._rule.from_ or []),
            MultiNetworkPolicyPeer(pod_selector=copy.deepcopy(pod_selector)),
        ]

    @chained
    def with_cidr(self, cidr: str, except_: list[str] | None = None) -> None:
        """Allow traffic from a CIDR block.

        The block is added to the most recently added peer, so a pod selector
        followed by a CIDR describes a single peer. A new peer is added only
        when the rule has none.
        """
        _LOGGER.debug("Adding peer CIDR %s except %s to ingress rule", cidr, except_)
        _check_cidr(cidr)
        for excluded in except_ or ():
            _check_cidr(excluded)
        peers = self._rule.from_ or [MultiNetworkPolicyPeer()]
        peers[-1].ip_block = IPBlock(cidr=cidr, except_=list(except_) if except_ else None)
        self._rule.from_ = peers

    def with_peer_pod_selector_and_cidr(
        self, pod_selector: LabelSelector, cidr: str, except_: list[str] | None = None
    ) -> "IngressRuleBuilder":
        """Allow traffic from a single peer with both a pod selector and a CIDR block."""
        return self.with_peer_pod_selector(pod_selector).with_cidr(cidr, except_)

    @chained
    def with_options(self, *options: "IngressAdditionalOption | None") -> None:
        """Apply caller supplied mutations in order.

        An option that raises stops the remaining options and its error is
        recorded on the builder.
        """
        _LOGGER.debug("Setting ingress rule additional options")
        for option in options:
            if option is None:
                continue
            try:
                option(self)
            except BuilderException:
                raise
            except Exception as err:
                _LOGGER.debug("Error occurred in mutation function: %s", err)
                raise FragmentError(str(err)) from err
            if self.error is not None:
                return

    def build(self) -> MultiNetworkPolicyIngressRule:
        """Return the assembled ingress rule.

        Raises:
            FragmentError: If any fragment was invalid.
        """
        _LOGGER.debug("Returning configuration for ingress rule")
        if self.error is not None:
            _LOGGER.debug("Failed to build ingress rule due to %s", self.error)
            raise self.error.with_traceback(None)
        return copy.deepcopy(self._rule)


IngressAdditionalOption = Callable[[IngressRuleBuilder], IngressRuleBuilder]
"""A caller supplied mutation of an ingress rule builder."""
