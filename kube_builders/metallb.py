"""Builders for MetalLB resources.

MetalLB resources live in the namespace of the MetalLB operator, typically
`metallb-system`.
"""

from datetime import timedelta
import ipaddress
import logging

from .builder import ResourceBuilder
from .chain import chained
from .client import StoreClient
from .exceptions import BuilderValidationError
from .resource import LabelSelector
from .schemes.metallb import BFDProfile, BGPAdvertisement, BGPPeer, IPAddressPool

__all__ = [
    "BGPPeerBuilder",
    "BFDProfileBuilder",
    "BGPAdvertisementBuilder",
    "IPAddressPoolBuilder",
]

_LOGGER = logging.getLogger(__name__)

MAX_ASN = 4294967295
MAX_PEER_PORT = 16384


def _check_range(kind: str, field: str, value: int, low: int, high: int) -> None:
    if not low <= value <= high:
        raise BuilderValidationError(
            f"{kind} '{field}' must be between {low} and {high}, got {value}"
        )


def _check_ip(kind: str, field: str, value: str) -> None:
    try:
        ipaddress.ip_address(value)
    except ValueError as err:
        raise BuilderValidationError(
            f"{kind} '{field}' contains invalid ip address {value!r}"
        ) from err


def _duration(kind: str, field: str, value: timedelta) -> str:
    """Return a positive timedelta in the duration format of the kubernetes API."""
    if value <= timedelta(0):
        raise BuilderValidationError(f"{kind} '{field}' must be positive, got {value}")
    return f"{int(value.total_seconds())}s"


def _node_selector(kind: str, labels: dict[str, str]) -> LabelSelector:
    if not labels:
        raise BuilderValidationError(f"{kind} node selector cannot be empty")
    return LabelSelector(match_labels=dict(labels))


class BGPPeerBuilder(ResourceBuilder[BGPPeer]):
    """Builder for a BGPPeer."""

    resource_cls = BGPPeer

    def __init__(
        self,
        client: StoreClient | None,
        name: str,
        namespace: str,
        peer_ip: str,
        asn: int,
        my_asn: int,
    ) -> None:
        """Initialize a builder for a session with the router at `peer_ip`."""
        super().__init__(client, name, namespace)
        self._with_session(peer_ip, asn, my_asn)

    @chained
    def _with_session(self, peer_ip: str, asn: int, my_asn: int) -> None:
        _check_ip(BGPPeer.kind, "peerIP", peer_ip)
        _check_range(BGPPeer.kind, "peerASN", asn, 0, MAX_ASN)
        _check_range(BGPPeer.kind, "myASN", my_asn, 0, MAX_ASN)
        spec = self._definition().spec
        spec.address = peer_ip
        spec.asn = asn
        spec.my_asn = my_asn

    @chained
    def with_router_id(self, router_id: str) -> None:
        """Set the BGP router ID advertised to the peer."""
        _LOGGER.debug("Setting BGPPeer router ID %s", router_id)
        try:
            ipaddress.IPv4Address(router_id)
        except ValueError as err:
            raise BuilderValidationError(
                f"the routerID of BGPPeer contains invalid ip address {router_id}"
            ) from err
        self._definition().spec.router_id = router_id

    @chained
    def with_bfd_profile(self, bfd_profile: str) -> None:
        """Associate the session with a BFDProfile by name."""
        _LOGGER.debug("Setting BGPPeer BFD profile %s", bfd_profile)
        if not bfd_profile:
            raise BuilderValidationError("BGPPeer 'bfdProfile' cannot be empty")
        self._definition().spec.bfd_profile = bfd_profile

    @chained
    def with_src_address(self, src_address: str) -> None:
        """Set the source address of the session."""
        _LOGGER.debug("Setting BGPPeer source address %s", src_address)
        _check_ip(BGPPeer.kind, "sourceAddress", src_address)
        self._definition().spec.src_address = src_address

    @chained
    def with_port(self, port: int) -> None:
        """Set the port to dial."""
        _LOGGER.debug("Setting BGPPeer port %s", port)
        _check_range(BGPPeer.kind, "peerPort", port, 1, MAX_PEER_PORT)
        self._definition().spec.port = port

    @chained
    def with_hold_time(self, hold_time: timedelta) -> None:
        """Set the requested BGP hold time."""
        _LOGGER.debug("Setting BGPPeer hold time %s", hold_time)
        self._definition().spec.hold_time = _duration(BGPPeer.kind, "holdTime", hold_time)

    @chained
    def with_keepalive_time(self, keepalive_time: timedelta) -> None:
        """Set the requested BGP keepalive time."""
        _LOGGER.debug("Setting BGPPeer keepalive time %s", keepalive_time)
        self._definition().spec.keepalive_time = _duration(
            BGPPeer.kind, "keepaliveTime", keepalive_time
        )

    @chained
    def with_password(self, password: str) -> None:
        """Set the TCP MD5 authentication password."""
        _LOGGER.debug("Setting BGPPeer password")
        if not password:
            raise BuilderValidationError("BGPPeer 'password' cannot be empty")
        self._definition().spec.password = password

    @chained
    def with_ebgp_multihop(self, ebgp_multihop: bool) -> None:
        """Mark the EBGP peer as multiple hops away."""
        _LOGGER.debug("Setting BGPPeer ebgpMultiHop %s", ebgp_multihop)
        self._definition().spec.ebgp_multihop = ebgp_multihop

    @chained
    def with_node_selector(self, labels: dict[str, str]) -> None:
        """Only connect to the peer from nodes matching the labels."""
        _LOGGER.debug("Adding BGPPeer node selector %s", labels)
        selector = _node_selector(BGPPeer.kind, labels)
        spec = self._definition().spec
        spec.node_selectors = [*(spec.node_selectors or []), selector]


class BFDProfileBuilder(ResourceBuilder[BFDProfile]):
    """Builder for a BFDProfile."""

    resource_cls = BFDProfile

    @chained
    def with_rcv_interval(self, interval: int) -> None:
        """Set the minimum receive interval in milliseconds."""
        _LOGGER.debug("Setting BFDProfile receive interval %s", interval)
        _check_range(BFDProfile.kind, "receiveInterval", interval, 10, 60000)
        self._definition().spec.receive_interval = interval

    @chained
    def with_transmit_interval(self, interval: int) -> None:
        """Set the minimum transmission interval in milliseconds."""
        _LOGGER.debug("Setting BFDProfile transmit interval %s", interval)
        _check_range(BFDProfile.kind, "transmitInterval", interval, 10, 60000)
        self._definition().spec.transmit_interval = interval

    @chained
    def with_echo_interval(self, interval: int) -> None:
        """Set the minimum echo receive interval in milliseconds."""
        _LOGGER.debug("Setting BFDProfile echo interval %s", interval)
        _check_range(BFDProfile.kind, "echoInterval", interval, 10, 60000)
        self._definition().spec.echo_interval = interval

    @chained
    def with_multiplier(self, multiplier: int) -> None:
        """Set the detection multiplier."""
        _LOGGER.debug("Setting BFDProfile detect multiplier %s", multiplier)
        _check_range(BFDProfile.kind, "detectMultiplier", multiplier, 2, 255)
        self._definition().spec.detect_multiplier = multiplier

    @chained
    def with_echo_mode(self, echo_mode: bool) -> None:
        """Enable or disable the echo transmission mode."""
        _LOGGER.debug("Setting BFDProfile echo mode %s", echo_mode)
        self._definition().spec.echo_mode = echo_mode

    @chained
    def with_passive_mode(self, passive_mode: bool) -> None:
        """Mark the session as passive."""
        _LOGGER.debug("Setting BFDProfile passive mode %s", passive_mode)
        self._definition().spec.passive_mode = passive_mode

    @chained
    def with_minimum_ttl(self, ttl: int) -> None:
        """Set the minimum expected TTL of multi hop control packets."""
        _LOGGER.debug("Setting BFDProfile minimum TTL %s", ttl)
        _check_range(BFDProfile.kind, "minimumTtl", ttl, 1, 254)
        self._definition().spec.minimum_ttl = ttl


class BGPAdvertisementBuilder(ResourceBuilder[BGPAdvertisement]):
    """Builder for a BGPAdvertisement."""

    resource_cls = BGPAdvertisement

    @chained
    def with_aggregation_length4(self, length: int) -> None:
        """Set the prefix length used to roll up IPv4 addresses."""
        _LOGGER.debug("Setting BGPAdvertisement aggregationLength %s", length)
        _check_range(BGPAdvertisement.kind, "aggregationLength", length, 1, 32)
        self._definition().spec.aggregation_length = length

    @chained
    def with_aggregation_length6(self, length: int) -> None:
        """Set the prefix length used to roll up IPv6 addresses."""
        _LOGGER.debug("Setting BGPAdvertisement aggregationLengthV6 %s", length)
        _check_range(BGPAdvertisement.kind, "aggregationLengthV6", length, 1, 128)
        self._definition().spec.aggregation_length_v6 = length

    @chained
    def with_local_pref(self, local_pref: int) -> None:
        """Set the BGP LOCAL_PREF attribute."""
        _LOGGER.debug("Setting BGPAdvertisement localPref %s", local_pref)
        _check_range(BGPAdvertisement.kind, "localPref", local_pref, 0, MAX_ASN)
        self._definition().spec.local_pref = local_pref

    @chained
    def with_communities(self, communities: list[str]) -> None:
        """Set the BGP communities associated with the announcement."""
        _LOGGER.debug("Setting BGPAdvertisement communities %s", communities)
        if not communities:
            raise BuilderValidationError("BGPAdvertisement 'communities' cannot be empty")
        self._definition().spec.communities = list(communities)

    @chained
    def with_ip_address_pools(self, pools: list[str]) -> None:
        """Set the names of the IPAddressPools to advertise."""
        _LOGGER.debug("Setting BGPAdvertisement ipAddressPools %s", pools)
        if not pools:
            raise BuilderValidationError("BGPAdvertisement 'ipAddressPools' cannot be empty")
        self._definition().spec.ip_address_pools = list(pools)

    @chained
    def with_peers(self, peers: list[str]) -> None:
        """Limit the BGPPeers the pools are advertised to."""
        _LOGGER.debug("Setting BGPAdvertisement peers %s", peers)
        if not peers:
            raise BuilderValidationError("BGPAdvertisement 'peers' cannot be empty")
        self._definition().spec.peers = list(peers)

    @chained
    def with_node_selector(self, labels: dict[str, str]) -> None:
        """Limit the nodes announced as next hops to those matching the labels."""
        _LOGGER.debug("Adding BGPAdvertisement node selector %s", labels)
        selector = _node_selector(BGPAdvertisement.kind, labels)
        spec = self._definition().spec
        spec.node_selectors = [*(spec.node_selectors or []), selector]


def _check_address_range(address: str) -> None:
    """Raise unless the value is a CIDR or a `first-last` address range."""
    try:
        if "-" in address:
            first, last = (part.strip() for part in address.split("-", 1))
            if ipaddress.ip_address(first) > ipaddress.ip_address(last):
                raise ValueError(f"{first} is after {last}")
        else:
            ipaddress.ip_network(address, strict=False)
    except (ValueError, TypeError) as err:
        raise BuilderValidationError(
            f"IPAddressPool contains invalid address range {address!r}"
        ) from err


class IPAddressPoolBuilder(ResourceBuilder[IPAddressPool]):
    """Builder for an IPAddressPool."""

    resource_cls = IPAddressPool

    def __init__(
        self,
        client: StoreClient | None,
        name: str,
        namespace: str,
        addresses: list[str],
    ) -> None:
        """Initialize a builder for a pool of the given CIDRs or address ranges."""
        super().__init__(client, name, namespace)
        self._with_addresses(addresses)

    @chained
    def _with_addresses(self, addresses: list[str]) -> None:
        if not addresses:
            raise BuilderValidationError(
                "IPAddressPool must contain at least one address range"
            )
        for address in addresses:
            _check_address_range(address)
        self._definition().spec.addresses = list(addresses)

    @chained
    def with_auto_assign(self, auto_assign: bool) -> None:
        """Set whether addresses are allocated automatically."""
        _LOGGER.debug("Setting IPAddressPool autoAssign %s", auto_assign)
        self._definition().spec.auto_assign = auto_assign

    @chained
    def with_avoid_buggy_ips(self, avoid_buggy_ips: bool) -> None:
        """Set whether the .0 and .255 addresses are avoided."""
        _LOGGER.debug("Setting IPAddressPool avoidBuggyIPs %s", avoid_buggy_ips)
        self._definition().spec.avoid_buggy_ips = avoid_buggy_ips
