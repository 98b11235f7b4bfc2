"""Schema of the MetalLB kinds.

The field names follow the `metallb.io` CRDs. Bounds documented on the fields
are enforced by the builders in `kube_builders.metallb`.
"""

from dataclasses import dataclass, field
from typing import ClassVar

from mashumaro import field_options

from kube_builders.resource import BaseResource, BaseSchema, LabelSelector

__all__ = [
    "BGPPeer",
    "BGPPeerSpec",
    "BFDProfile",
    "BFDProfileSpec",
    "BGPAdvertisement",
    "BGPAdvertisementSpec",
    "IPAddressPool",
    "IPAddressPoolSpec",
]


@dataclass
class BGPPeerSpec(BaseSchema):
    """Desired state of a BGP peer."""

    my_asn: int = field(metadata=field_options(alias="myASN"), default=0)
    """AS number to use for the local end of the session."""

    asn: int = field(metadata=field_options(alias="peerASN"), default=0)
    """AS number to expect from the remote end of the session."""

    address: str = field(metadata=field_options(alias="peerAddress"), default="")
    """Address to dial when establishing the session."""

    src_address: str | None = field(
        metadata=field_options(alias="sourceAddress"), default=None
    )
    """Source address to use when establishing the session."""

    port: int | None = field(metadata=field_options(alias="peerPort"), default=None)
    """Port to dial when establishing the session, at most 16384."""

    hold_time: str | None = field(metadata=field_options(alias="holdTime"), default=None)
    """Requested BGP hold time as a duration e.g. `90s`."""

    keepalive_time: str | None = field(
        metadata=field_options(alias="keepaliveTime"), default=None
    )
    """Requested BGP keepalive time as a duration e.g. `30s`."""

    router_id: str | None = field(metadata=field_options(alias="routerID"), default=None)
    """BGP router ID to advertise to the peer."""

    node_selectors: list[LabelSelector] | None = field(
        metadata=field_options(alias="nodeSelectors"), default=None
    )
    """Only connect to this peer on nodes that match one of these selectors."""

    password: str | None = None
    """Authentication password for routers enforcing TCP MD5 authenticated sessions."""

    bfd_profile: str | None = field(
        metadata=field_options(alias="bfdProfile"), default=None
    )
    """The name of the BFDProfile to use for the session."""

    ebgp_multihop: bool | None = field(
        metadata=field_options(alias="ebgpMultiHop"), default=None
    )
    """The EBGP peer is multiple hops away."""


@dataclass
class BGPPeer(BaseResource):
    """A BGP session between MetalLB speakers and a router."""

    api_version: ClassVar[str] = "metallb.io/v1beta2"
    kind: ClassVar[str] = "BGPPeer"

    spec: BGPPeerSpec = field(default_factory=BGPPeerSpec)


@dataclass
class BFDProfileSpec(BaseSchema):
    """Desired state of a BFD profile."""

    receive_interval: int | None = field(
        metadata=field_options(alias="receiveInterval"), default=None
    )
    """Minimum interval in milliseconds this system can receive control packets, 10 to 60000."""

    transmit_interval: int | None = field(
        metadata=field_options(alias="transmitInterval"), default=None
    )
    """Minimum transmission interval in milliseconds, 10 to 60000."""

    detect_multiplier: int | None = field(
        metadata=field_options(alias="detectMultiplier"), default=None
    )
    """Multiplier applied to the remote interval to detect packet loss, 2 to 255."""

    echo_interval: int | None = field(
        metadata=field_options(alias="echoInterval"), default=None
    )
    """Minimum echo receive interval in milliseconds, 10 to 60000."""

    echo_mode: bool | None = field(metadata=field_options(alias="echoMode"), default=None)
    """Enables the echo transmission mode, not supported on multi hop setups."""

    passive_mode: bool | None = field(
        metadata=field_options(alias="passiveMode"), default=None
    )
    """A passive session waits for control packets before replying."""

    minimum_ttl: int | None = field(metadata=field_options(alias="minimumTtl"), default=None)
    """For multi hop sessions, the minimum expected TTL of a control packet, 1 to 254."""


@dataclass
class BFDProfile(BaseResource):
    """Settings of a BFD session that may be associated with a BGP session."""

    api_version: ClassVar[str] = "metallb.io/v1beta1"
    kind: ClassVar[str] = "BFDProfile"

    spec: BFDProfileSpec = field(default_factory=BFDProfileSpec)


@dataclass
class BGPAdvertisementSpec(BaseSchema):
    """Desired state of a BGP advertisement."""

    aggregation_length: int | None = field(
        metadata=field_options(alias="aggregationLength"), default=None
    )
    """Prefix length used to roll up IPv4 /32s, at least 1."""

    aggregation_length_v6: int | None = field(
        metadata=field_options(alias="aggregationLengthV6"), default=None
    )
    """Prefix length used to roll up IPv6 /128s."""

    local_pref: int | None = field(metadata=field_options(alias="localPref"), default=None)
    """The BGP LOCAL_PREF attribute."""

    communities: list[str] | None = None
    """BGP communities e.g. `1234:1234` or the name of a Community alias."""

    ip_address_pools: list[str] | None = field(
        metadata=field_options(alias="ipAddressPools"), default=None
    )
    """IPAddressPools to advertise, selected by name."""

    ip_address_pool_selectors: list[LabelSelector] | None = field(
        metadata=field_options(alias="ipAddressPoolSelectors"), default=None
    )
    """Selectors for the IPAddressPools to advertise."""

    node_selectors: list[LabelSelector] | None = field(
        metadata=field_options(alias="nodeSelectors"), default=None
    )
    """Limits the nodes announced as next hops."""

    peers: list[str] | None = None
    """Limits the BGPPeers the pools are advertised to."""


@dataclass
class BGPAdvertisement(BaseResource):
    """Advertisement of the IPs of selected IPAddressPools via BGP."""

    api_version: ClassVar[str] = "metallb.io/v1beta1"
    kind: ClassVar[str] = "BGPAdvertisement"

    spec: BGPAdvertisementSpec = field(default_factory=BGPAdvertisementSpec)


@dataclass
class IPAddressPoolSpec(BaseSchema):
    """Desired state of an IP address pool."""

    addresses: list[str] = field(default_factory=list)
    """CIDRs or `first-last` ranges of addresses to allocate from."""

    auto_assign: bool | None = field(metadata=field_options(alias="autoAssign"), default=None)
    """Whether addresses are allocated automatically."""

    avoid_buggy_ips: bool | None = field(
        metadata=field_options(alias="avoidBuggyIPs"), default=None
    )
    """Avoid the .0 and .255 addresses of a pool."""


@dataclass
class IPAddressPool(BaseResource):
    """A pool of addresses MetalLB can assign to LoadBalancer services."""

    api_version: ClassVar[str] = "metallb.io/v1beta1"
    kind: ClassVar[str] = "IPAddressPool"

    spec: IPAddressPoolSpec = field(default_factory=IPAddressPoolSpec)
