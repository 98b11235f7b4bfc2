"""Schema of the multi-networkpolicy kinds (`k8s.cni.cncf.io`)."""

from dataclasses import dataclass, field
from typing import ClassVar

from mashumaro import field_options

from kube_builders.resource import BaseResource, BaseSchema, LabelSelector

__all__ = [
    "IPBlock",
    "MultiNetworkPolicy",
    "MultiNetworkPolicySpec",
    "MultiNetworkPolicyEgressRule",
    "MultiNetworkPolicyIngressRule",
    "MultiNetworkPolicyPeer",
    "MultiNetworkPolicyPort",
    "POLICY_FOR_ANNOTATION",
]

POLICY_FOR_ANNOTATION = "k8s.v1.cni.cncf.io/policy-for"


@dataclass
class IPBlock(BaseSchema):
    """A CIDR range of addresses, minus optional excluded ranges."""

    cidr: str
    """The CIDR of the block e.g. `192.168.1.0/24`."""

    except_: list[str] | None = field(metadata=field_options(alias="except"), default=None)
    """CIDRs within the block to exclude."""


@dataclass
class MultiNetworkPolicyPeer(BaseSchema):
    """A set of pods or addresses that traffic is allowed from or to."""

    pod_selector: LabelSelector | None = field(
        metadata=field_options(alias="podSelector"), default=None
    )
    namespace_selector: LabelSelector | None = field(
        metadata=field_options(alias="namespaceSelector"), default=None
    )
    ip_block: IPBlock | None = field(metadata=field_options(alias="ipBlock"), default=None)


@dataclass
class MultiNetworkPolicyPort(BaseSchema):
    """A port and protocol that traffic is allowed on."""

    protocol: str | None = None
    """One of TCP, UDP or SCTP."""

    port: int | str | None = None
    """A port number or named port."""

    end_port: int | None = field(metadata=field_options(alias="endPort"), default=None)
    """The last port of a range starting at `port`."""


@dataclass
class MultiNetworkPolicyIngressRule(BaseSchema):
    """Traffic allowed into the selected pods."""

    ports: list[MultiNetworkPolicyPort] | None = None
    from_: list[MultiNetworkPolicyPeer] | None = field(
        metadata=field_options(alias="from"), default=None
    )


@dataclass
class MultiNetworkPolicyEgressRule(BaseSchema):
    """Traffic allowed out of the selected pods."""

    ports: list[MultiNetworkPolicyPort] | None = None
    to: list[MultiNetworkPolicyPeer] | None = None


@dataclass
class MultiNetworkPolicySpec(BaseSchema):
    """Desired state of a MultiNetworkPolicy."""

    pod_selector: LabelSelector = field(
        metadata=field_options(alias="podSelector"), default_factory=LabelSelector
    )
    ingress: list[MultiNetworkPolicyIngressRule] | None = None
    egress: list[MultiNetworkPolicyEgressRule] | None = None
    policy_types: list[str] | None = field(
        metadata=field_options(alias="policyTypes"), default=None
    )


@dataclass
class MultiNetworkPolicy(BaseResource):
    """A network policy applied to secondary networks of pods.

    The networks are named by the `k8s.v1.cni.cncf.io/policy-for` annotation.
    """

    api_version: ClassVar[str] = "k8s.cni.cncf.io/v1beta1"
    kind: ClassVar[str] = "MultiNetworkPolicy"

    spec: MultiNetworkPolicySpec = field(default_factory=MultiNetworkPolicySpec)
