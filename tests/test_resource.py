"""Tests for the resource schema base classes."""

import pytest

from kube_builders.exceptions import BuilderValidationError
from kube_builders.resource import LabelSelector, LabelSelectorRequirement, NamedResource
from kube_builders.schemes import BGPPeer, IPAddressPool, Namespace

BGP_PEER_YAML = """\
apiVersion: metallb.io/v1beta2
kind: BGPPeer
metadata:
  name: peer-one
  namespace: metallb-system
  resourceVersion: "12"
spec:
  myASN: 64501
  peerASN: 64500
  peerAddress: 10.0.0.1
  peerPort: 179
"""


def test_named_resource() -> None:
    """Test the string form of resource identifiers."""
    assert str(NamedResource("BGPPeer", "metallb-system", "peer-one")) == (
        "BGPPeer/metallb-system/peer-one"
    )
    assert str(NamedResource("Namespace", None, "tenant")) == "Namespace/tenant"
    assert NamedResource("Namespace", None, "tenant").namespaced_name == "tenant"


def test_parse_yaml() -> None:
    """Test parsing a resource from its wire representation."""
    peer = BGPPeer.parse_yaml(BGP_PEER_YAML)
    assert peer.resource_id == NamedResource("BGPPeer", "metallb-system", "peer-one")
    assert peer.metadata.resource_version == "12"
    assert peer.spec.my_asn == 64501
    assert peer.spec.asn == 64500
    assert peer.spec.address == "10.0.0.1"
    assert peer.spec.port == 179
    assert peer.spec.password is None


def test_parse_yaml_wrong_kind() -> None:
    """Test parsing a document of another kind is rejected."""
    with pytest.raises(
        BuilderValidationError, match="expected kind 'IPAddressPool' but got 'BGPPeer'"
    ):
        IPAddressPool.parse_yaml(BGP_PEER_YAML)


def test_parse_yaml_empty() -> None:
    """Test parsing an empty document is rejected."""
    with pytest.raises(BuilderValidationError, match="Invalid Namespace document"):
        Namespace.parse_yaml("")


def test_serialization_omits_unset_fields() -> None:
    """Test unset optional fields are left out of the wire representation."""
    namespace = Namespace()
    namespace.metadata.name = "tenant"
    assert namespace.to_dict() == {
        "apiVersion": "v1",
        "kind": "Namespace",
        "metadata": {"name": "tenant"},
        "spec": {},
    }


def test_label_selector() -> None:
    """Test label selectors use the wire field names."""
    selector = LabelSelector(
        match_labels={"app": "web"},
        match_expressions=[
            LabelSelectorRequirement(key="tier", operator="In", values=["frontend"])
        ],
    )
    assert selector.to_dict() == {
        "matchLabels": {"app": "web"},
        "matchExpressions": [{"key": "tier", "operator": "In", "values": ["frontend"]}],
    }
