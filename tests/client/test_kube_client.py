"""Tests for the store client backed by the kubernetes dynamic client."""

from unittest.mock import MagicMock

import pytest
from kubernetes.client.exceptions import ApiException
from kubernetes.dynamic.exceptions import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    ResourceNotFoundError,
)
from urllib3.exceptions import ReadTimeoutError

from kube_builders.builder import Presence
from kube_builders.client.kube import KubernetesClient
from kube_builders.exceptions import AlreadyExistsError, ObjectNotFoundError, StoreError
from kube_builders.metallb import BGPPeerBuilder
from kube_builders.resource import NamedResource, ObjectMeta
from kube_builders.schemes import BGPPeer

PEER_ID = NamedResource("BGPPeer", "metallb-system", "peer-one")
PEER_DOC = {
    "apiVersion": "metallb.io/v1beta2",
    "kind": "BGPPeer",
    "metadata": {
        "name": "peer-one",
        "namespace": "metallb-system",
        "resourceVersion": "7",
        "uid": "2b1c",
        "creationTimestamp": "2024-01-01T00:00:00Z",
    },
    "spec": {"myASN": 64501, "peerASN": 64500, "peerAddress": "10.0.0.1"},
}


def _api_error(cls: type, status: int, reason: str) -> Exception:
    return cls(ApiException(status=status, reason=reason))


@pytest.fixture
def api() -> MagicMock:
    """Return the dynamic resource api of BGPPeer."""
    return MagicMock()


@pytest.fixture
def dynamic_client(api: MagicMock) -> MagicMock:
    """Return a dynamic client serving the BGPPeer api."""
    dynamic_client = MagicMock()
    dynamic_client.resources.get.return_value = api
    return dynamic_client


@pytest.fixture
def kube_client(dynamic_client: MagicMock) -> KubernetesClient:
    """Return a client using the mocked dynamic client."""
    return KubernetesClient(dynamic_client)


def _peer() -> BGPPeer:
    peer = BGPPeer(metadata=ObjectMeta(name="peer-one", namespace="metallb-system"))
    peer.spec.address = "10.0.0.1"
    peer.spec.asn = 64500
    peer.spec.my_asn = 64501
    return peer


def test_get(kube_client: KubernetesClient, dynamic_client: MagicMock, api: MagicMock) -> None:
    """Test fetching a resource resolves the api of the kind."""
    api.get.return_value.to_dict.return_value = PEER_DOC

    peer = kube_client.get(PEER_ID, BGPPeer)
    assert peer.resource_id == PEER_ID
    assert peer.metadata.resource_version == "7"
    assert peer.spec.address == "10.0.0.1"
    dynamic_client.resources.get.assert_called_once_with(
        api_version="metallb.io/v1beta2", kind="BGPPeer"
    )
    api.get.assert_called_once_with(name="peer-one", namespace="metallb-system")


def test_request_timeout(dynamic_client: MagicMock, api: MagicMock) -> None:
    """Test the request timeout is passed to every call."""
    kube_client = KubernetesClient(dynamic_client, request_timeout=5)
    kube_client.delete(PEER_ID, BGPPeer)
    api.delete.assert_called_once_with(
        name="peer-one", namespace="metallb-system", _request_timeout=5
    )


def test_create(kube_client: KubernetesClient, api: MagicMock) -> None:
    """Test creating sends the wire representation."""
    kube_client.create(_peer())
    api.create.assert_called_once_with(
        body={
            "apiVersion": "metallb.io/v1beta2",
            "kind": "BGPPeer",
            "metadata": {"name": "peer-one", "namespace": "metallb-system"},
            "spec": {"myASN": 64501, "peerASN": 64500, "peerAddress": "10.0.0.1"},
        },
        namespace="metallb-system",
    )


def test_update(kube_client: KubernetesClient, api: MagicMock) -> None:
    """Test update replaces the resource and returns the stored value."""
    api.replace.return_value.to_dict.return_value = PEER_DOC
    result = kube_client.update(_peer())
    assert result.metadata.uid == "2b1c"
    assert api.replace.call_args.kwargs["namespace"] == "metallb-system"


@pytest.mark.parametrize(
    ("method", "error", "expected", "message"),
    [
        ("get", _api_error(NotFoundError, 404, "Not Found"), ObjectNotFoundError, "not found"),
        ("delete", _api_error(NotFoundError, 404, "Not Found"), ObjectNotFoundError, "not found"),
        (
            "create",
            _api_error(ConflictError, 409, "Conflict"),
            AlreadyExistsError,
            "already exists",
        ),
        (
            "replace",
            _api_error(ConflictError, 409, "Conflict"),
            StoreError,
            "cannot update BGPPeer/metallb-system/peer-one: 409 Reason: Conflict",
        ),
        (
            "get",
            _api_error(ForbiddenError, 403, "Forbidden"),
            StoreError,
            "cannot get BGPPeer/metallb-system/peer-one: 403 Reason: Forbidden",
        ),
        (
            "get",
            ReadTimeoutError(None, "/apis", "read timed out"),
            StoreError,
            "cannot get BGPPeer/metallb-system/peer-one",
        ),
    ],
)
def test_errors(
    kube_client: KubernetesClient,
    api: MagicMock,
    method: str,
    error: Exception,
    expected: type[Exception],
    message: str,
) -> None:
    """Test errors of the kubernetes client are translated."""
    getattr(api, method).side_effect = error
    with pytest.raises(expected, match=message) as exc_info:
        if method == "get":
            kube_client.get(PEER_ID, BGPPeer)
        elif method == "delete":
            kube_client.delete(PEER_ID, BGPPeer)
        elif method == "create":
            kube_client.create(_peer())
        else:
            kube_client.update(_peer())
    assert exc_info.value.__cause__ is error


def test_kind_not_served(kube_client: KubernetesClient, dynamic_client: MagicMock) -> None:
    """Test a kind without an installed CRD is reported as a store error."""
    dynamic_client.resources.get.side_effect = ResourceNotFoundError("No matches found")
    with pytest.raises(StoreError, match="BGPPeer is not served by the cluster"):
        kube_client.get(PEER_ID, BGPPeer)


@pytest.mark.parametrize(
    ("doc", "message"),
    [
        (
            {**PEER_DOC, "spec": {**PEER_DOC["spec"], "peerASN": "not-a-number"}},
            "the cluster returned an invalid object",
        ),
        ({**PEER_DOC, "spec": ["peerASN"]}, "the cluster returned an invalid object"),
        ({**PEER_DOC, "kind": "BFDProfile"}, "the cluster returned an invalid object"),
    ],
)
def test_invalid_object(
    kube_client: KubernetesClient, api: MagicMock, doc: dict, message: str
) -> None:
    """Test objects that do not match the schema are reported as store errors."""
    api.get.return_value.to_dict.return_value = doc
    api.replace.return_value.to_dict.return_value = doc

    with pytest.raises(StoreError, match=message) as exc_info:
        kube_client.get(PEER_ID, BGPPeer)
    assert exc_info.value.__cause__ is not None
    with pytest.raises(StoreError, match=message):
        kube_client.update(_peer())


def test_invalid_object_exists(kube_client: KubernetesClient, api: MagicMock) -> None:
    """Test a builder treats an undecodable object as possibly existing."""
    api.get.return_value.to_dict.return_value = {
        **PEER_DOC,
        "spec": {**PEER_DOC["spec"], "peerASN": "not-a-number"},
    }
    builder = BGPPeerBuilder(kube_client, "peer-one", "metallb-system", "10.0.0.1", 64500, 64501)
    assert builder.exists() is True
    check = builder.presence()
    assert check.presence == Presence.UNKNOWN
    assert isinstance(check.error, StoreError)
    assert builder.object is None
