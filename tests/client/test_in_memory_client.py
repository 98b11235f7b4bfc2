import pytest

from kube_builders.client import InMemoryClient
from kube_builders.exceptions import AlreadyExistsError, ObjectNotFoundError
from kube_builders.resource import NamedResource, ObjectMeta
from kube_builders.schemes import IPAddressPool, Namespace


def _pool(name: str = "pool-one") -> IPAddressPool:
    pool = IPAddressPool(metadata=ObjectMeta(name=name, namespace="metallb-system"))
    pool.spec.addresses = ["10.0.0.0/24"]
    return pool


def test_create_and_get(client: InMemoryClient) -> None:
    """Test creating and retrieving a resource."""
    pool = _pool()
    client.create(pool)
    result = client.get(pool.resource_id, IPAddressPool)
    assert result.spec == pool.spec
    assert result.metadata.resource_version == "1"
    assert result.metadata.uid

    # The stored value is independent of the value that was written
    pool.spec.addresses.append("10.0.1.0/24")
    assert client.get(pool.resource_id, IPAddressPool).spec.addresses == ["10.0.0.0/24"]


def test_create_existing(client: InMemoryClient) -> None:
    """Test creating a resource twice."""
    client.create(_pool())
    with pytest.raises(AlreadyExistsError, match="IPAddressPool/metallb-system/pool-one"):
        client.create(_pool())


def test_get_missing(client: InMemoryClient) -> None:
    """Test getting a resource that was never created."""
    rid = NamedResource("IPAddressPool", "metallb-system", "pool-one")
    with pytest.raises(ObjectNotFoundError, match="IPAddressPool/metallb-system/pool-one not found"):
        client.get(rid, IPAddressPool)


def test_update(client: InMemoryClient) -> None:
    """Test updating keeps the uid and bumps the resource version."""
    client.create(_pool())
    uid = client.get(_pool().resource_id, IPAddressPool).metadata.uid

    pool = _pool()
    pool.spec.auto_assign = False
    result = client.update(pool)
    assert result.metadata.uid == uid
    assert result.metadata.resource_version == "2"
    assert result.spec.auto_assign is False
    assert client.get(pool.resource_id, IPAddressPool) == result


def test_update_missing(client: InMemoryClient) -> None:
    """Test updating a resource that was never created."""
    with pytest.raises(ObjectNotFoundError):
        client.update(_pool())


def test_delete(client: InMemoryClient) -> None:
    """Test deleting a resource."""
    pool = _pool()
    client.create(pool)
    client.delete(pool.resource_id, IPAddressPool)
    with pytest.raises(ObjectNotFoundError):
        client.get(pool.resource_id, IPAddressPool)
    with pytest.raises(ObjectNotFoundError):
        client.delete(pool.resource_id, IPAddressPool)


def test_list_objects(client: InMemoryClient) -> None:
    """Test listing resources."""
    client.create(_pool("pool-two"))
    client.create(_pool("pool-one"))
    client.create(Namespace(metadata=ObjectMeta(name="metallb-system")))

    assert client.list_objects() == [
        NamedResource("IPAddressPool", "metallb-system", "pool-one"),
        NamedResource("IPAddressPool", "metallb-system", "pool-two"),
        NamedResource("Namespace", None, "metallb-system"),
    ]
    assert client.list_objects("Namespace") == [NamedResource("Namespace", None, "metallb-system")]
