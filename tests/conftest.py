"""Fixtures shared by the kube-builders tests."""

import pytest

from kube_builders.client import InMemoryClient


@pytest.fixture
def client() -> InMemoryClient:
    """Return an empty in memory store client."""
    return InMemoryClient()
