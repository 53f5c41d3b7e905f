"""Pytest configuration and fixtures for GKE Credentials MCP tests."""

from typing import Any, Dict, List, Optional

import pytest

from gke_credentials_mcp.types import ClusterRecord


class FakeAuthProvider:
    """In-memory AuthProvider that serves canned responses by URL."""

    def __init__(self, token: Optional[str] = "fake-token"):
        self.token = token
        self.responses: Dict[str, Any] = {}
        self.requests: List[Dict[str, Any]] = []
        self.token_calls = 0

    def get_token(self) -> Optional[str]:
        self.token_calls += 1
        return self.token

    def fetch(self, url, params=None, headers=None):
        self.requests.append({"url": url, "params": params, "headers": headers})
        if url not in self.responses:
            raise AssertionError(f"Unexpected request to {url}")
        response = self.responses[url]
        if isinstance(response, Exception):
            raise response
        return response


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: mark test as a fully mocked unit test")
    config.addinivalue_line("markers", "fast: mark test as fast running")


@pytest.fixture
def fake_auth():
    """A fresh fake auth provider."""
    return FakeAuthProvider()


@pytest.fixture
def cluster_payload():
    """A GKE ``clusters.get`` response body."""
    return {
        "name": "my-cluster",
        "endpoint": "34.1.2.3",
        "masterAuth": {"clusterCaCertificate": "LS0tLS1CRUdJTi1DRVJUSUZJQ0FURS0tLS0t"},
        "privateClusterConfig": {"privateEndpoint": "10.0.0.2"},
        "location": "us-central1",
    }


@pytest.fixture
def cluster_record(cluster_payload):
    """The decoded cluster record for ``cluster_payload``."""
    return ClusterRecord.from_api(cluster_payload)
