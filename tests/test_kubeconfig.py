"""Tests for kubeconfig rendering."""

import pytest
import yaml

from gke_credentials_mcp.cluster_client import ClusterClient
from gke_credentials_mcp.exceptions import MalformedResponseError, TokenAcquisitionError
from gke_credentials_mcp.kubeconfig import (
    CreateKubeConfigOptions,
    build_kubeconfig,
    select_endpoint,
    serialize_kubeconfig,
)
from gke_credentials_mcp.types import ClusterRecord

GATEWAY = "connectgateway.googleapis.com/v1/projects/123/locations/global/memberships/m"


@pytest.mark.fast
class TestSelectEndpoint:
    """Test endpoint precedence."""

    def test_public_endpoint(self, cluster_record):
        assert select_endpoint(cluster_record) == "34.1.2.3"

    def test_private_endpoint(self, cluster_record):
        assert select_endpoint(cluster_record, use_internal_ip=True) == "10.0.0.2"

    def test_gateway_wins_over_private_endpoint(self, cluster_record):
        assert select_endpoint(cluster_record, True, GATEWAY) == GATEWAY

    def test_blank_gateway_is_ignored(self, cluster_record):
        assert select_endpoint(cluster_record, False, "  ") == "34.1.2.3"

    def test_private_endpoint_missing(self):
        cluster = ClusterRecord(name="c", endpoint="1.2.3.4")
        with pytest.raises(MalformedResponseError, match="no private endpoint"):
            select_endpoint(cluster, use_internal_ip=True)


@pytest.mark.fast
class TestBuildKubeconfig:
    """Test document assembly."""

    def test_token_document(self, cluster_record):
        doc = build_kubeconfig(cluster_record, "34.1.2.3", "ctx", token="t0k3n")

        assert doc == {
            "apiVersion": "v1",
            "clusters": [
                {
                    "cluster": {
                        "certificate-authority-data": "LS0tLS1CRUdJTi1DRVJUSUZJQ0FURS0tLS0t",
                        "server": "https://34.1.2.3",
                    },
                    "name": "my-cluster",
                }
            ],
            "contexts": [
                {"context": {"cluster": "my-cluster", "user": "my-cluster"}, "name": "ctx"}
            ],
            "current-context": "ctx",
            "kind": "Config",
            "users": [{"name": "my-cluster", "user": {"token": "t0k3n"}}],
        }

    def test_auth_provider_document(self, cluster_record):
        doc = build_kubeconfig(cluster_record, "34.1.2.3", "ctx")
        assert doc["users"][0]["user"] == {"auth-provider": {"name": "gcp"}}

    def test_missing_ca_is_omitted(self):
        cluster = ClusterRecord(name="c", endpoint="1.2.3.4")
        doc = build_kubeconfig(cluster, "1.2.3.4", "ctx", token="t")
        assert doc["clusters"][0]["cluster"] == {"server": "https://1.2.3.4"}

    def test_serialized_keys_are_sorted(self, cluster_record):
        text = serialize_kubeconfig(build_kubeconfig(cluster_record, "e", "ctx", token="t"))
        assert list(yaml.safe_load(text).keys()) == [
            "apiVersion",
            "clusters",
            "contexts",
            "current-context",
            "kind",
            "users",
        ]


@pytest.mark.unit
class TestCreateKubeconfig:
    """Test ClusterClient.create_kubeconfig."""

    def _options(self, cluster, **kwargs):
        kwargs.setdefault("context_name", "my-context")
        return CreateKubeConfigOptions(cluster_data=cluster, **kwargs)

    @pytest.mark.asyncio
    async def test_gateway_never_includes_ca(self, fake_auth, cluster_record):
        client = ClusterClient(auth=fake_auth)

        for use_internal_ip in (False, True):
            for use_auth_provider in (False, True):
                text = await client.create_kubeconfig(
                    self._options(
                        cluster_record,
                        use_internal_ip=use_internal_ip,
                        use_auth_provider=use_auth_provider,
                        connect_gw_endpoint=GATEWAY,
                    )
                )
                doc = yaml.safe_load(text)
                assert "certificate-authority-data" not in doc["clusters"][0]["cluster"]
                assert doc["clusters"][0]["cluster"]["server"] == f"https://{GATEWAY}"

    @pytest.mark.asyncio
    async def test_internal_ip(self, fake_auth, cluster_record):
        client = ClusterClient(auth=fake_auth)

        doc = yaml.safe_load(
            await client.create_kubeconfig(self._options(cluster_record, use_internal_ip=True))
        )

        cluster = doc["clusters"][0]["cluster"]
        assert cluster["server"] == "https://10.0.0.2"
        assert cluster["certificate-authority-data"] == cluster_record.certificate_authority_data

    @pytest.mark.asyncio
    async def test_public_endpoint(self, fake_auth, cluster_record):
        client = ClusterClient(auth=fake_auth)

        doc = yaml.safe_load(await client.create_kubeconfig(self._options(cluster_record)))

        assert doc["clusters"][0]["cluster"]["server"] == "https://34.1.2.3"
        assert doc["current-context"] == "my-context"
        assert doc["contexts"][0]["name"] == "my-context"

    @pytest.mark.asyncio
    async def test_auth_provider_skips_token_fetch(self, fake_auth, cluster_record):
        client = ClusterClient(auth=fake_auth)

        doc = yaml.safe_load(
            await client.create_kubeconfig(
                self._options(cluster_record, use_auth_provider=True)
            )
        )

        assert fake_auth.token_calls == 0
        assert doc["users"][0] == {
            "name": "my-cluster",
            "user": {"auth-provider": {"name": "gcp"}},
        }

    @pytest.mark.asyncio
    async def test_embedded_token(self, fake_auth, cluster_record):
        fake_auth.token = "ya29.short-lived"
        client = ClusterClient(auth=fake_auth)

        doc = yaml.safe_load(await client.create_kubeconfig(self._options(cluster_record)))

        assert fake_auth.token_calls == 1
        assert doc["users"][0]["user"] == {"token": "ya29.short-lived"}

    @pytest.mark.asyncio
    async def test_missing_token(self, fake_auth, cluster_record):
        fake_auth.token = None
        client = ClusterClient(auth=fake_auth)

        with pytest.raises(TokenAcquisitionError):
            await client.create_kubeconfig(self._options(cluster_record))

    @pytest.mark.asyncio
    async def test_output_is_deterministic(self, fake_auth, cluster_record):
        client = ClusterClient(auth=fake_auth)
        options = self._options(cluster_record)

        first = await client.create_kubeconfig(options)
        second = await client.create_kubeconfig(options)

        assert first == second
