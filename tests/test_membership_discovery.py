"""Tests for Fleet membership discovery."""

import pytest

from gke_credentials_mcp.cluster_client import ClusterClient
from gke_credentials_mcp.config import HUB_ENDPOINT, ClientOptions
from gke_credentials_mcp.exceptions import (
    AmbiguousMembershipError,
    MissingHintError,
    NoMembershipFoundError,
)
from gke_credentials_mcp.types import MembershipRecord

MEMBERSHIPS_URL = f"{HUB_ENDPOINT}/projects/p/locations/global/memberships"
RESOURCE_LINK = "//container.googleapis.com/projects/p/locations/l/clusters/c"


def _membership(name):
    return {
        "name": f"projects/p/locations/global/memberships/{name}",
        "endpoint": {"gkeCluster": {"resourceLink": RESOURCE_LINK}},
    }


@pytest.mark.unit
class TestDiscoverClusterMembership:
    """Test discover_cluster_membership."""

    def setup_method(self):
        self.options = ClientOptions(project_id="p", location="l")

    @pytest.mark.asyncio
    async def test_single_membership(self, fake_auth):
        fake_auth.responses[MEMBERSHIPS_URL] = {"resources": [_membership("m1")]}
        client = ClusterClient(self.options, auth=fake_auth)

        name = await client.discover_cluster_membership("c")

        assert name == "projects/p/locations/global/memberships/m1"
        assert fake_auth.requests[0]["params"] == {
            "filter": f'endpoint.gkeCluster.resourceLink="{RESOURCE_LINK}"'
        }

    @pytest.mark.asyncio
    async def test_full_cluster_name_uses_default_project_for_listing(self, fake_auth):
        fake_auth.responses[MEMBERSHIPS_URL] = {"resources": [_membership("m1")]}
        client = ClusterClient(ClientOptions(project_id="p"), auth=fake_auth)

        await client.discover_cluster_membership("projects/other/locations/x/clusters/y")

        assert fake_auth.requests[0]["params"]["filter"] == (
            'endpoint.gkeCluster.resourceLink='
            '"//container.googleapis.com/projects/other/locations/x/clusters/y"'
        )

    @pytest.mark.parametrize("payload", [{"resources": []}, {}])
    @pytest.mark.asyncio
    async def test_no_membership(self, fake_auth, payload):
        fake_auth.responses[MEMBERSHIPS_URL] = payload
        client = ClusterClient(self.options, auth=fake_auth)

        with pytest.raises(NoMembershipFoundError) as exc_info:
            await client.discover_cluster_membership("c")

        message = str(exc_info.value)
        assert "Found none" in message
        assert "for c in p" in message
        assert "--project p" in message

    @pytest.mark.asyncio
    async def test_multiple_memberships(self, fake_auth):
        fake_auth.responses[MEMBERSHIPS_URL] = {
            "resources": [_membership("m1"), _membership("m2")]
        }
        client = ClusterClient(self.options, auth=fake_auth)

        with pytest.raises(AmbiguousMembershipError) as exc_info:
            await client.discover_cluster_membership("c")

        message = str(exc_info.value)
        assert "projects/p/locations/global/memberships/m1" in message
        assert "projects/p/locations/global/memberships/m2" in message
        assert "fleet_membership_name" in message
        assert exc_info.value.memberships == [
            "projects/p/locations/global/memberships/m1",
            "projects/p/locations/global/memberships/m2",
        ]

    @pytest.mark.asyncio
    async def test_requires_project_id(self, fake_auth):
        client = ClusterClient(ClientOptions(location="l"), auth=fake_auth)

        with pytest.raises(MissingHintError, match="membership discovery"):
            await client.discover_cluster_membership(
                "projects/p/locations/l/clusters/c"
            )
        assert fake_auth.requests == []

    @pytest.mark.asyncio
    async def test_list_cluster_memberships_decodes_records(self, fake_auth):
        fake_auth.responses[MEMBERSHIPS_URL] = {"resources": [_membership("m1")]}
        client = ClusterClient(self.options, auth=fake_auth)

        memberships = await client.list_cluster_memberships("c")

        assert memberships == [
            MembershipRecord(
                name="projects/p/locations/global/memberships/m1",
                resource_link=RESOURCE_LINK,
            )
        ]
