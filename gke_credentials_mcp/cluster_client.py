"""Google Kubernetes Engine (GKE) cluster client for GKE Credentials MCP.

Clusters, Fleet memberships and project numbers are read as REST JSON through
an ``AuthProvider`` (google-auth's ``AuthorizedSession`` in production) rather
than ``google.cloud.container_v1.ClusterManagerClient``. The Fleet and
Resource Manager lookups need the same raw calls, and keeping all three on one
transport lets tests replace it with a single in-memory provider.
"""

import asyncio
from typing import Any, Dict, List, Optional

from .auth import AuthProvider, GoogleAuthProvider
from .config import (
    CLOUD_RESOURCE_MANAGER_ENDPOINT,
    CONNECT_GATEWAY_HOST_PATH,
    CONTAINER_ENDPOINT,
    CONTAINER_RESOURCE_LINK_PREFIX,
    HUB_ENDPOINT,
    USER_AGENT,
    ClientOptions,
)
from .exceptions import (
    AmbiguousMembershipError,
    MalformedResponseError,
    MissingHintError,
    NoMembershipFoundError,
    TokenAcquisitionError,
)
from .kubeconfig import (
    CreateKubeConfigOptions,
    build_kubeconfig,
    select_endpoint,
    serialize_kubeconfig,
)
from .logging_utils import LoggingUtility
from .resource_names import get_resource, parse_membership_name
from .types import ClusterRecord, MembershipRecord

PROJECT_NAME_PREFIX = "projects/"


class ClusterClient:
    """Wraps interactions with the GKE, Fleet and Resource Manager APIs.

    ``project_id`` and ``location`` from the options are hints used when a
    bare cluster name is given. They are fixed for the lifetime of the
    client; every call is otherwise independent and nothing is cached.
    """

    def __init__(
        self,
        options: Optional[ClientOptions] = None,
        auth: Optional[AuthProvider] = None,
    ):
        self.options = options or ClientOptions()
        self.auth: AuthProvider = auth or GoogleAuthProvider(
            credentials=self.options.credentials,
            credentials_path=self.options.credentials_path,
        )
        self.logger = LoggingUtility()

    @property
    def project_id(self) -> Optional[str]:
        return self.options.project_id

    @property
    def location(self) -> Optional[str]:
        return self.options.location

    async def _get(self, url: str, params: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
        """Issue an authenticated GET with the user agent header."""
        self.logger.log_debug("http get", url)
        return await asyncio.to_thread(
            self.auth.fetch, url, params, {"User-Agent": USER_AGENT}
        )

    async def get_token(self) -> str:
        """Return a short lived access token for the configured credentials."""
        token = await asyncio.to_thread(self.auth.get_token)
        if not token:
            raise TokenAcquisitionError("Failed to generate token.")
        return token

    def get_resource(self, name: str) -> str:
        """Generate the full cluster resource name using this client's hints."""
        return get_resource(name, self.project_id, self.location)

    async def get_cluster(self, cluster_name: str) -> ClusterRecord:
        """Retrieve a cluster by bare or full resource name."""
        resource = self.get_resource(cluster_name)
        data = await self._get(f"{CONTAINER_ENDPOINT}/{resource}")
        cluster = ClusterRecord.from_api(data)
        self.logger.log_info("get cluster", f"fetched {resource}")
        return cluster

    async def project_id_to_number(self, project_id: str) -> str:
        """Convert a project ID to its project number."""
        data = await self._get(f"{CLOUD_RESOURCE_MANAGER_ENDPOINT}/projects/{project_id}")

        # projectRef of form projects/<project-num>
        project_ref = data.get("name") if isinstance(data, dict) else None
        project_number = None
        if isinstance(project_ref, str) and project_ref.startswith(PROJECT_NAME_PREFIX):
            project_number = project_ref[len(PROJECT_NAME_PREFIX) :]

        if not project_number:
            raise MalformedResponseError(
                "Failed to parse project number: expected format "
                f"projects/PROJECT_NUMBER. Got {project_ref}"
            )
        return project_number

    async def get_connect_gateway_endpoint(self, membership_name: str) -> str:
        """Build the Connect Gateway host path for a Fleet membership.

        The result has the form
        ``connectgateway.googleapis.com/v1/projects/123/locations/l/memberships/m``.
        """
        membership = parse_membership_name(membership_name)
        project_number = await self.project_id_to_number(membership.project_id)
        return (
            f"{CONNECT_GATEWAY_HOST_PATH}/projects/{project_number}"
            f"/locations/{membership.location}/memberships/{membership.membership_name}"
        )

    async def list_cluster_memberships(self, cluster_name: str) -> List[MembershipRecord]:
        """List Fleet memberships in the default project pointing at the cluster."""
        project_id = self.project_id
        if not project_id:
            raise MissingHintError(
                "Failed to get project ID for cluster membership discovery. "
                'Try setting "project_id".'
            )

        resource_link = f"{CONTAINER_RESOURCE_LINK_PREFIX}{self.get_resource(cluster_name)}"
        data = await self._get(
            f"{HUB_ENDPOINT}/projects/{project_id}/locations/global/memberships",
            {"filter": f'endpoint.gkeCluster.resourceLink="{resource_link}"'},
        )

        if not isinstance(data, dict):
            raise MalformedResponseError(
                f"Failed to list memberships: expected an object, got {data!r}"
            )

        # An empty list comes back as an empty object
        resources = data.get("resources") or []
        if not isinstance(resources, list):
            raise MalformedResponseError(
                f"Failed to list memberships: expected a list of resources, got {data!r}"
            )
        return [MembershipRecord.from_api(item) for item in resources]

    async def discover_cluster_membership(self, cluster_name: str) -> str:
        """Discover the single Fleet membership of a cluster.

        Raises ``NoMembershipFoundError`` or ``AmbiguousMembershipError``
        unless exactly one membership matches.
        """
        memberships = await self.list_cluster_memberships(cluster_name)
        project_id = self.project_id

        if not memberships:
            raise NoMembershipFoundError(
                f"Expected one membership for {cluster_name} in {project_id}. "
                "Found none. Verify membership by running "
                f"`gcloud container fleet memberships list --project {project_id}`"
            )

        if len(memberships) > 1:
            names = [m.name for m in memberships]
            raise AmbiguousMembershipError(
                f"Expected one membership for {cluster_name} in {project_id}. "
                f"Found multiple memberships {','.join(names)}. "
                "Provide an explicit membership via `fleet_membership_name`.",
                memberships=names,
            )

        self.logger.log_info(
            "discover membership", f"{cluster_name} -> {memberships[0].name}"
        )
        return memberships[0].name

    async def create_kubeconfig(self, opts: CreateKubeConfigOptions) -> str:
        """Create a kubeconfig for the cluster.

        The certificate authority is left out when routing through Connect
        Gateway. A token is only fetched when the auth-provider plugin is not
        used.
        """
        connect_gw_endpoint = (opts.connect_gw_endpoint or "").strip() or None
        endpoint = select_endpoint(
            opts.cluster_data, opts.use_internal_ip, connect_gw_endpoint
        )

        token = None if opts.use_auth_provider else await self.get_token()

        kubeconfig = build_kubeconfig(
            opts.cluster_data,
            endpoint,
            opts.context_name,
            token=token,
            include_ca=connect_gw_endpoint is None,
        )
        return serialize_kubeconfig(kubeconfig)
