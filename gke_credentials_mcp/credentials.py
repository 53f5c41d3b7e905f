"""End-to-end kubeconfig generation for a GKE cluster."""

from dataclasses import dataclass
import os
from pathlib import Path
import tempfile
from typing import Optional

from .cluster_client import ClusterClient
from .config import ClientOptions
from .connectivity import check_connectivity
from .kubeconfig import CreateKubeConfigOptions, select_endpoint
from .logging_utils import LoggingUtility
from .resource_names import parse_resource_name

KUBECONFIG_FILE_MODE = 0o600


@dataclass(frozen=True)
class CredentialsResult:
    """A rendered kubeconfig and the choices made while building it."""

    kubeconfig: str
    cluster_resource_name: str
    context_name: str
    endpoint: str
    membership_name: Optional[str] = None
    kubeconfig_path: Optional[str] = None
    server_version: Optional[str] = None


def default_context_name(cluster_resource_name: str) -> str:
    """Follow the gcloud naming convention ``gke_PROJECT_LOCATION_CLUSTER``."""
    resource = parse_resource_name(cluster_resource_name)
    return f"gke_{resource.project_id}_{resource.location}_{resource.id}"


def write_kubeconfig(path: str, kubeconfig: str) -> str:
    """Write a kubeconfig readable only by the current user; returns the path.

    The content is written to a temporary file beside the target and renamed
    into place, replacing any existing file.
    """
    target = Path(path).expanduser()
    target.parent.mkdir(parents=True, exist_ok=True)
    # mkstemp creates the file with mode 0600
    fd, tmp_name = tempfile.mkstemp(dir=target.parent, prefix=f".{target.name}.")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(kubeconfig)
        os.chmod(tmp_name, KUBECONFIG_FILE_MODE)
        os.replace(tmp_name, target)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise
    return str(target)


async def get_credentials(
    cluster_name: str,
    project_id: Optional[str] = None,
    location: Optional[str] = None,
    use_auth_provider: bool = False,
    use_internal_ip: bool = False,
    use_connect_gateway: bool = False,
    fleet_membership_name: Optional[str] = None,
    context_name: Optional[str] = None,
    kubeconfig_path: Optional[str] = None,
    verify: bool = False,
    credentials_path: Optional[str] = None,
    client: Optional[ClusterClient] = None,
) -> CredentialsResult:
    """Fetch a cluster and render a kubeconfig for it.

    Args:
        cluster_name: Bare cluster name or full resource name
        project_id: Project used to expand a bare name and to discover memberships
        location: Location used to expand a bare name
        use_auth_provider: Reference the gcp auth-provider instead of embedding a token
        use_internal_ip: Connect to the cluster's private endpoint
        use_connect_gateway: Route through Connect Gateway via the Fleet membership
        fleet_membership_name: Explicit membership, discovered when omitted
        context_name: Context name, defaults to ``gke_PROJECT_LOCATION_CLUSTER``
        kubeconfig_path: Optional file to write the kubeconfig to
        verify: Check the API server answers before anything is written
        credentials_path: Credentials JSON file, Application Default Credentials otherwise
        client: Pre-built client; one is created from the hints when omitted

    Returns:
        The rendered kubeconfig and related details
    """
    logger = LoggingUtility()
    if client is None:
        # A full resource name also supplies the project for membership discovery
        resource = parse_resource_name(cluster_name)
        client = ClusterClient(
            ClientOptions(
                project_id=project_id or resource.project_id or None,
                location=location or resource.location or None,
                credentials_path=credentials_path,
            )
        )

    cluster_resource_name = client.get_resource(cluster_name)
    cluster = await client.get_cluster(cluster_resource_name)

    membership_name = None
    connect_gw_endpoint = None
    if use_connect_gateway:
        membership_name = (fleet_membership_name or "").strip() or None
        if membership_name is None:
            membership_name = await client.discover_cluster_membership(
                cluster_resource_name
            )
        connect_gw_endpoint = await client.get_connect_gateway_endpoint(membership_name)
    elif fleet_membership_name:
        logger.log_warning(
            "get credentials",
            "fleet_membership_name is ignored unless use_connect_gateway is set",
        )

    context_name = (context_name or "").strip() or default_context_name(
        cluster_resource_name
    )
    kubeconfig = await client.create_kubeconfig(
        CreateKubeConfigOptions(
            cluster_data=cluster,
            context_name=context_name,
            use_auth_provider=use_auth_provider,
            use_internal_ip=use_internal_ip,
            connect_gw_endpoint=connect_gw_endpoint,
        )
    )

    server_version = None
    if verify:
        server_version = await check_connectivity(kubeconfig, context=context_name)

    written_path = None
    if kubeconfig_path:
        written_path = write_kubeconfig(kubeconfig_path, kubeconfig)
        logger.log_info("get credentials", f"wrote kubeconfig to {written_path}")

    return CredentialsResult(
        kubeconfig=kubeconfig,
        cluster_resource_name=cluster_resource_name,
        context_name=context_name,
        endpoint=select_endpoint(cluster, use_internal_ip, connect_gw_endpoint),
        membership_name=membership_name,
        kubeconfig_path=written_path,
        server_version=server_version,
    )
