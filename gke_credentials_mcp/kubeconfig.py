"""Kubeconfig document assembly and serialization."""

from dataclasses import dataclass
from typing import Optional

import yaml

from .exceptions import MalformedResponseError
from .types import ClusterRecord, KubeConfig, KubeConfigClusterSpec, KubeConfigUserSpec

KUBECONFIG_API_VERSION = "v1"
KUBECONFIG_KIND = "Config"
GCP_AUTH_PROVIDER = "gcp"


@dataclass(frozen=True)
class CreateKubeConfigOptions:
    """Inputs for ``ClusterClient.create_kubeconfig``."""

    # cluster_data is the previously fetched cluster
    cluster_data: ClusterRecord

    # context_name is the name of the context (and current-context)
    context_name: str

    # use_auth_provider selects the gcp auth-provider plugin instead of an
    # embedded short lived token
    use_auth_provider: bool = False

    # use_internal_ip selects the cluster's private endpoint
    use_internal_ip: bool = False

    # connect_gw_endpoint is the optional Connect Gateway host path
    connect_gw_endpoint: Optional[str] = None


def select_endpoint(
    cluster: ClusterRecord,
    use_internal_ip: bool = False,
    connect_gw_endpoint: Optional[str] = None,
) -> str:
    """Pick the API server host: gateway, then private endpoint, then public."""
    connect_gw_endpoint = (connect_gw_endpoint or "").strip()
    if connect_gw_endpoint:
        return connect_gw_endpoint

    if use_internal_ip:
        if not cluster.private_endpoint:
            raise MalformedResponseError(
                f'Cluster "{cluster.name}" has no private endpoint. '
                "Disable use_internal_ip or enable private nodes on the cluster."
            )
        return cluster.private_endpoint

    if not cluster.endpoint:
        raise MalformedResponseError(f'Cluster "{cluster.name}" has no endpoint')
    return cluster.endpoint


def build_kubeconfig(
    cluster: ClusterRecord,
    endpoint: str,
    context_name: str,
    token: Optional[str] = None,
    include_ca: bool = True,
) -> KubeConfig:
    """Assemble a single cluster, context and user kubeconfig.

    With no ``token`` the user entry references the gcp auth-provider so the
    client acquires credentials itself at connect time.
    """
    cluster_spec: KubeConfigClusterSpec = {"server": f"https://{endpoint}"}
    if include_ca and cluster.certificate_authority_data:
        cluster_spec["certificate-authority-data"] = cluster.certificate_authority_data

    user_spec: KubeConfigUserSpec
    if token is None:
        user_spec = {"auth-provider": {"name": GCP_AUTH_PROVIDER}}
    else:
        user_spec = {"token": token}

    return {
        "apiVersion": KUBECONFIG_API_VERSION,
        "clusters": [{"cluster": cluster_spec, "name": cluster.name}],
        "contexts": [
            {
                "context": {"cluster": cluster.name, "user": cluster.name},
                "name": context_name,
            }
        ],
        "current-context": context_name,
        "kind": KUBECONFIG_KIND,
        "users": [{"name": cluster.name, "user": user_spec}],
    }


def serialize_kubeconfig(kubeconfig: KubeConfig) -> str:
    """Render a kubeconfig as YAML with sorted keys."""
    return yaml.safe_dump(
        dict(kubeconfig), default_flow_style=False, sort_keys=True, allow_unicode=True
    )
