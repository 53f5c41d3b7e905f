"""Type definitions for GKE Credentials MCP."""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, TypedDict

from .exceptions import MalformedResponseError

# ===== BASIC TYPE ALIASES =====

JsonDict = Dict[str, Any]

# ===== UPSTREAM RECORDS =====


@dataclass(frozen=True)
class ClusterRecord:
    """Cluster metadata as returned by the GKE API."""

    name: str
    endpoint: str
    certificate_authority_data: Optional[str] = None
    private_endpoint: Optional[str] = None

    @classmethod
    def from_api(cls, data: JsonDict) -> "ClusterRecord":
        """Decode a ``projects.locations.clusters.get`` response body."""
        if not isinstance(data, dict):
            raise MalformedResponseError(
                f"Failed to decode cluster: expected an object, got {type(data).__name__}"
            )

        name = data.get("name")
        if not name:
            raise MalformedResponseError("Failed to decode cluster: missing name")

        master_auth = data.get("masterAuth") or {}
        private_config = data.get("privateClusterConfig") or {}
        return cls(
            name=name,
            endpoint=data.get("endpoint", ""),
            certificate_authority_data=master_auth.get("clusterCaCertificate") or None,
            private_endpoint=private_config.get("privateEndpoint") or None,
        )


@dataclass(frozen=True)
class MembershipRecord:
    """A Fleet membership and the cluster it points at."""

    name: str
    resource_link: Optional[str] = None

    @classmethod
    def from_api(cls, data: JsonDict) -> "MembershipRecord":
        name = data.get("name")
        if not name:
            raise MalformedResponseError("Failed to decode membership: missing name")
        gke_cluster = (data.get("endpoint") or {}).get("gkeCluster") or {}
        return cls(name=name, resource_link=gke_cluster.get("resourceLink"))


# ===== KUBECONFIG DOCUMENT =====

# Keys with dashes use the functional TypedDict syntax.
KubeConfigClusterSpec = TypedDict(
    "KubeConfigClusterSpec",
    {"certificate-authority-data": str, "server": str},
    total=False,
)


class KubeConfigCluster(TypedDict):
    cluster: KubeConfigClusterSpec
    name: str


class KubeConfigContextSpec(TypedDict):
    cluster: str
    user: str


class KubeConfigContext(TypedDict):
    context: KubeConfigContextSpec
    name: str


class AuthProviderSpec(TypedDict):
    name: str


KubeConfigUserSpec = TypedDict(
    "KubeConfigUserSpec",
    {"token": str, "auth-provider": AuthProviderSpec},
    total=False,
)


class KubeConfigUser(TypedDict):
    name: str
    user: KubeConfigUserSpec


KubeConfig = TypedDict(
    "KubeConfig",
    {
        "apiVersion": str,
        "clusters": List[KubeConfigCluster],
        "contexts": List[KubeConfigContext],
        "current-context": str,
        "kind": str,
        "users": List[KubeConfigUser],
    },
)
