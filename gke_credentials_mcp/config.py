"""GKE Credentials MCP configuration for Google Cloud endpoints and defaults."""

from dataclasses import dataclass
import json
import os
from typing import Any, Optional

from . import __version__

# Google Cloud API endpoints
CONTAINER_ENDPOINT = "https://container.googleapis.com/v1"
HUB_ENDPOINT = "https://gkehub.googleapis.com/v1"
CLOUD_RESOURCE_MANAGER_ENDPOINT = "https://cloudresourcemanager.googleapis.com/v3"
CONNECT_GATEWAY_HOST_PATH = "connectgateway.googleapis.com/v1"

# Resource links in Fleet memberships are prefixed with the service host
CONTAINER_RESOURCE_LINK_PREFIX = "//container.googleapis.com/"

OAUTH_SCOPES = (
    "https://www.googleapis.com/auth/cloud-platform",
    "https://www.googleapis.com/auth/userinfo.email",
)

USER_AGENT = f"gke-credentials-mcp/{__version__}"

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _extract_project_id_from_service_account(
    service_account_path: Optional[str],
) -> Optional[str]:
    """Extract project ID from service account JSON file."""
    if not service_account_path:
        return None

    try:
        with open(service_account_path, "r") as f:
            credentials_data = json.load(f)
            return credentials_data.get("project_id")
    except (FileNotFoundError, json.JSONDecodeError, KeyError):
        return None


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUE_VALUES


@dataclass(frozen=True)
class ClientOptions:
    """Hints and credentials held by a ``ClusterClient`` for its lifetime.

    ``project_id`` and ``location`` are only used when a bare cluster name is
    given (e.g. ``my-cluster``); full resource names carry their own.
    """

    project_id: Optional[str] = None
    location: Optional[str] = None
    credentials_path: Optional[str] = None
    # Pre-built google.auth credentials object, takes precedence over the path
    credentials: Optional[Any] = None


@dataclass
class Config:
    """Configuration for GKE credential generation."""

    project_id: Optional[str] = None
    location: Optional[str] = None
    credentials_path: Optional[str] = None
    use_auth_provider: bool = False
    use_internal_ip: bool = False

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        credentials_path = os.getenv("GOOGLE_APPLICATION_CREDENTIALS")
        return cls(
            project_id=os.getenv("GOOGLE_CLOUD_PROJECT")
            or os.getenv("CLOUDSDK_CORE_PROJECT")
            or _extract_project_id_from_service_account(credentials_path),
            location=os.getenv("GKE_LOCATION")
            or os.getenv("CLOUDSDK_COMPUTE_REGION")
            or os.getenv("CLOUDSDK_COMPUTE_ZONE"),
            credentials_path=credentials_path,
            use_auth_provider=_env_flag("GKE_USE_AUTH_PROVIDER"),
            use_internal_ip=_env_flag("GKE_USE_INTERNAL_IP"),
        )


# Global configuration instance
config = Config.from_env()
