"""GKE Credentials MCP - short-lived kubeconfig generation for GKE clusters.

This package resolves a Google Kubernetes Engine cluster (or a Fleet
membership) to a kubeconfig document that a standard Kubernetes client can
use to authenticate to the cluster.

Key Features:
    - Resource names: Parse cluster and Fleet membership resource names
    - Cluster lookup: Fetch cluster metadata from the GKE control plane
    - Fleet: Discover memberships and build Connect Gateway endpoints
    - Kubeconfig: Render single-context documents with an embedded bearer
      token or the gcp auth-provider plugin

Usage:
    The package can be used as a library through ``ClusterClient`` and
    ``get_credentials`` or run as an MCP server over stdio.

Environment Variables:
    - GOOGLE_APPLICATION_CREDENTIALS: Service account JSON (optional, ADC otherwise)
    - GOOGLE_CLOUD_PROJECT: Default project ID for bare cluster names
    - GKE_LOCATION: Default location (region or zone) for bare cluster names
"""

# Get version dynamically from package metadata
from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("gke-credentials-mcp")
except PackageNotFoundError:
    # Fallback when package not installed (e.g., development mode)
    __version__ = "dev"

__author__ = "gke-credentials-mcp authors"
