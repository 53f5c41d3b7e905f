"""Tool definitions for the GKE Credentials MCP server."""

from mcp.types import Tool

GET_GKE_CREDENTIALS_TOOL = "get_gke_credentials"


def get_gke_tools() -> list[Tool]:
    """Return the tools exposed by the server."""
    return [
        Tool(
            name=GET_GKE_CREDENTIALS_TOOL,
            description="Generate a kubeconfig for a Google Kubernetes Engine cluster. Fetches the cluster from the GKE API and embeds a short lived access token, or references the gcp auth-provider plugin. Can route through Connect Gateway using the cluster's Fleet membership.",
            inputSchema={
                "type": "object",
                "properties": {
                    "cluster_name": {
                        "type": "string",
                        "description": "Cluster name. Either a bare name such as 'my-cluster' (requires project_id and location) or a full resource name such as 'projects/my-project/locations/us-central1/clusters/my-cluster'.",
                    },
                    "project_id": {
                        "type": "string",
                        "description": "Project ID for bare cluster names and membership discovery. Defaults to GOOGLE_CLOUD_PROJECT.",
                    },
                    "location": {
                        "type": "string",
                        "description": "Region or zone for bare cluster names. Defaults to GKE_LOCATION.",
                    },
                    "use_auth_provider": {
                        "type": "boolean",
                        "description": "Reference the gcp auth-provider plugin instead of embedding a short lived token.",
                    },
                    "use_internal_ip": {
                        "type": "boolean",
                        "description": "Use the cluster's private endpoint.",
                    },
                    "use_connect_gateway": {
                        "type": "boolean",
                        "description": "Route through Connect Gateway using the cluster's Fleet membership.",
                    },
                    "fleet_membership_name": {
                        "type": "string",
                        "description": "Fleet membership of the form projects/PROJECT_ID/locations/LOCATION/memberships/MEMBERSHIP_NAME. Discovered automatically when omitted.",
                    },
                    "context_name": {
                        "type": "string",
                        "description": "Kubeconfig context name. Defaults to gke_PROJECT_LOCATION_CLUSTER.",
                    },
                    "kubeconfig_path": {
                        "type": "string",
                        "description": "Optional file to write the kubeconfig to.",
                    },
                    "verify": {
                        "type": "boolean",
                        "description": "Connect to the cluster with the generated kubeconfig and report the server version before writing any file.",
                    },
                },
                "required": ["cluster_name"],
            },
        ),
    ]
