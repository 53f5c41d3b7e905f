"""GKE Credentials MCP Server - kubeconfig generation over stdio."""

import asyncio
import json
import logging
import sys
from typing import Any, Optional

from mcp import stdio_server
from mcp.server import Server
from mcp.server.models import InitializationOptions
from mcp.types import ServerCapabilities, TextContent, Tool

from . import __version__
from .config import config
from .credentials import get_credentials
from .logging_utils import LoggingUtility, error_response, handle_error, success_response
from .tools import GET_GKE_CREDENTIALS_TOOL, get_gke_tools

# Initialize server
server = Server("gke-credentials-mcp")

# Configure logging
logging.basicConfig(level=logging.INFO)


@server.list_tools()
async def list_tools() -> list[Tool]:
    """Return the available tools."""
    return get_gke_tools()


def _flag(arguments: dict[str, Any], name: str, default: bool) -> bool:
    """Read a boolean argument; strings such as "false" are rejected."""
    value = arguments.get(name)
    if value is None:
        return default
    if not isinstance(value, bool):
        raise ValueError(f"{name} must be a boolean, got {type(value).__name__}")
    return value


async def _get_gke_credentials(arguments: dict[str, Any]) -> dict[str, Any]:
    """Run the credentials flow with environment defaults filled in."""
    result = await get_credentials(
        arguments["cluster_name"],
        project_id=arguments.get("project_id") or config.project_id,
        location=arguments.get("location") or config.location,
        use_auth_provider=_flag(arguments, "use_auth_provider", config.use_auth_provider),
        use_internal_ip=_flag(arguments, "use_internal_ip", config.use_internal_ip),
        use_connect_gateway=_flag(arguments, "use_connect_gateway", False),
        fleet_membership_name=arguments.get("fleet_membership_name"),
        context_name=arguments.get("context_name"),
        kubeconfig_path=arguments.get("kubeconfig_path"),
        verify=_flag(arguments, "verify", False),
        credentials_path=config.credentials_path,
    )

    response = success_response(
        cluster=result.cluster_resource_name,
        context=result.context_name,
        endpoint=result.endpoint,
        kubeconfig=result.kubeconfig,
    )
    if result.membership_name:
        response["membership"] = result.membership_name
    if result.kubeconfig_path:
        response["kubeconfig_path"] = result.kubeconfig_path
    if result.server_version:
        response["server_version"] = result.server_version
    return response


@server.call_tool()
async def call_tool(name: str, arguments: Optional[dict] = None) -> list[TextContent]:
    """Handle tool calls."""
    try:
        if name != GET_GKE_CREDENTIALS_TOOL:
            result = error_response(f"Unknown tool: {name}")
        elif not arguments or not arguments.get("cluster_name"):
            result = error_response("cluster_name required")
        else:
            result = await _get_gke_credentials(arguments)

        return [TextContent(type="text", text=json.dumps(result, indent=2))]

    except Exception as e:
        error_result = handle_error("get gke credentials", e)
        return [TextContent(type="text", text=json.dumps(error_result, indent=2))]


async def main():
    """Run the GKE Credentials MCP server."""
    async with stdio_server() as (read_stream, write_stream):
        await server.run(
            read_stream,
            write_stream,
            InitializationOptions(
                server_name="gke-credentials-mcp",
                server_version=__version__,
                capabilities=ServerCapabilities(),
            ),
        )


def run_server():
    """Entry point for the GKE Credentials MCP server."""
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        LoggingUtility.log_info("server", "Server stopped by user")
    except Exception as e:
        LoggingUtility.log_error("server", e)
        sys.exit(1)


if __name__ == "__main__":
    run_server()
