"""Connectivity checks for generated kubeconfigs using the Kubernetes client."""

import asyncio
from typing import Any, Optional

from kubernetes import client, config
from kubernetes.client.rest import ApiException
from kubernetes.config.config_exception import ConfigException
import urllib3
import yaml

from .exceptions import MalformedResponseError, UpstreamError
from .logging_utils import LoggingUtility


def _read_server_version(config_dict: dict[str, Any], context: Optional[str]) -> str:
    api_client = config.new_client_from_config_dict(
        config_dict, context=context, persist_config=False
    )
    with api_client:
        version_info = client.VersionApi(api_client).get_code()
    # Safe access to git_version attribute
    return getattr(version_info, "git_version", "unknown")


async def check_connectivity(kubeconfig: str, context: Optional[str] = None) -> str:
    """Load a kubeconfig with the Kubernetes client and return the server version."""
    try:
        config_dict = yaml.safe_load(kubeconfig)
    except yaml.YAMLError as e:
        raise MalformedResponseError(f"Kubeconfig is not valid YAML: {e}") from e
    if not isinstance(config_dict, dict):
        raise MalformedResponseError("Kubeconfig must be a mapping")

    try:
        git_version = await asyncio.to_thread(_read_server_version, config_dict, context)
    except ApiException as e:
        raise UpstreamError(
            f"Kubernetes API server rejected the request: {e.reason}",
            status_code=e.status,
        ) from e
    except (ConfigException, urllib3.exceptions.HTTPError) as e:
        raise UpstreamError(f"Failed to reach the Kubernetes API server: {e}") from e

    LoggingUtility.log_info("check connectivity", f"server version {git_version}")
    return git_version
