"""Logging and tool-result envelopes for the GKE credentials server.

Every ``get_gke_credentials`` call answers with a JSON object whose ``status``
is ``success`` or ``error``. Errors raised while talking to the GKE, Fleet and
Resource Manager APIs keep their details in the envelope (``status_code``,
``url`` and candidate ``memberships``) so a caller can tell a permission
problem from an ambiguous Fleet lookup without parsing the message.
"""

import logging
from typing import Any

from .exceptions import AmbiguousMembershipError, UpstreamError

logger = logging.getLogger("gke_credentials_mcp")


class LoggingUtility:
    """Logs ``<operation>: <message>`` lines on the package logger."""

    @staticmethod
    def log_info(operation: str, message: str) -> None:
        logger.info("%s: %s", operation, message)

    @staticmethod
    def log_error(operation: str, error: Exception) -> None:
        logger.error("%s: %s: %s", operation, type(error).__name__, error)

    @staticmethod
    def log_warning(operation: str, message: str) -> None:
        logger.warning("%s: %s", operation, message)

    @staticmethod
    def log_debug(operation: str, message: str) -> None:
        logger.debug("%s: %s", operation, message)


def success_response(**kwargs) -> dict[str, Any]:
    """Build a ``status: success`` result for the MCP tool."""
    response = {"status": "success"}
    response.update(kwargs)
    return response


def error_response(message: str, **kwargs) -> dict[str, Any]:
    """Build a ``status: error`` result for the MCP tool."""
    response = {"status": "error", "message": message}
    response.update(kwargs)
    return response


def _error_details(error: Exception) -> dict[str, Any]:
    details: dict[str, Any] = {}
    if isinstance(error, UpstreamError):
        if error.status_code is not None:
            details["status_code"] = error.status_code
        if error.url:
            details["url"] = error.url
    if isinstance(error, AmbiguousMembershipError) and error.memberships:
        details["memberships"] = list(error.memberships)
    return details


def handle_error(operation: str, error: Exception) -> dict[str, Any]:
    """Log ``error`` and turn it into an error result for the MCP tool."""
    LoggingUtility.log_error(operation, error)
    return error_response(
        f"Failed to {operation}: {error}",
        error_type=type(error).__name__,
        **_error_details(error),
    )
