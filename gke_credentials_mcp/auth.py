"""Google Cloud authentication for GKE Credentials MCP.

Token issuance and authenticated HTTP calls are delegated to ``google-auth``.
``ClusterClient`` only depends on the small ``AuthProvider`` protocol below so
tests can substitute an in-memory double.
"""

import threading
from typing import Any, Dict, Optional, Protocol, Sequence

from google.auth import default, load_credentials_from_file
from google.auth.exceptions import GoogleAuthError
from google.auth.transport.requests import AuthorizedSession, Request
import requests

from .config import OAUTH_SCOPES
from .exceptions import MalformedResponseError, TokenAcquisitionError, UpstreamError
from .logging_utils import LoggingUtility


class AuthProvider(Protocol):
    """Issues bearer tokens and performs authenticated GET requests."""

    def get_token(self) -> str:
        ...

    def fetch(
        self,
        url: str,
        params: Optional[Dict[str, str]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Dict[str, Any]:
        ...


class GoogleAuthProvider:
    """``AuthProvider`` backed by google-auth credentials.

    Credentials come from, in order: an explicit credentials object, a
    credentials JSON file (service account, authorized user or external
    account), or Application Default Credentials.
    """

    def __init__(
        self,
        credentials: Optional[Any] = None,
        credentials_path: Optional[str] = None,
        scopes: Sequence[str] = OAUTH_SCOPES,
        quota_project_id: Optional[str] = None,
    ):
        self.logger = LoggingUtility()
        self._credentials = credentials
        self._credentials_path = credentials_path
        self._scopes = list(scopes)
        self._quota_project_id = quota_project_id
        self._session: Optional[AuthorizedSession] = None
        self._lock = threading.Lock()

    def _ensure_credentials(self) -> Any:
        """Load credentials on first use."""
        with self._lock:
            if self._credentials is None:
                try:
                    if self._credentials_path:
                        self.logger.log_debug(
                            "auth", f"loading credentials from {self._credentials_path}"
                        )
                        # Service account, authorized user or external account files
                        self._credentials, _ = load_credentials_from_file(
                            self._credentials_path,
                            scopes=self._scopes,
                            quota_project_id=self._quota_project_id,
                        )
                    else:
                        self.logger.log_debug("auth", "using application default credentials")
                        self._credentials, _ = default(
                            scopes=self._scopes, quota_project_id=self._quota_project_id
                        )
                except (GoogleAuthError, OSError, ValueError) as e:
                    raise UpstreamError(f"Failed to load Google credentials: {e}") from e
            return self._credentials

    def _ensure_session(self) -> AuthorizedSession:
        credentials = self._ensure_credentials()
        with self._lock:
            if self._session is None:
                self._session = AuthorizedSession(credentials)
            return self._session

    def get_token(self) -> str:
        """Return a valid access token, refreshing the credentials if needed."""
        credentials = self._ensure_credentials()
        try:
            if not credentials.valid:
                credentials.refresh(Request())
        except (GoogleAuthError, requests.RequestException) as e:
            raise UpstreamError(f"Failed to refresh Google credentials: {e}") from e

        token = credentials.token
        if not token:
            raise TokenAcquisitionError("Failed to generate token.")
        return token

    def fetch(
        self,
        url: str,
        params: Optional[Dict[str, str]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Dict[str, Any]:
        """GET ``url`` with the credentials attached and decode the JSON body."""
        session = self._ensure_session()
        try:
            response = session.get(url, params=params, headers=headers)
        except (GoogleAuthError, requests.RequestException) as e:
            raise UpstreamError(f"Request to {url} failed: {e}", url=url) from e

        if not response.ok:
            raise UpstreamError(
                f"Request to {url} failed with status {response.status_code}: "
                f"{_error_message(response)}",
                url=url,
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise MalformedResponseError(
                f"Response from {url} is not valid JSON: {e}"
            ) from e


def _error_message(response: requests.Response) -> str:
    """Pull the message out of a Google API error body, if there is one."""
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason or ""
    if isinstance(body, dict) and isinstance(body.get("error"), dict):
        return body["error"].get("message", "")
    return response.text
