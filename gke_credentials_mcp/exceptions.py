"""Exceptions raised while resolving clusters and generating kubeconfigs."""

from typing import Optional, Sequence


class GKECredentialsError(Exception):
    """Base class for all errors raised by this package."""


# ===== INPUT ERRORS =====


class EmptyInputError(GKECredentialsError, ValueError):
    """A required name was empty or whitespace."""


class InvalidFormatError(GKECredentialsError, ValueError):
    """A name contained a separator but did not match the expected pattern."""


class InvalidNameError(InvalidFormatError):
    """A cluster name could not be turned into a full resource name."""


class MissingHintError(GKECredentialsError, ValueError):
    """A bare name was given without the project ID or location to expand it."""


# ===== UPSTREAM ERRORS =====


class UpstreamError(GKECredentialsError, RuntimeError):
    """A Google Cloud API call failed at the transport or auth layer."""

    def __init__(
        self, message: str, url: Optional[str] = None, status_code: Optional[int] = None
    ):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class MalformedResponseError(GKECredentialsError, RuntimeError):
    """An upstream payload did not have the expected shape."""


class NoMembershipFoundError(GKECredentialsError, RuntimeError):
    """No Fleet membership is registered for the cluster."""


class AmbiguousMembershipError(GKECredentialsError, RuntimeError):
    """More than one Fleet membership is registered for the cluster."""

    def __init__(self, message: str, memberships: Sequence[str] = ()):
        super().__init__(message)
        self.memberships = list(memberships)


class TokenAcquisitionError(GKECredentialsError, RuntimeError):
    """The credentials did not produce an access token."""
