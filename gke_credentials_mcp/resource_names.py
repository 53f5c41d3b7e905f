"""Parsing and construction of GKE cluster and Fleet membership resource names."""

from dataclasses import dataclass
import re
from typing import Optional

from .exceptions import EmptyInputError, InvalidFormatError, InvalidNameError, MissingHintError

CLUSTER_RESOURCE_NAME_PATTERN = re.compile(
    r"^projects/(.+)/locations/(.+)/clusters/(.+)$", re.IGNORECASE
)
MEMBERSHIP_RESOURCE_NAME_PATTERN = re.compile(
    r"^projects/(.+)/locations/(.+)/memberships/(.+)$", re.IGNORECASE
)

RESOURCE_NAME_SEPARATOR = "/"


@dataclass(frozen=True)
class ResourceName:
    """A cluster name, either bare (only ``id`` set) or fully qualified."""

    project_id: str
    location: str
    id: str

    @property
    def is_bare(self) -> bool:
        return not self.project_id and not self.location

    def __str__(self) -> str:
        if self.is_bare:
            return self.id
        return f"projects/{self.project_id}/locations/{self.location}/clusters/{self.id}"


@dataclass(frozen=True)
class MembershipName:
    """A fully qualified Fleet membership name."""

    project_id: str
    location: str
    membership_name: str

    def __str__(self) -> str:
        return (
            f"projects/{self.project_id}/locations/{self.location}"
            f"/memberships/{self.membership_name}"
        )


def parse_resource_name(name: Optional[str]) -> ResourceName:
    """Parse a cluster name.

    A bare name such as ``my-cluster`` is returned with an empty project ID
    and location. A full name such as ``projects/p/locations/l/clusters/c``
    is split into its parts. Anything else raises ``InvalidFormatError``.
    """
    name = (name or "").strip()
    if not name:
        raise EmptyInputError("Failed to parse cluster name: value is the empty string")

    if RESOURCE_NAME_SEPARATOR not in name:
        return ResourceName(project_id="", location="", id=name)

    match = CLUSTER_RESOURCE_NAME_PATTERN.match(name)
    if not match:
        raise InvalidFormatError(f'Failed to parse cluster name "{name}": invalid pattern')

    return ResourceName(project_id=match[1], location=match[2], id=match[3])


def parse_membership_name(name: Optional[str]) -> MembershipName:
    """Parse a full Fleet membership name; bare names are rejected."""
    name = (name or "").strip()
    if not name:
        raise EmptyInputError(
            "Failed to parse membership name: membership name cannot be empty"
        )

    match = MEMBERSHIP_RESOURCE_NAME_PATTERN.match(name)
    if not match:
        raise InvalidFormatError(
            f'Failed to parse membership name "{name}": invalid pattern. Should be of '
            "form projects/PROJECT_ID/locations/LOCATION/memberships/MEMBERSHIP_NAME"
        )

    return MembershipName(
        project_id=match[1], location=match[2], membership_name=match[3]
    )


def get_resource(
    name: Optional[str],
    project_id: Optional[str] = None,
    location: Optional[str] = None,
) -> str:
    """Build the full cluster resource name.

    Full names are returned as given after validation. Bare names are
    expanded with ``project_id`` and ``location``, both of which are then
    required.
    """
    name = (name or "").strip()
    if not name:
        raise EmptyInputError("Failed to parse cluster name: name cannot be empty")

    if RESOURCE_NAME_SEPARATOR in name:
        if CLUSTER_RESOURCE_NAME_PATTERN.match(name):
            return name
        raise InvalidNameError(f'Invalid cluster name "{name}"')

    if not project_id:
        raise MissingHintError(
            'Failed to get project ID to build cluster name. Try setting "project_id".'
        )

    if not location:
        raise MissingHintError(
            "Failed to get location (region/zone) to build cluster name. "
            'Try setting "location".'
        )

    return str(ResourceName(project_id=project_id, location=location, id=name))
