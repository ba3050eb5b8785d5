"""Error taxonomy shared by use cases and the API layer."""

from __future__ import annotations


class TeamHubError(Exception):
    """Base class for domain errors carrying the HTTP status they map to."""

    status_code = 500

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message


class UnauthenticatedError(TeamHubError):
    """Missing or invalid credential."""

    status_code = 401


class ForbiddenError(TeamHubError):
    """Authenticated, but not the owner or not allowed by role."""

    status_code = 403


class NotFoundError(TeamHubError):
    """Referenced entity does not exist."""

    status_code = 404


class ValidationError(TeamHubError):
    """Malformed input."""

    status_code = 400


class ConflictError(TeamHubError):
    """Duplicate value for a unique field."""

    status_code = 409


__all__ = [
    "TeamHubError",
    "UnauthenticatedError",
    "ForbiddenError",
    "NotFoundError",
    "ValidationError",
    "ConflictError",
]
