"""Helper utilities shared across API route handlers."""

from fastapi import HTTPException

from teamhub.domain.errors import TeamHubError


def to_http_error(exc: TeamHubError) -> HTTPException:
    """Return the :class:`HTTPException` matching a use-case error."""

    return HTTPException(status_code=exc.status_code, detail=exc.message)
