# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Error taxonomy shared by the rotation engine, the order maintainer,
the stores and the service layer. Controllers map these to HTTP codes.
"""


class RotationError(Exception):
    """Base class for every domain error raised by this service."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class ValidationError(RotationError, ValueError):
    """Malformed or out-of-range input (bad weekday, negative position, ...)."""

    status_code = 400


class NotFoundError(RotationError, LookupError):
    """Referenced team or member does not exist."""

    status_code = 404


class MinimumMembersError(RotationError, ValueError):
    """Mutation would leave a team with fewer members than allowed."""

    status_code = 409


class EmptyListError(RotationError, ValueError):
    """Rotation requested against an empty member list."""

    status_code = 409
