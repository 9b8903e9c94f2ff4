"""
Domain errors.

Each error is an HTTPException with a fixed status code, so services raise
them directly and FastAPI renders them without extra handlers.
"""
from typing import Optional

from fastapi import HTTPException, status


class SwimProgramError(HTTPException):
    http_status: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail: str = "Internal error"

    def __init__(self, detail: Optional[str] = None):
        super().__init__(status_code=self.http_status, detail=detail or self.default_detail)


class NotAuthenticated(SwimProgramError):
    http_status = status.HTTP_401_UNAUTHORIZED
    default_detail = "Not authenticated"


class NotAuthorized(SwimProgramError):
    http_status = status.HTTP_403_FORBIDDEN
    default_detail = "Not authorized"


class SelfDeletionForbidden(SwimProgramError):
    http_status = status.HTTP_403_FORBIDDEN
    default_detail = "Cannot delete your own account"


class InvalidPhoneNumber(SwimProgramError):
    http_status = status.HTTP_400_BAD_REQUEST
    default_detail = "Phone number must be between 8 and 15 digits after normalization"


class WeakPassword(SwimProgramError):
    http_status = status.HTTP_400_BAD_REQUEST
    default_detail = "Password is too short"


class ValidationFailed(SwimProgramError):
    http_status = status.HTTP_400_BAD_REQUEST
    default_detail = "Request is not valid for the current data"


class NotFound(SwimProgramError):
    http_status = status.HTTP_404_NOT_FOUND
    default_detail = "Not found"


class DuplicateIdentity(SwimProgramError):
    http_status = status.HTTP_409_CONFLICT
    default_detail = "An account with this phone number already exists"


class AlreadyRecorded(SwimProgramError):
    http_status = status.HTTP_409_CONFLICT
    default_detail = "Already recorded"


class GearUnavailable(SwimProgramError):
    http_status = status.HTTP_409_CONFLICT
    default_detail = "No units of this gear are available"


class ProfileInsertFailed(SwimProgramError):
    default_detail = "Failed to create user profile"


class DetailInsertFailed(SwimProgramError):
    default_detail = "Failed to create participant record"


class BackendUnavailable(SwimProgramError):
    http_status = status.HTTP_503_SERVICE_UNAVAILABLE
    default_detail = "Backend unavailable"


def is_unique_violation(exc: Exception) -> bool:
    """True for Postgres unique_violation (23505) errors raised by PostgREST."""
    if getattr(exc, "code", None) == "23505":
        return True
    message = str(exc).lower()
    return "23505" in message or "duplicate key" in message
