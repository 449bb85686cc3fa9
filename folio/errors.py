"""Error types shared by the gateway and the HTTP layer."""

from enum import Enum


class FolioError(Exception):
    """Base error."""


class StorageFailure(FolioError):
    """The store could not answer; the message is safe to log, not to show."""


class ErrorKind(str, Enum):
    """Why a write was refused."""

    AUTH_REQUIRED = "auth_required"
    NOT_FOUND = "not_found"
    VALIDATION = "validation"
    STORAGE = "storage"


# Status code reported for each refusal.
HTTP_STATUS = {
    ErrorKind.AUTH_REQUIRED: 401,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.VALIDATION: 400,
    ErrorKind.STORAGE: 500,
}
