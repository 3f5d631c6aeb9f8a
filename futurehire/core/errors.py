# futurehire/core/errors.py
"""
Closed set of failure kinds that may cross the HTTP boundary.

Every error a client can observe is one of the ``ServiceError`` subclasses
below. The public message is fixed per kind, so internal failure detail
(driver messages, stack traces) never reaches a response body.
"""
from enum import Enum


class ErrorKind(str, Enum):
    DUPLICATE_IDENTITY = "duplicate_identity"
    INVALID_CREDENTIALS = "invalid_credentials"
    UNAUTHENTICATED = "unauthenticated"
    INVALID_TOKEN = "invalid_token"
    EXPIRED_TOKEN = "expired_token"
    NOT_FOUND = "not_found"
    STORE_UNAVAILABLE = "store_unavailable"


class ConfigurationError(RuntimeError):
    """Raised at startup when required configuration is missing or invalid."""


class ServiceError(Exception):
    kind: ErrorKind
    status_code: int = 500
    message: str = "Internal server error"

    def __init__(self, detail: str = ""):
        # detail is for logs only; responses use ``message``
        super().__init__(detail or self.message)
        self.detail = detail

    def to_dict(self) -> dict:
        return {"error": self.message, "kind": self.kind.value}


class DuplicateIdentity(ServiceError):
    kind = ErrorKind.DUPLICATE_IDENTITY
    status_code = 409
    message = "Email already registered"


class InvalidCredentials(ServiceError):
    kind = ErrorKind.INVALID_CREDENTIALS
    status_code = 401
    message = "Invalid credentials"


class Unauthenticated(ServiceError):
    kind = ErrorKind.UNAUTHENTICATED
    status_code = 401
    message = "Access denied"


class InvalidToken(ServiceError):
    kind = ErrorKind.INVALID_TOKEN
    status_code = 403
    message = "Invalid token"


class ExpiredToken(ServiceError):
    kind = ErrorKind.EXPIRED_TOKEN
    status_code = 403
    message = "Token expired"


class IdentityNotFound(ServiceError):
    kind = ErrorKind.NOT_FOUND
    status_code = 404
    message = "User not found"


class StoreUnavailable(ServiceError):
    kind = ErrorKind.STORE_UNAVAILABLE
    status_code = 503
    message = "Service temporarily unavailable"
