"""
MyGram Backend - Custom Exception Hierarchy
============================================

What:  Application-specific exceptions for every business-rule failure.
How:   Each exception carries a message, an optional context dict and an
       explicit `ErrorKind`. The global handler in main.py maps the kind to
       an HTTP status and error code from a single table.
Who:   Raised by security helpers, repositories and services; caught by the
       global handlers (and, for duplicate identities, by the user routes).

Exception Hierarchy:
    MyGramError (base)
    ├── ValidationError          → 400 Bad Request
    ├── NotFoundError            → 404 Not Found
    ├── ForbiddenError           → 403 Forbidden (exists, not yours)
    ├── DuplicateIdentityError   → 409 by default (user routes use 209 / 200)
    ├── InvalidCredentialsError  → 400 Bad Request (merged login failure)
    ├── MissingTokenError        → 400 Bad Request
    ├── InvalidTokenError        → 401 Unauthorized
    ├── TokenExpiredError        → 401 Unauthorized
    └── DatabaseError            → 500 Internal Server Error

ForbiddenError and NotFoundError are distinct kinds. Clients rely on the
difference: a 404 means "gone", a 403 means "exists but belongs to someone
else".
"""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorKind(str, Enum):
    """Explicit tag carried by every application error."""

    VALIDATION = "validation_error"
    NOT_FOUND = "not_found"
    FORBIDDEN = "forbidden"
    DUPLICATE_IDENTITY = "duplicate_identity"
    INVALID_CREDENTIALS = "invalid_credentials"
    MISSING_TOKEN = "missing_token"
    INVALID_TOKEN = "invalid_token"
    TOKEN_EXPIRED = "token_expired"
    PERSISTENCE = "server_error"


class MyGramError(Exception):
    """
    Base exception for all MyGram application errors.

    Attributes:
        kind:     ErrorKind tag used by the boundary to pick a status code
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged, returned only for client errors)
    """

    kind: ErrorKind = ErrorKind.PERSISTENCE

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(MyGramError):
    """
    Raised when client input is rejected. Request body and path parameter
    failures detected by FastAPI are converted into this error by the
    handler in main.py, so every 400 shares one body shape.

    HTTP: 400 Bad Request
    """

    kind = ErrorKind.VALIDATION

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class NotFoundError(MyGramError):
    """
    Raised when a referenced entity does not exist.

    SQLAlchemy returns None for missing rows; the persistence and service
    layers convert that None into this exception.

    HTTP: 404 Not Found
    """

    kind = ErrorKind.NOT_FOUND

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id is not None:
            message = f"{resource.capitalize()} with ID {resource_id} is not found."
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource = resource
        self.resource_id = resource_id


class ForbiddenError(MyGramError):
    """
    Raised when the entity exists but the acting user does not own it.

    HTTP: 403 Forbidden
    """

    kind = ErrorKind.FORBIDDEN

    def __init__(
        self,
        message: str = "This resource is not yours.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DuplicateIdentityError(MyGramError):
    """
    Raised when a username or email collides with an existing user.

    The register route answers this with 209 ("log in instead") and the
    profile update route with 200; see routes/users.py.
    """

    kind = ErrorKind.DUPLICATE_IDENTITY

    def __init__(
        self,
        message: str = "The email or username is already registered.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class InvalidCredentialsError(MyGramError):
    """
    Raised on login failure. Unknown email and wrong password produce the
    same message so a caller cannot probe which part was wrong.

    HTTP: 400 Bad Request
    """

    kind = ErrorKind.INVALID_CREDENTIALS

    def __init__(
        self,
        message: str = "Email or password is incorrect.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class MissingTokenError(MyGramError):
    """No bearer credential in the Authorization header. HTTP: 400."""

    kind = ErrorKind.MISSING_TOKEN

    def __init__(
        self,
        message: str = "Bearer token not found.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class InvalidTokenError(MyGramError):
    """Bad signature, malformed token or missing subject claim. HTTP: 401."""

    kind = ErrorKind.INVALID_TOKEN

    def __init__(
        self,
        message: str = "Bearer token is invalid.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class TokenExpiredError(MyGramError):
    """Token signature is valid but its `exp` claim has passed. HTTP: 401."""

    kind = ErrorKind.TOKEN_EXPIRED

    def __init__(
        self,
        message: str = "Bearer token has expired.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(MyGramError):
    """
    Raised when a storage operation fails for a reason we cannot classify.

    The message returned to the client is always generic. Detailed error
    info (constraint name, SQL, driver error) is logged server-side only.

    HTTP: 500 Internal Server Error
    """

    kind = ErrorKind.PERSISTENCE

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
