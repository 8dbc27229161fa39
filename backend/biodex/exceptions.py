"""
Biodex Backend — Custom Exception Hierarchy
=============================================

What:  Application-specific exceptions for the API and the card component.
How:   Each exception carries a user-facing message and an optional context
       dict. Global handlers in main.py turn server-side errors into JSON
       responses with the matching status code.

Exception Hierarchy:
    BiodexError (base)
    ├── ValidationError        → 400 Bad Request
    ├── UnauthenticatedError   → 401 Unauthorized
    ├── PermissionDeniedError  → 403 Forbidden
    ├── NotFoundError          → 404 Not Found
    ├── DatabaseError          → 500 Internal Server Error
    └── StoreError             → client side only: a DataStore write failed

StoreError never reaches an HTTP handler. It is raised by DataStore
implementations and caught by RecordEditCard, which reports it through the
Notifier instead of crashing.
"""

from typing import Any, Dict, Optional


class BiodexError(Exception):
    """
    Base exception for all Biodex application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(BiodexError):
    """
    Raised when client input fails validation.

    Request bodies and path parameters rejected by Pydantic are converted
    into this exception by main.validation_error_from, so a bad PATCH body
    gets the same 400 error shape as every other failure. `context["errors"]`
    then holds the first message per field.
    """

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


class UnauthenticatedError(BiodexError):
    """Raised when a protected route is called without a viewer identity."""

    def __init__(
        self,
        message: str = "A signed-in viewer is required for this request",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class PermissionDeniedError(BiodexError):
    """
    Raised when a viewer tries to change a record they do not own.

    The card hides edit/delete controls from non-owners, but that is only a
    UX gate. This exception is the authoritative ownership check.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"You do not have permission to modify this {resource}"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class NotFoundError(BiodexError):
    """
    Raised when a requested resource does not exist.

    SQLAlchemy returns None for missing rows; services convert that into
    this exception so routes stay free of None checks.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class DatabaseError(BiodexError):
    """
    Raised when database operations fail unexpectedly.

    The message returned to the client is always generic; constraint names
    and SQL stay in the server log.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class StoreError(BiodexError):
    """
    Raised by a DataStore when an update or delete did not go through.

    `message` is what the card shows in its error notification, so it
    should be the store's own explanation ("species with ID '7' was not
    found"), not a generic string.
    """

    def __init__(
        self,
        message: str = "The record could not be saved",
        status_code: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if status_code is not None:
            ctx["status_code"] = status_code
        super().__init__(message=message, context=ctx)
        self.status_code = status_code
