"""
Restaurants API — Custom Exception Hierarchy
=============================================

What:  Application-specific exceptions for the restaurant CRUD workflow.
Why:   Each exception maps to exactly one HTTP status code and error code, so
       route handlers never build error responses by hand.
How:   Each exception carries a message and an optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses.
Who:   Raised by the validation dependencies and the restaurant service;
       caught by the global handlers (or by the HTML form route).
When:  During request processing, after the storage adapter has reported an
       outcome or before it is ever called (validation).

Exception Hierarchy:
    RestaurantsAPIError (base)
    ├── ValidationError           → 400 Bad Request (per-field messages)
    ├── InvalidIdentifierError    → 400 Bad Request (malformed ObjectId)
    ├── NotFoundError             → 404 Not Found
    ├── DatabaseError             → 500 Internal Server Error
    └── StartupError              → fatal, process exits before serving

Design Decision:
    The storage adapter never raises for storage failures. It returns a tagged
    StoreResult, and the service layer turns the tag into one of these
    exceptions. Handlers therefore never inspect driver exception subtypes.
"""

from typing import Any, Dict, List, Optional


class RestaurantsAPIError(Exception):
    """
    Base exception for all Restaurants API errors.

    Attributes:
        message:  Human-readable error description (returned in the API response)
        context:  Additional info for logs and the `details` field
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(RestaurantsAPIError):
    """
    Raised when client input fails its declared constraints.

    What:    One or more request fields have the wrong type, format or range.
    When:    page/perPage not numeric, borough not a string, body not an object.
    HTTP:    400 Bad Request

    Every failing field is reported, one message per field:
        {
            "error": "validation_error",
            "message": "Validation failed.",
            "details": {"errors": [{"field": "page", "message": "Page must be a number"}]}
        }
    """

    def __init__(
        self,
        message: str = "Validation failed.",
        errors: Optional[List[Dict[str, str]]] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        self.errors = errors or []
        ctx["errors"] = self.errors
        super().__init__(message=message, context=ctx)


class InvalidIdentifierError(RestaurantsAPIError):
    """
    Raised when a path identifier is not a structurally valid ObjectId.

    What:    The id is the wrong length or contains non-hex characters.
    When:    Pre-flight check on get/update/delete, or the storage adapter
             reporting INVALID_IDENTIFIER while converting the id.
    HTTP:    400 Bad Request

    Why 400 (not 500):
        The failure originates in client-supplied input even when the storage
        layer is the one that detects it.
    """

    def __init__(
        self,
        restaurant_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if restaurant_id is not None:
            ctx["restaurant_id"] = restaurant_id
        super().__init__(
            message="Invalid parameter type. The id must be a valid ObjectId.",
            context=ctx,
        )
        self.restaurant_id = restaurant_id


class NotFoundError(RestaurantsAPIError):
    """
    Raised when no restaurant matches the requested identifier.

    HTTP:    404 Not Found

    There is no distinction between "already deleted" and "never existed".
    """

    def __init__(
        self,
        resource: str = "Restaurant",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=f"{resource} not found by this id.", context=ctx)


class DatabaseError(RestaurantsAPIError):
    """
    Raised when a storage operation fails for a reason other than a bad id.

    What:    Connectivity loss, duplicate key, server-side error, etc.
    HTTP:    500 Internal Server Error

    The underlying driver message is kept in `message` and returned to the
    client for diagnostics. Stack traces stay in the server log.
    """

    def __init__(
        self,
        message: str = "A database error occurred.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class StartupError(RestaurantsAPIError):
    """
    Raised when MongoDB cannot be reached while the application starts.

    Raised inside the lifespan handler, so uvicorn aborts startup and exits
    with a non-zero status before any request is accepted.
    """

    def __init__(
        self,
        message: str = "Could not connect to MongoDB",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
