"""
Snippets API — Custom Exception Hierarchy
==========================================

What:  Application-specific exceptions, one per public failure class.
How:   Each exception carries a client-safe message and an optional context
       dict. Global handlers registered in main.py map each class to its
       HTTP status and return `{"error": <message>}`; the context is only
       ever logged.
Who:   Raised by the router, the snippet service and the store; caught by the
       global handlers.

Exception Hierarchy:
    SnippetsApiError (base)              → 500
    ├── ValidationError                  → 400 Bad Request
    ├── StoreError                       → 400 Bad Request (message translated)
    ├── AuthenticationError              → 401 Unauthorized
    ├── NotFoundError                    → 404 Not Found
    ├── MethodNotAllowedError            → 405 Method Not Allowed
    └── InternalServerError              → 500 Internal Server Error

Not-found and not-yours share one exception and one message per operation
kind: reads use NOT_FOUND_MESSAGE, owner-only writes OWNER_NOT_FOUND_MESSAGE.
Either way a private snippet is indistinguishable from a missing one.
"""

from typing import Any, Dict, Optional

NOT_FOUND_MESSAGE = "Snippet not found or not accessible"
OWNER_NOT_FOUND_MESSAGE = "Snippet not found or unauthorized"


class SnippetsApiError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    status_code = 500

    def __init__(
        self,
        message: str = "Internal server error",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(SnippetsApiError):
    """
    Raised when client input fails validation.

    When:    Missing required fields on create, malformed JSON body, wrongly
             typed fields.
    HTTP:    400 Bad Request
    """

    status_code = 400

    def __init__(
        self,
        message: str = "Invalid request body",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class StoreError(SnippetsApiError):
    """
    Raised by the snippet store when a statement fails.

    What:    Wraps a driver/ORM failure together with its internal code
             (a PostgreSQL SQLSTATE such as "23505", or "PGRST116" when a
             single-row read finds nothing).
    HTTP:    400 Bad Request, with the message produced by
             `snippets_api.error_messages.public_message`.

    Security Note:
        `detail` holds the raw driver text and is only written to the log.
    """

    status_code = 400

    def __init__(
        self,
        code: Optional[str] = None,
        detail: str = "",
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["code"] = code
        super().__init__(message="An error occurred. Please try again.", context=ctx)
        self.code = code
        self.detail = detail


class AuthenticationError(SnippetsApiError):
    """Raised when a mutation is attempted without a valid bearer token (401)."""

    status_code = 401

    def __init__(
        self,
        message: str = "Authentication required",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(SnippetsApiError):
    """
    Raised when a snippet does not exist OR the caller may not see/modify it.

    HTTP:    404 Not Found

    The default message is shared by both cases; callers only override it
    with a translated store message when the lookup itself failed.
    """

    status_code = 404

    def __init__(
        self,
        message: str = NOT_FOUND_MESSAGE,
        snippet_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if snippet_id:
            ctx["snippet_id"] = snippet_id
        super().__init__(message=message, context=ctx)


class MethodNotAllowedError(SnippetsApiError):
    """Raised when the method/path-shape pair maps to no operation (405)."""

    status_code = 405

    def __init__(
        self,
        method: str = "",
        path: str = "",
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx.update({"method": method, "path": path})
        super().__init__(message="Method not allowed", context=ctx)


class InternalServerError(SnippetsApiError):
    """Wraps an unexpected exception raised while serving a request (500)."""

    status_code = 500

    def __init__(self, context: Optional[Dict[str, Any]] = None):
        super().__init__(message="Internal server error", context=context)
