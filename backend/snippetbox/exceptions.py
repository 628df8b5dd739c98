"""
Snippetbox — Custom Exception Hierarchy
========================================

What:  Application-specific exceptions for the error scenarios of the site.
How:   Each exception carries a message and an optional context dict.
       Global exception handlers (registered in main.py) catch the ones that
       reach them and turn them into plain-text responses.
Who:   Raised by the form binder, services and auth dependencies.

Exception Hierarchy:
    SnippetboxError (base)
    ├── DecodeError               → 400 Bad Request
    ├── NotFoundError             → 404 Not Found
    ├── AuthenticationRequired    → 303 See Other (to /user/login)
    ├── DuplicateEmailError       → caught by the signup handler (field error)
    ├── InvalidCredentialsError   → caught by the login handler (non-field error)
    └── DatabaseError             → 500 Internal Server Error

Validation failures are NOT exceptions: they live in a form's Validator and
are re-rendered with a 422 status.
"""

from typing import Any, Dict, Optional


class SnippetboxError(Exception):
    """
    Base exception for all Snippetbox application errors.

    Attributes:
        message:  Human-readable description (safe to log, never rendered raw)
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


class DecodeError(SnippetboxError):
    """
    Raised when a form post cannot be decoded into a form record.

    When:  Body is not form-encoded, an integer field holds a non-integer,
           or the destination is not a mutable form record.
    HTTP:  400 Bad Request, with a generic body (parse details stay in logs).
    """

    def __init__(
        self,
        message: str = "Malformed form data",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class NotFoundError(SnippetboxError):
    """
    Raised when a requested resource does not exist.

    When:  GET /snippet/view/{id} with an unknown, expired or malformed id.
    HTTP:  404 Not Found
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


class AuthenticationRequired(SnippetboxError):
    """
    Raised by the `require_authentication` dependency.

    HTTP:  303 redirect to the login page.
    """

    def __init__(self, path: str = "", context: Optional[Dict[str, Any]] = None):
        ctx = context or {}
        if path:
            ctx["path"] = path
        super().__init__(message="Authentication required", context=ctx)


class DuplicateEmailError(SnippetboxError):
    """Raised by UserService.insert when the email is already registered."""

    def __init__(self, email: str = "", context: Optional[Dict[str, Any]] = None):
        ctx = context or {}
        if email:
            ctx["email"] = email
        super().__init__(message="Email address is already in use", context=ctx)


class InvalidCredentialsError(SnippetboxError):
    """
    Raised by UserService.authenticate for an unknown email or wrong password.

    The message deliberately does not say which of the two was wrong.
    """

    def __init__(self, context: Optional[Dict[str, Any]] = None):
        super().__init__(message="Email or password is incorrect", context=context)


class DatabaseError(SnippetboxError):
    """
    Raised when database operations fail unexpectedly.

    HTTP:  500 Internal Server Error
    Security Note:
        The response body is always generic. Detailed error info is logged
        server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
