"""
Notebox Backend — Custom Exception Hierarchy
==============================================

What:  Defines application-specific exceptions for every failure a request can hit.
How:   Each exception class carries an HTTP status code, a client-safe reason,
       and an optional context dict. Global exception handlers (registered in
       main.py) turn them into `{"reason": ...}` JSON responses.
Who:   Raised by services, stores and middleware; caught by global handlers.

Exception Hierarchy:
    NoteboxError (base)               → 500
    ├── AuthFailure                   → 500 (token missing/invalid, verifier down)
    ├── UserNotFound                  → 400 "User does not exist"
    ├── StoreFailure                  → 500 (any store/driver error)
    ├── Unacknowledged                → 500 (delete not acknowledged)
    └── RateLimitExceededError        → 429

    Only UserNotFound surfaces a distinguished client status. Authentication
    failures intentionally read the same as any other server failure.
"""

from typing import Any, Dict, Optional

INTERNAL_SERVER_ERROR = "Internal server error"


class NoteboxError(Exception):
    """
    Base exception for all Notebox application errors.

    Attributes:
        status_code: HTTP status returned to the client
        reason:      User-facing error description (safe to return in API response)
        context:     Additional debug info (logged but NOT returned to client)
    """

    status_code: int = 500
    default_reason: str = INTERNAL_SERVER_ERROR

    def __init__(
        self,
        reason: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        self.reason = reason or self.default_reason
        self.context = context or {}
        super().__init__(self.reason)


class AuthFailure(NoteboxError):
    """
    Raised when the bearer token cannot be turned into an identity.

    When:    Missing header, malformed/expired/revoked token, or the identity
             provider could not be reached.
    HTTP:    500 Internal Server Error, same body as any other failure.
             The specific cause goes to `context` for the server log only.
    """


class UserNotFound(NoteboxError):
    """
    Raised when a verified identity has no local user record.

    HTTP:    400 Bad Request, reason "User does not exist"
    """

    status_code = 400
    default_reason = "User does not exist"

    def __init__(self, uid: Optional[str] = None, context: Optional[Dict[str, Any]] = None):
        ctx = context or {}
        if uid:
            ctx["uid"] = uid
        super().__init__(context=ctx)


class StoreFailure(NoteboxError):
    """
    Raised when a store operation fails unexpectedly.

    Security Note:
        The reason returned to the client is always generic. Driver messages
        (SQL text, constraint names) are logged server-side only.
    """


class Unacknowledged(NoteboxError):
    """
    Raised when the store reports it did not execute a delete.

    A delete that matched nothing is NOT this error; it is acknowledged
    with a zero count.
    """


class RateLimitExceededError(NoteboxError):
    """
    Raised when a client exceeds the per-IP request rate limit.

    HTTP:    429 Too Many Requests, with a Retry-After header.
    """

    status_code = 429

    def __init__(
        self,
        retry_after: int = 60,
        context: Optional[Dict[str, Any]] = None,
    ):
        reason = (
            f"Rate limit exceeded. Please wait {retry_after} seconds before making more requests."
        )
        ctx = context or {}
        ctx["retry_after"] = retry_after
        super().__init__(reason=reason, context=ctx)
        self.retry_after = retry_after
