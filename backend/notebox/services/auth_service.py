"""
Notebox Backend — Authentication Pipeline
===========================================

What:  Resolves the Authorization header of a request to a local user record.
How:   token → IdentityVerifier.verify → UserStore.find_by_uid.
Who:   Run before every note operation (via notebox.routes.dependencies).

Failures:
    - No/invalid token, verifier error  → AuthFailure  (500)
    - Verified uid with no user record  → UserNotFound (400)
    - User lookup itself failing        → StoreFailure (500)
"""

import logging
from typing import Any, Dict, Optional

from notebox.exceptions import NoteboxError, StoreFailure, UserNotFound
from notebox.services.identity import IdentityVerifier
from notebox.stores.base import UserStore

logger = logging.getLogger(__name__)

BEARER_SCHEME = "bearer"


def extract_token(authorization: Optional[str]) -> Optional[str]:
    """
    Pulls the token out of an Authorization header value.

    Both `Bearer <token>` and a bare `<token>` are accepted.
    Returns None for a missing or blank header.
    """
    if not authorization:
        return None
    parts = authorization.split(None, 1)
    if parts and parts[0].lower() == BEARER_SCHEME:
        parts = parts[1:]
    return parts[0].strip() if parts else None


class AuthService:
    """Authenticates a request and returns the caller's user record."""

    def __init__(self, verifier: IdentityVerifier, users: UserStore):
        self.verifier = verifier
        self.users = users

    async def authenticate(self, authorization: Optional[str]) -> Dict[str, Any]:
        identity = await self.verifier.verify(extract_token(authorization))

        try:
            user = await self.users.find_by_uid(identity.uid)
        except NoteboxError:
            raise
        except Exception as e:
            logger.error("User lookup failed for uid %s: %s", identity.uid, e)
            raise StoreFailure(context={"operation": "find_user", "error_type": type(e).__name__}) from e

        if user is None:
            raise UserNotFound(uid=identity.uid)
        return user
