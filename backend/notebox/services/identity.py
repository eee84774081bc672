"""
Notebox Backend — Identity Verification
=========================================

What:  Turns a bearer token into a verified identity (uid).
How:   IdentityVerifier is the abstract contract; FirebaseIdentityVerifier
       verifies Firebase ID tokens with the Firebase Admin SDK.
Who:   Called by AuthService at the start of every note request.

Error policy:
    Every failure, whether a missing token, a bad signature, an expired or
    revoked session, or Firebase being unreachable, becomes AuthFailure.
    The concrete cause is kept in the exception context for the server log.
"""

import asyncio
import json
import logging
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import firebase_admin
from firebase_admin import auth as firebase_auth
from firebase_admin import credentials

from notebox.config import settings
from notebox.exceptions import AuthFailure

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Identity:
    """A verified caller. `claims` holds the decoded token for diagnostics."""

    uid: str
    claims: Dict[str, Any] = field(default_factory=dict)


class IdentityVerifier(ABC):
    """
    Abstract interface for bearer-token verification.

    Contract:
        - verify() returns an Identity with a non-empty uid
        - Every failure is raised as AuthFailure
    """

    @abstractmethod
    async def verify(self, token: Optional[str]) -> Identity:
        ...


class FirebaseIdentityVerifier(IdentityVerifier):
    """
    Verifies Firebase ID tokens.

    The Firebase app is initialized lazily on first use from
    settings.firebase_credentials, which may hold either the service account
    JSON itself or a path to it. verify_id_token is a blocking call (it may
    fetch Google's public certificates), so it runs in a worker thread.
    """

    APP_NAME = "notebox"

    def __init__(
        self,
        credentials_source: Optional[str] = None,
        project_id: Optional[str] = None,
        check_revoked: Optional[bool] = None,
    ):
        self.credentials_source = (
            settings.firebase_credentials if credentials_source is None else credentials_source
        )
        self.project_id = settings.firebase_project_id if project_id is None else project_id
        self.check_revoked = (
            settings.firebase_check_revoked if check_revoked is None else check_revoked
        )
        self._app: Optional[firebase_admin.App] = None
        self._init_lock = threading.Lock()

    def _load_credentials(self) -> credentials.Certificate:
        source = self.credentials_source.strip()
        if source.startswith("{"):
            return credentials.Certificate(json.loads(source))
        return credentials.Certificate(source)

    def _get_app(self) -> firebase_admin.App:
        if self._app is not None:
            return self._app
        if not self.credentials_source:
            raise AuthFailure(context={"cause": "FIREBASE_CREDENTIALS not configured"})
        with self._init_lock:
            if self._app is None:
                self._app = self._initialize_app()
        return self._app

    def _initialize_app(self) -> firebase_admin.App:
        try:
            return firebase_admin.get_app(self.APP_NAME)
        except ValueError:
            pass

        options = {"projectId": self.project_id} if self.project_id else None
        try:
            app = firebase_admin.initialize_app(
                self._load_credentials(), options=options, name=self.APP_NAME
            )
        except Exception as e:
            # Another verifier may have registered the app in the meantime
            try:
                return firebase_admin.get_app(self.APP_NAME)
            except ValueError:
                pass
            logger.error("Firebase Admin SDK initialization failed: %s", e)
            raise AuthFailure(
                context={"cause": "firebase_init", "error_type": type(e).__name__}
            ) from e
        logger.info("Firebase Admin SDK initialized (app=%s)", self.APP_NAME)
        return app

    async def verify(self, token: Optional[str]) -> Identity:
        if not token:
            raise AuthFailure(context={"cause": "missing token"})

        app = self._get_app()
        try:
            claims = await asyncio.to_thread(
                firebase_auth.verify_id_token,
                token,
                app=app,
                check_revoked=self.check_revoked,
            )
        except Exception as e:
            logger.info("Token rejected: %s", type(e).__name__)
            raise AuthFailure(context={"cause": type(e).__name__}) from e

        uid = claims.get("uid") or claims.get("sub")
        if not uid:
            raise AuthFailure(context={"cause": "token has no uid"})
        return Identity(uid=uid, claims=claims)


# ── Singleton Instance ────────────────────────────────────────────────────
# Shared so the Firebase app is initialized once per process
identity_verifier = FirebaseIdentityVerifier()
