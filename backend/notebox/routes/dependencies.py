"""
Notebox Backend — Route Dependencies
======================================

What:  FastAPI dependency providers that assemble stores and services per request.
How:   Each store provider wraps the request's AsyncSession (FastAPI caches
       get_db_session within a request, so all stores share one transaction).
       The session is function-scoped: its commit completes before the
       response is sent, so a failed commit still becomes a 500.
       Tests replace the providers through app.dependency_overrides.

Dependency graph:
    get_current_user ─┬─ get_identity_verifier
                      └─ get_user_store ───┐
    get_note_service ─┬─ get_note_store ───┼─ get_db_session
                      └─ get_folder_store ─┘
"""

from typing import Any, Dict, Optional

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from notebox.database import get_db_session
from notebox.services.auth_service import AuthService
from notebox.services.identity import IdentityVerifier, identity_verifier
from notebox.services.note_service import NoteService
from notebox.stores.base import FolderStore, NoteStore, UserStore
from notebox.stores.sql import SqlFolderStore, SqlNoteStore, SqlUserStore


def get_identity_verifier() -> IdentityVerifier:
    return identity_verifier


def get_user_store(db: AsyncSession = Depends(get_db_session, scope="function")) -> UserStore:
    return SqlUserStore(db)


def get_folder_store(db: AsyncSession = Depends(get_db_session, scope="function")) -> FolderStore:
    return SqlFolderStore(db)


def get_note_store(db: AsyncSession = Depends(get_db_session, scope="function")) -> NoteStore:
    return SqlNoteStore(db)


async def get_current_user(
    authorization: Optional[str] = Header(default=None),
    verifier: IdentityVerifier = Depends(get_identity_verifier),
    users: UserStore = Depends(get_user_store),
) -> Dict[str, Any]:
    """
    Authenticates the request; resolves to the caller's user record.

    Raises AuthFailure / UserNotFound / StoreFailure, which the global
    exception handlers turn into `{"reason": ...}` responses.
    """
    return await AuthService(verifier, users).authenticate(authorization)


def get_note_service(
    notes: NoteStore = Depends(get_note_store),
    folders: FolderStore = Depends(get_folder_store),
) -> NoteService:
    return NoteService(notes=notes, folders=folders)
