"""
Notebox Backend — SQLAlchemy Store Implementations
====================================================

What:  Store handles backed by async SQLAlchemy.
How:   Every handle wraps the request's AsyncSession. Writes are flushed
       immediately so constraint violations (e.g. a duplicate note id)
       surface inside the operation that caused them; the commit itself
       happens once per request in notebox.database.get_db_session.

Query plans:
    find:          SELECT ... WHERE owner = :uid AND folder = :folder ORDER BY pk
                   → idx_notes_owner_folder
    find_one:      SELECT ... WHERE owner = :uid AND id = :id
                   → unique index on id
    push/pull:     SELECT ... FROM folders WHERE id = :id FOR UPDATE, then UPDATE
                   (FOR UPDATE is ignored on SQLite)
"""

import logging
from typing import List, Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from notebox.models.folder import Folder
from notebox.models.note import Note
from notebox.models.user import User
from notebox.stores.base import (
    DeleteResult,
    Document,
    FolderStore,
    NoteStore,
    UserStore,
)

logger = logging.getLogger(__name__)


class SqlUserStore(UserStore):
    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_by_uid(self, uid: str) -> Optional[Document]:
        result = await self.session.execute(select(User).where(User.uid == uid))
        user = result.scalar_one_or_none()
        return user.to_dict() if user else None


class SqlFolderStore(FolderStore):
    def __init__(self, session: AsyncSession):
        self.session = session

    async def _locked(self, folder_id: str) -> Optional[Folder]:
        result = await self.session.execute(
            select(Folder).where(Folder.id == folder_id).with_for_update()
        )
        return result.scalar_one_or_none()

    async def get(self, folder_id: str) -> Optional[Document]:
        result = await self.session.execute(select(Folder).where(Folder.id == folder_id))
        folder = result.scalar_one_or_none()
        return folder.to_dict() if folder else None

    async def push_note(self, folder_id: str, note_id: str) -> None:
        folder = await self._locked(folder_id)
        if folder is None:
            logger.warning("push_note: folder %s does not exist", folder_id)
            return
        folder.notes = [*(folder.notes or []), note_id]
        await self.session.flush()

    async def pull_note(self, folder_id: str, note_id: str) -> None:
        folder = await self._locked(folder_id)
        if folder is None:
            return
        remaining = [n for n in (folder.notes or []) if n != note_id]
        if len(remaining) != len(folder.notes or []):
            folder.notes = remaining
            await self.session.flush()


class SqlNoteStore(NoteStore):
    def __init__(self, session: AsyncSession):
        self.session = session

    async def insert(self, note: Document) -> Document:
        row = Note(**note)
        self.session.add(row)
        await self.session.flush()
        return row.to_dict()

    async def find(self, owner: str, folder: str) -> List[Document]:
        result = await self.session.execute(
            select(Note)
            .where(Note.owner == owner, Note.folder == folder)
            .order_by(Note.pk)
        )
        return [note.to_dict() for note in result.scalars().all()]

    async def find_one(self, owner: str, note_id: str) -> Optional[Document]:
        result = await self.session.execute(
            select(Note).where(Note.owner == owner, Note.id == note_id)
        )
        note = result.scalar_one_or_none()
        return note.to_dict() if note else None

    async def find_one_and_update(
        self, note_id: str, title: Optional[str], content: Optional[str]
    ) -> Optional[Document]:
        result = await self.session.execute(
            select(Note).where(Note.id == note_id).with_for_update()
        )
        note = result.scalar_one_or_none()
        if note is None:
            return None
        previous = note.to_dict()
        note.title = title
        note.content = content
        await self.session.flush()
        return previous

    async def delete_one(self, note_id: str) -> DeleteResult:
        result = await self.session.execute(delete(Note).where(Note.id == note_id))
        # A DELETE that returns without raising was executed by the database
        return DeleteResult(acknowledged=True, deleted_count=result.rowcount or 0)
