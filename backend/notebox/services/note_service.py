"""
Notebox Backend — Note Service (Business Logic)
=================================================

What:  The five note operations: create, list, view, update, delete.
How:   Each operation receives the authenticated user record and works
       through the injected store handles. Store exceptions that are not
       already NoteboxErrors are wrapped in StoreFailure.
Who:   Called by route handlers after the authentication dependency ran.

Folder/note consistency:
    create: folder.push(id) then notes.insert(note)
    delete: folder.pull(id) then notes.delete(id)
    With the SQL stores both writes share the request transaction, so a
    failure in the second write rolls back the first.

Note ids:
    A note's id is the SHA-1 of its initial fields (title, visibility,
    folder, timestamp, owner). The timestamp has millisecond resolution;
    two identical creates within the same millisecond hash to the same id
    and the second insert fails on the unique index.
"""

import hashlib
import json
import logging
import time
from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterator, List, Optional

from notebox.exceptions import NoteboxError, StoreFailure, Unacknowledged
from notebox.stores.base import Document, FolderStore, NoteStore

logger = logging.getLogger(__name__)

ROOT_FOLDER = "root"


def now_millis() -> int:
    return int(time.time() * 1000)


def note_id_for(record: Dict[str, Any]) -> str:
    """
    Content hash of an assembled note record.

    Canonical JSON (sorted keys, compact separators) makes the digest
    independent of dict insertion order.
    """
    canonical = json.dumps(record, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    return hashlib.sha1(canonical.encode("utf-8")).hexdigest()


def resolve_folder(folder: Optional[str], user: Dict[str, Any]) -> Optional[str]:
    """Maps the "root" sentinel to the user's root folder id."""
    if folder == ROOT_FOLDER:
        return user["root"]
    return folder


@contextmanager
def _store_errors(operation: str, **context: Any) -> Iterator[None]:
    try:
        yield
    except NoteboxError:
        raise
    except Exception as e:
        logger.error("Store error during %s (%s): %s", operation, context, e, exc_info=True)
        raise StoreFailure(
            context={"operation": operation, "error_type": type(e).__name__, **context}
        ) from e


class NoteService:
    """
    Note operations over injected stores.

    Args:
        notes:   NoteStore handle
        folders: FolderStore handle
        clock:   returns the current time in epoch milliseconds
    """

    def __init__(
        self,
        notes: NoteStore,
        folders: FolderStore,
        clock: Callable[[], int] = now_millis,
    ):
        self.notes = notes
        self.folders = folders
        self.clock = clock

    async def create_note(
        self,
        user: Dict[str, Any],
        title: Optional[str],
        visibility: Optional[str],
        folder: Optional[str],
    ) -> Document:
        """
        Creates a note in `folder` (or the user's root) and files it there.

        Returns the stored note.
        """
        folder = resolve_folder(folder, user)
        note: Dict[str, Any] = {
            "title": title,
            "visibility": visibility,
            "folder": folder,
            "timestamp": self.clock(),
        }
        note["owner"] = user["uid"]
        note["id"] = note_id_for(note)

        with _store_errors("create_note", note_id=note["id"], folder=folder):
            await self.folders.push_note(folder, note["id"])
            stored = await self.notes.insert(note)

        logger.info("Note %s created in folder %s by %s", note["id"], folder, user["uid"])
        return stored

    async def list_notes(self, user: Dict[str, Any], folder: str) -> List[Document]:
        """Notes the user owns in `folder`, in insertion order."""
        folder = resolve_folder(folder, user)
        with _store_errors("list_notes", folder=folder):
            return await self.notes.find(owner=user["uid"], folder=folder)

    async def view_note(self, user: Dict[str, Any], note_id: str) -> Optional[Document]:
        """The user's note with this id, or None."""
        with _store_errors("view_note", note_id=note_id):
            return await self.notes.find_one(owner=user["uid"], note_id=note_id)

    async def update_note(
        self,
        user: Dict[str, Any],
        note_id: str,
        title: Optional[str],
        content: Optional[str],
    ) -> Dict[str, Optional[Document]]:
        """
        Rewrites title and content of the note with this id.

        Ownership is not checked: any authenticated user holding the id can
        update the note. Returns `{"prev": <note before the update or None>}`.
        """
        with _store_errors("update_note", note_id=note_id):
            previous = await self.notes.find_one_and_update(note_id, title, content)

        if previous is None:
            logger.info("Update by %s matched no note (id=%s)", user["uid"], note_id)
        return {"prev": previous}

    async def delete_note(self, user: Dict[str, Any], note_id: str, folder: str) -> Dict[str, Any]:
        """
        Removes the note from its folder's list and deletes it.

        Deleting an id that does not exist still succeeds with n=0.

        Raises:
            Unacknowledged: the store did not execute the delete
        """
        folder = resolve_folder(folder, user)
        with _store_errors("delete_note", note_id=note_id, folder=folder):
            await self.folders.pull_note(folder, note_id)
            result = await self.notes.delete_one(note_id)

        if not result.acknowledged:
            raise Unacknowledged(context={"note_id": note_id})

        n = result.deleted_count
        logger.info("Delete of %s by %s removed %d document(s)", note_id, user["uid"], n)
        return {"reason": f"Success! {n} documents deleted", "n": n}
