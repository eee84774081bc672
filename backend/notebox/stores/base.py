"""
Notebox Backend — Abstract Store Interfaces
=============================================

What:  Entity-scoped store contracts used by the services layer.
How:   Each store exposes only the handful of reads/writes the note
       operations need, speaking plain dicts shaped like the API documents.
       Concrete implementations:
           - notebox.stores.sql: async SQLAlchemy, one AsyncSession per request
           - tests/fakes.py:     in-memory dictionaries for unit tests

Contract for implementations:
    - Return copies, never live objects the caller could mutate.
    - Let driver exceptions propagate; the services layer converts them
      into StoreFailure.
    - Writes must be visible to later reads through the same handles.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

Document = Dict[str, Any]


@dataclass(frozen=True)
class DeleteResult:
    """
    Outcome of a delete.

    acknowledged: the store accepted and executed the operation
    deleted_count: how many records matched and were removed (0 or 1)
    """

    acknowledged: bool
    deleted_count: int


class UserStore(ABC):
    """Read-only directory of local user records."""

    @abstractmethod
    async def find_by_uid(self, uid: str) -> Optional[Document]:
        """Returns `{"uid", "root"}` for the user, or None."""
        ...


class FolderStore(ABC):
    """Folder membership lists."""

    @abstractmethod
    async def get(self, folder_id: str) -> Optional[Document]:
        """Returns `{"id", "notes"}` or None."""
        ...

    @abstractmethod
    async def push_note(self, folder_id: str, note_id: str) -> None:
        """
        Appends note_id to the folder's notes.

        A missing folder is a no-op, not an error.
        """
        ...

    @abstractmethod
    async def pull_note(self, folder_id: str, note_id: str) -> None:
        """
        Removes every occurrence of note_id from the folder's notes.

        A missing folder or an absent id is a no-op.
        """
        ...


class NoteStore(ABC):
    """Note records."""

    @abstractmethod
    async def insert(self, note: Document) -> Document:
        """Stores a new note and returns it as stored."""
        ...

    @abstractmethod
    async def find(self, owner: str, folder: str) -> List[Document]:
        """All notes with this owner and folder, in insertion order."""
        ...

    @abstractmethod
    async def find_one(self, owner: str, note_id: str) -> Optional[Document]:
        """The note with this id if it belongs to owner, else None."""
        ...

    @abstractmethod
    async def find_one_and_update(
        self, note_id: str, title: Optional[str], content: Optional[str]
    ) -> Optional[Document]:
        """
        Sets title and content on the note with this id.

        Returns the note as it was BEFORE the update, or None if no note
        has this id (in which case nothing is written).
        """
        ...

    @abstractmethod
    async def delete_one(self, note_id: str) -> DeleteResult:
        """Deletes the note with this id, if any."""
        ...
