"""
Notebox Backend — Note SQLAlchemy Model
=========================================

What:  ORM model representing the `notes` table.
Who:   Used by SqlNoteStore for CRUD operations.
When:  Instantiated when creating new notes; queried when listing/fetching notes.

Table Design Rationale:
    - pk: Surrogate autoincrement key. Gives listing a stable insertion order
      and keeps the content-hash id out of the clustered index.
    - id: SHA-1 content hash of the note's initial fields (see
      notebox.services.note_service.note_id_for). UNIQUE, so two creates
      that hash identically fail instead of overwriting each other.
    - timestamp: Creation time in epoch milliseconds (BIGINT).
    - content: NULL until the first update.

    Index on (owner, folder):
        Serves the folder listing query, the most common read.
"""

from typing import Any, Dict, Optional

from sqlalchemy import BigInteger, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from notebox.database import Base

# Fields exposed through the API, in response order
NOTE_FIELDS = ("id", "owner", "title", "visibility", "folder", "timestamp", "content")


class Note(Base):
    """
    A note filed in a folder and owned by one user.

    Lifecycle:
        1. Created by POST /create (id computed from the initial fields)
        2. title/content rewritten by PUT /update; every other column is
           fixed after creation
        3. Removed by DELETE /delete
    """

    __tablename__ = "notes"

    pk: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    id: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        unique=True,
        comment="Content hash of the initial note fields",
    )

    owner: Mapped[str] = mapped_column(
        String(128),
        nullable=False,
        comment="uid of the creating user",
    )

    title: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    visibility: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)

    folder: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        comment="Id of the folder this note is filed in",
    )

    timestamp: Mapped[int] = mapped_column(
        BigInteger,
        nullable=False,
        comment="Creation time, epoch milliseconds",
    )

    content: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
        default=None,
        comment="Note body; set by update",
    )

    __table_args__ = (
        Index("idx_notes_owner_folder", "owner", "folder"),
    )

    def to_dict(self) -> Dict[str, Any]:
        """API representation; `content` is omitted until it has been set."""
        data = {field: getattr(self, field) for field in NOTE_FIELDS}
        if data["content"] is None:
            data.pop("content")
        return data

    def __repr__(self) -> str:
        return f"<Note(id='{self.id}', owner='{self.owner}', folder='{self.folder}')>"
