"""
Notebox Backend — Folder SQLAlchemy Model
===========================================

What:  ORM model for the `folders` table.

Table Design Rationale:
    - notes is a JSON array of note ids, kept in insertion order.
      Create appends to it, delete removes by value. Nothing else reads the
      order, but it is preserved so clients can show folder contents as added.
    - The list is always replaced wholesale (never mutated in place) so the
      ORM sees the change without MutableList tracking.
"""

from typing import List

from sqlalchemy import JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from notebox.database import Base


class Folder(Base):
    """A folder holding an ordered list of note ids."""

    __tablename__ = "folders"

    id: Mapped[str] = mapped_column(
        String(64),
        primary_key=True,
        comment="Folder identifier",
    )

    notes: Mapped[List[str]] = mapped_column(
        JSON,
        nullable=False,
        default=list,
        comment="Ordered ids of the notes filed in this folder",
    )

    def to_dict(self) -> dict:
        return {"id": self.id, "notes": list(self.notes or [])}

    def __repr__(self) -> str:
        return f"<Folder(id='{self.id}', notes={len(self.notes or [])})>"
