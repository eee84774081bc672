"""
Notebox Backend — User SQLAlchemy Model
=========================================

What:  ORM model for the `users` table.
Who:   Read by SqlUserStore during authentication; rows are created by the
       account system that owns sign-up, never by this service.
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from notebox.database import Base


class User(Base):
    """A registered user and the id of their root folder."""

    __tablename__ = "users"

    # External identity (Firebase uid)
    uid: Mapped[str] = mapped_column(
        String(128),
        primary_key=True,
        comment="Identity-provider uid",
    )

    root: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        comment="Id of the user's root folder",
    )

    def to_dict(self) -> dict:
        return {"uid": self.uid, "root": self.root}

    def __repr__(self) -> str:
        return f"<User(uid='{self.uid}', root='{self.root}')>"
