"""
Notebox Backend — Stores Package
==================================

What:  Entity-scoped persistence handles (users, folders, notes).
Why:   Services receive store handles at construction instead of reaching
       for global models, so any backend (SQL, in-memory) can be swapped in.

    - base.py: abstract UserStore / FolderStore / NoteStore, DeleteResult
    - sql.py:  async SQLAlchemy implementations over a request session
"""

from notebox.stores.base import DeleteResult, FolderStore, NoteStore, UserStore

__all__ = ["DeleteResult", "FolderStore", "NoteStore", "UserStore"]
