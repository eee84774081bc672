"""
Notebox Backend — Pydantic Request/Response Schemas
=====================================================

What:  Pydantic models defining the API contract between clients and backend.
How:   FastAPI uses these models to validate request bodies, serialize responses,
       and generate the OpenAPI documentation.

Malformed bodies:
    A body that fails validation is answered like any other unexpected
    failure (500, "Internal server error"); see notebox.main.
"""

from typing import Optional

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class CreateNoteRequest(BaseModel):
    """Body of POST /create."""
    title: str = Field(description="Note title")
    visibility: str = Field(description="Visibility label, e.g. 'private' or 'public'")
    folder: str = Field(description="Target folder id, or 'root' for the user's root folder")


class UpdateNoteRequest(BaseModel):
    """Body of PUT /update. Only title and content are writable."""
    id: str = Field(description="Id of the note to update")
    title: Optional[str] = Field(default=None, description="New title")
    content: Optional[str] = Field(default=None, description="New content")


class DeleteNoteRequest(BaseModel):
    """Body of DELETE /delete."""
    id: str = Field(description="Id of the note to delete")
    folder: str = Field(description="Folder the note is filed in ('root' allowed)")


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class NoteOut(BaseModel):
    """
    A stored note.

    `content` is absent (not null) until the note has been updated once;
    routes serialize with exclude_unset to keep it that way.
    """
    id: str = Field(description="Content hash of the note's initial fields")
    owner: str = Field(description="uid of the creating user")
    title: Optional[str] = None
    visibility: Optional[str] = None
    folder: str = Field(description="Folder the note is filed in")
    timestamp: int = Field(description="Creation time, epoch milliseconds")
    content: Optional[str] = None


class UpdateNoteResponse(BaseModel):
    """Response of PUT /update: the note as it was before the update."""
    prev: Optional[NoteOut] = Field(description="Previous note state, null if no note matched")


class DeleteNoteResponse(BaseModel):
    """Response of DELETE /delete."""
    reason: str = Field(description="Human-readable outcome, e.g. 'Success! 1 documents deleted'")
    n: int = Field(description="Number of documents deleted (0 or 1)")


# ══════════════════════════════════════════════════════════════════════════
# Error / Health Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    Error body returned by every endpoint on failure.

    Example:
        {"reason": "User does not exist"}
    """
    reason: str = Field(description="Human-readable error description")


class HealthResponse(BaseModel):
    """Health check response showing service and database status."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
