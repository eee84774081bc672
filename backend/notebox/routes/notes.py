"""
Notebox Backend — Notes Route Handlers
========================================

What:  POST /create, GET /get/{id}, GET /view/{id}, PUT /update, DELETE /delete.
How:   Every handler depends on get_current_user (authentication runs before
       any store access) and delegates to NoteService.
Who:   Called by the notes frontend; mounted under settings.notes_prefix.

Responses use response_model_exclude_unset so a note's `content` key only
appears once the note has been updated.
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends

from notebox.config import settings
from notebox.routes.dependencies import get_current_user, get_note_service
from notebox.schemas.note import (
    CreateNoteRequest,
    DeleteNoteRequest,
    DeleteNoteResponse,
    ErrorResponse,
    NoteOut,
    UpdateNoteRequest,
    UpdateNoteResponse,
)
from notebox.services.note_service import NoteService

logger = logging.getLogger(__name__)

router = APIRouter(prefix=settings.notes_prefix, tags=["Notes"])

ERROR_RESPONSES = {
    400: {"description": "User does not exist", "model": ErrorResponse},
    500: {"description": "Authentication or server error", "model": ErrorResponse},
}


@router.post(
    "/create",
    response_model=NoteOut,
    response_model_exclude_unset=True,
    responses=ERROR_RESPONSES,
    summary="Create a note",
    description=(
        "Creates a note in the given folder ('root' means the caller's root folder) "
        "and appends its id to the folder's note list."
    ),
)
async def create_note(
    payload: CreateNoteRequest,
    user: Dict[str, Any] = Depends(get_current_user),
    service: NoteService = Depends(get_note_service),
) -> Dict[str, Any]:
    return await service.create_note(
        user,
        title=payload.title,
        visibility=payload.visibility,
        folder=payload.folder,
    )


@router.get(
    "/get/{folder_id}",
    response_model=List[NoteOut],
    response_model_exclude_unset=True,
    responses=ERROR_RESPONSES,
    summary="List the caller's notes in a folder",
)
async def list_notes(
    folder_id: str,
    user: Dict[str, Any] = Depends(get_current_user),
    service: NoteService = Depends(get_note_service),
) -> List[Dict[str, Any]]:
    return await service.list_notes(user, folder_id)


@router.get(
    "/view/{note_id}",
    response_model=Optional[NoteOut],
    response_model_exclude_unset=True,
    responses=ERROR_RESPONSES,
    summary="Open one of the caller's notes",
    description="Returns the note, or null if the caller owns no note with this id.",
)
async def view_note(
    note_id: str,
    user: Dict[str, Any] = Depends(get_current_user),
    service: NoteService = Depends(get_note_service),
) -> Optional[Dict[str, Any]]:
    return await service.view_note(user, note_id)


@router.put(
    "/update",
    response_model=UpdateNoteResponse,
    response_model_exclude_unset=True,
    responses=ERROR_RESPONSES,
    summary="Update a note's title and content",
    description="Returns the note as it was before the update under `prev`.",
)
async def update_note(
    payload: UpdateNoteRequest,
    user: Dict[str, Any] = Depends(get_current_user),
    service: NoteService = Depends(get_note_service),
) -> Dict[str, Any]:
    return await service.update_note(
        user,
        note_id=payload.id,
        title=payload.title,
        content=payload.content,
    )


@router.delete(
    "/delete",
    response_model=DeleteNoteResponse,
    responses=ERROR_RESPONSES,
    summary="Delete a note",
    description="Removes the note from its folder and deletes it. Deleting a missing note reports n=0.",
)
async def delete_note(
    payload: DeleteNoteRequest,
    user: Dict[str, Any] = Depends(get_current_user),
    service: NoteService = Depends(get_note_service),
) -> Dict[str, Any]:
    return await service.delete_note(user, note_id=payload.id, folder=payload.folder)
