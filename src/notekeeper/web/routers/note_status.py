"""Status endpoints: pin, archive, trash, soft delete, color and reminder."""

from fastapi import APIRouter

from notekeeper.core.modules.note.models import ColorChange, Note, ReminderChange, ToggleField
from notekeeper.web.deps import AppDep
from notekeeper.web.openapi import ErrorResponse

router: APIRouter = APIRouter(tags=["note-status"])

NOT_FOUND_RESPONSE = {404: {"model": ErrorResponse, "description": "Note not found or id malformed"}}


@router.delete(
    "/notes/{note_id}/soft-delete",
    summary="Move note to trash",
    description="Mark a note as trashed without deleting it. Repeating the call keeps it trashed.",
    operation_id="softDeleteNote",
    responses={200: {"description": "Trashed note"}, **NOT_FOUND_RESPONSE},
)
async def soft_delete_note(note_id: str, app: AppDep) -> Note:
    return await app.soft_delete_note(note_id)


@router.patch(
    "/notes/{note_id}/pin",
    summary="Toggle pin",
    operation_id="togglePinNote",
    responses={200: {"description": "Note with flipped pin status"}, **NOT_FOUND_RESPONSE},
)
async def toggle_pin(note_id: str, app: AppDep) -> Note:
    return await app.toggle_note_field(note_id, ToggleField.PINNED)


@router.patch(
    "/notes/{note_id}/archive",
    summary="Toggle archive",
    operation_id="toggleArchiveNote",
    responses={200: {"description": "Note with flipped archive status"}, **NOT_FOUND_RESPONSE},
)
async def toggle_archive(note_id: str, app: AppDep) -> Note:
    return await app.toggle_note_field(note_id, ToggleField.ARCHIVED)


@router.patch(
    "/notes/{note_id}/trash",
    summary="Toggle trash",
    operation_id="toggleTrashNote",
    responses={200: {"description": "Note with flipped trash status"}, **NOT_FOUND_RESPONSE},
)
async def toggle_trash(note_id: str, app: AppDep) -> Note:
    return await app.toggle_note_field(note_id, ToggleField.TRASHED)


@router.patch(
    "/notes/{note_id}/color",
    summary="Change color",
    description="Set the color label to a hex color such as `#FF0000` or `#F00`.",
    operation_id="changeNoteColor",
    responses={200: {"description": "Note with the new color"}, **NOT_FOUND_RESPONSE},
)
async def change_color(note_id: str, request: ColorChange, app: AppDep) -> Note:
    return await app.change_note_color(note_id, request.color_label)


@router.patch(
    "/notes/{note_id}/reminder",
    summary="Set reminder",
    description="Store the time at which the note should be brought back to attention.",
    operation_id="setNoteReminder",
    responses={200: {"description": "Note with the new reminder"}, **NOT_FOUND_RESPONSE},
)
async def set_reminder(note_id: str, request: ReminderChange, app: AppDep) -> Note:
    return await app.set_note_reminder(note_id, request.date)
