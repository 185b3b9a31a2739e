from typing import Annotated

from fastapi import APIRouter, Query

from notekeeper.core.modules.note.models import Note, NoteCreate, NotePage, NoteUpdate, Priority
from notekeeper.web.deps import AppDep
from notekeeper.web.openapi import ErrorResponse

router: APIRouter = APIRouter(tags=["notes"])


def split_tags(tags: list[str] | None) -> list[str] | None:
    """Accept both `?tags=a&tags=b` and `?tags=a,b`."""
    if not tags:
        return None
    return [tag.strip() for value in tags for tag in value.split(",") if tag.strip()]


@router.post(
    "/notes",
    summary="Create new note",
    description="Create a note owned by the given user. Statuses start unset; priority defaults to `low`.",
    operation_id="createNote",
    status_code=201,
    responses={
        201: {"description": "Note created successfully"},
        422: {"description": "Request body failed validation"},
        503: {"model": ErrorResponse, "description": "Storage unavailable"},
    },
)
async def create_note(request: NoteCreate, app: AppDep) -> Note:
    return await app.create_note(request)


@router.get(
    "/notes",
    summary="List notes",
    description="""Get a page of notes, optionally filtered and sorted.

**Filtering** (all given criteria must match):
- `priority` - exact priority
- `color_label` - exact color label
- `tags` - note has at least one of the tags (`?tags=work&tags=home` or `?tags=work,home`)
- `search` - case-insensitive substring of title or content

**Sorting:** `sort_by` is one of `created_at` (default), `updated_at`, `title`, `priority`,
`reminder_at`, `color_label`; `order=asc` sorts ascending, any other value descending.

**Paging:** `page` is zero-based, `limit` is between 0 and 100.""",
    operation_id="listNotes",
    responses={
        200: {"description": "Page of notes with pagination metadata"},
        400: {"model": ErrorResponse, "description": "Invalid page, limit or sort field"},
        503: {"model": ErrorResponse, "description": "Storage unavailable"},
    },
)
async def list_notes(
    app: AppDep,
    page: Annotated[int | None, Query(description="Zero-based page index")] = None,
    limit: Annotated[int | None, Query(description="Maximum notes per page (0-100)")] = None,
    search: Annotated[str | None, Query(description="Text to look for in title or content")] = None,
    priority: Annotated[Priority | None, Query(description="Only notes with this priority")] = None,
    tags: Annotated[list[str] | None, Query(description="Only notes with any of these tags")] = None,
    color_label: Annotated[str | None, Query(description="Only notes with this color label")] = None,
    sort_by: Annotated[str | None, Query(description="Field to sort by")] = None,
    order: Annotated[str | None, Query(description="`asc` or `desc`")] = None,
) -> NotePage:
    return await app.list_notes(
        page=page,
        limit=limit,
        priority=priority,
        tags=split_tags(tags),
        color_label=color_label,
        search=search,
        sort_by=sort_by,
        order=order,
    )


@router.get(
    "/notes/{note_id}",
    summary="Get note by id",
    description="Get a single note by its 24-character hex id.",
    operation_id="getNote",
    responses={
        200: {"description": "Note details"},
        404: {"model": ErrorResponse, "description": "Note not found or id malformed"},
    },
)
async def get_note(note_id: str, app: AppDep) -> Note:
    return await app.get_note(note_id)


@router.put(
    "/notes/{note_id}",
    summary="Update note",
    description="Update the fields present in the body; all other fields keep their values. The owner cannot change.",
    operation_id="updateNote",
    responses={
        200: {"description": "Note updated successfully"},
        404: {"model": ErrorResponse, "description": "Note not found or id malformed"},
        422: {"description": "Request body failed validation"},
    },
)
async def update_note(note_id: str, request: NoteUpdate, app: AppDep) -> Note:
    return await app.update_note(note_id, request)


@router.delete(
    "/notes/{note_id}",
    summary="Delete note",
    description="Delete a note permanently.",
    operation_id="deleteNote",
    status_code=204,
    responses={
        204: {"description": "Note deleted successfully"},
        404: {"model": ErrorResponse, "description": "Note not found or id malformed"},
    },
)
async def delete_note(note_id: str, app: AppDep) -> None:
    await app.delete_note(note_id)
