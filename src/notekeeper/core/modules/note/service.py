from datetime import datetime
from typing import Any

import structlog

from notekeeper.core.core import Service
from notekeeper.core.modules.note.models import Note, NoteCreate, NotePage, NoteUpdate, Priority, ToggleField
from notekeeper.core.modules.note.query import build_note_query, build_note_sort
from notekeeper.core.modules.note.store import NoteStore
from notekeeper.core.pagination import MAX_PAGE_LIMIT, Pagination, PaginationDefaults
from notekeeper.errors import InvalidArgumentError, InvalidIdError, NotFoundError
from notekeeper.utils import is_object_id, to_utc_millis

logger = structlog.get_logger(__name__)


class NoteService(Service):
    """Note lifecycle: creation, queries, partial updates, status toggles and deletion."""

    def __init__(self, store: NoteStore, pagination: PaginationDefaults | None = None) -> None:
        super().__init__()
        self._store = store
        self._pagination = pagination or PaginationDefaults()

    async def on_start(self) -> None:
        await self._store.on_start()

    async def on_stop(self) -> None:
        await self._store.on_stop()

    async def create_note(self, data: NoteCreate) -> Note:
        """Create note; owner presence and format are checked by the request schema."""
        note = await self._store.create(data)
        logger.debug("create_note", note_id=note.id, owner=note.owner)
        return note

    async def list_notes(
        self,
        page: int | None = None,
        limit: int | None = None,
        priority: Priority | None = None,
        tags: list[str] | None = None,
        color_label: str | None = None,
        search: str | None = None,
        sort_by: str | None = None,
        order: str | None = None,
    ) -> NotePage:
        """Get one page of notes matching all given criteria.

        Args:
            page: Zero-based page index, defaults to the configured page
            limit: Page size in [0, 100], defaults to the configured limit
            priority: Only notes with this priority
            tags: Only notes carrying at least one of these tags
            color_label: Only notes with this color label
            search: Only notes whose title or content contains this text, ignoring case
            sort_by: Field to sort on, created_at by default
            order: "asc" for ascending, anything else sorts descending

        Returns:
            The page of notes with pagination metadata

        Raises:
            InvalidArgumentError: If page is negative, limit is out of range or sort_by is unknown
        """
        page = self._pagination.page if page is None else page
        limit = self._pagination.limit if limit is None else limit
        if page < 0:
            raise InvalidArgumentError("Page number must be non-negative")
        if limit < 0 or limit > MAX_PAGE_LIMIT:
            raise InvalidArgumentError(f"Limit must be between 0 and {MAX_PAGE_LIMIT}")

        query = build_note_query(priority=priority, color_label=color_label, tags=tags, search=search)
        sort = build_note_sort(sort_by, order)
        skip = page * limit

        notes = await self._store.find_many(query, sort, skip, limit)
        # Total covers every match, not just this page
        total = await self._store.count(query)

        logger.debug(
            "list_notes",
            query=query.model_dump(exclude_none=True),
            sort=sort.model_dump(),
            page=page,
            limit=limit,
            total=total,
            returned=len(notes),
        )
        return NotePage(notes=notes, pagination=Pagination.compute(page, limit, total))

    async def get_note(self, note_id: str) -> Note:
        """Get note by ID."""
        self._check_note_id(note_id)
        note = await self._store.find_by_id(note_id)
        if note is None:
            raise NotFoundError(f"Note not found: {note_id}")
        return note

    async def update_note(self, note_id: str, data: NoteUpdate) -> Note:
        """Update only the fields set in data (partial update)."""
        return await self._update_fields(note_id, data.to_fields())

    async def delete_note(self, note_id: str) -> None:
        """Delete note permanently."""
        self._check_note_id(note_id)
        note = await self._store.delete_by_id(note_id)
        if note is None:
            raise NotFoundError(f"Note not found: {note_id}")
        logger.debug("delete_note", note_id=note_id)

    async def soft_delete_note(self, note_id: str) -> Note:
        """Move note to trash; repeating it keeps the note trashed."""
        return await self._update_fields(note_id, {ToggleField.TRASHED.attribute: True})

    async def toggle_field(self, note_id: str, field: ToggleField) -> Note:
        """Flip a boolean status of a note.

        Reads then writes without isolation: concurrent toggles of the same note
        race and the last write wins.
        """
        note = await self.get_note(note_id)
        value = not getattr(note, field.attribute)
        logger.debug("toggle_field", note_id=note_id, field=field.attribute, value=value)
        return await self._update_fields(note_id, {field.attribute: value})

    async def change_color(self, note_id: str, color_label: str) -> Note:
        """Set the color label of a note."""
        return await self._update_fields(note_id, {"color_label": color_label})

    async def set_reminder(self, note_id: str, reminder_at: datetime) -> Note:
        """Set the reminder timestamp of a note."""
        return await self._update_fields(note_id, {"reminder_at": to_utc_millis(reminder_at)})

    async def _update_fields(self, note_id: str, fields: dict[str, Any]) -> Note:
        self._check_note_id(note_id)
        note = await self._store.update_by_id(note_id, fields)
        if note is None:
            raise NotFoundError(f"Note not found: {note_id}")
        return note

    @staticmethod
    def _check_note_id(note_id: str) -> None:
        if not is_object_id(note_id):
            raise InvalidIdError(f"Invalid note id: {note_id}")
