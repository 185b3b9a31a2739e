from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import datetime

import structlog

from notekeeper.config import Config
from notekeeper.core.core import Core
from notekeeper.core.modules.note.models import Note, NoteCreate, NotePage, NoteUpdate, Priority, ToggleField
from notekeeper.core.modules.note.store import NoteStore

logger = structlog.get_logger(__name__)


class App:
    """Facade for all application operations, logs each request before delegating to Core."""

    def __init__(self, config: Config, store: NoteStore | None = None) -> None:
        self._core = Core(config, store)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Application lifespan management - delegates to Core."""
        async with self._core.lifespan():
            yield

    async def create_note(self, data: NoteCreate) -> Note:
        """Create a new note."""
        logger.info("create_note", title=data.title, owner=data.owner)
        return await self._core.services.note.create_note(data)

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
        """Get a filtered, sorted page of notes."""
        logger.info("list_notes", page=page, limit=limit)
        return await self._core.services.note.list_notes(
            page=page,
            limit=limit,
            priority=priority,
            tags=tags,
            color_label=color_label,
            search=search,
            sort_by=sort_by,
            order=order,
        )

    async def get_note(self, note_id: str) -> Note:
        """Get a note by id."""
        logger.info("get_note", note_id=note_id)
        return await self._core.services.note.get_note(note_id)

    async def update_note(self, note_id: str, data: NoteUpdate) -> Note:
        """Partially update a note."""
        logger.info("update_note", note_id=note_id, fields=sorted(data.model_fields_set))
        return await self._core.services.note.update_note(note_id, data)

    async def delete_note(self, note_id: str) -> None:
        """Delete a note permanently."""
        logger.info("delete_note", note_id=note_id)
        await self._core.services.note.delete_note(note_id)

    async def soft_delete_note(self, note_id: str) -> Note:
        """Move a note to trash."""
        logger.info("soft_delete_note", note_id=note_id)
        return await self._core.services.note.soft_delete_note(note_id)

    async def toggle_note_field(self, note_id: str, field: ToggleField) -> Note:
        """Flip pinned, archived or trashed status of a note."""
        logger.info("toggle_note_field", note_id=note_id, field=field.value)
        return await self._core.services.note.toggle_field(note_id, field)

    async def change_note_color(self, note_id: str, color_label: str) -> Note:
        """Change the color label of a note."""
        logger.info("change_note_color", note_id=note_id, color_label=color_label)
        return await self._core.services.note.change_color(note_id, color_label)

    async def set_note_reminder(self, note_id: str, reminder_at: datetime) -> Note:
        """Set the reminder of a note."""
        logger.info("set_note_reminder", note_id=note_id, reminder_at=reminder_at.isoformat())
        return await self._core.services.note.set_reminder(note_id, reminder_at)
