"""Persistence gateways for notes.

Gateways translate calls into storage operations and never apply business
rules: they trust ids and field sets handed in by the service.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import structlog
from bson import ObjectId
from pymongo import ReturnDocument
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import PyMongoError

from notekeeper.core.modules.note.models import Note, NoteCreate
from notekeeper.core.modules.note.query import NoteQuery, NoteSort, SortDirection, build_mongo_query, build_mongo_sort
from notekeeper.errors import StorageError
from notekeeper.utils import next_timestamp, now

logger = structlog.get_logger(__name__)


class NoteStore(ABC):
    """Async CRUD access to the note collection."""

    async def on_start(self) -> None:
        """Prepare storage on application startup."""

    async def on_stop(self) -> None:
        """Release storage resources on application shutdown."""

    @abstractmethod
    async def create(self, data: NoteCreate) -> Note:
        """Persist a new note and return it with id and timestamps assigned."""

    @abstractmethod
    async def find_by_id(self, note_id: str) -> Note | None:
        """Get a note, or None when no note has this id."""

    @abstractmethod
    async def find_many(self, query: NoteQuery, sort: NoteSort, skip: int, limit: int) -> list[Note]:
        """Get at most `limit` matching notes in sort order, after skipping `skip`."""

    @abstractmethod
    async def count(self, query: NoteQuery) -> int:
        """Count notes matching the query."""

    @abstractmethod
    async def update_by_id(self, note_id: str, fields: dict[str, Any]) -> Note | None:
        """Merge fields into a note, move updated_at strictly forward and return the note after the update."""

    @abstractmethod
    async def delete_by_id(self, note_id: str) -> Note | None:
        """Remove a note and return its last state."""


@contextmanager
def _storage_errors(operation: str) -> Iterator[None]:
    try:
        yield
    except PyMongoError as e:
        logger.warning("storage_error", operation=operation, error=str(e))
        raise StorageError(f"Storage operation '{operation}' failed") from e


class MongoNoteStore(NoteStore):
    """Notes kept in the MongoDB `notes` collection."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        self._collection = database.get_collection("notes")

    async def on_start(self) -> None:
        """Create indexes for default ordering and common filters."""
        with _storage_errors("create_index"):
            await self._collection.create_index([("created_at", -1)])
            await self._collection.create_index([("owner", 1)])
            await self._collection.create_index([("tags", 1)])

    async def create(self, data: NoteCreate) -> Note:
        timestamp = now()
        note = Note(**data.model_dump(), created_at=timestamp, updated_at=timestamp)
        doc = note.to_mongo()
        doc["owner"] = ObjectId(note.owner)
        with _storage_errors("create"):
            await self._collection.insert_one(doc)
        return note

    async def find_by_id(self, note_id: str) -> Note | None:
        with _storage_errors("find_by_id"):
            doc = await self._collection.find_one({"_id": ObjectId(note_id)})
        return Note.model_validate(doc) if doc else None

    async def find_many(self, query: NoteQuery, sort: NoteSort, skip: int, limit: int) -> list[Note]:
        # limit(0) means "no limit" to MongoDB
        if limit == 0:
            return []
        cursor = self._collection.find(build_mongo_query(query)).sort(build_mongo_sort(sort)).skip(skip).limit(limit)
        with _storage_errors("find_many"):
            return await Note.list_cursor(cursor)

    async def count(self, query: NoteQuery) -> int:
        with _storage_errors("count"):
            return await self._collection.count_documents(build_mongo_query(query))

    async def update_by_id(self, note_id: str, fields: dict[str, Any]) -> Note | None:
        # Pipeline update: updated_at moves at least 1 ms past the stored value
        changes: dict[str, Any] = {name: {"$literal": value} for name, value in fields.items()}
        changes["updated_at"] = {"$max": [now(), {"$add": ["$updated_at", 1]}]}
        with _storage_errors("update_by_id"):
            doc = await self._collection.find_one_and_update(
                {"_id": ObjectId(note_id)},
                [{"$set": changes}],
                return_document=ReturnDocument.AFTER,
            )
        return Note.model_validate(doc) if doc else None

    async def delete_by_id(self, note_id: str) -> Note | None:
        with _storage_errors("delete_by_id"):
            doc = await self._collection.find_one_and_delete({"_id": ObjectId(note_id)})
        return Note.model_validate(doc) if doc else None


class MemoryNoteStore(NoteStore):
    """Notes kept in a process-local dict, with the same semantics as MongoNoteStore.

    Nothing survives a restart.
    """

    def __init__(self) -> None:
        self._notes: dict[str, Note] = {}

    async def create(self, data: NoteCreate) -> Note:
        timestamp = now()
        note = Note(**data.model_dump(), created_at=timestamp, updated_at=timestamp)
        self._notes[note.id] = note
        return note.model_copy(deep=True)

    async def find_by_id(self, note_id: str) -> Note | None:
        note = self._notes.get(note_id)
        return note.model_copy(deep=True) if note else None

    async def find_many(self, query: NoteQuery, sort: NoteSort, skip: int, limit: int) -> list[Note]:
        matched = [note for note in self._notes.values() if query.matches(note)]

        # Missing values sort first ascending and last descending, as in MongoDB
        def sort_key(note: Note) -> tuple[bool, Any, str]:
            value = getattr(note, sort.field)
            return value is not None, value, note.id

        matched.sort(key=sort_key, reverse=sort.direction == SortDirection.DESC)
        return [note.model_copy(deep=True) for note in matched[skip : skip + limit]]

    async def count(self, query: NoteQuery) -> int:
        return sum(1 for note in self._notes.values() if query.matches(note))

    async def update_by_id(self, note_id: str, fields: dict[str, Any]) -> Note | None:
        note = self._notes.get(note_id)
        if note is None:
            return None
        updated = note.model_copy(update={**fields, "updated_at": next_timestamp(note.updated_at)})
        self._notes[note_id] = updated
        return updated.model_copy(deep=True)

    async def delete_by_id(self, note_id: str) -> Note | None:
        return self._notes.pop(note_id, None)
