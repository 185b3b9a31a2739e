"""Storage-neutral listing specification and its MongoDB translation."""

import re
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field

from notekeeper.core.modules.note.models import Note, Priority
from notekeeper.errors import InvalidArgumentError


class SortDirection(StrEnum):
    ASC = "asc"
    DESC = "desc"


# Note attributes a listing may be ordered by
SORTABLE_FIELDS = frozenset({"created_at", "updated_at", "title", "priority", "reminder_at", "color_label"})
DEFAULT_SORT_FIELD = "created_at"


class NoteQuery(BaseModel):
    """Optional match clauses, combined with AND. An empty query matches every note."""

    priority: Priority | None = Field(None, description="Exact priority")
    color_label: str | None = Field(None, description="Exact color label")
    tags: list[str] | None = Field(None, description="Note carries at least one of these tags")
    search: str | None = Field(None, description="Case-insensitive substring of title or content")

    def matches(self, note: Note) -> bool:
        """Evaluate the query against a note in process."""
        if self.priority is not None and note.priority != self.priority:
            return False
        if self.color_label is not None and note.color_label != self.color_label:
            return False
        if self.tags and not set(self.tags).intersection(note.tags):
            return False
        if self.search:
            # Per-character lowercasing, like the "i" regex option in MongoDB
            needle = self.search.lower()
            if needle not in note.title.lower() and needle not in note.content.lower():
                return False
        return True


class NoteSort(BaseModel):
    """Single sort key with direction."""

    field: str = DEFAULT_SORT_FIELD
    direction: SortDirection = SortDirection.DESC


def build_note_query(
    priority: Priority | None = None,
    color_label: str | None = None,
    tags: list[str] | None = None,
    search: str | None = None,
) -> NoteQuery:
    """Build a query from optional criteria, ignoring blank ones.

    Args:
        priority: Exact priority to match
        color_label: Exact color label to match
        tags: Match notes having any of these tags
        search: Substring to look for in title or content

    Returns:
        The combined query
    """
    cleaned_tags = [tag for tag in tags or [] if tag]
    cleaned_search = (search or "").strip()
    return NoteQuery(
        priority=priority,
        color_label=color_label or None,
        tags=cleaned_tags or None,
        search=cleaned_search or None,
    )


def build_note_sort(sort_by: str | None = None, order: str | None = None) -> NoteSort:
    """Build sort from a field name and an order; only "asc" sorts ascending.

    Raises:
        InvalidArgumentError: If the field cannot be sorted on
    """
    field = sort_by or DEFAULT_SORT_FIELD
    if field not in SORTABLE_FIELDS:
        raise InvalidArgumentError(f"Cannot sort by '{field}', expected one of: {', '.join(sorted(SORTABLE_FIELDS))}")
    direction = SortDirection.ASC if order == SortDirection.ASC else SortDirection.DESC
    return NoteSort(field=field, direction=direction)


def build_mongo_query(query: NoteQuery) -> dict[str, Any]:
    """Translate a NoteQuery into a MongoDB filter document."""
    mongo_query: dict[str, Any] = {}
    if query.priority is not None:
        mongo_query["priority"] = query.priority.value
    if query.color_label is not None:
        mongo_query["color_label"] = query.color_label
    if query.tags:
        mongo_query["tags"] = {"$in": query.tags}
    if query.search:
        pattern = re.escape(query.search)
        mongo_query["$or"] = [
            {"title": {"$regex": pattern, "$options": "i"}},
            {"content": {"$regex": pattern, "$options": "i"}},
        ]
    return mongo_query


def build_mongo_sort(sort: NoteSort) -> list[tuple[str, int]]:
    """Translate a NoteSort into a MongoDB sort specification.

    Ties are ordered by `_id` in the same direction.
    """
    direction = 1 if sort.direction == SortDirection.ASC else -1
    return [(sort.field, direction), ("_id", direction)]
