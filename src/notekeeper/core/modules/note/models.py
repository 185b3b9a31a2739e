from datetime import datetime
from enum import StrEnum
from typing import Annotated

from pydantic import AfterValidator, BaseModel, Field, StringConstraints, model_validator

from notekeeper.core.db import MongoModel, ObjectIdStr
from notekeeper.core.pagination import Pagination
from notekeeper.utils import is_object_id, now, to_utc_millis

DEFAULT_COLOR_LABEL = "#00FF00"
COLOR_LABEL_PATTERN = r"^#(?:[0-9a-fA-F]{3}){1,2}$"

Title = Annotated[str, StringConstraints(strip_whitespace=True, min_length=3, max_length=100)]
Content = Annotated[str, StringConstraints(strip_whitespace=True, min_length=10)]


def _check_owner(value: str) -> str:
    if not is_object_id(value):
        raise ValueError("owner must be a 24-character hex id")
    return value


OwnerId = Annotated[ObjectIdStr, AfterValidator(_check_owner)]

# UTC at millisecond precision; naive values are taken as UTC
Reminder = Annotated[datetime, AfterValidator(to_utc_millis)]


class Priority(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ToggleField(StrEnum):
    """Boolean note statuses flipped by a dedicated operation."""

    PINNED = "pinned"
    ARCHIVED = "archived"
    TRASHED = "trashed"

    @property
    def attribute(self) -> str:
        """Name of the Note attribute holding this status."""
        return f"is_{self.value}"


class Note(MongoModel):
    """User memo with status flags, color label and optional reminder."""

    title: str
    content: str
    tags: list[str] = Field(default_factory=list)
    priority: Priority = Priority.LOW
    color_label: str | None = None
    reminder_at: Reminder | None = None
    is_pinned: bool = False
    is_archived: bool = False
    is_trashed: bool = False
    owner: ObjectIdStr  # User id, fixed at creation
    created_at: datetime = Field(default_factory=now)
    updated_at: datetime = Field(default_factory=now)


class NoteCreate(BaseModel):
    """Fields accepted when creating a note."""

    title: Title = Field(..., description="Note title (3-100 characters)")
    content: Content = Field(..., description="Note body (at least 10 characters)")
    owner: OwnerId = Field(..., description="Id of the user owning the note")
    tags: list[str] = Field(default_factory=list, description="Labels attached to the note")
    priority: Priority = Field(Priority.LOW, description="Note priority")
    color_label: str = Field(DEFAULT_COLOR_LABEL, description="Free-form color token")
    reminder_at: Reminder | None = Field(None, description="When to remind about the note, UTC when no offset is given")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "title": "Groceries",
                    "content": "Milk, eggs, bread and coffee",
                    "owner": "64b7f0c2a1e4d3b2c1a09f8e",
                    "tags": ["home", "shopping"],
                    "priority": "medium",
                }
            ]
        }
    }


class NoteUpdate(BaseModel):
    """Partial update: only fields present in the request are written."""

    title: Title | None = None
    content: Content | None = None
    tags: list[str] | None = None
    priority: Priority | None = None
    color_label: Annotated[str, StringConstraints(min_length=3, max_length=7)] | None = None
    reminder_at: Reminder | None = None
    is_pinned: bool | None = None
    is_archived: bool | None = None
    is_trashed: bool | None = None

    model_config = {"extra": "forbid"}

    @model_validator(mode="after")
    def check_not_empty(self) -> "NoteUpdate":
        if not self.model_fields_set:
            raise ValueError("At least one field must be provided")
        for name in ("title", "content", "tags", "priority", "color_label", "is_pinned", "is_archived", "is_trashed"):
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self

    def to_fields(self) -> dict[str, object]:
        """Fields explicitly provided by the caller."""
        return self.model_dump(exclude_unset=True)


class ColorChange(BaseModel):
    """Request to change the color label of a note."""

    color_label: str = Field(..., pattern=COLOR_LABEL_PATTERN, description="Hex color, e.g. #FF0000 or #F00")


class ReminderChange(BaseModel):
    """Request to set the reminder timestamp of a note."""

    date: Reminder = Field(..., description="When to remind about the note, UTC when no offset is given")


class NotePage(BaseModel):
    """One page of notes with pagination metadata."""

    notes: list[Note]
    pagination: Pagination
