"""Tests for note request schemas and the Mongo document mapping."""

from datetime import UTC, datetime

import pytest
from bson import ObjectId
from pydantic import ValidationError

from notekeeper.core.modules.note.models import ColorChange, Note, NoteCreate, NoteUpdate, Priority, ReminderChange, ToggleField


class TestNoteCreate:
    """Tests for the creation schema."""

    def test_strips_and_accepts_valid_payload(self, owner_id):
        """Test that title and content are trimmed."""
        data = NoteCreate(title="  Shopping  ", content="  Milk and two dozen eggs  ", owner=owner_id)
        assert data.title == "Shopping"
        assert data.content == "Milk and two dozen eggs"

    @pytest.mark.parametrize(
        ("field", "value"),
        [
            ("title", "ab"),
            ("title", "x" * 101),
            ("title", "     "),
            ("content", "too short"),
            ("priority", "urgent"),
            ("owner", "not-a-user-id"),
        ],
    )
    def test_rejects_invalid_fields(self, owner_id, field, value):
        """Test boundary rules on title, content, priority and owner."""
        payload = {"title": "Valid title", "content": "Valid content here", "owner": owner_id, field: value}
        with pytest.raises(ValidationError):
            NoteCreate.model_validate(payload)

    def test_owner_is_required(self):
        """Test that a note cannot be created without an owner."""
        with pytest.raises(ValidationError):
            NoteCreate.model_validate({"title": "Valid title", "content": "Valid content here"})


class TestNoteUpdate:
    """Tests for the partial update schema."""

    def test_only_set_fields_are_written(self):
        """Test to_fields returns explicitly provided fields only."""
        assert NoteUpdate(title="New title").to_fields() == {"title": "New title"}

    def test_empty_update_rejected(self):
        """Test that at least one field is required."""
        with pytest.raises(ValidationError):
            NoteUpdate()

    def test_owner_cannot_change(self, owner_id):
        """Test that owner is not an updatable field."""
        with pytest.raises(ValidationError):
            NoteUpdate.model_validate({"owner": owner_id})

    def test_null_title_rejected(self):
        """Test that title cannot be cleared."""
        with pytest.raises(ValidationError):
            NoteUpdate.model_validate({"title": None})

    def test_reminder_can_be_cleared(self):
        """Test that reminder_at accepts null."""
        assert NoteUpdate.model_validate({"reminder_at": None}).to_fields() == {"reminder_at": None}

    @pytest.mark.parametrize("color", ["#F", "#FF00FF00"])
    def test_color_length(self, color):
        """Test color label length bounds."""
        with pytest.raises(ValidationError):
            NoteUpdate(color_label=color)


class TestColorChange:
    """Tests for the color change schema."""

    @pytest.mark.parametrize("color", ["#FF0000", "#f00", "#a1B2c3"])
    def test_hex_colors_accepted(self, color):
        assert ColorChange(color_label=color).color_label == color

    @pytest.mark.parametrize("color", ["FF0000", "#FF00", "#GGGGGG", "red"])
    def test_other_values_rejected(self, color):
        with pytest.raises(ValidationError):
            ColorChange(color_label=color)


class TestNoteMongoMapping:
    """Tests for conversion between Note and MongoDB documents."""

    def test_to_mongo_uses_object_id(self, owner_id):
        """Test that id becomes an ObjectId under _id."""
        note = Note(title="Title", content="Some content", owner=owner_id)
        doc = note.to_mongo()
        assert "id" not in doc
        assert doc["_id"] == ObjectId(note.id)

    def test_validate_from_mongo_document(self, owner_id):
        """Test that ObjectId values from MongoDB become hex strings."""
        _id = ObjectId()
        note = Note.model_validate(
            {"_id": _id, "title": "Title", "content": "Some content", "owner": ObjectId(owner_id), "priority": "high"}
        )
        assert note.id == str(_id)
        assert note.owner == owner_id
        assert note.priority == Priority.HIGH

    def test_serializes_id_without_underscore(self, owner_id):
        """Test API output uses `id`."""
        data = Note(title="Title", content="Some content", owner=owner_id).model_dump(by_alias=True)
        assert "id" in data
        assert "_id" not in data


def test_toggle_field_attribute():
    """Test toggle fields map to Note attributes."""
    assert [field.attribute for field in ToggleField] == ["is_pinned", "is_archived", "is_trashed"]


class TestReminder:
    """Tests for reminder timestamp normalization."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("2030-05-17T09:30:00", datetime(2030, 5, 17, 9, 30, tzinfo=UTC)),
            ("2030-05-17T11:30:00+02:00", datetime(2030, 5, 17, 9, 30, tzinfo=UTC)),
            ("2030-05-17T09:30:00.123456Z", datetime(2030, 5, 17, 9, 30, 0, 123000, tzinfo=UTC)),
        ],
    )
    def test_reminder_change_is_utc_milliseconds(self, value, expected):
        """Test naive values are taken as UTC, offsets converted and microseconds truncated."""
        date = ReminderChange.model_validate({"date": value}).date
        assert date == expected
        assert date.tzinfo == UTC

    def test_create_and_update_use_the_same_rules(self, owner_id):
        """Test that creation and partial update normalize reminders alike."""
        created = NoteCreate(title="Valid title", content="Valid content here", owner=owner_id, reminder_at="2030-05-17T09:30:00")
        updated = NoteUpdate.model_validate({"reminder_at": "2030-05-17T09:30:00"})
        assert created.reminder_at == updated.reminder_at == datetime(2030, 5, 17, 9, 30, tzinfo=UTC)
