"""Tests for note query specification and MongoDB translation."""

import re

import pytest

from notekeeper.core.modules.note.models import Note, Priority
from notekeeper.core.modules.note.query import (
    NoteQuery,
    NoteSort,
    SortDirection,
    build_mongo_query,
    build_mongo_sort,
    build_note_query,
    build_note_sort,
)
from notekeeper.errors import InvalidArgumentError


@pytest.fixture
def note(owner_id):
    """Note with high priority, work tag and red label."""
    return Note(
        title="Quarterly Report",
        content="Collect numbers from finance",
        owner=owner_id,
        tags=["work", "finance"],
        priority=Priority.HIGH,
        color_label="#FF0000",
    )


class TestBuildNoteQuery:
    """Tests for build_note_query function."""

    def test_no_criteria_gives_empty_query(self):
        """Test that omitted criteria produce a match-all query."""
        assert build_note_query() == NoteQuery()

    def test_blank_values_are_ignored(self):
        """Test that empty strings and empty tag lists do not filter."""
        query = build_note_query(color_label="", tags=["", ""], search="   ")
        assert query == NoteQuery()

    def test_search_is_trimmed(self):
        """Test that surrounding whitespace is removed from search text."""
        assert build_note_query(search="  report ").search == "report"

    def test_all_criteria(self):
        """Test that every criterion is carried over."""
        query = build_note_query(priority=Priority.LOW, color_label="#FFF", tags=["a"], search="x")
        assert query.priority == Priority.LOW
        assert query.color_label == "#FFF"
        assert query.tags == ["a"]
        assert query.search == "x"


class TestBuildNoteSort:
    """Tests for build_note_sort function."""

    def test_defaults_to_created_at_descending(self):
        """Test default sort is newest first."""
        assert build_note_sort() == NoteSort(field="created_at", direction=SortDirection.DESC)

    def test_asc_order(self):
        """Test that 'asc' sorts ascending."""
        assert build_note_sort("title", "asc").direction == SortDirection.ASC

    @pytest.mark.parametrize("order", ["desc", "DESC", "ascending", "", None])
    def test_anything_else_is_descending(self, order):
        """Test that any order other than 'asc' sorts descending."""
        assert build_note_sort("title", order).direction == SortDirection.DESC

    def test_unknown_field_raises(self):
        """Test that sorting on an unknown field is rejected."""
        with pytest.raises(InvalidArgumentError, match="Cannot sort by 'owner'"):
            build_note_sort("owner")


class TestBuildMongoQuery:
    """Tests for build_mongo_query function."""

    def test_empty_query(self):
        """Test match-all query."""
        assert build_mongo_query(NoteQuery()) == {}

    def test_exact_matches(self):
        """Test priority and color are matched exactly."""
        query = NoteQuery(priority=Priority.HIGH, color_label="#00FF00")
        assert build_mongo_query(query) == {"priority": "high", "color_label": "#00FF00"}

    def test_tags_match_any(self):
        """Test tags use $in."""
        assert build_mongo_query(NoteQuery(tags=["work", "home"])) == {"tags": {"$in": ["work", "home"]}}

    def test_search_matches_title_or_content(self):
        """Test search becomes a case-insensitive regex over title or content."""
        assert build_mongo_query(NoteQuery(search="plan")) == {
            "$or": [
                {"title": {"$regex": "plan", "$options": "i"}},
                {"content": {"$regex": "plan", "$options": "i"}},
            ]
        }

    def test_search_escapes_regex_characters(self):
        """Test that regex metacharacters in search text match literally."""
        mongo_query = build_mongo_query(NoteQuery(search="c++ (v2)"))
        pattern = mongo_query["$or"][0]["title"]["$regex"]
        assert pattern == re.escape("c++ (v2)")

    def test_clauses_are_combined(self):
        """Test that all clauses end up in one document (implicit AND)."""
        mongo_query = build_mongo_query(NoteQuery(priority=Priority.LOW, tags=["x"], search="y"))
        assert set(mongo_query) == {"priority", "tags", "$or"}


class TestBuildMongoSort:
    """Tests for build_mongo_sort function."""

    def test_descending(self):
        """Test descending sort with _id tie-breaker."""
        assert build_mongo_sort(NoteSort()) == [("created_at", -1), ("_id", -1)]

    def test_ascending(self):
        """Test ascending sort with _id tie-breaker."""
        sort = NoteSort(field="title", direction=SortDirection.ASC)
        assert build_mongo_sort(sort) == [("title", 1), ("_id", 1)]


class TestNoteQueryMatches:
    """Tests for in-process query evaluation."""

    def test_empty_query_matches(self, note):
        """Test match-all query."""
        assert NoteQuery().matches(note) is True

    def test_priority(self, note):
        """Test priority filter."""
        assert NoteQuery(priority=Priority.HIGH).matches(note) is True
        assert NoteQuery(priority=Priority.LOW).matches(note) is False

    def test_tags_any_of(self, note):
        """Test that one shared tag is enough."""
        assert NoteQuery(tags=["home", "work"]).matches(note) is True
        assert NoteQuery(tags=["home"]).matches(note) is False

    def test_color(self, note):
        """Test color filter."""
        assert NoteQuery(color_label="#FF0000").matches(note) is True
        assert NoteQuery(color_label="#0000FF").matches(note) is False

    def test_search_title_or_content_ignoring_case(self, note):
        """Test search looks at both title and content, case-insensitively."""
        assert NoteQuery(search="QUARTERLY").matches(note) is True
        assert NoteQuery(search="finance").matches(note) is True
        assert NoteQuery(search="budget").matches(note) is False

    def test_all_clauses_must_match(self, note):
        """Test clauses are combined with AND."""
        assert NoteQuery(priority=Priority.HIGH, tags=["work"]).matches(note) is True
        assert NoteQuery(priority=Priority.HIGH, tags=["work"], color_label="#0000FF").matches(note) is False

    def test_search_lowercases_per_character(self, owner_id):
        """Test that search does not apply full case folding, matching the MongoDB "i" option."""
        note = Note(title="Straße", content="Neue Adresse notieren", owner=owner_id)
        assert NoteQuery(search="STRASSE").matches(note) is False
        assert NoteQuery(search="STRAßE").matches(note) is True
