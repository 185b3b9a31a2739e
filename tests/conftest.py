"""Shared pytest fixtures."""

import pytest

from notekeeper.core.modules.note.models import NoteCreate, Priority
from notekeeper.core.modules.note.service import NoteService
from notekeeper.core.modules.note.store import MemoryNoteStore


@pytest.fixture
def owner_id():
    """Id of the user owning test notes."""
    return "64b7f0c2a1e4d3b2c1a09f8e"


@pytest.fixture
def missing_id():
    """Well-formed id that no note has."""
    return "0123456789abcdef01234567"


@pytest.fixture
def note_data(owner_id):
    """Valid creation payload."""
    return NoteCreate(
        title="Project kickoff",
        content="Agenda: scope, timeline and owners",
        owner=owner_id,
        tags=["work", "meeting"],
        priority=Priority.HIGH,
    )


@pytest.fixture
def store():
    """Empty in-memory note store."""
    return MemoryNoteStore()


@pytest.fixture
def service(store):
    """Note service over the in-memory store with default pagination."""
    return NoteService(store)
