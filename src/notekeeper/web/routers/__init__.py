from notekeeper.web.routers.note_status import router as note_status_router
from notekeeper.web.routers.notes import router as notes_router

__all__ = [
    "note_status_router",
    "notes_router",
]
