# SchoolDesk database
from .models import Base, StorageEntry
from .database import make_engine, make_session_factory, session_scope, init_db
from .store import SnapshotStore, SaveEvent, DEFAULT_STORAGE_KEY

__all__ = [
    "Base",
    "StorageEntry",
    "make_engine",
    "make_session_factory",
    "session_scope",
    "init_db",
    "SnapshotStore",
    "SaveEvent",
    "DEFAULT_STORAGE_KEY",
]
