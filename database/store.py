# SchoolDesk - persistent snapshot store
#
# The whole snapshot lives as one JSON blob under a fixed storage key. Every
# save overwrites it in a single transaction; an unreadable blob is treated as
# if nothing had been stored.
import json
import logging
from collections import deque
from datetime import datetime, timezone
from typing import Callable

from pydantic import BaseModel, Field
from pydantic import ValidationError as ModelValidationError
from sqlalchemy import delete, select

from errors import StorageCorruptError
from records.models import Snapshot
from .database import init_db, make_engine, make_session_factory, session_scope
from .models import StorageEntry

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "school-data-manager"


class SaveEvent(BaseModel):
    """Acknowledgment of one completed save."""
    action: str = "save"
    counts: dict[str, int] = Field(default_factory=dict)
    saved_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


SaveListener = Callable[[SaveEvent], None]


class SnapshotStore:
    def __init__(
        self,
        database_url: str | None = None,
        storage_key: str = DEFAULT_STORAGE_KEY,
        app_version: str = "1.0.0",
        default_theme: str = "dark",
        history: int = 50,
    ):
        self.engine = make_engine(database_url)
        self._sessions = make_session_factory(self.engine)
        init_db(self.engine)
        self.storage_key = storage_key
        self.app_version = app_version
        self.default_theme = default_theme
        self.history: deque[SaveEvent] = deque(maxlen=history)
        self._listeners: list[SaveListener] = []

    @classmethod
    def from_settings(cls, settings) -> "SnapshotStore":
        return cls(
            database_url=settings.database_url,
            storage_key=settings.storage_key,
            app_version=settings.app_version,
            default_theme=settings.default_theme,
            history=settings.save_history,
        )

    def initial(self) -> Snapshot:
        """Fresh default snapshot: empty collections, configured version and theme."""
        return Snapshot(version=self.app_version, theme=self.default_theme)

    # --- reading ---
    def _read_raw(self) -> str | None:
        with session_scope(self._sessions) as session:
            return session.execute(
                select(StorageEntry.value).where(StorageEntry.key == self.storage_key)
            ).scalar_one_or_none()

    @staticmethod
    def decode(raw: str) -> Snapshot:
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise StorageCorruptError(f"not valid JSON: {e}") from e
        if not isinstance(data, dict):
            raise StorageCorruptError(f"expected a JSON object, got {type(data).__name__}")
        try:
            return Snapshot.model_validate(data)
        except ModelValidationError as e:
            raise StorageCorruptError(f"snapshot does not match schema: {e.error_count()} error(s)") from e

    def load(self) -> Snapshot | None:
        """Persisted snapshot, or None when nothing (readable) is stored."""
        raw = self._read_raw()
        if raw is None:
            return None
        try:
            return self.decode(raw)
        except StorageCorruptError as e:
            logger.warning("Discarding unreadable snapshot under %r: %s", self.storage_key, e)
            return None

    # --- writing ---
    def save(self, snapshot: Snapshot, action: str = "save") -> SaveEvent:
        payload = snapshot.to_json()
        with session_scope(self._sessions) as session:
            session.merge(StorageEntry(key=self.storage_key, value=payload, updated_at=datetime.now(timezone.utc)))
        event = SaveEvent(action=action, counts=snapshot.counts())
        self.history.append(event)
        logger.debug("Saved snapshot (%s): %s", action, event.counts)
        for listener in list(self._listeners):
            listener(event)
        return event

    def clear(self) -> None:
        with session_scope(self._sessions) as session:
            session.execute(delete(StorageEntry).where(StorageEntry.key == self.storage_key))
        logger.info("Cleared stored snapshot %r", self.storage_key)

    def add_listener(self, listener: SaveListener) -> None:
        self._listeners.append(listener)

    @property
    def last_saved(self) -> SaveEvent | None:
        return self.history[-1] if self.history else None

    # --- export ---
    def export_snapshot(self) -> bytes:
        """Pretty-printed JSON of the stored snapshot (or a default one). Does not write."""
        snapshot = self.load() or self.initial()
        return snapshot.to_json(indent=2).encode("utf-8")

    def dispose(self) -> None:
        self.engine.dispose()
