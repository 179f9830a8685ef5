# SchoolDesk - entity repository (collections, cascades, persistence)
import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError as ModelValidationError

from database.store import SnapshotStore
from errors import ValidationError
from .models import (
    KIND_MODELS,
    KIND_UPDATES,
    EntityKind,
    Record,
    RecordUpdate,
    Snapshot,
    Theme,
)

logger = logging.getLogger(__name__)

REFERENCE_FIELDS = {"student_id", "class_id", "teacher_id"}


def _error_summary(e: ModelValidationError) -> str:
    parts = []
    for err in e.errors():
        loc = ".".join(str(p) for p in err.get("loc", ())) or "record"
        parts.append(f"{loc}: {err.get('msg')}")
    return "; ".join(parts)


def coerce_record(kind: EntityKind, record: Record | Mapping[str, Any]) -> Record:
    """Validate a mapping (or re-check a model) as a record of the given kind."""
    model = KIND_MODELS[EntityKind(kind)]
    if isinstance(record, model):
        return record
    data = record.model_dump(by_alias=True) if isinstance(record, Record) else dict(record)
    try:
        return model.model_validate(data)
    except ModelValidationError as e:
        raise ValidationError(f"Invalid {EntityKind(kind).value} record: {_error_summary(e)}") from e


def coerce_update(kind: EntityKind, patch: RecordUpdate | Mapping[str, Any]) -> RecordUpdate:
    model = KIND_UPDATES[EntityKind(kind)]
    if isinstance(patch, model):
        return patch
    try:
        return model.model_validate(dict(patch))
    except ModelValidationError as e:
        raise ValidationError(f"Invalid {EntityKind(kind).value} update: {_error_summary(e)}") from e


class Repository:
    """
    Owns the live snapshot and writes it through the store after every mutation.
    Records are immutable; every mutation builds new collections and swaps in a new snapshot.
    """

    def __init__(self, store: SnapshotStore, snapshot: Snapshot | None = None):
        self.store = store
        self._snapshot = snapshot if snapshot is not None else store.initial()

    @classmethod
    def open(cls, store: SnapshotStore) -> "Repository":
        """Load the persisted snapshot, or create and save a default one on first run."""
        existing = store.load()
        repo = cls(store, existing)
        if existing is None:
            store.save(repo.snapshot, action="init")
        return repo

    @property
    def snapshot(self) -> Snapshot:
        return self._snapshot

    def _commit(self, snapshot: Snapshot, action: str) -> None:
        self._snapshot = snapshot
        self.store.save(snapshot, action=action)

    # --- reads ---
    def records(self, kind: EntityKind) -> list[Record]:
        return list(self._snapshot.collection(kind))

    def get(self, kind: EntityKind, record_id: str) -> Record | None:
        for record in self._snapshot.collection(kind):
            if record.id == record_id:
                return record
        return None

    def check_references(self, kind: EntityKind, record: Record) -> None:
        """Raise ValidationError if record points at a student, class or teacher that does not exist."""
        kind = EntityKind(kind)
        missing = []
        if kind == EntityKind.enrollments:
            if self.get(EntityKind.students, record.student_id) is None:
                missing.append(f"student {record.student_id!r}")
            if self.get(EntityKind.classes, record.class_id) is None:
                missing.append(f"class {record.class_id!r}")
        elif kind == EntityKind.classes and record.teacher_id:
            if self.get(EntityKind.teachers, record.teacher_id) is None:
                missing.append(f"teacher {record.teacher_id!r}")
        if missing:
            raise ValidationError(f"{kind.value} record {record.id} refers to unknown {', '.join(missing)}")

    # --- mutations ---
    def add(self, kind: EntityKind, record: Record | Mapping[str, Any]) -> Record:
        """Append a record; its student, class or teacher references must exist."""
        kind = EntityKind(kind)
        item = coerce_record(kind, record)
        self.check_references(kind, item)
        collection = self._snapshot.collection(kind) + [item]
        self._commit(self._snapshot.model_copy(update={kind.value: collection}), f"add {kind.value} {item.id}")
        return item

    def update(self, kind: EntityKind, record_id: str, patch: RecordUpdate | Mapping[str, Any]) -> Record | None:
        """Merge the fields set in patch into the record. Unknown id: no-op, nothing saved, returns None."""
        kind = EntityKind(kind)
        changes = coerce_update(kind, patch).changes()
        collection = self._snapshot.collection(kind)
        for idx, current in enumerate(collection):
            if current.id == record_id:
                merged = current.model_copy(update=changes)
                if changes.keys() & REFERENCE_FIELDS:
                    self.check_references(kind, merged)
                updated = collection[:idx] + [merged] + collection[idx + 1:]
                self._commit(self._snapshot.model_copy(update={kind.value: updated}), f"update {kind.value} {record_id}")
                return merged
        return None

    def remove(self, kind: EntityKind, record_id: str) -> None:
        """
        Delete a record and apply its cascade, then save once:
        teachers clear Class.teacher_id, students and classes drop their enrollments.
        An unknown id changes nothing but is still saved.
        """
        kind = EntityKind(kind)
        snap = self._snapshot
        changes: dict[str, list] = {
            kind.value: [r for r in snap.collection(kind) if r.id != record_id],
        }
        if kind == EntityKind.teachers:
            changes["classes"] = [
                c.model_copy(update={"teacher_id": ""}) if c.teacher_id == record_id else c
                for c in snap.classes
            ]
        elif kind == EntityKind.students:
            changes["enrollments"] = [e for e in snap.enrollments if e.student_id != record_id]
        elif kind == EntityKind.classes:
            changes["enrollments"] = [e for e in snap.enrollments if e.class_id != record_id]

        dropped = len(snap.enrollments) - len(changes.get("enrollments", snap.enrollments))
        if dropped:
            logger.info("Removing %s %s dropped %d enrollment(s)", kind.value, record_id, dropped)
        self._commit(snap.model_copy(update=changes), f"remove {kind.value} {record_id}")

    def set_theme(self, theme: Theme | str) -> None:
        try:
            value = Theme(theme).value
        except ValueError as e:
            raise ValidationError(f"Unknown theme {theme!r}") from e
        self._commit(self._snapshot.model_copy(update={"theme": value}), f"theme {value}")

    def replace(self, snapshot: Snapshot, action: str = "replace") -> None:
        self._commit(snapshot, action)

    def clear_all(self) -> None:
        self._commit(self.store.initial(), "clear")
