# SchoolDesk - JSON restore/import and CSV record import
import copy
import json
import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError as ModelValidationError

from errors import ParseError, ValidationError
from ids import generate_id
from records.models import ID_PREFIXES, KIND_MODELS, EntityKind, Record, Snapshot
from records.repository import Repository, coerce_record
from .csv_text import read_csv

logger = logging.getLogger(__name__)

# Top-level keys taken from an imported document; everything else is ignored.
RECOGNIZED_KEYS = ("students", "teachers", "classes", "enrollments", "theme")

# Best-effort header heuristic, checked in order; the first rule whose
# fragments all occur in some header (case-insensitive) wins.
KIND_RULES: list[tuple[EntityKind, tuple[str, ...]]] = [
    (EntityKind.students, ("grade", "firstname")),
    (EntityKind.teachers, ("department",)),
    (EntityKind.classes, ("code", "name")),
]


def parse_json(text: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ParseError(f"Invalid JSON: {e.msg} (line {e.lineno}, column {e.colno})") from e


def build_snapshot(data: Any, base: Snapshot) -> Snapshot:
    """Overlay the recognized keys of data (deep-copied) onto base. Does not touch any state."""
    if data is None or not isinstance(data, Mapping):
        raise ValidationError("Invalid data: expected a JSON object")
    merged = base.to_data()
    for key in RECOGNIZED_KEYS:
        if key in data:
            merged[key] = copy.deepcopy(data[key])
    try:
        return Snapshot.model_validate(merged)
    except ModelValidationError as e:
        first = e.errors()[0]
        loc = ".".join(str(p) for p in first.get("loc", ()))
        raise ValidationError(f"Invalid data at {loc}: {first.get('msg')}") from e


def validate_and_load(data: Any, repo: Repository) -> Snapshot:
    """Replace the whole state with the imported document; on failure the state is left as it was."""
    snapshot = build_snapshot(data, repo.store.initial())
    repo.replace(snapshot, action="import")
    logger.info("Loaded snapshot: %s", snapshot.counts())
    return snapshot


def infer_kind(headers: list[str]) -> EntityKind | None:
    lowered = [h.lower() for h in headers]
    for kind, fragments in KIND_RULES:
        if all(any(frag in h for h in lowered) for frag in fragments):
            return kind
    return None


def tabular_import(text: str, repo: Repository, kind_hint: EntityKind | str | None = None) -> list[Record]:
    """
    Add one record per CSV row, each with a fresh id (an id column is ignored).
    All rows, references included, are validated before the first add, so a bad row adds nothing.
    """
    headers, rows = read_csv(text)
    if kind_hint:
        try:
            kind = EntityKind(kind_hint)
        except ValueError as e:
            raise ValidationError(f"Unknown record type {kind_hint!r}") from e
    else:
        kind = infer_kind(headers)
    if kind is None:
        raise ValidationError(f"Cannot tell which records these CSV columns describe: {', '.join(headers) or '(none)'}")

    prefix = ID_PREFIXES[kind]
    records = []
    for row in rows:
        fields = {k: v for k, v in row.items() if k != "id"}
        record = coerce_record(kind, {**fields, "id": generate_id(prefix)})
        repo.check_references(kind, record)
        records.append(record)

    for record in records:
        repo.add(kind, record)
    logger.info("Imported %d %s from CSV", len(records), kind.value)
    return records


def import_file(filename: str, text: str, repo: Repository) -> dict:
    """Dispatch on extension: .json replaces the state, .csv appends records."""
    name = filename.lower()
    if name.endswith(".json"):
        snapshot = validate_and_load(parse_json(text), repo)
        return {"type": "snapshot", "counts": snapshot.counts()}
    if name.endswith(".csv"):
        records = tabular_import(text, repo)
        kinds = {model: kind.value for kind, model in KIND_MODELS.items()}
        return {"type": "csv", "kind": kinds[type(records[0])] if records else None, "count": len(records)}
    raise ValidationError(f"Unsupported file type: {filename}")
