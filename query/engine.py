# SchoolDesk - filtering, sorting and grouping over record lists
#
# Pure functions: inputs are never mutated and nothing is persisted. A field is
# either a name (camelCase as in JSON, or snake_case) or a callable taking the
# record.
import locale
import unicodedata
from collections.abc import Callable, Hashable, Iterable, Mapping, Sequence
from typing import Any, TypeVar

from pydantic.alias_generators import to_snake

T = TypeVar("T")
FieldRef = str | Callable[[Any], Any]


def field_value(record: Any, field: FieldRef) -> Any:
    """Value of a named or computed field; None when the record has no such field."""
    if callable(field):
        return field(record)
    if isinstance(record, Mapping):
        if field in record:
            return record[field]
        return record.get(to_snake(field))
    # getattr also reaches pydantic extras (unknown CSV columns)
    for name in (to_snake(field), field):
        if hasattr(record, name):
            return getattr(record, name)
    return None


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _fold(text: str) -> str:
    # NFKD splits an accented letter into its base letter plus combining marks
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def collation_key(value: Any) -> tuple[str, str]:
    """
    Locale-aware sort key for the string form of value. Case and accents are
    folded first, so "Émile" sorts between "Adam" and "Zoe" even under the C
    locale; ties fall back to LC_COLLATE order of the case-folded text.
    """
    text = _text(value).casefold()
    return locale.strxfrm(_fold(text)), locale.strxfrm(text)


def filter_by_term(records: list[T], term: str | None, fields: Sequence[FieldRef]) -> list[T]:
    """Records where any field contains term, case-insensitively. Empty term returns records as-is."""
    if not term:
        return records
    needle = term.lower()
    return [
        r for r in records
        if any(needle in _text(field_value(r, f)).lower() for f in fields)
    ]


def sort_by(records: Iterable[T], key: FieldRef) -> list[T]:
    """New list ordered by the string form of key; stable, missing values sort as ''."""
    return sorted(records, key=lambda r: collation_key(field_value(r, key)))


def group_by(records: Iterable[T], key: FieldRef) -> dict[Hashable, list[T]]:
    """Groups in first-seen key order; members keep their input order."""
    groups: dict[Hashable, list[T]] = {}
    for r in records:
        groups.setdefault(field_value(r, key), []).append(r)
    return groups
