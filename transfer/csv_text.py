# SchoolDesk - CSV text in and out
#
# Comma delimiter, double-quote quoting, "" for an embedded quote. Quoted
# fields may contain commas and line breaks.
import csv
import io
import re
from collections.abc import Iterable, Sequence
from typing import Any

from errors import ParseError
from query.engine import field_value

_LEADING_NON_ALPHA = re.compile(r"^[^a-zA-Z]+|[^a-zA-Z0-9]+")
_SPACE_THEN_CHAR = re.compile(r" (.)")


def camel(header: str) -> str:
    """'First Name' -> 'firstName', '2nd-email' -> 'ndEmail'. Leading non-letters are dropped."""
    words = _LEADING_NON_ALPHA.sub(" ", header).strip()
    joined = _SPACE_THEN_CHAR.sub(lambda m: m.group(1).upper(), words)
    return joined[:1].lower() + joined[1:]


def read_csv(text: str) -> tuple[list[str], list[dict[str, str]]]:
    """Header keys (camel-cased) and one dict per data row. Blank lines are skipped."""
    reader = csv.reader(io.StringIO(text, newline=""), strict=True)
    try:
        lines = [row for row in reader if any(cell.strip() for cell in row)]
    except csv.Error as e:
        raise ParseError(f"Malformed CSV at line {reader.line_num}: {e}") from e
    if not lines:
        return [], []

    headers = [camel(h.strip()) for h in lines[0]]
    rows = []
    for cells in lines[1:]:
        row = {}
        for idx, key in enumerate(headers):
            if not key:
                continue
            row[key] = cells[idx].strip() if idx < len(cells) else ""
        rows.append(row)
    return [h for h in headers if h], rows


def parse_csv(text: str) -> list[dict[str, str]]:
    return read_csv(text)[1]


def to_csv(rows: Iterable[Any], headers: Sequence[tuple[str, str]]) -> str:
    """Header labels, then one line per row. headers are (field, label) pairs; missing values are ''."""
    out = io.StringIO()
    writer = csv.writer(out, lineterminator="\n")
    writer.writerow([label for _, label in headers])
    for row in rows:
        values = [field_value(row, key) for key, _ in headers]
        writer.writerow(["" if v is None else v for v in values])
    return out.getvalue()
