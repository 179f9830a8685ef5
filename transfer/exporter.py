# SchoolDesk - JSON and CSV exports
from datetime import date

from query.reports import REPORT_COLUMNS, run_report
from query.views import VIEWS, list_view
from records.models import EntityKind, Snapshot
from .csv_text import to_csv

CURRENT_EXPORT_FILENAME = "school-data-export.json"


def export_filename(name: str, ext: str, today: date | None = None) -> str:
    """'<name>-YYYY-MM-DD.<ext>'"""
    today = today or date.today()
    return f"{name}-{today.isoformat()}.{ext}"


def backup_filename(today: date | None = None) -> str:
    return export_filename("school-data-backup", "json", today)


def export_state(snapshot: Snapshot) -> bytes:
    """Pretty-printed JSON of the given (live) snapshot."""
    return snapshot.to_json(indent=2).encode("utf-8")


def list_csv(snapshot: Snapshot, kind: EntityKind, term: str | None = None, sort: str | None = None) -> str:
    kind = EntityKind(kind)
    return to_csv(list_view(snapshot, kind, term, sort), VIEWS[kind].columns)


def report_csv(snapshot: Snapshot, name: str) -> str:
    return to_csv(run_report(name, snapshot), REPORT_COLUMNS[name])
