# SchoolDesk - list views: search fields, sort options and joined rows per entity kind
from dataclasses import dataclass, field
from typing import Any

from records.models import EntityKind, Snapshot
from .engine import FieldRef, filter_by_term, sort_by


@dataclass(frozen=True)
class SortOption:
    key: str
    label: str


@dataclass(frozen=True)
class ViewConfig:
    search_fields: list[FieldRef]
    sort_options: list[SortOption]
    # CSV export: (row key, column label)
    columns: list[tuple[str, str]] = field(default_factory=list)

    @property
    def default_sort(self) -> str:
        return self.sort_options[0].key


VIEWS: dict[EntityKind, ViewConfig] = {
    EntityKind.students: ViewConfig(
        search_fields=["firstName", "lastName", "email", "grade"],
        sort_options=[SortOption("lastName", "Last name"), SortOption("grade", "Grade"), SortOption("dob", "DOB")],
        columns=[("firstName", "First name"), ("lastName", "Last name"), ("grade", "Grade"),
                 ("email", "Email"), ("dob", "DOB")],
    ),
    EntityKind.teachers: ViewConfig(
        search_fields=["firstName", "lastName", "email", "department"],
        sort_options=[SortOption("lastName", "Last name"), SortOption("department", "Department")],
        columns=[("firstName", "First name"), ("lastName", "Last name"), ("department", "Department"),
                 ("email", "Email")],
    ),
    EntityKind.classes: ViewConfig(
        search_fields=["name", "code", "schedule"],
        sort_options=[SortOption("name", "Class name"), SortOption("code", "Code")],
        columns=[("name", "Name"), ("code", "Code"), ("teacherName", "Teacher"), ("schedule", "Schedule")],
    ),
    EntityKind.enrollments: ViewConfig(
        search_fields=["studentName", "className", "classCode", "status"],
        sort_options=[SortOption("status", "Status")],
        columns=[("studentName", "Student"), ("className", "Class"), ("classCode", "Code"), ("status", "Status")],
    ),
}


def _rows(snapshot: Snapshot, kind: EntityKind) -> list[dict[str, Any]]:
    """JSON-shaped rows for a kind; classes and enrollments are joined to their references."""
    if kind == EntityKind.classes:
        teachers = {t.id: t for t in snapshot.teachers}
        rows = []
        for c in snapshot.classes:
            t = teachers.get(c.teacher_id)
            row = c.model_dump(by_alias=True)
            row["teacherName"] = f"{t.first_name} {t.last_name}" if t else ""
            rows.append(row)
        return rows
    if kind == EntityKind.enrollments:
        students = {s.id: s for s in snapshot.students}
        classes = {c.id: c for c in snapshot.classes}
        rows = []
        for e in snapshot.enrollments:
            s, c = students.get(e.student_id), classes.get(e.class_id)
            if s is None or c is None:
                continue
            row = e.model_dump(by_alias=True)
            row.update(studentName=f"{s.first_name} {s.last_name}", className=c.name, classCode=c.code)
            rows.append(row)
        return rows
    return [r.model_dump(by_alias=True) for r in snapshot.collection(kind)]


def list_view(snapshot: Snapshot, kind: EntityKind, term: str | None = None, sort: str | None = None) -> list[dict[str, Any]]:
    """Rows of one kind as the list screen shows them: joined, filtered by term, sorted."""
    kind = EntityKind(kind)
    config = VIEWS[kind]
    rows = filter_by_term(_rows(snapshot, kind), term, config.search_fields)
    return sort_by(rows, sort or config.default_sort)
