# SchoolDesk query engine
from .engine import field_value, filter_by_term, sort_by, group_by, collation_key
from .reports import (
    enrollment_by_class,
    students_by_grade,
    teacher_load,
    run_report,
    REPORTS,
    REPORT_COLUMNS,
    UNASSIGNED,
    UNKNOWN_GRADE,
)
from .views import VIEWS, list_view

__all__ = [
    "field_value",
    "filter_by_term",
    "sort_by",
    "group_by",
    "collation_key",
    "enrollment_by_class",
    "students_by_grade",
    "teacher_load",
    "run_report",
    "REPORTS",
    "REPORT_COLUMNS",
    "UNASSIGNED",
    "UNKNOWN_GRADE",
    "VIEWS",
    "list_view",
]
