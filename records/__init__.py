# SchoolDesk records (Repository lives in records.repository)
from .models import (
    EntityKind,
    EnrollmentStatus,
    Theme,
    Record,
    Student,
    Teacher,
    SchoolClass,
    Enrollment,
    RecordUpdate,
    StudentUpdate,
    TeacherUpdate,
    ClassUpdate,
    EnrollmentUpdate,
    Snapshot,
    KIND_MODELS,
    KIND_UPDATES,
    ID_PREFIXES,
)

__all__ = [
    "EntityKind",
    "EnrollmentStatus",
    "Theme",
    "Record",
    "Student",
    "Teacher",
    "SchoolClass",
    "Enrollment",
    "RecordUpdate",
    "StudentUpdate",
    "TeacherUpdate",
    "ClassUpdate",
    "EnrollmentUpdate",
    "Snapshot",
    "KIND_MODELS",
    "KIND_UPDATES",
    "ID_PREFIXES",
]
