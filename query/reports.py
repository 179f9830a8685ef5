# SchoolDesk - canned reports, recomputed from the live snapshot on every call
from pydantic import BaseModel

from records.models import EnrollmentStatus, Snapshot
from .engine import collation_key, group_by

UNKNOWN_GRADE = "Unknown"
UNASSIGNED = "Unassigned"

REPORT_ENROLLMENT_BY_CLASS = "enrollmentByClass"
REPORT_STUDENTS_BY_GRADE = "studentsByGrade"
REPORT_TEACHER_LOAD = "teacherLoad"


class EnrollmentByClassRow(BaseModel):
    class_id: str
    name: str
    code: str
    enrolled: int
    total: int


class GradeRow(BaseModel):
    grade: str
    students: int


class TeacherLoadRow(BaseModel):
    teacher_id: str
    name: str
    classes: int


def enrollment_by_class(snapshot: Snapshot) -> list[EnrollmentByClassRow]:
    """Per class: members with status 'enrolled' and group size. Groups for vanished classes are skipped."""
    classes = {c.id: c for c in snapshot.classes}
    rows = []
    for class_id, members in group_by(snapshot.enrollments, "classId").items():
        klass = classes.get(class_id)
        if klass is None:
            continue
        enrolled = sum(1 for e in members if e.status == EnrollmentStatus.enrolled.value)
        rows.append(EnrollmentByClassRow(
            class_id=klass.id, name=klass.name, code=klass.code,
            enrolled=enrolled, total=len(members),
        ))
    return rows


def students_by_grade(snapshot: Snapshot) -> list[GradeRow]:
    groups = group_by(snapshot.students, lambda s: s.grade or UNKNOWN_GRADE)
    ordered = sorted(groups.items(), key=lambda item: collation_key(item[0]))
    return [GradeRow(grade=grade, students=len(members)) for grade, members in ordered]


def teacher_load(snapshot: Snapshot) -> list[TeacherLoadRow]:
    """
    Classes per teacher. Empty and unresolved teacher ids share one 'Unassigned'
    row, which is always present (0 when every class has a teacher).
    """
    teachers = {t.id: t for t in snapshot.teachers}
    groups = group_by(
        snapshot.classes,
        lambda c: c.teacher_id if c.teacher_id in teachers else UNASSIGNED,
    )
    rows = []
    for teacher_id, classes in groups.items():
        if teacher_id == UNASSIGNED:
            continue
        t = teachers[teacher_id]
        rows.append(TeacherLoadRow(teacher_id=t.id, name=f"{t.first_name} {t.last_name}", classes=len(classes)))
    rows.append(TeacherLoadRow(teacher_id="", name=UNASSIGNED, classes=len(groups.get(UNASSIGNED, []))))
    return rows


REPORTS = {
    REPORT_ENROLLMENT_BY_CLASS: enrollment_by_class,
    REPORT_STUDENTS_BY_GRADE: students_by_grade,
    REPORT_TEACHER_LOAD: teacher_load,
}

# (row field, column label) for CSV export
REPORT_COLUMNS = {
    REPORT_ENROLLMENT_BY_CLASS: [("name", "Class"), ("code", "Code"), ("enrolled", "Enrolled")],
    REPORT_STUDENTS_BY_GRADE: [("grade", "Grade"), ("students", "Students")],
    REPORT_TEACHER_LOAD: [("name", "Teacher"), ("classes", "Classes")],
}


def run_report(name: str, snapshot: Snapshot) -> list[BaseModel]:
    try:
        report = REPORTS[name]
    except KeyError:
        raise KeyError(f"Unknown report {name!r}") from None
    return report(snapshot)
