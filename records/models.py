# SchoolDesk - entity records, partial updates and the persisted snapshot
import enum
import json

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from ids import STUDENT_PREFIX, TEACHER_PREFIX, CLASS_PREFIX, ENROLLMENT_PREFIX


class EntityKind(str, enum.Enum):
    students = "students"
    teachers = "teachers"
    classes = "classes"
    enrollments = "enrollments"


class EnrollmentStatus(str, enum.Enum):
    # Known values only; Enrollment.status accepts any string.
    enrolled = "enrolled"
    waitlisted = "waitlisted"
    dropped = "dropped"


class Theme(str, enum.Enum):
    dark = "dark"
    light = "light"


# --- Records ---
class Record(BaseModel):
    """Immutable entity record. JSON keys are camelCase; unknown keys are kept as extras."""
    model_config = ConfigDict(
        frozen=True,
        extra="allow",
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )

    id: str = Field(..., min_length=1)

    @field_validator("*", mode="before")
    @classmethod
    def null_as_empty(cls, value, info):
        # A stray null in stored or imported JSON reads as an empty string; a null id stays invalid
        if value is None and info.field_name != "id":
            return ""
        return value


class Student(Record):
    first_name: str = ""
    last_name: str = ""
    grade: str = ""
    dob: str = ""
    email: str = ""


class Teacher(Record):
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    department: str = ""


class SchoolClass(Record):
    name: str = ""
    code: str = ""
    teacher_id: str = Field(default="", description="Teacher id, empty when unassigned")
    schedule: str = ""


class Enrollment(Record):
    student_id: str = Field(..., min_length=1)
    class_id: str = Field(..., min_length=1)
    status: str = EnrollmentStatus.enrolled.value


# --- Partial updates (fields left unset keep their current value) ---
class RecordUpdate(BaseModel):
    model_config = ConfigDict(
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True, exclude_none=True)


class StudentUpdate(RecordUpdate):
    first_name: str | None = None
    last_name: str | None = None
    grade: str | None = None
    dob: str | None = None
    email: str | None = None


class TeacherUpdate(RecordUpdate):
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    department: str | None = None


class ClassUpdate(RecordUpdate):
    name: str | None = None
    code: str | None = None
    teacher_id: str | None = None
    schedule: str | None = None


class EnrollmentUpdate(RecordUpdate):
    student_id: str | None = None
    class_id: str | None = None
    status: str | None = None


KIND_MODELS: dict[EntityKind, type[Record]] = {
    EntityKind.students: Student,
    EntityKind.teachers: Teacher,
    EntityKind.classes: SchoolClass,
    EntityKind.enrollments: Enrollment,
}

KIND_UPDATES: dict[EntityKind, type[RecordUpdate]] = {
    EntityKind.students: StudentUpdate,
    EntityKind.teachers: TeacherUpdate,
    EntityKind.classes: ClassUpdate,
    EntityKind.enrollments: EnrollmentUpdate,
}

ID_PREFIXES: dict[EntityKind, str] = {
    EntityKind.students: STUDENT_PREFIX,
    EntityKind.teachers: TEACHER_PREFIX,
    EntityKind.classes: CLASS_PREFIX,
    EntityKind.enrollments: ENROLLMENT_PREFIX,
}


# --- Snapshot (sole unit of persistence) ---
class Snapshot(BaseModel):
    """Complete state: the four collections plus the UI theme. Replaced whole, never edited in place."""
    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
        use_enum_values=True,
    )

    version: str = "1.0.0"
    students: list[Student] = Field(default_factory=list)
    teachers: list[Teacher] = Field(default_factory=list)
    classes: list[SchoolClass] = Field(default_factory=list)
    enrollments: list[Enrollment] = Field(default_factory=list)
    theme: Theme = Theme.dark.value

    @field_validator("students", "teachers", "classes", "enrollments", mode="before")
    @classmethod
    def null_as_empty_list(cls, value):
        return [] if value is None else value

    def collection(self, kind: EntityKind) -> list[Record]:
        return getattr(self, EntityKind(kind).value)

    def counts(self) -> dict[str, int]:
        return {kind.value: len(self.collection(kind)) for kind in EntityKind}

    def to_data(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)

    def to_json(self, indent: int | None = None) -> str:
        return json.dumps(self.to_data(), indent=indent, ensure_ascii=False)
