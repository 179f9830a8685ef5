# SchoolDesk - sample data (replaces the whole snapshot)
import random

from ids import generate_id, STUDENT_PREFIX, TEACHER_PREFIX, CLASS_PREFIX, ENROLLMENT_PREFIX
from .models import Enrollment, SchoolClass, Student, Teacher
from .repository import Repository

FIRST_NAMES = ["Liam", "Olivia", "Noah", "Emma", "Amelia", "Ava", "Sophia", "Isabella", "Mia", "Ethan", "Lucas", "Evelyn"]
LAST_NAMES = ["Johnson", "Smith", "Williams", "Brown", "Jones", "Garcia", "Miller", "Davis", "Rodriguez", "Martinez", "Hernandez", "Lopez"]


def seed(repo: Repository, rng: random.Random | None = None) -> None:
    """3 teachers, 12 students, 3 classes; each student enrolled in one random class."""
    rng = rng or random.Random()

    teachers = [
        Teacher(id=generate_id(TEACHER_PREFIX), first_name="Alice", last_name="Nguyen",
                email="alice.nguyen@example.edu", department="Math"),
        Teacher(id=generate_id(TEACHER_PREFIX), first_name="Ben", last_name="Lopez",
                email="ben.lopez@example.edu", department="Science"),
        Teacher(id=generate_id(TEACHER_PREFIX), first_name="Carmen", last_name="Osei",
                email="carmen.osei@example.edu", department="History"),
    ]

    students = [
        Student(
            id=generate_id(STUDENT_PREFIX),
            first_name=first,
            last_name=last,
            grade=str(1 + (i % 6)),
            dob=f"201{i % 10}-0{(i % 9) + 1}-15",
            email="",
        )
        for i, (first, last) in enumerate(zip(FIRST_NAMES, LAST_NAMES))
    ]

    classes = [
        SchoolClass(id=generate_id(CLASS_PREFIX), name="Algebra I", code="MATH101",
                    teacher_id=teachers[0].id, schedule="Mon/Wed/Fri 9:00-9:50"),
        SchoolClass(id=generate_id(CLASS_PREFIX), name="Biology", code="SCI201",
                    teacher_id=teachers[1].id, schedule="Tue/Thu 10:00-11:15"),
        SchoolClass(id=generate_id(CLASS_PREFIX), name="World History", code="HIS110",
                    teacher_id=teachers[2].id, schedule="Mon/Wed 13:00-14:15"),
    ]

    enrollments = [
        Enrollment(id=generate_id(ENROLLMENT_PREFIX), student_id=s.id,
                   class_id=rng.choice(classes).id, status="enrolled")
        for s in students
    ]

    snapshot = repo.store.initial().model_copy(update={
        "teachers": teachers,
        "students": students,
        "classes": classes,
        "enrollments": enrollments,
    })
    repo.replace(snapshot, action="sample")
