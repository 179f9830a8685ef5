import pytest
from fastapi.testclient import TestClient

from config import Settings
from database.store import SnapshotStore
from records.models import Enrollment, SchoolClass, Student, Teacher
from records.repository import Repository


@pytest.fixture
def database_url(tmp_path):
    return f"sqlite:///{tmp_path / 'schooldesk-test.db'}"


@pytest.fixture
def store(database_url):
    s = SnapshotStore(database_url=database_url)
    yield s
    s.dispose()


@pytest.fixture
def repo(store):
    return Repository.open(store)


@pytest.fixture
def seeded(repo):
    """T1 teaches C1 (MATH101); S1 is enrolled in C1 via E1. T2 teaches C2; S2 is waitlisted in C2."""
    repo.add("teachers", Teacher(id="t1", first_name="Alice", last_name="Nguyen", department="Math"))
    repo.add("teachers", Teacher(id="t2", first_name="Ben", last_name="Lopez", department="Science"))
    repo.add("classes", SchoolClass(id="c1", name="Algebra I", code="MATH101", teacher_id="t1"))
    repo.add("classes", SchoolClass(id="c2", name="Biology", code="SCI201", teacher_id="t2"))
    repo.add("students", Student(id="s1", first_name="Ada", last_name="Lovelace", grade="5"))
    repo.add("students", Student(id="s2", first_name="Alan", last_name="Turing", grade="6"))
    repo.add("enrollments", Enrollment(id="e1", student_id="s1", class_id="c1", status="enrolled"))
    repo.add("enrollments", Enrollment(id="e2", student_id="s2", class_id="c2", status="waitlisted"))
    return repo


@pytest.fixture
def client(database_url):
    from main import create_app
    settings = Settings(database_url=database_url, log_level="WARNING")
    with TestClient(create_app(settings)) as c:
        yield c
