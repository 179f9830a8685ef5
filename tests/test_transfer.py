import json
from datetime import date

import pytest

from errors import ParseError, ValidationError
from records.models import EntityKind, Snapshot
from transfer.csv_text import camel, parse_csv, read_csv, to_csv
from transfer.exporter import backup_filename, export_filename, export_state, list_csv, report_csv
from transfer.importer import (
    build_snapshot,
    import_file,
    infer_kind,
    parse_json,
    tabular_import,
    validate_and_load,
)


# --- CSV parsing ---
def test_parse_csv_simple():
    assert parse_csv("firstName,lastName\nAda,Lovelace") == [{"firstName": "Ada", "lastName": "Lovelace"}]


def test_parse_csv_quoted_comma_newline_and_quotes():
    text = 'name,schedule\n"Algebra, Part I","Mon\nWed"\n"The ""Best"" Class",Fri\n'
    assert parse_csv(text) == [
        {"name": "Algebra, Part I", "schedule": "Mon\nWed"},
        {"name": 'The "Best" Class', "schedule": "Fri"},
    ]


def test_parse_csv_handles_crlf_and_blank_lines():
    text = "firstName,grade\r\n\r\nAda,5\r\n\r\nAlan,6\r\n"
    assert parse_csv(text) == [{"firstName": "Ada", "grade": "5"}, {"firstName": "Alan", "grade": "6"}]


def test_parse_csv_normalizes_headers_and_trims_cells():
    headers, rows = read_csv(" First Name , last_name ,E-mail\n  Ada , Lovelace ,a@x.org\n")
    assert headers == ["firstName", "lastName", "eMail"]
    assert rows == [{"firstName": "Ada", "lastName": "Lovelace", "eMail": "a@x.org"}]


def test_parse_csv_pads_short_rows():
    assert parse_csv("a,b,c\n1") == [{"a": "1", "b": "", "c": ""}]


def test_parse_csv_empty_text():
    assert read_csv("") == ([], [])
    assert parse_csv("firstName,lastName\n") == []


def test_parse_csv_rejects_malformed_quoting():
    with pytest.raises(ParseError):
        parse_csv('name,code\n"Algebra"x,MATH101\n')


@pytest.mark.parametrize("header, expected", [
    ("firstName", "firstName"),
    ("First Name", "firstName"),
    ("teacher_id", "teacherId"),
    ("  grade  ", "grade"),
    ("1st period", "stPeriod"),
    ("dob", "dob"),
])
def test_camel(header, expected):
    assert camel(header) == expected


# --- kind inference ---
@pytest.mark.parametrize("headers, kind", [
    (["firstName", "lastName", "grade"], EntityKind.students),
    (["firstName", "lastName", "department"], EntityKind.teachers),
    (["name", "code", "schedule"], EntityKind.classes),
    (["className", "classCode"], EntityKind.classes),
    (["studentId", "classId"], None),
])
def test_infer_kind(headers, kind):
    assert infer_kind(headers) == kind


def test_infer_kind_first_rule_wins_on_ambiguous_headers():
    assert infer_kind(["firstName", "grade", "department"]) == EntityKind.students


# --- CSV import ---
def test_tabular_import_adds_students_with_fresh_ids(repo, store):
    text = "id,firstName,lastName,grade,email\nx1,Ada,Lovelace,5,ada@example.edu\nx2,Alan,Turing,6,\n"
    records = tabular_import(text, repo)
    assert [r.first_name for r in records] == ["Ada", "Alan"]
    assert all(r.id.startswith("stu_") for r in records)
    assert [s.id for s in repo.records("students")] == [r.id for r in records]
    assert len(store.load().students) == 2


def test_tabular_import_keeps_extra_columns(repo):
    records = tabular_import("name,code,room\nBiology,SCI201,B12\n", repo)
    assert records[0].model_extra == {"room": "B12"}
    assert records[0].id.startswith("cls_")


def test_tabular_import_with_kind_hint(seeded):
    records = tabular_import("studentId,classId,status\ns1,c2,waitlisted\n", seeded, kind_hint="enrollments")
    assert records[0].status == "waitlisted"
    assert seeded.records("enrollments")[-1:] == records


def test_tabular_import_rejects_unknown_references(seeded):
    before = seeded.records("enrollments")
    with pytest.raises(ValidationError, match="unknown class 'nowhere'"):
        tabular_import("studentId,classId\ns1,c2\ns2,nowhere\n", seeded, kind_hint="enrollments")
    assert seeded.records("enrollments") == before


def test_tabular_import_rejects_class_with_unknown_teacher(seeded):
    with pytest.raises(ValidationError, match="unknown teacher"):
        tabular_import("name,code,teacherId\nChemistry,SCI301,ghost\n", seeded)
    assert len(seeded.records("classes")) == 2


def test_tabular_import_unknown_headers(repo):
    with pytest.raises(ValidationError):
        tabular_import("foo,bar\n1,2\n", repo)


def test_tabular_import_bad_row_adds_nothing(seeded, store):
    before = seeded.records("enrollments")
    saves = len(store.history)
    with pytest.raises(ValidationError):
        # second row has no classId
        tabular_import("studentId,classId\ns1,c2\ns2,\n", seeded, kind_hint="enrollments")
    assert seeded.records("enrollments") == before
    assert len(store.history) == saves


def test_tabular_import_parse_error_adds_nothing(repo):
    with pytest.raises(ParseError):
        tabular_import('firstName,grade\n"Ada"x,5\n', repo)
    assert repo.records("students") == []


# --- JSON import / restore ---
def test_parse_json_error():
    with pytest.raises(ParseError):
        parse_json("{nope")


@pytest.mark.parametrize("data", [None, [1, 2], "text", 42])
def test_validate_and_load_rejects_non_objects(seeded, data):
    before = seeded.snapshot
    with pytest.raises(ValidationError):
        validate_and_load(data, seeded)
    assert seeded.snapshot == before


def test_validate_and_load_overlays_recognized_keys_only(seeded, store):
    data = {
        "students": [{"id": "n1", "firstName": "New", "grade": 3}],
        "theme": "light",
        "version": "9.9.9",
        "somethingElse": True,
    }
    snapshot = validate_and_load(data, seeded)
    assert [s.id for s in snapshot.students] == ["n1"]
    assert snapshot.students[0].grade == "3"
    assert snapshot.theme == "light"
    assert snapshot.version == "1.0.0"
    # missing keys fall back to defaults, not to the previous state
    assert snapshot.teachers == [] and snapshot.classes == [] and snapshot.enrollments == []
    assert store.load() == snapshot
    assert seeded.snapshot == snapshot


def test_validate_and_load_copies_input(repo):
    data = {"teachers": [{"id": "t1", "firstName": "Ann"}]}
    validate_and_load(data, repo)
    data["teachers"][0]["firstName"] = "Changed"
    data["teachers"].append({"id": "t2"})
    assert [t.first_name for t in repo.records("teachers")] == ["Ann"]


def test_validate_and_load_invalid_records_leave_state(seeded):
    before = seeded.snapshot
    with pytest.raises(ValidationError):
        validate_and_load({"enrollments": [{"id": "e9", "studentId": "s1"}]}, seeded)
    assert seeded.snapshot == before


def test_build_snapshot_does_not_touch_state():
    snap = build_snapshot({"theme": "light"}, Snapshot())
    assert snap.theme == "light"


def test_validate_and_load_rejects_unknown_theme(seeded):
    before = seeded.snapshot
    with pytest.raises(ValidationError, match="theme"):
        validate_and_load({"theme": "neon"}, seeded)
    assert seeded.snapshot == before


def test_import_file_dispatches_on_extension(repo):
    summary = import_file("teachers.csv", "firstName,lastName,department\nAnn,Lee,Art\n", repo)
    assert summary == {"type": "csv", "kind": "teachers", "count": 1}

    doc = json.dumps({"classes": [{"id": "c1", "name": "Art", "code": "ART1"}]})
    summary = import_file("backup.JSON", doc, repo)
    assert summary["type"] == "snapshot"
    assert summary["counts"]["classes"] == 1
    assert repo.records("teachers") == []

    with pytest.raises(ValidationError):
        import_file("data.xlsx", "", repo)


def test_import_file_bad_json_keeps_state(seeded):
    before = seeded.snapshot
    with pytest.raises(ParseError):
        import_file("backup.json", "{broken", seeded)
    assert seeded.snapshot == before


# --- export ---
def test_to_csv_quotes_special_values():
    rows = [{"a": 'say "hi"', "b": "x,y"}, {"a": "line\nbreak", "b": None}]
    text = to_csv(rows, [("a", "A"), ("b", "B")])
    assert text == 'A,B\n"say ""hi""","x,y"\n"line\nbreak",\n'


def test_to_csv_round_trips_through_parser():
    rows = [{"name": "Algebra, I", "code": 'M"1'}]
    text = to_csv(rows, [("name", "name"), ("code", "code")])
    assert parse_csv(text) == rows


def test_list_csv_uses_view_columns(seeded):
    text = list_csv(seeded.snapshot, "classes")
    assert text.splitlines()[0] == "Name,Code,Teacher,Schedule"
    assert "Algebra I,MATH101,Alice Nguyen," in text


def test_report_csv(seeded):
    assert report_csv(seeded.snapshot, "teacherLoad") == (
        "Teacher,Classes\nAlice Nguyen,1\nBen Lopez,1\nUnassigned,0\n"
    )


def test_export_state_is_pretty_json(seeded):
    payload = export_state(seeded.snapshot)
    assert json.loads(payload) == seeded.snapshot.to_data()
    assert payload.startswith(b"{\n  ")


def test_export_filenames():
    day = date(2024, 3, 9)
    assert export_filename("students", "csv", day) == "students-2024-03-09.csv"
    assert backup_filename(day) == "school-data-backup-2024-03-09.json"
