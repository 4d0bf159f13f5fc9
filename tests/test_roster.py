# tests/test_roster.py

import asyncio
import json

import pytest

from core.file_io import export_json, import_json
from core.persistence import StudentStorage
from core.response import ErrorCode
from core.storage import MemoryStore
from models.roster import Roster


def test_load_empty_roster(memory_storage):
    response = Roster.load(memory_storage)

    assert response.success
    assert len(response.data["roster"]) == 0
    assert response.data["roster"].last_saved is None


def test_load_roster_from_directory(directory_storage, sample_student):
    directory_storage.save([sample_student])

    roster = Roster.load(directory_storage).data["roster"]

    assert roster.students == [sample_student]
    assert roster.last_saved == directory_storage.last_saved()


def test_load_corrupt_roster(memory_storage):
    memory_storage.store.set_item("student_data", "{not json")

    response = Roster.load(memory_storage)

    assert not response.success
    assert response.error == ErrorCode.INVALID_JSON


# === add student ===


def test_add_student(sample_roster, sample_student_data):
    response = sample_roster.add_student(sample_student_data)

    assert response.success
    assert response.data["saved"]

    student = response.data["record"]
    assert student in sample_roster.students
    assert student.nim == "IF123456"
    assert student.id
    assert student.tanggal_masuk
    assert sample_roster.last_saved is not None


def test_add_student_persists(sample_roster, sample_student_data):
    sample_roster.add_student(sample_student_data)

    reloaded = Roster.load(sample_roster.storage).data["roster"]

    assert reloaded.students == sample_roster.students


def test_add_graduate_student(sample_roster, make_student_data):
    response = sample_roster.add_student(make_student_data(thesis="Quantum Routing"))

    assert response.data["record"].is_graduate


def test_add_student_duplicate_nim_ignores_case(sample_roster, make_student_data):
    sample_roster.add_student(make_student_data(nim="if123456"))

    response = sample_roster.add_student(make_student_data(nim="IF123456"))

    assert not response.success
    assert response.error == ErrorCode.DUPLICATE_NIM
    assert response.status_code == 409
    assert len(sample_roster) == 1


def test_add_student_invalid_fields(sample_roster, make_student_data):
    response = sample_roster.add_student(make_student_data(semester=15, email="nope"))

    assert not response.success
    assert response.error == ErrorCode.INVALID_FIELD_VALUE
    assert response.detail == "Invalid email format. Example: name@domain.com"
    assert set(response.data["errors"]) == {"email", "semester"}
    assert len(sample_roster) == 0


def test_add_student_keeps_change_when_save_fails(make_student_data):
    roster = Roster(StudentStorage(MemoryStore(quota=50)))

    response = roster.add_student(make_student_data())

    assert response.success
    assert not response.data["saved"]
    assert "Storage is full" in response.data["save_detail"]
    assert len(roster) == 1
    assert roster.last_saved is None


# === update student ===


def test_update_student(populated_roster):
    student = populated_roster.find_student_by_nim("IF001").data["record"]

    response = populated_roster.update_student(student.id, {"ipk": 3.75, "nama": "Citra Ayu"})

    assert response.success
    assert student.ipk == 3.75
    assert student.nama == "Citra Ayu"


def test_update_student_ignores_fixed_fields(populated_roster):
    student = populated_roster.find_student_by_nim("IF001").data["record"]
    original_id = student.id
    original_date = student.tanggal_masuk

    response = populated_roster.update_student(
        student.id, {"id": "other", "tanggalMasuk": "1999-01-01", "semester": 6}
    )

    assert response.success
    assert student.id == original_id
    assert student.tanggal_masuk == original_date
    assert student.semester == 6


def test_update_student_same_nim_different_case(populated_roster):
    student = populated_roster.find_student_by_nim("IF001").data["record"]

    response = populated_roster.update_student(student.id, {"nim": "if001"})

    assert response.success
    assert student.nim == "IF001"


def test_update_student_duplicate_nim(populated_roster):
    student = populated_roster.find_student_by_nim("IF001").data["record"]

    response = populated_roster.update_student(student.id, {"nim": "if002"})

    assert not response.success
    assert response.error == ErrorCode.DUPLICATE_NIM
    assert student.nim == "IF001"


def test_update_student_invalid_merged_record(populated_roster):
    student = populated_roster.find_student_by_nim("IF001").data["record"]

    response = populated_roster.update_student(student.id, {"ipk": 4.5})

    assert not response.success
    assert response.error == ErrorCode.INVALID_FIELD_VALUE
    assert list(response.data["errors"]) == ["ipk"]
    assert student.ipk == 3.5


def test_update_student_thesis(populated_roster):
    student = populated_roster.find_student_by_nim("IF002").data["record"]

    populated_roster.update_student(student.id, {"thesis": "Edge Caching"})
    assert student.is_graduate

    populated_roster.update_student(student.id, {"thesis": None})
    assert not student.is_graduate


def test_update_unknown_student(populated_roster):
    response = populated_roster.update_student("missing", {"ipk": 3.0})

    assert not response.success
    assert response.error == ErrorCode.NOT_FOUND
    assert response.status_code == 404


# === delete students ===


def test_delete_student(populated_roster):
    student = populated_roster.find_student_by_nim("IF002").data["record"]

    response = populated_roster.delete_student(student.id)

    assert response.success
    assert student not in populated_roster.students
    assert len(populated_roster) == 2


def test_delete_unknown_student(populated_roster):
    response = populated_roster.delete_student("missing")

    assert response.error == ErrorCode.NOT_FOUND
    assert len(populated_roster) == 3


def test_delete_students(populated_roster):
    ids = [s.id for s in populated_roster.students[:2]] + ["missing"]

    response = populated_roster.delete_students(ids)

    assert response.success
    assert response.data["removed"] == 2
    assert [s.nim for s in populated_roster.students] == ["SI003"]


# === lookups and algorithm views ===


def test_find_student_by_nim(populated_roster):
    response = populated_roster.find_student_by_nim("  si003 ")

    assert response.success
    assert response.data["record"].nama == "Budi Santoso"
    assert not populated_roster.find_student_by_nim("XX").success


def test_find_student_by_uuid(populated_roster):
    student = populated_roster.students[0]

    assert populated_roster.find_student_by_uuid(student.id).data["record"] is student
    assert populated_roster.find_student_by_uuid("missing").error == ErrorCode.NOT_FOUND


def test_get_records_with_predicate(populated_roster):
    response = populated_roster.get_records(lambda s: s.semester >= 5)

    assert response.success
    assert [s.nim for s in response.data["records"]] == ["IF001", "SI003"]


def test_get_records_predicate_error(populated_roster):
    response = populated_roster.get_records(lambda s: s.missing_attribute)

    assert not response.success
    assert response.error == ErrorCode.INTERNAL_ERROR


def test_average_ipk(populated_roster):
    assert populated_roster.average_ipk() == pytest.approx((3.5 + 2.75 + 3.9) / 3)


def test_average_ipk_empty(sample_roster):
    assert sample_roster.average_ipk() == 0.0


def test_search_students(populated_roster):
    result = populated_roster.search_students("informasi", "jurusan")

    assert [s.nim for s in result.results] == ["SI003"]


def test_find_exact(populated_roster):
    result = populated_roster.find_exact("if002")

    assert result.found
    assert result.record.nama == "Andi Wijaya"


def test_sort_students(populated_roster):
    result = populated_roster.sort_students("ipk", "desc", "bubble")

    assert [s.nim for s in result.sorted_data] == ["SI003", "IF001", "IF002"]
    assert [s.nim for s in populated_roster.students] == ["IF001", "IF002", "SI003"]


# === import, backup, and clear ===


def test_import_students_replaces_roster(populated_roster, sample_student):
    response = populated_roster.import_students([sample_student])

    assert response.success
    assert response.data["count"] == 1
    assert populated_roster.students == [sample_student]


def test_import_from_file(tmp_path, populated_roster):
    path = export_json(populated_roster.students).write_to(str(tmp_path))

    fresh_roster = Roster(StudentStorage(MemoryStore()))

    response = asyncio.run(fresh_roster.import_from_file(path))

    assert response.success
    assert response.data["count"] == 3
    assert fresh_roster.students == populated_roster.students


def test_import_from_bad_file_leaves_roster(tmp_path, populated_roster):
    path = tmp_path / "bad.json"
    path.write_text('{"records": []}', encoding="utf-8")

    response = asyncio.run(populated_roster.import_from_file(str(path)))

    assert not response.success
    assert response.error == ErrorCode.INVALID_IMPORT_FORMAT
    assert len(populated_roster) == 3


def test_clear_all_then_restore(populated_roster):
    cleared = populated_roster.clear_all()

    assert cleared.success
    assert len(populated_roster) == 0
    assert populated_roster.storage.has_backup()

    restored = populated_roster.restore_from_backup()

    assert restored.success
    assert restored.data["count"] == 3
    assert [s.nim for s in populated_roster.students] == ["IF001", "IF002", "SI003"]


def test_restore_without_backup(sample_roster):
    response = sample_roster.restore_from_backup()

    assert response.error == ErrorCode.NOT_FOUND


def test_require_unique_nim(populated_roster):
    with pytest.raises(ValueError):
        populated_roster.require_unique_nim("if001")

    student = populated_roster.find_student_by_nim("IF001").data["record"]
    populated_roster.require_unique_nim("IF001", exclude_id=student.id)


def test_imported_mixed_ipk_roster_sorts_and_averages(sample_roster, sample_student):
    records = []
    for nim, ipk in [("IF001", 3.5), ("IF002", "n/a"), ("IF003", "2.5")]:
        record = sample_student.to_dict()
        record.update(id=nim.lower(), nim=nim, ipk=ipk)
        records.append(record)

    imported = import_json(json.dumps({"data": records}))
    sample_roster.import_students(imported.data["records"])

    assert sample_roster.average_ipk() == pytest.approx(3.0)

    result = sample_roster.sort_students("ipk", "asc", "merge")

    assert [s.nim for s in result.sorted_data] == ["IF003", "IF001", "IF002"]


def test_add_student_duplicate_nim_ignores_whitespace(sample_roster, make_student_data):
    response = sample_roster.add_student(make_student_data(nim=" if123456 "))

    assert response.data["record"].nim == "IF123456"

    response = sample_roster.add_student(make_student_data(nim="IF123456"))

    assert response.error == ErrorCode.DUPLICATE_NIM


def test_get_records_failure_carries_trace(populated_roster):
    response = populated_roster.get_records(lambda s: s.missing_attribute)

    assert response.error == ErrorCode.INTERNAL_ERROR
    assert "AttributeError" in response.trace
