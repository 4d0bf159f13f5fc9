# tests/test_student.py

import pytest

from models.student import Student, StudentKind


def test_student_to_dict(sample_student):
    data = sample_student.to_dict()

    assert data["id"] == "s001"
    assert data["nim"] == "IF123456"
    assert data["nama"] == "Budi Santoso"
    assert data["email"] == "budi@kampus.ac.id"
    assert data["jurusan"] == "Informatika"
    assert data["semester"] == 5
    assert data["ipk"] == 3.45
    assert data["tanggalMasuk"] == "2023-08-21"
    assert "thesis" not in data


def test_student_from_dict():
    student = Student.from_dict(
        {
            "id": "s001",
            "nim": "if123456",
            "nama": "Budi Santoso",
            "email": "budi@kampus.ac.id",
            "jurusan": "Informatika",
            "semester": 5,
            "ipk": 3.45,
            "tanggalMasuk": "2023-08-21",
        }
    )

    assert student.id == "s001"
    assert student.nim == "IF123456"
    assert student.tanggal_masuk == "2023-08-21"
    assert student.kind is StudentKind.STANDARD
    assert not student.is_graduate


def test_student_from_dict_missing_key_raises():
    with pytest.raises(KeyError):
        Student.from_dict({"id": "s001", "nim": "IF1"})


def test_student_from_dict_rejects_non_dict():
    with pytest.raises(TypeError):
        Student.from_dict(["s001", "IF1"])


def test_student_round_trip(sample_graduate_student):
    assert Student.from_dict(sample_graduate_student.to_dict()) == sample_graduate_student


def test_nim_setter_normalizes(sample_student):
    sample_student.nim = "si999"
    assert sample_student.nim == "SI999"


def test_graduate_student(sample_graduate_student):
    assert sample_graduate_student.kind is StudentKind.GRADUATE
    assert sample_graduate_student.is_graduate
    assert sample_graduate_student.to_dict()["thesis"].startswith("Graph")
    assert "Thesis: Graph" in sample_graduate_student.info()


def test_clearing_thesis_makes_standard(sample_graduate_student):
    sample_graduate_student.thesis = None
    assert sample_graduate_student.kind is StudentKind.STANDARD


def test_student_info(sample_student):
    assert sample_student.info() == "Budi Santoso (IF123456) - Informatika"


def test_student_to_str(sample_student):
    assert sample_student.__str__() == "STUDENT: Budi Santoso - NIM: IF123456 - (ID: s001)"


def test_nim_setter_strips_whitespace(sample_student):
    sample_student.nim = "  si999 "
    assert sample_student.nim == "SI999"
