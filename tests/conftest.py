# tests/conftest.py

import pytest

from core.persistence import StudentStorage
from core.storage import DirectoryStore, MemoryStore
from models.roster import Roster
from models.student import Student


def student_data(**overrides):
    data = {
        "nim": "IF123456",
        "nama": "Budi Santoso",
        "email": "budi@kampus.ac.id",
        "jurusan": "Informatika",
        "semester": 5,
        "ipk": 3.45,
    }
    data.update(overrides)
    return data


@pytest.fixture
def sample_student():
    return Student(
        id="s001",
        nim="if123456",
        nama="Budi Santoso",
        email="budi@kampus.ac.id",
        jurusan="Informatika",
        semester=5,
        ipk=3.45,
        tanggal_masuk="2023-08-21",
    )


@pytest.fixture
def sample_graduate_student():
    return Student(
        id="s002",
        nim="MI2001",
        nama="Siti Aminah",
        email="siti@kampus.ac.id",
        jurusan="Magister Informatika",
        semester=2,
        ipk=3.9,
        tanggal_masuk="2024-02-01",
        thesis="Graph Neural Networks for Course Scheduling",
    )


@pytest.fixture
def sample_student_data():
    return student_data()


@pytest.fixture
def memory_storage():
    return StudentStorage(MemoryStore())


@pytest.fixture
def directory_storage(tmp_path):
    return StudentStorage(DirectoryStore(str(tmp_path)))


@pytest.fixture
def sample_roster(memory_storage):
    return Roster(memory_storage)


@pytest.fixture
def populated_roster(sample_roster):
    for data in [
        student_data(nim="IF001", nama="Citra Dewi", email="citra@kampus.ac.id", ipk=3.5),
        student_data(nim="IF002", nama="Andi Wijaya", email="andi@kampus.ac.id", ipk=2.75, semester=3),
        student_data(nim="SI003", nama="Budi Santoso", email="budi@kampus.ac.id", jurusan="Sistem Informasi", ipk=3.9, semester=7),
    ]:
        sample_roster.add_student(data)

    return sample_roster


@pytest.fixture
def make_student_data():
    return student_data
