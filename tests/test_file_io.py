# tests/test_file_io.py

import asyncio
import csv
import datetime
import io
import json

from core.file_io import (
    EXPORTED_BY,
    export_csv,
    export_json,
    import_json,
    read_import_file,
)
from core.response import ErrorCode

# === export ===


def test_export_json(sample_student, sample_graduate_student):
    export_file = export_json([sample_student, sample_graduate_student])
    payload = json.loads(export_file.content)

    assert export_file.filename == f"student_data_{datetime.date.today().isoformat()}.json"
    assert export_file.mime_type == "application/json"
    assert payload["exportedBy"] == EXPORTED_BY
    assert payload["count"] == 2
    assert payload["data"][1]["thesis"] == sample_graduate_student.thesis


def test_export_csv(sample_student):
    export_file = export_csv([sample_student])
    lines = export_file.content.split("\n")

    assert export_file.filename.endswith(".csv")
    assert export_file.mime_type == "text/csv;charset=utf-8"
    assert lines[0] == "NIM,Nama,Email,Jurusan,Semester,IPK,Tanggal Masuk"
    assert lines[1] == '"IF123456","Budi Santoso","budi@kampus.ac.id","Informatika","5","3.45","2023-08-21"'


def test_export_csv_empty():
    assert export_csv([]).content == "NIM,Nama,Email,Jurusan,Semester,IPK,Tanggal Masuk"


def test_export_write_to(tmp_path, sample_student):
    path = export_json([sample_student]).write_to(str(tmp_path))

    with open(path, "r", encoding="utf-8") as f:
        assert json.load(f)["count"] == 1


# === import ===


def test_export_then_import(sample_student, sample_graduate_student):
    export_file = export_json([sample_student, sample_graduate_student])

    response = import_json(export_file.content)

    assert response.success
    assert response.data["records"] == [sample_student, sample_graduate_student]


def test_import_invalid_json():
    response = import_json("{not json")

    assert not response.success
    assert response.error == ErrorCode.INVALID_IMPORT_FORMAT


def test_import_missing_data_list():
    response = import_json('{"count": 0}')

    assert not response.success
    assert response.error == ErrorCode.INVALID_IMPORT_FORMAT


def test_import_malformed_record():
    response = import_json('{"data": [{"nim": "IF1"}]}')

    assert not response.success
    assert response.error == ErrorCode.INVALID_IMPORT_FORMAT


def test_read_import_file(tmp_path):
    path = tmp_path / "import.json"
    path.write_text('{"data": []}', encoding="utf-8")

    response = asyncio.run(read_import_file(str(path)))

    assert response.success
    assert response.data["contents"] == '{"data": []}'


def test_read_import_file_missing(tmp_path):
    response = asyncio.run(read_import_file(str(tmp_path / "missing.json")))

    assert not response.success
    assert response.error == ErrorCode.INTERNAL_ERROR


def test_export_csv_escapes_quotes(sample_student):
    sample_student.nim = 'IF"01'

    rows = list(csv.reader(io.StringIO(export_csv([sample_student]).content)))

    assert rows[0][0] == "NIM"
    assert rows[1][0] == 'IF"01'
    assert rows[1][1] == "Budi Santoso"
    assert len(rows[1]) == 7
