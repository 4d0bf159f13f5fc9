# core/file_io.py

"""
Export and import of student collections as files.

Exports produce an `ExportFile` artifact (file name, MIME type, and text content) that the caller
can hand to a download or write to disk with `ExportFile.write_to()`.

Imports accept any JSON document with a `data` list of record-shaped objects. Records are rebuilt
structurally and are not re-validated field by field.
"""

from __future__ import annotations

import asyncio
import csv
import io
import json
import logging
import os
import traceback
from typing import Iterable

import core.formatters as formatters
from core.response import ErrorCode, Response
from core.utils import utc_timestamp
from models.student import Student

logger = logging.getLogger(__name__)

EXPORTED_BY = "Student Management System"
CSV_HEADERS = ("NIM", "Nama", "Email", "Jurusan", "Semester", "IPK", "Tanggal Masuk")


class ExportFile:
    """
    A downloadable file produced by an export.

    Attributes:
        filename (str): Suggested file name, e.g. `student_data_2025-08-17.json`.
        content (str): The full text content.
        mime_type (str): The MIME type of the content.
    """

    def __init__(self, filename: str, content: str, mime_type: str):
        self.filename = filename
        self.content = content
        self.mime_type = mime_type

    def write_to(self, dir_path: str) -> str:
        """
        Writes the file into a directory and returns its full path.

        Raises:
            OSError: If the file cannot be written.
        """
        path = os.path.join(dir_path, self.filename)

        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(self.content)

        logger.info("Exported %s", path)

        return path

    def __repr__(self) -> str:
        return f"ExportFile({self.filename}, {self.mime_type}, {len(self.content)} chars)"


# === export ===


def _export_filename(extension: str) -> str:
    return f"student_data_{formatters.format_date_stamp()}.{extension}"


def export_json(students: Iterable[Student]) -> ExportFile:
    records = [student.to_dict() for student in students]
    payload = {
        "exportedAt": utc_timestamp(),
        "exportedBy": EXPORTED_BY,
        "count": len(records),
        "data": records,
    }

    return ExportFile(
        filename=_export_filename("json"),
        content=json.dumps(payload, indent=2),
        mime_type="application/json",
    )


def export_csv(students: Iterable[Student]) -> ExportFile:
    """
    Exports one header row and one row per student; every row cell is double-quoted and IPK has two decimals.

    Rows are separated by a bare newline with no trailing newline. Quotes inside a value are doubled.
    """
    buffer = io.StringIO()
    buffer.write(",".join(CSV_HEADERS))

    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="")

    for student in students:
        buffer.write("\n")
        writer.writerow(
            [
                student.nim,
                student.nama,
                student.email,
                student.jurusan,
                str(student.semester),
                formatters.format_ipk(student.ipk),
                student.tanggal_masuk,
            ]
        )

    return ExportFile(
        filename=_export_filename("csv"),
        content=buffer.getvalue(),
        mime_type="text/csv;charset=utf-8",
    )


# === import ===


def import_json(contents: str) -> Response:
    """
    Parses an import file and rebuilds its records.

    Args:
        contents (str): The text of the import file.

    Returns:
        Response: A structured response with the following contract:
            - success (bool):
                - True if the document parsed and held a `data` list of record-shaped objects.
                - False otherwise.
            - detail (str | None):
                - A human-readable description of the outcome.
            - error (ErrorCode | str | None):
                - `ErrorCode.INVALID_IMPORT_FORMAT` for parse errors, a missing or non-list `data`, or malformed records.
            - status_code (int | None):
                - 200 on success
                - 400 on failure
            - data (dict | None): Payload with the following keys:
                - On success:
                    - "records" (list[Student]): The imported records.
                - On failure:
                    - None

    Notes:
        - Keys other than `data` are ignored.
        - Field values are not validated; only the document structure is checked.
    """
    try:
        parsed = json.loads(contents)

        if not isinstance(parsed, dict) or not isinstance(parsed.get("data"), list):
            raise ValueError("Expected a JSON object with a 'data' list.")

        records = [Student.from_dict(record) for record in parsed["data"]]

    except json.JSONDecodeError as e:
        return Response.fail(
            detail=f"Failed to import file. The file is not valid JSON: {e}",
            error=ErrorCode.INVALID_IMPORT_FORMAT,
        )

    except (ValueError, KeyError, TypeError) as e:
        return Response.fail(
            detail=f"Failed to import file. Invalid file format: {e}",
            error=ErrorCode.INVALID_IMPORT_FORMAT,
        )

    else:
        return Response.succeed(
            detail=f"{len(records)} student records imported.",
            data={
                "records": records,
            },
        )


def _read_text(path: str) -> str:
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


async def read_import_file(path: str) -> Response:
    """
    Reads an import file without blocking the caller's event loop.

    Returns:
        Response: On success, "contents" (str) holds the file text. On failure, `ErrorCode.INTERNAL_ERROR`
        with a description of the read error.
    """
    try:
        contents = await asyncio.to_thread(_read_text, path)

    except (OSError, UnicodeDecodeError) as e:
        return Response.fail(
            detail=f"Failed to read file: {e}",
            error=ErrorCode.INTERNAL_ERROR,
            trace=traceback.format_exc(),
        )

    else:
        return Response.succeed(
            data={
                "contents": contents,
            },
        )
