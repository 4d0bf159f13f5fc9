# models/roster.py

"""
The Roster model is the central data object of the program and represents the "source of truth" for all student records.

Students are held in an ordered list owned by the Roster. Every write goes through the same gates, strictly in sequence:
field validation, then `nim` uniqueness, then the in-memory mutation, then a save through the `StudentStorage` gateway.

Provides functions for loading a Roster from storage, adding, updating, and removing students, replacing the whole
collection from an import, and read-only lookups, statistics, searches, and sorts over the collection.
A failed save never rolls back the mutation; the failure is logged and reported in the response payload.
"""

from __future__ import annotations

import logging
import traceback
from typing import Any, Callable, Iterable

import core.search as search
import core.sort as sort
from core.file_io import import_json, read_import_file
from core.persistence import StudentStorage
from core.records import coerce_number
from core.response import ErrorCode, Response
from core.utils import generate_uuid, today_iso
from core.validation import validate_all_fields
from models.student import MUTABLE_FIELDS, Student

logger = logging.getLogger(__name__)


class Roster:

    def __init__(self, storage: StudentStorage, students: Iterable[Student] | None = None):
        self._storage: StudentStorage = storage
        self._students: list[Student] = list(students or [])
        self._last_saved: str | None = None

    # === properties ===

    @property
    def students(self) -> list[Student]:
        return list(self._students)

    @property
    def storage(self) -> StudentStorage:
        return self._storage

    @property
    def last_saved(self) -> str | None:
        return self._last_saved

    def __len__(self) -> int:
        return len(self._students)

    # === public classmethods ===

    @classmethod
    def load(cls, storage: StudentStorage) -> Response:
        """
        Builds a `Roster` from the current snapshot in storage.

        Args:
            storage (StudentStorage): The persistence gateway to read from and save through.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if the snapshot was read, or if nothing has been stored yet.
                    - False if the stored data is unreadable.
                - detail (str | None):
                    - On failure, the gateway's description of the error.
                - error (ErrorCode | str | None):
                    - The gateway's error code (`ErrorCode.INVALID_JSON`, `ErrorCode.INVALID_STORAGE_FORMAT`, ...).
                - status_code (int | None):
                    - 200 on success
                    - 400 on failure
                - data (dict | None): Payload with the following keys:
                    - On success:
                        - "roster" (Roster): The loaded `Roster` object.
                    - On failure:
                        - None

        Notes:
            - Loading does not write to storage.
        """
        load_response = storage.load()

        if not load_response.success:
            return Response.fail(
                detail=f"Failed to load roster: {load_response.detail}",
                error=load_response.error,
                status_code=load_response.status_code,
            )

        roster = cls(storage, load_response.data["records"])
        roster._last_saved = load_response.data.get("timestamp")

        logger.info("Loaded roster with %d students", len(roster))

        return Response.succeed(
            detail=load_response.detail,
            data={
                "roster": roster,
            },
        )

    # === persistence ===

    def save(self) -> Response:
        """
        Writes the full collection through the gateway and records the save time on success.

        Notes:
            - Failures are logged here; the in-memory collection is left as is.
        """
        save_response = self._storage.save(self._students)

        if save_response.success:
            self._last_saved = save_response.data["timestamp"]
        else:
            logger.warning(
                "Roster changes were not persisted: %s", save_response.detail
            )

        return save_response

    def _save_after_write(self, detail: str, data: dict | None = None) -> Response:
        """
        Saves after a successful mutation and builds the success response.

        Notes:
            - The response succeeds even if the save fails; "saved" and "save_detail" report the outcome.
        """
        save_response = self.save()

        payload = dict(data or {})
        payload["saved"] = save_response.success
        payload["save_detail"] = save_response.detail

        return Response.succeed(detail=detail, data=payload)

    # === data accessors ===

    def get_records(self, predicate: Callable[[Student], bool] | None = None) -> Response:
        """
        Fetches students, optionally filtered by a predicate.

        Returns:
            Response: On success, "records" (list[Student]) holds the matching students (may be empty).
            On failure, `ErrorCode.INTERNAL_ERROR` if the predicate raised.

        Notes:
            - This method is read-only and never raises exceptions.
        """
        try:
            if predicate:
                records = list(filter(predicate, self._students))
            else:
                records = list(self._students)

        except Exception as e:
            return Response.fail(
                detail=f"Unexpected error: {e}",
                error=ErrorCode.INTERNAL_ERROR,
                trace=traceback.format_exc(),
            )

        else:
            return Response.succeed(
                data={
                    "records": records,
                }
            )

    def find_student_by_uuid(self, uuid: str) -> Response:
        """
        Finds a `Student` by its unique ID.

        Returns:
            Response: On success, "record" (Student) holds the match.
            On failure, `ErrorCode.NOT_FOUND` with status 404.

        Notes:
            - This method is read-only and does not raise.
        """
        student = self._find(uuid)

        if student is None:
            return Response.fail(
                detail=f"No student found with ID {uuid}.",
                error=ErrorCode.NOT_FOUND,
                status_code=404,
            )

        return Response.succeed(
            data={
                "record": student,
            },
        )

    def find_student_by_nim(self, nim: str) -> Response:
        """
        Finds a `Student` by student number, ignoring case and surrounding whitespace.
        """
        normalized = self._normalize(nim)

        for student in self._students:
            if self._normalize(student.nim) == normalized:
                return Response.succeed(
                    data={
                        "record": student,
                    },
                )

        return Response.fail(
            detail=f"No student found with NIM '{nim}'.",
            error=ErrorCode.NOT_FOUND,
            status_code=404,
        )

    def average_ipk(self) -> float:
        """
        Returns the mean IPK of the roster, or 0.0 when no student has a numeric IPK.

        Imported records are not re-validated, so numeric strings count as numbers and
        any other non-numeric IPK is left out of the mean.
        """
        values = [coerce_number(student.ipk) for student in self._students]
        numbers = [value for value in values if value is not None]

        if not numbers:
            return 0.0

        return sum(numbers) / len(numbers)

    # --- algorithm views ---

    def search_students(self, query: str, field: str = "nama") -> search.MultiSearchResult:
        return search.linear_search_all(self._students, query, field)

    def find_exact(self, query: str, field: str = "nim") -> search.SearchResult:
        """
        Binary-searches a sorted copy of the roster for an exact (case-insensitive) field value.
        """
        return search.binary_search(
            search.sort_for_binary_search(self._students, field), query, field
        )

    def sort_students(
        self, field: str = "nama", order: str = "asc", algorithm: str = "merge"
    ) -> sort.SortResult:
        return sort.sort_by(algorithm, self._students, field, order)

    # === data manipulators ===

    def add_student(self, data: dict[str, Any]) -> Response:
        """
        Validates and adds a new student to the roster.

        Args:
            data (dict[str, Any]): The new student's fields: "nim", "nama", "email", "jurusan", "semester", "ipk",
                and optionally "tanggalMasuk" (defaults to today) and "thesis" (graduate students only).

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if the student was added.
                    - False if a field is invalid or the NIM is already registered.
                - detail (str | None):
                    - On failure, the first field error or the uniqueness conflict.
                    - On success, a simple confirmation message.
                - error (ErrorCode | str | None):
                    - `ErrorCode.INVALID_FIELD_VALUE` if any field fails validation.
                    - `ErrorCode.DUPLICATE_NIM` if another student has the same NIM (case-insensitive).
                    - `ErrorCode.INTERNAL_ERROR` for unexpected errors.
                - status_code (int | None):
                    - 200 on success
                    - 409 for a duplicate NIM
                    - 400 for other failures
                - data (dict | None): Payload with the following keys:
                    - On success:
                        - "record" (Student): The added `Student` object.
                        - "saved" (bool): Whether the follow-up save succeeded.
                        - "save_detail" (str | None): The save outcome message.
                    - On failure:
                        - "errors" (dict[str, str]): Every failing field, for validation failures only.

        Notes:
            - This method mutates `Roster` state and saves through the gateway if successful.
            - The NIM is stored in uppercase; the ID is generated here.
        """
        report = validate_all_fields(data)

        if not report.is_valid:
            return Response.fail(
                detail=report.first_error,
                error=ErrorCode.INVALID_FIELD_VALUE,
                data={
                    "errors": report.errors,
                },
            )

        try:
            self.require_unique_nim(data["nim"])

        except ValueError as e:
            return Response.fail(
                detail=str(e),
                error=ErrorCode.DUPLICATE_NIM,
                status_code=409,
            )

        try:
            student = Student(
                id=generate_uuid(),
                nim=data["nim"],
                nama=data["nama"],
                email=data["email"],
                jurusan=data["jurusan"],
                semester=data["semester"],
                ipk=data["ipk"],
                tanggal_masuk=data.get("tanggalMasuk") or today_iso(),
                thesis=data.get("thesis"),
            )
            self._students.append(student)

        except Exception as e:
            return Response.fail(
                detail=f"Unexpected error: {e}",
                error=ErrorCode.INTERNAL_ERROR,
                trace=traceback.format_exc(),
            )

        logger.info("Added student %s (%s)", student.nim, student.id)

        return self._save_after_write(
            detail=f"Student {student.nama} successfully added to the roster.",
            data={
                "record": student,
            },
        )

    def update_student(self, uuid: str, data: dict[str, Any]) -> Response:
        """
        Merges the supplied fields into an existing student.

        Args:
            uuid (str): The unique ID of the student to update.
            data (dict[str, Any]): The fields to change. Only "nim", "nama", "email", "jurusan", "semester", "ipk",
                and "thesis" are applied; "id" and "tanggalMasuk" are ignored.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if the student was updated.
                    - False if the ID is unknown, the merged record is invalid, or the new NIM is taken.
                - detail (str | None):
                    - On failure, a description naming the failing rule.
                    - On success, a simple confirmation message.
                - error (ErrorCode | str | None):
                    - `ErrorCode.NOT_FOUND` if no student has the given ID.
                    - `ErrorCode.INVALID_FIELD_VALUE` if the merged record fails validation.
                    - `ErrorCode.DUPLICATE_NIM` if another student already has the new NIM.
                - status_code (int | None):
                    - 200 on success
                    - 404 if not found
                    - 409 for a duplicate NIM
                    - 400 for other failures
                - data (dict | None): Payload with the following keys:
                    - On success:
                        - "record" (Student): The updated `Student` object.
                        - "saved" (bool): Whether the follow-up save succeeded.
                        - "save_detail" (str | None): The save outcome message.
                    - On failure:
                        - "errors" (dict[str, str]): Every failing field, for validation failures only.

        Notes:
            - The merged record (current values overlaid with the supplied ones) is validated, not just the changes.
            - The NIM is only re-checked for uniqueness when it actually changes, and only against other students.
            - This method mutates the `Student` in place and saves through the gateway if successful.
        """
        student = self._find(uuid)

        if student is None:
            return Response.fail(
                detail=f"No student found with ID {uuid}.",
                error=ErrorCode.NOT_FOUND,
                status_code=404,
            )

        changes = {field: data[field] for field in MUTABLE_FIELDS if field in data}

        if changes:
            merged = student.to_dict()
            merged.update(changes)

            report = validate_all_fields(merged)

            if not report.is_valid:
                return Response.fail(
                    detail=report.first_error,
                    error=ErrorCode.INVALID_FIELD_VALUE,
                    data={
                        "errors": report.errors,
                    },
                )

            if "nim" in changes and self._normalize(changes["nim"]) != self._normalize(
                student.nim
            ):
                try:
                    self.require_unique_nim(changes["nim"], exclude_id=uuid)

                except ValueError as e:
                    return Response.fail(
                        detail=str(e),
                        error=ErrorCode.DUPLICATE_NIM,
                        status_code=409,
                    )

        for field, value in changes.items():
            setattr(student, field, value)

        if "thesis" in data:
            student.thesis = data["thesis"]

        logger.info("Updated student %s (%s)", student.nim, student.id)

        return self._save_after_write(
            detail="Student record successfully updated.",
            data={
                "record": student,
            },
        )

    def delete_student(self, uuid: str) -> Response:
        """
        Removes a student from the roster.

        Returns:
            Response: On success, "record" (Student) holds the removed student, plus "saved" and "save_detail".
            On failure, `ErrorCode.NOT_FOUND` with status 404.

        Notes:
            - This method mutates `Roster` state and saves through the gateway if successful.
        """
        student = self._find(uuid)

        if student is None:
            return Response.fail(
                detail=f"No student found with ID {uuid}.",
                error=ErrorCode.NOT_FOUND,
                status_code=404,
            )

        self._students.remove(student)

        logger.info("Deleted student %s (%s)", student.nim, student.id)

        return self._save_after_write(
            detail=f"Student {student.nama} successfully removed from the roster.",
            data={
                "record": student,
            },
        )

    def delete_students(self, uuids: Iterable[str]) -> Response:
        """
        Removes every student whose ID is in `uuids`.

        Returns:
            Response: On success, "removed" (int) holds the number of students removed, plus "saved" and "save_detail".

        Notes:
            - Unknown IDs are ignored; there is no per-ID error.
            - Saves through the gateway even if nothing matched.
        """
        targets = set(uuids)
        before = len(self._students)

        self._students = [s for s in self._students if s.id not in targets]

        removed = before - len(self._students)

        logger.info("Deleted %d students in batch", removed)

        return self._save_after_write(
            detail=f"{removed} students successfully removed from the roster.",
            data={
                "removed": removed,
            },
        )

    def import_students(self, students: Iterable[Student]) -> Response:
        """
        Replaces the entire roster with the given students.

        Returns:
            Response: On success, "count" (int) holds the new roster size, plus "saved" and "save_detail".

        Notes:
            - No field validation or uniqueness checks are performed; imported data is trusted structurally.
        """
        self._students = list(students)

        logger.info("Imported %d students, replacing the roster", len(self._students))

        return self._save_after_write(
            detail=f"{len(self._students)} student records successfully imported.",
            data={
                "count": len(self._students),
            },
        )

    async def import_from_file(self, path: str) -> Response:
        """
        Reads a JSON import file and, once the read completes, replaces the roster with its records.

        Returns:
            Response: The failure from reading or parsing the file, or the result of `import_students()`.

        Notes:
            - The roster is untouched unless the whole file reads and parses successfully.
        """
        read_response = await read_import_file(path)

        if not read_response.success:
            return read_response

        import_response = import_json(read_response.data["contents"])

        if not import_response.success:
            return import_response

        return self.import_students(import_response.data["records"])

    def restore_from_backup(self) -> Response:
        """
        Restores the backup snapshot and replaces the in-memory roster with it.

        Returns:
            Response: The gateway's failure, or success with "count" (int) holding the restored roster size.

        Notes:
            - The gateway has already written the restored snapshot, so no further save is made.
        """
        restore_response = self._storage.restore_from_backup()

        if not restore_response.success:
            return restore_response

        self._students = list(restore_response.data["records"])
        self._last_saved = restore_response.data.get("timestamp")

        return Response.succeed(
            detail=restore_response.detail,
            data={
                "count": len(self._students),
            },
        )

    def clear_all(self) -> Response:
        """
        Clears stored data (keeping a backup) and empties the roster.

        Notes:
            - The empty roster is then saved; since the current snapshot was already moved to the backup slot,
              the backup survives and `restore_from_backup()` can still recover the cleared data.
        """
        clear_response = self._storage.clear()

        if not clear_response.success:
            return clear_response

        self._students = []

        return self._save_after_write(detail=clear_response.detail)

    # === data validators ===

    def require_unique_nim(self, nim: str, exclude_id: str | None = None) -> None:
        """
        Validates that no other student shares the given student number.

        Args:
            nim (str): The student number to check (case-insensitive).
            exclude_id (str | None): The ID of a student to ignore, i.e. the one being updated.

        Raises:
            ValueError: If another student has the same normalized student number.
        """
        normalized = self._normalize(nim)

        if any(
            self._normalize(s.nim) == normalized
            for s in self._students
            if s.id != exclude_id
        ):
            raise ValueError(f"NIM '{Student.normalize_nim(nim)}' is already registered.")

    # === helper methods ===

    def _find(self, uuid: str) -> Student | None:
        return next((s for s in self._students if s.id == uuid), None)

    def _normalize(self, input: str) -> str:
        return str(input).strip().lower()
