# core/persistence.py

"""
Persistence gateway for the student roster.

Writes the full collection to a `KeyValueStore` as a versioned, timestamped snapshot and keeps a
single-generation backup of whatever was current before each write or clear.

Store layout:
    student_data:        {"version": "1.0", "timestamp": <ISO-8601>, "count": <int>, "data": [<record>, ...]}
    student_data_backup: the previous raw contents of `student_data`, passed through unchanged

Every public method returns a structured `Response` and never raises.
"""

from __future__ import annotations

import json
import logging
import traceback
from typing import Any, Iterable

from core.response import ErrorCode, Response
from core.storage import KeyValueStore, StorageQuotaExceededError
from core.utils import utc_timestamp
from models.student import Student

logger = logging.getLogger(__name__)

STORAGE_KEY = "student_data"
BACKUP_KEY = "student_data_backup"
FORMAT_VERSION = "1.0"


class StudentStorage:

    def __init__(self, store: KeyValueStore):
        self._store = store

    # === properties ===

    @property
    def store(self) -> KeyValueStore:
        return self._store

    def has_backup(self) -> bool:
        return self._store.get_item(BACKUP_KEY) is not None

    def last_saved(self) -> str | None:
        """
        Returns the timestamp of the current snapshot, or None if there is no readable snapshot.
        """
        raw = self._store.get_item(STORAGE_KEY)

        if raw is None:
            return None

        try:
            snapshot = json.loads(raw)
        except json.JSONDecodeError:
            return None

        return snapshot.get("timestamp") if isinstance(snapshot, dict) else None

    # === persistence ===

    def save(self, students: Iterable[Student]) -> Response:
        """
        Serializes the collection into a snapshot and writes it to the current slot.

        Args:
            students (Iterable[Student]): The full collection to persist.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if the snapshot was written.
                    - False if the store rejected the write.
                - detail (str | None):
                    - On success, a confirmation naming the number of records saved.
                    - On failure, a description of the error.
                - error (ErrorCode | str | None):
                    - `ErrorCode.STORAGE_QUOTA_EXCEEDED` if the store is full.
                    - `ErrorCode.INTERNAL_ERROR` for any other write fault.
                - status_code (int | None):
                    - 200 on success
                    - 507 if the store is full
                    - 400 for other failures
                - data (dict | None): Payload with the following keys:
                    - On success:
                        - "timestamp" (str): The ISO-8601 save time.
                        - "count" (int): The number of records saved.
                    - On failure:
                        - None

        Notes:
            - Whatever is currently stored is copied into the backup slot before the new snapshot is written.
        """
        try:
            records = [student.to_dict() for student in students]
            timestamp = utc_timestamp()
            snapshot = {
                "version": FORMAT_VERSION,
                "timestamp": timestamp,
                "count": len(records),
                "data": records,
            }
            payload = json.dumps(snapshot)

            existing = self._store.get_item(STORAGE_KEY)
            if existing is not None:
                self._store.set_item(BACKUP_KEY, existing)

            self._store.set_item(STORAGE_KEY, payload)

        except StorageQuotaExceededError as e:
            logger.warning("Save rejected by store: %s", e)
            return Response.fail(
                detail=f"Storage is full. Remove some records and try again. ({e})",
                error=ErrorCode.STORAGE_QUOTA_EXCEEDED,
                status_code=507,
            )

        except Exception as e:
            logger.error("Save failed: %s", e)
            return Response.fail(
                detail=f"Failed to save data: {e}",
                error=ErrorCode.INTERNAL_ERROR,
                trace=traceback.format_exc(),
            )

        else:
            logger.debug("Saved %d records at %s", len(records), timestamp)

            return Response.succeed(
                detail=f"Data saved successfully. {len(records)} students stored.",
                data={
                    "timestamp": timestamp,
                    "count": len(records),
                },
            )

    def load(self) -> Response:
        """
        Reads the current snapshot and rebuilds its records.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if the snapshot was read, or if there is no snapshot yet.
                    - False if the stored text is unparseable or has the wrong shape.
                - detail (str | None):
                    - A human-readable description of the outcome.
                - error (ErrorCode | str | None):
                    - `ErrorCode.INVALID_JSON` if the stored text is not valid JSON.
                    - `ErrorCode.INVALID_STORAGE_FORMAT` if `data` is missing, is not a list, or holds malformed records.
                    - `ErrorCode.INTERNAL_ERROR` for unexpected errors.
                - status_code (int | None):
                    - 200 on success
                    - 400 on failure
                - data (dict | None): Payload with the following keys:
                    - On success:
                        - "records" (list[Student]): The stored collection (empty if nothing is stored).
                        - "timestamp" (str | None): The snapshot's save time, or None if nothing is stored.
                    - On failure:
                        - None

        Notes:
            - An absent snapshot is not an error.
        """
        try:
            raw = self._store.get_item(STORAGE_KEY)

            if raw is None:
                return Response.succeed(
                    detail="No saved data found.",
                    data={
                        "records": [],
                        "timestamp": None,
                    },
                )

            snapshot = json.loads(raw)
            records = self._records_from_snapshot(snapshot)

        except json.JSONDecodeError as e:
            logger.warning("Stored snapshot is not valid JSON: %s", e)
            return Response.fail(
                detail=f"Stored data is corrupt. Invalid JSON: {e}",
                error=ErrorCode.INVALID_JSON,
            )

        except (ValueError, KeyError, TypeError) as e:
            logger.warning("Stored snapshot has an invalid format: %s", e)
            return Response.fail(
                detail=f"Invalid data format: {e}",
                error=ErrorCode.INVALID_STORAGE_FORMAT,
            )

        except Exception as e:
            logger.error("Load failed: %s", e)
            return Response.fail(
                detail=f"Failed to read data: {e}",
                error=ErrorCode.INTERNAL_ERROR,
                trace=traceback.format_exc(),
            )

        else:
            logger.debug("Loaded %d records", len(records))

            return Response.succeed(
                detail=f"{len(records)} student records loaded.",
                data={
                    "records": records,
                    "timestamp": snapshot.get("timestamp"),
                },
            )

    def restore_from_backup(self) -> Response:
        """
        Replaces the current snapshot with the backup and returns the restored records.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if the backup was restored.
                    - False if there is no backup or it cannot be read.
                - detail (str | None):
                    - A human-readable description of the outcome.
                - error (ErrorCode | str | None):
                    - `ErrorCode.NOT_FOUND` if there is no backup.
                    - `ErrorCode.INVALID_JSON` or `ErrorCode.INVALID_STORAGE_FORMAT` if the backup is unreadable.
                    - `ErrorCode.STORAGE_QUOTA_EXCEEDED` or `ErrorCode.INTERNAL_ERROR` if the write fails.
                - status_code (int | None):
                    - 200 on success
                    - 404 if there is no backup
                    - 400 for other failures
                - data (dict | None): Payload with the following keys:
                    - On success:
                        - "records" (list[Student]): The restored collection.
                        - "timestamp" (str | None): The restored snapshot's save time.
                    - On failure:
                        - None

        Notes:
            - The backup is parsed before anything is overwritten, so an unreadable backup leaves the current snapshot intact.
            - The backup slot itself is left unchanged.
        """
        try:
            raw_backup = self._store.get_item(BACKUP_KEY)

            if raw_backup is None:
                return Response.fail(
                    detail="No backup is available.",
                    error=ErrorCode.NOT_FOUND,
                    status_code=404,
                )

            snapshot = json.loads(raw_backup)
            records = self._records_from_snapshot(snapshot)

            self._store.set_item(STORAGE_KEY, raw_backup)

        except json.JSONDecodeError as e:
            return Response.fail(
                detail=f"Backup is corrupt. Invalid JSON: {e}",
                error=ErrorCode.INVALID_JSON,
            )

        except (ValueError, KeyError, TypeError) as e:
            return Response.fail(
                detail=f"Invalid backup format: {e}",
                error=ErrorCode.INVALID_STORAGE_FORMAT,
            )

        except StorageQuotaExceededError as e:
            return Response.fail(
                detail=f"Storage is full. Could not restore backup. ({e})",
                error=ErrorCode.STORAGE_QUOTA_EXCEEDED,
                status_code=507,
            )

        except Exception as e:
            logger.error("Restore failed: %s", e)
            return Response.fail(
                detail=f"Failed to restore data from backup: {e}",
                error=ErrorCode.INTERNAL_ERROR,
                trace=traceback.format_exc(),
            )

        else:
            logger.info("Restored %d records from backup", len(records))

            return Response.succeed(
                detail="Data restored from backup.",
                data={
                    "records": records,
                    "timestamp": snapshot.get("timestamp"),
                },
            )

    def clear(self) -> Response:
        """
        Removes the current snapshot after copying it into the backup slot.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if the current snapshot was removed (or there was none).
                    - False if the store failed.
                - detail (str | None):
                    - A human-readable description of the outcome.
                - error (ErrorCode | str | None):
                    - `ErrorCode.STORAGE_QUOTA_EXCEEDED` if the backup write is rejected.
                    - `ErrorCode.INTERNAL_ERROR` for unexpected errors.
                - status_code (int | None):
                    - 200 on success
                    - 400 or 507 on failure
                - data (dict | None):
                    - Always None, this method does not return any payload.

        Notes:
            - Clearing is always recoverable with `restore_from_backup()` when a snapshot existed.
        """
        try:
            existing = self._store.get_item(STORAGE_KEY)
            if existing is not None:
                self._store.set_item(BACKUP_KEY, existing)

            self._store.remove_item(STORAGE_KEY)

        except StorageQuotaExceededError as e:
            return Response.fail(
                detail=f"Storage is full. Could not back up before clearing. ({e})",
                error=ErrorCode.STORAGE_QUOTA_EXCEEDED,
                status_code=507,
            )

        except Exception as e:
            logger.error("Clear failed: %s", e)
            return Response.fail(
                detail=f"Failed to clear data: {e}",
                error=ErrorCode.INTERNAL_ERROR,
                trace=traceback.format_exc(),
            )

        else:
            logger.info("Cleared stored data; backup retained")

            return Response.succeed(
                detail="All data cleared. A backup is available for recovery.",
            )

    # === helper methods ===

    @staticmethod
    def _records_from_snapshot(snapshot: Any) -> list[Student]:
        """
        Rebuilds `Student` objects from a parsed snapshot.

        Raises:
            ValueError: If the snapshot is not an object or its `data` field is missing or not a list.
            KeyError, TypeError: If an entry in `data` is not record-shaped.
        """
        if not isinstance(snapshot, dict) or not isinstance(snapshot.get("data"), list):
            raise ValueError("Expected an object with a 'data' list.")

        return [Student.from_dict(record) for record in snapshot["data"]]
