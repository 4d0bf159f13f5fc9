# core/validation.py

"""
Field validators for student records.

Each validator checks one field against a pattern or range rule and returns a `ValidationResult`.
Validators never raise: unexpected faults (e.g. a non-string name) are caught and reported as a
generic invalid result for that field, so callers can branch on `is_valid` without exception handling.

`validate_all_fields()` aggregates the six field validators into a `ValidationReport`.
"""

from __future__ import annotations

import logging
import math
import re
from typing import Any

from core.records import get_field_value

logger = logging.getLogger(__name__)

NIM_MAX_LENGTH = 50
NAMA_MIN_LENGTH = 2
NAMA_MAX_LENGTH = 100
JURUSAN_MIN_LENGTH = 2
SEMESTER_MIN = 1
SEMESTER_MAX = 14
IPK_MIN = 0.0
IPK_MAX = 4.0

REGEX_PATTERNS: dict[str, re.Pattern[str]] = {
    "nim": re.compile(r"^.{1,50}$"),
    "nama": re.compile(r"^[a-zA-Z\s]{2,100}$"),
    "email": re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$"),
    "jurusan": re.compile(r"^[a-zA-Z\s]{2,50}$"),
}


class ValidationResult:
    """
    Outcome of a single field check.

    Attributes:
        is_valid (bool): Whether the value satisfied every rule for the field.
        message (str): A human-readable message naming the rule that failed, or a confirmation.
    """

    def __init__(self, is_valid: bool, message: str):
        self._is_valid = is_valid
        self._message = message

    @property
    def is_valid(self) -> bool:
        return self._is_valid

    @property
    def message(self) -> str:
        return self._message

    @classmethod
    def valid(cls, message: str) -> ValidationResult:
        return cls(True, message)

    @classmethod
    def invalid(cls, message: str) -> ValidationResult:
        return cls(False, message)

    def __repr__(self) -> str:
        return f"ValidationResult({self._is_valid}, {self._message!r})"


class ValidationReport:
    """
    Outcome of a whole-record check.

    Attributes:
        errors (dict[str, str]): Failing field names mapped to their messages, in validation order.
        is_valid (bool): True when `errors` is empty.
        first_error (str | None): The message of the first failing field, if any.
    """

    def __init__(self, errors: dict[str, str]):
        self._errors = errors

    @property
    def is_valid(self) -> bool:
        return not self._errors

    @property
    def errors(self) -> dict[str, str]:
        return dict(self._errors)

    @property
    def first_error(self) -> str | None:
        return next(iter(self._errors.values()), None)

    def __repr__(self) -> str:
        return f"ValidationReport({self._errors!r})"


# === helpers ===


def _is_blank(value: Any) -> bool:
    return value is None or value == "" or (isinstance(value, str) and not value.strip())


def _is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return not math.isnan(value)


def _internal_fault(label: str, e: Exception) -> ValidationResult:
    logger.debug("Validator for %s raised %r", label, e)
    return ValidationResult.invalid(f"An unexpected error occurred while validating {label}.")


# === field validators ===


def validate_nim(nim: Any) -> ValidationResult:
    try:
        if _is_blank(nim):
            return ValidationResult.invalid("NIM must not be empty.")

        if len(nim) > NIM_MAX_LENGTH:
            return ValidationResult.invalid(
                f"NIM must be at most {NIM_MAX_LENGTH} characters."
            )

        return ValidationResult.valid("NIM is valid.")

    except Exception as e:
        return _internal_fault("NIM", e)


def validate_nama(nama: Any) -> ValidationResult:
    try:
        if _is_blank(nama):
            return ValidationResult.invalid("Name must not be empty.")

        if len(nama) < NAMA_MIN_LENGTH:
            return ValidationResult.invalid(
                f"Name must be at least {NAMA_MIN_LENGTH} characters."
            )

        if len(nama) > NAMA_MAX_LENGTH:
            return ValidationResult.invalid(
                f"Name must be at most {NAMA_MAX_LENGTH} characters."
            )

        if not REGEX_PATTERNS["nama"].fullmatch(nama):
            return ValidationResult.invalid(
                "Name may only contain letters and spaces."
            )

        return ValidationResult.valid("Name is valid.")

    except Exception as e:
        return _internal_fault("name", e)


def validate_email(email: Any) -> ValidationResult:
    try:
        if _is_blank(email):
            return ValidationResult.invalid("Email must not be empty.")

        if not REGEX_PATTERNS["email"].fullmatch(email):
            return ValidationResult.invalid(
                "Invalid email format. Example: name@domain.com"
            )

        return ValidationResult.valid("Email is valid.")

    except Exception as e:
        return _internal_fault("email", e)


def validate_ipk(ipk: Any) -> ValidationResult:
    try:
        if not _is_number(ipk):
            return ValidationResult.invalid("IPK must be a number.")

        if ipk < IPK_MIN or ipk > IPK_MAX:
            return ValidationResult.invalid(
                f"IPK must be between {IPK_MIN:.2f} and {IPK_MAX:.2f}."
            )

        return ValidationResult.valid("IPK is valid.")

    except Exception as e:
        return _internal_fault("IPK", e)


def validate_semester(semester: Any) -> ValidationResult:
    try:
        is_integer = _is_number(semester) and float(semester).is_integer()

        if not is_integer:
            return ValidationResult.invalid("Semester must be a whole number.")

        if semester < SEMESTER_MIN or semester > SEMESTER_MAX:
            return ValidationResult.invalid(
                f"Semester must be between {SEMESTER_MIN} and {SEMESTER_MAX}."
            )

        return ValidationResult.valid("Semester is valid.")

    except Exception as e:
        return _internal_fault("semester", e)


def validate_jurusan(jurusan: Any) -> ValidationResult:
    try:
        if _is_blank(jurusan):
            return ValidationResult.invalid("Department must not be empty.")

        if len(jurusan) < JURUSAN_MIN_LENGTH:
            return ValidationResult.invalid(
                f"Department must be at least {JURUSAN_MIN_LENGTH} characters."
            )

        if not REGEX_PATTERNS["jurusan"].fullmatch(jurusan):
            return ValidationResult.invalid(
                "Department may only contain letters and spaces (at most 50 characters)."
            )

        return ValidationResult.valid("Department is valid.")

    except Exception as e:
        return _internal_fault("department", e)


FIELD_VALIDATORS = {
    "nim": validate_nim,
    "nama": validate_nama,
    "email": validate_email,
    "jurusan": validate_jurusan,
    "semester": validate_semester,
    "ipk": validate_ipk,
}


# === record validator ===


def validate_all_fields(record: Any) -> ValidationReport:
    """
    Runs every field validator against a record.

    Args:
        record (Any): A `Student` object or a mapping with the keys nim, nama, email, jurusan, semester, and ipk.

    Returns:
        ValidationReport: `is_valid` is True only if every field passed; `errors` maps each failing field
        to its message, in the order nim, nama, email, jurusan, semester, ipk.

    Notes:
        - A missing field is validated as None and therefore reported as empty or non-numeric.
        - Never raises.
    """
    errors: dict[str, str] = {}

    for field, validator in FIELD_VALIDATORS.items():
        try:
            value = get_field_value(record, field)
        except (KeyError, AttributeError, TypeError):
            value = None

        result = validator(value)

        if not result.is_valid:
            errors[field] = result.message

    return ValidationReport(errors)
