# core/records.py

# field selectors and record access shared by the validation, search, and sort engines
# must never import from models!

import math
from collections.abc import Mapping
from typing import Any

FIELD_SELECTORS: tuple[str, ...] = ("nim", "nama", "jurusan", "semester", "ipk", "email")

NUMERIC_FIELDS: frozenset[str] = frozenset({"semester", "ipk"})

SORT_ORDERS: tuple[str, ...] = ("asc", "desc")


def get_field_value(record: Any, field: str) -> Any:
    """
    Reads a field from a record.

    Records may be `Student` objects or plain mappings (e.g. a deserialized snapshot entry),
    so mappings are read by key and everything else by attribute.

    Raises:
        KeyError: If a mapping record lacks the field.
        AttributeError: If an object record lacks the field.
    """
    if isinstance(record, Mapping):
        return record[field]

    return getattr(record, field)


def coerce_number(value: Any) -> float | None:
    """
    Reads a numeric field value as a number, or returns None when it is not one.

    Imported records are not re-validated, so an ipk or semester may arrive as a numeric string
    ("3.25") or as arbitrary text. Booleans and NaN are not numbers here.
    """
    if isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        return None if math.isnan(value) else value

    if isinstance(value, str):
        try:
            number = float(value)
        except ValueError:
            return None
        return None if math.isnan(number) else number

    return None


def require_field_selector(field: str) -> str:
    if field not in FIELD_SELECTORS:
        raise ValueError(
            f"Unknown field selector '{field}'. Expected one of: {', '.join(FIELD_SELECTORS)}."
        )
    return field


def require_sort_order(order: str) -> str:
    if order not in SORT_ORDERS:
        raise ValueError(f"Unknown sort order '{order}'. Expected 'asc' or 'desc'.")
    return order
