# core/utils.py

"""
Repository for program-wide utilities.
"""

import datetime
import uuid


def generate_uuid() -> str:
    return str(uuid.uuid4())


def utc_timestamp() -> str:
    """
    Returns the current UTC time as an ISO-8601 string (e.g. `2025-08-17T09:30:00.123456+00:00`).
    """
    return datetime.datetime.now(datetime.timezone.utc).isoformat()


def today_iso() -> str:
    return datetime.date.today().isoformat()
