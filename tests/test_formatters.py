# tests/test_formatters.py

import datetime

import core.formatters as formatters
from core.response import ErrorCode, Response


def test_format_banner_text():
    banner = formatters.format_banner_text("HI", width=6)
    assert banner == "======\n  HI  \n======"


def test_format_list_with_and():
    assert formatters.format_list_with_and([]) == ""
    assert formatters.format_list_with_and(["nim"]) == "nim"
    assert formatters.format_list_with_and(["nim", "ipk"]) == "nim and ipk"
    assert formatters.format_list_with_and(["nim", "nama", "ipk"]) == "nim, nama, and ipk"


def test_format_ipk():
    assert formatters.format_ipk(3) == "3.00"
    assert formatters.format_ipk(3.456) == "3.46"
    assert formatters.format_ipk("n/a") == "n/a"


def test_format_date_stamp():
    assert formatters.format_date_stamp(datetime.date(2025, 8, 17)) == "2025-08-17"


def test_format_timestamp_short():
    assert formatters.format_timestamp_short(None) == "[NEVER]"
    assert formatters.format_timestamp_short("2025-08-17T09:30:12.123456+00:00") == "2025-08-17 09:30"
    assert formatters.format_timestamp_short("yesterday") == "yesterday"


# === response ===


def test_response_fail_to_str():
    response = Response.fail(detail="No backup is available.", error=ErrorCode.NOT_FOUND, status_code=404)

    assert not response.success
    assert response.data == {}
    assert str(response) == "Error: NOT_FOUND - No backup is available."


def test_response_round_trip():
    response = Response.succeed(detail="ok", data={"count": 2})

    restored = Response.from_dict(response.to_dict())

    assert restored.success
    assert restored.status_code == 200
    assert restored.data == {"count": 2}
