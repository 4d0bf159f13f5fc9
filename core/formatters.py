# core/formatters.py

# all pure utilities & date helpers
# must never import from models!

import datetime
from typing import Any

# === generic text formatters ===


def format_banner_text(title: str, width: int = 40) -> str:
    line = "=" * width
    centered_title = f"{title:^{width}}"

    return f"{line}\n{centered_title}\n{line}"


def format_list_with_and(items: list[Any]) -> str:
    if not items:
        return ""

    if len(items) == 1:
        return items[0]

    if len(items) == 2:
        return " and ".join(items)

    return ", ".join(items[:-1]) + ", and " + items[-1]


# === number formatters ===


def format_ipk(ipk: float) -> str:
    # imported records are not validated, so the value may not be numeric
    if isinstance(ipk, bool) or not isinstance(ipk, (int, float)):
        return str(ipk)

    return f"{ipk:.2f}"


# === date formatters ===


def format_date_stamp(date: datetime.date | None = None) -> str:
    return (date or datetime.date.today()).isoformat()


def format_timestamp_short(timestamp: str | None) -> str:
    """
    Renders an ISO-8601 timestamp as `YYYY-MM-DD HH:MM`, or "[NEVER]" if there is none.
    """
    if not timestamp:
        return "[NEVER]"

    try:
        parsed = datetime.datetime.fromisoformat(timestamp)
    except ValueError:
        return timestamp

    return parsed.strftime("%Y-%m-%d %H:%M")
