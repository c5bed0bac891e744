# wmsconsole/utils/formatters.py
from __future__ import annotations

from datetime import datetime
from typing import Optional, Union

DateLike = Union[str, datetime, None]

STATUS_TONES = {
    "NEW": "gray",
    "ALLOCATED": "blue",
    "PICKING": "yellow",
    "COMPLETED": "green",
    "CANCELLED": "red",
    "IN_PROGRESS": "blue",
    "DONE": "green",
}


def _parse(value: DateLike) -> Optional[datetime]:
    if isinstance(value, datetime):
        return value
    try:
        return datetime.fromisoformat(str(value))
    except ValueError:
        return None


def format_date(value: DateLike) -> str:
    """'Jan 5, 2024, 10:30 AM'；空值 'N/A'，无法解析 'Invalid Date'。"""
    if not value:
        return "N/A"
    dt = _parse(value)
    if dt is None:
        return "Invalid Date"
    return f"{dt:%b} {dt.day}, {dt.year}, {dt:%I:%M %p}"


def format_datetime(value: DateLike) -> str:
    if not value:
        return "N/A"
    dt = _parse(value)
    if dt is None:
        return "Invalid Date"
    return f"{dt:%b} {dt.day}, {dt.year}, {dt:%I:%M:%S %p}"


def status_tone(status: Optional[str]) -> str:
    return STATUS_TONES.get(str(status) if status is not None else "", "gray")
