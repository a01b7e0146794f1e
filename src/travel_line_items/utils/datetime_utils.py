#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Date and time normalization for form submissions.

The UI sends dates in several shapes: HubSpot DateInput values
({"year", "month", "date", "formattedDate"}), "MM/DD/YYYY" strings, ISO
strings, or already combined date-time strings. Everything here is a pure
transform.
"""

import re
from datetime import date, datetime, timezone, tzinfo
from typing import Any, Optional

TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")
FORMATTED_DATE_PATTERN = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})$")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def epoch_millis(dt: datetime) -> int:
    """Epoch milliseconds for an aware datetime (naive values are taken as UTC)."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return int(dt.timestamp() * 1000)


def date_to_utc_midnight_timestamp(value: date) -> int:
    """Epoch millis of 00:00:00 UTC on the given calendar day."""
    return epoch_millis(datetime(value.year, value.month, value.day, tzinfo=timezone.utc))


def to_utc_midnight_timestamp(date_str: Optional[str]) -> Optional[int]:
    """
    Convert "MM/DD/YYYY" to epoch millis at UTC midnight.

    Malformed input yields None rather than an exception; callers are expected
    to have validated the format already.
    """
    if not isinstance(date_str, str):
        return None
    match = FORMATTED_DATE_PATTERN.match(date_str.strip())
    if not match:
        return None
    month, day, year = (int(part) for part in match.groups())
    try:
        return date_to_utc_midnight_timestamp(date(year, month, day))
    except ValueError:
        return None


def parse_form_date(value: Any) -> date:
    """
    Resolve a form date value to a calendar date.

    Args:
        value: DateInput dict, "MM/DD/YYYY" or ISO string, date or datetime

    Returns:
        date: The calendar day

    Raises:
        ValueError: If the value cannot be interpreted as a date
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    if isinstance(value, dict):
        formatted = value.get("formattedDate")
        if formatted:
            return parse_form_date(formatted)
        # DateInput months are zero-based
        if all(value.get(key) is not None for key in ("year", "month", "date")):
            try:
                return date(int(value["year"]), int(value["month"]) + 1, int(value["date"]))
            except (TypeError, ValueError, OverflowError) as e:
                raise ValueError(f"Invalid date object: {value!r}") from e
        raise ValueError(f"Unrecognised date object: {value!r}")

    if isinstance(value, str) and value.strip():
        text = value.strip()
        match = FORMATTED_DATE_PATTERN.match(text)
        if match:
            month, day, year = (int(part) for part in match.groups())
            return date(year, month, day)
        try:
            return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
        except ValueError:
            pass

    raise ValueError(f"Unparseable date: {value!r}")


def is_valid_time(time_str: Any) -> bool:
    """True for strict 24-hour "HH:MM" strings."""
    return isinstance(time_str, str) and bool(TIME_PATTERN.match(time_str))


def parse_time(time_str: Any) -> tuple:
    """
    Split "HH:MM" into (hour, minute).

    Raises:
        ValueError: If there are not exactly two numeric components or they are out of range
    """
    if not isinstance(time_str, str):
        raise ValueError(f"Time must be a string in HH:MM format, got {time_str!r}")
    parts = time_str.strip().split(":")
    if len(parts) != 2:
        raise ValueError(f"Time must have exactly two components (HH:MM): {time_str!r}")
    if not all(part.isdigit() for part in parts):
        raise ValueError(f"Hour and minute must be numeric: {time_str!r}")
    hour, minute = int(parts[0]), int(parts[1])
    if not (0 <= hour <= 23 and 0 <= minute <= 59):
        raise ValueError(f"Time out of range: {time_str!r}")
    return hour, minute


def combine_date_time(date_value: Any, time_str: str, tz: tzinfo = timezone.utc) -> datetime:
    """
    Combine a form date and an "HH:MM" time into one instant.

    Args:
        date_value: Anything parse_form_date accepts
        time_str: 24-hour time
        tz: Timezone the wall-clock time is expressed in

    Returns:
        datetime: Timezone-aware instant
    """
    day = parse_form_date(date_value)
    hour, minute = parse_time(time_str)
    return datetime(day.year, day.month, day.day, hour, minute, tzinfo=tz)


def parse_datetime(value: Any) -> datetime:
    """
    Parse an already combined date-time (ISO string, epoch millis or datetime).

    Raises:
        ValueError: If the value is not a recognisable instant, including
                    epoch values outside the platform's datetime range
    """
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return _from_epoch_millis(value)
    if isinstance(value, str) and value.strip():
        text = value.strip()
        if text.isdigit():
            return _from_epoch_millis(int(text))
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
        return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)
    raise ValueError(f"Unparseable date-time: {value!r}")


def _from_epoch_millis(millis) -> datetime:
    try:
        return datetime.fromtimestamp(millis / 1000, tz=timezone.utc)
    except (OverflowError, OSError, ValueError) as e:
        raise ValueError(f"Epoch millis out of range: {millis!r}") from e


def format_crm_datetime(dt: datetime) -> str:
    """ISO-8601 UTC string accepted by HubSpot datetime properties."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.000Z")
