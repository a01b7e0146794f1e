#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Meeting Models - outcome lookup and the option tables the meeting form offers.
"""

from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional

SLOT_MINUTES = 15
MAX_DURATION_MINUTES = 480


class MeetingOutcome(str, Enum):
    """Form labels for meeting outcomes."""
    COMPLETED = "Completed"
    SCHEDULED = "Scheduled"
    RESCHEDULED = "Rescheduled"
    NO_SHOW = "No Show"
    CANCELED = "Canceled"

    @property
    def crm_value(self) -> str:
        """Internal value of the hs_meeting_outcome property."""
        return MEETING_OUTCOME_VALUES[self]

    @classmethod
    def parse(cls, value) -> Optional["MeetingOutcome"]:
        if isinstance(value, cls):
            return value
        for outcome in cls:
            if value in (outcome.value, outcome.crm_value):
                return outcome
        return None


MEETING_OUTCOME_VALUES: Dict[MeetingOutcome, str] = {
    MeetingOutcome.COMPLETED: "COMPLETED",
    MeetingOutcome.SCHEDULED: "SCHEDULED",
    MeetingOutcome.RESCHEDULED: "RESCHEDULED",
    MeetingOutcome.NO_SHOW: "NO_SHOW",
    MeetingOutcome.CANCELED: "CANCELED",
}


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}{'s' if count > 1 else ''}"


def duration_options() -> List[Dict[str, str]]:
    """Durations from 15 minutes to 8 hours in 15 minute steps."""
    options = []
    for mins in range(SLOT_MINUTES, MAX_DURATION_MINUTES + 1, SLOT_MINUTES):
        hours, minutes = divmod(mins, 60)
        parts = []
        if hours:
            parts.append(_plural(hours, "Hour"))
        if minutes:
            parts.append(_plural(minutes, "Minute"))
        options.append({"value": str(mins), "label": " ".join(parts)})
    return options


def time_options() -> List[Dict[str, str]]:
    """Every quarter hour of the day; values are 24-hour HH:MM, labels 12-hour."""
    options = []
    for hour in range(24):
        for minute in range(0, 60, SLOT_MINUTES):
            hour12 = 12 if hour % 12 == 0 else hour % 12
            ampm = "AM" if hour < 12 else "PM"
            options.append({
                "value": f"{hour:02d}:{minute:02d}",
                "label": f"{hour12}:{minute:02d} {ampm}",
            })
    return options


def round_up_to_quarter_hour(now: datetime) -> str:
    """Default meeting time: the next quarter hour, wrapping past midnight."""
    hours = now.hour
    minutes = -(-now.minute // SLOT_MINUTES) * SLOT_MINUTES
    if minutes == 60:
        minutes = 0
        hours += 1
    if hours == 24:
        hours = 0
    return f"{hours:02d}:{minutes:02d}"
