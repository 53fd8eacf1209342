from __future__ import annotations

import math
import re
from typing import Any

from app.application.exceptions import ValidationError
from app.domain.entities.booking import Slot

DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)
TIME_PATTERN = re.compile(r"\d{2}:\d{2}", re.ASCII)
# String forms JS Number() accepts: signed decimals with optional exponent,
# and unsigned 0x/0o/0b integer literals.
DECIMAL_PATTERN = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)
RADIX_PATTERN = re.compile(r"0[xX][0-9a-fA-F]+|0[oO][0-7]+|0[bB][01]+", re.ASCII)
MINUTES_PER_DAY = 24 * 60

INVALID_INPUT_MESSAGE = "Invalid date, time, or duration."
CROSSES_MIDNIGHT_MESSAGE = "Meeting cannot cross midnight."


def to_minutes(time: str) -> int:
    hours, minutes = time.split(":")
    return int(hours) * 60 + int(minutes)


def coerce_duration(value: Any) -> int | None:
    """Coerce a raw duration to an int, or None if it is not an integral number."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        value = value.strip()
        if RADIX_PATTERN.fullmatch(value):
            return int(value, 0)
        if not DECIMAL_PATTERN.fullmatch(value):
            return None
        value = float(value)
    if isinstance(value, float):
        if not math.isfinite(value) or not value.is_integer():
            return None
        return int(value)
    return None


def validate(date: Any, time: Any, duration: Any) -> Slot:
    """
    Normalize a raw (date, time, duration) triple into a Slot.
    Raises ValidationError with a generic message for any malformed field,
    or a midnight message when the meeting would end after 24:00.
    """
    date = date if isinstance(date, str) else ""
    time = time if isinstance(time, str) else ""
    minutes = coerce_duration(duration)

    if not DATE_PATTERN.fullmatch(date) or not TIME_PATTERN.fullmatch(time) or minutes is None or minutes <= 0:
        raise ValidationError(INVALID_INPUT_MESSAGE)

    start_minutes = to_minutes(time)
    end_minutes = start_minutes + minutes
    if end_minutes > MINUTES_PER_DAY:
        raise ValidationError(CROSSES_MIDNIGHT_MESSAGE)

    return Slot(
        date=date,
        time=time,
        duration=minutes,
        start_minutes=start_minutes,
        end_minutes=end_minutes,
    )
