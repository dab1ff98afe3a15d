"""Parsing and validation of single result fields.

Every function takes one raw text value and either returns its canonical
form or raises a NormalizationError subclass naming the failure:

    parse_duration("18:30.45")   -> 1110.45
    parse_duration("1:02:03")    -> 3723.0
    parse_gender("f")            -> Gender.FEMALE
    parse_decimal("5000")        -> 5000.0
"""

import math
import re

from wvruns.errors import InvalidEnum, MalformedDuration, MalformedNumber, OutOfRange
from wvruns.models.athlete import Gender

# Ten hours. Anything longer is almost certainly a mis-keyed time.
MAX_DURATION_SECONDS = 36000

METERS_PER_MILE = 1609.34

WHOLE_NUMBER_PATTERN = re.compile(r"^\d+$")

# Plain decimal notation: optional minus, digits, optional fraction.
DECIMAL_PATTERN = re.compile(r"^-?(\d+(\.\d*)?|\.\d+)$")


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def _to_float(text: str) -> float | None:
    if not DECIMAL_PATTERN.match(text):
        return None
    number = float(text)
    return number if math.isfinite(number) else None


def parse_duration(value: str) -> float:
    """Parse an elapsed time into seconds.

    Accepted forms:
    - bare seconds: "1110.45", "95"
    - minutes and seconds: "18:30.45", "20:15"
    - hours, minutes and seconds: "1:02:03", "2:05:30.5"

    Raises:
        MalformedDuration: empty input, wrong number of parts, a non-numeric
            part, or a negative or non-finite total
    """
    if _is_blank(value):
        raise MalformedDuration("Time is empty", value)

    text = value.strip()
    parts = text.split(":")

    if len(parts) == 1:
        seconds = _to_float(text)
        if seconds is None or seconds < 0:
            raise MalformedDuration(f"Invalid time value: '{value}'", value)
        return seconds

    if len(parts) not in (2, 3):
        raise MalformedDuration(
            f"Invalid time format: '{value}'. Expected SS.ss, M:SS.ss or H:MM:SS.ss", value
        )

    *whole_parts, seconds_part = (p.strip() for p in parts)
    if not all(WHOLE_NUMBER_PATTERN.match(p) for p in whole_parts):
        raise MalformedDuration(f"Invalid time value: '{value}'", value)

    seconds = _to_float(seconds_part) if seconds_part else None
    if seconds is None or seconds < 0:
        raise MalformedDuration(f"Invalid time value: '{value}'", value)

    if len(whole_parts) == 1:
        hours, minutes = 0, int(whole_parts[0])
    else:
        hours, minutes = int(whole_parts[0]), int(whole_parts[1])

    total = hours * 3600 + minutes * 60 + seconds
    if not math.isfinite(total):
        raise MalformedDuration(f"Invalid time value: '{value}'", value)
    return total


def validate_duration_range(seconds: float) -> float:
    """Reject durations longer than MAX_DURATION_SECONDS.

    Raises:
        OutOfRange: seconds is over the limit
    """
    if seconds > MAX_DURATION_SECONDS:
        raise OutOfRange(
            f"Time seems unusually long ({seconds}s = {round(seconds / 60)} minutes). "
            "Please verify this is correct",
            seconds,
        )
    return seconds


def round_hundredths(seconds: float) -> float:
    """Round to hundredths of a second, halves away from zero."""
    scaled = math.floor(abs(seconds) * 100 + 0.5)
    return math.copysign(scaled / 100, seconds)


def normalize_time(value: str) -> float:
    """Parse, round and range-check a time to its stored form.

    Rounding comes first, so the limit applies to the stored value.
    """
    return validate_duration_range(round_hundredths(parse_duration(value)))


def parse_gender(value: str | None) -> Gender | None:
    """Parse a gender code. Blank means unknown and is allowed.

    Raises:
        InvalidEnum: anything other than M or F (any case)
    """
    if _is_blank(value):
        return None
    code = value.strip().upper()
    try:
        return Gender(code)
    except ValueError:
        raise InvalidEnum(f"Invalid gender value: '{value}'. Expected M or F", value) from None


def parse_decimal(value: str | None) -> float | None:
    """Parse an optional decimal number. Blank yields None.

    Raises:
        MalformedNumber: non-numeric or non-finite input
    """
    if _is_blank(value):
        return None
    number = _to_float(value.strip())
    if number is None:
        raise MalformedNumber(f"Invalid number: '{value}'", value)
    return number


def parse_place(value: str | None) -> int | None:
    """Parse an optional finishing place, which must be a whole number.

    Raises:
        MalformedNumber: non-numeric, fractional or negative input
    """
    number = parse_decimal(value)
    if number is None:
        return None
    if number < 0 or not number.is_integer():
        raise MalformedNumber(f"Invalid place value: '{value}'", value)
    return int(number)


def format_duration(seconds: float) -> str:
    """Format seconds as M:SS.ss, e.g. 1110.45 -> '18:30.45'."""
    centiseconds = math.floor(seconds * 100 + 0.5)
    minutes, remainder = divmod(centiseconds, 6000)
    secs, hundredths = divmod(remainder, 100)
    return f"{minutes}:{secs:02d}.{hundredths:02d}"


def calculate_pace(seconds: float, distance_meters: float | None = 5000) -> str | None:
    """Per-mile pace as M:SS, or None when it cannot be computed.

    Distance defaults to 5000 m, the standard high school course.
    """
    distance = distance_meters or 5000
    if seconds <= 0 or distance <= 0:
        return None
    pace = seconds / (distance / METERS_PER_MILE)
    minutes, secs = divmod(int(pace), 60)
    return f"{minutes}:{secs:02d}"
