"""Time-of-day extraction."""

import logging
from re import Match
from typing import Optional

from ..models import TokenKind
from ..patterns import (
    AM_PM_TIME_PATTERNS,
    APPROXIMATE_TIME_MAP,
    APPROXIMATE_TIME_PATTERN,
    BARE_HOUR_AM_RANGE,
    BARE_HOUR_PM_RANGE,
    NIGHT_PM_RANGE,
    SIMPLE_TIME_PATTERNS,
)
from .base import ExtractionResult, ParseContext, consume, first_valid, no_match

logger = logging.getLogger(__name__)


def format_time(hour: int, minute: int = 0) -> str:
    """Format a clock time as ``HH:MM``."""
    return f"{hour:02d}:{minute:02d}"


def infer_period(hour: int) -> str:
    """Guess AM/PM for an hour written without a marker.

    - 1-6: PM (tasks at 1-6 AM are rare)
    - 7-11: AM
    - 12: PM (noon)
    """
    if hour in BARE_HOUR_PM_RANGE:
        return "pm"
    if hour in BARE_HOUR_AM_RANGE:
        return "am"
    return "pm"


def to_24_hour(hour: int, period: str) -> int:
    """Convert a 12-hour clock hour to 24-hour."""
    if period == "am":
        return 0 if hour == 12 else hour
    return 12 if hour == 12 else hour + 12


def _minute(match: Match) -> Optional[int]:
    if match.group(3):  # 반
        return 30
    if match.group(2) is None:
        return 0
    minute = int(match.group(2))
    return minute if 0 <= minute <= 59 else None


def _marked_time(period: str):
    def convert(match: Match) -> Optional[str]:
        hour = int(match.group(1))
        minute = _minute(match)
        if minute is None:
            return None
        if 1 <= hour <= 12:
            if period == "night":
                return format_time(to_24_hour(hour, "pm" if hour in NIGHT_PM_RANGE else "am"), minute)
            return format_time(to_24_hour(hour, period), minute)
        # 오전 0시, 오후 15시 already read as 24-hour values
        if period in ("am", "night") and hour == 0:
            return format_time(0, minute)
        if period in ("pm", "night") and 13 <= hour <= 23:
            return format_time(hour, minute)
        return None
    return convert


def _twenty_four_hour(match: Match) -> Optional[str]:
    hour, minute = int(match.group(1)), int(match.group(2))
    if 0 <= hour <= 23 and 0 <= minute <= 59:
        return format_time(hour, minute)
    return None


def _bare_hour(match: Match) -> Optional[str]:
    hour = int(match.group(1))
    minute = _minute(match)
    if minute is None:
        return None
    if 1 <= hour <= 12:
        return format_time(to_24_hour(hour, infer_period(hour)), minute)
    if 0 <= hour <= 23:
        return format_time(hour, minute)
    return None


def extract_time(text: str, context: Optional[ParseContext] = None) -> ExtractionResult[str]:
    """Extract a time of day as a 24-hour ``HH:MM`` string.

    Tried in order: AM marker + hour, PM marker + hour, 밤 + hour, ``HH:MM``,
    approximate period words (아침, 저녁, ...), and finally a bare ``N시`` whose
    period is inferred. Out-of-range values do not match and scanning falls
    through.
    """
    period_times = context.config.period_times if context else APPROXIMATE_TIME_MAP

    def approximate(match: Match) -> Optional[str]:
        return period_times.get(match.group(1))

    candidates = (
        (AM_PM_TIME_PATTERNS["am"], _marked_time("am")),
        (AM_PM_TIME_PATTERNS["pm"], _marked_time("pm")),
        (AM_PM_TIME_PATTERNS["night"], _marked_time("night")),
        (SIMPLE_TIME_PATTERNS["twenty_four_hour"], _twenty_four_hour),
        (APPROXIMATE_TIME_PATTERN, approximate),
        (SIMPLE_TIME_PATTERNS["hour_minute"], _bare_hour),
    )

    for pattern, convert in candidates:
        found = first_valid(pattern, text, convert)
        if found:
            match, clock = found
            logger.debug(f"Time {clock} from '{match.group(0)}'")
            return consume(text, match, TokenKind.TIME, clock)

    return no_match(text)
