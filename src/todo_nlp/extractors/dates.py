"""Due date extraction."""

import logging
from datetime import date, timedelta
from re import Match
from typing import Optional

from ..models import TokenKind
from ..patterns import (
    ABSOLUTE_DATE_PATTERNS,
    RELATIVE_DATE_PATTERNS,
    SPECIAL_DATE_PATTERNS,
    WEEK_MODIFIER_PATTERN,
    WEEK_MODIFIER_WEEKS,
    WEEKDAY_MAP,
    WEEKDAY_PATTERN,
    SpecialDate,
)
from ..utils.datetime import (
    add_months,
    end_of_month,
    next_weekday,
    to_iso_date,
    upcoming_month_day,
    weekday_in_week,
)
from .base import ExtractionResult, ParseContext, consume, first_valid, no_match

logger = logging.getLogger(__name__)


def resolve_special_date(special: SpecialDate, today: date) -> date:
    """Resolve a calendar-relative phrase against ``today``."""
    if special == SpecialDate.END_OF_MONTH:
        return end_of_month(today)
    if special in (SpecialDate.NEXT_MONTH, SpecialDate.NEXT_MONTH_START):
        return add_months(today, 1, day=1)
    if special == SpecialDate.NEXT_MONTH_END:
        return end_of_month(add_months(today, 1, day=1))
    raise ValueError(f"Unknown special date: {special}")


def _valid_month_day(month: int, day: int) -> bool:
    return 1 <= month <= 12 and 1 <= day <= 31


def extract_date(text: str, context: Optional[ParseContext] = None) -> ExtractionResult[str]:
    """Extract a due date as an ISO ``YYYY-MM-DD`` string.

    Tried in order, most specific first:

    1. 이번 주 / 다음 주 / 다다음 주 + weekday; 이번 주 never resolves before
       today, the other two address the next calendar weeks
    2. full year-month-day (2025년 12월 25일, 2025-12-25)
    3. month-day (12월 25일); rolls to next year once passed
    4. relative day (오늘, 내일, 모레, ...)
    5. special phrases (이번 달 말, 다음 달, ...)
    6. bare weekday; always strictly after today
    7. ``M/D`` or ``M-D``; same rollover as 3
    """
    context = context or ParseContext()
    today = context.today

    def week_modifier(match: Match) -> Optional[date]:
        weeks_ahead = WEEK_MODIFIER_WEEKS[match.group(1)]
        weekday = WEEKDAY_MAP[match.group(2)]
        return weekday_in_week(today, weekday, weeks_ahead, context.config.first_day_of_week)

    def full_date(match: Match) -> Optional[date]:
        try:
            return date(int(match.group(1)), int(match.group(2)), int(match.group(3)))
        except ValueError:
            return None

    def month_day(match: Match) -> Optional[date]:
        month, day = int(match.group(1)), int(match.group(2))
        if not _valid_month_day(month, day):
            return None
        return upcoming_month_day(today, month, day)

    def bare_weekday(match: Match) -> Optional[date]:
        return next_weekday(today, WEEKDAY_MAP[match.group(1)])

    candidates = [
        (WEEK_MODIFIER_PATTERN, week_modifier),
        (ABSOLUTE_DATE_PATTERNS["full_date"], full_date),
        (ABSOLUTE_DATE_PATTERNS["iso_date"], full_date),
        (ABSOLUTE_DATE_PATTERNS["month_day"], month_day),
    ]
    for pattern, days in RELATIVE_DATE_PATTERNS:
        candidates.append((pattern, lambda match, days=days: today + timedelta(days=days)))
    for pattern, special in SPECIAL_DATE_PATTERNS:
        candidates.append((pattern, lambda match, special=special: resolve_special_date(special, today)))
    candidates.append((WEEKDAY_PATTERN, bare_weekday))
    candidates.append((ABSOLUTE_DATE_PATTERNS["slash_date"], month_day))

    for pattern, convert in candidates:
        found = first_valid(pattern, text, convert)
        if found:
            match, resolved = found
            iso_date = to_iso_date(resolved)
            logger.debug(f"Date {iso_date} from '{match.group(0)}'")
            return consume(text, match, TokenKind.DATE, iso_date)

    return no_match(text)
