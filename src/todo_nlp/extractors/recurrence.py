"""Recurrence extraction."""

import logging
from re import Match
from typing import Optional

from ..models import RecurrenceRule, RecurrenceType, TokenKind
from ..patterns import (
    DAY_IN_LIST_PATTERN,
    INTERVAL_RECURRENCE_PATTERNS,
    RECURRENCE_PATTERNS,
    WEEKDAY_EVERY_PATTERN,
    WEEKDAY_MAP,
    WEEKLY_MARKER_INTERVALS,
    WEEKLY_RECURRENCE_WITH_DAY_PATTERN,
)
from .base import ExtractionResult, ParseContext, consume, first_valid, no_match

logger = logging.getLogger(__name__)


def _weekly_with_days(match: Match) -> Optional[RecurrenceRule]:
    marker, day_list = match.group(1), match.group(2)
    days = tuple(WEEKDAY_MAP[day.group(1)] for day in DAY_IN_LIST_PATTERN.finditer(day_list))
    if not days:
        return None
    return RecurrenceRule(RecurrenceType.WEEKLY, WEEKLY_MARKER_INTERVALS[marker], days)


def _weekday_every(match: Match) -> Optional[RecurrenceRule]:
    return RecurrenceRule(RecurrenceType.WEEKLY, 1, (WEEKDAY_MAP[match.group(1)],))


def extract_recurrence(text: str, context: Optional[ParseContext] = None) -> ExtractionResult[RecurrenceRule]:
    """Extract a recurrence rule.

    Order: weekday-qualified weekly (매주 월요일, 월요일마다), numeric interval
    (3일마다, 2주마다, 3개월마다, 1년마다), then generic markers (매일, 격주,
    매주, 매월, 매년). An interval of zero is not a recurrence.
    """
    # 1. 요일 지정 반복
    for pattern, convert in ((WEEKLY_RECURRENCE_WITH_DAY_PATTERN, _weekly_with_days),
                             (WEEKDAY_EVERY_PATTERN, _weekday_every)):
        found = first_valid(pattern, text, convert)
        if found:
            match, rule = found
            logger.debug(f"Weekly recurrence on days {rule.days_of_week} from '{match.group(0)}'")
            return consume(text, match, TokenKind.RECURRENCE, rule)

    # 2. N일/주/개월/년마다
    for recurrence_type, pattern in INTERVAL_RECURRENCE_PATTERNS:
        def interval_rule(match: Match, recurrence_type=recurrence_type) -> Optional[RecurrenceRule]:
            interval = int(match.group(1))
            if interval < 1:
                return None
            return RecurrenceRule(recurrence_type, interval)

        found = first_valid(pattern, text, interval_rule)
        if found:
            match, rule = found
            logger.debug(f"Every {rule.interval} {rule.type.value} from '{match.group(0)}'")
            return consume(text, match, TokenKind.RECURRENCE, rule)

    # 3. 매일, 격주, 매주, 매월, 매년
    for pattern, recurrence_type, interval in RECURRENCE_PATTERNS:
        match = pattern.search(text)
        if match:
            rule = RecurrenceRule(recurrence_type, interval)
            logger.debug(f"Recurrence {recurrence_type.value} from '{match.group(0)}'")
            return consume(text, match, TokenKind.RECURRENCE, rule)

    return no_match(text)
