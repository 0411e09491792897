"""Pattern catalog for the natural language parser.

Every surface form the extractors recognise lives here as compiled regular
expressions and lookup tables. Patterns are immutable; extractors always scan
with a fresh ``finditer``/``search`` so no match position is carried between
calls.

Weekday indices are 0=Sunday .. 6=Saturday.
"""

import re
from enum import Enum
from re import Pattern
from typing import Dict, List, Tuple

from .models import Priority, RecurrenceType


# ============================================
# Shared fragments
# ============================================

WEEKDAY_CHARS = "일월화수목금토"

WEEKDAY_MAP: Dict[str, int] = {char: index for index, char in enumerate(WEEKDAY_CHARS)}
WEEKDAY_MAP.update({f"{char}요일": index for index, char in enumerate(WEEKDAY_CHARS)})
WEEKDAY_MAP.update({f"{char}욜": index for index, char in enumerate(WEEKDAY_CHARS)})

WEEKDAY_NAMES: List[str] = [f"{char}요일" for char in WEEKDAY_CHARS]

_DAY_CHAR = f"[{WEEKDAY_CHARS}]"
_DAY_SUFFIX = r"(?:요일|욜)"
_DAY = rf"{_DAY_CHAR}{_DAY_SUFFIX}?"

# Postpositions that may trail a date or time phrase ("금요일까지", "3시에")
PARTICLE = r"(?:까지|에)?"

# A weekday either carries its suffix or stands alone as a single character;
# a lone 일 (할 일) is never Sunday
_WEEKDAY_TAIL = rf"(?:{_DAY_SUFFIX}{PARTICLE}|(?<!일)(?!\w))"


# ============================================
# Date patterns
# ============================================

class SpecialDate(Enum):
    """Calendar-relative phrases resolved by date arithmetic."""
    END_OF_MONTH = "end_of_month"
    NEXT_MONTH = "next_month"
    NEXT_MONTH_START = "next_month_start"
    NEXT_MONTH_END = "next_month_end"


# Checked in order; longer phrases come before the phrases they contain
RELATIVE_DATE_PATTERNS: List[Tuple[Pattern, int]] = [
    (re.compile(rf"다다음\s*주{PARTICLE}"), 14),
    (re.compile(rf"다음\s*주{PARTICLE}"), 7),
    (re.compile(rf"오늘{PARTICLE}"), 0),
    (re.compile(rf"내일{PARTICLE}"), 1),
    (re.compile(rf"모레{PARTICLE}"), 2),
    (re.compile(rf"글피{PARTICLE}"), 3),
]

SPECIAL_DATE_PATTERNS: List[Tuple[Pattern, SpecialDate]] = [
    (re.compile(rf"(?:이번\s*달|이달)\s*말{PARTICLE}"), SpecialDate.END_OF_MONTH),
    (re.compile(rf"월말{PARTICLE}"), SpecialDate.END_OF_MONTH),
    (re.compile(rf"다음\s*달\s*초{PARTICLE}"), SpecialDate.NEXT_MONTH_START),
    (re.compile(rf"다음\s*달\s*말{PARTICLE}"), SpecialDate.NEXT_MONTH_END),
    (re.compile(rf"다음\s*달{PARTICLE}"), SpecialDate.NEXT_MONTH),
]

WEEK_MODIFIER_WEEKS: Dict[str, int] = {
    "이번": 0,
    "다음": 1,
    "다다음": 2,
}

# 이번 주 금요일, 다음주 월욜, 다다음 주 수
WEEK_MODIFIER_PATTERN = re.compile(rf"(다다음|다음|이번)\s*주\s*({_DAY_CHAR}){_WEEKDAY_TAIL}")

# 금요일, 금욜, or a standalone 금
WEEKDAY_PATTERN = re.compile(rf"(?<!\w)({_DAY_CHAR}){_WEEKDAY_TAIL}")

ABSOLUTE_DATE_PATTERNS: Dict[str, Pattern] = {
    # 2025년 12월 25일
    "full_date": re.compile(rf"(?<!\d)(\d{{4}})\s*년\s*(\d{{1,2}})\s*월\s*(\d{{1,2}})\s*일{PARTICLE}"),
    # 2025-12-25, 2025.12.25, 2025/12/25
    "iso_date": re.compile(rf"(?<!\d)(\d{{4}})[-./](\d{{1,2}})[-./](\d{{1,2}})(?![\d./-]){PARTICLE}"),
    # 12월 25일
    "month_day": re.compile(rf"(?<!\d)(\d{{1,2}})\s*월\s*(\d{{1,2}})\s*일{PARTICLE}"),
    # 12/25 또는 12-25
    "slash_date": re.compile(rf"(?<![\d./-])(\d{{1,2}})[/-](\d{{1,2}})(?![\d./-]){PARTICLE}"),
}


# ============================================
# Time patterns
# ============================================

AM_MARKERS = ("오전", "아침", "새벽")
PM_MARKERS = ("오후", "저녁", "점심")
NIGHT_MARKERS = ("밤",)

# 3시, 3시 30분, 3시 반; never 3시간
_HOUR_MINUTE = r"(\d{1,2})\s*시(?!간)(?:\s*(\d{1,2})\s*분|\s*(반))?"

AM_PM_TIME_PATTERNS: Dict[str, Pattern] = {
    "am": re.compile(rf"(?:{'|'.join(AM_MARKERS)})\s*{_HOUR_MINUTE}{PARTICLE}"),
    "pm": re.compile(rf"(?:{'|'.join(PM_MARKERS)})\s*{_HOUR_MINUTE}{PARTICLE}"),
    # 밤 spans midnight: 밤 10시 is 22:00, 밤 1시 is 01:00, 밤 12시 is 00:00
    "night": re.compile(rf"(?:{'|'.join(NIGHT_MARKERS)})\s*{_HOUR_MINUTE}{PARTICLE}"),
}

# 밤 6-11시 read as PM; 밤 1-5시 and 12시 fall after midnight
NIGHT_PM_RANGE = range(6, 12)

SIMPLE_TIME_PATTERNS: Dict[str, Pattern] = {
    # 15:30
    "twenty_four_hour": re.compile(rf"(?<![\d:])(\d{{1,2}}):(\d{{2}})(?![\d:]){PARTICLE}"),
    # 3시, 3시 30분
    "hour_minute": re.compile(rf"(?<!\d){_HOUR_MINUTE}{PARTICLE}"),
}

# Canonical clock times for approximate period words
APPROXIMATE_TIME_MAP: Dict[str, str] = {
    "아침": "09:00",
    "점심": "12:00",
    "오후": "14:00",
    "저녁": "18:00",
    "밤": "21:00",
    "새벽": "06:00",
    "정오": "12:00",
    "자정": "00:00",
}

APPROXIMATE_TIME_PATTERN = re.compile(
    rf"({'|'.join(APPROXIMATE_TIME_MAP)}){PARTICLE}(?!\w)"
)

# Bare hours without a period marker: 1-6 read as PM, 7-11 as AM, 12 as noon
BARE_HOUR_PM_RANGE = range(1, 7)
BARE_HOUR_AM_RANGE = range(7, 12)


# ============================================
# Priority patterns
# ============================================

# Checked in this order: High, then Low, then Medium
PRIORITY_PATTERNS: List[Tuple[Priority, Pattern]] = [
    (Priority.HIGH, re.compile(r"중요|급함|급해|빨리|시급|긴급|!!|\*\*")),
    (Priority.LOW, re.compile(r"나중에|언젠가|천천히|여유|낮음")),
    (Priority.MEDIUM, re.compile(r"보통|일반|!")),
]


# ============================================
# Tag patterns
# ============================================

TAG_PATTERN = re.compile(r"#([^\s#]+)")


# ============================================
# Recurrence patterns
# ============================================

# 매주 월요일, 매주 월수금, 매주 월, 수요일마다, 격주 화요일
WEEKLY_RECURRENCE_WITH_DAY_PATTERN = re.compile(
    rf"(매주|격주)\s*({_DAY}(?:\s*[,/·]\s*{_DAY}|{_DAY})*)(?:\s*마다)?(?:에)?(?!\w)"
)

WEEKLY_MARKER_INTERVALS: Dict[str, int] = {
    "매주": 1,
    "격주": 2,
}

# 월요일마다
WEEKDAY_EVERY_PATTERN = re.compile(rf"({_DAY_CHAR}){_DAY_SUFFIX}\s*마다")

DAY_IN_LIST_PATTERN = re.compile(rf"({_DAY_CHAR}){_DAY_SUFFIX}?")

# 3일마다, 2주마다, 3개월마다, 1년마다
INTERVAL_RECURRENCE_PATTERNS: List[Tuple[RecurrenceType, Pattern]] = [
    (RecurrenceType.DAILY, re.compile(r"(?<!\d)(\d+)\s*일\s*마다")),
    (RecurrenceType.WEEKLY, re.compile(r"(?<!\d)(\d+)\s*주\s*마다")),
    (RecurrenceType.MONTHLY, re.compile(r"(?<!\d)(\d+)\s*(?:개월|달)\s*마다")),
    (RecurrenceType.YEARLY, re.compile(r"(?<!\d)(\d+)\s*년\s*마다")),
]

RECURRENCE_PATTERNS: List[Tuple[Pattern, RecurrenceType, int]] = [
    (re.compile(r"매일"), RecurrenceType.DAILY, 1),
    (re.compile(r"격주"), RecurrenceType.WEEKLY, 2),
    (re.compile(r"매주"), RecurrenceType.WEEKLY, 1),
    (re.compile(r"매월|매달"), RecurrenceType.MONTHLY, 1),
    (re.compile(r"매년"), RecurrenceType.YEARLY, 1),
]
