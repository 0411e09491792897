"""Display formatting for parsed task input.

Purely presentational: every function here reads an already parsed value and
returns a Korean display string. Nothing is re-parsed.
"""

from datetime import date
from typing import List, Optional

from .models import ParsedResult, PreviewResult, Priority, RecurrenceRule, RecurrenceType
from .utils.datetime import local_today, parse_iso_date, sunday_weekday

WEEKDAY_LABELS = ["일", "월", "화", "수", "목", "금", "토"]

RELATIVE_DAY_LABELS = {
    0: "오늘",
    1: "내일",
    2: "모레",
}

PRIORITY_LABELS = {
    Priority.HIGH: "높음",
    Priority.MEDIUM: "보통",
    Priority.LOW: "낮음",
}

RECURRENCE_LABELS = {
    RecurrenceType.DAILY: "매일",
    RecurrenceType.WEEKLY: "매주",
    RecurrenceType.MONTHLY: "매월",
    RecurrenceType.YEARLY: "매년",
}

INTERVAL_UNITS = {
    RecurrenceType.DAILY: "일",
    RecurrenceType.WEEKLY: "주",
    RecurrenceType.MONTHLY: "개월",
    RecurrenceType.YEARLY: "년",
}


def format_date_display(iso_date: str, today: Optional[date] = None) -> str:
    """Describe a due date relative to today (오늘, 내일, 금요일, 12월 25일)."""
    today = today or local_today()
    target = parse_iso_date(iso_date)
    diff_days = (target - today).days

    if diff_days in RELATIVE_DAY_LABELS:
        return RELATIVE_DAY_LABELS[diff_days]
    if 0 < diff_days < 7:
        return f"{WEEKDAY_LABELS[sunday_weekday(target)]}요일"
    if target.year != today.year:
        return f"{target.year}년 {target.month}월 {target.day}일"
    return f"{target.month}월 {target.day}일"


def format_time_display(clock: str) -> str:
    """Render ``HH:MM`` as 오전/오후 with a 12-hour clock."""
    hour_str, minute_str = clock.split(":")
    hour, minute = int(hour_str), int(minute_str)

    period = "오전" if hour < 12 else "오후"
    display_hour = hour - 12 if hour > 12 else (12 if hour == 0 else hour)

    if minute == 0:
        return f"{period} {display_hour}시"
    return f"{period} {display_hour}시 {minute}분"


def format_priority_display(priority: Priority) -> str:
    return PRIORITY_LABELS[priority]


def format_tags_display(tags: List[str]) -> List[str]:
    return [f"#{tag}" for tag in tags]


def format_recurrence_display(recurrence: RecurrenceRule) -> str:
    """Describe a recurrence rule (매일, 2주마다, 매주 월, 수요일)."""
    if recurrence.days_of_week:
        day_names = ", ".join(WEEKDAY_LABELS[day] for day in recurrence.days_of_week)
        prefix = "매주" if recurrence.interval == 1 else f"{recurrence.interval}주마다"
        return f"{prefix} {day_names}요일"

    if recurrence.interval > 1:
        return f"{recurrence.interval}{INTERVAL_UNITS[recurrence.type]}마다"

    return RECURRENCE_LABELS[recurrence.type]


def build_preview(result: ParsedResult, today: Optional[date] = None) -> PreviewResult:
    """Map a parsed result to display flags and strings."""
    return PreviewResult(
        has_date=result.due_date is not None,
        has_time=result.due_time is not None,
        has_priority=result.priority is not None,
        has_tags=bool(result.tags),
        has_recurrence=result.recurrence is not None,
        date_display=format_date_display(result.due_date, today) if result.due_date else None,
        time_display=format_time_display(result.due_time) if result.due_time else None,
        priority_display=format_priority_display(result.priority) if result.priority else None,
        tags_display=format_tags_display(result.tags) if result.tags else None,
        recurrence_display=format_recurrence_display(result.recurrence) if result.recurrence else None,
    )
