"""Tests for the individual field extractors."""

from datetime import date, timedelta

import pytest

from todo_nlp.config import ParserConfig
from todo_nlp.extractors import (
    ParseContext,
    extract_date,
    extract_priority,
    extract_recurrence,
    extract_tags,
    extract_time,
)
from todo_nlp.models import Priority, RecurrenceRule, RecurrenceType, TokenKind


def leftover(result) -> str:
    """Readable form of an extractor's remaining text."""
    return " ".join(result.remaining.split())


class TestTagExtractor:
    """Test hashtag extraction."""

    def test_extracts_all_tags_in_order(self):
        result = extract_tags("#업무 #공부 회의")

        assert result.value == ["업무", "공부"]
        assert leftover(result) == "회의"
        assert [token.kind for token in result.tokens] == [TokenKind.TAG, TokenKind.TAG]

    def test_duplicate_tags_are_listed_once(self):
        """Duplicates still produce a token each."""
        result = extract_tags("#운동 아침 조깅 #운동")

        assert result.value == ["운동"]
        assert len(result.tokens) == 2
        assert leftover(result) == "아침 조깅"

    def test_offsets_point_into_the_input(self):
        text = "회의 준비 #업무 #팀"
        result = extract_tags(text)

        for token in result.tokens:
            assert text[token.start:token.end] == token.raw_text
        assert result.tokens[0].start == 6

    def test_no_tags(self):
        result = extract_tags("장보기")

        assert result.value is None
        assert result.remaining == "장보기"
        assert result.tokens == ()

    def test_lone_hash_is_not_a_tag(self):
        assert extract_tags("# 메모").value is None

    def test_remaining_keeps_length(self):
        text = "#a 보고서 #b"
        assert len(extract_tags(text).remaining) == len(text)


class TestPriorityExtractor:
    """Test priority cue extraction."""

    @pytest.mark.parametrize("text,expected", [
        ("중요 보고서", Priority.HIGH),
        ("긴급 서버 점검", Priority.HIGH),
        ("보고서 !!", Priority.HIGH),
        ("나중에 책 정리", Priority.LOW),
        ("천천히 블로그 글쓰기", Priority.LOW),
        ("보통 메일 확인", Priority.MEDIUM),
        ("메일 확인 !", Priority.MEDIUM),
    ])
    def test_cue_words(self, text, expected):
        assert extract_priority(text).value == expected

    def test_high_wins_over_low(self):
        result = extract_priority("나중에 해도 되지만 중요")

        assert result.value == Priority.HIGH
        assert "나중에" in result.remaining

    def test_low_wins_over_medium(self):
        assert extract_priority("언젠가 ! 여행 계획").value == Priority.LOW

    def test_only_first_cue_is_removed(self):
        result = extract_priority("중요 중요 회의")

        assert leftover(result) == "중요 회의"
        assert len(result.tokens) == 1

    def test_no_priority(self):
        result = extract_priority("장보기")

        assert result.value is None
        assert result.tokens == ()


class TestRecurrenceExtractor:
    """Test recurrence extraction."""

    def test_every_monday(self):
        result = extract_recurrence("매주 월요일 청소")

        assert result.value == RecurrenceRule(RecurrenceType.WEEKLY, 1, (1,))
        assert leftover(result) == "청소"

    def test_weekday_list(self):
        assert extract_recurrence("매주 월수금 운동").value.days_of_week == (1, 3, 5)
        assert extract_recurrence("매주 월, 수요일 회의").value.days_of_week == (1, 3)

    def test_weekday_with_every_suffix(self):
        result = extract_recurrence("금요일마다 주간 보고")

        assert result.value == RecurrenceRule(RecurrenceType.WEEKLY, 1, (5,))
        assert leftover(result) == "주간 보고"

    def test_biweekly_weekday(self):
        assert extract_recurrence("격주 화요일 독서 모임").value == RecurrenceRule(RecurrenceType.WEEKLY, 2, (2,))

    def test_weekly_marker_before_non_weekday_word(self):
        """화분 starts with 화 but is not Tuesday."""
        result = extract_recurrence("매주 화분 물주기")

        assert result.value == RecurrenceRule(RecurrenceType.WEEKLY, 1)
        assert leftover(result) == "화분 물주기"

    @pytest.mark.parametrize("text,recurrence_type,interval", [
        ("3일마다 물주기", RecurrenceType.DAILY, 3),
        ("2주마다 분리수거", RecurrenceType.WEEKLY, 2),
        ("3개월마다 치과", RecurrenceType.MONTHLY, 3),
        ("2달마다 미용실", RecurrenceType.MONTHLY, 2),
        ("1년마다 건강검진", RecurrenceType.YEARLY, 1),
    ])
    def test_numeric_interval(self, text, recurrence_type, interval):
        rule = extract_recurrence(text).value

        assert rule.type == recurrence_type
        assert rule.interval == interval
        assert rule.days_of_week is None

    @pytest.mark.parametrize("text,recurrence_type,interval", [
        ("매일 운동", RecurrenceType.DAILY, 1),
        ("매주 회고", RecurrenceType.WEEKLY, 1),
        ("격주 회고", RecurrenceType.WEEKLY, 2),
        ("매월 가계부", RecurrenceType.MONTHLY, 1),
        ("매달 가계부", RecurrenceType.MONTHLY, 1),
        ("매년 자동차 보험", RecurrenceType.YEARLY, 1),
    ])
    def test_generic_markers(self, text, recurrence_type, interval):
        assert extract_recurrence(text).value == RecurrenceRule(recurrence_type, interval)

    def test_zero_interval_is_rejected(self):
        result = extract_recurrence("0일마다 물주기")

        assert result.value is None
        assert result.remaining == "0일마다 물주기"

    def test_token_value_is_the_rule(self):
        result = extract_recurrence("매일 운동")

        assert result.tokens[0].kind == TokenKind.RECURRENCE
        assert result.tokens[0].value == result.value
        assert result.tokens[0].raw_text == "매일"


class TestTimeExtractor:
    """Test time extraction."""

    @pytest.mark.parametrize("text,expected", [
        ("오전 9시 회의", "09:00"),
        ("오전 12시 알람", "00:00"),
        ("오전 10시 30분 미팅", "10:30"),
        ("오후 3시 회의", "15:00"),
        ("오후 12시 점심 약속", "12:00"),
        ("오후 3시 반 통화", "15:30"),
        ("저녁 7시 약속", "19:00"),
        ("아침 7시 조깅", "07:00"),
    ])
    def test_period_markers(self, text, expected):
        assert extract_time(text).value == expected

    @pytest.mark.parametrize("text,expected", [
        ("밤 10시 통화", "22:00"),
        ("밤 11시 반 일기", "23:30"),
        ("밤 6시 산책", "18:00"),
        ("밤 1시 약 먹기", "01:00"),
        ("밤 5시 출발", "05:00"),
        ("밤 12시 알람", "00:00"),
    ])
    def test_night_marker_spans_midnight(self, text, expected):
        result = extract_time(text)

        assert result.value == expected
        assert result.tokens[0].raw_text.startswith("밤")

    def test_twenty_four_hour(self):
        result = extract_time("15:30 회의")

        assert result.value == "15:30"
        assert leftover(result) == "회의"

    def test_invalid_twenty_four_hour_falls_through(self):
        result = extract_time("25:00 회의 3시")

        assert result.value == "15:00"
        assert leftover(result) == "25:00 회의"

    def test_invalid_twenty_four_hour_only(self):
        assert extract_time("25:00 회의").value is None

    @pytest.mark.parametrize("text,expected", [
        ("저녁 약속", "18:00"),
        ("아침 운동", "09:00"),
        ("점심 약속", "12:00"),
        ("오후에 전화", "14:00"),
        ("밤에 일기 쓰기", "21:00"),
        ("새벽 배송 확인", "06:00"),
        ("정오 회의", "12:00"),
        ("자정 택배 확인", "00:00"),
    ])
    def test_approximate_words(self, text, expected):
        assert extract_time(text).value == expected

    @pytest.mark.parametrize("hour", range(1, 7))
    def test_bare_early_hours_are_pm(self, hour):
        assert extract_time(f"{hour}시 미팅").value == f"{hour + 12:02d}:00"

    @pytest.mark.parametrize("hour", range(7, 12))
    def test_bare_morning_hours_are_am(self, hour):
        assert extract_time(f"{hour}시 미팅").value == f"{hour:02d}:00"

    def test_bare_twelve_is_noon(self):
        assert extract_time("12시 미팅").value == "12:00"

    @pytest.mark.parametrize("hour", range(13, 24))
    def test_bare_afternoon_hours_pass_through(self, hour):
        assert extract_time(f"{hour}시 미팅").value == f"{hour:02d}:00"

    def test_bare_hour_with_minutes(self):
        assert extract_time("3시 45분 회의").value == "15:45"

    def test_invalid_minute_is_not_a_time(self):
        assert extract_time("3시 75분 회의").value is None

    def test_hour_out_of_range_is_not_a_time(self):
        assert extract_time("24시 편의점").value is None

    def test_invalid_am_hour_falls_back_to_bare_hour(self):
        result = extract_time("오전 13시 회의")

        assert result.value == "13:00"
        assert leftover(result) == "오전 회의"

    def test_duration_is_not_a_time(self):
        assert extract_time("3시간 공부").value is None

    def test_trailing_particle_is_consumed(self):
        result = extract_time("3시에 회의")

        assert result.value == "15:00"
        assert result.tokens[0].raw_text == "3시에"
        assert leftover(result) == "회의"

    def test_period_times_come_from_config(self, today):
        context = ParseContext(today=today, config=ParserConfig(period_times={"저녁": "19:30"}))

        assert extract_time("저녁 약속", context).value == "19:30"

    def test_no_time(self):
        assert extract_time("장보기").value is None


class TestDateExtractor:
    """Test due date extraction against a fixed Wednesday, 2025-12-17."""

    def setup_method(self):
        self.context = ParseContext(today=date(2025, 12, 17))

    def extract(self, text):
        return extract_date(text, self.context)

    @pytest.mark.parametrize("text,expected", [
        ("오늘 장보기", "2025-12-17"),
        ("내일 장보기", "2025-12-18"),
        ("모레 장보기", "2025-12-19"),
        ("글피 장보기", "2025-12-20"),
        ("다음 주 회의", "2025-12-24"),
        ("다다음 주 회의", "2025-12-31"),
    ])
    def test_relative_days(self, text, expected):
        result = self.extract(text)

        assert result.value == expected
        assert leftover(result) == text.split()[-1]

    @pytest.mark.parametrize("text,expected", [
        ("이번 주 금요일 회의", "2025-12-19"),
        ("이번주 월욜 회의", "2025-12-22"),
        ("이번 주 수요일 회의", "2025-12-17"),
        ("다음 주 월요일 회의", "2025-12-22"),
        ("다음주 금요일 회의", "2025-12-26"),
        ("다음 주 일요일 회의", "2025-12-28"),
        ("다음 주 수 회의", "2025-12-24"),
        ("다다음 주 수요일 회의", "2025-12-31"),
    ])
    def test_week_modifier(self, text, expected):
        result = self.extract(text)

        assert result.value == expected
        assert leftover(result) == "회의"

    def test_next_week_stays_inside_next_calendar_week(self):
        today = date(2025, 12, 17)
        for offset in range(7):
            reference = today + timedelta(days=offset)
            context = ParseContext(today=reference)
            for name in ("월요일", "수요일", "일요일"):
                resolved = date.fromisoformat(extract_date(f"다음 주 {name}", context).value)
                assert 1 <= (resolved - reference).days <= 13
                next_monday = reference + timedelta(days=7 - reference.weekday())
                assert next_monday <= resolved < next_monday + timedelta(days=7)

    def test_this_week_never_resolves_to_the_past(self):
        today = date(2025, 12, 17)
        for offset in range(7):
            reference = today + timedelta(days=offset)
            context = ParseContext(today=reference)
            for name in ("월요일", "수요일", "금요일", "일요일"):
                resolved = date.fromisoformat(extract_date(f"이번 주 {name}", context).value)
                assert 0 <= (resolved - reference).days <= 6

    def test_week_start_is_configurable(self):
        context = ParseContext(today=date(2025, 12, 17), config=ParserConfig(first_day_of_week=0))

        assert extract_date("다음 주 일요일", context).value == "2025-12-21"

    def test_next_week_word_not_followed_by_weekday(self):
        """일정 starts with 일 but is not Sunday."""
        assert self.extract("다음 주 일정 확인").value == "2025-12-24"

    @pytest.mark.parametrize("text,expected", [
        ("2025년 12월 25일 파티", "2025-12-25"),
        ("2026년 3월 1일 파티", "2026-03-01"),
        ("2025-12-25 파티", "2025-12-25"),
        ("2026.01.02 파티", "2026-01-02"),
    ])
    def test_full_dates(self, text, expected):
        result = self.extract(text)

        assert result.value == expected
        assert leftover(result) == "파티"

    def test_impossible_full_date_is_rejected(self):
        assert self.extract("2025-02-30 정산").value is None

    def test_month_day_this_year(self):
        assert self.extract("12월 25일 파티").value == "2025-12-25"

    def test_month_day_today_stays_this_year(self):
        assert self.extract("12월 17일 파티").value == "2025-12-17"

    def test_month_day_already_passed_rolls_over(self):
        assert self.extract("3월 1일 파티").value == "2026-03-01"
        assert self.extract("12월 16일 파티").value == "2026-12-16"

    def test_invalid_month_day(self):
        assert self.extract("12월 32일 파티").value is None
        assert self.extract("13월 1일 파티").value is None

    @pytest.mark.parametrize("text,expected", [
        ("이번 달 말 정산", "2025-12-31"),
        ("월말 정산", "2025-12-31"),
        ("이달 말 정산", "2025-12-31"),
        ("다음 달 정산", "2026-01-01"),
        ("다음 달 초 정산", "2026-01-01"),
        ("다음 달 말 정산", "2026-01-31"),
    ])
    def test_special_dates(self, text, expected):
        result = self.extract(text)

        assert result.value == expected
        assert leftover(result) == "정산"

    def test_end_of_february(self):
        context = ParseContext(today=date(2024, 2, 10))

        assert extract_date("이번 달 말 정산", context).value == "2024-02-29"

    @pytest.mark.parametrize("text,expected", [
        ("금요일 회의", "2025-12-19"),
        ("금욜 회의", "2025-12-19"),
        ("월요일 회의", "2025-12-22"),
        ("토 회의", "2025-12-20"),
    ])
    def test_bare_weekday(self, text, expected):
        assert self.extract(text).value == expected

    def test_bare_weekday_never_returns_today(self):
        assert self.extract("수요일 회의").value == "2025-12-24"

    def test_lone_il_is_not_sunday(self):
        """할 일 is a to-do, not a Sunday."""
        result = self.extract("할 일 정리")

        assert result.value is None
        assert result.remaining == "할 일 정리"

    def test_sunday_needs_suffix(self):
        assert self.extract("일요일 등산").value == "2025-12-21"
        assert self.extract("일욜 등산").value == "2025-12-21"
        assert self.extract("다음 주 일 정리").value == "2025-12-24"

    def test_weekday_char_inside_word_is_ignored(self):
        assert self.extract("화분에 물 주기").value is None

    def test_slash_dates(self):
        assert self.extract("12/25 파티").value == "2025-12-25"
        assert self.extract("1-5 파티").value == "2026-01-05"

    def test_slash_date_range_validation(self):
        assert self.extract("13/40 정리").value is None
        assert self.extract("2/30 정리").value is None

    def test_trailing_particle_is_consumed(self):
        result = self.extract("금요일까지 보고서")

        assert result.value == "2025-12-19"
        assert result.tokens[0].raw_text == "금요일까지"
        assert leftover(result) == "보고서"

    def test_default_context_uses_local_today(self):
        expected = (date.today() + timedelta(days=1)).isoformat()

        assert extract_date("내일 장보기").value == expected

    def test_no_date(self):
        result = self.extract("장보기")

        assert result.value is None
        assert result.tokens == ()
