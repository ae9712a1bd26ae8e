"""
Tests for the temporal resolver.

All dates are resolved against Monday 2024-03-11 09:00 unless stated.
"""

from datetime import date, datetime, time, timedelta, timezone

import pytest

from tasksense.models import (
    AbsoluteDate,
    NamedWeekday,
    RelativeDay,
    RelativeDeadline,
    Segment,
    Weekday,
    WindowKind,
)


def resolve(resolver, text, reference):
    resolved, _ = resolver.resolve_text(text, reference)
    return resolved


class TestRecognition:
    """Test which expression variant a phrase produces."""

    def test_no_temporal_text(self, resolver):
        """Test that plain text yields no expression."""
        assert resolver.find_expressions("Buy milk") == []

    def test_accepts_segment(self, resolver):
        """Test that a Segment is scanned like its text."""
        segment = Segment(text="Call mom tomorrow", start=0, end=17)
        matches = resolver.find_expressions(segment)

        assert len(matches) == 1
        assert isinstance(matches[0].expression, RelativeDay)

    def test_at_most_one_combined_match(self, resolver):
        """Test that date and time components combine into one match."""
        matches = resolver.find_expressions("Dentist on Friday at 3pm")

        assert len(matches) == 1
        expression = matches[0].expression
        assert isinstance(expression, NamedWeekday)
        assert expression.weekday == Weekday.FRIDAY
        assert expression.time == time(15, 0)

    def test_absolute_date(self, resolver):
        """Test month-name dates without a year."""
        expression = resolver.find_expressions("Party on Dec 25th")[0].expression

        assert isinstance(expression, AbsoluteDate)
        assert (expression.month, expression.day, expression.year) == (12, 25, None)

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("Renew passport by 12/25/2026", (12, 25, 2026)),
            ("Renew passport by 12/25/26", (12, 25, 2026)),
            ("Renew passport by 2026-12-25", (12, 25, 2026)),
            ("Renew passport by 0026-12-25", (12, 25, 26)),
            ("Renew passport by the 25th of December", (12, 25, None)),
            ("Renew passport by December 25, 2026", (12, 25, 2026)),
        ],
    )
    def test_absolute_date_formats(self, resolver, text, expected):
        """Test the supported absolute date formats."""
        expression = resolver.find_expressions(text)[0].expression

        assert isinstance(expression, AbsoluteDate)
        assert (expression.month, expression.day, expression.year) == expected

    @pytest.mark.parametrize(
        "text", ["Pay rent 2/30", "Pay rent 13/01", "Pay rent February 30", "Pay rent 0000-01-05"]
    )
    def test_impossible_dates_are_ignored(self, resolver, text):
        """Test that impossible dates yield no expression."""
        assert resolver.find_expressions(text) == []

    def test_windows(self, resolver):
        """Test coarse windows are relative deadlines with low confidence."""
        expression = resolver.find_expressions("Finish the report this week")[0].expression

        assert isinstance(expression, RelativeDeadline)
        assert expression.phrase_kind == WindowKind.THIS_WEEK
        assert expression.confidence == 0.5

    def test_deadline_tagging(self, resolver):
        """Test that deadline prepositions tag the expression."""
        assert resolver.find_expressions("Pay rent by Friday")[0].expression.is_deadline
        assert resolver.find_expressions("Report due tomorrow")[0].expression.is_deadline
        assert not resolver.find_expressions("Lunch on Friday")[0].expression.is_deadline

    def test_spans_cover_phrase_and_preposition(self, resolver):
        """Test that recorded spans include the introducing preposition."""
        text = "Submit tax documents by tomorrow noon"
        match = resolver.find_expressions(text)[0]

        assert text[match.start:match.end] == "by tomorrow noon"
        assert [text[s:e] for s, e in match.spans] == ["by tomorrow", "noon"]


class TestConfidence:
    """Test resolution confidences."""

    @pytest.mark.parametrize(
        "text, confidence",
        [
            ("Call mom on Friday at 3pm", 0.95),
            ("Party on Dec 25 at 7pm", 0.95),
            ("Call mom on Friday", 0.8),
            ("Party on Dec 25", 0.8),
            ("Call mom tomorrow at 3pm", 0.8),
            ("Call mom tomorrow", 0.7),
            ("Call mom tomorrow morning", 0.7),
            ("Call mom at 3pm", 0.6),
            ("Call mom this evening", 0.5),
            ("Call mom in the afternoon", 0.5),
        ],
    )
    def test_confidence_levels(self, resolver, text, confidence):
        assert resolver.find_expressions(text)[0].expression.confidence == confidence


class TestClockTimes:
    """Test clock time parsing."""

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("tomorrow at 3 PM", time(15, 0)),
            ("tomorrow at 3pm", time(15, 0)),
            ("tomorrow at 10:30 am", time(10, 30)),
            ("tomorrow at 10:30 a.m.", time(10, 30)),
            ("tomorrow at 12am", time(0, 0)),
            ("tomorrow at 12pm", time(12, 0)),
            ("tomorrow at 15:45", time(15, 45)),
            ("tomorrow at 3 o'clock", time(15, 0)),
            ("tomorrow at 9 o'clock", time(9, 0)),
            ("tomorrow at noon", time(12, 0)),
            ("tomorrow at midnight", time(0, 0)),
        ],
    )
    def test_clock_formats(self, resolver, reference_instant, text, expected):
        resolved = resolve(resolver, text, reference_instant)

        assert resolved.date == date(2024, 3, 12)
        assert resolved.time == expected

    def test_part_of_day_without_clock(self, resolver, reference_instant):
        """Test that a part of day supplies a coarse time."""
        resolved = resolve(resolver, "Take out trash Friday night", reference_instant)

        assert resolved.date == date(2024, 3, 15)
        assert resolved.time == time(20, 0)

    def test_clock_wins_over_part_of_day(self, resolver, reference_instant):
        resolved = resolve(resolver, "Gym tomorrow morning at 7am", reference_instant)

        assert resolved.time == time(7, 0)


class TestResolution:
    """Test resolution against the reference instant."""

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("today", date(2024, 3, 11)),
            ("tomorrow", date(2024, 3, 12)),
            ("tmrw", date(2024, 3, 12)),
            ("the day after tomorrow", date(2024, 3, 13)),
            ("in 3 days", date(2024, 3, 14)),
            ("in two weeks", date(2024, 3, 25)),
            ("5 days from now", date(2024, 3, 16)),
        ],
    )
    def test_relative_days(self, resolver, reference_instant, text, expected):
        resolved = resolve(resolver, text, reference_instant)

        assert resolved.date == expected
        assert resolved.time is None

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("Tuesday", date(2024, 3, 12)),
            ("Sunday", date(2024, 3, 17)),
            # Same weekday as the reference means next week
            ("Monday", date(2024, 3, 18)),
            ("next Tuesday", date(2024, 3, 19)),
            ("next Monday", date(2024, 3, 25)),
            ("Tuesday next week", date(2024, 3, 19)),
            ("this Friday", date(2024, 3, 15)),
        ],
    )
    def test_named_weekdays(self, resolver, reference_instant, text, expected):
        assert resolve(resolver, text, reference_instant).date == expected

    def test_weekday_strictly_after_reference(self, resolver):
        """Test every weekday resolves 1-7 days ahead, and 8-14 with "next"."""
        for offset in range(7):
            reference = datetime(2024, 3, 11, 9, 0) + timedelta(days=offset)
            for name in ("monday", "wednesday", "saturday"):
                plain = resolve(resolver, name, reference).date
                forced = resolve(resolver, f"next {name}", reference).date
                assert 1 <= (plain - reference.date()).days <= 7
                assert forced - plain == timedelta(days=7)

    @pytest.mark.parametrize(
        "text, expected_date, expected_time",
        [
            ("this morning", date(2024, 3, 11), time(9, 0)),
            ("this afternoon", date(2024, 3, 11), time(15, 0)),
            ("this evening", date(2024, 3, 11), time(18, 0)),
            ("tonight", date(2024, 3, 11), time(20, 0)),
            ("this week", date(2024, 3, 17), None),
            ("by the end of the week", date(2024, 3, 17), None),
            ("next week", date(2024, 3, 18), None),
            ("end of the month", date(2024, 3, 31), None),
        ],
    )
    def test_windows(self, resolver, reference_instant, text, expected_date, expected_time):
        resolved = resolve(resolver, text, reference_instant)

        assert resolved.date == expected_date
        assert resolved.time == expected_time

    def test_yearless_date_rolls_to_next_year(self, resolver, reference_instant):
        """Test that a passed month/day resolves to next year."""
        assert resolve(resolver, "Jan 5", reference_instant).date == date(2025, 1, 5)
        assert resolve(resolver, "Dec 25", reference_instant).date == date(2024, 12, 25)
        assert resolve(resolver, "March 11", reference_instant).date == date(2024, 3, 11)

    def test_leap_day_waits_for_leap_year(self, resolver):
        reference = datetime(2025, 3, 1, 9, 0)

        assert resolve(resolver, "Feb 29", reference).date == date(2028, 2, 29)

    def test_bare_time_rolls_forward(self, resolver, reference_instant):
        """Test that a time already passed today means tomorrow."""
        later = resolve(resolver, "Call mom at 3pm", reference_instant)
        earlier = resolve(resolver, "Call mom at 8am", reference_instant)
        same = resolve(resolver, "Call mom at 9am", reference_instant)

        assert (later.date, later.time) == (date(2024, 3, 11), time(15, 0))
        assert (earlier.date, earlier.time) == (date(2024, 3, 12), time(8, 0))
        assert same.date == date(2024, 3, 12)

    def test_timezone_is_carried(self, resolver):
        """Test that the resolved time takes the reference tzinfo."""
        tz = timezone(timedelta(hours=-5))
        reference = datetime(2024, 3, 11, 9, 0, tzinfo=tz)

        resolved = resolve(resolver, "tomorrow at noon", reference)

        assert resolved.time.tzinfo == tz

    def test_resolution_is_pure(self, resolver, reference_instant):
        """Test that resolving twice gives equal results."""
        first = resolve(resolver, "next Friday at 4:15pm", reference_instant)
        second = resolve(resolver, "next Friday at 4:15pm", reference_instant)

        assert first == second
