"""
Temporal resolver.

Finds date and time phrases in a segment and pins them to a reference
instant. Recognition runs per category, most specific pattern first, and
the first match in each category wins:

- clock time: "3 PM", "10:30 am", "15:45", "3 o'clock", "noon", "midnight"
- date: absolute ("Dec 25", "12/25/2026"), relative day ("today",
  "tomorrow", "in 3 days"), named weekday ("Tuesday", "next Tuesday"),
  coarse window ("this evening", "this week")
- part of day: "tomorrow morning", "Friday night" (only without a clock time)

The components found in one segment are combined into a single
TemporalExpression. A deadline preposition ("by", "due", "before") in front
of any component tags the expression as a deadline; it changes priority
inference downstream, never the date math.
"""

import calendar
import datetime as dt
import re
from dataclasses import dataclass

from dateutil.relativedelta import relativedelta

from ..lexicon import MONTH_NAMES, NUMBER_WORDS, WEEKDAY_NAMES
from ..models.message import Segment
from ..models.temporal import (
    AbsoluteDate,
    NamedWeekday,
    RelativeDay,
    RelativeDeadline,
    ResolvedInstant,
    TemporalExpression,
    TemporalMatch,
    Weekday,
    WindowKind,
)

# Standalone confidences
ABSOLUTE_CONFIDENCE = 0.8
WEEKDAY_CONFIDENCE = 0.8
DAY_WORD_CONFIDENCE = 0.7
WINDOW_CONFIDENCE = 0.5
CLOCK_ONLY_CONFIDENCE = 0.6
PART_OF_DAY_ONLY_CONFIDENCE = 0.5

# Confidences once an explicit clock time is attached
EXPLICIT_CONFIDENCE = 0.95
DAY_WORD_WITH_TIME_CONFIDENCE = 0.8

_WEEKDAYS = '|'.join(WEEKDAY_NAMES)
_MONTHS = '|'.join(sorted(MONTH_NAMES, key=len, reverse=True))
_COUNT = r'\d{1,3}|' + '|'.join(NUMBER_WORDS)

_DEADLINE_LEAD_RE = re.compile(
    r'(?:\b(?:is|are)\s+)?\b(?:due(?:\s+(?:by|on|before))?|by|before|no\s+later\s+than|until)\s+$',
    re.IGNORECASE,
)
_PLAIN_LEAD_RE = re.compile(r'\b(?:on|at|for|around|about|from)\s+$', re.IGNORECASE)

# -----------------------------------------------------------------------------
# Clock times
# -----------------------------------------------------------------------------

_MERIDIEM_RE = re.compile(
    r'\b(?P<hour>\d{1,2})(?::(?P<minute>[0-5]\d))?\s*(?P<meridiem>[ap])\.?m\b\.?',
    re.IGNORECASE,
)
_NOON_RE = re.compile(r'\b(?P<word>noon|midday|midnight)\b', re.IGNORECASE)
_OCLOCK_RE = re.compile(r"\b(?P<hour>\d{1,2})\s*o'?\s?clock\b", re.IGNORECASE)
_24H_RE = re.compile(r'\b(?P<hour>[01]?\d|2[0-3]):(?P<minute>[0-5]\d)\b')

# -----------------------------------------------------------------------------
# Dates
# -----------------------------------------------------------------------------

_ISO_DATE_RE = re.compile(r'\b(?P<year>\d{4})-(?P<month>\d{1,2})-(?P<day>\d{1,2})\b')
_MONTH_DAY_RE = re.compile(
    rf'\b(?P<month>{_MONTHS})\.?\s+(?P<day>\d{{1,2}})(?:st|nd|rd|th)?\b(?:,?\s+(?P<year>\d{{4}})\b)?',
    re.IGNORECASE,
)
_DAY_MONTH_RE = re.compile(
    rf'\b(?:the\s+)?(?P<day>\d{{1,2}})(?:st|nd|rd|th)?\s+(?:of\s+)?(?P<month>{_MONTHS})\b\.?(?:,?\s+(?P<year>\d{{4}})\b)?',
    re.IGNORECASE,
)
_SLASH_DATE_RE = re.compile(r'\b(?P<month>\d{1,2})/(?P<day>\d{1,2})(?:/(?P<year>\d{2}|\d{4}))?\b')

_DAY_AFTER_TOMORROW_RE = re.compile(r'\b(?:the\s+)?day\s+after\s+tomorrow\b', re.IGNORECASE)
_TOMORROW_RE = re.compile(r'\b(?:tomorrow|tmrw|tmr)\b', re.IGNORECASE)
_TODAY_RE = re.compile(r'\btoday\b', re.IGNORECASE)
_IN_PERIOD_RE = re.compile(
    rf'\bin\s+(?P<count>{_COUNT})\s+(?P<unit>days?|weeks?)\b', re.IGNORECASE
)
_PERIOD_FROM_NOW_RE = re.compile(
    rf'\b(?P<count>{_COUNT})\s+(?P<unit>days?|weeks?)\s+from\s+(?:now|today)\b', re.IGNORECASE
)

_WEEKDAY_RE = re.compile(
    rf'\b(?:(?P<modifier>next|this\s+coming|this|coming)\s+)?(?P<day>{_WEEKDAYS})\b'
    r'(?:\s+(?P<suffix>next|this)\s+week\b)?',
    re.IGNORECASE,
)

_WINDOW_PATTERNS: tuple[tuple[re.Pattern, WindowKind], ...] = (
    (re.compile(r'\b(?:the\s+)?end\s+of\s+(?:the\s+|this\s+)?week\b', re.IGNORECASE), WindowKind.END_OF_WEEK),
    (re.compile(r'\b(?:the\s+)?end\s+of\s+(?:the\s+|this\s+)?month\b', re.IGNORECASE), WindowKind.END_OF_MONTH),
    (re.compile(r'\bthis\s+morning\b', re.IGNORECASE), WindowKind.THIS_MORNING),
    (re.compile(r'\bthis\s+afternoon\b', re.IGNORECASE), WindowKind.THIS_AFTERNOON),
    (re.compile(r'\bthis\s+evening\b', re.IGNORECASE), WindowKind.THIS_EVENING),
    (re.compile(r'\b(?:tonight|tonite)\b', re.IGNORECASE), WindowKind.TONIGHT),
    (re.compile(r'\bthis\s+week\b', re.IGNORECASE), WindowKind.THIS_WEEK),
    (re.compile(r'\bnext\s+week\b', re.IGNORECASE), WindowKind.NEXT_WEEK),
)

WINDOW_TIMES: dict[WindowKind, dt.time] = {
    WindowKind.THIS_MORNING: dt.time(9, 0),
    WindowKind.THIS_AFTERNOON: dt.time(15, 0),
    WindowKind.THIS_EVENING: dt.time(18, 0),
    WindowKind.TONIGHT: dt.time(20, 0),
}

_PART_OF_DAY_RE = re.compile(
    r'\b(?:in\s+the\s+)?(?P<part>morning|afternoon|evening|night)\b', re.IGNORECASE
)
PART_OF_DAY_TIMES: dict[str, dt.time] = {
    'morning': dt.time(9, 0),
    'afternoon': dt.time(15, 0),
    'evening': dt.time(18, 0),
    'night': dt.time(20, 0),
}


@dataclass(frozen=True)
class _Component:
    """One recognized sub-phrase before the components are combined."""

    start: int
    end: int
    is_deadline: bool
    value: object

    def overlaps(self, start: int, end: int) -> bool:
        return start < self.end and self.start < end


def _count(raw: str) -> int:
    raw = raw.lower()
    return int(raw) if raw.isdigit() else NUMBER_WORDS[raw]


def _plausible_day(month: int, day: int, year: int | None) -> bool:
    """Whether month/day exists in the given year (or in some leap year)."""
    if not 1 <= month <= 12 or day < 1:
        return False
    if year is not None and not dt.MINYEAR <= year <= dt.MAXYEAR:
        return False
    return day <= calendar.monthrange(year if year is not None else 2000, month)[1]


class TemporalResolver:
    """
    Recognizes temporal phrases and resolves them against a reference instant.

    The resolver holds no state; every method is a pure function of its
    arguments.
    """

    # =========================================================================
    # Recognition
    # =========================================================================

    def find_expressions(self, segment: Segment | str) -> list[TemporalMatch]:
        """
        Find the temporal expression in a segment.

        The date, clock time and part-of-day components found in the text
        are combined into one expression, so the result holds at most one
        match. Offsets are relative to the segment text.

        Args:
            segment: Segment (or plain text) to scan

        Returns:
            List with the combined match, or an empty list when the text
            holds no recognizable date or time
        """
        text = segment.text if isinstance(segment, Segment) else segment

        date_part = self._find_date(text)
        taken = [date_part] if date_part else []
        clock = self._find_clock(text, taken)
        part_of_day = None
        window_has_time = (
            date_part is not None
            and isinstance(date_part.value, RelativeDeadline)
            and date_part.value.phrase_kind in WINDOW_TIMES
        )
        if clock is None and not window_has_time:
            part_of_day = self._find_part_of_day(text, taken)

        match = self._combine(date_part, clock, part_of_day)
        return [match] if match is not None else []

    def _combine(
        self,
        date_part: _Component | None,
        clock: _Component | None,
        part_of_day: _Component | None,
    ) -> TemporalMatch | None:
        components = [c for c in (date_part, clock, part_of_day) if c is not None]
        if not components:
            return None

        is_deadline = any(c.is_deadline for c in components)
        clock_time = clock.value if clock else None
        coarse_time = part_of_day.value if part_of_day else None

        expression: TemporalExpression
        if date_part is None:
            expression = RelativeDay(
                offset_days=0,
                time=clock_time or coarse_time,
                rolls_forward=True,
                confidence=CLOCK_ONLY_CONFIDENCE if clock_time else PART_OF_DAY_ONLY_CONFIDENCE,
                is_deadline=is_deadline,
            )
        else:
            base = date_part.value
            if clock_time is not None:
                if isinstance(base, (AbsoluteDate, NamedWeekday)):
                    confidence = EXPLICIT_CONFIDENCE
                else:
                    confidence = DAY_WORD_WITH_TIME_CONFIDENCE
                time = clock_time
            else:
                confidence = base.confidence
                time = base.time or coarse_time
            expression = base.model_copy(
                update={'time': time, 'confidence': confidence, 'is_deadline': is_deadline}
            )

        spans = tuple(sorted((c.start, c.end) for c in components))
        return TemporalMatch(
            expression=expression,
            start=spans[0][0],
            end=max(end for _, end in spans),
            spans=spans,
        )

    def _lead_in(self, text: str, start: int) -> tuple[int, bool]:
        """Extend a match backwards over its preposition; report deadline leads."""
        before = text[:start]
        deadline = _DEADLINE_LEAD_RE.search(before)
        if deadline:
            return deadline.start(), True
        plain = _PLAIN_LEAD_RE.search(before)
        if plain:
            return plain.start(), False
        return start, False

    def _component(self, text: str, match: re.Match, value: object) -> _Component:
        start, is_deadline = self._lead_in(text, match.start())
        return _Component(start=start, end=match.end(), is_deadline=is_deadline, value=value)

    def _find_clock(self, text: str, taken: list[_Component]) -> _Component | None:
        for pattern, parse in (
            (_MERIDIEM_RE, self._parse_meridiem),
            (_NOON_RE, self._parse_named_time),
            (_OCLOCK_RE, self._parse_oclock),
            (_24H_RE, self._parse_24h),
        ):
            for match in pattern.finditer(text):
                if any(c.overlaps(match.start(), match.end()) for c in taken):
                    continue
                value = parse(match)
                if value is not None:
                    return self._component(text, match, value)
        return None

    def _find_date(self, text: str) -> _Component | None:
        for finder in (
            self._find_absolute,
            self._find_relative_day,
            self._find_weekday,
            self._find_window,
        ):
            found = finder(text)
            if found is not None:
                return found
        return None

    def _find_absolute(self, text: str) -> _Component | None:
        for pattern in (_ISO_DATE_RE, _MONTH_DAY_RE, _DAY_MONTH_RE, _SLASH_DATE_RE):
            for match in pattern.finditer(text):
                raw_month = match.group('month')
                month = int(raw_month) if raw_month.isdigit() else MONTH_NAMES[raw_month.lower()]
                day = int(match.group('day'))
                raw_year = match.group('year')
                year = int(raw_year) if raw_year else None
                # "12/25/26"
                if raw_year and len(raw_year) == 2:
                    year += 2000
                if not _plausible_day(month, day, year):
                    continue
                value = AbsoluteDate(
                    month=month, day=day, year=year, confidence=ABSOLUTE_CONFIDENCE
                )
                return self._component(text, match, value)
        return None

    def _find_relative_day(self, text: str) -> _Component | None:
        for pattern, offset in (
            (_DAY_AFTER_TOMORROW_RE, 2),
            (_TOMORROW_RE, 1),
            (_TODAY_RE, 0),
        ):
            match = pattern.search(text)
            if match:
                value = RelativeDay(offset_days=offset, confidence=DAY_WORD_CONFIDENCE)
                return self._component(text, match, value)

        for pattern in (_IN_PERIOD_RE, _PERIOD_FROM_NOW_RE):
            match = pattern.search(text)
            if match:
                count = _count(match.group('count'))
                days = count * 7 if match.group('unit').lower().startswith('week') else count
                value = RelativeDay(offset_days=days, confidence=DAY_WORD_CONFIDENCE)
                return self._component(text, match, value)
        return None

    def _find_weekday(self, text: str) -> _Component | None:
        match = _WEEKDAY_RE.search(text)
        if not match:
            return None
        modifier = (match.group('modifier') or '').lower()
        suffix = (match.group('suffix') or '').lower()
        value = NamedWeekday(
            weekday=Weekday(WEEKDAY_NAMES[match.group('day').lower()]),
            is_next_week_override=modifier == 'next' or suffix == 'next',
            confidence=WEEKDAY_CONFIDENCE,
        )
        return self._component(text, match, value)

    def _find_window(self, text: str) -> _Component | None:
        for pattern, kind in _WINDOW_PATTERNS:
            match = pattern.search(text)
            if match:
                value = RelativeDeadline(
                    phrase_kind=kind,
                    time=WINDOW_TIMES.get(kind),
                    confidence=WINDOW_CONFIDENCE,
                )
                return self._component(text, match, value)
        return None

    def _find_part_of_day(self, text: str, taken: list[_Component]) -> _Component | None:
        for match in _PART_OF_DAY_RE.finditer(text):
            if any(c.overlaps(match.start(), match.end()) for c in taken):
                continue
            return self._component(text, match, PART_OF_DAY_TIMES[match.group('part').lower()])
        return None

    # -------------------------------------------------------------------------
    # Clock parsing
    # -------------------------------------------------------------------------

    @staticmethod
    def _parse_meridiem(match: re.Match) -> dt.time | None:
        hour = int(match.group('hour'))
        minute = int(match.group('minute') or 0)
        if not 1 <= hour <= 12:
            return None
        is_pm = match.group('meridiem').lower() == 'p'
        if is_pm and hour != 12:
            hour += 12
        elif not is_pm and hour == 12:
            hour = 0
        return dt.time(hour, minute)

    @staticmethod
    def _parse_named_time(match: re.Match) -> dt.time:
        if match.group('word').lower() == 'midnight':
            return dt.time(0, 0)
        return dt.time(12, 0)

    @staticmethod
    def _parse_oclock(match: re.Match) -> dt.time | None:
        hour = int(match.group('hour'))
        if not 1 <= hour <= 12:
            return None
        # Without am/pm, 1-6 o'clock is read as afternoon
        if hour <= 6:
            hour += 12
        return dt.time(hour, 0)

    @staticmethod
    def _parse_24h(match: re.Match) -> dt.time:
        return dt.time(int(match.group('hour')), int(match.group('minute')))

    # =========================================================================
    # Resolution
    # =========================================================================

    def resolve(self, expression: TemporalExpression, reference: dt.datetime) -> ResolvedInstant:
        """
        Pin an expression to a concrete date (and time, when one was stated).

        Args:
            expression: Expression returned by find_expressions
            reference: The instant treated as "now"

        Returns:
            ResolvedInstant carrying the expression's confidence and deadline tag.
            A stated time inherits the reference's tzinfo.
        """
        today = reference.date()

        if isinstance(expression, AbsoluteDate):
            due = self._resolve_absolute(expression, today)
        elif isinstance(expression, RelativeDay):
            due = today + dt.timedelta(days=expression.offset_days)
            if (
                expression.rolls_forward
                and expression.time is not None
                and expression.time <= reference.time().replace(tzinfo=None)
            ):
                due += dt.timedelta(days=1)
        elif isinstance(expression, NamedWeekday):
            # Next occurrence strictly after today; "next" skips one more week
            delta = (expression.weekday - today.weekday()) % 7 or 7
            if expression.is_next_week_override:
                delta += 7
            due = today + dt.timedelta(days=delta)
        else:
            due = self._resolve_window(expression.phrase_kind, today)

        time = expression.time
        if time is not None and reference.tzinfo is not None:
            time = time.replace(tzinfo=reference.tzinfo)

        return ResolvedInstant(
            date=due,
            time=time,
            confidence=expression.confidence,
            is_deadline=expression.is_deadline,
        )

    def resolve_text(
        self, segment: Segment | str, reference: dt.datetime
    ) -> tuple[ResolvedInstant | None, TemporalMatch | None]:
        """Find and resolve the temporal expression in a segment in one step."""
        matches = self.find_expressions(segment)
        if not matches:
            return None, None
        match = matches[0]
        return self.resolve(match.expression, reference), match

    @staticmethod
    def _resolve_absolute(expression: AbsoluteDate, today: dt.date) -> dt.date:
        if expression.year is not None:
            return dt.date(expression.year, expression.month, expression.day)
        # Yearless dates mean the next time that day comes round (Feb 29 may
        # need to wait for a leap year)
        for year in range(today.year, today.year + 9):
            if not _plausible_day(expression.month, expression.day, year):
                continue
            candidate = dt.date(year, expression.month, expression.day)
            if candidate >= today:
                return candidate
        raise ValueError(f"no valid date for {expression.month}/{expression.day}")

    @staticmethod
    def _resolve_window(kind: WindowKind, today: dt.date) -> dt.date:
        if kind in (WindowKind.THIS_WEEK, WindowKind.END_OF_WEEK):
            return today + dt.timedelta(days=6 - today.weekday())
        if kind is WindowKind.NEXT_WEEK:
            return today + dt.timedelta(days=7 - today.weekday())
        if kind is WindowKind.END_OF_MONTH:
            return today + relativedelta(day=31)
        return today
