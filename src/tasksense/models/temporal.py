"""
Temporal expression models.

A TemporalExpression is a recognized date/time phrase before it is pinned
to a reference instant. The variants form a tagged union discriminated by
the ``kind`` field:

- AbsoluteDate: a calendar date ("December 25", "12/25/2026")
- RelativeDay: an offset in days from the reference date ("tomorrow",
  "in 3 days"), or a bare clock time that rolls forward to its next
  occurrence
- NamedWeekday: a weekday name, optionally forced one week further ("next
  Tuesday")
- RelativeDeadline: a coarse window ("this evening", "this week") with no
  exact instant implied

Every variant carries its own resolution confidence and whether it was
introduced by a deadline phrase ("by", "due").
"""

import datetime as dt
from enum import Enum, IntEnum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class Weekday(IntEnum):
    """Weekday numbers matching ``date.weekday()``."""

    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6


class WindowKind(str, Enum):
    """Coarse windows recognized without an exact instant."""

    THIS_MORNING = 'this_morning'
    THIS_AFTERNOON = 'this_afternoon'
    THIS_EVENING = 'this_evening'
    TONIGHT = 'tonight'
    THIS_WEEK = 'this_week'
    NEXT_WEEK = 'next_week'
    END_OF_WEEK = 'end_of_week'
    END_OF_MONTH = 'end_of_month'


class _Expression(BaseModel):
    model_config = ConfigDict(frozen=True)

    confidence: float = Field(..., ge=0.0, le=1.0, description='Resolution confidence')
    is_deadline: bool = Field(default=False, description='Introduced by "by", "due" or "before"')
    time: dt.time | None = Field(default=None, description='Time of day, when one was stated')


class AbsoluteDate(_Expression):
    kind: Literal['absolute'] = 'absolute'
    month: int = Field(..., ge=1, le=12)
    day: int = Field(..., ge=1, le=31)
    year: int | None = Field(
        default=None,
        description='None when the text gave no year; the date then rolls forward from the reference',
    )


class RelativeDay(_Expression):
    kind: Literal['relative_day'] = 'relative_day'
    offset_days: int = Field(..., ge=0)
    rolls_forward: bool = Field(
        default=False,
        description='A bare clock time: use tomorrow when the time is not after the reference',
    )


class NamedWeekday(_Expression):
    kind: Literal['named_weekday'] = 'named_weekday'
    weekday: Weekday
    is_next_week_override: bool = False


class RelativeDeadline(_Expression):
    kind: Literal['relative_deadline'] = 'relative_deadline'
    phrase_kind: WindowKind


TemporalExpression = Annotated[
    Union[AbsoluteDate, RelativeDay, NamedWeekday, RelativeDeadline],
    Field(discriminator='kind'),
]


class TemporalMatch(BaseModel):
    """An expression together with the character span it was read from."""

    model_config = ConfigDict(frozen=True)

    expression: TemporalExpression
    start: int = Field(..., ge=0)
    end: int = Field(..., ge=0)
    # Spans of every sub-phrase that contributed (date phrase, clock time,
    # deadline preposition); removed from the title by the extractor
    spans: tuple[tuple[int, int], ...] = ()


class ResolvedInstant(BaseModel):
    """A concrete due date, with the time of day when one was stated."""

    model_config = ConfigDict(frozen=True)

    date: dt.date
    time: dt.time | None = None
    confidence: float = Field(..., ge=0.0, le=1.0)
    is_deadline: bool = False
