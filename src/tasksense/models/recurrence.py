"""
Recurrence specification attached to a persisted task.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..errors import InvalidIntervalError


class RecurrenceType(str, Enum):
    """How a recurring task repeats."""

    DAILY = 'daily'
    WEEKLY = 'weekly'
    MONTHLY = 'monthly'


class RecurrenceSpec(BaseModel):
    """Repeat every ``interval`` days, weeks or months."""

    model_config = ConfigDict(frozen=True)

    type: RecurrenceType
    interval: int = Field(default=1, description='Number of periods between occurrences')

    @field_validator('interval', mode='before')
    @classmethod
    def interval_positive(cls, v):
        # bool is an int subclass; True must not pass as an interval of 1
        if isinstance(v, bool) or not isinstance(v, int) or v <= 0:
            raise InvalidIntervalError(v)
        return v
