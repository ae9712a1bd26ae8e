"""
Data models for the tasksense engine.

All models are frozen pydantic models: the engine never mutates its inputs
or outputs.
"""

from .message import MessageSource, RawMessage, Segment
from .recurrence import RecurrenceSpec, RecurrenceType
from .task import (
    ActionabilityKind,
    Category,
    ExtractionSignals,
    Priority,
    TaskCandidate,
    TaskDraft,
)
from .temporal import (
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

__all__ = [
    'MessageSource',
    'RawMessage',
    'Segment',
    'RecurrenceSpec',
    'RecurrenceType',
    'ActionabilityKind',
    'Category',
    'ExtractionSignals',
    'Priority',
    'TaskCandidate',
    'TaskDraft',
    'AbsoluteDate',
    'NamedWeekday',
    'RelativeDay',
    'RelativeDeadline',
    'ResolvedInstant',
    'TemporalExpression',
    'TemporalMatch',
    'Weekday',
    'WindowKind',
]
