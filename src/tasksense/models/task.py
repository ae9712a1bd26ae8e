"""
TaskDraft and TaskCandidate models.

A TaskDraft is what the entity extractor produces for one task unit: the
cleaned title, category, priority, due date/time and the raw signals the
confidence scorer combines. A TaskCandidate is an accepted draft with its
final confidence. Both keep the signals, so the confidence of a candidate
can always be recomputed from the candidate alone.
"""

import datetime as dt
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Category(str, Enum):
    """Life area a task belongs to."""

    HOUSEHOLD = 'household'
    WORK = 'work'
    HEALTH = 'health'
    FINANCE = 'finance'
    FAMILY = 'family'
    PERSONAL = 'personal'
    NONE = 'none'


class Priority(str, Enum):
    """Task priority; medium unless the text escalates or de-escalates it."""

    LOW = 'low'
    MEDIUM = 'medium'
    HIGH = 'high'
    URGENT = 'urgent'


class ActionabilityKind(str, Enum):
    """Which lexical evidence made a segment look actionable (or not)."""

    REQUEST_PHRASE = 'request_phrase'
    IMPERATIVE_VERB = 'imperative_verb'
    QUESTION_MARKER = 'question_marker'
    NONE = 'none'


class ExtractionSignals(BaseModel):
    """Raw per-draft evidence recorded by the extractor for the scorer."""

    model_config = ConfigDict(frozen=True)

    actionability: ActionabilityKind = ActionabilityKind.NONE
    actionability_weight: float = Field(
        default=0.3, ge=-1.0, le=1.0, description='Signed weight; questions are negative'
    )
    category_strength: float = Field(
        default=0.0, ge=0.0, le=1.0, description='1.0 when a category keyword matched'
    )
    temporal_confidence: float = Field(
        default=0.0, ge=0.0, le=1.0, description='Confidence of the resolved due instant, 0 if none'
    )
    has_deadline: bool = False
    title_tokens: int = Field(default=0, ge=0)
    title_has_verb: bool = False

    @property
    def has_temporal(self) -> bool:
        return self.temporal_confidence > 0.0

    @property
    def nontrivial_title(self) -> bool:
        return self.title_tokens > 2 or self.title_has_verb


class TaskDraft(BaseModel):
    """Extractor output for one task unit, before confidence scoring."""

    model_config = ConfigDict(frozen=True)

    title: str
    category: Category = Category.NONE
    priority: Priority = Priority.MEDIUM
    due_date: dt.date | None = None
    due_time: dt.time | None = None
    signals: ExtractionSignals = Field(default_factory=ExtractionSignals)
    source_text: str = Field(default='', description='Segment text the draft was read from')
    start: int = Field(default=0, ge=0, description='Segment start offset in the message')
    end: int = Field(default=0, ge=0, description='Segment end offset in the message')


class TaskCandidate(BaseModel):
    """
    A scored, accepted task awaiting user review.

    Identity and storage lifecycle are assigned later by the persistence
    collaborator; the engine never commits candidates itself.
    """

    model_config = ConfigDict(frozen=True)

    title: str = Field(..., min_length=1)
    category: Category = Category.NONE
    priority: Priority = Priority.MEDIUM
    due_date: dt.date | None = None
    due_time: dt.time | None = None
    confidence: float = Field(..., ge=0.0, le=1.0)
    signals: ExtractionSignals = Field(default_factory=ExtractionSignals)
    source_text: str = ''
    start: int = Field(default=0, ge=0)
    end: int = Field(default=0, ge=0)

    @property
    def due(self) -> dt.datetime | dt.date | None:
        """Due instant: a datetime when a time is known, a date for date-only tasks."""
        if self.due_date is None:
            return None
        if self.due_time is None:
            return self.due_date
        return dt.datetime.combine(self.due_date, self.due_time)

    @property
    def is_date_only(self) -> bool:
        return self.due_date is not None and self.due_time is None
