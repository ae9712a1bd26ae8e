"""
Input models: the raw message handed to the engine and the segments it is
split into.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class MessageSource(str, Enum):
    """Where the message text came from."""

    CHAT = 'chat'
    VOICE = 'voice'
    SHARE = 'share'
    MANUAL = 'manual'


class RawMessage(BaseModel):
    """
    Immutable input to the extraction pipeline.

    The reference instant anchors relative phrases ("tomorrow", "next
    Tuesday"). When it is omitted the pipeline falls back to the wall clock
    at invocation time, which makes the result depend on when it ran.
    """

    model_config = ConfigDict(frozen=True)

    text: str = Field(..., description='Message text, already transcribed if it came from voice')
    reference_instant: datetime | None = Field(
        default=None, description='Instant used as "now" when resolving relative phrases'
    )
    source: MessageSource = Field(default=MessageSource.CHAT, description='Origin of the text')
    trace_id: str | None = Field(
        default=None, description='Caller supplied identifier propagated into logs'
    )


class Segment(BaseModel):
    """A contiguous slice of a message that is treated as one task candidate."""

    model_config = ConfigDict(frozen=True)

    text: str
    start: int = Field(..., ge=0, description='Offset of the first character in the message')
    end: int = Field(..., ge=0, description='Offset one past the last character')
    index: int = Field(default=0, ge=0, description='Position among the message segments')
    is_list_header: bool = Field(
        default=False, description='A line ending in ":" that introduces the list below it'
    )

    @model_validator(mode='after')
    def _check_span(self) -> 'Segment':
        if self.end < self.start:
            raise ValueError('segment end must not precede start')
        if self.end - self.start != len(self.text):
            raise ValueError('segment text length must match its span')
        return self

    @property
    def span(self) -> tuple[int, int]:
        return (self.start, self.end)
