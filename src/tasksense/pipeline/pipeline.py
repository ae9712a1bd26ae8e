"""
Task extraction pipeline.

Orchestrates the extraction of task candidates from one message:
1. Segment the message text
2. Extract drafts from every segment (title, temporal, category, priority)
3. Score each draft and keep the accepted ones
4. Return the candidates in segment order

The pipeline is a pure function of the message and the reference instant:
components are stateless after construction and nothing is cached between
calls, so one pipeline may serve many threads at once.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Iterable

from ..logging import PipelineTimer, get_logger, logging_context
from ..models.message import RawMessage, Segment
from ..models.task import TaskCandidate, TaskDraft
from .extractor import EntityExtractor
from .scorer import ConfidenceScorer
from .segmenter import Segmenter

logger = get_logger(__name__)


@dataclass
class ExtractionResult:
    """Result of running one message through the pipeline."""

    reference_instant: datetime
    segments: list[Segment] = field(default_factory=list)
    candidates: list[TaskCandidate] = field(default_factory=list)
    rejected: list[TaskDraft] = field(default_factory=list)

    # Timing
    processing_time_ms: float | None = None
    stage_timings: dict[str, float] = field(default_factory=dict)

    @property
    def total_drafts(self) -> int:
        return len(self.candidates) + len(self.rejected)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            'reference_instant': self.reference_instant.isoformat(),
            'segment_count': len(self.segments),
            'candidates': [c.model_dump(mode='json') for c in self.candidates],
            'rejected_count': len(self.rejected),
            'processing_time_ms': self.processing_time_ms,
            'stage_timings': self.stage_timings,
        }


class TaskExtractionPipeline:
    """
    End-to-end task extraction.

    Components default to their standard configuration; pass explicit ones
    to change thresholds or windows.
    """

    def __init__(
        self,
        segmenter: Segmenter | None = None,
        extractor: EntityExtractor | None = None,
        scorer: ConfidenceScorer | None = None,
    ):
        self.segmenter = segmenter or Segmenter()
        self.extractor = extractor or EntityExtractor()
        self.scorer = scorer or ConfidenceScorer()

    def run(self, message: RawMessage) -> ExtractionResult:
        """
        Run a message through the full pipeline.

        Args:
            message: Message to extract tasks from. Without a reference
                instant the wall clock at call time is used.

        Returns:
            ExtractionResult with accepted candidates, rejected drafts,
            segments and stage timings
        """
        reference = message.reference_instant or datetime.now()
        timer = PipelineTimer()
        result = ExtractionResult(reference_instant=reference)

        with logging_context(trace_id=message.trace_id, message_source=message.source.value):
            logger.info(
                'extraction_started',
                text_length=len(message.text),
                reference_instant=reference.isoformat(),
            )

            with timer.stage('segmentation'):
                result.segments = self.segmenter.segment(message.text)

            for segment in result.segments:
                with timer.stage('extraction'):
                    drafts = self.extractor.extract_all(segment, reference)

                with timer.stage('scoring'):
                    for draft in drafts:
                        candidate = self.scorer.score(draft)
                        if candidate is None:
                            result.rejected.append(draft)
                            logger.debug(
                                'segment_rejected',
                                segment_index=segment.index,
                                title=draft.title,
                                confidence=self.scorer.compute(draft.signals),
                            )
                        else:
                            result.candidates.append(candidate)
                            logger.debug(
                                'segment_accepted',
                                segment_index=segment.index,
                                title=candidate.title,
                                confidence=candidate.confidence,
                            )

            result.stage_timings = timer.summary()['stages']
            result.processing_time_ms = round(timer.total_ms, 2)

            logger.info(
                'extraction_completed',
                segments=len(result.segments),
                accepted=len(result.candidates),
                rejected=len(result.rejected),
                timing=timer.summary(),
            )

        return result

    def extract_tasks(self, message: RawMessage) -> list[TaskCandidate]:
        """Accepted task candidates of a message, in segment order."""
        return self.run(message).candidates

    def extract_batch(self, messages: Iterable[RawMessage]) -> list[list[TaskCandidate]]:
        """
        Extract tasks from several independent messages.

        Returns:
            One candidate list per message, in input order
        """
        return [self.extract_tasks(message) for message in messages]


def extract_tasks(
    message: RawMessage | str,
    reference_instant: datetime | None = None,
) -> list[TaskCandidate]:
    """
    Extract task candidates with a default pipeline.

    Args:
        message: RawMessage, or plain text to wrap in one
        reference_instant: Used when message is plain text

    Returns:
        Accepted candidates in segment order
    """
    if isinstance(message, str):
        message = RawMessage(text=message, reference_instant=reference_instant)
    return TaskExtractionPipeline().extract_tasks(message)
