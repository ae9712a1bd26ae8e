"""
Confidence scorer.

Combines the raw signals recorded on a draft into one confidence and an
accept/reject decision. The scorer never looks at text: the same signals
always give the same score, so a candidate's confidence can be recomputed
from the signals it carries.
"""

from ..config import config
from ..models.task import ExtractionSignals, TaskCandidate, TaskDraft

ACTIONABILITY_WEIGHT = 0.5
TEMPORAL_WEIGHT = 0.2
CATEGORY_WEIGHT = 0.15
TITLE_WEIGHT = 0.15


class ConfidenceScorer:
    """Weighted-sum scorer with an acceptance threshold."""

    def __init__(self, threshold: float | None = None):
        """
        Initialize the scorer.

        Args:
            threshold: Minimum confidence for acceptance
                (defaults to config.ACCEPTANCE_THRESHOLD)
        """
        self.threshold = threshold if threshold is not None else config.ACCEPTANCE_THRESHOLD

    @staticmethod
    def compute(signals: ExtractionSignals) -> float:
        """
        Confidence for a set of signals, clamped to [0, 1].

        actionability weight x 0.5 + temporal confidence x 0.2
        + category strength x 0.15 + non-trivial title x 0.15
        """
        score = (
            signals.actionability_weight * ACTIONABILITY_WEIGHT
            + signals.temporal_confidence * TEMPORAL_WEIGHT
            + signals.category_strength * CATEGORY_WEIGHT
            + (TITLE_WEIGHT if signals.nontrivial_title else 0.0)
        )
        return round(min(max(score, 0.0), 1.0), 4)

    def is_accepted(self, confidence: float) -> bool:
        return confidence >= self.threshold

    def score(self, draft: TaskDraft) -> TaskCandidate | None:
        """
        Score a draft.

        Returns:
            TaskCandidate carrying the confidence, or None when the draft
            scores below the threshold
        """
        confidence = self.compute(draft.signals)
        if not self.is_accepted(confidence):
            return None
        return TaskCandidate(
            title=draft.title,
            category=draft.category,
            priority=draft.priority,
            due_date=draft.due_date,
            due_time=draft.due_time,
            confidence=confidence,
            signals=draft.signals,
            source_text=draft.source_text,
            start=draft.start,
            end=draft.end,
        )
