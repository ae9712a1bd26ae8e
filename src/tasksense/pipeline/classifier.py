"""
Lexical classifier.

Three independent lookups against the static tables in ``tasksense.lexicon``:

- actionability_signal: does the segment ask for an action, ask a question,
  or neither
- category_hint: which life area the segment belongs to
- priority_signal: urgent/high/low markers, and deadlines due soon

The module also holds the leading-noise rules (list markers, speaker
prefixes, task labels, conjunctions) shared with the entity extractor, so
that both components agree on where the meaningful part of a segment starts.
"""

import datetime as dt
import re
from dataclasses import dataclass

from ..config import config
from ..lexicon import (
    CATEGORY_KEYWORDS,
    GENERIC_PHRASES,
    HIGH_MARKERS,
    IMPERATIVE_VERBS,
    INLINE_REQUEST_PHRASES,
    LEADING_CONJUNCTIONS,
    LOW_MARKERS,
    QUESTION_WORDS,
    REQUEST_PHRASES,
    TASK_LABELS,
    URGENT_MARKERS,
)
from ..models.message import Segment
from ..models.task import ActionabilityKind, Category, Priority
from ..models.temporal import ResolvedInstant

REQUEST_WEIGHT = 0.9
IMPERATIVE_WEIGHT = 0.7
QUESTION_WEIGHT = -0.6
NO_SIGNAL_WEIGHT = 0.3

_LIST_MARKER_RE = re.compile(r'^\s*(?:[-*•‣◦]+|\(?\d{1,2}[.)]|\[[ xX]?\])\s*')
_SPEAKER_RE = re.compile(r"^[A-Z][\w']*:\s+")
_LABEL_RE = re.compile(
    r'^(?:' + '|'.join(re.escape(label) for label in TASK_LABELS) + r')\s*[:\-!]+\s*',
    re.IGNORECASE,
)
_CONJUNCTION_RE = re.compile(
    r'^(?:' + '|'.join(re.escape(c) for c in LEADING_CONJUNCTIONS) + r')\b[\s,]*',
    re.IGNORECASE,
)
_PUNCTUATION_RE = re.compile(r'^[\s,;:.!]+')
_WORD_RE = re.compile(r"[A-Za-z][A-Za-z']*")


def _marker_pattern(markers) -> re.Pattern:
    return re.compile(
        r'\b(?:' + '|'.join(re.escape(m) for m in markers) + r')\b', re.IGNORECASE
    )


_URGENT_RE = _marker_pattern(URGENT_MARKERS)
_HIGH_RE = _marker_pattern(HIGH_MARKERS)
_LOW_RE = _marker_pattern(LOW_MARKERS)
_INLINE_REQUEST_RE = _marker_pattern(INLINE_REQUEST_PHRASES)

# category -> ((keyword, pattern), ...) in table order; plural forms match too
_CATEGORY_PATTERNS: tuple[tuple[Category, tuple[tuple[str, re.Pattern], ...]], ...] = tuple(
    (
        category,
        tuple(
            (keyword, re.compile(rf'\b{re.escape(keyword)}(?:s|es)?\b', re.IGNORECASE))
            for keyword in keywords
        ),
    )
    for category, keywords in CATEGORY_KEYWORDS.items()
)

_VERB_SET = frozenset(IMPERATIVE_VERBS)


def _text(segment: Segment | str) -> str:
    return segment.text if isinstance(segment, Segment) else segment


def leading_noise_end(text: str) -> int:
    """
    Offset where the meaningful part of a segment starts.

    Skips, repeatedly and in any order, list markers, a chat speaker prefix
    ("Mom: "), task labels ("TODO:", "URGENT:"), leading conjunctions and
    stray punctuation.
    """
    pos = 0
    while True:
        rest = text[pos:]
        for pattern in (_PUNCTUATION_RE, _LIST_MARKER_RE, _LABEL_RE, _SPEAKER_RE, _CONJUNCTION_RE):
            match = pattern.match(rest)
            if match and match.end() > 0:
                pos += match.end()
                break
        else:
            return pos


def match_leading(text: str, phrases: tuple[str, ...]) -> str | None:
    """Return the first phrase the text starts with, on a word boundary."""
    lowered = text.lower()
    for phrase in phrases:
        if lowered.startswith(phrase):
            following = lowered[len(phrase):len(phrase) + 1]
            if not following or not (following.isalnum() or following == "'"):
                return phrase
    return None


def find_verb(text: str) -> str | None:
    """First recognized base-form verb anywhere in the text."""
    words = [w.lower() for w in _WORD_RE.findall(text)]
    for i, word in enumerate(words):
        if i + 1 < len(words) and f'{word} {words[i + 1]}' in _VERB_SET:
            return f'{word} {words[i + 1]}'
        if word in _VERB_SET:
            return word
    return None


def is_generic(text: str) -> bool:
    """True when the text is only a pleasantry or acknowledgement."""
    normalized = ' '.join(w.lower() for w in _WORD_RE.findall(text))
    if normalized in GENERIC_PHRASES:
        return True
    # "Hope you have a great day!" and similar well-wishes
    return normalized.startswith(('hope you', 'have a great', 'have a nice', 'good morning', 'good night'))


@dataclass(frozen=True)
class ActionabilitySignal:
    """Lexical evidence for (or against) a segment being a task."""

    kind: ActionabilityKind
    weight: float
    phrase: str | None = None
    # Span of the matched phrase within the segment text
    start: int = 0
    end: int = 0


@dataclass(frozen=True)
class CategoryHint:
    category: Category
    strength: float
    keyword: str | None = None
    offset: int | None = None


class LexicalClassifier:
    """
    Keyword and phrase lookups over a single segment.

    Stateless apart from the deadline window, which is fixed at construction.
    """

    def __init__(self, deadline_window_hours: int | None = None):
        """
        Initialize the classifier.

        Args:
            deadline_window_hours: A deadline due within this many hours of the
                reference instant raises priority to high
                (defaults to config.DEADLINE_WINDOW_HOURS)
        """
        hours = deadline_window_hours if deadline_window_hours is not None else config.DEADLINE_WINDOW_HOURS
        self.deadline_window = dt.timedelta(hours=hours)

    def actionability_signal(self, segment: Segment | str) -> ActionabilitySignal:
        """
        Classify the segment's actionability.

        Checked in order: a leading request phrase (0.9), a leading
        interrogative or a trailing "?" (-0.6), a request phrase later in the
        text (0.9), a leading imperative verb (0.7). Nothing matched gives 0.3.
        """
        text = _text(segment)
        lead = leading_noise_end(text)
        body = text[lead:]

        phrase = match_leading(body, REQUEST_PHRASES)
        if phrase:
            return ActionabilitySignal(
                ActionabilityKind.REQUEST_PHRASE, REQUEST_WEIGHT, phrase, lead, lead + len(phrase)
            )

        words = _WORD_RE.findall(body)
        if (words and words[0].lower() in QUESTION_WORDS) or text.rstrip().endswith('?'):
            return ActionabilitySignal(ActionabilityKind.QUESTION_MARKER, QUESTION_WEIGHT)

        inline = _INLINE_REQUEST_RE.search(body)
        if inline:
            return ActionabilitySignal(
                ActionabilityKind.REQUEST_PHRASE,
                REQUEST_WEIGHT,
                inline.group(0).lower(),
                lead + inline.start(),
                lead + inline.end(),
            )

        verb = match_leading(body, IMPERATIVE_VERBS)
        if verb:
            return ActionabilitySignal(
                ActionabilityKind.IMPERATIVE_VERB, IMPERATIVE_WEIGHT, verb, lead, lead + len(verb)
            )

        return ActionabilitySignal(ActionabilityKind.NONE, NO_SIGNAL_WEIGHT)

    def category_hint(self, segment: Segment | str) -> CategoryHint:
        """
        First category in table order with a keyword in the segment.

        Within that category the earliest keyword is reported, so a
        later-listed category never wins because its keyword comes first
        ("Pay the doctor bill" is health).
        """
        text = _text(segment)
        for category, patterns in _CATEGORY_PATTERNS:
            best: CategoryHint | None = None
            for keyword, pattern in patterns:
                match = pattern.search(text)
                if match and (best is None or match.start() < best.offset):
                    best = CategoryHint(category, 1.0, keyword, match.start())
            if best is not None:
                return best
        return CategoryHint(Category.NONE, 0.0)

    def priority_signal(
        self,
        segment: Segment | str,
        resolved: ResolvedInstant | None = None,
        reference: dt.datetime | None = None,
    ) -> Priority:
        """
        Infer priority from markers and deadline proximity.

        Args:
            segment: Segment to inspect
            resolved: Resolved due instant of the segment, if any
            reference: Instant the due instant was resolved against

        Returns:
            URGENT for urgency markers; HIGH for importance markers or a
            deadline due within the window; LOW only for explicit low-priority
            markers; MEDIUM otherwise
        """
        text = _text(segment)
        if _URGENT_RE.search(text):
            return Priority.URGENT
        if _HIGH_RE.search(text):
            return Priority.HIGH
        if resolved is not None and reference is not None and resolved.is_deadline:
            if self._due_within_window(resolved, reference):
                return Priority.HIGH
        if _LOW_RE.search(text):
            return Priority.LOW
        return Priority.MEDIUM

    def _due_within_window(self, resolved: ResolvedInstant, reference: dt.datetime) -> bool:
        # Date-only deadlines count from the start of their day
        time = (resolved.time or dt.time.min).replace(tzinfo=None)
        due = dt.datetime.combine(resolved.date, time).replace(tzinfo=reference.tzinfo)
        return due - reference <= self.deadline_window
