"""
Entity extractor.

Turns one segment into task drafts:
1. Run the lexical classifier (actionability, category, priority)
2. Find and resolve the segment's temporal expression
3. Clean the title: drop the temporal phrase, request filler, labels and
   priority markers
4. Distribute verb-led object lists ("buy milk, bread, and eggs") into one
   draft per object

Every draft keeps the raw signals the confidence scorer combines.
"""

import datetime as dt
import re

from ..lexicon import IMPERATIVE_VERBS, LEADING_DETERMINERS, REQUEST_PHRASES
from ..models.message import Segment
from ..models.task import ActionabilityKind, ExtractionSignals, TaskDraft
from ..models.temporal import ResolvedInstant, TemporalMatch
from .classifier import (
    NO_SIGNAL_WEIGHT,
    ActionabilitySignal,
    LexicalClassifier,
    find_verb,
    is_generic,
    leading_noise_end,
    match_leading,
)
from .temporal import TemporalResolver

_PRIORITY_MARKER_RE = re.compile(
    r'\b(?:urgent(?:ly)?|asap|immediately|right\s+away|high\s+priority|low\s+priority|no\s+rush'
    r'|when\s+you\s+(?:get\s+a\s+chance|have\s+time)|whenever|eventually)\b[!:]*',
    re.IGNORECASE,
)
_TRAILING_PLEASE_RE = re.compile(r'[\s,]*\bplease\b[\s!.]*$', re.IGNORECASE)
_EMPTY_BRACKETS_RE = re.compile(r'\(\s*\)|\[\s*\]')
_TRAILING_PUNCTUATION_RE = re.compile(r'[\s.,;:!?\-]+$')
_DANGLING_WORD_RE = re.compile(
    r'\s+(?:at|on|by|for|due|before|in|to|from|until|around|and|or|the|is|are)$', re.IGNORECASE
)
_WHITESPACE_RE = re.compile(r'\s+')
_WORD_RE = re.compile(r"[A-Za-z0-9][A-Za-z0-9']*")
_LIST_SEPARATOR_RE = re.compile(r'\s*,\s*(?:(?:and|or)\s+)?|\s+(?:and|or)\s+', re.IGNORECASE)

MAX_LIST_ITEM_TOKENS = 3


def _capitalize(text: str) -> str:
    return text[:1].upper() + text[1:] if text else text


def _mask(text: str, spans) -> str:
    """Blank out character spans, keeping offsets stable."""
    chars = list(text)
    for start, end in spans:
        for i in range(max(start, 0), min(end, len(chars))):
            chars[i] = ' '
    return ''.join(chars)


def _strip_leading(text: str) -> str:
    """Remove leading noise, request phrases and determiners until none remain."""
    while True:
        before = text
        text = text[leading_noise_end(text):]
        phrase = match_leading(text, REQUEST_PHRASES)
        if phrase:
            text = text[len(phrase):].lstrip(' ,')
        determiner = match_leading(text, LEADING_DETERMINERS)
        if determiner and len(_WORD_RE.findall(text)) > 1:
            text = text[len(determiner):].lstrip()
        if text == before:
            return text


def _strip_trailing(text: str) -> str:
    while True:
        before = text
        text = _TRAILING_PLEASE_RE.sub('', text)
        text = _TRAILING_PUNCTUATION_RE.sub('', text)
        text = _DANGLING_WORD_RE.sub('', text)
        if text == before:
            return text


def clean_title(
    text: str,
    temporal: TemporalMatch | None = None,
    actionability: ActionabilitySignal | None = None,
) -> str:
    """
    Build a task title from segment text.

    Args:
        text: Segment text
        temporal: Temporal match found in the text; its spans are removed
        actionability: Actionability signal; a matched request phrase is removed

    Returns:
        Cleaned, capitalized title. Falls back to the trimmed segment text
        when cleaning leaves nothing.
    """
    spans = list(temporal.spans) if temporal else []
    if actionability and actionability.kind == ActionabilityKind.REQUEST_PHRASE:
        spans.append((actionability.start, actionability.end))

    title = _mask(text, spans)
    title = _PRIORITY_MARKER_RE.sub(' ', title)
    title = _EMPTY_BRACKETS_RE.sub(' ', title)
    title = _WHITESPACE_RE.sub(' ', title).strip()
    title = _strip_trailing(_strip_leading(title))

    if not _WORD_RE.search(title):
        title = _TRAILING_PUNCTUATION_RE.sub('', _WHITESPACE_RE.sub(' ', text).strip())
    return _capitalize(title)


def distribute_list(title: str) -> list[str]:
    """
    Split "<verb> a, b, and c" into one title per object.

    Applies only when the title starts with a recognized verb, the objects
    are comma separated, there are at least two of them and each is at most
    three tokens long. Otherwise the title is returned unchanged.
    """
    verb = match_leading(title, IMPERATIVE_VERBS)
    if verb is None or ',' not in title:
        return [title]

    head = title[:len(verb)]
    items = [item.strip() for item in _LIST_SEPARATOR_RE.split(title[len(verb):].strip())]
    items = [item for item in items if item]
    if len(items) < 2:
        return [title]
    if any(len(_WORD_RE.findall(item)) > MAX_LIST_ITEM_TOKENS for item in items):
        return [title]
    return [f'{head} {item}' for item in items]


class EntityExtractor:
    """Builds task drafts from segments using the resolver and the classifier."""

    def __init__(
        self,
        resolver: TemporalResolver | None = None,
        classifier: LexicalClassifier | None = None,
    ):
        self.resolver = resolver or TemporalResolver()
        self.classifier = classifier or LexicalClassifier()

    def extract(self, segment: Segment, reference: dt.datetime) -> TaskDraft:
        """
        Extract the primary draft of a segment.

        Args:
            segment: Segment to read
            reference: Instant relative phrases are resolved against

        Returns:
            Draft for the segment as a whole, before list distribution
        """
        title, actionability, resolved = self._read(segment, reference)
        return self._build(segment, title, actionability, resolved, reference)

    def extract_all(self, segment: Segment, reference: dt.datetime) -> list[TaskDraft]:
        """
        Extract every draft of a segment.

        A list header ("Groceries:") yields no drafts; a verb-led object list
        yields one draft per object, in list order.
        """
        if segment.is_list_header:
            return []

        title, actionability, resolved = self._read(segment, reference)
        return [
            self._build(segment, item, actionability, resolved, reference)
            for item in distribute_list(title)
        ]

    def _read(
        self, segment: Segment, reference: dt.datetime
    ) -> tuple[str, ActionabilitySignal, ResolvedInstant | None]:
        """Resolve, classify and clean one segment."""
        resolved, match = self.resolver.resolve_text(segment, reference)
        actionability = self.classifier.actionability_signal(segment)
        return clean_title(segment.text, match, actionability), actionability, resolved

    def _build(
        self,
        segment: Segment,
        title: str,
        actionability: ActionabilitySignal,
        resolved: ResolvedInstant | None,
        reference: dt.datetime,
    ) -> TaskDraft:
        category = self.classifier.category_hint(segment)
        priority = self.classifier.priority_signal(segment, resolved, reference)

        kind, weight = actionability.kind, actionability.weight
        title_tokens = len(_WORD_RE.findall(title))
        has_verb = find_verb(title) is not None
        if is_generic(title):
            # Pleasantries count as signal-free with a trivial title
            kind, weight = ActionabilityKind.NONE, NO_SIGNAL_WEIGHT
            title_tokens, has_verb = 0, False

        signals = ExtractionSignals(
            actionability=kind,
            actionability_weight=weight,
            category_strength=category.strength,
            temporal_confidence=resolved.confidence if resolved else 0.0,
            has_deadline=resolved.is_deadline if resolved else False,
            title_tokens=title_tokens,
            title_has_verb=has_verb,
        )
        return TaskDraft(
            title=title,
            category=category.category,
            priority=priority,
            due_date=resolved.date if resolved else None,
            due_time=resolved.time if resolved else None,
            signals=signals,
            source_text=segment.text,
            start=segment.start,
            end=segment.end,
        )
