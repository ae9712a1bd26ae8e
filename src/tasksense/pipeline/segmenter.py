"""
Segmenter: splits a message into task-candidate segments.

Two modes:
1. List mode, when the message has line breaks, starts with a bullet or
   number, or carries two or more inline numbered items ("1. ... 2. ...").
   Each line or item becomes a segment.
2. Prose mode otherwise. Segments end at sentence-terminal punctuation and
   before a comma or coordinating conjunction that opens a new imperative
   clause ("Call mom and pick up the kids").

Separators (line breaks, the whitespace after a sentence, ", and") are kept
at the start of the following segment, so the segment texts concatenated in
order always reproduce the trimmed input exactly.
"""

import re

from ..lexicon import ABBREVIATIONS, CLAUSE_REQUEST_PHRASES, IMPERATIVE_VERBS, MERIDIEM_ABBREVIATIONS
from ..logging import get_logger
from ..models.message import RawMessage, Segment
from .classifier import match_leading

logger = get_logger(__name__)

_LEADING_MARKER_RE = re.compile(r'^(?:[-*•‣◦]\s|\(?\d{1,2}[.)]\s)')
_INLINE_MARKER_RE = re.compile(r'\s+(?=\(?\d{1,2}[.)]\s+[A-Za-z])')
_LINE_BREAK_RE = re.compile(r'\r?\n')
_SENTENCE_END_RE = re.compile(r'[.!?]+(?=\s)')
_PRECEDING_TOKEN_RE = re.compile(r'([\w.]+?)\.*$')
_CLAUSE_SEPARATOR_RE = re.compile(
    r',\s*(?:(?:and\s+then|and\s+also|and|also|then|plus)\s+)?|;\s*'
    r'|\s+(?:and\s+then|and\s+also|and|also|then|plus)\s+',
    re.IGNORECASE,
)
_TOKEN_RE = re.compile(r'\w')
_FILLER_RE = re.compile(r'[\s.,;!?]*(?:and|also|then|plus)?[\s.,;!?]*', re.IGNORECASE)
_LIST_CONTINUATION_RE = re.compile(r'\W*$|\s*,|\s+(?:and|or)\b', re.IGNORECASE)


class Segmenter:
    """Splits message text into ordered, gap-free segments."""

    def segment(self, message: RawMessage | str) -> list[Segment]:
        """
        Split a message into segments.

        Args:
            message: RawMessage or plain text

        Returns:
            Segments in message order. Offsets index into the original text.
            Empty for empty or whitespace-only input; otherwise at least one
            segment, and the segment texts joined reproduce the trimmed text.
        """
        text = message.text if isinstance(message, RawMessage) else message
        trimmed = text.strip()
        if not trimmed:
            return []
        base = len(text) - len(text.lstrip())

        if self._is_list(trimmed):
            cuts = self._list_cuts(trimmed)
        else:
            cuts = self._prose_cuts(trimmed)

        pieces = self._merge_tokenless(trimmed, self._cut(trimmed, cuts))

        segments = []
        for index, (start, end) in enumerate(pieces):
            piece = trimmed[start:end]
            # "Groceries for the week:" followed by the items on later lines
            is_header = (
                index < len(pieces) - 1
                and piece.rstrip().endswith(':')
                and trimmed[end] in '\r\n'
            )
            segments.append(
                Segment(
                    text=piece,
                    start=base + start,
                    end=base + end,
                    index=index,
                    is_list_header=is_header,
                )
            )

        logger.debug('message_segmented', segment_count=len(segments))
        return segments

    # -------------------------------------------------------------------------
    # Cut points
    # -------------------------------------------------------------------------

    @staticmethod
    def _is_list(text: str) -> bool:
        if _LINE_BREAK_RE.search(text) or _LEADING_MARKER_RE.match(text):
            return True
        return len(_INLINE_MARKER_RE.findall(text)) >= 2

    @staticmethod
    def _list_cuts(text: str) -> set[int]:
        cuts = {m.start() for m in _LINE_BREAK_RE.finditer(text)}
        cuts.update(m.start() for m in _INLINE_MARKER_RE.finditer(text))
        return cuts

    def _prose_cuts(self, text: str) -> set[int]:
        cuts = set()
        for match in _SENTENCE_END_RE.finditer(text):
            if self._ends_sentence(text, match):
                cuts.add(match.end())
        for match in _CLAUSE_SEPARATOR_RE.finditer(text):
            previous = max((c for c in cuts if c < match.start()), default=0)
            # "Also, pay rent": the conjunction alone is not a clause
            if _FILLER_RE.fullmatch(text[previous:match.start()]):
                continue
            if self._opens_clause(text[match.end():]):
                cuts.add(match.start())
        return cuts

    @staticmethod
    def _ends_sentence(text: str, match: re.Match) -> bool:
        token = _PRECEDING_TOKEN_RE.search(text[:match.start()])
        word = token.group(1).lower() if token else ''
        if word in ABBREVIATIONS:
            return False
        if word in MERIDIEM_ABBREVIATIONS:
            following = text[match.end():].lstrip()[:1]
            return following.isupper()
        return True

    @staticmethod
    def _opens_clause(rest: str) -> bool:
        """True when the text after a separator starts an imperative clause."""
        if match_leading(rest, CLAUSE_REQUEST_PHRASES):
            return True
        if rest.lower().startswith('please '):
            rest = rest[len('please '):].lstrip()
        verb = match_leading(rest, IMPERATIVE_VERBS)
        if verb is None:
            return False
        # "milk, water and bread": a verb-list word that ends the text or is
        # followed by another list item is a noun
        return _LIST_CONTINUATION_RE.match(rest[len(verb):]) is None

    # -------------------------------------------------------------------------
    # Assembly
    # -------------------------------------------------------------------------

    @staticmethod
    def _cut(text: str, cuts: set[int]) -> list[tuple[int, int]]:
        bounds = [0, *sorted(c for c in cuts if 0 < c < len(text)), len(text)]
        return [(a, b) for a, b in zip(bounds, bounds[1:]) if b > a]

    @staticmethod
    def _merge_tokenless(text: str, pieces: list[tuple[int, int]]) -> list[tuple[int, int]]:
        """Fold pieces without a word character into the following piece (or the last one)."""
        merged: list[tuple[int, int]] = []
        pending_start = None
        for start, end in pieces:
            if pending_start is not None:
                start, pending_start = pending_start, None
            if _TOKEN_RE.search(text[start:end]):
                merged.append((start, end))
            else:
                pending_start = start
        if pending_start is not None:
            if merged:
                merged[-1] = (merged[-1][0], len(text))
            else:
                merged.append((pending_start, len(text)))
        return merged
