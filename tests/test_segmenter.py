"""
Tests for the segmenter.
"""

import pytest

from tasksense.models import RawMessage
from tasksense.pipeline import Segmenter


@pytest.fixture
def segmenter() -> Segmenter:
    return Segmenter()


def texts(segments):
    return [s.text for s in segments]


class TestEmptyInput:
    """Test empty and whitespace-only input."""

    @pytest.mark.parametrize("text", ["", "   ", "\n\t \n"])
    def test_empty_input_yields_no_segments(self, segmenter, text):
        assert segmenter.segment(text) == []


class TestProse:
    """Test sentence and clause splitting."""

    def test_single_sentence(self, segmenter):
        segments = segmenter.segment("Buy milk")

        assert texts(segments) == ["Buy milk"]
        assert (segments[0].start, segments[0].end, segments[0].index) == (0, 8, 0)

    def test_offsets_skip_surrounding_whitespace(self, segmenter):
        segments = segmenter.segment("  Buy milk  ")

        assert texts(segments) == ["Buy milk"]
        assert segments[0].span == (2, 10)

    def test_sentence_terminals(self, segmenter):
        assert texts(segmenter.segment("Buy milk. Call mom!")) == ["Buy milk.", " Call mom!"]

    def test_conjunction_before_verb_splits(self, segmenter):
        segments = segmenter.segment("Call mom and pick up the kids")

        assert texts(segments) == ["Call mom", " and pick up the kids"]

    def test_comma_before_verb_splits(self, segmenter):
        assert texts(segmenter.segment("Call mom, text dad")) == ["Call mom", ", text dad"]

    def test_conjunction_before_request_phrase_splits(self, segmenter):
        segments = segmenter.segment("Buy milk and remember to call mom")

        assert texts(segments) == ["Buy milk", " and remember to call mom"]

    def test_object_list_is_not_split(self, segmenter):
        """Test that a list of nouns stays in one segment."""
        text = "We need to buy milk, bread, and eggs today"

        assert texts(segmenter.segment(text)) == [text]

    def test_trailing_verb_like_noun_is_not_split(self, segmenter):
        assert texts(segmenter.segment("Buy milk and water")) == ["Buy milk and water"]

    @pytest.mark.parametrize(
        "text",
        [
            "Buy eggs, milk, water and bread",
            "Buy eggs, water, and bread",
            "Order stamps, envelopes, book and pen",
        ],
    )
    def test_verb_like_noun_inside_list_is_not_split(self, segmenter, text):
        """Test that a list item that doubles as a verb does not open a clause."""
        assert texts(segmenter.segment(text)) == [text]

    def test_verb_like_word_with_object_still_splits(self, segmenter):
        segments = segmenter.segment("Buy eggs, water the plants")

        assert texts(segments) == ["Buy eggs", ", water the plants"]

    def test_abbreviation_does_not_end_sentence(self, segmenter):
        segments = segmenter.segment("Meet Dr. Smith at 3pm. Then buy milk")

        assert texts(segments) == ["Meet Dr. Smith at 3pm.", " Then buy milk"]

    def test_meridiem_before_lowercase_does_not_end_sentence(self, segmenter):
        text = "Call the bank at 5 p.m. tomorrow"

        assert texts(segmenter.segment(text)) == [text]

    def test_tokenless_piece_is_merged(self, segmenter):
        assert texts(segmenter.segment("Buy milk!!! ???")) == ["Buy milk!!! ???"]

    def test_punctuation_only_input(self, segmenter):
        """Test that input without words still yields one segment."""
        assert texts(segmenter.segment("...")) == ["..."]


class TestLists:
    """Test list-mode segmentation."""

    def test_bulleted_lines(self, segmenter):
        segments = segmenter.segment("- buy bread\n- call mom\n- pay rent")

        assert texts(segments) == ["- buy bread", "\n- call mom", "\n- pay rent"]

    def test_inline_numbered_items(self, segmenter):
        segments = segmenter.segment("1. Buy milk 2. Call mom 3. Pay rent")

        assert texts(segments) == ["1. Buy milk", " 2. Call mom", " 3. Pay rent"]

    def test_list_header(self, segmenter):
        segments = segmenter.segment("Groceries:\n- bread\n- eggs")

        assert texts(segments) == ["Groceries:", "\n- bread", "\n- eggs"]
        assert [s.is_list_header for s in segments] == [True, False, False]

    def test_trailing_colon_on_last_line_is_not_header(self, segmenter):
        segments = segmenter.segment("Buy bread\nNote:")

        assert not segments[-1].is_list_header

    def test_blank_lines_are_merged(self, segmenter):
        segments = segmenter.segment("Buy bread\n\n\nCall mom")

        assert len(segments) == 2
        assert segments[1].text.strip() == "Call mom"

    def test_accepts_raw_message(self, segmenter):
        message = RawMessage(text="Buy bread\nCall mom")

        assert texts(segmenter.segment(message)) == ["Buy bread", "\nCall mom"]


class TestCoverage:
    """Test that segments reconstruct the trimmed input."""

    @pytest.mark.parametrize(
        "text",
        [
            "Buy milk",
            "  URGENT: Submit tax documents by tomorrow noon  ",
            "We need to buy milk, bread, and eggs today",
            "Call mom and pick up the kids. Also, pay rent by Friday!",
            "Groceries:\n\n- bread\n- eggs\n\n",
            "1) call dad 2) book flights 3) renew passport",
            "ok... thanks!!   bye",
            "What time is the meeting tomorrow?",
            "Meet Dr. Smith at 10 a.m. Then text mom, buy flowers and then water the plants",
        ],
    )
    def test_segments_reconstruct_trimmed_text(self, segmenter, text):
        segments = segmenter.segment(text)

        assert segments
        assert "".join(s.text for s in segments) == text.strip()
        assert [s.index for s in segments] == list(range(len(segments)))
        for segment in segments:
            assert text[segment.start:segment.end] == segment.text
            assert any(ch.isalnum() for ch in segment.text) or len(segments) == 1

    def test_segmentation_is_deterministic(self, segmenter):
        text = "Call mom and pick up the kids. Buy milk"

        assert segmenter.segment(text) == segmenter.segment(text)
