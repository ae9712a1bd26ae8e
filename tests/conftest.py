"""
Pytest configuration and shared fixtures.

Key fixtures:
- reference_instant: Fixed "now" (Monday 2024-03-11 09:00) for reproducible dates
- pipeline: Default TaskExtractionPipeline
- resolver: TemporalResolver
- classifier: LexicalClassifier with the default 24h deadline window
- make_message: Factory for RawMessage anchored at the reference instant
"""

import sys
from datetime import datetime
from pathlib import Path

import pytest

# Add src to path for imports
src_path = Path(__file__).parent.parent / 'src'
sys.path.insert(0, str(src_path))

# Load environment variables
from dotenv import load_dotenv

env_file = Path(__file__).parent.parent / '.env'
if env_file.exists():
    load_dotenv(env_file)

from tasksense.models import RawMessage
from tasksense.pipeline import LexicalClassifier, TaskExtractionPipeline, TemporalResolver


@pytest.fixture
def reference_instant() -> datetime:
    """Monday 2024-03-11 09:00 (2024 is a leap year)."""
    return datetime(2024, 3, 11, 9, 0)


@pytest.fixture
def pipeline() -> TaskExtractionPipeline:
    return TaskExtractionPipeline()


@pytest.fixture
def resolver() -> TemporalResolver:
    return TemporalResolver()


@pytest.fixture
def classifier() -> LexicalClassifier:
    return LexicalClassifier(deadline_window_hours=24)


@pytest.fixture
def make_message(reference_instant):
    """Build a RawMessage anchored at the reference instant."""

    def _make(text: str, **kwargs) -> RawMessage:
        kwargs.setdefault('reference_instant', reference_instant)
        return RawMessage(text=text, **kwargs)

    return _make
