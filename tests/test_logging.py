"""
Tests for the logging module.
"""

from unittest.mock import patch

import structlog

from tasksense.config import config
from tasksense.logging import (
    PipelineTimer,
    add_context_info,
    configure_logging,
    get_logger,
    get_message_source,
    get_trace_id,
    logging_context,
)


class TestLoggingContext:
    """Test logging context management."""

    def test_logging_context_sets_values(self):
        """Test that logging context sets values correctly."""
        with logging_context(trace_id="trace_123", message_source="voice"):
            assert get_trace_id() == "trace_123"
            assert get_message_source() == "voice"

    def test_logging_context_restores_values(self):
        """Test that context is restored after exiting."""
        with logging_context(trace_id="outer"):
            assert get_trace_id() == "outer"

            # Nested context
            with logging_context(trace_id="inner"):
                assert get_trace_id() == "inner"

            # Should be restored
            assert get_trace_id() == "outer"

        # Should be None outside
        assert get_trace_id() is None

    def test_logging_context_partial_values(self):
        """Test that partial context values work."""
        with logging_context(message_source="share"):
            assert get_message_source() == "share"
            assert get_trace_id() is None

    def test_context_info_processor(self):
        """Test that the processor copies context into the event dict."""
        with logging_context(trace_id="t-1", message_source="chat"):
            event = add_context_info(None, "info", {"event": "x"})

        assert event == {"event": "x", "trace_id": "t-1", "message_source": "chat"}

    def test_context_info_processor_without_context(self):
        """Test that nothing is added outside a logging context."""
        assert add_context_info(None, "info", {"event": "x"}) == {"event": "x"}

    def test_get_logger_returns_usable_logger(self):
        """Test that a logger can be created and used."""
        logger = get_logger(__name__)
        logger.debug("test_event", value=1)


class TestConfigureLogging:
    """Test renderer selection."""

    def teardown_method(self):
        configure_logging(json_output=False)

    def _renderer(self):
        return structlog.get_config()["processors"][-1]

    def test_default_follows_config(self):
        """Test that json_output=None reads LOG_JSON from config."""
        with patch.object(config, "LOG_JSON", True):
            configure_logging()
        assert isinstance(self._renderer(), structlog.processors.JSONRenderer)

        with patch.object(config, "LOG_JSON", False):
            configure_logging()
        assert isinstance(self._renderer(), structlog.dev.ConsoleRenderer)

    def test_explicit_argument_overrides_config(self):
        with patch.object(config, "LOG_JSON", False):
            configure_logging(json_output=True)

        assert isinstance(self._renderer(), structlog.processors.JSONRenderer)


class TestPipelineTimer:
    """Test pipeline timing functionality."""

    def test_timer_records_stages(self):
        """Test that timer records stage durations."""
        timer = PipelineTimer()

        with timer.stage("segmentation"):
            pass

        with timer.stage("scoring"):
            pass

        assert timer.stages["segmentation"] >= 0
        assert timer.stages["scoring"] >= 0

    def test_repeated_stage_accumulates(self):
        """Test that re-entering a stage adds to its duration."""
        # timer start, then start/end of each stage (seconds)
        with patch("tasksense.logging.time.perf_counter", side_effect=[0.0, 1.0, 1.5, 2.0, 2.25]):
            timer = PipelineTimer()
            with timer.stage("extraction"):
                pass
            with timer.stage("extraction"):
                pass

        assert timer.stages == {"extraction": 750.0}

    def test_timer_summary(self):
        """Test summary dictionary format."""
        with patch(
            "tasksense.logging.time.perf_counter", side_effect=[0.0, 0.0, 0.1, 0.2, 0.25, 1.0]
        ):
            timer = PipelineTimer()
            with timer.stage("segmentation"):
                pass
            with timer.stage("scoring"):
                pass
            summary = timer.summary()

        assert summary == {"total_ms": 1000.0, "stages": {"segmentation": 100.0, "scoring": 50.0}}
