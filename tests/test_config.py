"""Tests for environment-driven configuration."""

import os
from unittest.mock import patch

from tasksense.config import Config
from tasksense.pipeline import ConfidenceScorer, LexicalClassifier

_VARS = (
    "LOG_LEVEL",
    "LOG_JSON",
    "TASKSENSE_ACCEPTANCE_THRESHOLD",
    "TASKSENSE_DEADLINE_WINDOW_HOURS",
)


class TestConfig:
    def test_config_defaults(self):
        with patch.dict(os.environ, {}, clear=False):
            for name in _VARS:
                os.environ.pop(name, None)
            config = Config()
            assert config.LOG_LEVEL == "INFO"
            assert config.LOG_JSON is False
            assert config.ACCEPTANCE_THRESHOLD == 0.4
            assert config.DEADLINE_WINDOW_HOURS == 24
            assert config.validate() == []

    def test_config_loads_from_env(self):
        env = {
            "LOG_LEVEL": "DEBUG",
            "LOG_JSON": "true",
            "TASKSENSE_ACCEPTANCE_THRESHOLD": "0.55",
            "TASKSENSE_DEADLINE_WINDOW_HOURS": "48",
        }
        with patch.dict(os.environ, env, clear=False):
            config = Config()
            assert config.LOG_LEVEL == "DEBUG"
            assert config.LOG_JSON is True
            assert config.ACCEPTANCE_THRESHOLD == 0.55
            assert config.DEADLINE_WINDOW_HOURS == 48

    def test_validate_reports_bad_values(self):
        env = {
            "TASKSENSE_ACCEPTANCE_THRESHOLD": "1.5",
            "TASKSENSE_DEADLINE_WINDOW_HOURS": "0",
        }
        with patch.dict(os.environ, env, clear=False):
            problems = Config().validate()
            assert "TASKSENSE_ACCEPTANCE_THRESHOLD" in problems
            assert "TASKSENSE_DEADLINE_WINDOW_HOURS" in problems


class TestComponentDefaults:
    def test_explicit_values_override_config(self):
        assert ConfidenceScorer(threshold=0.7).threshold == 0.7
        assert LexicalClassifier(deadline_window_hours=6).deadline_window.total_seconds() == 6 * 3600

    def test_zero_threshold_is_respected(self):
        assert ConfidenceScorer(threshold=0.0).threshold == 0.0
