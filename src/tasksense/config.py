"""
Configuration management for the tasksense engine.

Loads settings from environment variables with sensible defaults.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env file from project root
_project_root = Path(__file__).parent.parent.parent
_env_file = _project_root / '.env'
if _env_file.exists():
    load_dotenv(_env_file)


def _env_flag(name: str, default: str = 'false') -> bool:
    return os.getenv(name, default).strip().lower() in ('1', 'true', 'yes', 'on')


class Config:
    """Configuration settings loaded from environment."""

    LOG_LEVEL: str
    LOG_JSON: bool
    ACCEPTANCE_THRESHOLD: float
    DEADLINE_WINDOW_HOURS: int

    def __init__(self) -> None:
        # Logging
        self.LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
        self.LOG_JSON = _env_flag('LOG_JSON')

        # Extraction
        self.ACCEPTANCE_THRESHOLD = float(os.getenv('TASKSENSE_ACCEPTANCE_THRESHOLD', '0.4'))
        self.DEADLINE_WINDOW_HOURS = int(os.getenv('TASKSENSE_DEADLINE_WINDOW_HOURS', '24'))

    def validate(self) -> list[str]:
        """
        Validate configuration values.

        Returns:
            List of problems (empty when the configuration is usable)
        """
        problems = []
        if not 0.0 <= self.ACCEPTANCE_THRESHOLD <= 1.0:
            problems.append('TASKSENSE_ACCEPTANCE_THRESHOLD')
        if self.DEADLINE_WINDOW_HOURS <= 0:
            problems.append('TASKSENSE_DEADLINE_WINDOW_HOURS')
        return problems


# Singleton config instance
config = Config()
