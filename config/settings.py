"""
Application Settings

Loads configuration from environment variables (and a local .env file).
"""

import os
from dataclasses import dataclass, field, replace
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

PROJECT_ROOT = Path(__file__).parent.parent
DATA_DIR = PROJECT_ROOT / "data"
DEFAULT_DATABASE_URL = f"sqlite:///{DATA_DIR / 'habit_tracker.db'}"

# Seven days, same lifetime as the tokens issued by the web client's backend
DEFAULT_TOKEN_MAX_AGE = 7 * 24 * 60 * 60


def _split_origins(value):
    return [origin.strip() for origin in value.split(',') if origin.strip()]


@dataclass
class Settings:
    """Runtime configuration for the API server."""
    database_url: str = DEFAULT_DATABASE_URL
    secret_key: str = None  # Required outside debug/testing
    token_max_age: int = DEFAULT_TOKEN_MAX_AGE
    habit_timezone: str = 'UTC'
    cors_origins: list = field(default_factory=lambda: ['http://localhost:5173'])
    log_level: str = 'INFO'
    debug: bool = False
    testing: bool = False

    @classmethod
    def from_env(cls):
        """
        Build settings from environment variables.

        Returns:
            Settings: Settings with defaults for anything unset
        """
        defaults = cls()
        return cls(
            database_url=os.getenv('DATABASE_URL', defaults.database_url),
            secret_key=os.getenv('SECRET_KEY', defaults.secret_key),
            token_max_age=int(os.getenv('TOKEN_MAX_AGE', defaults.token_max_age)),
            habit_timezone=os.getenv('HABIT_TIMEZONE', defaults.habit_timezone),
            cors_origins=_split_origins(os.getenv('CORS_ORIGINS', ','.join(defaults.cors_origins))),
            log_level=os.getenv('LOG_LEVEL', defaults.log_level).upper(),
            debug=os.getenv('FLASK_DEBUG', 'false').lower() in ('1', 'true'),
        )

    def with_overrides(self, overrides):
        """Return a copy with the given field values replaced."""
        if not overrides:
            return self
        return replace(self, **overrides)


settings = Settings.from_env()
