"""Configuration constants and environment settings.

Centralizes magic numbers for the completion requests and reads the
environment-level settings used by the CLI.
"""

import os
from dataclasses import dataclass
from pathlib import Path

# Conversation configuration
HISTORY_WINDOW = 6  # Prior messages sent along with each chat turn
TIMESTAMP_FORMAT = "%H:%M"

# Chat completion parameters
CHAT_TIMEOUT = 20.0  # Seconds
CHAT_TEMPERATURE = 0.7
CHAT_MAX_TOKENS = 500

# Plan completion parameters
PLAN_TIMEOUT = 30.0  # Seconds
PLAN_TEMPERATURE = 0.3  # Lower for more deterministic structured output
PLAN_MAX_TOKENS = 1500  # Room for a full 3-day plan

# Shared sampling penalties
PRESENCE_PENALTY = 0.1
FREQUENCY_PENALTY = 0.1

# Record store
FOOD_LOGS_TABLE = "food_logs"

DEFAULT_DB_PATH = Path.home() / ".weanwise" / "weanwise.db"


@dataclass(frozen=True)
class Settings:
    """Environment-level settings."""

    llm_provider: str = "deepseek"
    chat_model: str | None = None
    chat_timeout: float = CHAT_TIMEOUT
    plan_timeout: float = PLAN_TIMEOUT
    backend: str = "sqlite"
    db_path: Path = DEFAULT_DB_PATH
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from WEANWISE_* environment variables.

        Environment variables:
            LLM_PROVIDER: Provider type (deepseek, openai; default: deepseek)
            WEANWISE_CHAT_MODEL: Model override (default: provider default)
            WEANWISE_CHAT_TIMEOUT: Chat deadline in seconds (default: 20)
            WEANWISE_PLAN_TIMEOUT: Plan deadline in seconds (default: 30)
            WEANWISE_BACKEND: Platform backend (sqlite, memory; default: sqlite)
            WEANWISE_DB_PATH: SQLite file (default: ~/.weanwise/weanwise.db)
            WEANWISE_LOG_LEVEL: Logging level (default: WARNING)
        """
        return cls(
            llm_provider=os.getenv("LLM_PROVIDER", "deepseek").lower(),
            chat_model=os.getenv("WEANWISE_CHAT_MODEL") or None,
            chat_timeout=float(os.getenv("WEANWISE_CHAT_TIMEOUT", str(CHAT_TIMEOUT))),
            plan_timeout=float(os.getenv("WEANWISE_PLAN_TIMEOUT", str(PLAN_TIMEOUT))),
            backend=os.getenv("WEANWISE_BACKEND", "sqlite").lower(),
            db_path=Path(os.getenv("WEANWISE_DB_PATH", str(DEFAULT_DB_PATH))).expanduser(),
            log_level=os.getenv("WEANWISE_LOG_LEVEL", "WARNING").upper(),
        )
