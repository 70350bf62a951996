"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
service starts with seeded in-memory data and a chat snapshot under
``data/`` in the working directory.  Override them via environment
variables in a real deployment.
"""

import os
from dataclasses import dataclass, field
from typing import List


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Lab Dashboard API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    api_prefix: str = os.getenv("API_PREFIX", "/api/v1")
    debug: bool = _env_flag("DEBUG", "false")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")

    # Chat channels, messages and the presence roster are flushed to a
    # single JSON snapshot after every mutation when persistence is on.
    # Relative paths are resolved against the current working directory.
    chat_persistence: bool = _env_flag("CHAT_PERSISTENCE", "true")
    chat_data_path: str = os.getenv("CHAT_DATA_PATH", os.path.join("data", "chat.json"))
    chat_message_max_age_days: int = int(os.getenv("CHAT_MESSAGE_MAX_AGE_DAYS", "30"))

    # Activities are an append-only log bounded to the most recent entries.
    activity_retention: int = int(os.getenv("ACTIVITY_RETENTION", "1000"))

    # Populate the stores with the demo laboratories, clients and users.
    seed_data: bool = _env_flag("SEED_DATA", "true")

    password_hash_iterations: int = int(os.getenv("PASSWORD_HASH_ITERATIONS", "100000"))

    cors_origins: List[str] = field(
        default_factory=lambda: [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
    )


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# should be set before importing this module.
settings = Settings()
