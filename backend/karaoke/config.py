"""Runtime configuration read from the environment."""

import os
from functools import lru_cache
from pathlib import Path
from typing import List

from pydantic import BaseModel, Field


ENV_PATH = Path(__file__).parent.parent / ".env"

DEFAULT_CORS_ORIGINS = [
    "http://localhost:5173",
    "http://localhost:3000",
    "http://127.0.0.1:5173",
]


def _load_env_file(env_path: Path = ENV_PATH) -> None:
    """Load environment variables from .env file."""
    if env_path.exists():
        with open(env_path, encoding='utf-8') as f:
            for line in f:
                line = line.strip()
                if line and not line.startswith("#") and "=" in line:
                    key, value = line.split("=", 1)
                    os.environ.setdefault(key.strip(), value.strip())


class Settings(BaseModel):
    """Settings for the karaoke API."""
    cors_origins: List[str] = Field(default_factory=lambda: list(DEFAULT_CORS_ORIGINS))
    max_subtitle_bytes: int = Field(default=2 * 1024 * 1024, ge=1, description="Largest accepted VTT upload")
    max_audio_bytes: int = Field(default=50 * 1024 * 1024, ge=1, description="Largest accepted audio upload")
    log_level: str = Field(default="INFO", description="Root log level name")

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from KARAOKE_* environment variables."""
        values = {}

        origins = os.getenv("KARAOKE_CORS_ORIGINS")
        if origins:
            values["cors_origins"] = [o.strip() for o in origins.split(",") if o.strip()]

        max_subtitle = os.getenv("KARAOKE_MAX_SUBTITLE_BYTES")
        if max_subtitle:
            values["max_subtitle_bytes"] = int(max_subtitle)

        max_audio = os.getenv("KARAOKE_MAX_AUDIO_BYTES")
        if max_audio:
            values["max_audio_bytes"] = int(max_audio)

        log_level = os.getenv("KARAOKE_LOG_LEVEL")
        if log_level:
            values["log_level"] = log_level.strip().upper()

        return cls(**values)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the process-wide settings, reading .env on first use."""
    _load_env_file()
    return Settings.from_env()
