"""Tests for configuration and logging setup."""

import logging
import os

from karaoke.config import DEFAULT_CORS_ORIGINS, Settings, _load_env_file
from karaoke.logging_utils import configure_logging


class TestSettings:
    """Tests for environment-driven settings."""

    def test_defaults(self, monkeypatch):
        for name in ["KARAOKE_CORS_ORIGINS", "KARAOKE_MAX_SUBTITLE_BYTES",
                     "KARAOKE_MAX_AUDIO_BYTES", "KARAOKE_LOG_LEVEL"]:
            monkeypatch.delenv(name, raising=False)

        settings = Settings.from_env()

        assert settings.cors_origins == DEFAULT_CORS_ORIGINS
        assert settings.max_subtitle_bytes == 2 * 1024 * 1024
        assert settings.log_level == "INFO"

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("KARAOKE_CORS_ORIGINS", "http://a.test, http://b.test,")
        monkeypatch.setenv("KARAOKE_MAX_AUDIO_BYTES", "1024")
        monkeypatch.setenv("KARAOKE_LOG_LEVEL", "debug")

        settings = Settings.from_env()

        assert settings.cors_origins == ["http://a.test", "http://b.test"]
        assert settings.max_audio_bytes == 1024
        assert settings.log_level == "DEBUG"

    def test_env_file_does_not_override_environment(self, tmp_path, monkeypatch):
        env_file = tmp_path / ".env"
        env_file.write_text(
            "# comment\nKARAOKE_LOG_LEVEL=WARNING\nKARAOKE_TEST_ONLY=from-file\n",
            encoding="utf-8"
        )
        monkeypatch.setenv("KARAOKE_LOG_LEVEL", "ERROR")
        monkeypatch.delenv("KARAOKE_TEST_ONLY", raising=False)

        _load_env_file(env_file)

        assert os.environ["KARAOKE_LOG_LEVEL"] == "ERROR"
        assert os.environ["KARAOKE_TEST_ONLY"] == "from-file"
        monkeypatch.delenv("KARAOKE_TEST_ONLY")


class TestLogging:
    """Tests for logger configuration."""

    def test_configure_logging_is_idempotent(self):
        logger = configure_logging("DEBUG")
        handlers = list(logger.handlers)

        configure_logging("WARNING")

        assert logger.name == "karaoke"
        assert logger.handlers == handlers
        assert logger.level == logging.WARNING
