"""Tests for settings loading and startup validation."""

import logging
from dataclasses import replace

from bcradio.config import constants
from bcradio.config.settings import RadioSettings
from bcradio.config.validation import validate_and_setup_directories
from bcradio.player.models import SequencingPolicy


class TestFromEnvironment:
    def test_defaults(self, monkeypatch):
        for name in (
            "BCRADIO_DATA_DIR",
            "BCRADIO_PLAYLISTS_FILE",
            "BCRADIO_LISTENER_STATE_FILE",
            "BCRADIO_LISTENER_ID",
            "BCRADIO_IDENTITY_COOKIE",
            "BCRADIO_HISTORY",
            "BCRADIO_SEQUENCING",
            "BCRADIO_REQUEST_TIMEOUT",
            "BCRADIO_LOG_LEVEL",
        ):
            monkeypatch.delenv(name, raising=False)

        settings = RadioSettings.from_environment()

        assert settings.playlists_file.name == "playlists.json"
        assert settings.listener_id == constants.DEFAULT_LISTENER_ID
        assert settings.identity_cookie is None
        assert settings.history == 200
        assert settings.request_timeout is None
        assert settings.sequencing == SequencingPolicy.SHUFFLE
        assert settings.log_level == logging.INFO

    def test_overrides(self, monkeypatch, tmp_path):
        monkeypatch.setenv("BCRADIO_DATA_DIR", str(tmp_path))
        monkeypatch.setenv("BCRADIO_IDENTITY_COOKIE", "cookie")
        monkeypatch.setenv("BCRADIO_HISTORY", "25")
        monkeypatch.setenv("BCRADIO_SEQUENCING", "alphabetic")
        monkeypatch.setenv("BCRADIO_REQUEST_TIMEOUT", "7.5")
        monkeypatch.setenv("BCRADIO_LOG_LEVEL", "debug")

        settings = RadioSettings.from_environment()

        assert settings.playlists_file == tmp_path / "playlists.json"
        assert settings.listener_state_file.parent == tmp_path / "state"
        assert settings.identity_cookie == "cookie"
        assert settings.history == 25
        assert settings.sequencing == SequencingPolicy.ALPHABETIC
        assert settings.request_timeout == 7.5
        assert settings.log_level == logging.DEBUG

    def test_unknown_log_level_falls_back_to_info(self, monkeypatch):
        monkeypatch.setenv("BCRADIO_LOG_LEVEL", "chatty")
        assert RadioSettings.from_environment().log_level == logging.INFO


class TestValidation:
    def test_warns_without_cookie(self, settings, caplog):
        with caplog.at_level(logging.WARNING):
            settings.validate(logging.getLogger("test"))
        assert "BCRADIO_IDENTITY_COOKIE" in caplog.text

    def test_creates_directories(self, settings, tmp_path):
        settings = replace(
            settings,
            data_dir=tmp_path / "data",
            listener_state_file=tmp_path / "data" / "nested" / "state.json",
        )

        assert validate_and_setup_directories(settings) == []
        assert (tmp_path / "data" / "nested").is_dir()

    def test_playlists_path_must_be_a_file(self, settings, tmp_path):
        settings.playlists_file.mkdir()

        errors = validate_and_setup_directories(settings)

        assert len(errors) == 1
        assert "not a file" in errors[0]
