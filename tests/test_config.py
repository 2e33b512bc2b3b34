import logging

import pytest
from pydantic import ValidationError

from evidence_coach.config import Config, _bool, _split_origins


def test_bool_env_parsing(monkeypatch) -> None:
    monkeypatch.delenv("FF_SOMETHING", raising=False)
    assert _bool("FF_SOMETHING", True) is True
    for raw in ("1", "true", "YES", " on "):
        monkeypatch.setenv("FF_SOMETHING", raw)
        assert _bool("FF_SOMETHING", False) is True
    monkeypatch.setenv("FF_SOMETHING", "off")
    assert _bool("FF_SOMETHING", True) is False


def test_split_origins() -> None:
    assert _split_origins("http://a.test/, http://b.test,,http://a.test") == [
        "http://a.test",
        "http://b.test",
    ]
    assert _split_origins("") == []
    assert _split_origins(None) == []


def test_config_defaults_and_overrides(monkeypatch) -> None:
    monkeypatch.delenv("FF_EXERCISE_ORDERING", raising=False)
    cfg = Config(LOG_LEVEL="debug", EVIDENCE_SNAPSHOT_PATH="  ")
    assert cfg.LOG_LEVEL == "DEBUG"
    assert cfg.log_level == logging.DEBUG
    assert cfg.EVIDENCE_SNAPSHOT_PATH is None
    assert cfg.FF_EXERCISE_ORDERING is True

    monkeypatch.setenv("FF_EXERCISE_ORDERING", "0")
    assert Config().FF_EXERCISE_ORDERING is False


def test_invalid_log_level() -> None:
    with pytest.raises(ValidationError):
        Config(LOG_LEVEL="chatty")
