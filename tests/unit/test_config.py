from __future__ import annotations

import pytest
from pydantic import ValidationError

from calcbrain.core.config import AppSettings


def clear_env(monkeypatch) -> None:
    for name in ("LOG_LEVEL", "DEFAULT_RESULT", "DESCRIPTION_PRECISION"):
        monkeypatch.delenv(name, raising=False)


def test_defaults(monkeypatch) -> None:
    clear_env(monkeypatch)

    settings = AppSettings(_env_file=None)

    assert settings.default_result == 0
    assert settings.description_precision is None
    assert settings.resolved_log_level == "INFO"


def test_settings_read_from_environment(monkeypatch) -> None:
    clear_env(monkeypatch)
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("DEFAULT_RESULT", "1.5")
    monkeypatch.setenv("DESCRIPTION_PRECISION", "6")

    settings = AppSettings(_env_file=None)

    assert settings.resolved_log_level == "DEBUG"
    assert settings.default_result == 1.5
    assert settings.description_precision == 6


def test_unknown_log_level_falls_back_to_info(monkeypatch) -> None:
    clear_env(monkeypatch)
    monkeypatch.setenv("LOG_LEVEL", "chatty")

    settings = AppSettings(_env_file=None)

    assert settings.resolved_log_level == "INFO"


def test_description_precision_must_be_positive(monkeypatch) -> None:
    clear_env(monkeypatch)
    monkeypatch.setenv("DESCRIPTION_PRECISION", "0")

    with pytest.raises(ValidationError):
        AppSettings(_env_file=None)
