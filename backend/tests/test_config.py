from __future__ import annotations

import pytest

from session_tokens.config import Settings

ENV_KEYS = ("JWT_SECRET", "JWT_ALGO", "SESSION_TTL_SECONDS", "CLOCK_SKEW_SECONDS")


def _clear_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    _clear_env(monkeypatch)
    cfg = Settings()
    assert cfg.JWT_SECRET == "dev-secret"
    assert cfg.JWT_ALGO == "HS256"
    assert cfg.SESSION_TTL_SECONDS == 86400
    assert cfg.CLOCK_SKEW_SECONDS == 60


def test_values_from_env_are_stripped(monkeypatch: pytest.MonkeyPatch) -> None:
    _clear_env(monkeypatch)
    monkeypatch.setenv("JWT_SECRET", "  s3cret\r\n")
    monkeypatch.setenv("JWT_ALGO", "HS512 ")
    monkeypatch.setenv("SESSION_TTL_SECONDS", " 900")
    monkeypatch.setenv("CLOCK_SKEW_SECONDS", "0\r")
    cfg = Settings()
    assert cfg.JWT_SECRET == "s3cret"
    assert cfg.JWT_ALGO == "HS512"
    assert cfg.SESSION_TTL_SECONDS == 900
    assert cfg.CLOCK_SKEW_SECONDS == 0


@pytest.mark.parametrize("name", ["SESSION_TTL_SECONDS", "CLOCK_SKEW_SECONDS"])
@pytest.mark.parametrize("raw", ["soon", "1.5", "-1"])
def test_bad_integers_are_rejected(monkeypatch: pytest.MonkeyPatch, name: str, raw: str) -> None:
    _clear_env(monkeypatch)
    monkeypatch.setenv(name, raw)
    with pytest.raises(ValueError, match=name):
        Settings()
