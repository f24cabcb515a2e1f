"""Unit tests for config.py."""

import pytest
from pydantic import ValidationError

from qto.config import Settings


def test_secret_key_is_required(monkeypatch):
    monkeypatch.delenv("SECRET_KEY", raising=False)

    with pytest.raises(ValidationError):
        Settings(_env_file=None)


@pytest.mark.parametrize("value", ["", "   "])
def test_blank_secret_key_rejected(monkeypatch, value):
    monkeypatch.setenv("SECRET_KEY", value)

    with pytest.raises(ValidationError, match="SECRET_KEY"):
        Settings(_env_file=None)


def test_defaults(monkeypatch):
    monkeypatch.setenv("SECRET_KEY", "k")
    for name in ("SESSION_EXPIRATION_MINUTES", "BCRYPT_ROUNDS", "ENVIRONMENT", "DEFAULT_CURRENCY"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings(_env_file=None)

    assert settings.SESSION_EXPIRATION_MINUTES == 60
    assert settings.BCRYPT_ROUNDS == 10
    assert settings.DEFAULT_CURRENCY == "USD"
    assert settings.JWT_ALGORITHM == "HS256"
    assert settings.is_production is False


def test_production_flag(monkeypatch):
    monkeypatch.setenv("SECRET_KEY", "k")
    monkeypatch.setenv("ENVIRONMENT", "production")

    assert Settings(_env_file=None).is_production is True
