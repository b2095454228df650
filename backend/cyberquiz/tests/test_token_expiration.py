"""Tests for access token lifetime configuration."""

import importlib
import pathlib
import sys
from datetime import datetime

from jose import jwt

# Allow importing the cyberquiz package
sys.path.append(str(pathlib.Path(__file__).resolve().parents[2]))

import cyberquiz.auth as auth


def _seconds_until_expiry(token):
    claims = jwt.decode(token, auth.SECRET_KEY, algorithms=[auth.ALGORITHM])
    assert claims["sub"] == "player@example.com"
    expires = datetime.utcfromtimestamp(claims["exp"])
    return (expires - datetime.utcnow()).total_seconds()


def test_tokens_last_thirty_minutes_by_default(monkeypatch):
    monkeypatch.delenv("ACCESS_TOKEN_EXPIRE_MINUTES", raising=False)
    importlib.reload(auth)

    assert auth.ACCESS_TOKEN_EXPIRE_MINUTES == 30
    token = auth.create_access_token(data={"sub": "player@example.com"})
    assert 29 * 60 <= _seconds_until_expiry(token) <= 30 * 60 + 15


def test_token_lifetime_follows_environment(monkeypatch):
    monkeypatch.setenv("ACCESS_TOKEN_EXPIRE_MINUTES", "1")
    importlib.reload(auth)
    try:
        token = auth.create_access_token(data={"sub": "player@example.com"})
        assert 45 <= _seconds_until_expiry(token) <= 75
    finally:
        monkeypatch.delenv("ACCESS_TOKEN_EXPIRE_MINUTES", raising=False)
        importlib.reload(auth)
