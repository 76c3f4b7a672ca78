"""Tests for config module."""

import json

import pytest

TOKEN_ENV_VARS = ["DOCSEED_ACCESS_TOKEN", "GOOGLE_ACCESS_TOKEN", "DOCSEED_TOKEN_FILE"]


@pytest.fixture()
def clear_token_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for var in TOKEN_ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    return monkeypatch


@pytest.mark.parametrize(
    "value,fallback,expected",
    [
        ("42", 0, 42),
        ("not_a_number", 10, 10),
        ("-5", 10, 10),
        (None, 99, 99),
    ],
)
def test_env_int_cases(monkeypatch, value, fallback, expected):
    from docseed.config import env_int

    if value is None:
        monkeypatch.delenv("TEST_INT", raising=False)
    else:
        monkeypatch.setenv("TEST_INT", value)
    assert env_int("TEST_INT", fallback) == expected


@pytest.mark.parametrize("value,expected", [("1", True), ("TRUE", True), ("on", True), ("0", False), ("", False)])
def test_env_flag(monkeypatch, value, expected):
    from docseed.config import env_flag

    monkeypatch.setenv("TEST_FLAG", value)
    assert env_flag("TEST_FLAG") is expected


def test_http_timeout(monkeypatch):
    from docseed.config import http_timeout_seconds

    monkeypatch.setenv("DOCSEED_HTTP_TIMEOUT_MS", "2500")
    assert http_timeout_seconds() == 2.5
    monkeypatch.delenv("DOCSEED_HTTP_TIMEOUT_MS")
    assert http_timeout_seconds() == 30.0


def test_access_token_precedence(clear_token_env):
    from docseed.config import resolve_access_token

    clear_token_env.setenv("GOOGLE_ACCESS_TOKEN", "google")
    assert resolve_access_token() == "google"
    clear_token_env.setenv("DOCSEED_ACCESS_TOKEN", " docseed \n")
    assert resolve_access_token() == "docseed"


@pytest.mark.parametrize(
    "content,expected",
    [
        (json.dumps({"access_token": "a"}), "a"),
        (json.dumps({"token": "b", "refresh_token": "r"}), "b"),
        (json.dumps({"access_token": "c", "expiry": "2000-01-01T00:00:00Z"}), "c"),
        (json.dumps({"other": 1}), None),
        (json.dumps(["a"]), None),
        ("not json", None),
    ],
)
def test_access_token_file(sandbox, clear_token_env, content, expected):
    from docseed.config import resolve_access_token

    token_file = sandbox / "token.json"
    token_file.write_text(content, encoding="utf8")
    clear_token_env.setenv("DOCSEED_TOKEN_FILE", str(token_file))
    assert resolve_access_token() == expected


def test_access_token_missing_file(sandbox, clear_token_env):
    from docseed.config import resolve_access_token

    clear_token_env.setenv("DOCSEED_TOKEN_FILE", str(sandbox / "missing.json"))
    assert resolve_access_token() is None
