"""Tests for environment-backed configuration."""

from __future__ import annotations

import pytest

from ephemeral_enforcer.config import (
    DEFAULT_ENFORCER_NAME,
    EnforcerSettings,
    get_env,
    load_settings,
    parse_ttl_minutes,
)


def test_get_env_unset_returns_fallback(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("UNSET_ENV", raising=False)
    assert get_env("UNSET_ENV", "default") == "default"


def test_get_env_set_returns_value(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SET_ENV", "1")
    assert get_env("SET_ENV", "2") == "1"


def test_get_env_empty_is_not_unset(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EMPTY_ENV", "")
    assert get_env("EMPTY_ENV", "default") == ""


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("10", 10), ("-3", -3), ("+4", 4), ("", 0), ("ten", 0), (" 5", 0), ("1.5", 0)],
)
def test_parse_ttl_minutes(raw: str, expected: int) -> None:
    assert parse_ttl_minutes(raw) == expected


def test_load_settings_defaults() -> None:
    settings = load_settings()
    assert settings == EnforcerSettings()
    assert settings.ttl_minutes == 0
    assert settings.enforcer_name == DEFAULT_ENFORCER_NAME
    assert settings.skipped_prefixes == ("",)
    assert settings.disallow_list == ("",)


def test_load_settings_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("WORKLOAD_TTL", "30")
    monkeypatch.setenv("EPHEMERAL_ENFORCER_NAME", "reaper")
    monkeypatch.setenv("SKIPPED_PREFIXES", "kube,default")
    monkeypatch.setenv("DISALLOW_LIST", "secrets,Statefulsets")

    settings = load_settings()

    assert settings.ttl_minutes == 30
    assert settings.enforcer_name == "reaper"
    assert settings.skipped_prefixes == ("kube", "default")
    assert settings.disallow_list == ("secrets", "Statefulsets")


def test_load_settings_bad_ttl_is_zero(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("WORKLOAD_TTL", "soon")
    assert load_settings().ttl_minutes == 0
