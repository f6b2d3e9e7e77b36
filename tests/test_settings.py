from __future__ import annotations

import os
from typing import Any

import pytest

from tealoop import ErrorPolicy, Loop, LoopSettings, settings_from_env
from tealoop.settings import EFFECT_ERRORS_ENV, LISTENER_ERRORS_ENV


def test_defaults_without_env() -> None:
    s = settings_from_env()

    assert s == LoopSettings()
    assert s.effect_errors == ErrorPolicy.collect
    assert s.listener_errors == ErrorPolicy.log


def test_env_values_are_case_insensitive(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(EFFECT_ERRORS_ENV, " Propagate ")
    monkeypatch.setenv(LISTENER_ERRORS_ENV, "COLLECT")

    s = settings_from_env()

    assert s.effect_errors == ErrorPolicy.propagate
    assert s.listener_errors == ErrorPolicy.collect


def test_blank_env_falls_back_to_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(EFFECT_ERRORS_ENV, "  ")

    assert settings_from_env().effect_errors == ErrorPolicy.collect


def test_invalid_env_value_lists_allowed(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(LISTENER_ERRORS_ENV, "ignore")

    with pytest.raises(ValueError) as e:
        settings_from_env()

    assert LISTENER_ERRORS_ENV in str(e.value)
    assert "allowed: propagate,collect,log" in str(e.value)


def test_loop_reads_env_when_no_settings_given(
    monkeypatch: pytest.MonkeyPatch, counter_update: Any, no_init: Any
) -> None:
    monkeypatch.setenv(EFFECT_ERRORS_ENV, "log")

    loop = Loop({"counter": 0}, counter_update, [], no_init)

    assert loop.settings.effect_errors == ErrorPolicy.log


def test_explicit_settings_win_over_env(
    monkeypatch: pytest.MonkeyPatch, counter_update: Any, no_init: Any
) -> None:
    monkeypatch.setenv(EFFECT_ERRORS_ENV, "log")
    settings = LoopSettings(effect_errors=ErrorPolicy.propagate)

    loop = Loop({"counter": 0}, counter_update, [], no_init, settings=settings)

    assert loop.settings is settings


def test_loop_env_is_cleared_for_every_test(counter_update: Any, no_init: Any) -> None:
    # A bogus value in a developer's .env must not break loops built in tests.
    assert EFFECT_ERRORS_ENV not in os.environ
    assert LISTENER_ERRORS_ENV not in os.environ

    loop = Loop({"counter": 0}, counter_update, [], no_init)

    assert loop.settings == LoopSettings()
