from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import pytest

from tealoop import Next, Updater, next_, no_change
from tealoop.settings import EFFECT_ERRORS_ENV, LISTENER_ERRORS_ENV


@pytest.fixture(scope="session", autouse=True)
def _load_dotenv_for_tests() -> None:
    """Load repo .env for local runs (PyCharm/CLI).

    TEALOOP_* loop settings from it never reach a test; `_hermetic_loop_env`
    clears them, and tests that care about a policy set it themselves.

    In CI we *don't* auto-load `.env` unless explicitly opted-in with
    TEALOOP_LOAD_DOTENV_FOR_TESTS=1.
    """

    if os.environ.get("CI") and os.environ.get("TEALOOP_LOAD_DOTENV_FOR_TESTS") != "1":
        return

    env_path = Path(__file__).resolve().parents[1] / ".env"
    if env_path.exists():
        from dotenv import load_dotenv

        load_dotenv(dotenv_path=env_path, override=False)


@pytest.fixture(autouse=True)
def _hermetic_loop_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Loops built without explicit settings start from LoopSettings defaults."""

    monkeypatch.delenv(EFFECT_ERRORS_ENV, raising=False)
    monkeypatch.delenv(LISTENER_ERRORS_ENV, raising=False)


def _counter_update(model: dict[str, int], event: str) -> Next[dict[str, int], str]:
    if event == "incremented":
        return next_({"counter": model["counter"] + 1}, ["play_sound"])
    if event == "decremented":
        return next_({"counter": model["counter"] - 1})
    return no_change()


@pytest.fixture()
def counter_update() -> Updater[dict[str, int], str, str]:
    """Counter app: `incremented` also asks for a sound, `decremented` is silent."""

    return _counter_update


@pytest.fixture()
def no_init() -> Any:
    return lambda _model: no_change()
