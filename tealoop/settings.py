from __future__ import annotations

import os
from dataclasses import dataclass
from enum import StrEnum


class ErrorPolicy(StrEnum):
    # Re-raise the first failure right away; the rest of the delivery is skipped.
    propagate = "propagate"
    # Keep delivering, then raise everything at once as an ExceptionGroup.
    collect = "collect"
    # Keep delivering, log each failure with its traceback.
    log = "log"


EFFECT_ERRORS_ENV = "TEALOOP_EFFECT_ERRORS"
LISTENER_ERRORS_ENV = "TEALOOP_LISTENER_ERRORS"


@dataclass(frozen=True, slots=True)
class LoopSettings:
    effect_errors: ErrorPolicy = ErrorPolicy.collect
    listener_errors: ErrorPolicy = ErrorPolicy.log


def _policy_from_env(name: str, default: ErrorPolicy) -> ErrorPolicy:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return ErrorPolicy(raw.strip().casefold())
    except ValueError:
        allowed = ",".join(p.value for p in ErrorPolicy)
        raise ValueError(f"Invalid {name}: {raw!r} (allowed: {allowed})") from None


def settings_from_env() -> LoopSettings:
    """Build loop settings from `TEALOOP_*` environment variables.

    Unset or blank variables fall back to the `LoopSettings` defaults.
    """

    defaults = LoopSettings()
    return LoopSettings(
        effect_errors=_policy_from_env(EFFECT_ERRORS_ENV, defaults.effect_errors),
        listener_errors=_policy_from_env(LISTENER_ERRORS_ENV, defaults.listener_errors),
    )
