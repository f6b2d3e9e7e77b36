"""Unidirectional model / update / effect loop.

Pure transitions (`Updater`, `Initiator`) produce a `Next`; the `Loop` commits the
model, hands effects to impure handlers, then notifies listeners.
"""
from __future__ import annotations

from tealoop.combine import combine_updaters
from tealoop.contracts import Dispatch, EffectHandler, EventSource, Initiator, Listener, Updater
from tealoop.errors import DispatchError, EffectDeliveryError, ListenerError
from tealoop.loop import Loop
from tealoop.settings import ErrorPolicy, LoopSettings, settings_from_env
from tealoop.transitions import NO_MODEL, Next, dispatch_effects, next_, no_change

__all__ = [
    "NO_MODEL",
    "Dispatch",
    "DispatchError",
    "EffectDeliveryError",
    "EffectHandler",
    "ErrorPolicy",
    "EventSource",
    "Initiator",
    "Listener",
    "ListenerError",
    "Loop",
    "LoopSettings",
    "Next",
    "Updater",
    "combine_updaters",
    "dispatch_effects",
    "next_",
    "no_change",
    "settings_from_env",
]
