from __future__ import annotations

from collections.abc import Sequence


class DispatchError(ExceptionGroup):
    """Failures collected while delivering a single dispatch.

    Raised after delivery finished, so every handler and listener already had
    its chance to run. Updater/initiator failures are never wrapped.
    """

    def derive(self, excs: Sequence[Exception]) -> DispatchError:
        # Keeps the subclass through split(), subgroup() and except*.
        return type(self)(self.message, excs)


class EffectDeliveryError(DispatchError):
    """One or more effect handlers raised."""


class ListenerError(DispatchError):
    """One or more listeners raised during notification."""
