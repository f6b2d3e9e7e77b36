from __future__ import annotations

import logging
import threading
from collections.abc import Iterable
from typing import Generic, TypeVar, cast

from tealoop.contracts import EffectHandler, EventSource, Initiator, Listener, Updater
from tealoop.errors import DispatchError, EffectDeliveryError, ListenerError
from tealoop.settings import ErrorPolicy, LoopSettings, settings_from_env
from tealoop.transitions import Next

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT")
EventT = TypeVar("EventT")
EffectT = TypeVar("EffectT")


def _describe(fn: object) -> str:
    return getattr(fn, "__qualname__", None) or repr(fn)


class Loop(Generic[ModelT, EventT, EffectT]):
    """Owns the current model and drives update -> effects -> listeners.

    Contract:
      - the initiator runs once during construction and its effects reach every
        handler before the constructor returns; event sources are wired after that.
      - `dispatch` is the only way to change the model after construction.
      - handlers may call `dispatch` again. The nested dispatch runs to completion
        (listeners included) before the handler regains control, so an outer
        notification can already see the nested updates.
      - listeners are notified from a snapshot of the registrations taken when
        notification starts.

    Dispatches from different threads are serialized; re-entrant dispatch from the
    same thread is allowed.
    """

    def __init__(
        self,
        default_model: ModelT,
        updater: Updater[ModelT, EventT, EffectT],
        effect_handlers: Iterable[EffectHandler[EffectT, EventT]],
        initiator: Initiator[ModelT, EffectT],
        event_sources: Iterable[EventSource[EventT]] = (),
        *,
        settings: LoopSettings | None = None,
    ) -> None:
        self._model = default_model
        self._updater = updater
        self._effect_handlers = tuple(effect_handlers)
        self._settings = settings if settings is not None else settings_from_env()
        self._listeners: list[Listener[ModelT]] = []
        self._listeners_lock = threading.Lock()
        self._dispatch_lock = threading.RLock()

        sources = tuple(event_sources)
        logger.debug(
            "loop created handlers=%d sources=%d effect_errors=%s listener_errors=%s",
            len(self._effect_handlers),
            len(sources),
            self._settings.effect_errors,
            self._settings.listener_errors,
        )

        with self._dispatch_lock:
            failures = self._apply(initiator(self._model))
        if failures:
            raise EffectDeliveryError("initiator effects failed", failures)

        for source in sources:
            source(self.dispatch)

    @property
    def current_model(self) -> ModelT:
        return self._model

    @property
    def settings(self) -> LoopSettings:
        return self._settings

    def on(self, listener: Listener[ModelT]) -> None:
        with self._listeners_lock:
            self._listeners.append(listener)

    def off(self, listener: Listener[ModelT]) -> None:
        """Remove the earliest registration of `listener`; unknown listeners are ignored.

        Identity wins over equality, so equal but distinct listeners are never confused.
        Equality is only the fallback, which lets `off(obj.method)` match `on(obj.method)`.
        """

        with self._listeners_lock:
            idx = next((i for i, registered in enumerate(self._listeners) if registered is listener), None)
            if idx is None:
                idx = next((i for i, registered in enumerate(self._listeners) if registered == listener), None)
            if idx is None:
                logger.debug("off() for unregistered listener %s ignored", _describe(listener))
                return
            del self._listeners[idx]

    def dispatch(self, event: EventT) -> None:
        with self._dispatch_lock:
            # Computed in full before anything is committed.
            result = self._updater(self._model, event)
            logger.debug(
                "dispatch event=%r model_changed=%s effects=%d",
                event,
                result.has_model,
                len(result.effects),
            )
            effect_failures = self._apply(result)
            listener_failures = self._notify()

        errors: list[DispatchError] = []
        if effect_failures:
            errors.append(EffectDeliveryError("effect handlers failed", effect_failures))
        if listener_failures:
            errors.append(ListenerError("listeners failed", listener_failures))

        if len(errors) == 1:
            raise errors[0]
        if errors:
            raise DispatchError("effect handlers and listeners failed", errors)

    def _apply(self, result: Next[ModelT, EffectT]) -> list[Exception]:
        if result.has_model:
            self._model = cast(ModelT, result.model)

        policy = self._settings.effect_errors
        failures: list[Exception] = []
        for effect in result.effects:
            for handler in self._effect_handlers:
                try:
                    handler(effect, self.dispatch)
                except Exception as e:
                    if policy == ErrorPolicy.propagate:
                        raise
                    if policy == ErrorPolicy.log:
                        logger.exception("effect handler %s failed on effect %r", _describe(handler), effect)
                        continue
                    e.add_note(f"effect handler {_describe(handler)} failed on effect {effect!r}")
                    failures.append(e)
        return failures

    def _notify(self) -> list[Exception]:
        with self._listeners_lock:
            listeners = tuple(self._listeners)

        policy = self._settings.listener_errors
        failures: list[Exception] = []
        for listener in listeners:
            try:
                listener(self._model)
            except Exception as e:
                if policy == ErrorPolicy.propagate:
                    raise
                if policy == ErrorPolicy.log:
                    logger.exception("listener %s failed", _describe(listener))
                    continue
                e.add_note(f"listener {_describe(listener)} failed")
                failures.append(e)
        return failures
