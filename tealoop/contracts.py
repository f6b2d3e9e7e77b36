"""Call contracts between the loop and application code.

Each contract is a single-method Protocol so plain functions, lambdas, bound
methods and callable objects all fit.
"""
from __future__ import annotations

from typing import Protocol, TypeVar

from tealoop.transitions import Next

ModelT = TypeVar("ModelT")
EventT = TypeVar("EventT")
EffectT = TypeVar("EffectT")

ModelT_contra = TypeVar("ModelT_contra", contravariant=True)
EventT_contra = TypeVar("EventT_contra", contravariant=True)
EffectT_contra = TypeVar("EffectT_contra", contravariant=True)


class Dispatch(Protocol[EventT_contra]):
    def __call__(self, event: EventT_contra, /) -> None:  # pragma: no cover
        ...


class Updater(Protocol[ModelT, EventT_contra, EffectT]):
    """Pure transition: (model, event) -> Next."""

    def __call__(self, model: ModelT, event: EventT_contra, /) -> Next[ModelT, EffectT]:  # pragma: no cover
        ...


class Initiator(Protocol[ModelT, EffectT]):
    """Pure startup transition, called once with the default model."""

    def __call__(self, model: ModelT, /) -> Next[ModelT, EffectT]:  # pragma: no cover
        ...


class EffectHandler(Protocol[EffectT_contra, EventT]):
    """Performs an effect. May call `dispatch` any number of times."""

    def __call__(self, effect: EffectT_contra, dispatch: Dispatch[EventT], /) -> None:  # pragma: no cover
        ...


class EventSource(Protocol[EventT]):
    """Called once at loop construction; keeps `dispatch` to feed events in later."""

    def __call__(self, dispatch: Dispatch[EventT], /) -> None:  # pragma: no cover
        ...


class Listener(Protocol[ModelT_contra]):
    def __call__(self, model: ModelT_contra, /) -> None:  # pragma: no cover
        ...
