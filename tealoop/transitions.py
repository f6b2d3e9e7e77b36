from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, Final, Generic, TypeVar

ModelT = TypeVar("ModelT")
EffectT = TypeVar("EffectT")


class _NoModel:
    """Marker type for "this transition leaves the model alone"."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "NO_MODEL"

    def __reduce__(self) -> str:
        return "NO_MODEL"


NO_MODEL: Final = _NoModel()


@dataclass(frozen=True, slots=True)
class Next(Generic[ModelT, EffectT]):
    """Result of a state transition.

    - `model`: the new model, or `NO_MODEL` when the model does not change.
      Falsy values (0, "", None, empty containers) are real models.
    - `effects`: effects to perform, in order. Always a tuple.
    """

    model: ModelT | _NoModel = NO_MODEL
    effects: tuple[EffectT, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.effects, tuple):
            object.__setattr__(self, "effects", tuple(self.effects))

    @property
    def has_model(self) -> bool:
        return self.model is not NO_MODEL


def next_(model: ModelT, effects: Iterable[EffectT] = ()) -> Next[ModelT, EffectT]:
    return Next(model=model, effects=tuple(effects))


def dispatch_effects(effects: Iterable[EffectT]) -> Next[Any, EffectT]:
    """Fire effects without touching the model."""

    return Next(effects=tuple(effects))


def no_change() -> Next[Any, Any]:
    return Next()
