from __future__ import annotations

import copy
import dataclasses
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import BaseModel

from tealoop.contracts import Updater
from tealoop.transitions import Next, next_


def _get_field(model: Any, key: str) -> Any:
    if isinstance(model, Mapping):
        return model[key]
    if isinstance(model, BaseModel) or (dataclasses.is_dataclass(model) and not isinstance(model, type)):
        return getattr(model, key)
    raise TypeError(f"Cannot combine updaters over {type(model).__name__}: expected a mapping, dataclass or pydantic model")


def _with_fields(model: Any, updates: dict[str, Any]) -> Any:
    """Shallow copy of `model` with `updates` applied; the original is left untouched."""

    if isinstance(model, dict):
        out = copy.copy(model)
        out.update(updates)
        return out
    # Other mappings may share their storage with a shallow copy.
    if isinstance(model, Mapping):
        return {**model, **updates}
    if isinstance(model, BaseModel):
        return model.model_copy(update=updates)
    # _get_field already rejected everything else.
    return dataclasses.replace(model, **updates)


def combine_updaters(
    updaters: Mapping[str, Updater[Any, Any, Any]] | Iterable[tuple[str, Updater[Any, Any, Any]]],
) -> Updater[Any, Any, Any]:
    """Build one updater over a composite model from per-field updaters.

    Each sub-updater receives only its field's value. Fields run in the mapping's
    insertion order (or the order of the given pairs), fixed here at composition
    time. Effects are concatenated in that order.

    Supports dict-like models, dataclass instances and pydantic models, and nests:
    a combined updater can be a sub-updater of another one.
    """

    pairs = tuple(updaters.items() if isinstance(updaters, Mapping) else updaters)

    seen: set[str] = set()
    for key, _ in pairs:
        if key in seen:
            raise ValueError(f"Duplicate updater for field: {key}")
        seen.add(key)

    def combined(model: Any, event: Any) -> Next[Any, Any]:
        updates: dict[str, Any] = {}
        effects: list[Any] = []
        for key, sub in pairs:
            result = sub(_get_field(model, key), event)
            if result.has_model:
                updates[key] = result.model
            effects.extend(result.effects)
        return next_(_with_fields(model, updates), effects)

    return combined
