from __future__ import annotations

import logging
from collections.abc import Callable, Hashable, Mapping
from typing import Any

from tealoop.contracts import Dispatch, EffectHandler

logger = logging.getLogger(__name__)


def route_effects(
    routes: Mapping[Any, EffectHandler[Any, Any]],
    *,
    key: Callable[[Any], Hashable] | None = None,
    strict: bool = False,
) -> EffectHandler[Any, Any]:
    """Build one effect handler that forwards each effect to the handler for its kind.

    By default the kind is the effect's class, looked up along its MRO so a route for
    a base class also serves its subclasses. Pass `key` to route on something else,
    e.g. `key=lambda e: e["type"]` for dict effects.

    Effects without a route are skipped (other handlers on the loop may want them),
    or rejected with ValueError when `strict` is set.
    """

    table = dict(routes)

    def _lookup(effect: Any) -> EffectHandler[Any, Any] | None:
        if key is not None:
            return table.get(key(effect))
        for cls in type(effect).__mro__:
            handler = table.get(cls)
            if handler is not None:
                return handler
        return None

    def handle(effect: Any, dispatch: Dispatch[Any]) -> None:
        handler = _lookup(effect)
        if handler is None:
            if strict:
                raise ValueError(f"No route for effect: {effect!r}")
            logger.debug("no route for effect %r", effect)
            return
        handler(effect, dispatch)

    return handle
