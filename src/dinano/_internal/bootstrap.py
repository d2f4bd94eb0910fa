from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from dinano._internal.registry import Registry

T = TypeVar("T")


async def init(
    callback: Callable[[Registry], Awaitable[T] | T],
    *,
    freeze_values: bool = True,
) -> T:
    """Hand a fresh registry to ``callback`` and return what it produces.

    The callback registers dependencies and usually returns
    ``registry.invoke()``; awaitable results are awaited.

    Args:
        callback: Receives the new registry.
        freeze_values: Forwarded to ``Registry``.

    Examples:
        .. code-block:: python

            def configure(registry: Registry) -> Awaitable[dict[str, Any]]:
                registry.register_one(load_config(), "conf")
                registry.register_all(controllers)
                return registry.invoke()

            modules = await init(configure)

    """
    registry = Registry(freeze_values=freeze_values)
    result: Any = callback(registry)
    if inspect.isawaitable(result):
        result = await result
    return result


__all__ = ["init"]
