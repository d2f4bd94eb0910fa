from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Callable, Mapping
from contextlib import AbstractAsyncContextManager, asynccontextmanager
from typing import Any

from dinano._internal.freezing import is_frozen
from dinano._internal.registry import Registry
from dinano.exceptions import DINanoIncompleteDependencyError

try:
    from fastapi import APIRouter, Depends, FastAPI, Request
except ModuleNotFoundError as exc:  # pragma: no cover - exercised in optional import scenarios
    message = "FastAPI integration requires fastapi. Install with 'dinano[fastapi]'."
    raise ModuleNotFoundError(message) from exc

logger = logging.getLogger(__name__)

_MODULES_STATE_ATTR = "dinano_modules"


def dinano_lifespan(
    registry: Registry,
    *,
    include_routers: bool = True,
) -> Callable[[FastAPI], AbstractAsyncContextManager[None]]:
    """Build a FastAPI lifespan that resolves ``registry`` on startup.

    The built modules are stored on ``app.state`` and served to route
    handlers through ``Module``. Built values that are ``APIRouter``
    instances are included into the app unless ``include_routers`` is off.

    Args:
        registry: Registry to invoke when the application starts.
        include_routers: Include every built ``APIRouter`` into the app.

    Examples:
        .. code-block:: python

            app = FastAPI(lifespan=dinano_lifespan(registry))

    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        modules = await registry.invoke()
        setattr(app.state, _MODULES_STATE_ATTR, modules)
        if include_routers:
            include_built_routers(app, modules)
        yield

    return lifespan


def include_built_routers(app: FastAPI, modules: Mapping[str, Any]) -> list[str]:
    """Include every ``APIRouter`` among ``modules`` into ``app``, in name order.

    Returns:
        Names of the included routers.

    """
    included: list[str] = []
    for name, value in modules.items():
        if isinstance(value, APIRouter):
            # include_router needs the real router, not the frozen view.
            app.include_router(value.__wrapped__ if is_frozen(value) else value)
            included.append(name)
    if included:
        logger.info("Included dinano routers: %s", ", ".join(included))
    return included


def get_modules(app: FastAPI) -> Mapping[str, Any]:
    """Return the modules built by ``dinano_lifespan`` for ``app``.

    Raises:
        DINanoIncompleteDependencyError: If the lifespan has not run yet.

    """
    modules = getattr(app.state, _MODULES_STATE_ATTR, None)
    if modules is None:
        raise DINanoIncompleteDependencyError("app.state", "get")
    return modules


def Module(name: str) -> Any:  # noqa: N802
    """Declare a route parameter receiving the built module called ``name``.

    Examples:
        .. code-block:: python

            @app.get("/flip")
            def flip(helpers: Any = Module("helpers")) -> str:
                return helpers.flip()

    """

    def resolve_module(request: Request) -> Any:
        return get_modules(request.app)[name]

    return Depends(resolve_module)


__all__ = ["Module", "dinano_lifespan", "get_modules", "include_built_routers"]
