from __future__ import annotations

import importlib
import inspect
import warnings
from typing import Any

from dinano._internal.registry import Registry
from dinano.exceptions import DINanoInvalidTypeError

_PYDANTIC_V1_WARNING_PATTERN = (
    r"Core Pydantic V1 functionality isn't compatible with Python 3\.14 or greater\."
)


def _load_pydantic_settings_base() -> type[Any] | None:
    return _load_base_settings("pydantic_settings")


def _load_pydantic_v1_base() -> type[Any] | None:
    with warnings.catch_warnings():
        warnings.filterwarnings(
            "ignore",
            message=_PYDANTIC_V1_WARNING_PATTERN,
            category=UserWarning,
        )
        return _load_base_settings("pydantic.v1")


def _load_base_settings(module_name: str) -> type[Any] | None:
    try:
        module = importlib.import_module(module_name)
    except ImportError:
        return None
    base_settings = getattr(module, "BaseSettings", None)
    if isinstance(base_settings, type):
        return base_settings
    return None


def _build_settings_bases() -> tuple[type[Any], ...]:
    bases: list[type[Any]] = []
    for candidate in (_load_pydantic_settings_base(), _load_pydantic_v1_base()):
        if candidate is not None and candidate not in bases:
            bases.append(candidate)
    return tuple(bases)


SETTINGS_BASES: tuple[type[Any], ...] = _build_settings_bases()


def is_pydantic_settings_subclass(candidate: object) -> bool:
    """Return whether a class is a supported Pydantic settings model.

    Both ``pydantic_settings.BaseSettings`` and the legacy
    ``pydantic.v1.BaseSettings`` are recognised when importable.

    Args:
        candidate: Object to test.

    """
    if not inspect.isclass(candidate):
        return False
    try:
        return any(issubclass(candidate, base) for base in SETTINGS_BASES)
    except TypeError:
        return False


def register_settings(
    registry: Registry,
    settings_cls: type[Any],
    name: str,
    *,
    mock: bool = False,
) -> None:
    """Register a settings class as a configuration dependency.

    Settings constructors accept ``**values`` and cannot be wired from
    parameter names, so the class is registered through a zero-argument
    factory. Values load from the environment when the graph is built, and
    consumers declare a parameter called ``name`` to receive them.

    Args:
        registry: Registry receiving the node.
        settings_cls: A ``BaseSettings`` subclass.
        name: Dependency name, for example ``"conf"``.
        mock: Register as a mock so tests can reassign fields after build.

    Raises:
        DINanoInvalidTypeError: If ``settings_cls`` is not a settings class.

    """
    if not is_pydantic_settings_subclass(settings_cls):
        raise DINanoInvalidTypeError(name, getattr(settings_cls, "__name__", repr(settings_cls)))

    def load_settings() -> Any:
        return settings_cls()

    if mock:
        registry.register_mock(name, load_settings)
    else:
        registry.register_one(load_settings, name)


__all__ = [
    "SETTINGS_BASES",
    "is_pydantic_settings_subclass",
    "register_settings",
]
