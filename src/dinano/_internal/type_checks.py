from __future__ import annotations

import functools
import inspect
from typing import Any

_PRIMITIVE_TYPES: tuple[type[Any], ...] = (str, bytes, bool, int, float, complex)


def unsupported_type_name(candidate: object) -> str | None:
    """Return the reported type name when candidate cannot be a dependency value.

    Dependency values must be objects or functions. ``None`` is reported as
    ``"null"``; primitive scalars are reported by their runtime type name.
    Supported values return ``None``.

    Args:
        candidate: Value being checked for eligibility.

    """
    if candidate is None:
        return "null"
    if isinstance(candidate, _PRIMITIVE_TYPES):
        return type(candidate).__name__
    return None


def is_factory(candidate: object) -> bool:
    """Return true when candidate is called to produce a value rather than used as one.

    Functions, methods, builtins, classes and ``functools.partial`` objects are
    factories. Other callable instances are plain values.

    Args:
        candidate: Value being checked for eligibility.

    """
    return (
        inspect.isroutine(candidate)
        or inspect.isclass(candidate)
        or isinstance(candidate, functools.partial)
    )


__all__ = ["is_factory", "unsupported_type_name"]
