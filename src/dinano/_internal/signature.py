from __future__ import annotations

import inspect
import re
from collections.abc import Callable, Sequence
from inspect import Parameter
from typing import Any, TypeAlias

from dinano.exceptions import DINanoInvalidNameError, DINanoParseError

DependenciesDeclaration: TypeAlias = str | Sequence[str]
"""An explicit list of input names: ``"a, b"``, ``"(a, b)"`` or ``["a", "b"]``."""

_PARAMETER_LIST = re.compile(r"\(([^)]*)\)")
_WHITESPACE = re.compile(r"\s+")
_DESTRUCTURING = "{"
_POSITIONAL_KINDS = (Parameter.POSITIONAL_ONLY, Parameter.POSITIONAL_OR_KEYWORD)


def parse_parameter_list(text: str) -> tuple[str, ...]:
    """Return the ordered input names declared by a textual parameter list.

    The list is read from between the first pair of parentheses when the text
    contains one, otherwise the whole text is the list. Whitespace, including
    line breaks, is insignificant.

    Args:
        text: Parameter list text such as ``"(a, b)"`` or ``"a,\\n    b"``.

    Returns:
        Input names in left-to-right declaration order.

    Raises:
        DINanoParseError: If the list uses a destructuring pattern.

    """
    match = _PARAMETER_LIST.search(text)
    parameters = match.group(1) if match else text
    if not parameters.strip():
        return ()
    if _DESTRUCTURING in parameters:
        raise DINanoParseError(parameters)
    return tuple(_WHITESPACE.sub("", name) for name in parameters.split(","))


def declared_inputs_of(
    factory: Callable[..., Any],
    dependencies: DependenciesDeclaration | None = None,
) -> tuple[str, ...]:
    """Return the input names a factory is called with, in positional order.

    An explicit ``dependencies`` declaration takes precedence over the
    factory signature. Without one, every positional parameter that has no
    default value is an input; parameters with defaults keep their defaults.

    Args:
        factory: Callable producing the dependency value.
        dependencies: Optional explicit declaration of input names.

    Raises:
        DINanoParseError: If the signature cannot be bound positionally by name.
        DINanoInvalidNameError: If an explicit declaration holds invalid names.

    """
    if dependencies is not None:
        return _validate_names(_explicit_names(dependencies))

    try:
        signature = inspect.signature(factory)
    except (TypeError, ValueError):
        # Builtins without introspectable signatures take no injected inputs.
        return ()

    names: list[str] = []
    for parameter in signature.parameters.values():
        if parameter.kind in _POSITIONAL_KINDS:
            if parameter.default is Parameter.empty:
                names.append(parameter.name)
            continue
        if parameter.kind is Parameter.KEYWORD_ONLY and parameter.default is not Parameter.empty:
            continue
        raise DINanoParseError(_parameter_list_text(signature))
    return tuple(names)


def _explicit_names(dependencies: DependenciesDeclaration) -> tuple[str, ...]:
    if isinstance(dependencies, str):
        return parse_parameter_list(dependencies)
    return tuple(dependencies)


def _validate_names(names: tuple[str, ...]) -> tuple[str, ...]:
    seen: set[str] = set()
    for name in names:
        if not isinstance(name, str) or not name:
            msg = f"Invalid dependency name {name!r} in explicit declaration {list(names)!r}."
            raise DINanoInvalidNameError(msg)
        if name in seen:
            msg = f'Dependency name "{name}" is declared more than once.'
            raise DINanoInvalidNameError(msg)
        seen.add(name)
    return names


def _parameter_list_text(signature: inspect.Signature) -> str:
    return ", ".join(str(parameter) for parameter in signature.parameters.values())


__all__ = ["DependenciesDeclaration", "declared_inputs_of", "parse_parameter_list"]
