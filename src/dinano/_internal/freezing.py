from __future__ import annotations

import operator
import types
from collections.abc import (
    Callable,
    Generator,
    Iterator,
    Mapping,
    MutableMapping,
    MutableSequence,
    MutableSet,
)
from typing import Any

from dinano.exceptions import DINanoFrozenDependencyError

_TARGET_ATTR = "_FrozenDependency__target"
_NAME_ATTR = "_FrozenDependency__name"

# Mutators reachable through attribute access on builtin containers.
_CONTAINER_MUTATORS = frozenset(
    {
        "__iadd__",
        "__imul__",
        "__ior__",
        "add",
        "append",
        "clear",
        "discard",
        "extend",
        "insert",
        "pop",
        "popitem",
        "remove",
        "reverse",
        "setdefault",
        "sort",
        "update",
    },
)
_MUTABLE_CONTAINERS = (MutableMapping, MutableSequence, MutableSet)


def _target_of(proxy: FrozenDependency) -> Any:
    return object.__getattribute__(proxy, _TARGET_ATTR)


def _reject(proxy: FrozenDependency, operation: str) -> None:
    name = object.__getattribute__(proxy, _NAME_ATTR)
    msg = f'Cannot {operation} the frozen dependency "{name}".'
    raise DINanoFrozenDependencyError(msg)


def _unwrap(value: Any) -> Any:
    return _target_of(value) if isinstance(value, FrozenDependency) else value


def _method_function(target: Any, attribute: str) -> types.FunctionType | None:
    """Return the Python function behind ``target.attribute`` when it is a plain method."""
    instance_dict = getattr(target, "__dict__", None)
    if isinstance(instance_dict, Mapping) and attribute in instance_dict:
        return None
    for klass in type(target).__mro__:
        if attribute in klass.__dict__:
            member = klass.__dict__[attribute]
            return member if isinstance(member, types.FunctionType) else None
    return None


def _lookup(proxy: FrozenDependency, attribute: str) -> Any:
    target = _target_of(proxy)
    if attribute == "__dict__":
        name = object.__getattribute__(proxy, _NAME_ATTR)
        return FrozenDependency(getattr(target, "__dict__"), name)
    if attribute in _CONTAINER_MUTATORS and isinstance(target, _MUTABLE_CONTAINERS):
        _reject(proxy, f"call {attribute}() on")

    # Methods run against the view, so ``self.x = ...`` inside them is rejected too.
    function = _method_function(target, attribute)
    if function is not None:
        return function.__get__(proxy, type(target))
    return getattr(target, attribute)


def _protocol_method(proxy: FrozenDependency, attribute: str, protocol: str) -> Any:
    target = _target_of(proxy)
    if getattr(type(target), attribute, None) is None:
        msg = f"{type(target).__name__!r} object does not support the {protocol} protocol"
        raise TypeError(msg)
    return _lookup(proxy, attribute)


def _binary(op: Callable[[Any, Any], Any]) -> Callable[[FrozenDependency, Any], Any]:
    def forward(self: FrozenDependency, other: Any) -> Any:
        return op(_target_of(self), _unwrap(other))

    return forward


def _reflected(op: Callable[[Any, Any], Any]) -> Callable[[FrozenDependency, Any], Any]:
    def forward(self: FrozenDependency, other: Any) -> Any:
        return op(_unwrap(other), _target_of(self))

    return forward


def _unary(op: Callable[[Any], Any]) -> Callable[[FrozenDependency], Any]:
    def forward(self: FrozenDependency) -> Any:
        return op(_target_of(self))

    return forward


class FrozenDependency:
    """Read-only view over a built dependency value.

    Reads, iteration, comparisons, arithmetic and the context manager
    protocols are forwarded to the wrapped value. Attribute and item
    assignment or deletion raise ``DINanoFrozenDependencyError``, and so does
    reaching for the in-place mutators of builtin containers. Methods defined
    in Python run with the view as ``self``, so they cannot assign attributes
    either, and ``__dict__`` is handed out frozen. Like a shallow freeze,
    objects reachable through the value stay mutable.

    ``isinstance`` checks see the wrapped value's class, and ``callable`` is
    true only when the wrapped value is callable.
    """

    __slots__ = ("__name", "__target")

    def __new__(cls, target: Any, name: str) -> FrozenDependency:
        if cls is FrozenDependency and callable(target):
            cls = _CallableFrozenDependency
        return object.__new__(cls)

    def __init__(self, target: Any, name: str) -> None:
        object.__setattr__(self, _TARGET_ATTR, target)
        object.__setattr__(self, _NAME_ATTR, name)

    @property  # type: ignore[misc]
    def __class__(self) -> type[Any]:
        return type(self.__target)

    @property
    def __wrapped__(self) -> Any:
        return self.__target

    def __getattr__(self, attribute: str) -> Any:
        return _lookup(self, attribute)

    def __setattr__(self, attribute: str, value: Any) -> None:
        _reject(self, f"set attribute {attribute!r} of")

    def __delattr__(self, attribute: str) -> None:
        _reject(self, f"delete attribute {attribute!r} of")

    def __getitem__(self, key: Any) -> Any:
        return self.__target[key]

    def __setitem__(self, key: Any, value: Any) -> None:
        _reject(self, f"set item {key!r} of")

    def __delitem__(self, key: Any) -> None:
        _reject(self, f"delete item {key!r} of")

    def __iter__(self) -> Iterator[Any]:
        return iter(self.__target)

    def __reversed__(self) -> Iterator[Any]:
        return reversed(self.__target)

    def __len__(self) -> int:
        return len(self.__target)

    def __contains__(self, item: Any) -> bool:
        return item in self.__target

    def __bool__(self) -> bool:
        return bool(self.__target)

    def __enter__(self) -> Any:
        return _protocol_method(self, "__enter__", "context manager")()

    def __exit__(self, *exc_info: Any) -> Any:
        return _protocol_method(self, "__exit__", "context manager")(*exc_info)

    async def __aenter__(self) -> Any:
        return await _protocol_method(self, "__aenter__", "asynchronous context manager")()

    async def __aexit__(self, *exc_info: Any) -> Any:
        aexit = _protocol_method(self, "__aexit__", "asynchronous context manager")
        return await aexit(*exc_info)

    def __await__(self) -> Generator[Any, None, Any]:
        return _protocol_method(self, "__await__", "awaitable")()

    def __eq__(self, other: object) -> bool:
        return bool(self.__target == _unwrap(other))

    def __hash__(self) -> int:
        return hash(self.__target)

    __lt__ = _binary(operator.lt)
    __le__ = _binary(operator.le)
    __gt__ = _binary(operator.gt)
    __ge__ = _binary(operator.ge)

    __add__ = _binary(operator.add)
    __sub__ = _binary(operator.sub)
    __mul__ = _binary(operator.mul)
    __matmul__ = _binary(operator.matmul)
    __truediv__ = _binary(operator.truediv)
    __floordiv__ = _binary(operator.floordiv)
    __mod__ = _binary(operator.mod)
    __pow__ = _binary(operator.pow)
    __lshift__ = _binary(operator.lshift)
    __rshift__ = _binary(operator.rshift)
    __and__ = _binary(operator.and_)
    __or__ = _binary(operator.or_)
    __xor__ = _binary(operator.xor)

    __radd__ = _reflected(operator.add)
    __rsub__ = _reflected(operator.sub)
    __rmul__ = _reflected(operator.mul)
    __rmatmul__ = _reflected(operator.matmul)
    __rtruediv__ = _reflected(operator.truediv)
    __rfloordiv__ = _reflected(operator.floordiv)
    __rmod__ = _reflected(operator.mod)
    __rpow__ = _reflected(operator.pow)
    __rlshift__ = _reflected(operator.lshift)
    __rrshift__ = _reflected(operator.rshift)
    __rand__ = _reflected(operator.and_)
    __ror__ = _reflected(operator.or_)
    __rxor__ = _reflected(operator.xor)

    __neg__ = _unary(operator.neg)
    __pos__ = _unary(operator.pos)
    __abs__ = _unary(operator.abs)
    __invert__ = _unary(operator.invert)

    def __format__(self, format_spec: str) -> str:
        return format(self.__target, format_spec)

    def __dir__(self) -> list[str]:
        return dir(self.__target)

    def __repr__(self) -> str:
        return f"FrozenDependency({self.__target!r})"

    def __str__(self) -> str:
        return str(self.__target)


class _CallableFrozenDependency(FrozenDependency):
    """Frozen view over a callable value."""

    __slots__ = ()

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        return _lookup(self, "__call__")(*args, **kwargs)


def freeze(value: Any, name: str) -> Any:
    """Return a read-only view of ``value`` for the dependency called ``name``.

    Values that are already frozen are returned unchanged.
    """
    if is_frozen(value):
        return value
    return FrozenDependency(value, name)


def is_frozen(value: Any) -> bool:
    """Return whether ``value`` is a frozen dependency view."""
    return issubclass(type(value), FrozenDependency)


__all__ = ["FrozenDependency", "freeze", "is_frozen"]
