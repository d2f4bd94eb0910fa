"""Tests for the dinano exception hierarchy and messages."""

from __future__ import annotations

import pytest

from dinano import exceptions
from dinano.exceptions import (
    DINanoAlreadyExistsError,
    DINanoCircularDependencyError,
    DINanoError,
    DINanoFrozenDependencyError,
    DINanoIncompleteDependencyError,
    DINanoInvalidTypeError,
    DINanoNotCallableError,
    DINanoParseError,
    DINanoUnknownDependencyError,
    DINanoUnsupportedResultError,
    DINanoUnsupportedTypeError,
)


def _exception_classes() -> list[type[BaseException]]:
    return [
        value
        for name, value in vars(exceptions).items()
        if name.startswith("DINano") and isinstance(value, type)
    ]


@pytest.mark.parametrize("exception_cls", _exception_classes(), ids=lambda cls: cls.__name__)
def test_every_exception_derives_from_base(exception_cls: type[BaseException]) -> None:
    assert issubclass(exception_cls, DINanoError)


def test_builtin_compatible_bases() -> None:
    assert issubclass(DINanoFrozenDependencyError, AttributeError)
    assert issubclass(DINanoNotCallableError, TypeError)


class TestMessages:
    def test_already_exists(self) -> None:
        error = DINanoAlreadyExistsError("conf")

        assert error.name == "conf"
        assert str(error) == 'A dependency named "conf" already exists.'

    def test_invalid_type(self) -> None:
        error = DINanoInvalidTypeError("conf", "dict")

        assert 'Invalid dependency type "dict" for "conf"' in str(error)

    def test_unsupported_type(self) -> None:
        assert str(DINanoUnsupportedTypeError("null")) == (
            'Got "null". Expected an object or a function.'
        )

    def test_unsupported_result(self) -> None:
        error = DINanoUnsupportedResultError("a", "int")

        assert (error.name, error.type_name) == ("a", "int")
        assert str(error) == 'Dependency "a" evaluated to "int". Expected an object or a function.'

    def test_incomplete(self) -> None:
        error = DINanoIncompleteDependencyError("helpers", "call")

        assert str(error) == 'call: an attempt to use the incomplete dependency "helpers".'

    def test_circular_path(self) -> None:
        error = DINanoCircularDependencyError(("a", "b", "a"))

        assert error.path == ["a", "b", "a"]
        assert str(error) == "Circular dependency detected: [a => b => a]."

    def test_parse(self) -> None:
        error = DINanoParseError("{ a }")

        assert error.parameters == "{ a }"
        assert str(error) == (
            'An invalid way of declaring dependency names => "({ a })". '
            "Must be a plain comma separated list."
        )

    def test_unknown(self) -> None:
        error = DINanoUnknownDependencyError("d")

        assert str(error) == 'Cannot find a dependency with the given name: "d".'

    def test_not_callable(self) -> None:
        assert str(DINanoNotCallableError("conf")) == 'Dependency "conf" is not callable.'


def test_public_package_reexports_exceptions() -> None:
    import dinano

    for exception_cls in _exception_classes():
        assert getattr(dinano, exception_cls.__name__) is exception_cls
