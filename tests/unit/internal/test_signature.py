from __future__ import annotations

import functools
from typing import Any

import pytest

from dinano._internal.signature import declared_inputs_of, parse_parameter_list
from dinano.exceptions import DINanoInvalidNameError, DINanoParseError


def test_parse_parameter_list_returns_names_in_declaration_order() -> None:
    assert parse_parameter_list("(a, b)") == ("a", "b")


def test_parse_parameter_list_ignores_line_breaks_and_irregular_whitespace() -> None:
    text = "(\n    a ,\n\t b,\n      c   \n)"

    assert parse_parameter_list(text) == ("a", "b", "c")


def test_parse_parameter_list_reads_first_parenthesised_list_only() -> None:
    assert parse_parameter_list("def factory(conf, db) -> (x, y)") == ("conf", "db")


def test_parse_parameter_list_accepts_bare_list() -> None:
    assert parse_parameter_list("conf,db") == ("conf", "db")


@pytest.mark.parametrize("text", ["()", "", "(   )", "  \n "])
def test_parse_parameter_list_returns_empty_for_empty_list(text: str) -> None:
    assert parse_parameter_list(text) == ()


def test_parse_parameter_list_rejects_destructuring_pattern() -> None:
    with pytest.raises(DINanoParseError) as exc_info:
        parse_parameter_list("({ b, c })")

    assert exc_info.value.parameters == "{ b, c }"
    assert "plain comma separated list" in str(exc_info.value)


def test_declared_inputs_of_function_uses_parameter_names() -> None:
    def factory(a: Any, b: Any) -> object:
        return object()

    assert declared_inputs_of(factory) == ("a", "b")


def test_declared_inputs_of_multiline_signature_matches_single_line() -> None:
    def single(a: Any, b: Any) -> object:
        return object()

    def multi(
        a: Any,
        b: Any,
    ) -> object:
        return object()

    assert declared_inputs_of(single) == declared_inputs_of(multi) == ("a", "b")


def test_declared_inputs_of_zero_argument_function_is_empty() -> None:
    assert declared_inputs_of(lambda: object()) == ()


def test_declared_inputs_of_class_uses_init_parameters() -> None:
    class Service:
        def __init__(self, conf: Any, db: Any) -> None:
            self.conf = conf
            self.db = db

    assert declared_inputs_of(Service) == ("conf", "db")


def test_declared_inputs_of_skips_parameters_with_defaults() -> None:
    def factory(conf: Any, retries: int = 3, *, verbose: bool = False) -> object:
        return object()

    assert declared_inputs_of(factory) == ("conf",)


def test_declared_inputs_of_partial_drops_bound_arguments() -> None:
    def factory(prefix: str, conf: Any) -> object:
        return object()

    assert declared_inputs_of(functools.partial(factory, "x")) == ("conf",)


@pytest.mark.parametrize(
    "factory",
    [
        lambda *args: object(),
        lambda **kwargs: object(),
        lambda conf, *, db: object(),
    ],
    ids=["var-positional", "var-keyword", "required-keyword-only"],
)
def test_declared_inputs_of_rejects_signatures_not_bindable_by_name(factory: Any) -> None:
    with pytest.raises(DINanoParseError):
        declared_inputs_of(factory)


def test_declared_inputs_of_explicit_string_declaration_wins() -> None:
    def factory(*args: Any) -> object:
        return args

    assert declared_inputs_of(factory, "(conf,\n db)") == ("conf", "db")


def test_declared_inputs_of_explicit_sequence_declaration_wins() -> None:
    def factory(x: Any, y: Any) -> object:
        return object()

    assert declared_inputs_of(factory, ["db", "conf"]) == ("db", "conf")


def test_declared_inputs_of_explicit_declaration_rejects_duplicates() -> None:
    with pytest.raises(DINanoInvalidNameError, match="more than once"):
        declared_inputs_of(lambda a, b: object(), ["conf", "conf"])


def test_declared_inputs_of_explicit_declaration_rejects_empty_names() -> None:
    with pytest.raises(DINanoInvalidNameError):
        declared_inputs_of(lambda a, b: object(), "a,,b")
