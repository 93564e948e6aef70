import pytest

from interfacery.domain.models import ReturnValue
from interfacery.render.helpers import (
    DEFAULT_HELPERS,
    has_error,
    has_multiple,
    has_only_error,
    make_helpers,
    or_else,
    pascal_case,
    snake_case,
)

RETURNS_VALUE_AND_ERROR = [ReturnValue(type_expr="int"), ReturnValue(type_expr="error")]
RETURNS_ERROR = [ReturnValue(type_expr="error")]
RETURNS_TWO_VALUES = [ReturnValue(type_expr="string"), ReturnValue(type_expr="int")]


@pytest.mark.parametrize(
    "value,expected",
    [
        ("CamelCaseString", "camel_case_string"),
        ("Word", "word"),
        ("lowercase", "lowercase"),
        ("", ""),
        ("UserID", "user_id"),
        ("HTTPServer", "http_server"),
    ],
)
def test_snake_case(value, expected):
    assert snake_case(value) == expected


@pytest.mark.parametrize(
    "value,expected",
    [
        ("user_id", "UserId"),
        ("get-user", "GetUser"),
        ("GetUser", "GetUser"),
        ("HTTP_server", "HttpServer"),
        ("userID", "UserID"),
        ("", ""),
    ],
)
def test_pascal_case(value, expected):
    assert pascal_case(value) == expected


def test_or_else():
    assert or_else("hello", "world") == "hello"
    assert or_else("", "world") == "world"


def test_return_shape_predicates():
    assert has_error(RETURNS_VALUE_AND_ERROR)
    assert has_error(RETURNS_ERROR)
    assert not has_error(RETURNS_TWO_VALUES)

    assert has_only_error(RETURNS_ERROR)
    assert not has_only_error(RETURNS_VALUE_AND_ERROR)
    assert not has_only_error(RETURNS_TWO_VALUES)

    assert has_multiple(RETURNS_TWO_VALUES)
    assert not has_multiple([ReturnValue(type_expr="string")])
    assert not has_multiple(RETURNS_ERROR)


def test_predicates_accept_plain_type_strings():
    assert has_only_error(["error"])
    assert has_multiple(["a", "b", "error"])


def test_make_helpers_uses_given_error_types():
    helpers = make_helpers(frozenset({"*AppError"}))
    assert helpers.has_only_error(["*AppError"])
    assert not helpers.has_only_error(["error"])
    assert DEFAULT_HELPERS.has_only_error(["error"])


def test_helper_mapping_is_the_fixed_set():
    assert set(DEFAULT_HELPERS.as_mapping()) == {
        "snake_case",
        "pascal_case",
        "lower",
        "or_else",
        "has_error",
        "has_only_error",
        "has_multiple",
    }
