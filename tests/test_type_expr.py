import pytest

from interfacery.errors import UnsupportedTypeExpression
from interfacery.types.expr import (
    ArrayType,
    GenericType,
    MapType,
    NamedType,
    PointerType,
    SliceType,
    VariadicType,
    canonicalize,
    format_type_expr,
    parse_type_expr,
)


def test_parse_pointer_to_slice_of_qualified_name():
    assert parse_type_expr("*[]models.User") == PointerType(SliceType(NamedType("User", "models")))


def test_parse_full_import_path_qualifier():
    assert parse_type_expr("github.com/acme/shop/models.Order") == NamedType(
        name="Order", package="github.com/acme/shop/models"
    )


def test_parse_map_array_generic_variadic():
    assert parse_type_expr("map[string]int") == MapType(NamedType("string"), NamedType("int"))
    assert parse_type_expr("[4]byte") == ArrayType("4", NamedType("byte"))
    assert parse_type_expr("Page[models.User, int]") == GenericType(
        NamedType("Page"), (NamedType("User", "models"), NamedType("int"))
    )
    assert parse_type_expr("...string") == VariadicType(NamedType("string"))


@pytest.mark.parametrize(
    "text,expected",
    [
        ("* models.User", "*models.User"),
        ("map[string] []*pkg.T", "map[string][]*pkg.T"),
        ("Page[ models.User ,int]", "Page[models.User, int]"),
        ("interface { }", "interface{}"),
        ("any", "any"),
        ("error", "error"),
        ("context.Context", "context.Context"),
    ],
)
def test_canonicalize(text, expected):
    assert canonicalize(text) == expected


@pytest.mark.parametrize(
    "text",
    [
        "",
        "chan int",
        "<-chan int",
        "func() error",
        "struct{}",
        "interface{ Close() error }",
        "map[string",
        "[]...int",
        "int extra",
    ],
)
def test_unsupported_type_expressions_raise(text):
    with pytest.raises(UnsupportedTypeExpression) as exc:
        parse_type_expr(text)
    assert exc.value.type_text == text


def test_format_type_expr_nested():
    expr = MapType(NamedType("string"), PointerType(NamedType("User", "models")))
    assert format_type_expr(expr) == "map[string]*models.User"
