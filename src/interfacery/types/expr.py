"""
Closed set of type-expression variants and a parser for Go-style type text.

Supported forms:
  T, pkg.T, github.com/org/pkg.T    NamedType
  *T                                PointerType
  []T                               SliceType
  [N]T                              ArrayType
  map[K]V                           MapType
  T[A, B]                           GenericType
  ...T                              VariadicType
  interface{}, any                  NamedType

Function types, channels, struct literals and non-empty interface literals
are rejected with UnsupportedTypeExpression.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Tuple, Union

from interfacery.errors import UnsupportedTypeExpression

_IDENT = re.compile(r"[A-Za-z_][A-Za-z0-9_./-]*")
_ARRAY_LEN = re.compile(r"[A-Za-z0-9_]+|\.\.\.")
_UNSUPPORTED_KEYWORDS = {"func", "chan", "struct"}


@dataclass(frozen=True)
class NamedType:
    name: str
    package: str = ""


@dataclass(frozen=True)
class PointerType:
    elem: "TypeExpr"


@dataclass(frozen=True)
class SliceType:
    elem: "TypeExpr"


@dataclass(frozen=True)
class ArrayType:
    length: str
    elem: "TypeExpr"


@dataclass(frozen=True)
class MapType:
    key: "TypeExpr"
    value: "TypeExpr"


@dataclass(frozen=True)
class GenericType:
    base: NamedType
    args: Tuple["TypeExpr", ...]


@dataclass(frozen=True)
class VariadicType:
    elem: "TypeExpr"


TypeExpr = Union[NamedType, PointerType, SliceType, ArrayType, MapType, GenericType, VariadicType]


class _Parser:
    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0

    def fail(self, why: str) -> UnsupportedTypeExpression:
        return UnsupportedTypeExpression(
            f"unsupported type expression {self.text!r}: {why}", type_text=self.text
        )

    def skip_ws(self) -> None:
        while self.pos < len(self.text) and self.text[self.pos].isspace():
            self.pos += 1

    def peek(self, s: str) -> bool:
        self.skip_ws()
        return self.text.startswith(s, self.pos)

    def expect(self, s: str) -> None:
        if not self.peek(s):
            raise self.fail(f"expected {s!r} at offset {self.pos}")
        self.pos += len(s)

    def at_end(self) -> bool:
        self.skip_ws()
        return self.pos >= len(self.text)

    def parse(self, top_level: bool = True) -> TypeExpr:
        expr = self.parse_type(allow_variadic=top_level)
        if top_level and not self.at_end():
            raise self.fail(f"unexpected trailing text at offset {self.pos}")
        return expr

    def parse_type(self, allow_variadic: bool = False) -> TypeExpr:
        self.skip_ws()
        if self.at_end():
            raise self.fail("empty type")

        if self.peek("..."):
            if not allow_variadic:
                raise self.fail("variadic marker only allowed at top level")
            self.pos += 3
            return VariadicType(self.parse_type())

        if self.peek("*"):
            self.pos += 1
            return PointerType(self.parse_type())

        if self.peek("<-"):
            raise self.fail("channel types are not supported")

        if self.peek("["):
            self.pos += 1
            if self.peek("]"):
                self.pos += 1
                return SliceType(self.parse_type())
            self.skip_ws()
            m = _ARRAY_LEN.match(self.text, self.pos)
            if not m:
                raise self.fail("bad array length")
            self.pos = m.end()
            self.expect("]")
            return ArrayType(m.group(0), self.parse_type())

        return self.parse_named()

    def parse_named(self) -> TypeExpr:
        self.skip_ws()
        m = _IDENT.match(self.text, self.pos)
        if not m:
            raise self.fail(f"unexpected character at offset {self.pos}")
        word = m.group(0)
        self.pos = m.end()

        if word in _UNSUPPORTED_KEYWORDS:
            raise self.fail(f"{word} types are not supported")

        if word == "map":
            self.expect("[")
            key = self.parse_type()
            self.expect("]")
            return MapType(key, self.parse_type())

        if word == "interface":
            self.expect("{")
            if not self.peek("}"):
                raise self.fail("interface literals with methods are not supported")
            self.pos += 1
            return NamedType("interface{}")

        named = _split_qualified(word)
        if self.peek("["):
            self.pos += 1
            args: List[TypeExpr] = [self.parse_type()]
            while self.peek(","):
                self.pos += 1
                args.append(self.parse_type())
            self.expect("]")
            return GenericType(named, tuple(args))
        return named


def _split_qualified(word: str) -> NamedType:
    if word.endswith(".") or word.endswith("/"):
        raise UnsupportedTypeExpression(f"unsupported type expression {word!r}", type_text=word)
    if "." in word:
        package, name = word.rsplit(".", 1)
        return NamedType(name=name, package=package)
    return NamedType(name=word)


def parse_type_expr(text: str) -> TypeExpr:
    return _Parser(text or "").parse()


def format_type_expr(expr: TypeExpr) -> str:
    if isinstance(expr, NamedType):
        return f"{expr.package}.{expr.name}" if expr.package else expr.name
    if isinstance(expr, PointerType):
        return "*" + format_type_expr(expr.elem)
    if isinstance(expr, SliceType):
        return "[]" + format_type_expr(expr.elem)
    if isinstance(expr, ArrayType):
        return f"[{expr.length}]" + format_type_expr(expr.elem)
    if isinstance(expr, MapType):
        return f"map[{format_type_expr(expr.key)}]{format_type_expr(expr.value)}"
    if isinstance(expr, GenericType):
        args = ", ".join(format_type_expr(a) for a in expr.args)
        return f"{format_type_expr(expr.base)}[{args}]"
    if isinstance(expr, VariadicType):
        return "..." + format_type_expr(expr.elem)
    raise UnsupportedTypeExpression(f"unknown type variant {type(expr).__name__}")


def canonicalize(text: str) -> str:
    """Parse then format: '* models.User' -> '*models.User'."""
    return format_type_expr(parse_type_expr(text))
