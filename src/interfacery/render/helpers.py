from __future__ import annotations

import re
from dataclasses import dataclass
from functools import partial
from typing import AbstractSet, Any, Callable, Dict, Iterable, List

_WORD_DELIMS = re.compile(r"[_\-\s.]+")


def snake_case(value: str) -> str:
    """CamelCaseString -> camel_case_string, UserID -> user_id, HTTPServer -> http_server."""
    out: List[str] = []
    n = len(value)
    for i, ch in enumerate(value):
        if i > 0 and ch.isupper():
            next_lower = i + 1 < n and value[i + 1].islower()
            if next_lower or value[i - 1].islower():
                out.append("_")
        out.append(ch.lower())
    return "".join(out)


def pascal_case(value: str) -> str:
    """
    user_id -> UserId, get-user -> GetUser, GetUser -> GetUser.

    Words are split on "_", "-", "." and whitespace. All-caps words are
    folded (HTTP -> Http); mixed-case words keep their inner casing.
    """
    words = [w for w in _WORD_DELIMS.split(value) if w]
    out = []
    for w in words:
        rest = w[1:] if any(c.islower() for c in w) else w[1:].lower()
        out.append(w[0].upper() + rest)
    return "".join(out)


def lower(value: str) -> str:
    return value.lower()


def or_else(value: str, default: str) -> str:
    return value if value else default


def _type_of(ret: Any) -> str:
    return ret if isinstance(ret, str) else getattr(ret, "type_expr", "")


def has_error(returns: Iterable[Any], error_types: AbstractSet[str] = frozenset({"error"})) -> bool:
    return any(_type_of(r) in error_types for r in returns)


def has_only_error(returns: Iterable[Any], error_types: AbstractSet[str] = frozenset({"error"})) -> bool:
    rs = list(returns)
    return len(rs) == 1 and _type_of(rs[0]) in error_types


def has_multiple(returns: Iterable[Any], error_types: AbstractSet[str] = frozenset({"error"})) -> bool:
    return sum(1 for r in returns if _type_of(r) not in error_types) > 1


@dataclass(frozen=True)
class TemplateHelpers:
    """The complete, fixed set of helpers a template can call."""

    snake_case: Callable[[str], str]
    pascal_case: Callable[[str], str]
    lower: Callable[[str], str]
    or_else: Callable[[str, str], str]
    has_error: Callable[[Iterable[Any]], bool]
    has_only_error: Callable[[Iterable[Any]], bool]
    has_multiple: Callable[[Iterable[Any]], bool]

    def as_mapping(self) -> Dict[str, Callable[..., Any]]:
        return {
            "snake_case": self.snake_case,
            "pascal_case": self.pascal_case,
            "lower": self.lower,
            "or_else": self.or_else,
            "has_error": self.has_error,
            "has_only_error": self.has_only_error,
            "has_multiple": self.has_multiple,
        }


def make_helpers(error_types: AbstractSet[str] = frozenset({"error"})) -> TemplateHelpers:
    errs = frozenset(error_types)
    return TemplateHelpers(
        snake_case=snake_case,
        pascal_case=pascal_case,
        lower=lower,
        or_else=or_else,
        has_error=partial(has_error, error_types=errs),
        has_only_error=partial(has_only_error, error_types=errs),
        has_multiple=partial(has_multiple, error_types=errs),
    )


DEFAULT_HELPERS = make_helpers()
