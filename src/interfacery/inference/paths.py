from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from interfacery.inference.actions import ActionMatch, classify_action
from interfacery.inference.tokenizer import tokenize

BY_MARKER = "By"

_PLURAL_ACTIONS = {"List", "Create"}
_ID_FALLBACK_ACTIONS = {"Get", "Update", "Delete"}


@dataclass(frozen=True)
class PathInference:
    url_path: str
    path_params: Tuple[str, ...]
    unresolved_tokens: Tuple[str, ...] = ()


def _pluralize(segment: str) -> str:
    # no irregular plurals
    return segment if segment.endswith("s") else segment + "s"


def build_resource_segments(
    tokens: Sequence[str], match: ActionMatch
) -> Tuple[List[str], Optional[int]]:
    """
    Lowercase path segments for the tokens between the action and "By".

    Returns (segments, by_index) where by_index is the index of the first
    token after "By", or None when there is no "By" clause.
    """
    segments: List[str] = []
    for i in range(match.cursor, len(tokens)):
        tok = tokens[i]
        if tok == BY_MARKER:
            return segments, i + 1
        seg = tok.lower()
        if not seg:
            continue
        if match.action in _PLURAL_ACTIONS:
            seg = _pluralize(seg)
        segments.append(seg)
    return segments, None


def resolve_by_clause(
    tokens: Sequence[str], param_names: Iterable[str]
) -> Tuple[List[str], List[str]]:
    """
    Greedily match contiguous token runs against declared parameter names.

    Tokens are lower-cased and buffered one at a time; after each token every
    suffix of the buffer (longest first) is tried. A hit becomes a path param
    and clears the buffer. Returns (matched, leftover_buffer).
    """
    names = {n.lower() for n in param_names if n}
    matched: List[str] = []
    buffer: List[str] = []

    for tok in tokens:
        word = tok.lower()
        if not word:
            continue
        buffer.append(word)
        for start in range(len(buffer)):
            combo = "".join(buffer[start:])
            if combo in names:
                if combo not in matched:
                    matched.append(combo)
                buffer = []
                break

    return matched, buffer


def id_suffix_fallback(param_names: Iterable[str]) -> List[str]:
    out: List[str] = []
    for n in param_names:
        low = n.lower()
        if low.endswith("id") and low not in out:
            out.append(low)
    return out


def _prefix_segments(prefix: str) -> List[str]:
    return [p for p in (prefix or "").strip().split("/") if p]


def infer_path(
    method_name: str,
    param_names: Sequence[str] = (),
    prefix: str = "",
) -> PathInference:
    """
    Action/resource/parameter decomposition of a method name.

    GetUserByID(id)                         -> /user/{id}
    ListUsers()                             -> /users
    GetOrderByUserIDAndOrderID(userID, orderID)
                                            -> /order/{userid}/{orderid}
    DoSomethingRandom()                     -> /do/something/random
    """
    tokens = tokenize(method_name)
    match = classify_action(tokens)
    segments, by_index = build_resource_segments(tokens, match)

    params: List[str] = []
    leftover: List[str] = []
    if by_index is not None:
        params, leftover = resolve_by_clause(tokens[by_index:], param_names)

    if not params and match.action in _ID_FALLBACK_ACTIONS:
        params = id_suffix_fallback(param_names)
        if params:
            leftover = []

    parts = _prefix_segments(prefix) + segments
    parts.extend("{" + p + "}" for p in params)
    parts.extend(leftover)

    return PathInference(
        url_path="/" + "/".join(parts),
        path_params=tuple(params),
        unresolved_tokens=tuple(leftover),
    )


def infer_url_path(method_name: str, param_names: Sequence[str] = (), prefix: str = "") -> str:
    return infer_path(method_name, param_names, prefix=prefix).url_path
