from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

ACTIONS = ("Get", "Create", "Update", "Delete", "List", "Add", "Remove")

# raw-name prefixes; matched longest first
_VERB_PREFIXES = {
    "Get": "GET",
    "List": "GET",
    "Create": "POST",
    "New": "POST",
    "Post": "POST",
    "Update": "PUT",
    "Put": "PUT",
    "Delete": "DELETE",
    "Remove": "DELETE",
}
_PREFIXES_LONGEST_FIRST = sorted(_VERB_PREFIXES, key=lambda p: (-len(p), p))


@dataclass(frozen=True)
class ActionMatch:
    action: str   # "" when the first token is not a known action
    cursor: int   # index of the first token after the action


def classify_action(tokens: Sequence[str]) -> ActionMatch:
    if tokens and tokens[0] in ACTIONS:
        return ActionMatch(action=tokens[0], cursor=1)
    return ActionMatch(action="", cursor=0)


def infer_http_method(method_name: str, default: str = "GET") -> str:
    """Verb from the unsplit method name: GetX/ListX -> GET, CreateX/NewX/PostX -> POST, ..."""
    for prefix in _PREFIXES_LONGEST_FIRST:
        if method_name.startswith(prefix):
            return _VERB_PREFIXES[prefix]
    return default
