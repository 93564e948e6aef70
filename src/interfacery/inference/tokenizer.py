from __future__ import annotations

import re
from typing import List

_SEP = "\x00"
_ACRONYM_END = re.compile(r"([A-Z]+)([A-Z][a-z])")   # HTTPServer -> HTTP|Server
_LOWER_UPPER = re.compile(r"([a-z0-9])([A-Z])")      # getUser -> get|User


def tokenize(identifier: str) -> List[str]:
    """
    Split an identifier into words, case preserved.

    "GetUserByID"       -> ["Get", "User", "By", "ID"]
    "UserIDAndOrderID"  -> ["User", "ID", "And", "Order", "ID"]
    ""                  -> [""]
    """
    if not identifier:
        return [""]
    marked = _ACRONYM_END.sub(rf"\1{_SEP}\2", identifier)
    marked = _LOWER_UPPER.sub(rf"\1{_SEP}\2", marked)
    return marked.split(_SEP)
