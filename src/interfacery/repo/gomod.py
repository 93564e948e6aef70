from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

_MODULE = re.compile(r"^\s*module\s+(\S+)", re.MULTILINE)


@dataclass(frozen=True)
class GoModule:
    path: str   # module path from go.mod, e.g. github.com/acme/shop
    root: Path  # directory holding go.mod


def find_go_module(start: Path) -> Optional[GoModule]:
    """Walk up from start to the nearest go.mod; None when there is none."""
    start = start.resolve()
    for d in (start, *start.parents):
        gomod = d / "go.mod"
        if not gomod.is_file():
            continue
        try:
            text = gomod.read_text(encoding="utf-8", errors="ignore")
        except OSError:
            return None
        m = _MODULE.search(text)
        if m:
            return GoModule(path=m.group(1).strip('"'), root=d)
        return None
    return None


def import_path_for(directory: Path, fallback_root: Path) -> str:
    """
    Go import path of the package in directory.

    Uses the nearest go.mod; without one, falls back to the directory
    relative to fallback_root (forward slashes).
    """
    directory = directory.resolve()
    module = find_go_module(directory)
    if module is not None:
        rel = directory.relative_to(module.root).as_posix()
        return module.path if rel == "." else f"{module.path}/{rel}"

    try:
        rel = directory.relative_to(fallback_root.resolve()).as_posix()
    except ValueError:
        rel = directory.name
    return "" if rel == "." else rel
