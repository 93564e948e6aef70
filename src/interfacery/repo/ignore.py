from __future__ import annotations

from pathlib import Path
from typing import Iterable

DEFAULT_IGNORES = {
    ".git",
    "vendor",
    "testdata",
    "node_modules",
    ".idea",
    ".vscode",
    "dist",
    "build",
}


def should_ignore_dir(dir_path: Path, extra: Iterable[str] = ()) -> bool:
    name = dir_path.name
    return name in DEFAULT_IGNORES or name in set(extra) or name.startswith("_")
