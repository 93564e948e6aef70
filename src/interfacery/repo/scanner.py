from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable

from interfacery.repo.ignore import should_ignore_dir


def scan_go_files(
    root: Path,
    ignore_dirs: Iterable[str] = (),
    max_files: int | None = None,
) -> list[str]:
    """
    Return absolute paths (as strings) of non-test .go files under root.
    Deterministic: directories and files are visited in sorted order.
    """
    extra = tuple(ignore_dirs)
    out: list[str] = []
    for dirpath, dirs, files in _walk(root):
        root_p = Path(dirpath)

        # prune ignored dirs
        dirs[:] = sorted(d for d in dirs if not should_ignore_dir(root_p / d, extra))

        for f in sorted(files):
            if f.endswith(".go") and not f.endswith("_test.go"):
                out.append(str((root_p / f).resolve()))
                if max_files is not None and len(out) >= max_files:
                    return out
    return out


def _walk(root: Path):
    # Separate helper to make unit testing easier (can be mocked)
    return os.walk(root)


def file_declares_interface(path: str, max_bytes: int = 2_000_000) -> bool:
    try:
        with open(path, "rb") as f:
            data = f.read(max_bytes)
    except OSError:
        return False
    return b"interface" in data
