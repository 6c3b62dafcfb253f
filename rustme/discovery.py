"""Directory walking to find rustme configuration files."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterator, List

from .config import CONFIG_DIR_FILENAME, CONFIG_DIRNAME, CONFIG_FILENAME

_EXCLUDED_DIRS = {
    ".git",
    ".hg",
    ".svn",
    ".venv",
    "venv",
    "node_modules",
    "target",
    "__pycache__",
    ".pytest_cache",
    ".mypy_cache",
    ".tox",
    ".idea",
}


def iter_configurations(root: Path) -> Iterator[Path]:
    """Yield every `.rustme.yml` and `.rustme/config.yml` below ``root`` in sorted order."""
    for dirpath, dirnames, filenames in os.walk(root):
        current_dir = Path(dirpath)
        dirnames[:] = sorted(name for name in dirnames if name not in _EXCLUDED_DIRS)

        if CONFIG_FILENAME in filenames:
            yield current_dir / CONFIG_FILENAME
        if CONFIG_DIRNAME in dirnames:
            candidate = current_dir / CONFIG_DIRNAME / CONFIG_DIR_FILENAME
            if candidate.is_file():
                yield candidate


def find_configurations(root: Path) -> List[Path]:
    root_path = Path(root).expanduser().resolve()
    if not root_path.exists():
        raise FileNotFoundError(f"Directory not found: {root}")
    if not root_path.is_dir():
        raise NotADirectoryError(f"Path is not a directory: {root}")
    return list(iter_configurations(root_path))


__all__ = ["find_configurations", "iter_configurations"]
