"""File-system helpers for the storage engine."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Union

PathLike = Union[str, "os.PathLike[str]"]


def is_dir(path: PathLike) -> bool:
    """Return whether ``path`` is a directory; raise if it does not exist."""
    return Path(path).stat().st_mode is not None and Path(path).is_dir()


def mkdir_with_path(path: PathLike, mode: int) -> None:
    """Create ``path`` and its parents, then give it ``mode`` where supported."""
    os.makedirs(path, exist_ok=True)
    if os.name == "posix":
        os.chmod(path, mode)


def delete_dir(dirname: PathLike) -> None:
    """Remove a directory and everything beneath it."""
    root = Path(dirname)
    with os.scandir(root) as entries:
        for entry in entries:
            entry_path = Path(entry.path)
            if is_dir(entry_path):
                delete_dir(entry_path)
            else:
                entry_path.unlink()
    root.rmdir()


def unique_test_db_path() -> Path:
    """Return a fresh path for a test database that does not yet exist."""
    with tempfile.TemporaryDirectory() as tmp:
        path = Path(tmp) / "kiwi-test-db"
    return path