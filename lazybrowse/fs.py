"""Filesystem operations used by the browser.

Thin wrappers over ``os``/``shutil``. Failures surface as ``OSError``
subclasses so callers can report them without crashing the loop.
"""

from __future__ import annotations

import os
import shutil
from pathlib import Path

from .state import DirEntry


def list_directory(path: Path) -> list[DirEntry]:
    """Return the children of ``path`` in scan order.

    Symlinks pointing at directories are listed as directories. Entries whose
    type cannot be determined are treated as files.
    """
    entries: list[DirEntry] = []
    with os.scandir(path) as scanned:
        for child in scanned:
            try:
                is_dir = child.is_dir()
            except OSError:
                is_dir = False
            entries.append(DirEntry(name=child.name, is_dir=is_dir))
    return entries


def rename(old_path: Path, new_path: Path) -> None:
    """Rename ``old_path`` to ``new_path`` without clobbering an existing path."""
    if new_path.exists() or new_path.is_symlink():
        raise FileExistsError(17, "File exists", str(new_path))
    os.rename(old_path, new_path)


def remove(path: Path, recursive: bool = True) -> None:
    """Delete a file, symlink or directory (whole tree when ``recursive``)."""
    if path.is_dir() and not path.is_symlink():
        if recursive:
            shutil.rmtree(path)
        else:
            os.rmdir(path)
        return
    os.unlink(path)


def copy(src_path: Path, dest_path: Path) -> None:
    """Copy a file or directory tree to ``dest_path``, refusing to overwrite."""
    if dest_path.exists() or dest_path.is_symlink():
        raise FileExistsError(17, "File exists", str(dest_path))
    if src_path.is_dir():
        shutil.copytree(src_path, dest_path, symlinks=True)
    else:
        shutil.copy2(src_path, dest_path)


def make_directory(path: Path) -> None:
    os.mkdir(path)
