"""Scanning texture folders into frame-sequence descriptions."""

from __future__ import annotations

import os
import stat

from .models import ImagePath


def convert_relative_path(full_path: str | os.PathLike[str], start: str | None = None) -> str:
    """Path to ``full_path`` relative to ``start`` (the working directory by default).

    When no relative path exists (different drives), the full path is returned.
    """
    base = os.getcwd() if start is None else start
    try:
        return os.path.relpath(os.fspath(full_path), base)
    except ValueError:
        return os.fspath(full_path)


def _is_system(entry: os.DirEntry[str]) -> bool:
    try:
        attributes = getattr(entry.stat(follow_symlinks=False), "st_file_attributes", 0)
    except OSError:
        return False
    return bool(attributes & stat.FILE_ATTRIBUTE_SYSTEM)


def _entries(path: str | os.PathLike[str]) -> list[os.DirEntry[str]]:
    with os.scandir(path) as iterator:
        return sorted(iterator, key=lambda entry: entry.name)


def dir_file_count(path: str | os.PathLike[str]) -> int:
    """Number of entries in a folder, leaving out system files."""
    return sum(1 for entry in _entries(path) if not _is_system(entry))


def dir_info_extraction(path: str | os.PathLike[str]) -> list[ImagePath]:
    """Describe every frame folder under ``path``.

    Each folder holding image files yields one entry: the parent folder name
    is the object key, the folder name is the state key, the first file's name
    with its last character replaced by ``%d.png`` forms the path pattern, and
    the count is the number of entries in the folder.
    """
    result: list[ImagePath] = []
    for entry in _entries(path):
        if entry.is_dir():
            result.extend(dir_info_extraction(entry.path))
            continue
        if _is_system(entry):
            continue
        folder = os.path.dirname(os.path.abspath(entry.path))
        stem = os.path.splitext(entry.name)[0]
        pattern = os.path.join(folder, stem[:-1] + "%d.png")
        result.append(
            ImagePath(
                obj_key=os.path.basename(os.path.dirname(folder)),
                state_key=os.path.basename(folder),
                path=convert_relative_path(pattern),
                count=dir_file_count(folder),
            )
        )
        break
    return result


def format_path_entry(img_path: ImagePath) -> str:
    """One-line ``obj|state|count|path`` description of a frame folder."""
    return f"{img_path.obj_key}|{img_path.state_key}|{img_path.count}|{img_path.path}"