"""Nerd Font glyph lookup for listing rows.

Exact filenames win over extensions; unknown names get a generic glyph.
"""

from __future__ import annotations

from .state import DirEntry

DEFAULT_FILE_ICON = ""
DEFAULT_FOLDER_ICON = ""

FILE_NAME_ICONS: dict[str, str] = {
    ".gitignore": "",
    ".gitmodules": "",
    ".bashrc": "",
    ".zshrc": "",
    "dockerfile": "",
    "makefile": "",
    "license": "",
    "readme.md": "",
    "package.json": "",
    "pyproject.toml": "",
    "cargo.toml": "",
}

FILE_EXTENSION_ICONS: dict[str, str] = {
    "py": "",
    "pyc": "",
    "js": "",
    "mjs": "",
    "ts": "",
    "tsx": "",
    "jsx": "",
    "json": "",
    "toml": "",
    "yaml": "",
    "yml": "",
    "ini": "",
    "cfg": "",
    "md": "",
    "txt": "",
    "rst": "",
    "html": "",
    "css": "",
    "scss": "",
    "sh": "",
    "bash": "",
    "zsh": "",
    "c": "",
    "h": "",
    "cpp": "",
    "hpp": "",
    "rs": "",
    "go": "",
    "java": "",
    "rb": "",
    "php": "",
    "lua": "",
    "vim": "",
    "sql": "",
    "db": "",
    "sqlite": "",
    "png": "",
    "jpg": "",
    "jpeg": "",
    "gif": "",
    "svg": "",
    "webp": "",
    "ico": "",
    "mp3": "",
    "flac": "",
    "wav": "",
    "ogg": "",
    "mp4": "",
    "mkv": "",
    "webm": "",
    "mov": "",
    "pdf": "",
    "doc": "",
    "docx": "",
    "xls": "",
    "xlsx": "",
    "csv": "",
    "ppt": "",
    "pptx": "",
    "zip": "",
    "tar": "",
    "gz": "",
    "xz": "",
    "bz2": "",
    "7z": "",
    "rar": "",
    "iso": "",
    "lock": "",
    "log": "",
}

FOLDER_NAME_ICONS: dict[str, str] = {
    ".git": "",
    ".github": "",
    ".config": "",
    "node_modules": "",
    "desktop": "",
    "documents": "",
    "downloads": "",
    "music": "",
    "pictures": "",
    "videos": "",
    "coding": "",
}


def file_icon(name: str) -> str:
    """Return the glyph for a file called ``name``."""
    lowered = name.lower()
    icon = FILE_NAME_ICONS.get(lowered)
    if icon is not None:
        return icon
    _stem, dot, extension = lowered.rpartition(".")
    if dot and extension:
        return FILE_EXTENSION_ICONS.get(extension, DEFAULT_FILE_ICON)
    return DEFAULT_FILE_ICON


def folder_icon(name: str) -> str:
    """Return the glyph for a folder called ``name``."""
    return FOLDER_NAME_ICONS.get(name.lower(), DEFAULT_FOLDER_ICON)


def entry_icon(entry: DirEntry) -> str:
    return folder_icon(entry.name) if entry.is_dir else file_icon(entry.name)
