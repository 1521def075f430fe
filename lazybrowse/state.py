from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class DirEntry:
    """One listing row: a file or directory name inside ``current_path``."""

    name: str
    is_dir: bool


@dataclass
class NavigationState:
    current_path: Path
    entries: list[DirEntry] = field(default_factory=list)
    cursor: int = 0
    scroll_top: int = 0
    selection: set[str] = field(default_factory=set)
    visible_rows: int = 1
    load_error: str | None = None


@dataclass
class OverlayState:
    """Modal single-line prompt that owns all key input until closed."""

    label: str
    buffer: str
    on_commit: Callable[[str], None]


@dataclass
class BrowserState:
    nav: NavigationState
    overlay: OverlayState | None = None
    show_icons: bool = True
    status_message: str = ""
    status_message_until: float = 0.0
    dirty: bool = True
