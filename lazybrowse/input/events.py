"""Decoded input event datatypes.

Every raw read is turned into a sequence of these values. They are
produced and consumed within one loop iteration and never stored.
"""

from __future__ import annotations

from dataclasses import dataclass

UNKNOWN_KEY = "UNKNOWN"

MOUSE_CLICK = "click"
MOUSE_SCROLL_UP = "scroll_up"
MOUSE_SCROLL_DOWN = "scroll_down"


@dataclass(frozen=True)
class KeyEvent:
    """Named key such as ``"UP"``, ``"ENTER"`` or ``"CTRL_Q"``.

    ``raw`` keeps the token the key was decoded from (without ESC).
    """

    key: str
    raw: str = ""


@dataclass(frozen=True)
class MouseEvent:
    """SGR mouse press at 1-indexed terminal ``column``/``row``."""

    kind: str
    column: int
    row: int


@dataclass(frozen=True)
class PathDropEvent:
    """Path delivered by terminal drag-and-drop (quotes already removed)."""

    path: str


@dataclass(frozen=True)
class TextEvent:
    """Printable run: prompt text in overlays, type-ahead elsewhere."""

    text: str


InputEvent = KeyEvent | MouseEvent | PathDropEvent | TextEvent


__all__ = [
    "UNKNOWN_KEY",
    "MOUSE_CLICK",
    "MOUSE_SCROLL_UP",
    "MOUSE_SCROLL_DOWN",
    "KeyEvent",
    "MouseEvent",
    "PathDropEvent",
    "TextEvent",
    "InputEvent",
]
