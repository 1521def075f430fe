"""Navigation operations over ``NavigationState``.

Every mutation re-establishes the cursor and scroll invariants:
``0 <= cursor < len(entries)`` for non-empty listings and
``scroll_top <= cursor <= scroll_top + visible_rows - 1``.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from pathlib import Path

from loguru import logger

from .state import DirEntry, NavigationState


def sort_entries(entries: Iterable[DirEntry]) -> list[DirEntry]:
    """Order directories first, each group by name descending."""
    by_name = sorted(entries, key=lambda entry: entry.name, reverse=True)
    return sorted(by_name, key=lambda entry: not entry.is_dir)


def cursor_entry(nav: NavigationState) -> DirEntry | None:
    if 0 <= nav.cursor < len(nav.entries):
        return nav.entries[nav.cursor]
    return None


def clamp_cursor(nav: NavigationState) -> None:
    if not nav.entries:
        nav.cursor = 0
        return
    nav.cursor = max(0, min(nav.cursor, len(nav.entries) - 1))


def ensure_cursor_visible(nav: NavigationState, visible_rows: int | None = None) -> None:
    """Scroll just enough to keep the cursor row inside the viewport."""
    if visible_rows is not None:
        nav.visible_rows = max(1, visible_rows)
    rows = max(1, nav.visible_rows)
    if nav.cursor < nav.scroll_top:
        nav.scroll_top = nav.cursor
    elif nav.cursor >= nav.scroll_top + rows:
        nav.scroll_top = nav.cursor - rows + 1
    nav.scroll_top = max(0, min(nav.scroll_top, max(0, len(nav.entries) - rows)))


def move_cursor(nav: NavigationState, delta: int) -> bool:
    """Move the cursor by ``delta`` rows, clamped to the listing."""
    previous = nav.cursor
    nav.cursor += delta
    clamp_cursor(nav)
    ensure_cursor_visible(nav)
    return nav.cursor != previous


def move_cursor_to(nav: NavigationState, index: int) -> bool:
    previous = nav.cursor
    nav.cursor = index
    clamp_cursor(nav)
    ensure_cursor_visible(nav)
    return nav.cursor != previous


def _change_directory(nav: NavigationState, target: Path) -> None:
    logger.debug("Changing directory {} -> {}", nav.current_path, target)
    nav.current_path = target
    nav.cursor = 0
    nav.scroll_top = 0
    nav.selection.clear()


def enter(nav: NavigationState, open_file: Callable[[Path], object]) -> bool:
    """Descend into the directory under the cursor or open the file there.

    Returns ``True`` when ``current_path`` changed.
    """
    entry = cursor_entry(nav)
    if entry is None:
        return False
    target = nav.current_path / entry.name
    if not entry.is_dir:
        open_file(target)
        return False
    _change_directory(nav, target)
    return True


def go_to_parent(nav: NavigationState) -> bool:
    """Move to the parent directory; a no-op at the filesystem root."""
    parent = nav.current_path.parent
    if parent == nav.current_path:
        return False
    _change_directory(nav, parent)
    return True


def toggle_selection(nav: NavigationState, name: str) -> None:
    if name in nav.selection:
        nav.selection.discard(name)
    else:
        nav.selection.add(name)


def toggle_select_all(nav: NavigationState) -> None:
    names = {entry.name for entry in nav.entries}
    if names and names <= nav.selection:
        nav.selection.clear()
    else:
        nav.selection = names


def type_ahead_jump(nav: NavigationState, prefix: str) -> bool:
    """Move to the next entry after the cursor whose name starts with ``prefix``.

    Matching is case-insensitive and wraps around, so repeating the same
    prefix cycles through every matching entry.
    """
    needle = prefix.lower()
    if not needle:
        return False
    matches = [idx for idx, entry in enumerate(nav.entries) if entry.name.lower().startswith(needle)]
    if not matches:
        return False
    following = [idx for idx in matches if idx > nav.cursor]
    return move_cursor_to(nav, following[0] if following else matches[0])


def effective_targets(nav: NavigationState) -> list[DirEntry]:
    """Return selected entries, or the cursor entry when nothing is selected."""
    if nav.selection:
        return [entry for entry in nav.entries if entry.name in nav.selection]
    entry = cursor_entry(nav)
    return [] if entry is None else [entry]


def reload(nav: NavigationState, list_directory: Callable[[Path], list[DirEntry]]) -> None:
    """Re-read ``current_path`` and restore all navigation invariants.

    A listing failure leaves an empty listing with ``load_error`` set
    instead of propagating.
    """
    try:
        entries = list_directory(nav.current_path)
    except OSError as exc:
        logger.warning("Cannot list {}: {}", nav.current_path, exc)
        nav.entries = []
        nav.load_error = f"Cannot read {nav.current_path}: {exc.strerror or exc}"
    else:
        nav.entries = sort_entries(entries)
        nav.load_error = None
    nav.selection &= {entry.name for entry in nav.entries}
    clamp_cursor(nav)
    ensure_cursor_visible(nav)
