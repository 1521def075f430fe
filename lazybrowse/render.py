"""Frame rendering for the browser view.

``render_frame`` is a pure function of state and terminal size: it returns
exactly ``rows`` lines, each occupying exactly ``columns`` cells. Writing
the frame to the terminal is a separate step (``encode_frame``).
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from .ansi import fit_ansi_line, display_width, printable
from .config import TopBarButton
from .icons import entry_icon
from .state import BrowserState, DirEntry, NavigationState

REVERSE_SGR = "\033[7m"
RESET_SGR = "\033[0m"
SELECTED_SGR = "\033[1;38;5;81m"
ERROR_SGR = "\033[31m"
SELECTION_MARKER = "*"


@dataclass(frozen=True)
class HeaderButtonSpan:
    """1-indexed inclusive column range a visible top-bar button occupies."""

    start: int
    end: int
    label: str
    button: TopBarButton


def header_button_spans(
    folder: Path,
    columns: int,
    buttons: Sequence[TopBarButton],
) -> list[HeaderButtonSpan]:
    """Lay out visible button labels right-aligned in the header row.

    Buttons are dropped entirely when they would not fit beside the path.
    """
    labels: list[tuple[str, TopBarButton]] = []
    for button in buttons:
        label = button.label(folder)
        if label:
            labels.append((printable(label), button))
    total = sum(display_width(label) for label, _ in labels)
    if not labels or total >= columns:
        return []
    spans: list[HeaderButtonSpan] = []
    start = columns - total + 1
    for label, button in labels:
        width = display_width(label)
        spans.append(HeaderButtonSpan(start=start, end=start + width - 1, label=label, button=button))
        start += width
    return spans


def _folder_label(folder: Path) -> str:
    text = str(folder)
    return text if text.endswith("/") else f"{text}/"


def _header_line(state: BrowserState, columns: int, buttons: Sequence[TopBarButton]) -> str:
    spans = header_button_spans(state.nav.current_path, columns, buttons)
    buttons_text = "".join(span.label for span in spans)
    left = f" {printable(_folder_label(state.nav.current_path))}"
    if state.status_message:
        left += f"  {printable(state.status_message)}"
    left_width = columns - display_width(buttons_text)
    return REVERSE_SGR + fit_ansi_line(left, left_width) + buttons_text + RESET_SGR


def format_entry_row(entry: DirEntry, selected: bool, show_icons: bool) -> str:
    """Plain text for one listing row: marker, icon, name, directory slash."""
    marker = SELECTION_MARKER if selected else " "
    icon = f"{entry_icon(entry)} " if show_icons else ""
    suffix = "/" if entry.is_dir else ""
    return f"{marker}{icon}{printable(entry.name)}{suffix}"


def _entry_line(nav: NavigationState, idx: int, columns: int, show_icons: bool) -> str:
    if idx >= len(nav.entries):
        return " " * columns
    entry = nav.entries[idx]
    selected = entry.name in nav.selection
    text = fit_ansi_line(format_entry_row(entry, selected, show_icons), columns)
    if idx == nav.cursor:
        return REVERSE_SGR + text + RESET_SGR
    if selected:
        return SELECTED_SGR + text + RESET_SGR
    return text


def render_frame(
    state: BrowserState,
    rows: int,
    columns: int,
    buttons: Sequence[TopBarButton] = (),
) -> list[str]:
    """Compose the full screen for ``state`` at ``rows`` x ``columns``."""
    if rows <= 0 or columns <= 0:
        return []
    blank = " " * columns
    overlay = state.overlay
    if overlay is not None:
        lines = [blank]
        if rows > 1:
            lines.append(fit_ansi_line(printable(f"{overlay.label}: {overlay.buffer}"), columns))
        lines.extend(blank for _ in range(rows - len(lines)))
        return lines

    nav = state.nav
    lines = [_header_line(state, columns, buttons)]
    for row in range(1, rows):
        if row == 1 and nav.load_error and not nav.entries:
            lines.append(ERROR_SGR + fit_ansi_line(printable(f" {nav.load_error}"), columns) + RESET_SGR)
            continue
        lines.append(_entry_line(nav, nav.scroll_top + row - 1, columns, state.show_icons))
    return lines


def encode_frame(lines: Sequence[str]) -> bytes:
    """Bytes that home the cursor and paint ``lines`` over the whole screen."""
    payload = "\033[H" + "\r\n".join(lines)
    return payload.encode("utf-8", errors="replace")
