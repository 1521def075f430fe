"""Event dispatch for the browser.

Routes decoded input events to the overlay prompt when one is open and to
navigation otherwise. Global quit keys bypass both. Filesystem and process
work goes through injected collaborators so dispatch can be tested without
touching the real system.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from urllib.parse import unquote, urlparse

from loguru import logger

from ..config import TopBarButton
from ..input import (
    MOUSE_CLICK,
    MOUSE_SCROLL_DOWN,
    MOUSE_SCROLL_UP,
    InputEvent,
    KeyComboBinding,
    KeyComboRegistry,
    KeyEvent,
    MouseEvent,
    PathDropEvent,
    TextEvent,
)
from ..navigation import (
    cursor_entry,
    effective_targets,
    enter,
    go_to_parent,
    move_cursor,
    move_cursor_to,
    reload,
    toggle_select_all,
    toggle_selection,
    type_ahead_jump,
)
from ..overlay import append_text, backspace, cancel, commit, open_overlay
from ..render import header_button_spans
from ..state import BrowserState, DirEntry
from ..status import set_status_message

QUIT_KEYS = frozenset({"CTRL_Q", "CTRL_C"})
PROMPT_TEXT_KEYS = {"SPACE": " ", "TAB": "\t"}
CONFIRM_ANSWERS = frozenset({"y", "yes"})


@dataclass(frozen=True)
class BrowserCollaborators:
    """Filesystem and process operations the controller is allowed to use."""

    list_directory: Callable[[Path], list[DirEntry]]
    rename: Callable[[Path, Path], None]
    remove: Callable[..., None]
    copy: Callable[[Path, Path], None]
    make_directory: Callable[[Path], None]
    open_file: Callable[[Path], str | None]
    open_shell: Callable[[Path], str | None]
    top_bar_buttons: Sequence[TopBarButton] = field(default_factory=tuple)


def _plural(count: int, noun: str) -> str:
    return f"{count} {noun}" if count == 1 else f"{count} {noun}s"


def _dropped_path(raw: str) -> Path:
    """Accept plain paths as well as ``file://`` URIs some terminals emit."""
    if raw.startswith("file://"):
        return Path(unquote(urlparse(raw).path))
    return Path(raw).expanduser()


class BrowserController:
    """Apply input events to ``BrowserState``."""

    def __init__(self, state: BrowserState, collaborators: BrowserCollaborators) -> None:
        self.state = state
        self.ops = collaborators
        self._keys = KeyComboRegistry().register_bindings(
            KeyComboBinding(("UP",), lambda: self._move(-1)),
            KeyComboBinding(("DOWN",), lambda: self._move(1)),
            KeyComboBinding(("PAGE_UP",), lambda: self._move(-self.state.nav.visible_rows)),
            KeyComboBinding(("PAGE_DOWN",), lambda: self._move(self.state.nav.visible_rows)),
            KeyComboBinding(("HOME",), lambda: move_cursor_to(self.state.nav, 0)),
            KeyComboBinding(("END",), lambda: move_cursor_to(self.state.nav, len(self.state.nav.entries) - 1)),
            KeyComboBinding(("ENTER", "RIGHT"), self.enter_selected),
            KeyComboBinding(("LEFT", "BACKSPACE"), lambda: go_to_parent(self.state.nav)),
            KeyComboBinding(("SPACE",), self.toggle_cursor_selection),
            KeyComboBinding(("CTRL_A",), lambda: toggle_select_all(self.state.nav)),
            KeyComboBinding(("DELETE", "F8"), self.prompt_delete),
            KeyComboBinding(("CTRL_R", "F2"), self.prompt_rename),
            KeyComboBinding(("CTRL_D", "F5"), self.prompt_copy),
            KeyComboBinding(("CTRL_N", "F7"), self.prompt_new_folder),
            KeyComboBinding(("CTRL_T",), self.open_shell),
        )

    def handle_events(self, events: Iterable[InputEvent], columns: int) -> bool:
        """Dispatch events in order; return ``True`` as soon as one asks to quit."""
        for event in events:
            if self.handle_event(event, columns):
                return True
        return False

    def handle_event(self, event: InputEvent, columns: int) -> bool:
        """Dispatch one event and return ``True`` when the app should quit."""
        logger.debug("Input event {!r}", event)
        state = self.state
        if isinstance(event, KeyEvent) and event.key in QUIT_KEYS:
            return True
        state.dirty = True
        if isinstance(event, MouseEvent):
            if state.overlay is not None:
                self._handle_mouse_wheel(event)
            else:
                self._handle_mouse(event, columns)
            return False
        if state.overlay is not None:
            self._handle_overlay_input(event)
            return False
        if isinstance(event, PathDropEvent):
            self.copy_dropped_path(event.path)
        elif isinstance(event, TextEvent):
            type_ahead_jump(state.nav, event.text)
        elif isinstance(event, KeyEvent):
            self._keys.dispatch(event.key)
        return False

    def _handle_overlay_input(self, event: InputEvent) -> None:
        overlay = self.state.overlay
        assert overlay is not None
        if isinstance(event, TextEvent):
            append_text(overlay, event.text)
        elif isinstance(event, PathDropEvent):
            append_text(overlay, event.path)
        elif isinstance(event, KeyEvent):
            if event.key == "ENTER":
                commit(self.state)
            elif event.key == "BACKSPACE":
                backspace(overlay)
            elif event.key == "ESC":
                cancel(self.state)
            elif event.key in PROMPT_TEXT_KEYS:
                append_text(overlay, PROMPT_TEXT_KEYS[event.key])

    def _handle_mouse_wheel(self, event: MouseEvent) -> bool:
        if event.kind == MOUSE_SCROLL_UP:
            move_cursor(self.state.nav, -1)
            return True
        if event.kind == MOUSE_SCROLL_DOWN:
            move_cursor(self.state.nav, 1)
            return True
        return False

    def _handle_mouse(self, event: MouseEvent, columns: int) -> None:
        """Wheel moves the cursor; clicks hit header buttons or listing rows.

        Clicking the row that already holds the cursor opens it.
        """
        if self._handle_mouse_wheel(event) or event.kind != MOUSE_CLICK:
            return
        nav = self.state.nav
        if event.row == 1:
            for span in header_button_spans(nav.current_path, columns, self.ops.top_bar_buttons):
                if span.start <= event.column <= span.end:
                    self._report(span.button.on_activate(nav.current_path))
                    return
            return
        idx = nav.scroll_top + event.row - 2
        if not 0 <= idx < len(nav.entries):
            return
        if idx == nav.cursor:
            self.enter_selected()
        else:
            move_cursor_to(nav, idx)

    def _move(self, delta: int) -> None:
        move_cursor(self.state.nav, delta)

    def _report(self, error: str | None) -> None:
        if error:
            set_status_message(self.state, error)

    def _open_file(self, path: Path) -> None:
        self._report(self.ops.open_file(path))

    def _reload_and_focus(self, name: str) -> None:
        nav = self.state.nav
        reload(nav, self.ops.list_directory)
        for idx, entry in enumerate(nav.entries):
            if entry.name == name:
                move_cursor_to(nav, idx)
                return

    def _valid_name(self, name: str) -> bool:
        if not name or name in {".", ".."} or "/" in name or "\x00" in name:
            set_status_message(self.state, f"Invalid name: {name!r}")
            return False
        return True

    def enter_selected(self) -> None:
        enter(self.state.nav, self._open_file)

    def toggle_cursor_selection(self) -> None:
        entry = cursor_entry(self.state.nav)
        if entry is not None:
            toggle_selection(self.state.nav, entry.name)

    def open_shell(self) -> None:
        self._report(self.ops.open_shell(self.state.nav.current_path))

    def prompt_delete(self) -> None:
        """Ask for confirmation before deleting the effective targets."""
        nav = self.state.nav
        targets = effective_targets(nav)
        if not targets:
            return
        folder = nav.current_path
        subject = targets[0].name if len(targets) == 1 else _plural(len(targets), "file")

        def confirm(answer: str) -> None:
            if answer.strip().lower() not in CONFIRM_ANSWERS:
                return
            failures: list[str] = []
            for entry in targets:
                try:
                    self.ops.remove(folder / entry.name, recursive=True)
                except OSError as exc:
                    logger.warning("Delete {} failed: {}", folder / entry.name, exc)
                    failures.append(f"{entry.name}: {exc.strerror or exc}")
            nav.selection.clear()
            if failures:
                set_status_message(self.state, f"Delete failed for {'; '.join(failures)}")

        open_overlay(self.state, f"Do you want to delete {subject}? [y,N]", "", confirm)

    def prompt_rename(self) -> None:
        nav = self.state.nav
        entry = cursor_entry(nav)
        if entry is None:
            return
        folder = nav.current_path
        old_name = entry.name

        def rename_to(new_name: str) -> None:
            if new_name == old_name or not self._valid_name(new_name):
                return
            self.ops.rename(folder / old_name, folder / new_name)
            if old_name in nav.selection:
                nav.selection.discard(old_name)
                nav.selection.add(new_name)
            if nav.current_path == folder:
                self._reload_and_focus(new_name)

        open_overlay(self.state, "Rename", old_name, rename_to)

    def prompt_copy(self) -> None:
        """Ask for a destination folder and copy the effective targets into it."""
        nav = self.state.nav
        targets = effective_targets(nav)
        if not targets:
            return
        folder = nav.current_path

        def copy_to(destination: str) -> None:
            dest_dir = folder / Path(destination.strip()).expanduser()
            if not dest_dir.is_dir():
                raise NotADirectoryError(20, "Not a directory", str(dest_dir))
            failures: list[str] = []
            for entry in targets:
                try:
                    self.ops.copy(folder / entry.name, dest_dir / entry.name)
                except OSError as exc:
                    logger.warning("Copy {} to {} failed: {}", folder / entry.name, dest_dir, exc)
                    failures.append(f"{entry.name}: {exc.strerror or exc}")
            nav.selection.clear()
            if failures:
                set_status_message(self.state, f"Copy failed for {'; '.join(failures)}")

        open_overlay(self.state, f"Copy {_plural(len(targets), 'file')} to", str(folder), copy_to)

    def prompt_new_folder(self) -> None:
        folder = self.state.nav.current_path

        def create(name: str) -> None:
            if not self._valid_name(name):
                return
            self.ops.make_directory(folder / name)
            if self.state.nav.current_path == folder:
                self._reload_and_focus(name)

        open_overlay(self.state, "New folder", "", create)

    def copy_dropped_path(self, raw_path: str) -> None:
        """Copy a drag-and-dropped file into the current folder, best effort."""
        source = _dropped_path(raw_path)
        destination = self.state.nav.current_path / source.name
        try:
            self.ops.copy(source, destination)
        except OSError as exc:
            logger.warning("Dropped copy {} -> {} failed: {}", source, destination, exc)
            set_status_message(self.state, f"Copy failed: {exc.strerror or exc}")
            return
        self._reload_and_focus(source.name)
