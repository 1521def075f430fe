"""JSON config helpers.

Reads the icon preference and the clickable top-bar buttons. Malformed or
missing config falls back to defaults.

Example ``config.json``::

    {
      "icons": true,
      "top_bar_buttons": [
        {"label": " CODE ", "command": ["codium", "."], "path_contains": "Coding"},
        {"label": " GUI ", "command": ["xdg-open", "."]}
      ]
    }

``{path}`` inside a command argument is replaced by the current folder.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from loguru import logger
from platformdirs import user_config_dir

from .launcher import default_open_command, spawn_detached

APP_NAME = "lazybrowse"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME


@dataclass(frozen=True)
class TopBarButton:
    """Header button; ``label`` returning ``None`` hides it for that folder."""

    label: Callable[[Path], str | None]
    on_activate: Callable[[Path], str | None]


def load_config(config_path: Path | None = None) -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    path = CONFIG_PATH if config_path is None else config_path
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        logger.debug("Using default config ({}): {}", path, exc)
        return {}
    return data if isinstance(data, dict) else {}


def load_show_icons(data: dict[str, object]) -> bool:
    """Return icon preference; only explicit booleans are honoured."""
    value = data.get("icons")
    return value if isinstance(value, bool) else True


def command_button(
    label: str,
    command: list[str],
    path_contains: str | None = None,
) -> TopBarButton:
    """Build a button that runs ``command`` detached inside the current folder."""

    def button_label(folder: Path) -> str | None:
        if path_contains is not None and path_contains not in str(folder):
            return None
        return label

    def activate(folder: Path) -> str | None:
        args = [arg.replace("{path}", str(folder)) for arg in command[1:]]
        return spawn_detached(command[0], args, folder)

    return TopBarButton(label=button_label, on_activate=activate)


def default_top_bar_buttons() -> list[TopBarButton]:
    return [command_button(" GUI ", [default_open_command(), "."])]


def _button_from_spec(spec: object) -> TopBarButton | None:
    """Validate one ``top_bar_buttons`` item, returning ``None`` when malformed."""
    if not isinstance(spec, dict):
        return None
    label = spec.get("label")
    command = spec.get("command")
    path_contains = spec.get("path_contains")
    if not isinstance(label, str) or not label:
        return None
    if not isinstance(command, list) or not command:
        return None
    if not all(isinstance(part, str) and part for part in command):
        return None
    if path_contains is not None and not isinstance(path_contains, str):
        return None
    return command_button(label, list(command), path_contains)


def load_top_bar_buttons(data: dict[str, object]) -> list[TopBarButton]:
    """Return configured buttons, or the defaults when none are configured."""
    specs = data.get("top_bar_buttons")
    if not isinstance(specs, list):
        return default_top_bar_buttons()
    buttons: list[TopBarButton] = []
    for spec in specs:
        button = _button_from_spec(spec)
        if button is None:
            logger.warning("Ignoring malformed top-bar button: {!r}", spec)
            continue
        buttons.append(button)
    return buttons
