"""Command-line front door for lazybrowse.

Parses CLI options, resolves the starting folder, loads config and logging,
then dispatches into the interactive browser runtime.
"""

from __future__ import annotations

import argparse
import os
import sys
import termios
from pathlib import Path

from loguru import logger

from .config import load_config, load_show_icons, load_top_bar_buttons
from .log import configure_logging
from .runtime import run_browser

LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Browse and manage files in a full-screen terminal view.")
    parser.add_argument("path", nargs="?", default=None, help="Folder to open. Defaults to $HOME.")
    parser.add_argument("--no-icons", action="store_true", help="Hide Nerd Font icons.")
    parser.add_argument("--config", metavar="PATH", type=Path, default=None, help="Read config from PATH.")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        type=str.upper,
        choices=LOG_LEVELS,
        help="Minimum level written to the log file (default: WARNING).",
    )
    parser.add_argument("--log-file", metavar="PATH", type=Path, default=None, help="Write logs to PATH.")
    return parser


def resolve_start_path(raw_path: str | None) -> Path:
    """Return the absolute folder to open, defaulting to the home directory."""
    if raw_path is None:
        return Path(os.environ.get("HOME") or Path.home()).resolve()
    return Path(raw_path).expanduser().resolve()


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and launch the browser.

    Exits with a message for a missing or non-directory path, a stdin that is
    not a terminal, or a terminal that cannot be switched to raw mode.
    """
    args = build_parser().parse_args(argv)

    path = resolve_start_path(args.path)
    if not path.exists():
        raise SystemExit(f"Path not found: {path}")
    if not path.is_dir():
        raise SystemExit(f"Not a directory: {path}")
    if not os.isatty(sys.stdin.fileno()):
        raise SystemExit("lazybrowse needs an interactive terminal on stdin.")

    configure_logging(args.log_level, args.log_file)
    config = load_config(args.config)
    show_icons = load_show_icons(config) and not args.no_icons
    buttons = load_top_bar_buttons(config)

    try:
        run_browser(path, show_icons, buttons)
    except termios.error as exc:
        logger.error("Cannot control terminal: {}", exc)
        raise SystemExit(f"Cannot control terminal: {exc}") from exc
    except KeyboardInterrupt:
        raise SystemExit(130) from None


if __name__ == "__main__":
    main()
