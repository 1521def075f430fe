"""Log sink setup.

The full-screen UI owns stdout/stderr, so logs only ever go to a file.
"""

from __future__ import annotations

from pathlib import Path

from loguru import logger
from platformdirs import user_log_dir

from .config import APP_NAME

LOG_PATH = Path(user_log_dir(APP_NAME, appauthor=False)) / f"{APP_NAME}.log"
LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} - {message}"


def configure_logging(level: str = "WARNING", log_path: Path | None = None) -> Path:
    """Replace loguru's stderr sink with a rotating file sink.

    Returns the path logs are written to.
    """
    path = LOG_PATH if log_path is None else log_path
    path.parent.mkdir(parents=True, exist_ok=True)
    logger.remove()
    logger.add(
        path,
        level=level.upper(),
        format=LOG_FORMAT,
        rotation="1 MB",
        retention=3,
        encoding="utf-8",
    )
    return path
