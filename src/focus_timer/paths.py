"""Per-user locations for files the focus timer writes."""

from __future__ import annotations

from pathlib import Path

from platformdirs import PlatformDirs


APP_NAME = "FocusTimer"
APP_AUTHOR = "FocusTimer"
LOG_FILE_NAME = "focus-timer.log"


def get_log_path() -> Path:
    """Return the default log file, creating the log directory if needed."""
    log_dir = Path(PlatformDirs(appname=APP_NAME, appauthor=APP_AUTHOR).user_log_path)
    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir / LOG_FILE_NAME
