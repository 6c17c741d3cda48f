"""Timestamped log lines for analyzer progress and fail-open errors."""

from __future__ import annotations

import sys
from datetime import datetime, timezone

_log_path: str | None = None


def log(verbose: bool, message: str) -> None:
    if verbose:
        _emit("", message)


def log_debug(debug: bool, message: str) -> None:
    if debug:
        _emit("[DEBUG]", message)


def log_error(message: str) -> None:
    """Always written; used where an analysis step is skipped after a failure."""
    _emit("[ERROR]", message)


def set_log_file(path: str | None) -> None:
    """Append to ``path`` instead of stderr; ``None`` restores stderr."""
    global _log_path
    _log_path = path


def _emit(tag: str, message: str) -> None:
    stamp = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")
    line = f"[{stamp} UTC]{tag} {message}\n"
    if not _log_path:
        sys.stderr.write(line)
        return
    with open(_log_path, "a", encoding="utf-8") as handle:
        handle.write(line)
