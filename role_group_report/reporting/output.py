"""
Report file output — exclusive UTF-8 writes.
"""

from __future__ import annotations

import logging
from pathlib import Path


logger = logging.getLogger("role_group_report.reporting")


class OutputError(Exception):
    """Raised when a report file cannot be written."""
    def __init__(self, path: Path, message: str):
        self.path = Path(path)
        super().__init__(f"Cannot write {self.path}: {message}")


def write_new_file(path: Path, content: str) -> Path:
    """
    Write content as UTF-8 to a file that must not exist yet.
    Newlines are written as given.
    """
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise OutputError(path.parent, f"cannot create output directory: {e.strerror or e}") from e
    try:
        with open(path, "x", encoding="utf-8", newline="") as fh:
            fh.write(content)
    except FileExistsError:
        raise OutputError(path, "file already exists")
    except OSError as e:
        raise OutputError(path, e.strerror or str(e)) from e
    logger.debug(f"Wrote {len(content)} characters to {path}")
    return path

