"""Local copy of the last negotiated API token.

The file holds the raw token and nothing else. It is shared by every
application started by the same user and is not locked: concurrent first
starts may each negotiate and the last writer wins.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Optional

import structlog

LOGGER = structlog.get_logger("wavefront_autoconfigure.account.token_cache")

TOKEN_FILE_NAME = ".wavefront_token"


def default_token_file(home: Optional[Path] = None) -> Path:
    return (home or Path.home()) / TOKEN_FILE_NAME


def is_readable(path: Path) -> bool:
    return path.is_file() and os.access(path, os.R_OK)


def read_token(path: Path, logger: Any = LOGGER) -> Optional[str]:
    """Return the cached token, or ``None`` on a miss.

    A missing or unreadable file is an ordinary miss. A failure while reading a
    readable file is logged and also reported as a miss.
    """

    if not is_readable(path):
        return None
    try:
        token = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("Failed to read Wavefront token file", path=str(path), error=str(exc))
        return None
    if not token.strip():
        return None
    return token


def write_token(path: Path, token: str, logger: Any = LOGGER) -> bool:
    """Persist *token* to *path*; returns whether the file was written."""

    if path.exists() and (not path.is_file() or not os.access(path, os.W_OK)):
        logger.debug("Wavefront token file is not a writable file, skipping", path=str(path))
        return False
    try:
        with path.open("w", encoding="utf-8") as handle:
            handle.write(token)
    except OSError as exc:
        logger.warning("Failed to write Wavefront token file", path=str(path), error=str(exc))
        return False
    return True
