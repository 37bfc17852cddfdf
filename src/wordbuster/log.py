# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Logging helpers for wordbuster."""

from __future__ import annotations

import logging
import os
import sys
from typing import IO

DEFAULT_LOG_LEVEL = os.getenv("WORDBUSTER_LOG_LEVEL", "WARNING").upper()

# httpx/httpcore log every request at INFO/DEBUG; one line per word drowns the results.
_NOISY_LOGGERS = ("httpx", "httpcore")


def setup_logging(level: str | None = None, stream: IO[str] | None = None) -> None:
    """Configure standard logging for CLI/library use; log lines go to stderr next to the progress line."""
    effective_level = getattr(logging, (level or DEFAULT_LOG_LEVEL).upper(), logging.WARNING)
    logging.basicConfig(
        level=effective_level,
        format="%(levelname)s %(name)s: %(message)s",
        stream=stream or sys.stderr,
    )
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(effective_level, logging.WARNING))


__all__ = ["setup_logging"]
