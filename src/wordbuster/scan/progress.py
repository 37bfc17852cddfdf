# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Completed/total counters updated by engine workers."""

from __future__ import annotations

import threading


class Progress:
    def __init__(self, total: int):
        self.total = max(0, int(total))
        self._completed = 0
        self._lock = threading.Lock()

    @property
    def completed(self) -> int:
        with self._lock:
            return self._completed

    def increment(self) -> int:
        with self._lock:
            self._completed += 1
            return self._completed

    def snapshot(self) -> tuple[int, int]:
        with self._lock:
            return self._completed, self.total

    def percent(self) -> float:
        return _percent(*self.snapshot())

    def render(self) -> str:
        completed, total = self.snapshot()
        return f"Progress: {completed} / {total} ({_percent(completed, total):3.2f}%)"


def _percent(completed: int, total: int) -> float:
    if total <= 0:
        return 0.0
    return completed * 100.0 / total


__all__ = ["Progress"]
