# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Word sources.

A word source hands out candidate words one at a time to any number of
worker threads. Pulls are serialized, so no two workers ever receive the
same word, and `total` is known up front so progress can be reported.
"""

from __future__ import annotations

import threading
from collections.abc import Iterable, Iterator, Sequence
from pathlib import Path
from typing import IO, Protocol

from .errors import ConfigurationError


class WordSource(Protocol):
    total: int

    def next_word(self) -> str | None: ...


def normalize_extensions(extensions: Iterable[str] | str | None) -> tuple[str, ...]:
    """Accept `"php,txt"`, `[".php", "txt"]` or None and return `("php", "txt")`."""
    if not extensions:
        return ()
    if isinstance(extensions, str):
        extensions = extensions.split(",")
    seen: list[str] = []
    for ext in extensions:
        cleaned = str(ext).strip().lstrip(".")
        if cleaned and cleaned not in seen:
            seen.append(cleaned)
    return tuple(seen)


def _expand(word: str, extensions: Sequence[str]) -> Iterator[str]:
    yield word
    for ext in extensions:
        yield f"{word}.{ext}"


class StaticWordSource:
    """Thread-safe word source over an in-memory sequence."""

    def __init__(self, words: Iterable[str], extensions: Iterable[str] | str | None = None):
        self.extensions = normalize_extensions(extensions)
        expanded = [candidate for word in words for candidate in _expand(word, self.extensions)]
        self.total = len(expanded)
        self._iter = iter(expanded)
        self._lock = threading.Lock()

    def next_word(self) -> str | None:
        with self._lock:
            return next(self._iter, None)


class Wordlist:
    """Lazily streamed wordlist file; blank lines are skipped."""

    def __init__(self, path: str | Path, extensions: Iterable[str] | str | None = None):
        self.path = Path(path)
        self.extensions = normalize_extensions(extensions)
        if not self.path.is_file():
            raise ConfigurationError(f"wordlist file {self.path} does not exist")
        try:
            lines = self._count_lines()
            self._handle: IO[str] | None = self.path.open("r", encoding="utf-8", errors="replace")
        except OSError as exc:
            raise ConfigurationError(f"unable to read wordlist {self.path}: {exc}") from exc
        self.total = lines * (1 + len(self.extensions))
        self._pending: Iterator[str] = iter(())
        self._lock = threading.Lock()

    def _count_lines(self) -> int:
        with self.path.open("r", encoding="utf-8", errors="replace") as handle:
            return sum(1 for line in handle if line.strip())

    def next_word(self) -> str | None:
        with self._lock:
            candidate = next(self._pending, None)
            if candidate is not None:
                return candidate
            if self._handle is None:
                return None
            for line in self._handle:
                word = line.strip()
                if not word:
                    continue
                self._pending = _expand(word, self.extensions)
                return next(self._pending)
            self._handle.close()
            self._handle = None
            return None

    def close(self) -> None:
        with self._lock:
            if self._handle is not None:
                self._handle.close()
                self._handle = None

    def __enter__(self) -> Wordlist:
        return self

    def __exit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        self.close()


__all__ = ["StaticWordSource", "WordSource", "Wordlist", "normalize_extensions"]
