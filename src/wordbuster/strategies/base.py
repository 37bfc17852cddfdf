# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Strategy capability consumed by the dispatch engine."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from ..models import Outcome, Result


@runtime_checkable
class Strategy(Protocol):
    """
    What to do with one candidate word.

    `process` returns exactly one outcome per word, however many requests it
    issues to get there. Strategies may also define `setup()`, which the
    engine calls once before any worker starts and which may raise SetupError.
    """

    name: str

    def process(self, word: str) -> Outcome: ...

    def result_to_string(self, result: Result) -> str: ...

    def config_string(self) -> str: ...


def format_config(rows: list[tuple[str, object]]) -> str:
    """Render `[+] Label: value` rows with aligned values, skipping empty ones."""
    visible = [(label, value) for label, value in rows if value not in (None, "", (), [])]
    if not visible:
        return ""
    width = max(len(label) for label, _ in visible) + 2
    return "\n".join(f"[+] {label + ':':<{width}}{value}" for label, value in visible)


__all__ = ["Strategy", "format_config"]
