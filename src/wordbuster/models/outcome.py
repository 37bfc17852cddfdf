# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Per-word outcome models published by the dispatch engine."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from ..errors import INVALID_CERTIFICATE_MESSAGE, ErrorCategory, categorize_exception, is_certificate_error


@dataclass(frozen=True)
class Result:
    """Outcome of a successful probe; `found` separates hits from misses."""

    word: str
    status_code: int | None = None
    length: int | None = None
    found: bool = True
    extra: Mapping[str, Any] = field(default_factory=dict)

    # `extra` is a read-only mapping, so results compare by value but are not hashable.
    __hash__ = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        object.__setattr__(self, "extra", MappingProxyType(dict(self.extra)))


@dataclass(frozen=True)
class ProbeError:
    """Outcome of a failed probe. Data, not an exception: it never unwinds the dispatch loop."""

    word: str
    message: str
    category: ErrorCategory = ErrorCategory.UNKNOWN_ERROR

    @classmethod
    def from_exception(cls, word: str, exc: BaseException) -> ProbeError:
        if is_certificate_error(exc):
            return cls(word=word, message=INVALID_CERTIFICATE_MESSAGE, category=ErrorCategory.INVALID_CERTIFICATE)
        return cls(word=word, message=str(exc) or type(exc).__name__, category=categorize_exception(exc))

    def __str__(self) -> str:
        return f"{self.word}: {self.message}"


Outcome = Result | ProbeError
