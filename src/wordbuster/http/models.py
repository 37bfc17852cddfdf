# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Probe response model shared by ProbeClient implementations."""

from __future__ import annotations

from dataclasses import dataclass

from ..errors import INVALID_CERTIFICATE_MESSAGE, ErrorCategory, categorize_exception, is_certificate_error


@dataclass(frozen=True)
class ProbeResponse:
    """Classification of a single probe: a status (plus optional length) or an error."""

    ok: bool
    status_code: int | None = None
    content_length: int | None = None
    location: str | None = None
    url: str | None = None
    error_message: str | None = None
    error_category: ErrorCategory = ErrorCategory.NONE

    @property
    def is_redirect(self) -> bool:
        return self.status_code is not None and 300 <= self.status_code < 400 and bool(self.location)

    @classmethod
    def from_exception(cls, exc: BaseException, *, url: str | None = None) -> ProbeResponse:
        """Turn a transport failure into an error response, relabelling certificate failures."""
        if is_certificate_error(exc):
            return cls(
                ok=False,
                url=url,
                error_message=INVALID_CERTIFICATE_MESSAGE,
                error_category=ErrorCategory.INVALID_CERTIFICATE,
            )
        return cls(
            ok=False,
            url=url,
            error_message=str(exc) or type(exc).__name__,
            error_category=categorize_exception(exc),
        )
