# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""In-memory ProbeClient implementations."""

from __future__ import annotations

import threading
from collections.abc import Callable

from ..errors import ErrorCategory
from .client import ProbeClient
from .models import ProbeResponse


class StubProbeClient(ProbeClient):
    """Deterministic, programmable ProbeClient for tests."""

    def __init__(
        self,
        responses: dict[str, ProbeResponse] | None = None,
        default: ProbeResponse | Callable[[str], ProbeResponse] | None = None,
    ):
        self._responses = responses or {}
        self._default = default
        self._lock = threading.Lock()
        self.requests: list[tuple[str, str | None]] = []
        self.closed = False

    def add(self, url: str, response: ProbeResponse) -> None:
        self._responses[url] = response

    def probe(self, url: str, cookie: str | None = None) -> ProbeResponse:
        with self._lock:
            self.requests.append((url, cookie))
        if url in self._responses:
            return self._responses[url]
        if callable(self._default):
            return self._default(url)
        if self._default is not None:
            return self._default
        return ProbeResponse(
            ok=False,
            url=url,
            error_message="No stubbed response configured",
            error_category=ErrorCategory.UNKNOWN_ERROR,
        )

    def close(self) -> None:
        self.closed = True
