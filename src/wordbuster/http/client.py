# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Probe client abstraction and factory."""

from __future__ import annotations

import threading
from typing import Protocol

from ..config import Options
from .models import ProbeResponse


class ProbeClient(Protocol):
    """Minimal protocol for issuing one classified probe per call."""

    def probe(self, url: str, cookie: str | None = None) -> ProbeResponse: ...

    def close(self) -> None:  # pragma: no cover - optional for adapters
        ...


def create_default_probe_client(options: Options, cancel_event: threading.Event | None = None) -> ProbeClient:
    """Factory for the default httpx-backed client."""
    from .httpx_client import HttpxProbeClient

    return HttpxProbeClient(options, cancel_event=cancel_event)
