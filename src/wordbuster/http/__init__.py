# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Probe client exports."""

from .adapters import StubProbeClient
from .client import ProbeClient, create_default_probe_client
from .httpx_client import HttpxProbeClient, count_code_points
from .models import ProbeResponse

__all__ = [
    "HttpxProbeClient",
    "ProbeClient",
    "ProbeResponse",
    "StubProbeClient",
    "count_code_points",
    "create_default_probe_client",
]
