# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Dataclass exports for wordbuster."""

from ..http.models import ProbeResponse
from .outcome import Outcome, ProbeError, Result

__all__ = [
    "Outcome",
    "ProbeError",
    "ProbeResponse",
    "Result",
]
