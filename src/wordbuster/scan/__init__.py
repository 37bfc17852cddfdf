# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Dispatch engine exports."""

from .engine import Engine, EngineState
from .progress import Progress

__all__ = ["Engine", "EngineState", "Progress"]
