# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Probe strategies."""

from .base import Strategy, format_config
from .dir import DEFAULT_STATUS_CODES, DirOptions, DirStrategy, normalize_base_url, parse_status_codes
from .dns import DnsOptions, DnsStrategy, resolve_host

__all__ = [
    "DEFAULT_STATUS_CODES",
    "DirOptions",
    "DirStrategy",
    "DnsOptions",
    "DnsStrategy",
    "Strategy",
    "format_config",
    "normalize_base_url",
    "parse_status_codes",
    "resolve_host",
]
