# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
wordbuster package entrypoint.

wordbuster probes a target once per candidate word (URL paths, DNS
subdomains) on a bounded pool of worker threads and streams hits, misses
and per-word errors to its consumers as they arrive. HTTP behavior is
abstracted behind an injectable probe client, and outcomes are modeled
with frozen dataclasses.
"""

from .config import DEFAULT_USER_AGENT, Options, load_options
from .errors import ConfigurationError, ErrorCategory, SetupError, WordbusterError
from .http import HttpxProbeClient, ProbeClient, ProbeResponse, StubProbeClient, create_default_probe_client
from .log import setup_logging
from .models import ProbeError, Result
from .scan import Engine, EngineState, Progress
from .strategies import DirOptions, DirStrategy, DnsOptions, DnsStrategy, Strategy
from .version import __version__
from .wordlist import StaticWordSource, Wordlist, WordSource

__all__ = [
    "DEFAULT_USER_AGENT",
    "ConfigurationError",
    "DirOptions",
    "DirStrategy",
    "DnsOptions",
    "DnsStrategy",
    "Engine",
    "EngineState",
    "ErrorCategory",
    "HttpxProbeClient",
    "Options",
    "ProbeClient",
    "ProbeError",
    "ProbeResponse",
    "Progress",
    "Result",
    "SetupError",
    "StaticWordSource",
    "Strategy",
    "StubProbeClient",
    "WordSource",
    "Wordlist",
    "WordbusterError",
    "create_default_probe_client",
    "load_options",
    "setup_logging",
    "__version__",
]
