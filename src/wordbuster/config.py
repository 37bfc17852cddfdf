# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Run configuration for wordbuster."""

from __future__ import annotations

import os
from dataclasses import dataclass, fields
from typing import Any
from urllib.parse import urlparse

from .errors import ConfigurationError
from .version import __version__

DEFAULT_USER_AGENT = f"wordbuster/{__version__}"
PROXY_SCHEMES = frozenset({"http", "https", "socks5", "socks5h"})


def _float_env(name: str, default: float) -> float:
    try:
        value = os.getenv(name)
        return float(value) if value is not None else default
    except ValueError:
        return default


def _int_env(name: str, default: int) -> int:
    try:
        value = os.getenv(name)
        return int(value) if value is not None else default
    except ValueError:
        return default


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _optional_str_env(name: str, default: str | None) -> str | None:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip() or None


@dataclass(frozen=True)
class Options:
    """Immutable run configuration shared by the engine, probe client and strategies."""

    target: str
    threads: int = 10
    timeout: float = 10.0
    proxy: str | None = None
    insecure_ssl: bool = False
    follow_redirect: bool = False
    username: str | None = None
    password: str | None = None
    cookies: str | None = None
    user_agent: str | None = None
    include_length: bool = False
    quiet: bool = False
    no_progress: bool = False
    wordlist: str | None = None
    output_filename: str | None = None

    def __post_init__(self) -> None:
        if not str(self.target or "").strip():
            raise ConfigurationError("a target is required")
        if self.threads < 1:
            raise ConfigurationError(f"threads must be at least 1, got {self.threads}")
        if self.timeout <= 0:
            raise ConfigurationError(f"timeout must be positive, got {self.timeout}")
        if self.proxy:
            parsed = urlparse(self.proxy)
            if parsed.scheme.lower() not in PROXY_SCHEMES or not parsed.hostname:
                raise ConfigurationError("Proxy URL is invalid")
        if self.password and not self.username:
            raise ConfigurationError("a username is required when a password is set")

    @property
    def effective_user_agent(self) -> str:
        return self.user_agent or DEFAULT_USER_AGENT

    @classmethod
    def from_env(cls, target: str, **overrides: Any) -> Options:
        """Create options from environment variables (evaluated at call time); explicit overrides win."""
        known = {f.name for f in fields(cls)}
        unknown = set(overrides) - known
        if unknown:
            raise ConfigurationError(f"unknown option(s): {', '.join(sorted(unknown))}")

        values: dict[str, Any] = {
            "threads": _int_env("WORDBUSTER_THREADS", cls.threads),
            "timeout": _float_env("WORDBUSTER_TIMEOUT", cls.timeout),
            "proxy": _optional_str_env("WORDBUSTER_PROXY", cls.proxy),
            "insecure_ssl": _bool_env("WORDBUSTER_INSECURE_SSL", cls.insecure_ssl),
            "follow_redirect": _bool_env("WORDBUSTER_FOLLOW_REDIRECT", cls.follow_redirect),
            "user_agent": _optional_str_env("WORDBUSTER_USER_AGENT", cls.user_agent),
        }
        values.update({key: value for key, value in overrides.items() if value is not None})
        return cls(target=target, **values)


def load_options(target: str, **overrides: Any) -> Options:
    """Load run options from environment with sensible defaults."""
    return Options.from_env(target, **overrides)


__all__ = ["DEFAULT_USER_AGENT", "Options", "load_options"]
