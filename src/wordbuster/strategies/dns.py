# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""DNS subdomain enumeration."""

from __future__ import annotations

import logging
import socket
import uuid
from collections.abc import Callable
from dataclasses import dataclass

from ..config import Options
from ..errors import SetupError
from ..models import Outcome, ProbeError, Result
from .base import format_config

logger = logging.getLogger(__name__)

Resolver = Callable[[str], list[str]]


def resolve_host(host: str) -> list[str]:
    infos = socket.getaddrinfo(host, None, proto=socket.IPPROTO_TCP)
    return sorted({str(info[4][0]) for info in infos})


@dataclass(frozen=True)
class DnsOptions:
    show_ips: bool = False
    wildcard_forced: bool = False


class DnsStrategy:
    name = "DNS enumeration"

    def __init__(self, options: Options, dns_options: DnsOptions | None = None, resolver: Resolver | None = None):
        self.options = options
        self.dns_options = dns_options or DnsOptions()
        self.domain = options.target.strip().strip(".")
        self._resolve = resolver or resolve_host
        self._wildcard_ips: frozenset[str] = frozenset()

    def setup(self) -> None:
        try:
            self._resolve(self.domain)
        except OSError:
            logger.warning("Unable to validate base domain: %s", self.domain)

        wildcard_host = f"{uuid.uuid4()}.{self.domain}"
        try:
            addresses = self._resolve(wildcard_host)
        except OSError:
            return
        if not self.dns_options.wildcard_forced:
            raise SetupError(
                "the DNS server returned the same IP for every domain. "
                f"IP address(es) returned: {', '.join(addresses)}. "
                "To force processing of wildcard DNS, specify the '--wildcard' switch"
            )
        self._wildcard_ips = frozenset(addresses)
        logger.warning("Wildcard DNS found. IP address(es): %s", ", ".join(addresses))

    def process(self, word: str) -> Outcome:
        host = f"{word}.{self.domain}"
        try:
            addresses = self._resolve(host)
        except socket.gaierror:
            return Result(word=word, found=False, extra={"host": host})
        except OSError as exc:
            return ProbeError.from_exception(word, exc)

        # With forced wildcard processing, answers identical to the wildcard are misses.
        found = bool(addresses) and not (self._wildcard_ips and set(addresses) <= self._wildcard_ips)
        return Result(word=word, found=found, extra={"host": host, "addresses": tuple(addresses)})

    def result_to_string(self, result: Result) -> str:
        if not result.found:
            return ""
        line = f"Found: {result.extra.get('host', result.word)}"
        if self.dns_options.show_ips:
            line += f" [{','.join(result.extra.get('addresses', ()))}]"
        return line

    def config_string(self) -> str:
        return format_config(
            [
                ("Domain", self.domain),
                ("Threads", self.options.threads),
                ("Wordlist", self.options.wordlist),
                ("Show IPs", "true" if self.dns_options.show_ips else None),
                ("Wildcard forced", "true" if self.dns_options.wildcard_forced else None),
            ]
        )


__all__ = ["DnsOptions", "DnsStrategy", "resolve_host"]
