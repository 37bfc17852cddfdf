# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Directory/file enumeration over HTTP."""

from __future__ import annotations

import logging
import uuid
from collections.abc import Iterable
from dataclasses import dataclass

from ..config import Options
from ..errors import ConfigurationError, SetupError
from ..http.client import ProbeClient
from ..models import Outcome, ProbeError, Result
from .base import format_config

logger = logging.getLogger(__name__)

DEFAULT_STATUS_CODES = frozenset({200, 204, 301, 302, 307, 401, 403})


def parse_status_codes(value: str | Iterable[int | str] | None) -> frozenset[int]:
    """Parse `"200,204,301"` (or an iterable of codes) into a set of status codes."""
    if value is None:
        return DEFAULT_STATUS_CODES
    items = value.split(",") if isinstance(value, str) else list(value)
    codes: set[int] = set()
    for item in items:
        raw = str(item).strip()
        if not raw:
            continue
        try:
            code = int(raw)
        except ValueError as exc:
            raise ConfigurationError(f"invalid status code {raw!r}") from exc
        if not 100 <= code <= 599:
            raise ConfigurationError(f"invalid status code {raw!r}")
        codes.add(code)
    if not codes:
        raise ConfigurationError("at least one status code is required")
    return frozenset(codes)


def normalize_base_url(target: str) -> str:
    url = target.strip()
    if "://" not in url:
        url = f"http://{url}"
    if not url.endswith("/"):
        url += "/"
    return url


@dataclass(frozen=True)
class DirOptions:
    status_codes: frozenset[int] = DEFAULT_STATUS_CODES
    expanded: bool = False
    no_status: bool = False
    wildcard_forced: bool = False
    extensions: tuple[str, ...] = ()


class DirStrategy:
    name = "directory enumeration"

    def __init__(self, options: Options, client: ProbeClient, dir_options: DirOptions | None = None):
        self.options = options
        self.client = client
        self.dir_options = dir_options or DirOptions()
        self.base_url = normalize_base_url(options.target)

    def url_for(self, word: str) -> str:
        return self.base_url + word.lstrip("/")

    def setup(self) -> None:
        resp = self.client.probe(self.base_url, self.options.cookies)
        if not resp.ok:
            raise SetupError(f"unable to connect to {self.base_url}: {resp.error_message}")

        wildcard_url = self.url_for(str(uuid.uuid4()))
        resp = self.client.probe(wildcard_url, self.options.cookies)
        if not resp.ok or resp.status_code not in self.dir_options.status_codes:
            return
        if not self.dir_options.wildcard_forced:
            raise SetupError(
                "the server returns a status code that matches the provided options for non existing urls. "
                f"{wildcard_url} => {resp.status_code}. "
                "To force processing of wildcard responses, specify the '--wildcard' switch"
            )
        logger.warning("Wildcard response found: %s => %d", wildcard_url, resp.status_code)

    def process(self, word: str) -> Outcome:
        url = self.url_for(word)
        resp = self.client.probe(url, self.options.cookies)
        if not resp.ok:
            return ProbeError(word=word, message=resp.error_message or "probe failed", category=resp.error_category)

        extra: dict[str, str] = {"url": url}
        if resp.is_redirect:
            extra["location"] = str(resp.location)
        return Result(
            word=word,
            status_code=resp.status_code,
            length=resp.content_length,
            found=resp.status_code in self.dir_options.status_codes,
            extra=extra,
        )

    def result_to_string(self, result: Result) -> str:
        if not result.found:
            return ""
        line = self.url_for(result.word) if self.dir_options.expanded else f"/{result.word.lstrip('/')}"
        if not self.dir_options.no_status:
            line += f" (Status: {result.status_code})"
        if result.length is not None:
            line += f" [Size: {result.length}]"
        location = result.extra.get("location")
        if location:
            line += f" [--> {location}]"
        return line

    def config_string(self) -> str:
        opts = self.options
        return format_config(
            [
                ("Url", self.base_url),
                ("Threads", opts.threads),
                ("Wordlist", opts.wordlist),
                ("Status codes", ",".join(str(code) for code in sorted(self.dir_options.status_codes))),
                ("Proxy", opts.proxy),
                ("Cookies", opts.cookies),
                ("User Agent", opts.effective_user_agent),
                ("Auth User", opts.username),
                ("Extensions", ",".join(self.dir_options.extensions)),
                ("Expanded", "true" if self.dir_options.expanded else None),
                ("No status", "true" if self.dir_options.no_status else None),
                ("Follow Redir", "true" if opts.follow_redirect else None),
                ("Show length", "true" if opts.include_length else None),
                ("Insecure SSL", "true" if opts.insecure_ssl else None),
                ("Timeout", f"{opts.timeout:g}s"),
            ]
        )


__all__ = ["DEFAULT_STATUS_CODES", "DirOptions", "DirStrategy", "normalize_base_url", "parse_status_codes"]
