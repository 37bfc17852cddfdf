# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""httpx-backed ProbeClient implementation."""

from __future__ import annotations

import asyncio
import concurrent.futures
import threading

import httpx

from ..config import Options
from ..errors import ConfigurationError, ProbeCancelled
from .client import ProbeClient
from .models import ProbeResponse

DEFAULT_POOL_SIZE = 100
CANCEL_POLL_INTERVAL = 0.05
_IDENTITY_ENCODINGS = ("", "identity")


def count_code_points(body: bytes, encoding: str | None = None) -> int:
    """
    Length of a body as the number of decoded code points.

    Bodies that do not decode strictly (binary content) fall back to the raw byte count.
    """
    try:
        return len(body.decode(encoding or "utf-8"))
    except (UnicodeDecodeError, LookupError):
        return len(body)


class HttpxProbeClient(ProbeClient):
    """
    Blocking probe facade over one httpx.AsyncClient.

    The async client lives on a private event loop thread; every worker submits its exchange there and
    waits for it. Each exchange runs under a single deadline of ``options.timeout`` covering connect,
    request, headers and body, and a fired cancel event aborts the in-flight exchange.
    """

    def __init__(
        self,
        options: Options,
        cancel_event: threading.Event | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        self.options = options
        self._cancel_event = cancel_event or threading.Event()
        self._auth = httpx.BasicAuth(options.username, options.password or "") if options.username else None
        if client is None:
            try:
                client = httpx.AsyncClient(
                    follow_redirects=options.follow_redirect,
                    timeout=httpx.Timeout(options.timeout),
                    verify=not options.insecure_ssl,
                    proxy=options.proxy,
                    trust_env=True,
                    limits=httpx.Limits(
                        max_connections=max(options.threads, DEFAULT_POOL_SIZE),
                        max_keepalive_connections=options.threads,
                    ),
                )
            except (ValueError, TypeError, ImportError) as exc:
                raise ConfigurationError(f"unable to configure HTTP client: {exc}") from exc
        self._client = client
        self._closed = False
        self._close_lock = threading.Lock()
        self._loop = asyncio.new_event_loop()
        self._thread = threading.Thread(target=self._loop.run_forever, name="wordbuster-http", daemon=True)
        self._thread.start()

    def probe(self, url: str, cookie: str | None = None) -> ProbeResponse:
        if self._cancel_event.is_set() or self._closed:
            return ProbeResponse.from_exception(ProbeCancelled("probe cancelled"), url=url)

        headers = {"User-Agent": self.options.effective_user_agent}
        if cookie:
            headers["Cookie"] = cookie

        future = asyncio.run_coroutine_threadsafe(self._bounded_exchange(url, headers), self._loop)
        while True:
            try:
                return future.result(timeout=CANCEL_POLL_INTERVAL)
            except concurrent.futures.TimeoutError:
                if self._cancel_event.is_set():
                    future.cancel()
                    return ProbeResponse.from_exception(ProbeCancelled("probe cancelled"), url=url)
            except concurrent.futures.CancelledError:
                return ProbeResponse.from_exception(ProbeCancelled("probe cancelled"), url=url)

    async def _bounded_exchange(self, url: str, headers: dict[str, str]) -> ProbeResponse:
        try:
            return await asyncio.wait_for(self._exchange(url, headers), timeout=self.options.timeout)
        except asyncio.TimeoutError:
            expired = httpx.TimeoutException(f"probe exceeded timeout of {self.options.timeout}s")
            return ProbeResponse.from_exception(expired, url=url)
        except Exception as exc:  # noqa: BLE001
            return ProbeResponse.from_exception(exc, url=url)

    async def _exchange(self, url: str, headers: dict[str, str]) -> ProbeResponse:
        async with self._client.stream(
            "GET",
            url,
            headers=headers,
            auth=self._auth,
            follow_redirects=self.options.follow_redirect,
        ) as resp:
            length = await self._content_length(resp) if self.options.include_length else None
            return ProbeResponse(
                ok=True,
                status_code=resp.status_code,
                content_length=length,
                location=resp.headers.get("location"),
                url=str(resp.url),
            )

    async def _content_length(self, resp: httpx.Response) -> int:
        try:
            declared = int(resp.headers.get("content-length", "-1"))
        except ValueError:
            declared = -1
        # A declared length of an encoded (gzip, deflate, ...) body is the wire size, not the page size.
        encoding = resp.headers.get("content-encoding", "").strip().lower()
        if declared > 0 and encoding in _IDENTITY_ENCODINGS:
            return declared

        content = bytearray()
        async for chunk in resp.aiter_bytes():
            self._raise_if_cancelled()
            content.extend(chunk)
        return count_code_points(bytes(content), resp.encoding)

    def _raise_if_cancelled(self) -> None:
        if self._cancel_event.is_set():
            raise ProbeCancelled("probe cancelled")

    def close(self) -> None:
        with self._close_lock:
            if self._closed:
                return
            self._closed = True
        try:
            asyncio.run_coroutine_threadsafe(self._client.aclose(), self._loop).result()
        finally:
            self._loop.call_soon_threadsafe(self._loop.stop)
            self._thread.join()
            self._loop.close()

    def __enter__(self) -> HttpxProbeClient:
        return self

    def __exit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        self.close()
