"""Blocking remote payload source built on the asynchronous httpx fetch.

`SyncFetcher.fetch` turns one asynchronous GET into a blocking call. It makes
a single attempt, has no timeout and cannot be cancelled: if the request
never completes, the caller blocks forever. Callers that need a deadline or
cancellation must wrap the call themselves (or use `HTTPAsyncFetcher`).
"""

from __future__ import annotations

import asyncio
import concurrent.futures
from typing import Any, Callable, Optional
from urllib.parse import urlparse

import httpx

from ..core.log import diagnostics
from ..core.model import (
    EmptyInput, InvalidURL, Payload, SourceKind, TransportMetadata, Unreachable,
)
from .base import Reachability
from .charset import resolve_metadata_charset
from .http_async import AsyncTransport, build_async_client, complete_fetch, fetch_async
from .reachability import RequestsReachability


def run_blocking(factory: Callable[[], Any]) -> Any:
    """Run the coroutine made by `factory` to completion and return its result.

    Uses `asyncio.run` on the calling thread; if that thread already runs an
    event loop, the coroutine gets a fresh loop on a worker thread and the
    caller waits on it. There is no timeout on either path.
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(factory())
    with concurrent.futures.ThreadPoolExecutor(max_workers=1) as pool:
        return pool.submit(lambda: asyncio.run(factory())).result()


class SyncFetcher:
    """Single-shot blocking GET: returns (bytes, TransportMetadata) or raises."""

    def __init__(self, transport: Optional[AsyncTransport] = None, **client_kwargs):
        self._transport = transport
        self._client_kwargs = client_kwargs
        self.fetch_count = 0

    async def _fetch(self, url: str):
        if self._transport is not None:
            return await self._transport(url)
        if not self._client_kwargs:
            return await fetch_async(url)
        # the client belongs to this call's event loop
        async with build_async_client(**self._client_kwargs) as client:
            return await fetch_async(url, client)

    def fetch(self, url: str) -> tuple[bytes, TransportMetadata]:
        self.fetch_count += 1
        response = run_blocking(lambda: self._fetch(url))
        return complete_fetch(url, response)


def validate_url(url: str) -> str:
    """Return `url` if it is an absolute http(s) URL, else raise InvalidURL."""
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise InvalidURL(f"Can't get a valid URL from {url!r}")
    try:
        httpx.URL(url)
    except (httpx.InvalidURL, ValueError) as e:
        raise InvalidURL(f"Can't get a valid URL from {url!r}: {e}") from e
    return url


class RemoteSource:
    """Payload source fetching a remote file with one blocking GET.

    Before the GET, `reachability` is asked once whether the network is up;
    if it says no, `Unreachable` is raised and no request is made. The
    default gate is a `RequestsReachability` against `DEFAULT_CHECK_URL`, a
    connectivity check that does not touch the payload host. Pass
    `AlwaysReachable()` to skip it.
    """

    def __init__(self, url: str, *, fetcher: Optional[SyncFetcher] = None,
                 reachability: Optional[Reachability] = None, descape: bool = False, logger=None):
        self.url = url
        self.fetcher = fetcher if fetcher is not None else SyncFetcher()
        self.reachability = reachability if reachability is not None else RequestsReachability()
        self.descape = descape
        self._diag = diagnostics(logger, "fastserial.io.http_sync")

    def acquire(self) -> Payload:
        if not self.url:
            raise EmptyInput("Empty URL")
        url = validate_url(self.url)

        if not self.reachability():
            self._diag.debug(f"Network unreachable, not fetching {url}")
            raise Unreachable(f"Network unreachable, not fetching {url}")

        data, metadata = self.fetcher.fetch(url)
        # charset is only known once the fetch has completed
        charset = resolve_metadata_charset(metadata)
        self._diag.debug(f"Charset hint {metadata.charset!r} resolved to {charset}")
        self._diag.info(f"Fetched {len(data)} bytes from {url} ({charset})")
        return Payload(data, charset, SourceKind.REMOTE, url)

    def read_text(self) -> str:
        text = self.acquire().text(descape=self.descape)
        self._diag.debug(f"Obtained remote string:\n\n{text}")
        return text

    def __repr__(self) -> str:
        return f"RemoteSource({self.url!r})"


def open_remote_source(url: str, **kwargs) -> RemoteSource:
    """Create a remote payload source."""
    return RemoteSource(url, **kwargs)
