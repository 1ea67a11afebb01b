"""Asynchronous single-GET fetch using httpx."""

from __future__ import annotations

import functools
import logging
from typing import Awaitable, Callable, Optional

import httpx

from ..core.model import (
    EmptyResponse, FetchResponse, InvalidResponse, NetworkError, TransportMetadata, Unreachable,
)

AsyncTransport = Callable[[str], Awaitable[FetchResponse]]

log = logging.getLogger(__name__)


def build_async_client(**kwargs) -> httpx.AsyncClient:
    """Create the httpx client used for fetches: no timeout, redirects followed."""
    kwargs.setdefault("timeout", None)
    kwargs.setdefault("follow_redirects", True)
    return httpx.AsyncClient(**kwargs)


def _metadata(response: httpx.Response) -> TransportMetadata:
    return TransportMetadata(
        charset=response.charset_encoding,
        status_code=response.status_code,
        content_type=response.headers.get("content-type"),
    )


async def fetch_async(url: str, client: Optional[httpx.AsyncClient] = None) -> FetchResponse:
    """Issue one GET and report how it completed. Never retries, never raises
    for transport errors: those are carried in `FetchResponse.error`.
    """
    owns_client = client is None
    if owns_client:
        client = build_async_client()
    try:
        response = await client.get(url)
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        log.debug("GET %s failed: %s", url, e)
        return FetchResponse(None, None, e)
    finally:
        if owns_client:
            await client.aclose()

    log.debug("GET %s -> %s (%d bytes)", url, response.status_code, len(response.content))
    return FetchResponse(response.content, _metadata(response), None)


def complete_fetch(url: str, response: FetchResponse) -> tuple[bytes, TransportMetadata]:
    """Apply the completion rules of a single fetch.

    error set → NetworkError; nothing at all → Unreachable; no metadata →
    InvalidResponse; no (or empty) body → EmptyResponse.
    """
    if response.error is not None:
        raise NetworkError(f"Error while fetching {url}: {response.error}", response.error)
    if response.data is None and response.metadata is None:
        raise Unreachable(f"No response and no error for {url}")
    if response.metadata is None:
        raise InvalidResponse(f"Invalid or missing response for {url}")
    if not response.data:
        raise EmptyResponse(f"Didn't get any remote data from {url}")
    return response.data, response.metadata


class HTTPAsyncFetcher:
    """Awaitable single-attempt fetch, for callers already inside an event loop."""

    def __init__(self, transport: Optional[AsyncTransport] = None, *,
                 client: Optional[httpx.AsyncClient] = None):
        self._transport = transport or functools.partial(fetch_async, client=client)
        self.fetch_count = 0

    async def fetch(self, url: str) -> tuple[bytes, TransportMetadata]:
        self.fetch_count += 1
        return complete_fetch(url, await self._transport(url))
