"""Payload acquisition layer for fastserial - turns sources into text."""

# Re-export these for import convenience
from .base import PayloadSource, Reachability, DEFAULT_CHARSET
from .charset import resolve_charset, resolve_metadata_charset
from .descape import descape
from .local import StringSource, LocalSource, open_local_source
from .http_async import HTTPAsyncFetcher, fetch_async
from .http_sync import SyncFetcher, RemoteSource, open_remote_source
from .reachability import RequestsReachability, AlwaysReachable


def open_source(source, **kwargs):
    """Factory function to create the appropriate PayloadSource for a path or URL."""
    if isinstance(source, PayloadSource):
        return source

    source_str = str(source)
    if source_str.startswith(('http://', 'https://')):
        kwargs.pop('charset', None)          # remote charset comes from the response
        return open_remote_source(source_str, **kwargs)
    kwargs.pop('fetcher', None)
    kwargs.pop('reachability', None)
    return open_local_source(source, **kwargs)
