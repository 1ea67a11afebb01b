"""Resolve transport charset hints to a codec Python can decode with."""

from __future__ import annotations

import codecs
import logging

from ..core.model import TransportMetadata
from .base import DEFAULT_CHARSET

log = logging.getLogger(__name__)


def resolve_charset(name: str | None) -> str:
    """Map an IANA charset name to a Python codec name; UTF-8 when unknown."""
    if not name:
        return DEFAULT_CHARSET
    cleaned = str(name).strip().strip("\"'").strip()
    if not cleaned:
        return DEFAULT_CHARSET
    try:
        return codecs.lookup(cleaned).name
    except (LookupError, ValueError, TypeError):
        log.debug("Unknown charset %r, falling back to %s", name, DEFAULT_CHARSET)
        return DEFAULT_CHARSET


def resolve_metadata_charset(metadata: TransportMetadata | None) -> str:
    """First charset hint carried by the transport, or the default."""
    if metadata is None:
        return DEFAULT_CHARSET
    return resolve_charset(metadata.charset)
