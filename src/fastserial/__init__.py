"""FastSerial - JSON / property list (de)serialization from strings, files and URLs."""

import asyncio
import logging

from .core.model import (                                             # re-export
    FormatKind, SourceKind, Payload, TransportMetadata, Attempt, DecodeOutcome,
    JSONOptions, PlistOptions,
    SerializationError, AcquisitionError, EmptyInput, NotFound, IsDirectory, ReadError,
    DecodeTextError, InvalidURL, Unreachable, NetworkError, InvalidResponse, EmptyResponse,
    DecodeFailure, EncodeFailure, ShapeError,
)
from .core.registry import _REGISTRY                                  # singleton
from .core.shapes import Shape, TreeShape, TypedShape
from .core.dispatch import FormatDispatcher
from .io import open_source, StringSource, RemoteSource, descape

# Import codecs to trigger registration (JSON before PLIST)
from .codecs import json_codec, plist_codec  # noqa: F401

logging.getLogger(__name__).addHandler(logging.NullHandler())


def _failed(err: SerializationError) -> DecodeOutcome:
    return DecodeOutcome(False, None, None, (), empty_input=isinstance(err, EmptyInput),
                         error=str(err), error_kind=err.kind, cause=err)


def loads(text: str, shape=None, *, descape: bool = False, logger=None) -> DecodeOutcome:
    """Decode serialized text (JSON, else PLIST) into `shape`."""
    dispatcher = FormatDispatcher(logger=logger)
    if not descape:
        return dispatcher.decode(text, shape)
    try:
        text = StringSource(text, descape=True, logger=logger).read_text()
    except SerializationError as e:
        return _failed(e)
    return dispatcher.decode(text, shape)


def read_value_sync(source, shape=None, *, logger=None, **source_options) -> DecodeOutcome:
    """Read a value synchronously from a source (path, URL or PayloadSource)."""
    try:
        reader = open_source(source, logger=logger, **source_options)
        text = reader.read_text()
    except SerializationError as e:
        return _failed(e)
    return FormatDispatcher(logger=logger).decode(text, shape)


async def read_value(source, shape=None, *, logger=None, **source_options) -> DecodeOutcome:
    """Read a value asynchronously; the blocking acquisition runs in a worker thread."""
    return await asyncio.to_thread(read_value_sync, source, shape, logger=logger, **source_options)


def load_file(path, shape=None, *, charset: str = "utf-8", descape: bool = False, logger=None) -> DecodeOutcome:
    """Decode a local JSON or PLIST file into `shape`."""
    return read_value_sync(open_source(path, charset=charset, descape=descape, logger=logger),
                           shape, logger=logger)


def load_url(url: str, shape=None, *, descape: bool = False, fetcher=None, reachability=None,
             logger=None) -> DecodeOutcome:
    """Decode a remote JSON or PLIST file into `shape` with one blocking GET."""
    source = RemoteSource(url, fetcher=fetcher, reachability=reachability, descape=descape, logger=logger)
    return read_value_sync(source, shape, logger=logger)


def dumps(value, format: FormatKind = FormatKind.JSON, options=None, *, shape=None, logger=None) -> str:
    """Serialize `value` in the given format; raises EncodeFailure."""
    return FormatDispatcher(logger=logger).encode(value, format, options, shape=shape)


def to_json(value, *, indent: int | None = None, sort_keys: bool = False, logger=None) -> str:
    return dumps(value, FormatKind.JSON, JSONOptions(indent=indent, sort_keys=sort_keys), logger=logger)


def to_plist(value, *, sort_keys: bool = True, logger=None) -> str:
    return dumps(value, FormatKind.PLIST, PlistOptions(sort_keys=sort_keys), logger=logger)


__all__ = [
    "loads", "load_file", "load_url", "read_value", "read_value_sync",
    "dumps", "to_json", "to_plist", "descape",
    "FormatDispatcher", "Shape", "TreeShape", "TypedShape",
    "FormatKind", "SourceKind", "Payload", "TransportMetadata", "Attempt", "DecodeOutcome",
    "JSONOptions", "PlistOptions",
    "SerializationError", "AcquisitionError", "EmptyInput", "NotFound", "IsDirectory", "ReadError",
    "DecodeTextError", "InvalidURL", "Unreachable", "NetworkError", "InvalidResponse",
    "EmptyResponse", "DecodeFailure", "EncodeFailure", "ShapeError",
]
