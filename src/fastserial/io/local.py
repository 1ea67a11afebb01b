"""In-memory and local file payload sources."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Union

from ..core.log import diagnostics
from ..core.model import (
    EmptyInput, IsDirectory, NotFound, Payload, ReadError, SourceKind,
)
from .base import DEFAULT_CHARSET
from .charset import resolve_charset


class StringSource:
    """Payload source wrapping text that is already in memory."""

    def __init__(self, text: str, *, descape: bool = False, logger=None):
        self.text = text
        self.descape = descape
        self._diag = diagnostics(logger, "fastserial.io.local")

    def acquire(self) -> Payload:
        if not self.text:
            raise EmptyInput("Empty string source")
        return Payload(self.text.encode(DEFAULT_CHARSET), DEFAULT_CHARSET, SourceKind.STRING)

    def read_text(self) -> str:
        if not self.text:
            raise EmptyInput("Empty string source")
        if not self.descape:
            return self.text
        return self.acquire().text(descape=True)

    def __repr__(self) -> str:
        return f"StringSource({len(self.text)} chars)"


class LocalSource:
    """Payload source reading a whole local file."""

    def __init__(self, path: Union[Path, str], charset: str | None = DEFAULT_CHARSET, *,
                 descape: bool = False, logger=None):
        # Path("") would silently become the current directory
        self.path = Path(path) if str(path) else None
        self.charset = resolve_charset(charset)
        self.descape = descape
        self._diag = diagnostics(logger, "fastserial.io.local")

    def acquire(self) -> Payload:
        path = self.path
        if path is None:
            raise EmptyInput("Empty file path")
        if not path.exists():
            self._diag.debug(f"The provided file doesn't exist: {path}")
            raise NotFound(f"No such file: {path}")
        if path.is_dir():
            self._diag.debug(f"The provided file is a folder: {path}")
            raise IsDirectory(f"Is a directory: {path}")

        try:
            data = path.read_bytes()
        except OSError as e:
            self._diag.debug(f"Can't get valid data from file, error: {e}")
            raise ReadError(f"Can't read {path}: {os.strerror(e.errno) if e.errno else e}") from e

        self._diag.info(f"Read {len(data)} bytes from {path}")
        return Payload(data, self.charset, SourceKind.LOCAL, str(path))

    def read_text(self) -> str:
        return self.acquire().text(descape=self.descape)

    def __repr__(self) -> str:
        return f"LocalSource({str(self.path or '')!r})"


def open_local_source(path: Union[Path, str], charset: str | None = DEFAULT_CHARSET, **kwargs) -> LocalSource:
    """Create a local file payload source."""
    return LocalSource(path, charset, **kwargs)
