from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Generic, Tuple, TypeVar

T = TypeVar("T")


class FormatKind(str, Enum):
    JSON = "json"
    PLIST = "plist"


class SourceKind(str, Enum):
    STRING = "string"
    LOCAL = "local"
    REMOTE = "remote"


@dataclass(frozen=True, slots=True)
class Payload:
    data: bytes
    charset: str
    kind: SourceKind
    origin: str | None = None      # path or url, None for inline strings

    def text(self, *, descape: bool = False) -> str:
        """Decode the raw bytes with the payload charset."""
        try:
            text = self.data.decode(self.charset)
        except (UnicodeDecodeError, LookupError) as e:
            raise DecodeTextError(
                f"Can't convert the data to a valid string using {self.charset}: {e}"
            ) from e
        if descape:
            from ..io.descape import descape as _descape
            text = _descape(text)
        return text


@dataclass(frozen=True, slots=True)
class TransportMetadata:
    charset: str | None = None
    status_code: int | None = None
    content_type: str | None = None


@dataclass(frozen=True, slots=True)
class FetchResponse:
    """Completion record of a single fetch: what the transport handed back."""
    data: bytes | None
    metadata: TransportMetadata | None
    error: BaseException | None = None


@dataclass(frozen=True, slots=True)
class Attempt:
    format: FormatKind
    cause: str


@dataclass
class DecodeOutcome(Generic[T]):
    success: bool
    value: T | None
    format: FormatKind | None
    attempts: Tuple[Attempt, ...] = ()
    empty_input: bool = False
    error: str | None = None       # failure before any format was attempted
    error_kind: str | None = None
    cause: SerializationError | None = None

    def unwrap(self) -> T:
        """Return the value, or raise the error that stopped the decode.

        Acquisition errors are re-raised with their own type (NotFound,
        Unreachable, ...); empty input raises EmptyInput; a payload no
        format could decode raises DecodeFailure.
        """
        if self.success:
            return self.value  # type: ignore[return-value]
        if self.cause is not None:
            raise self.cause
        if self.empty_input:
            raise EmptyInput("Empty input, no format attempted")
        raise DecodeFailure(self.attempts, error=self.error)

    def __bool__(self) -> bool:
        return self.success


class SerializationError(RuntimeError):
    """Base class for every error raised by fastserial."""
    kind: str = "SerializationError"


class AcquisitionError(SerializationError):
    """Raised when a payload cannot be obtained from its source."""


class EmptyInput(AcquisitionError):
    kind = "EmptyInput"


class NotFound(AcquisitionError):
    kind = "NotFound"


class IsDirectory(AcquisitionError):
    kind = "IsDirectory"


class ReadError(AcquisitionError):
    """Raised when a local file exists but cannot be read."""
    kind = "IOError"


class DecodeTextError(AcquisitionError):
    kind = "IOError"


class InvalidURL(AcquisitionError):
    kind = "InvalidURL"


class Unreachable(AcquisitionError):
    kind = "Unreachable"


class NetworkError(AcquisitionError):
    kind = "NetworkError"

    def __init__(self, message: str, cause: BaseException | None = None):
        super().__init__(message)
        self.cause = cause


class InvalidResponse(AcquisitionError):
    kind = "InvalidResponse"


class EmptyResponse(AcquisitionError):
    kind = "EmptyResponse"


class DecodeFailure(SerializationError):
    """Raised when no format could decode a payload into the requested shape."""
    kind = "DecodeFailure"

    def __init__(self, attempts: Tuple[Attempt, ...] = (), *, error: str | None = None):
        self.attempts = tuple(attempts)
        self.error = error
        if error:
            message = error
        else:
            message = "; ".join(f"{a.format.value}: {a.cause}" for a in self.attempts)
        super().__init__(message or "No format attempted")


class EncodeFailure(SerializationError):
    kind = "EncodeFailure"

    def __init__(self, format: FormatKind, cause: str):
        super().__init__(f"Can't represent value as {format.value}: {cause}")
        self.format = format
        self.cause = cause


class ShapeError(ValueError):
    """Raised when a decoded tree does not fit the requested shape."""


@dataclass(slots=True)
class JSONOptions:
    indent: int | None = None
    sort_keys: bool = False
    ensure_ascii: bool = False


@dataclass(slots=True)
class PlistOptions:
    sort_keys: bool = True

