"""Base protocols and shared constants for the payload acquisition layer."""

from typing import Protocol, runtime_checkable

from ..core.model import Payload

DEFAULT_CHARSET = "utf-8"


@runtime_checkable
class PayloadSource(Protocol):
    """Protocol for anything that can produce a Payload."""

    descape: bool

    def acquire(self) -> Payload:
        """Return the raw payload of this source.
        If it cannot be obtained → raise an AcquisitionError subclass.
        """
        ...

    def read_text(self) -> str:
        """Acquire and decode the payload with its charset, descaping if asked."""
        ...


@runtime_checkable
class Reachability(Protocol):
    """Pre-flight gate consulted once before a remote fetch."""

    def __call__(self) -> bool:
        ...
