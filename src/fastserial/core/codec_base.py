from abc import ABC, abstractmethod
from typing import Any, ClassVar

from .model import FormatKind


class FormatCodec(ABC):
    # --- required by subclasses ---
    format: ClassVar[FormatKind]
    priority: ClassVar[int] = 100            # lower = attempted earlier on decode
    register: ClassVar[bool] = True          # False keeps a subclass out of the registry

    # --- decode ---
    @abstractmethod
    def decode_tree(self, data: bytes) -> Any:
        """Parse `data` into a tree of dicts, lists and scalars.
        Any exception means the payload is not valid in this format.
        """
        ...

    # --- encode ---
    @abstractmethod
    def encode_tree(self, tree: Any, options=None) -> bytes:
        """Serialize a tree of dicts, lists and scalars."""
        ...

    # --- registry hook ---
    def __init_subclass__(cls, **kw):
        super().__init_subclass__(**kw)
        if cls.__dict__.get("register", True) and not getattr(cls, "__abstractmethods__", None):
            from .registry import _REGISTRY
            _REGISTRY.register(cls)           # noqa: E402
