from __future__ import annotations
import bisect
from typing import Dict, Iterable, List, Type

from .codec_base import FormatCodec
from .model import FormatKind


class CodecRegistry:
    def __init__(self, codecs: Iterable[FormatCodec] = ()) -> None:
        self._by_format: Dict[FormatKind, FormatCodec] = {}
        self._codecs: List[tuple[int, str, FormatCodec]] = []   # sorted by priority
        for codec in codecs:
            self.add(codec)

    # called from FormatCodec.__init_subclass__
    def register(self, codec_cls: Type[FormatCodec]) -> None:
        self.add(codec_cls())

    def add(self, codec: FormatCodec) -> None:
        # (priority, class_name, codec) keeps the order stable on equal priorities
        previous = self._by_format.get(codec.format)
        if previous is not None:
            self._codecs = [e for e in self._codecs if e[2] is not previous]
        entry = (codec.priority, type(codec).__name__, codec)
        bisect.insort(self._codecs, entry, key=lambda e: (e[0], e[1]))
        self._by_format[codec.format] = codec

    # --- lookup helpers ---
    def ordered(self) -> List[FormatCodec]:
        """Codecs in decode attempt order."""
        return [c for _, _, c in self._codecs]

    def get(self, kind: FormatKind) -> FormatCodec:
        try:
            return self._by_format[FormatKind(kind)]
        except (KeyError, ValueError):
            raise LookupError(f"No codec registered for {kind!s}") from None


# singleton used project-wide
_REGISTRY = CodecRegistry()
