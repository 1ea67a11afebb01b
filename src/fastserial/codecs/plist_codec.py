from __future__ import annotations

import plistlib
from typing import Any, ClassVar

from ..core.codec_base import FormatCodec
from ..core.model import FormatKind, PlistOptions

BINARY_PLIST_SIG = b"bplist00"


class PlistCodec(FormatCodec):
    """XML property list codec backed by plistlib."""

    format: ClassVar = FormatKind.PLIST
    priority: ClassVar = 20

    def decode_tree(self, data: bytes) -> Any:
        if data[:8] == BINARY_PLIST_SIG:
            raise ValueError("Binary property lists are not a text payload")
        return plistlib.loads(data, fmt=plistlib.FMT_XML)

    def encode_tree(self, tree: Any, options: PlistOptions | None = None) -> bytes:
        options = options if isinstance(options, PlistOptions) else PlistOptions()
        return plistlib.dumps(tree, fmt=plistlib.FMT_XML, sort_keys=options.sort_keys)
