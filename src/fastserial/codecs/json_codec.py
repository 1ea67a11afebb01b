from __future__ import annotations

import json
from typing import Any, ClassVar

from ..core.codec_base import FormatCodec
from ..core.model import FormatKind, JSONOptions


class JSONCodec(FormatCodec):
    """JSON codec backed by the standard library."""

    format: ClassVar = FormatKind.JSON
    priority: ClassVar = 10

    def decode_tree(self, data: bytes) -> Any:
        return json.loads(data)

    def encode_tree(self, tree: Any, options: JSONOptions | None = None) -> bytes:
        options = options if isinstance(options, JSONOptions) else JSONOptions()
        # NaN and Infinity are not JSON
        text = json.dumps(
            tree,
            indent=options.indent,
            sort_keys=options.sort_keys,
            ensure_ascii=options.ensure_ascii,
            allow_nan=False,
        )
        return text.encode("utf-8")
