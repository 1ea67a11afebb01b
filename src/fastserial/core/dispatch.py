"""Format dispatch: decode by trying every registered codec in priority order."""

from __future__ import annotations

from typing import Any, Iterable, List

from .codec_base import FormatCodec
from .log import diagnostics
from .model import Attempt, DecodeOutcome, DecodeTextError, EmptyInput, EncodeFailure, FormatKind
from .registry import CodecRegistry, _REGISTRY
from .shapes import Shape, TreeShape, TypedShape, _is_typed_target, shape_for


def _summarize(exc: BaseException) -> str:
    message = str(exc).strip().splitlines()
    return f"{type(exc).__name__}: {message[0]}" if message else type(exc).__name__


class FormatDispatcher:
    """Decode text as JSON, then as PLIST; encode to one explicit format.

    The attempt order is the registry order (lower priority first) and never
    depends on the payload. Every attempt gets the same immutable bytes.
    """

    def __init__(self, registry: CodecRegistry | None = None, *, logger=None):
        self.registry = registry if registry is not None else _REGISTRY
        self._diag = diagnostics(logger, "fastserial.dispatch")

    # --------------------------- decode -------------------------------- #
    def decode(self, text: str, shape: Any = None) -> DecodeOutcome:
        """Decode `text` into `shape`, returning the first format that fits."""
        return self._decode(text, shape_for(shape), self.registry.ordered())

    def decode_as(self, text: str, format: FormatKind, shape: Any = None) -> DecodeOutcome:
        """Decode `text` with one explicit format, no fallback."""
        return self._decode(text, shape_for(shape), [self.registry.get(format)])

    def decode_bytes(self, data: bytes, shape: Any = None, charset: str = "utf-8") -> DecodeOutcome:
        try:
            text = data.decode(charset)
        except (UnicodeDecodeError, LookupError) as e:
            self._diag.debug(f"Can't convert the data to a valid string using {charset}")
            return _text_failure(DecodeTextError(f"Can't decode bytes as {charset}: {e}"))
        return self.decode(text, shape)

    def _decode(self, text: str, target: Shape, codecs: Iterable[FormatCodec]) -> DecodeOutcome:
        if not text or not text.strip():
            self._diag.debug("Empty input, no format attempted")
            return DecodeOutcome(False, None, None, (), empty_input=True, error_kind=EmptyInput.kind)

        try:
            data = text.encode("utf-8")
        except UnicodeEncodeError as e:
            self._diag.debug("Can't convert the string into valid utf8 data")
            return _text_failure(DecodeTextError(f"Can't encode text as utf-8: {e}"))

        attempts: List[Attempt] = []
        for codec in codecs:
            try:
                tree = codec.decode_tree(data)
                value = target.build(tree)
            except Exception as e:
                cause = _summarize(e)
                self._diag.debug(f"Can't decode {codec.format.value} data into {target!r}, error: {cause}")
                attempts.append(Attempt(codec.format, cause))
                continue
            self._diag.info(f"Decoded {codec.format.value} payload into {target!r}")
            return DecodeOutcome(True, value, codec.format, tuple(attempts))

        return DecodeOutcome(False, None, None, tuple(attempts))

    # --------------------------- encode -------------------------------- #
    def encode(self, value: Any, format: FormatKind, options=None, *, shape: Any = None) -> str:
        """Serialize `value` as `format`; raise EncodeFailure if it can't be represented."""
        format = FormatKind(format)
        codec = self.registry.get(format)
        target = shape_for(shape) if shape is not None else _infer_shape(value)
        try:
            tree = target.flatten(value)
            text = codec.encode_tree(tree, options).decode("utf-8")
        except Exception as e:
            cause = _summarize(e)
            self._diag.debug(f"Can't convert instance to valid {format.value} data: {cause}")
            raise EncodeFailure(format, cause) from e
        return text


def _text_failure(err: DecodeTextError) -> DecodeOutcome:
    return DecodeOutcome(False, None, None, (), error=str(err), error_kind=err.kind, cause=err)


def _infer_shape(value: Any) -> Shape:
    if _is_typed_target(type(value)):
        return TypedShape(type(value))
    return TreeShape()
