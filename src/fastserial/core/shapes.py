"""Target shapes: how a decoded tree becomes the value a caller asked for.

Two implementations share the `Shape` interface:

* `TypedShape` validates the tree into a dataclass or a pydantic model,
  checking every field against its annotation (schema-directed construction).
* `TreeShape` accepts any container tree of dicts, lists and scalars
  (structural cast).

Both also go the other way (`flatten`) so the encoder only ever sees trees.
"""

from __future__ import annotations

import dataclasses
import functools
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any

from pydantic import BaseModel, TypeAdapter, ValidationError

from .model import ShapeError


class Shape(ABC):
    @abstractmethod
    def build(self, tree: Any) -> Any:
        """Turn a decoded tree into a value, or raise ShapeError."""
        ...

    @abstractmethod
    def flatten(self, value: Any) -> Any:
        """Turn a value into a tree the codecs can serialize."""
        ...


class TreeShape(Shape):
    """Loosely typed container tree; optionally pinned to dict or list."""

    def __init__(self, container: type | None = None):
        if container not in (None, dict, list):
            raise TypeError(f"Container must be dict or list, not {container!r}")
        self.container = container

    def build(self, tree: Any) -> Any:
        allowed = (self.container,) if self.container else (dict, list)
        if not isinstance(tree, allowed):
            names = " or ".join(t.__name__ for t in allowed)
            raise ShapeError(f"Can't convert {type(tree).__name__} into a valid {names}")
        return tree

    def flatten(self, value: Any) -> Any:
        return _flatten(value)

    def __repr__(self) -> str:
        return f"TreeShape({self.container.__name__ if self.container else 'any'})"


class TypedShape(Shape):
    """Dataclass or pydantic model shape, validated by pydantic.

    Validation runs in pydantic's default (lax) mode: a value that can't be
    made to fit its annotation (`Literal`, `set`, enums, nested types...)
    fails the attempt, and a field without a default must be present.
    """

    def __init__(self, cls: type):
        if not _is_typed_target(cls):
            raise TypeError(f"{cls!r} is not a dataclass or pydantic model type")
        self.cls = cls
        self._adapter = _adapter_for(cls)

    def build(self, tree: Any) -> Any:
        try:
            return self._adapter.validate_python(tree)
        except ValidationError as e:
            raise ShapeError(_describe(e)) from e

    def flatten(self, value: Any) -> Any:
        if not isinstance(value, self.cls):
            raise ShapeError(f"Expected {self.cls.__name__}, got {type(value).__name__}")
        # absent optionals are left out, like an encoder that skips nil values
        return _flatten(self._adapter.dump_python(value, exclude_none=True))

    def __repr__(self) -> str:
        return f"TypedShape({self.cls.__name__})"


def shape_for(target: Any) -> Shape:
    """Normalise what callers pass as a target shape."""
    if isinstance(target, Shape):
        return target
    if target is None:
        return TreeShape()
    if target in (dict, list):
        return TreeShape(target)
    if _is_typed_target(target):
        return TypedShape(target)
    raise TypeError(f"Unsupported target shape: {target!r}")


@functools.lru_cache(maxsize=None)
def _adapter_for(cls: type) -> TypeAdapter:
    return TypeAdapter(cls)


def _is_typed_target(cls: Any) -> bool:
    if not isinstance(cls, type):
        return False
    return dataclasses.is_dataclass(cls) or issubclass(cls, BaseModel)


def _describe(err: ValidationError) -> str:
    # one line per failed field: "inner.name: Input should be a valid string"
    parts = []
    for item in err.errors():
        where = ".".join(str(p) for p in item["loc"])
        parts.append(f"{where}: {item['msg']}" if where else item["msg"])
    return "; ".join(parts)


def _flatten(value: Any) -> Any:
    if isinstance(value, BaseModel):
        value = value.model_dump(exclude_none=True)
    elif dataclasses.is_dataclass(value) and not isinstance(value, type):
        value = {f.name: getattr(value, f.name) for f in dataclasses.fields(value)
                 if getattr(value, f.name) is not None}
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_flatten(v) for v in value]
    if isinstance(value, dict):
        return {k: _flatten(v) for k, v in value.items()}
    return value
