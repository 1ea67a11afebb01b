from __future__ import annotations
import base64
import dataclasses
import datetime
from typing import Any, Dict

from .model import DecodeOutcome


def jsonable(tree: Any) -> Any:
    """Return a copy of a decoded tree that `json.dumps` accepts.
    Plist-only scalars (data, dates) are turned into strings.
    """
    if dataclasses.is_dataclass(tree) and not isinstance(tree, type):
        return jsonable(dataclasses.asdict(tree))
    if isinstance(tree, dict):
        return {str(k): jsonable(v) for k, v in tree.items()}
    if isinstance(tree, (list, tuple)):
        return [jsonable(v) for v in tree]
    if isinstance(tree, (bytes, bytearray)):
        return base64.b64encode(bytes(tree)).decode()
    if isinstance(tree, datetime.datetime):
        return tree.isoformat()
    return tree


def outcome_asdict(res: DecodeOutcome, *, source: str | None = None) -> Dict[str, Any]:
    """Return a JSON-serialisable record (skip None) of a decode outcome."""
    record: Dict[str, Any] = {"success": res.success}
    if source is not None:
        record["source"] = source
    if res.success:
        record["format"] = res.format.value if res.format else None
        record["value"] = jsonable(res.value)
    else:
        record["error"] = res.error or _attempts_message(res)
    if res.attempts:
        record["attempts"] = [{"format": a.format.value, "cause": a.cause} for a in res.attempts]
    return {k: v for k, v in record.items() if v is not None}


def _attempts_message(res: DecodeOutcome) -> str:
    if res.empty_input:
        return "Empty input, no format attempted"
    return "; ".join(f"{a.format.value}: {a.cause}" for a in res.attempts) or "No format attempted"
