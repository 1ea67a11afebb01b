"""Undo literal backslash escapes left behind by double-encoding tools."""

# escape sequences first, the bare backslash collapse last
_REPLACEMENTS = (
    ('\\"', '"'),
    ("\\n", "\n"),
    ("\\r", "\r"),
    ("\\0", ""),
    ("\\\\", "\\"),
)


def _descape_once(text: str) -> str:
    for old, new in _REPLACEMENTS:
        text = text.replace(old, new)
    return text


def descape(text: str) -> str:
    """Replace \\" \\n \\r \\0 and \\\\ with the characters they stand for.

    The pass is repeated until nothing changes, since collapsing ``\\\\`` can
    expose a new escape. Each replacement shortens the text, so this ends, and
    the result is a fixed point: ``descape(descape(s)) == descape(s)``.
    """
    while True:
        result = _descape_once(text)
        if result == text:
            return result
        text = result
