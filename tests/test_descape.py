"""Tests for escape-sequence cleanup."""

import pytest

from fastserial.io.descape import descape


class TestDescape:
    """Test descape correctness and idempotence."""

    def test_example(self):
        """Backslash-quote and backslash-n become a quote and a newline."""
        assert descape('a\\"b\\nc') == 'a"b\nc'

    @pytest.mark.parametrize("raw, expected", [
        ('\\"quoted\\"', '"quoted"'),
        ("line\\r\\nbreak", "line\r\nbreak"),
        ("nul\\0byte", "nulbyte"),
        ("back\\\\slash", "back\\slash"),
        ("plain text", "plain text"),
        ("", ""),
    ])
    def test_replacements(self, raw, expected):
        assert descape(raw) == expected

    def test_escapes_before_backslash_collapse(self):
        """An escaped backslash does not swallow the quote escape next to it."""
        assert descape('{\\"k\\": \\"v\\"}') == '{"k": "v"}'

    def test_collapse_exposing_escape(self):
        """A collapse that exposes a new escape is processed too."""
        assert descape("\\\\\\\\n") == "\\\n"

    @pytest.mark.parametrize("raw", [
        'a\\"b\\nc',
        "\\\\\\\\n",
        "\\\\\\\\\\\\\\\"",
        "\\",
        "trailing\\",
        "\\\\0\\\\r\\\\n",
        "mixed \\x \\t \\\\ done",
        "no escapes at all",
    ])
    def test_idempotent(self, raw):
        once = descape(raw)
        assert descape(once) == once

    def test_plist_payload(self):
        """A double-encoded plist decodes back to valid XML."""
        raw = '<?xml version=\\"1.0\\" encoding=\\"UTF-8\\"?>\\n<plist version=\\"1.0\\"><true/></plist>'
        assert descape(raw) == '<?xml version="1.0" encoding="UTF-8"?>\n<plist version="1.0"><true/></plist>'
