import json

import pytest
from typer.testing import CliRunner

from fastserial.cli import app
from fastserial.io import reachability

PLIST = b"""<?xml version="1.0" encoding="UTF-8"?>
<plist version="1.0"><dict><key>bar_integer</key><integer>30</integer><key>bar_string</key><string>Test</string></dict></plist>
"""


class TestCLIURL:
    """Test the CLI functionality with remote URLs."""

    @pytest.fixture
    def runner(self):
        """CLI test runner."""
        return CliRunner()

    def test_remote_file(self, runner, httpserver):
        """A remote plist is fetched and printed as JSON."""
        httpserver.expect_request("/Test.plist").respond_with_data(PLIST, content_type="application/xml")
        result = runner.invoke(app, ["--no-reachability-check", httpserver.url_for("/Test.plist")])

        assert result.exit_code == 0
        assert json.loads(result.stdout) == {"bar_string": "Test", "bar_integer": 30}

    def test_remote_with_reachability_check(self, runner, httpserver, monkeypatch):
        """Without the flag the network is checked once before the GET."""
        monkeypatch.setattr(reachability, "DEFAULT_CHECK_URL", httpserver.url_for("/ping"))
        httpserver.expect_request("/ping", method="HEAD").respond_with_data(b"")
        httpserver.expect_request("/Test.plist").respond_with_data(PLIST, content_type="application/xml")
        result = runner.invoke(app, [httpserver.url_for("/Test.plist")])

        assert result.exit_code == 0
        assert json.loads(result.stdout)["bar_integer"] == 30
        assert [req.method for req, _ in httpserver.log] == ["HEAD", "GET"]

    def test_unreachable(self, runner, httpserver, monkeypatch):
        monkeypatch.setattr(reachability, "DEFAULT_CHECK_URL", "http://127.0.0.1:1/")
        httpserver.expect_request("/Test.plist").respond_with_data(PLIST, content_type="application/xml")
        result = runner.invoke(app, [httpserver.url_for("/Test.plist")])

        assert result.exit_code == 1
        assert "Network unreachable" in result.output
        assert httpserver.log == []
