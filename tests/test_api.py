"""End-to-end tests for the top-level API."""

import dataclasses
from typing import Literal, Set

import pytest

import fastserial
from fastserial import (
    DecodeFailure, EmptyInput, EncodeFailure, FormatKind, InvalidURL, IsDirectory, NotFound, Unreachable,
)
from fastserial.core.model import FetchResponse, TransportMetadata
from fastserial.io import AlwaysReachable, SyncFetcher


@dataclasses.dataclass
class Foo:
    bar_string: str
    bar_integer: int


@dataclasses.dataclass
class Tagged:
    kind: Literal["a", "b"]
    tags: Set[str]


class CountingTransport:
    def __init__(self, response: FetchResponse):
        self.response = response
        self.calls = 0

    async def __call__(self, url: str) -> FetchResponse:
        self.calls += 1
        return self.response


class TestEndToEnd:
    """Encode a value, then decode it back through every entry point."""

    def setup_method(self):
        self.value = Foo(bar_string="Test", bar_integer=30)

    def test_json(self):
        text = fastserial.to_json(self.value, indent=2)
        assert fastserial.loads(text, Foo).unwrap() == self.value

    def test_plist(self):
        text = fastserial.to_plist(self.value)
        res = fastserial.loads(text, Foo)
        assert res.format is FormatKind.PLIST
        assert res.unwrap() == self.value

    @pytest.mark.parametrize("fmt, suffix", [(FormatKind.JSON, "json"), (FormatKind.PLIST, "plist")])
    def test_file(self, tmp_path, fmt, suffix):
        path = tmp_path / f"foo.{suffix}"
        path.write_text(fastserial.dumps(self.value, fmt), encoding="utf-8")

        res = fastserial.load_file(path, Foo)
        assert res.format is fmt
        assert res.value == self.value

    def test_file_descaped(self, tmp_path):
        path = tmp_path / "foo.json"
        path.write_text('{\\"bar_string\\": \\"Test\\", \\"bar_integer\\": 30}', encoding="utf-8")

        assert not fastserial.load_file(path, Foo).success
        assert fastserial.load_file(path, Foo, descape=True).value == self.value

    def test_url(self, httpserver):
        httpserver.expect_request("/Test.plist").respond_with_data(
            fastserial.to_plist(self.value), content_type="application/xml"
        )
        res = fastserial.load_url(httpserver.url_for("/Test.plist"), Foo, reachability=AlwaysReachable())
        assert res.value == self.value

    def test_read_value_sync_url(self, httpserver):
        httpserver.expect_request("/Test.json").respond_with_data(
            fastserial.to_json(self.value), content_type="application/json"
        )
        res = fastserial.read_value_sync(httpserver.url_for("/Test.json"), Foo, reachability=AlwaysReachable())
        assert res.format is FormatKind.JSON
        assert res.value == self.value

    @pytest.mark.asyncio
    async def test_read_value_async(self, tmp_path):
        path = tmp_path / "foo.plist"
        path.write_text(fastserial.to_plist(self.value), encoding="utf-8")

        res = await fastserial.read_value(path, Foo)
        assert res.value == self.value


class TestFailures:
    """Acquisition failures come back as failed outcomes."""

    def test_empty_string(self):
        res = fastserial.loads("", Foo)
        assert res.empty_input
        assert res.error_kind == "EmptyInput"
        assert res.attempts == ()
        with pytest.raises(EmptyInput):
            res.unwrap()

    def test_empty_string_descape(self):
        res = fastserial.loads("", Foo, descape=True)
        assert res.empty_input
        assert res.error_kind == "EmptyInput"

    def test_missing_file(self, tmp_path):
        res = fastserial.load_file(tmp_path / "nope.json", Foo)
        assert not res.success
        assert res.error_kind == "NotFound"
        with pytest.raises(NotFound):
            res.unwrap()

    def test_directory(self, tmp_path):
        res = fastserial.load_file(tmp_path, Foo)
        assert res.error_kind == "IsDirectory"
        with pytest.raises(IsDirectory):
            res.unwrap()

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.json"
        path.write_text("   \n", encoding="utf-8")
        res = fastserial.load_file(path, Foo)
        assert res.empty_input
        assert res.attempts == ()

    def test_unreachable_url(self):
        transport = CountingTransport(FetchResponse(b"{}", TransportMetadata()))
        res = fastserial.load_url("https://example.com/x.json", Foo,
                                  fetcher=SyncFetcher(transport), reachability=lambda: False)
        assert res.error_kind == "Unreachable"
        assert transport.calls == 0
        with pytest.raises(Unreachable):
            res.unwrap()

    def test_invalid_url(self):
        res = fastserial.load_url("::not a url::", Foo)
        assert res.error_kind == "InvalidURL"
        with pytest.raises(InvalidURL):
            res.unwrap()

    def test_wrong_shape(self):
        res = fastserial.loads('{"bar_string": 1, "bar_integer": 30}', Foo)
        assert [a.format for a in res.attempts] == [FormatKind.JSON, FormatKind.PLIST]
        with pytest.raises(DecodeFailure, match="bar_string"):
            res.unwrap()

    def test_value_outside_field_type(self):
        """A Literal field only accepts its listed values."""
        res = fastserial.loads('{"kind": "zzz", "tags": ["x", "x"]}', Tagged)
        assert not res.success
        assert "kind:" in res.attempts[0].cause

        res = fastserial.loads('{"kind": "a", "tags": ["x", "x"]}', Tagged)
        assert res.value == Tagged("a", {"x"})

    def test_encode_failure(self):
        with pytest.raises(EncodeFailure):
            fastserial.to_plist({"nothing": None})

    def test_error_hierarchy(self):
        assert issubclass(fastserial.NotFound, fastserial.AcquisitionError)
        assert issubclass(fastserial.AcquisitionError, fastserial.SerializationError)
        assert issubclass(fastserial.DecodeFailure, fastserial.SerializationError)
