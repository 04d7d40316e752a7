"""Unit tests for command, HTTP and file sources"""
import time

import httpx
import pytest

from collectors import CommandSource, FileSource, HttpSource, SourceFetchError
from collectors import command_source, http_source


class TestCommandSource:
    def test_returns_stdout(self):
        assert CommandSource("echo 42").fetch() == "42\n"

    def test_merges_stderr(self):
        out = CommandSource("echo out; echo err 1>&2").fetch()
        assert "out" in out
        assert "err" in out

    def test_runs_through_shell(self):
        assert CommandSource("printf '%s' 'a,b' | cut -d, -f2").fetch() == "b"

    def test_nonzero_exit_carries_output(self):
        with pytest.raises(SourceFetchError) as exc_info:
            CommandSource("echo broken; exit 3").fetch()
        assert "exit status 3" in str(exc_info.value)
        assert "broken" in str(exc_info.value)

    def test_timeout(self, monkeypatch):
        monkeypatch.setattr(command_source, "COMMAND_TIMEOUT", 0.2)
        with pytest.raises(SourceFetchError, match="timed out"):
            CommandSource("exec sleep 5").fetch()

    def test_null_byte_in_command(self):
        with pytest.raises(SourceFetchError):
            CommandSource("echo a\x00b").fetch()

    def test_locator(self):
        assert CommandSource("uptime").locator == "uptime"


class TestHttpSource:
    def test_returns_body(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(200, text='{"active": 7}'))
        assert HttpSource("http://status.local/", transport=transport).fetch() == '{"active": 7}'

    def test_error_status_is_not_validated(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(503, text="unavailable"))
        assert HttpSource("http://status.local/", transport=transport).fetch() == "unavailable"

    def test_sends_get(self):
        seen = []

        def handler(request):
            seen.append((request.method, str(request.url)))
            return httpx.Response(200, text="1")

        HttpSource("http://status.local/count", transport=httpx.MockTransport(handler)).fetch()
        assert seen == [("GET", "http://status.local/count")]

    def test_transport_error(self):
        def handler(request):
            raise httpx.ConnectError("Connection refused", request=request)

        with pytest.raises(SourceFetchError, match="Connection refused"):
            HttpSource("http://status.local/", transport=httpx.MockTransport(handler)).fetch()

    def test_timeout(self):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        with pytest.raises(SourceFetchError):
            HttpSource("http://status.local/", transport=httpx.MockTransport(handler)).fetch()

    def test_invalid_url(self):
        with pytest.raises(SourceFetchError):
            HttpSource("http://[::1").fetch()

    def test_whole_request_is_bounded(self, monkeypatch):
        monkeypatch.setattr(http_source, "HTTP_TIMEOUT", 0.5)

        def trickle():
            for _ in range(10):
                time.sleep(0.2)
                yield b"1"

        transport = httpx.MockTransport(lambda request: httpx.Response(200, content=trickle()))
        started = time.monotonic()
        with pytest.raises(SourceFetchError, match="timed out"):
            HttpSource("http://status.local/", transport=transport).fetch()
        assert time.monotonic() - started < 1.5

    def test_decodes_declared_charset(self):
        headers = {"content-type": "text/plain; charset=latin-1"}
        transport = httpx.MockTransport(
            lambda request: httpx.Response(200, content="21\u00b0".encode("latin-1"), headers=headers)
        )
        assert HttpSource("http://status.local/", transport=transport).fetch() == "21\u00b0"


class TestFileSource:
    def test_reads_file(self, tmp_path):
        path = tmp_path / "value.txt"
        path.write_text("3.14\n")
        assert FileSource(str(path)).fetch() == "3.14\n"

    def test_missing_file(self, tmp_path):
        with pytest.raises(SourceFetchError) as exc_info:
            FileSource(str(tmp_path / "missing")).fetch()
        assert isinstance(exc_info.value.__cause__, FileNotFoundError)

    def test_directory_is_an_error(self, tmp_path):
        with pytest.raises(SourceFetchError):
            FileSource(str(tmp_path)).fetch()

    def test_null_byte_in_path(self):
        with pytest.raises(SourceFetchError):
            FileSource("/tmp/a\x00b").fetch()
