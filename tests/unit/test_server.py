"""
End-to-end tests against a real listener, plus the CLI.
"""

import http.client
import socket
import urllib.error
import urllib.request

import pytest

from waiter import WaiterServer, ServerConfig
from waiter.__main__ import main, build_parser


def fetch(url: str, method: str = "GET", data: bytes = None, **headers):
    """Return (status, headers, body), treating HTTP errors as responses."""
    request = urllib.request.Request(url, data=data, method=method, headers=headers)
    try:
        with urllib.request.urlopen(request, timeout=5) as response:
            return response.status, response.headers, response.read()
    except urllib.error.HTTPError as e:
        with e:
            return e.code, e.headers, e.read()


class TestLiveServer:
    """Requests over a real socket."""

    def test_htmd_index(self, live_server, site_dir):
        (site_dir / "index.htmd").write_bytes(b"# Welcome")

        status, headers, body = fetch(live_server.url("/"), Accept="text/htmd")

        assert status == 200
        assert body == b"# Welcome"
        assert headers["Content-Type"] == "text/htmd"
        assert headers["Cache-Control"] == "public, max-age=43200"
        assert headers["Server"] == "waiter (Python)"
        assert headers["Content-Length"] == "9"
        assert headers.get_all("Server") == ["waiter (Python)"]
        assert headers["Date"]

    def test_htmd_index_downgraded(self, live_server, site_dir):
        (site_dir / "index.htmd").write_bytes(b"# Welcome")

        status, headers, body = fetch(live_server.url("/"), Accept="text/plain")

        assert status == 200
        assert headers["Content-Type"] == "text/plain"
        assert body == b"# Welcome"

    def test_asset(self, live_server, site_dir):
        (site_dir / "logo.png").write_bytes(b"\x89PNG\r\n")

        status, headers, body = fetch(live_server.url("/logo.png"))

        assert status == 200
        assert headers["Content-Type"] == "image/png"
        assert headers["Cache-Control"] == "public, max-age=31536000"
        assert body == b"\x89PNG\r\n"

    def test_not_found(self, live_server):
        status, headers, body = fetch(live_server.url("/nothing/here"))

        assert status == 404
        assert body == b"Resource was not found on this server"
        assert headers["Cache-Control"] == "public, max-age=43200"
        assert headers["Server"] == "waiter (Python)"

    def test_head_has_no_body(self, live_server, site_dir):
        (site_dir / "page.html").write_bytes(b"<p>hello</p>")

        status, headers, body = fetch(live_server.url("/page.html"), method="HEAD")

        assert status == 200
        assert headers["Content-Length"] == "12"
        assert body == b""

    def test_method_does_not_change_result(self, live_server, site_dir):
        (site_dir / "index.txt").write_bytes(b"hello")

        status, headers, body = fetch(live_server.url("/"), method="POST", data=b"ignored")

        assert status == 200
        assert body == b"hello"

    def test_conditional_request(self, live_server, site_dir):
        (site_dir / "a.css").write_bytes(b"p{}")

        _, headers, _ = fetch(live_server.url("/a.css"))
        status, _, body = fetch(live_server.url("/a.css"), **{"If-None-Match": headers["ETag"]})

        assert status == 304
        assert body == b""

    def test_keep_alive_connection_reused(self, live_server, site_dir):
        (site_dir / "a.txt").write_bytes(b"one")

        conn = http.client.HTTPConnection("127.0.0.1", live_server.port, timeout=5)
        try:
            for _ in range(2):
                conn.request("GET", "/a.txt")
                response = conn.getresponse()
                assert response.read() == b"one"
        finally:
            conn.close()

    def test_handler_error_is_500(self, live_server, monkeypatch):
        def boom(request):
            raise RuntimeError("boom")

        monkeypatch.setattr(live_server.server, "_handler", boom)

        status, headers, body = fetch(live_server.url("/"))

        assert status == 500
        assert body == b"Internal Server Error"
        assert headers["Cache-Control"] == "public, max-age=43200"
        assert headers.get_all("Server") == ["waiter (Python)"]


class TestErrorResponse:
    """The 500 written when the handler chain raises."""

    def test_carries_policy_headers(self, server):
        response = server.error_response()

        assert response.status == 500
        assert response.get_header("Cache-Control") == "public, max-age=43200"
        assert response.get_header("Server") == "waiter (Python)"

    def test_uses_configured_values(self, site_dir):
        server = WaiterServer(ServerConfig(
            root_dir=str(site_dir), content_cache_seconds=60, server_name="custom",
        ))

        response = server.error_response()

        assert response.get_header("Cache-Control") == "public, max-age=60"
        assert response.get_header("Server") == "custom"


class TestStartup:
    """Startup failures are reported, not raised from a request."""

    def test_invalid_root_rejected(self, tmp_path):
        with pytest.raises(ValueError):
            WaiterServer(ServerConfig(root_dir=str(tmp_path / "missing")))

    def test_address_in_use(self, site_dir):
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as taken:
            taken.bind(("127.0.0.1", 0))
            taken.listen(1)
            port = taken.getsockname()[1]

            server = WaiterServer(ServerConfig(
                address=f"127.0.0.1:{port}", root_dir=str(site_dir),
            ))

            with pytest.raises(OSError):
                server.bind()


class TestCLI:
    """Tests for the command-line entry point."""

    def test_defaults(self):
        args = build_parser().parse_args([])

        assert args.address == "localhost:4000"
        assert args.log_level == "INFO"

    def test_short_address_flag(self):
        args = build_parser().parse_args(["-a", "0.0.0.0:8080"])
        assert args.address == "0.0.0.0:8080"

    def test_invalid_address_exits_1(self, capsys):
        assert main(["--address", "localhost"]) == 1
        assert "Error:" in capsys.readouterr().err

    def test_bind_failure_exits_1(self, capsys):
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as taken:
            taken.bind(("127.0.0.1", 0))
            taken.listen(1)
            port = taken.getsockname()[1]

            assert main(["-a", f"127.0.0.1:{port}"]) == 1

        assert "Error:" in capsys.readouterr().err

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])

        assert exc_info.value.code == 0
        assert "waiter" in capsys.readouterr().out
