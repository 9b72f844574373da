"""
pytest configuration and fixtures.
"""

import socket
import threading
import time
import urllib.error
import urllib.request
from typing import Generator
import pytest

# Add src to path for imports
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from waiter import WaiterServer, ServerConfig
from waiter.http import HTTPRequest


@pytest.fixture
def site_dir(tmp_path: Path) -> Path:
    """An empty directory to serve files from."""
    return tmp_path


@pytest.fixture
def config(site_dir: Path) -> ServerConfig:
    """Test configuration rooted at site_dir."""
    return ServerConfig(root_dir=str(site_dir), log_level="WARNING")


@pytest.fixture
def server(config: ServerConfig) -> WaiterServer:
    """Server whose chain can be called directly, without sockets."""
    return WaiterServer(config)


@pytest.fixture
def make_request():
    """Factory for HTTPRequest objects."""
    def _make(target: str = "/", accept: str = None, method: str = "GET", **headers) -> HTTPRequest:
        if accept is not None:
            headers["Accept"] = accept
        return HTTPRequest.from_target(
            method, target, headers=headers, client_address=("127.0.0.1", 50000)
        )
    return _make


@pytest.fixture
def free_port() -> int:
    """Get a free port for testing."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(('127.0.0.1', 0))
        return s.getsockname()[1]


class LiveServer:
    """Runs a WaiterServer in a background thread."""

    def __init__(self, server: WaiterServer, port: int):
        self.server = server
        self.port = port
        self._thread: threading.Thread = None

    def url(self, path: str) -> str:
        return f"http://127.0.0.1:{self.port}{path}"

    def start(self):
        """Bind, start serving, and wait until a request gets an answer."""
        self.server.bind()
        self._thread = threading.Thread(target=self.server.run, daemon=True)
        self._thread.start()

        for _ in range(50):  # 5 seconds max
            try:
                urllib.request.urlopen(self.url("/"), timeout=1).close()
                return
            except urllib.error.HTTPError:
                return  # A 404 is still an answer
            except (urllib.error.URLError, ConnectionError):
                time.sleep(0.1)

        raise RuntimeError("Server failed to start")

    def stop(self):
        self.server.shutdown()

        if self._thread and self._thread.is_alive():
            self._thread.join(timeout=5.0)


@pytest.fixture
def live_server(site_dir: Path, free_port: int) -> Generator[LiveServer, None, None]:
    """A real listener on a free port serving site_dir."""
    server = WaiterServer(ServerConfig(
        address=f"127.0.0.1:{free_port}",
        root_dir=str(site_dir),
        log_level="WARNING",
    ))

    live = LiveServer(server, free_port)
    live.start()

    yield live

    live.stop()
