"""
=============================================================================
WAITER SERVER
=============================================================================

Glues the handler chain to a real HTTP listener.

=============================================================================
REQUEST FLOW
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                                                                      │
    │   ThreadingHTTPServer        accepts, one thread per connection     │
    │          │                                                           │
    │          ▼                                                           │
    │   WaiterRequestHandler       wire request → HTTPRequest             │
    │          │                                                           │
    │          ▼                                                           │
    │   MiddlewarePipeline         logging, Server, htmd type, cache      │
    │          │                                                           │
    │          ▼                                                           │
    │   SiteHandler.handle         file, index document, or 404           │
    │          │                                                           │
    │          ▼                                                           │
    │   WaiterRequestHandler       HTTPResponse → status, headers, body   │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

HTTP parsing and connection handling are the standard library's
http.server. waiter only supplies what happens between "request parsed"
and "response written".

=============================================================================
THREAD SAFETY
=============================================================================

Each request runs on its own thread. The chain holds no mutable state:
ServerConfig is frozen, the middleware only read their own settings, and
every HTTPRequest/HTTPResponse belongs to exactly one thread.

=============================================================================
"""

import logging
import shutil
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Optional

from .config import ServerConfig
from .handlers import SiteHandler
from .http import HTTPRequest, HTTPResponse, HTTPStatus, internal_error
from .http.response import cache_control_value
from .middleware import (
    MiddlewarePipeline,
    NextHandler,
    LoggingMiddleware,
    ServerHeaderMiddleware,
    HtmdContentTypeMiddleware,
    CacheControlMiddleware,
)


logger = logging.getLogger(__name__)


class WaiterRequestHandler(BaseHTTPRequestHandler):
    """
    Adapter between http.server and waiter's handler chain.

    Every method goes through the same chain; only HEAD differs, in that
    the body is not written.
    """

    # HTTP/1.1 enables keep-alive. Safe because every response we write
    # carries a Content-Length.
    protocol_version = "HTTP/1.1"

    server: "_Listener"

    def do_GET(self):
        self._dispatch(send_body=True)

    def do_HEAD(self):
        self._dispatch(send_body=False)

    do_POST = do_GET
    do_PUT = do_GET
    do_DELETE = do_GET
    do_PATCH = do_GET
    do_OPTIONS = do_GET

    def version_string(self) -> str:
        # Also used by http.server's own error pages (400, 414, 501...)
        return self.server.waiter.config.server_name

    def log_message(self, format, *args):
        logger.debug("%s - %s", self.address_string(), format % args)

    def log_error(self, format, *args):
        logger.warning("%s - %s", self.address_string(), format % args)

    def _discard_body(self) -> None:
        # Request bodies are never used, but they must be consumed or the
        # next request on a keep-alive connection would start mid-body.
        try:
            length = int(self.headers.get("Content-Length") or 0)
        except ValueError:
            self.close_connection = True
            return

        if length > 0:
            self.rfile.read(length)

    def _dispatch(self, send_body: bool) -> None:
        self._discard_body()

        request = HTTPRequest.from_target(
            self.command,
            self.path,
            headers=dict(self.headers.items()),
            version=self.request_version,
            client_address=tuple(self.client_address[:2]),
        )

        try:
            response = self.server.waiter.handle(request)
        except Exception as e:
            logger.exception(f"Handler error for {request.method} {request.path}: {e}")
            response = self.server.waiter.error_response()

        self._write_response(response, send_body)

    def _write_response(self, response: HTTPResponse, send_body: bool) -> None:
        try:
            status = response.status
            phrase = status.phrase if isinstance(status, HTTPStatus) else None
            self.send_response_only(int(status), phrase)

            for name, value in response.headers.items():
                self.send_header(name, value)

            if status != HTTPStatus.NOT_MODIFIED and not response.has_header("Content-Length"):
                self.send_header("Content-Length", str(response.content_length))
            if not response.has_header("Date"):
                self.send_header("Date", self.date_time_string())
            self.end_headers()

            if not send_body:
                return

            if response.is_streamed:
                shutil.copyfileobj(response.body, self.wfile)
            else:
                self.wfile.write(response.body)
        finally:
            response.close()


class _Listener(ThreadingHTTPServer):
    """ThreadingHTTPServer that knows which WaiterServer it serves."""

    daemon_threads = True

    def __init__(self, server_address, waiter: "WaiterServer"):
        self.waiter = waiter
        super().__init__(server_address, WaiterRequestHandler)


class WaiterServer:
    """
    Static file server for htmd sites.

    =========================================================================
    USAGE
    =========================================================================

        server = WaiterServer(ServerConfig(address="0.0.0.0:4000"))
        server.run()                    # blocks until Ctrl+C

        # Or without sockets, e.g. in tests:
        response = server.handle(HTTPRequest.from_target("GET", "/"))

    =========================================================================
    """

    def __init__(self, config: Optional[ServerConfig] = None):
        self.config = config or ServerConfig()
        self.config.validate()  # Fail-fast on invalid config

        self._site = SiteHandler(self.config)
        self._middleware = self._build_pipeline()

        # Full chain: middleware wrapping the site handler
        self._handler: NextHandler = self._middleware.wrap(self._site.handle)

        self._listener: Optional[_Listener] = None

    def _build_pipeline(self) -> MiddlewarePipeline:
        pipeline = MiddlewarePipeline()
        pipeline.use(
            LoggingMiddleware(log_format=self.config.log_format),
            ServerHeaderMiddleware(self.config.server_name),
            HtmdContentTypeMiddleware(),
            CacheControlMiddleware(
                asset_cache_seconds=self.config.asset_cache_seconds,
                content_cache_seconds=self.config.content_cache_seconds,
                asset_suffixes=self.config.asset_suffixes,
            ),
        )
        return pipeline

    @property
    def middleware(self) -> MiddlewarePipeline:
        return self._middleware

    def handle(self, request: HTTPRequest) -> HTTPResponse:
        """Run one request through the full chain."""
        return self._handler(request)

    def error_response(self) -> HTTPResponse:
        """
        The 500 sent when the chain itself raised.

        The header stages never ran for it, so Server and Cache-Control
        are filled in here.
        """
        return (internal_error()
            .set_header("Cache-Control", cache_control_value(self.config.content_cache_seconds))
            .set_header("Server", self.config.server_name))

    # =========================================================================
    # SERVER LIFECYCLE
    # =========================================================================

    def bind(self) -> None:
        """
        Create the listening socket.

        Raises:
            OSError: If the address is in use or cannot be bound.
        """
        self._listener = _Listener((self.config.host, self.config.port), self)
        logger.info(f"Bound to {self.config.address}")

    def run(self) -> None:
        """
        Start the server (blocking).

        Blocks until shutdown() is called or Ctrl+C is pressed.
        """
        self.setup_logging()

        if self._listener is None:
            self.bind()

        print(f"Now listening on {self.config.address}", flush=True)
        logger.info(f"Serving {self.config.root_path} on {self.config.address}")

        try:
            self._listener.serve_forever()
        except KeyboardInterrupt:
            logger.info("Received keyboard interrupt")
        finally:
            self._listener.server_close()
            self._listener = None
            logger.info("Server stopped")

    def shutdown(self) -> None:
        """Stop a running serve loop from another thread."""
        if self._listener is not None:
            self._listener.shutdown()

    def setup_logging(self) -> None:
        """Configure logging based on config."""
        level = self.config.log_level_number

        logging.basicConfig(
            level=level,
            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

        logging.getLogger("waiter").setLevel(level)
