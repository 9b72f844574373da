"""
=============================================================================
WAITER
=============================================================================

A small static file server for htmd sites.

    $ cd my-site/
    $ waiter --address localhost:4000
    Now listening on localhost:4000

What it does, per request:

    1. Serve the file at the request path, if there is one
    2. For "/", fall back to index.htmd, index.txt, index.html, index.xml
    3. Otherwise answer 404 "Resource was not found on this server"
    4. Cache-Control: 365 days for images/fonts, 12 hours for the rest
    5. text/htmd only for clients that Accept it, text/plain otherwise
    6. Server: waiter (Python)

=============================================================================
QUICK START
=============================================================================

    from waiter import WaiterServer, ServerConfig

    WaiterServer(ServerConfig(address="0.0.0.0:8000")).run()

=============================================================================
"""

__version__ = "1.0.0"

from .config import ServerConfig, IndexDocument, parse_address
from .server import WaiterServer
from .http import HTTPRequest, HTTPResponse, HTTPStatus

__all__ = [
    "__version__",
    "ServerConfig",
    "IndexDocument",
    "parse_address",
    "WaiterServer",
    "HTTPRequest",
    "HTTPResponse",
    "HTTPStatus",
]
