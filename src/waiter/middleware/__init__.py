"""
=============================================================================
MIDDLEWARE
=============================================================================

Response header policy, applied around the site handler:

    ┌─────────────────────────────────────────────────────────────────────┐
    │   LoggingMiddleware          access log line, request timing        │
    │   ServerHeaderMiddleware     Server: waiter (Python)                │
    │   HtmdContentTypeMiddleware  text/htmd or text/plain for htmd       │
    │   CacheControlMiddleware     public, max-age by path suffix         │
    │            │                                                         │
    │            ▼                                                         │
    │   SiteHandler.handle         file, index document, or 404           │
    └─────────────────────────────────────────────────────────────────────┘

The three header stages only ever replace headers, so running the chain
on its own output is a no-op.

=============================================================================
"""

from .base import Middleware, ResponseMiddleware, MiddlewarePipeline, NextHandler
from .logging import LoggingMiddleware
from .cache_control import CacheControlMiddleware
from .content_type import HtmdContentTypeMiddleware
from .server_header import ServerHeaderMiddleware

__all__ = [
    # Base classes
    "Middleware",
    "ResponseMiddleware",
    "MiddlewarePipeline",
    "NextHandler",

    # Built-in middleware
    "LoggingMiddleware",
    "CacheControlMiddleware",
    "HtmdContentTypeMiddleware",
    "ServerHeaderMiddleware",
]
