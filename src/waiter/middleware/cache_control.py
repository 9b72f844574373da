"""
=============================================================================
CACHE-CONTROL MIDDLEWARE
=============================================================================

Every response gets a public Cache-Control header, 404s included. The
max-age depends only on how the REQUEST PATH ends:

    ┌─────────────────────────────────────────────────────────────────────┐
    │   ASSETS   .ico .jpg .jpeg .png .webp .gif .svg .woff .woff2        │
    │            Cache-Control: public, max-age=31536000   (365 days)     │
    │                                                                      │
    │   CONTENT  everything else (documents, "/", misses)                 │
    │            Cache-Control: public, max-age=43200      (12 hours)     │
    └─────────────────────────────────────────────────────────────────────┘

The suffix match is a plain, case-sensitive endswith() on the path, the
same test for every response.

=============================================================================
"""

from typing import Sequence

from .base import ResponseMiddleware
from ..config import ASSET_CACHE_SECONDS, CONTENT_CACHE_SECONDS, ASSET_SUFFIXES
from ..http.request import HTTPRequest
from ..http.response import HTTPResponse, cache_control_value


class CacheControlMiddleware(ResponseMiddleware):
    """Sets Cache-Control from the request path's suffix."""

    def __init__(
        self,
        asset_cache_seconds: int = ASSET_CACHE_SECONDS,
        content_cache_seconds: int = CONTENT_CACHE_SECONDS,
        asset_suffixes: Sequence[str] = ASSET_SUFFIXES,
    ):
        self.asset_cache_seconds = asset_cache_seconds
        self.content_cache_seconds = content_cache_seconds
        self.asset_suffixes = tuple(asset_suffixes)

    def is_static_asset(self, path: str) -> bool:
        return path.endswith(self.asset_suffixes)

    def cache_time_for(self, path: str) -> int:
        if self.is_static_asset(path):
            return self.asset_cache_seconds
        return self.content_cache_seconds

    def process_response(self, request: HTTPRequest, response: HTTPResponse) -> HTTPResponse:
        max_age = self.cache_time_for(request.path)
        return response.set_header("Cache-Control", cache_control_value(max_age))
