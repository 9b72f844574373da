"""
=============================================================================
SITE HANDLER
=============================================================================

The innermost handler of the chain: turns a request into a response
body and status. Header policy (caching, htmd negotiation, Server) is
applied afterwards by middleware.

    request
       │
       ▼
    StaticFileHandler.resolve() ── hit ──────────────────────► response
       │ miss
       ▼
    path == "/" ? ── no ─────────────────────────────────────► 404
       │ yes
       ▼
    find_index() ── none ────────────────────────────────────► 404
       │ found
       ▼
    open_index() ── error (file vanished) ── logged ─────────► 404
       │ ok
       ▼
    200 + index document

=============================================================================
"""

import logging

from ..config import ServerConfig
from ..http.request import HTTPRequest
from ..http.response import HTTPResponse, not_found
from .index import find_index, open_index
from .static import StaticFileHandler


logger = logging.getLogger(__name__)


class SiteHandler:
    """Static lookup with index-document fallback for the root path."""

    def __init__(self, config: ServerConfig):
        self.config = config
        self.root_dir = config.root_path
        self.static = StaticFileHandler(str(self.root_dir))

    def handle(self, request: HTTPRequest) -> HTTPResponse:
        response = self.static.resolve(request)
        if response is not None:
            return response

        if request.path == "/":
            return self.serve_index()

        return not_found()

    def serve_index(self) -> HTTPResponse:
        """Serve the highest-priority index document, or 404 if none."""
        document = find_index(self.root_dir, self.config.index_documents)
        if document is None:
            logger.debug("No index document found")
            return not_found()

        result = open_index(self.root_dir, document)
        if not result.ok:
            logger.warning(
                f"Index document {document.filename} disappeared before it "
                f"could be opened: {result.error}"
            )
            return not_found()

        return result.response
