"""
=============================================================================
HTMD CONTENT NEGOTIATION
=============================================================================

htmd documents are served as text/htmd only to clients that ask for it.
Everyone else (browsers, curl) gets text/plain so the document is shown
instead of downloaded.

=============================================================================
IS THIS AN HTMD DOCUMENT?
=============================================================================

Either signal is enough:

    1. The request path ends with ".htmd"         GET /notes/today.htmd
    2. The response already says text/htmd        GET /  → index.htmd

The second one covers the root fallback, where the path is just "/" but
the index handler has already set Content-Type: text/htmd.

=============================================================================
DECISION
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │   Accept: text/htmd              →  Content-Type: text/htmd         │
    │   Accept: text/plain, */*        →  Content-Type: text/plain        │
    │   (no Accept header = "*/*")     →  Content-Type: text/plain        │
    └─────────────────────────────────────────────────────────────────────┘

Non-htmd responses are left alone.

=============================================================================
"""

import logging

from .base import ResponseMiddleware
from ..http.mime_types import HTMD_MIME_TYPE
from ..http.request import HTTPRequest
from ..http.response import HTTPResponse


logger = logging.getLogger(__name__)

FALLBACK_MIME_TYPE = "text/plain"


class HtmdContentTypeMiddleware(ResponseMiddleware):
    """Negotiates text/htmd vs text/plain for htmd documents."""

    def is_htmd(self, request: HTTPRequest, response: HTTPResponse) -> bool:
        if request.path.endswith(".htmd"):
            return True

        content_type = response.get_header("Content-Type", "")
        return HTMD_MIME_TYPE in content_type

    def accepts_htmd(self, request: HTTPRequest) -> bool:
        return HTMD_MIME_TYPE in request.accept

    def process_response(self, request: HTTPRequest, response: HTTPResponse) -> HTTPResponse:
        if not self.is_htmd(request, response):
            return response

        if self.accepts_htmd(request):
            return response.set_content_type(HTMD_MIME_TYPE)

        logger.debug(f"Client does not accept {HTMD_MIME_TYPE}, serving {request.path} as {FALLBACK_MIME_TYPE}")
        return response.set_content_type(FALLBACK_MIME_TYPE)
