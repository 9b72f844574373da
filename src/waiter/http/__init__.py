"""
=============================================================================
HTTP MESSAGE TYPES
=============================================================================

The request and response values passed through waiter's handler chain.
Wire parsing and socket I/O belong to the listener (http.server); this
package only models what the pipeline reads and rewrites.

    ┌─────────────────────────────────────────────────────────────────────┐
    │ request.py       HTTPRequest: path, lowercased headers, Accept      │
    │ response.py      HTTPResponse with unique (replace-on-set) headers  │
    │ status_codes.py  HTTPStatus with reason phrases                     │
    │ mime_types.py    Extension → MIME table, including .htmd            │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
"""

from .request import HTTPRequest
from .response import (
    HTTPResponse,
    ResponseBuilder,
    NOT_FOUND_MESSAGE,
    not_found,      # 404 Not Found
    not_modified,   # 304 Not Modified
    internal_error, # 500 Internal Server Error
)
from .status_codes import HTTPStatus
from .mime_types import HTMD_MIME_TYPE, get_mime_type

__all__ = [
    "HTTPRequest",
    "HTTPResponse",
    "ResponseBuilder",
    "NOT_FOUND_MESSAGE",
    "not_found",
    "not_modified",
    "internal_error",
    "HTTPStatus",
    "HTMD_MIME_TYPE",
    "get_mime_type",
]
