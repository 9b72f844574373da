"""
=============================================================================
HTTP STATUS CODES
=============================================================================

The status codes waiter actually produces, with their reason phrases.

=============================================================================
STATUS CODE CLASSES
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │   2xx SUCCESS       The file (or index document) was found          │
    │   3xx REDIRECTION   304: the client's cached copy is still fresh    │
    │   4xx CLIENT ERROR  404: nothing on disk matches the path           │
    │   5xx SERVER ERROR  500: the handler chain blew up                  │
    └─────────────────────────────────────────────────────────────────────┘

Static-file resolution either answers with a 200 or 304, or reports a
miss. Only a miss sends the request down the fallback path (index
document or 404).

=============================================================================
"""

from enum import IntEnum


class HTTPStatus(IntEnum):
    """
    HTTP status codes and reason phrases.

    This enum extends IntEnum, so status codes can be used as integers:

        >>> HTTPStatus.OK == 200
        True
        >>> HTTPStatus.NOT_FOUND.phrase
        'Not Found'
    """

    # =========================================================================
    # 2xx SUCCESS
    # =========================================================================
    OK = 200

    # =========================================================================
    # 3xx REDIRECTION
    # =========================================================================
    NOT_MODIFIED = 304          # Cached version is still valid

    # =========================================================================
    # 4xx CLIENT ERRORS
    # =========================================================================
    NOT_FOUND = 404

    # =========================================================================
    # 5xx SERVER ERRORS
    # =========================================================================
    INTERNAL_SERVER_ERROR = 500

    @property
    def phrase(self) -> str:
        """
        Get the reason phrase for this status code.

            HTTP/1.1 404 Not Found
                     ─── ─────────
                      │      └── Reason phrase
                      └───────── Status code
        """
        return _STATUS_PHRASES.get(self, "Unknown")


_STATUS_PHRASES = {
    HTTPStatus.OK: "OK",
    HTTPStatus.NOT_MODIFIED: "Not Modified",
    HTTPStatus.NOT_FOUND: "Not Found",
    HTTPStatus.INTERNAL_SERVER_ERROR: "Internal Server Error",
}
