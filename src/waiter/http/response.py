"""
=============================================================================
HTTP RESPONSE
=============================================================================

Response objects flowing back through the handler chain.

=============================================================================
RESPONSE ANATOMY
=============================================================================

    HTTP/1.1 200 OK                          ← status
    Content-Type: text/htmd                  ┐
    Cache-Control: public, max-age=43200     │ headers (one value per name)
    Server: waiter (Python)                  ┘
                                             ← empty line
    # Hello from index.htmd                  ← body (bytes or open file)

=============================================================================
UNIQUE HEADERS
=============================================================================

Every header waiter rewrites is a "unique" header: setting it REPLACES
any previous value, whatever case the previous name was written in.

    response.set_header("content-type", "text/plain")
    response.set_header("Content-Type", "text/htmd")

    headers == {"Content-Type": "text/htmd"}     (not two entries!)

This is what makes the header rewriting middleware idempotent: running
the cache, content-type and server stages twice yields the same headers
as running them once.

=============================================================================
FILE BODIES
=============================================================================

Static files are not slurped into memory. The body may be an open binary
file object which the listener streams to the socket and then closes:

    ┌──────────────┐   open()    ┌──────────────┐  copyfileobj  ┌────────┐
    │  index.htmd  │ ──────────► │ HTTPResponse │ ────────────► │ socket │
    └──────────────┘             │  body=<file> │               └────────┘
                                 └──────────────┘

=============================================================================
"""

import os
from dataclasses import dataclass, field
from datetime import datetime
from typing import BinaryIO, Dict, Optional, Union

from .status_codes import HTTPStatus


Body = Union[bytes, BinaryIO]


@dataclass
class HTTPResponse:
    """
    Represents an HTTP response to be sent to the client.

    This is a simple data container. Use ResponseBuilder or the
    convenience functions at the bottom of this module to create one.
    """

    status: HTTPStatus = HTTPStatus.OK
    headers: Dict[str, str] = field(default_factory=dict)
    body: Body = b""

    @property
    def is_streamed(self) -> bool:
        """True when the body is an open file rather than bytes."""
        return not isinstance(self.body, (bytes, bytearray))

    # =========================================================================
    # HEADERS
    # =========================================================================

    def _find_header(self, name: str) -> Optional[str]:
        lowered = name.lower()
        for key in self.headers:
            if key.lower() == lowered:
                return key
        return None

    def get_header(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Get a header value by case-insensitive name."""
        key = self._find_header(name)
        if key is None:
            return default
        return self.headers[key]

    def has_header(self, name: str) -> bool:
        return self._find_header(name) is not None

    def remove_header(self, name: str) -> "HTTPResponse":
        """Remove every case-variant of a header."""
        lowered = name.lower()
        for key in [k for k in self.headers if k.lower() == lowered]:
            del self.headers[key]
        return self

    def set_header(self, name: str, value: str) -> "HTTPResponse":
        """
        Set a unique response header.

        Any existing header with the same name (compared case-insensitively)
        is dropped first, so there is at most one value per name.

        Returns self for method chaining:
            response.set_header("Server", "waiter").set_header("X-A", "1")
        """
        self.remove_header(name)
        self.headers[name] = value
        return self

    def set_content_type(self, content_type: str) -> "HTTPResponse":
        """Set the Content-Type header."""
        return self.set_header("Content-Type", content_type)

    # =========================================================================
    # BODY
    # =========================================================================

    @property
    def content_length(self) -> int:
        """
        Length of the body in bytes.

        For file bodies this is the remaining size from the current file
        position, which is the number of bytes the listener will send.
        """
        if not self.is_streamed:
            return len(self.body)

        stat = os.fstat(self.body.fileno())
        return max(stat.st_size - self.body.tell(), 0)

    def read_body(self) -> bytes:
        """
        Read the whole body into memory.

        File bodies are consumed and closed, so call this at most once.
        """
        if not self.is_streamed:
            return bytes(self.body)

        try:
            return self.body.read()
        finally:
            self.body.close()

    def close(self) -> None:
        """Release the file handle of a streamed body, if any."""
        if self.is_streamed:
            self.body.close()


class ResponseBuilder:
    """
    Fluent builder for constructing HTTP responses.

        response = (ResponseBuilder()
            .status(HTTPStatus.OK)
            .file(handle, "text/htmd")
            .header("ETag", etag)
            .build())

    Each method returns `self` except build().
    """

    def __init__(self):
        self._status = HTTPStatus.OK
        self._headers: Dict[str, str] = {}
        self._body: Body = b""

    def status(self, status: HTTPStatus) -> "ResponseBuilder":
        self._status = status
        return self

    def header(self, name: str, value: str) -> "ResponseBuilder":
        lowered = name.lower()
        for key in [k for k in self._headers if k.lower() == lowered]:
            del self._headers[key]
        self._headers[name] = value
        return self

    def content_type(self, content_type: str) -> "ResponseBuilder":
        return self.header("Content-Type", content_type)

    def text(self, text: str, content_type: str = "text/plain; charset=utf-8") -> "ResponseBuilder":
        """Set a plain text response body."""
        self._body = text.encode("utf-8")
        return self.content_type(content_type)

    def file(self, handle: BinaryIO, content_type: str) -> "ResponseBuilder":
        """
        Stream an already-open binary file as the body.

        The handle is owned by the response from here on.
        """
        self._body = handle
        return self.content_type(content_type)

    def build(self) -> HTTPResponse:
        return HTTPResponse(
            status=self._status,
            headers=self._headers,
            body=self._body,
        )


# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================

def cache_control_value(max_age: int) -> str:
    return f"public, max-age={max_age}"


def format_http_date(dt: datetime) -> str:
    """
    Format a datetime as an HTTP-date (RFC 7231).

    Format: Day, DD Mon YYYY HH:MM:SS GMT
    Example: Wed, 01 Jan 2026 12:00:00 GMT

    HTTP dates are ALWAYS in GMT (UTC), never local time.
    """
    days = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
    months = ["Jan", "Feb", "Mar", "Apr", "May", "Jun",
              "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]

    return (
        f"{days[dt.weekday()]}, "
        f"{dt.day:02d} {months[dt.month - 1]} {dt.year} "
        f"{dt.hour:02d}:{dt.minute:02d}:{dt.second:02d} GMT"
    )


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================

NOT_FOUND_MESSAGE = "Resource was not found on this server"


def not_found(message: str = NOT_FOUND_MESSAGE) -> HTTPResponse:
    """
    Create a 404 Not Found response with a plain-text body.

    The default body is the fixed message every miss gets:
    "Resource was not found on this server".
    """
    return ResponseBuilder().status(HTTPStatus.NOT_FOUND).text(message).build()


def not_modified(etag: str) -> HTTPResponse:
    """Create a 304 Not Modified response (no body)."""
    return (ResponseBuilder()
        .status(HTTPStatus.NOT_MODIFIED)
        .header("ETag", etag)
        .build())


def internal_error(message: str = "Internal Server Error") -> HTTPResponse:
    """
    Create a 500 Internal Server Error response.

    Don't expose internal details in the message.
    """
    return (ResponseBuilder()
        .status(HTTPStatus.INTERNAL_SERVER_ERROR)
        .text(message)
        .build())
