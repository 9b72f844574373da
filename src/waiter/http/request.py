"""
=============================================================================
HTTP REQUEST
=============================================================================

The request as the handler chain sees it.

Parsing the wire format is the listener's job (http.server does it for
us). By the time a request reaches waiter's pipeline it is a plain
dataclass with the path already split from its query string and
percent-decoded, and header names normalized to lowercase.

    Listener (http.server)          HTTPRequest              Pipeline
    ──────────────────────   ──►   ─────────────   ──►   ─────────────────
    "GET /a%20b.htmd?x=1"          path="/a b.htmd"      resolve, fallback,
    "Accept: text/htmd"            headers={"accept":    rewrite headers
                                     "text/htmd"}

=============================================================================
"""

from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional, Tuple
from urllib.parse import unquote


@dataclass
class HTTPRequest:
    """
    Represents an inbound HTTP request.

    =========================================================================
    ATTRIBUTES
    =========================================================================

        method:         The HTTP method. Carried for logging only, waiter
                        never branches on it.

        path:           Decoded request path WITHOUT query string
                        "/docs/intro.htmd" not "/docs/intro.htmd?v=2"

        headers:        Dictionary of headers with LOWERCASE keys
                        {"accept": "text/htmd", ...}

        query_string:   Raw query string, kept for access logs

        client_address: Tuple of (ip, port) identifying the client

    =========================================================================
    """

    method: str
    path: str
    version: str = "HTTP/1.1"
    headers: Dict[str, str] = field(default_factory=dict)
    query_string: str = ""
    client_address: Tuple[str, int] = ("", 0)

    @classmethod
    def from_target(
        cls,
        method: str,
        target: str,
        headers: Optional[Mapping[str, str]] = None,
        version: str = "HTTP/1.1",
        client_address: Tuple[str, int] = ("", 0),
    ) -> "HTTPRequest":
        """
        Build a request from a raw request-target such as "/a%20b?x=1".

        The target is split on the first "?" only, so a leading "//" stays
        part of the path instead of being read as a host.

        HTTP headers are case-insensitive per RFC 7230, so names are
        lowercased here once instead of calling .lower() everywhere.
        """
        raw_path, _, query = target.partition("#")[0].partition("?")
        path = unquote(raw_path) or "/"

        normalized = {}
        for name, value in (headers or {}).items():
            normalized[name.lower()] = value

        return cls(
            method=method.upper(),
            path=path,
            version=version,
            headers=normalized,
            query_string=query,
            client_address=client_address,
        )

    def header(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Get a header value by case-insensitive name."""
        return self.headers.get(name.lower(), default)

    @property
    def accept(self) -> str:
        """The Accept header, defaulting to */* when the client sent none."""
        return self.header("accept") or "*/*"

    @property
    def user_agent(self) -> Optional[str]:
        return self.header("user-agent")
