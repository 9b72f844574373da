"""
=============================================================================
SERVER CONFIGURATION
=============================================================================

Centralized, immutable configuration for waiter.

=============================================================================
WHY A FROZEN DATACLASS?
=============================================================================

The cache durations, the asset suffix list and the index document table
are fixed data. They are built once at startup and then shared by every
request thread:

    ┌─────────────────────────────────────────────────────────────────────┐
    │                         ServerConfig                                │
    │   address            "localhost:4000"                               │
    │   root_dir           "."  (the working directory)                   │
    │   asset_cache_seconds     31536000  (365 days)                      │
    │   content_cache_seconds      43200  (12 hours)                      │
    │   asset_suffixes     .ico .jpg .jpeg .png .webp .gif .svg ...       │
    │   index_documents    index.htmd → index.txt → index.html → ...      │
    └───────────────┬─────────────────────────────────┬───────────────────┘
                    │ read-only                       │ read-only
                    ▼                                 ▼
              request thread 1                  request thread N

frozen=True means nobody can mutate it halfway through a request, so no
locking is needed.

=============================================================================
FAIL FAST
=============================================================================

validate() runs when the server is constructed. A typo in --address is
reported immediately instead of when the first socket call fails.

=============================================================================
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Tuple


# 365 days. Images, icons and fonts rarely change.
ASSET_CACHE_SECONDS = 31536000

# 12 hours. Documents change more often.
CONTENT_CACHE_SECONDS = 43200

ASSET_SUFFIXES = (
    ".ico", ".jpg", ".jpeg", ".png", ".webp", ".gif", ".svg", ".woff", ".woff2",
)

DEFAULT_ADDRESS = "localhost:4000"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
LOG_FORMATS = ("text", "json")


@dataclass(frozen=True)
class IndexDocument:
    """A root-path fallback file and the MIME type it is served with."""

    filename: str
    mime_type: str


# Priority order matters: the first one that exists on disk wins.
INDEX_DOCUMENTS = (
    IndexDocument("index.htmd", "text/htmd"),
    IndexDocument("index.txt", "text/plain"),
    IndexDocument("index.html", "text/html"),
    IndexDocument("index.xml", "text/xml"),
)


def parse_address(address: str) -> Tuple[str, int]:
    """
    Split "host:port" into its parts.

    The host may be empty (":4000" binds all interfaces) or a bracketed
    IPv6 literal ("[::1]:4000").

    Raises:
        ValueError: If the port is missing, not a number, or out of range.
    """
    host, sep, port_text = address.rpartition(":")
    if not sep:
        raise ValueError(f"Invalid address: {address!r}. Expected HOST:PORT.")

    if host.startswith("[") and host.endswith("]"):
        host = host[1:-1]

    try:
        port = int(port_text)
    except ValueError:
        raise ValueError(f"Invalid port in address {address!r}: {port_text!r}") from None

    if not 0 < port < 65536:
        raise ValueError(f"Invalid port: {port}. Must be 1-65535.")

    return host, port


@dataclass(frozen=True)
class ServerConfig:
    """
    Configuration for the waiter server.

    =========================================================================
    CONFIGURATION GROUPS
    =========================================================================

    NETWORK
    - address

    FILES
    - root_dir, index_documents

    CACHING
    - asset_cache_seconds, content_cache_seconds, asset_suffixes

    IDENTITY AND LOGGING
    - server_name, log_level, log_format

    =========================================================================
    """

    address: str = DEFAULT_ADDRESS
    """Where to listen, as HOST:PORT."""

    root_dir: str = "."
    """Directory files are served from. Defaults to the working directory."""

    asset_cache_seconds: int = ASSET_CACHE_SECONDS
    content_cache_seconds: int = CONTENT_CACHE_SECONDS

    asset_suffixes: Tuple[str, ...] = ASSET_SUFFIXES
    """Request paths ending with one of these get the long asset cache time."""

    index_documents: Tuple[IndexDocument, ...] = INDEX_DOCUMENTS

    server_name: str = "waiter (Python)"
    """Value of the Server header on every response."""

    log_level: str = "INFO"

    log_format: str = "text"
    """Access log format: 'text' (Apache-like) or 'json'."""

    @property
    def host(self) -> str:
        return parse_address(self.address)[0]

    @property
    def port(self) -> int:
        return parse_address(self.address)[1]

    @property
    def root_path(self) -> Path:
        """Absolute, symlink-resolved root directory."""
        return Path(self.root_dir).resolve()

    @property
    def log_level_number(self) -> int:
        return getattr(logging, self.log_level.upper(), logging.INFO)

    def validate(self) -> None:
        """
        Validate configuration values.

        Raises:
            ValueError: On the first invalid setting found.
        """
        parse_address(self.address)

        if not self.root_path.is_dir():
            raise ValueError(f"Root directory does not exist: {self.root_dir}")

        if self.asset_cache_seconds < 0 or self.content_cache_seconds < 0:
            raise ValueError("Cache durations must be >= 0")

        if not self.index_documents:
            raise ValueError("At least one index document is required")

        if self.log_level.upper() not in LOG_LEVELS:
            raise ValueError(f"Unknown log level: {self.log_level}")

        if self.log_format not in LOG_FORMATS:
            raise ValueError(f"log_format must be one of {', '.join(LOG_FORMATS)}")
