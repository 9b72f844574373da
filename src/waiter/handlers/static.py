"""
=============================================================================
STATIC FILE RESOLUTION
=============================================================================

First stage of every request: is there a file on disk at this path?

    Request: GET /img/logo.png
                  │
                  ▼
    root_dir / "img/logo.png" ──resolve()──► /srv/site/img/logo.png
                  │
          inside root_dir? ── no ──► miss (logged, never served)
                  │ yes
            regular file?  ── no ──► miss (directories are never listed)
                  │ yes
          If-None-Match == ETag? ── yes ──► 304 Not Modified
                  │ no
                  ▼
           200 + open file stream

A miss is reported as None, not as an error response. Deciding what a
miss turns into (index document or 404) is the site handler's job.

=============================================================================
SECURITY: PATH TRAVERSAL
=============================================================================

    GET /../../../etc/passwd HTTP/1.1

    full_path = (root_dir / user_input).resolve()
    full_path.relative_to(root_dir)  # Raises if outside root!

resolve() follows symlinks and normalizes .. components, so both tricks
end up outside root_dir and are treated as a miss.

=============================================================================
"""

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from ..http.request import HTTPRequest
from ..http.response import (
    HTTPResponse, ResponseBuilder, HTTPStatus,
    format_http_date, not_modified,
)
from ..http.mime_types import get_mime_type


logger = logging.getLogger(__name__)


class StaticFileHandler:
    """
    Serves existing files below a root directory.

    =========================================================================
    USAGE
    =========================================================================

        static = StaticFileHandler("/srv/site")

        response = static.resolve(request)
        if response is None:
            ...  # fall back to something else

    =========================================================================
    """

    def __init__(self, root_dir: str):
        # Resolve to absolute path (important for the traversal check)
        self.root_dir = Path(root_dir).resolve()

        if not self.root_dir.is_dir():
            raise ValueError(f"Static root directory does not exist: {root_dir}")

    def resolve(self, request: HTTPRequest) -> Optional[HTTPResponse]:
        """
        Look up the request path on disk.

        Returns:
            A 200 response streaming the file, a 304 when the client's
            cached copy is current, or None when nothing can be served.
        """
        file_path = request.path.lstrip("/")
        if not file_path:
            return None

        full_path = self._safe_path(file_path)
        if full_path is None:
            return None

        if not full_path.is_file():
            logger.debug(f"No file for {request.path}")
            return None

        return self._serve_file(full_path, request)

    def _safe_path(self, file_path: str) -> Optional[Path]:
        try:
            full_path = (self.root_dir / file_path).resolve()
        except (OSError, ValueError) as e:
            # ValueError: embedded null byte
            logger.warning(f"Unresolvable path {file_path!r}: {e}")
            return None

        try:
            full_path.relative_to(self.root_dir)
        except ValueError:
            logger.warning(f"Path traversal attempt: {file_path}")
            return None

        return full_path

    def _serve_file(self, path: Path, request: HTTPRequest) -> Optional[HTTPResponse]:
        """
        Open a single file and describe it with headers.

        The ETag is built from mtime and size, a cheap fingerprint that
        changes whenever the file is rewritten.
        """
        try:
            stat = path.stat()
            etag = f'"{int(stat.st_mtime)}-{stat.st_size}"'

            if request.header("if-none-match") == etag:
                return not_modified(etag)

            handle = path.open("rb")
        except OSError as e:
            # Vanished, unreadable, or permission denied
            logger.warning(f"Cannot open {path}: {e}")
            return None

        mtime = datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc)

        return (ResponseBuilder()
            .status(HTTPStatus.OK)
            .file(handle, get_mime_type(path))
            .header("Content-Length", str(stat.st_size))
            .header("ETag", etag)
            .header("Last-Modified", format_http_date(mtime))
            .build())
