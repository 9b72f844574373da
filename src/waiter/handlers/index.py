"""
=============================================================================
INDEX DOCUMENTS
=============================================================================

What "/" serves when there is no direct file match.

The candidates are tried in a FIXED priority order and the first one that
exists wins. This is selection by path priority, not content
negotiation: index.htmd beats index.html even for a browser that only
accepts text/html. (The content-type middleware fixes up the header
afterwards.)

    ┌─────────────────────────────────────────────────────────────────────┐
    │   1. index.htmd   text/htmd                                         │
    │   2. index.txt    text/plain                                        │
    │   3. index.html   text/html                                         │
    │   4. index.xml    text/xml                                          │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
THE EXISTS-THEN-OPEN RACE
=============================================================================

find_index() checks existence, open_index() opens. Someone can delete the
file in between. Instead of letting that exception escape, open_index()
returns an IndexResult carrying either the response or the error, and
the caller decides what to do with it.

=============================================================================
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional

from ..config import IndexDocument
from ..http.response import HTTPResponse, ResponseBuilder, HTTPStatus


logger = logging.getLogger(__name__)


@dataclass
class IndexResult:
    """Outcome of opening an index document: exactly one field is set."""

    response: Optional[HTTPResponse] = None
    error: Optional[OSError] = None

    @property
    def ok(self) -> bool:
        return self.response is not None


def find_index(root_dir: Path, documents: Iterable[IndexDocument]) -> Optional[IndexDocument]:
    """Return the first index document present in root_dir, if any."""
    for document in documents:
        if (root_dir / document.filename).is_file():
            return document
    return None


def open_index(root_dir: Path, document: IndexDocument) -> IndexResult:
    """
    Open an index document as a 200 response with its paired MIME type.

    Never raises for filesystem errors; they come back in IndexResult.error.
    """
    path = root_dir / document.filename

    try:
        handle = path.open("rb")
    except OSError as e:
        return IndexResult(error=e)

    logger.debug(f"Serving index document {document.filename}")

    response = (ResponseBuilder()
        .status(HTTPStatus.OK)
        .file(handle, document.mime_type)
        .build())
    return IndexResult(response=response)
