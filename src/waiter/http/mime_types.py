"""
=============================================================================
MIME TYPE DETECTION
=============================================================================

Maps file extensions to MIME types for the Content-Type header of files
served straight from disk.

=============================================================================
THE HTMD TYPE
=============================================================================

`.htmd` files get their own type, `text/htmd`. Most browsers have never
heard of it, so the content-type middleware later downgrades it to
`text/plain` unless the client's Accept header explicitly asks for
`text/htmd`:

    ┌─────────────────────────────────────────────────────────────────────┐
    │   page.htmd ──► text/htmd ──► Accept has text/htmd? ──► text/htmd   │
    │                                        │                            │
    │                                        └── no ──────► text/plain    │
    └─────────────────────────────────────────────────────────────────────┘

This module only knows the raw table. Negotiation lives in
middleware/content_type.py.

=============================================================================
"""

from pathlib import Path
from typing import Optional, Union


HTMD_MIME_TYPE = "text/htmd"

# Maps file extensions (lowercase, with dot) to MIME types.
MIME_TYPES = {
    # -------------------------------------------------------------------------
    # TEXT TYPES
    # -------------------------------------------------------------------------
    ".htmd": HTMD_MIME_TYPE,
    ".html": "text/html",
    ".htm": "text/html",
    ".css": "text/css",
    ".js": "text/javascript",
    ".mjs": "text/javascript",
    ".json": "application/json",
    ".xml": "text/xml",
    ".txt": "text/plain",
    ".md": "text/markdown",
    ".csv": "text/csv",

    # -------------------------------------------------------------------------
    # IMAGE TYPES
    # -------------------------------------------------------------------------
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".gif": "image/gif",
    ".svg": "image/svg+xml",
    ".ico": "image/x-icon",
    ".webp": "image/webp",
    ".avif": "image/avif",

    # -------------------------------------------------------------------------
    # FONT TYPES
    # -------------------------------------------------------------------------
    ".woff": "font/woff",
    ".woff2": "font/woff2",
    ".ttf": "font/ttf",
    ".otf": "font/otf",

    # -------------------------------------------------------------------------
    # MEDIA AND DOCUMENTS
    # -------------------------------------------------------------------------
    ".mp3": "audio/mpeg",
    ".ogg": "audio/ogg",
    ".mp4": "video/mp4",
    ".webm": "video/webm",
    ".pdf": "application/pdf",
    ".zip": "application/zip",
    ".wasm": "application/wasm",
}

# application/octet-stream = "I don't know what this is, treat as binary"
DEFAULT_MIME_TYPE = "application/octet-stream"


def get_mime_type(path: Union[str, Path], default: Optional[str] = None) -> str:
    """
    Get the MIME type for a file based on its extension.

    Examples:
        >>> get_mime_type("style.css")
        'text/css'
        >>> get_mime_type("notes.HTMD")
        'text/htmd'
        >>> get_mime_type("unknown.xyz")
        'application/octet-stream'
    """
    if isinstance(path, str):
        path = Path(path)

    extension = path.suffix.lower()  # .PNG → .png
    return MIME_TYPES.get(extension, default or DEFAULT_MIME_TYPE)
