"""
=============================================================================
REQUEST HANDLERS
=============================================================================

Handlers produce the response status and body. They do not decide cache
policy or the Server header; middleware does that on the way out.

1. StaticFileHandler
   - Resolves a URL path to a file under the root directory
   - Path traversal protection
   - ETag / Last-Modified, 304 on If-None-Match

2. find_index() / open_index()
   - The root-path fallback table (index.htmd, index.txt, ...)
   - Opening reports failures as an IndexResult instead of raising

3. SiteHandler
   - Composes the two: static lookup, then index or 404

=============================================================================
USAGE
=============================================================================

    from waiter.handlers import SiteHandler

    site = SiteHandler(ServerConfig(root_dir="/srv/site"))
    response = site.handle(request)

=============================================================================
"""

from .static import StaticFileHandler
from .index import IndexResult, find_index, open_index
from .site import SiteHandler

__all__ = [
    "StaticFileHandler",
    "IndexResult",
    "find_index",
    "open_index",
    "SiteHandler",
]
