"""
=============================================================================
MIDDLEWARE BASE CLASSES
=============================================================================

The contract every middleware follows, and the pipeline that chains them
around the site handler.

=============================================================================
THE TWO KINDS OF MIDDLEWARE
=============================================================================

Middleware:
    Full control. Receives the request and `next`, may do work before and
    after calling it (LoggingMiddleware times the call).

ResponseMiddleware:
    Only post-processes. Implements process_response(request, response)
    and nothing else. All of waiter's header stages are of this kind:

        response = next(request)
        return self.process_response(request, response)

    process_response must REPLACE headers, never append, so applying it
    to its own output changes nothing.

=============================================================================
"""

from abc import ABC, abstractmethod
from typing import Callable, List
import logging

from ..http.request import HTTPRequest
from ..http.response import HTTPResponse


logger = logging.getLogger(__name__)


# NextHandler is the signature for the next middleware or final handler.
NextHandler = Callable[[HTTPRequest], HTTPResponse]


class Middleware(ABC):
    """
    Abstract base class for middleware.

    Every middleware must implement __call__ with this signature:

        def __call__(self, request: HTTPRequest, next: NextHandler) -> HTTPResponse

    and call next(request) to continue the chain.
    """

    @abstractmethod
    def __call__(self, request: HTTPRequest, next: NextHandler) -> HTTPResponse:
        pass

    @property
    def name(self) -> str:
        """Get the middleware name for logging."""
        return self.__class__.__name__


class ResponseMiddleware(Middleware):
    """Middleware that only rewrites the response on its way out."""

    def __call__(self, request: HTTPRequest, next: NextHandler) -> HTTPResponse:
        response = next(request)
        return self.process_response(request, response)

    @abstractmethod
    def process_response(self, request: HTTPRequest, response: HTTPResponse) -> HTTPResponse:
        """Rewrite headers of `response` in place and return it."""


class MiddlewarePipeline:
    """
    Chains multiple middleware together with a final handler.

    =========================================================================
    PIPELINE ARCHITECTURE
    =========================================================================

    The pipeline wraps middleware around each other like layers of an onion:

        pipeline.add(LoggingMiddleware())        # First added = outermost
        pipeline.add(ServerHeaderMiddleware())
        pipeline.add(HtmdContentTypeMiddleware())
        pipeline.add(CacheControlMiddleware())   # Last = closest to handler

            ┌─────────────────────────────────────────────────────────┐
            │  LoggingMiddleware                                      │
            │  ┌───────────────────────────────────────────────────┐  │
            │  │  ServerHeaderMiddleware                           │  │
            │  │  ┌─────────────────────────────────────────────┐  │  │
            │  │  │  HtmdContentTypeMiddleware                  │  │  │
            │  │  │  ┌─────────────────────────────────────┐    │  │  │
            │  │  │  │  CacheControlMiddleware             │    │  │  │
            │  │  │  │  ┌─────────────────────────────┐    │    │  │  │
            │  │  │  │  │  SiteHandler.handle         │    │    │  │  │
            │  │  │  │  └─────────────────────────────┘    │    │  │  │
            │  │  │  └─────────────────────────────────────┘    │  │  │
            │  │  └─────────────────────────────────────────────┘  │  │
            │  └───────────────────────────────────────────────────┘  │
            └─────────────────────────────────────────────────────────┘

    Responses flow OUTWARD, so the last middleware added post-processes
    first: cache policy, then htmd content type, then Server header,
    then the access log line sees the final response.

    =========================================================================
    """

    def __init__(self):
        self._middleware: List[Middleware] = []

    def add(self, middleware: Middleware) -> "MiddlewarePipeline":
        """
        Add middleware to the pipeline.

        Middleware is executed in the order added (first added = outermost).
        """
        self._middleware.append(middleware)
        logger.debug(f"Added middleware: {middleware.name}")
        return self

    def use(self, *middleware: Middleware) -> "MiddlewarePipeline":
        """Add multiple middleware at once."""
        for mw in middleware:
            self.add(mw)
        return self

    def wrap(self, handler: NextHandler) -> NextHandler:
        """
        Wrap a handler with all middleware in the pipeline.

        Given [MW1, MW2, MW3] and handler the result is
        MW1 → MW2 → MW3 → handler. We wrap in REVERSE order so that the
        first-added middleware is the outermost wrapper.
        """
        current = handler

        for middleware in reversed(self._middleware):
            current = self._create_wrapped_handler(middleware, current)

        return current

    def _create_wrapped_handler(
        self,
        middleware: Middleware,
        next_handler: NextHandler
    ) -> NextHandler:
        # Closure over middleware and next_handler
        def wrapped(request: HTTPRequest) -> HTTPResponse:
            return middleware(request, next_handler)

        return wrapped

    def __len__(self) -> int:
        return len(self._middleware)

    def __iter__(self):
        return iter(self._middleware)
