"""
=============================================================================
ACCESS LOGGING MIDDLEWARE
=============================================================================

One log line per request, written after the response is final.

    127.0.0.1 - - [18/Oct/2026:10:00:00 +0000] "GET /index.htmd" 200 1834 0.41ms

or, with log_format="json":

    {"method": "GET", "path": "/index.htmd", "status_code": 200, ...}

This middleware should be FIRST (outermost) in the pipeline so the line
reflects every header rewrite and the timing covers the whole chain.

=============================================================================
"""

import time
import json
import logging
from dataclasses import dataclass

from .base import Middleware, NextHandler
from ..http.request import HTTPRequest
from ..http.response import HTTPResponse


# Namespaced logger so access logs can be routed separately:
#   logging.getLogger("waiter.access").addHandler(file_handler)
logger = logging.getLogger("waiter.access")


@dataclass
class RequestLog:
    """Structured log entry for a request."""

    method: str
    path: str
    query: str
    client_ip: str
    user_agent: str
    status_code: int
    content_type: str
    content_length: int
    duration_ms: float
    timestamp: str

    def to_dict(self) -> dict:
        return {
            "method": self.method,
            "path": self.path,
            "query": self.query,
            "client_ip": self.client_ip,
            "user_agent": self.user_agent,
            "status_code": self.status_code,
            "content_type": self.content_type,
            "content_length": self.content_length,
            "duration_ms": round(self.duration_ms, 2),
            "timestamp": self.timestamp,
        }

    def to_text(self) -> str:
        """Apache combined log format, plus the duration."""
        return (
            f'{self.client_ip or "-"} - - [{self.timestamp}] '
            f'"{self.method} {self.path}" {self.status_code} '
            f'{self.content_length} {self.duration_ms:.2f}ms'
        )


class LoggingMiddleware(Middleware):
    """
    Request logging middleware.

    Usage:
        pipeline.add(LoggingMiddleware(log_format="text"))
        pipeline.add(LoggingMiddleware(log_format="json"))
    """

    def __init__(self, log_format: str = "text", log_level: int = logging.INFO):
        self.log_format = log_format
        self.log_level = log_level

    def __call__(self, request: HTTPRequest, next: NextHandler) -> HTTPResponse:
        start_time = time.time()

        try:
            response = next(request)
        except Exception as e:
            duration_ms = (time.time() - start_time) * 1000
            logger.error(
                f"Request failed: {request.method} {request.path} "
                f"- {type(e).__name__}: {e} ({duration_ms:.2f}ms)"
            )
            raise

        duration_ms = (time.time() - start_time) * 1000

        log_entry = RequestLog(
            method=request.method,
            path=request.path,
            query=request.query_string,
            client_ip=request.client_address[0],
            user_agent=request.user_agent or "-",
            status_code=int(response.status),
            content_type=response.get_header("Content-Type", "-"),
            content_length=response.content_length,
            duration_ms=duration_ms,
            timestamp=time.strftime("%d/%b/%Y:%H:%M:%S %z"),
        )

        if self.log_format == "json":
            logger.log(self.log_level, json.dumps(log_entry.to_dict()))
        else:
            logger.log(self.log_level, log_entry.to_text())

        return response
