"""
Server identification header.

Stamps every response with the same Server value, replacing whatever an
earlier stage may have set.
"""

from .base import ResponseMiddleware
from ..http.request import HTTPRequest
from ..http.response import HTTPResponse


class ServerHeaderMiddleware(ResponseMiddleware):

    def __init__(self, server_name: str = "waiter (Python)"):
        self.server_name = server_name

    def process_response(self, request: HTTPRequest, response: HTTPResponse) -> HTTPResponse:
        return response.set_header("Server", self.server_name)
