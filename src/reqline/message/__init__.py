"""src/reqline/message/__init__.py

HTTP message model: URIs, streams, requests, responses and their factories.
"""

from .factories import ResponseFactory, StreamFactory
from .request import Request
from .response import Response
from .stream import Stream
from .uri import Uri

__all__ = [
    "Request",
    "Response",
    "ResponseFactory",
    "Stream",
    "StreamFactory",
    "Uri",
]
