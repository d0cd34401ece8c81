"""src/reqline/__init__.py

Reqline - a blocking HTTP client built around a transport option set.

A :class:`Client` turns an abstract :class:`Request` into the options a
low-level transport understands, runs the transport once, and rebuilds a
:class:`Response` from the raw ``headers + body`` buffer it returns.

Key Features:
    - Zero external dependencies
    - Pluggable transport (default: blocking sockets with TLS)
    - Multi-value headers kept as ordered lists
    - One error type (:class:`HttpClientError`) with message and code

Example:
    Sync usage::

        from reqline import Client, Request

        client = Client()
        response = client.send_request(Request("GET", "https://httpbin.org/get"))
        print(response.status_code, response.headers["Content-Type"])
        print(response.json())
"""

import logging

from reqline.client.client import Client
from reqline.exceptions import (
    HttpClientError,
    InvalidBodyError,
    InvalidMethodError,
    ReqlineError,
    TransportError,
)
from reqline.message import (
    Request,
    Response,
    ResponseFactory,
    Stream,
    StreamFactory,
    Uri,
)
from reqline.version import __version__

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Client",
    "Request",
    "Response",
    "ResponseFactory",
    "Stream",
    "StreamFactory",
    "Uri",
    "ReqlineError",
    "HttpClientError",
    "InvalidMethodError",
    "InvalidBodyError",
    "TransportError",
    "__version__",
]
