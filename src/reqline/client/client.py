"""src/reqline/client/client.py

Blocking HTTP client.

``Client.send_request`` resolves a :class:`Request` into transport options,
runs the transport once, and rebuilds a :class:`Response` from the raw
combined output.
"""

import logging
from types import MappingProxyType
from typing import Any, Mapping, Optional, Union

from reqline.client.resolver import resolve
from reqline.exceptions import TransportError
from reqline.http.headers import HeaderValues, parse_header_block
from reqline.http.http11 import split_raw_response
from reqline.message.factories import ResponseFactory, StreamFactory
from reqline.message.request import BodyLike, Request
from reqline.message.response import Response
from reqline.message.uri import Uri
from reqline.transport.engine import SocketTransport, Transport, TransportResult
from reqline.transport.options import Option, OptionSet, merge_options
from reqline.utils.redaction import redact_options

__all__ = ["Client"]

logger = logging.getLogger(__name__)

# pylint: disable=too-many-arguments


class Client:
    """
    Blocking HTTP client.

    The base options are fixed at construction time. Each call works on its
    own resolved copy, so one instance may be shared between threads.

    Attributes:
        response_factory: Creates the empty response for each exchange.
        stream_factory: Creates the response body stream.
        transport: Engine running the exchange.
    """

    __slots__ = ("_options", "response_factory", "stream_factory", "transport")

    def __init__(
        self,
        response_factory: Optional[ResponseFactory] = None,
        stream_factory: Optional[StreamFactory] = None,
        options: Optional[Mapping[Any, Any]] = None,
        transport: Optional[Transport] = None,
    ) -> None:
        """
        Initialize a Client.

        Args:
            response_factory: Factory for responses. Defaults to
                :class:`ResponseFactory`.
            stream_factory: Factory for body streams. Defaults to
                :class:`StreamFactory`.
            options: Transport options merged over the fixed defaults.
            transport: Transport engine. Defaults to :class:`SocketTransport`.
        """
        self.response_factory = response_factory or ResponseFactory()
        self.stream_factory = stream_factory or StreamFactory()
        self.transport: Transport = transport or SocketTransport()
        self._options: OptionSet = merge_options(options)

    @property
    def options(self) -> Mapping[Option, Any]:
        """Read-only view of the base options."""
        return MappingProxyType(self._options)

    def send_request(self, request: Request) -> Response:
        """
        Send ``request`` and return the response.

        Raises:
            InvalidMethodError: If the method is not supported.
            InvalidBodyError: If a POST/PUT body cannot be rewound.
            TransportError: If the transport fails; carries the transport's
                own message and error code.
        """
        options = resolve(self._options, request)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "Sending %s %s with options %s",
                request.method,
                request.uri,
                redact_options(options),
            )

        result = self.transport.perform(options)
        if not result.ok:
            logger.warning(
                "Transport failed for %s %s: [%s] %s",
                request.method,
                request.uri,
                result.errno,
                result.error,
            )
            raise TransportError(result.error, result.errno)

        response = self._build_response(result)
        logger.debug(
            "Received %s for %s %s", response.status_code, request.method, request.uri
        )
        return response

    def _build_response(self, result: TransportResult) -> Response:
        header_block, body = split_raw_response(
            result.raw, result.header_size, result.size_download
        )
        stream = self.stream_factory.create_stream(body)
        response = self.response_factory.create_response(result.http_code).with_body(
            stream
        )

        for name, values in parse_header_block(header_block).items():
            response = response.with_header(name, values)

        return response

    # -- Convenience ---------------------------------------------------------

    def request(
        self,
        method: str,
        uri: Union[str, Uri],
        headers: Optional[Mapping[str, HeaderValues]] = None,
        body: BodyLike = None,
    ) -> Response:
        """Build a :class:`Request` and send it."""
        return self.send_request(Request(method, uri, body=body, headers=headers))

    def get(
        self, uri: Union[str, Uri], headers: Optional[Mapping[str, HeaderValues]] = None
    ) -> Response:
        """Send a GET request."""
        return self.request("GET", uri, headers=headers)

    def post(
        self,
        uri: Union[str, Uri],
        body: BodyLike = None,
        headers: Optional[Mapping[str, HeaderValues]] = None,
    ) -> Response:
        """Send a POST request."""
        return self.request("POST", uri, headers=headers, body=body)

    def put(
        self,
        uri: Union[str, Uri],
        body: BodyLike = None,
        headers: Optional[Mapping[str, HeaderValues]] = None,
    ) -> Response:
        """Send a PUT request."""
        return self.request("PUT", uri, headers=headers, body=body)

    def patch(
        self, uri: Union[str, Uri], headers: Optional[Mapping[str, HeaderValues]] = None
    ) -> Response:
        """Send a PATCH request."""
        return self.request("PATCH", uri, headers=headers)

    def delete(
        self, uri: Union[str, Uri], headers: Optional[Mapping[str, HeaderValues]] = None
    ) -> Response:
        """Send a DELETE request."""
        return self.request("DELETE", uri, headers=headers)

    def head(
        self, uri: Union[str, Uri], headers: Optional[Mapping[str, HeaderValues]] = None
    ) -> Response:
        """Send a HEAD request."""
        return self.request("HEAD", uri, headers=headers)
