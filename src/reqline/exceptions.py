"""src/reqline/exceptions.py

Reqline Exceptions hierarchy.

Only :class:`HttpClientError` and its subclasses leave :class:`reqline.Client`.
The network-level errors below are raised inside the transport and turned
into numeric error codes before they reach the client.
"""

# pylint: disable=redefined-builtin


class ReqlineError(Exception):
    """Base exception for all Reqline errors."""


class HttpClientError(ReqlineError):
    """
    Error raised by the client for any failed exchange.

    Attributes:
        message: Human readable description.
        code: Numeric code. 400 for rejected requests, the transport
            error code for network failures.
    """

    def __init__(self, message: str = "", code: int = 0):
        super().__init__(message)
        self.message = message
        self.code = code

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, code={self.code})"


class InvalidMethodError(HttpClientError):
    """The request method is not supported."""

    def __init__(self, message: str = "Invalid request method", code: int = 400):
        super().__init__(message, code)


class InvalidBodyError(HttpClientError):
    """The request body cannot be re-read for transmission."""

    def __init__(
        self, message: str = "The request body is not seekable", code: int = 400
    ):
        super().__init__(message, code)


class TransportError(HttpClientError):
    """The transport failed (DNS, connect, TLS, read...)."""


class NetworkError(ReqlineError):
    """
    Base exception for network-related errors inside the transport.
    Wraps socket errors and other connection issues.
    """


class ResolveError(NetworkError):
    """Host name could not be resolved."""


class TimeoutError(NetworkError):
    """
    Base exception for timeouts.
    """

    def __init__(self, message: str = "Operation timed out"):
        super().__init__(message)


class ConnectTimeout(TimeoutError):
    """Timeout during connection establishment."""


class ReadTimeout(TimeoutError):
    """Timeout during data reception."""


class TlsError(NetworkError):
    """TLS/SSL handshake or verification errors."""


class ProtocolError(ReqlineError):
    """
    Errors related to HTTP protocol (parsing, violations).
    """


class InvalidResponseError(ProtocolError):
    """Server sent a response that could not be understood."""


class EmptyResponseError(ProtocolError):
    """Server closed the connection without sending anything."""
