"""src/reqline/transport/engine.py

Socket based transport engine.

A transport takes a resolved option set, performs exactly one HTTP
exchange and hands back the raw combined output (every response head
followed by the body) together with the byte counts needed to split it.
Failures are reported in the result, never raised.
"""

import enum
import logging
import socket
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Protocol, Tuple

from reqline.exceptions import (
    EmptyResponseError,
    InvalidResponseError,
    NetworkError,
    ProtocolError,
    ReadTimeout,
    ResolveError,
    TimeoutError,
    TlsError,
)
from reqline.http.auth import build_basic_auth_header, split_user_info
from reqline.http.body import SocketReader, read_chunked
from reqline.http.http11 import HttpParser, ResponseHead
from reqline.message.uri import Uri
from reqline.transport.connection import Connection
from reqline.transport.options import Option
from reqline.utils.timing import Timeout
from reqline.utils.validators import is_supported_scheme, validate_header_line
from reqline.version import __version__

# pylint: disable=redefined-builtin

__all__ = ["ErrorCode", "TransportResult", "Transport", "SocketTransport"]

logger = logging.getLogger(__name__)

DEFAULT_PORTS = {"http": 80, "https": 443}


class ErrorCode(enum.IntEnum):
    """
    Transport error codes.

    Numbered like the libcurl error codes, so the values are familiar
    from curl's own diagnostics.
    """

    OK = 0
    UNSUPPORTED_PROTOCOL = 1
    URL_MALFORMAT = 3
    COULDNT_RESOLVE_HOST = 6
    COULDNT_CONNECT = 7
    WEIRD_SERVER_REPLY = 8
    PARTIAL_FILE = 18
    OPERATION_TIMEDOUT = 28
    SSL_CONNECT_ERROR = 35
    BAD_FUNCTION_ARGUMENT = 43
    GOT_NOTHING = 52
    SEND_ERROR = 55
    RECV_ERROR = 56


@dataclass
class TransportResult:
    """
    Outcome of one transport call.

    Attributes:
        raw: Response heads followed by the body.
        http_code: Status code of the final response.
        header_size: Byte length of all heads at the start of ``raw``.
        size_download: Byte length of the (decoded) body at the end of ``raw``.
        request_header: Request head as sent, when ``HEADER_OUT`` is on.
        effective_url: URL the request was sent to.
        errno: ``0`` on success, an :class:`ErrorCode` otherwise.
        error: Diagnostic message when ``errno`` is set.
    """

    raw: bytes = b""
    http_code: int = 0
    header_size: int = 0
    size_download: int = 0
    request_header: str = ""
    effective_url: str = ""
    errno: int = ErrorCode.OK
    error: str = ""

    @property
    def ok(self) -> bool:
        """Whether the exchange completed."""
        return self.errno == ErrorCode.OK

    @classmethod
    def failure(
        cls, errno: ErrorCode, error: str, effective_url: str = ""
    ) -> "TransportResult":
        """Result describing a failed call."""
        return cls(errno=int(errno), error=error, effective_url=effective_url)


class _SendError(NetworkError):
    """Writing the request failed."""


class _RecvError(NetworkError):
    """Reading the response failed after the connection was up."""

    def __init__(self, errno: ErrorCode, message: str):
        super().__init__(message)
        self.errno = errno


class Transport(Protocol):
    """Anything able to run one exchange from an option set."""

    def perform(self, options: Mapping[Option, Any]) -> TransportResult:
        """Run the exchange described by ``options``."""


def _wire_method(options: Mapping[Option, Any]) -> str:
    if options.get(Option.CUSTOMREQUEST):
        return str(options[Option.CUSTOMREQUEST])
    if options.get(Option.NOBODY):
        return "HEAD"
    if options.get(Option.POST):
        return "POST"
    return "GET"


def _payload(options: Mapping[Option, Any]) -> Optional[bytes]:
    if not options.get(Option.POST):
        return None
    fields = options.get(Option.POSTFIELDS, b"")
    if isinstance(fields, str):
        return fields.encode("utf-8")
    return bytes(fields)


def _has_header(lines: List[str], name: str) -> bool:
    prefix = name.lower()
    return any(line.split(":", 1)[0].strip().lower() == prefix for line in lines)


class SocketTransport:
    """
    Blocking transport over plain sockets and :mod:`ssl`.

    Every call opens a fresh connection, sends ``Connection: close`` and
    closes the socket once the response is read, so ``FORBID_REUSE`` and
    ``FRESH_CONNECT`` are always honoured.

    Attributes:
        parser: Parser used for response heads.
    """

    __slots__ = ("parser",)

    def __init__(self, parser: Optional[HttpParser] = None) -> None:
        self.parser = parser or HttpParser()

    def build_request_head(
        self,
        method: str,
        uri: Uri,
        port: int,
        options: Mapping[Option, Any],
        payload: Optional[bytes],
    ) -> str:
        """
        Build the request line and header lines.

        Caller supplied ``HTTPHEADER`` lines come first; ``Host``,
        ``Authorization``, ``User-Agent``, ``Accept`` and the payload
        headers are only added when absent.

        Raises:
            ValueError: If a header line contains CR, LF or NUL.
        """
        lines = [
            validate_header_line(str(line))
            for line in options.get(Option.HTTPHEADER, [])
        ]

        if not _has_header(lines, "Host"):
            host = f"[{uri.host}]" if ":" in uri.host else uri.host
            if port != DEFAULT_PORTS.get(uri.scheme):
                host = f"{host}:{port}"
            lines.insert(0, f"Host: {host}")

        userpwd = options.get(Option.USERPWD)
        if userpwd and not _has_header(lines, "Authorization"):
            credentials = build_basic_auth_header(*split_user_info(str(userpwd)))
            lines.append(f"Authorization: {credentials}")

        if not _has_header(lines, "User-Agent"):
            user_agent = options.get(Option.USERAGENT) or f"reqline/{__version__}"
            lines.append(f"User-Agent: {user_agent}")
        if not _has_header(lines, "Accept"):
            lines.append("Accept: */*")

        if payload is not None:
            if not _has_header(lines, "Content-Type"):
                lines.append("Content-Type: application/x-www-form-urlencoded")
            if not _has_header(lines, "Content-Length"):
                lines.append(f"Content-Length: {len(payload)}")

        if not _has_header(lines, "Connection"):
            lines.append("Connection: close")

        return f"{method} {uri.request_target} HTTP/1.1\r\n" + "".join(
            f"{line}\r\n" for line in lines
        ) + "\r\n"

    def perform(self, options: Mapping[Option, Any]) -> TransportResult:
        """
        Run the exchange described by ``options``.

        Returns:
            A :class:`TransportResult`; ``errno`` is non-zero on failure.
        """
        url = str(options.get(Option.URL) or "")
        try:
            uri = Uri(url)
        except ValueError as exc:
            return TransportResult.failure(ErrorCode.URL_MALFORMAT, str(exc), url)

        if not uri.scheme or not uri.host:
            return TransportResult.failure(
                ErrorCode.URL_MALFORMAT, f"URL rejected: Malformed input: {url!r}", url
            )
        if not is_supported_scheme(uri.scheme):
            return TransportResult.failure(
                ErrorCode.UNSUPPORTED_PROTOCOL,
                f'Protocol "{uri.scheme}" not supported',
                url,
            )

        port = int(options.get(Option.PORT) or uri.port or DEFAULT_PORTS[uri.scheme])
        method = _wire_method(options)
        payload = _payload(options)
        head_only = bool(options.get(Option.NOBODY)) or method == "HEAD"

        try:
            head = self.build_request_head(method, uri, port, options, payload)
        except ValueError as exc:
            return TransportResult.failure(
                ErrorCode.BAD_FUNCTION_ARGUMENT, str(exc), url
            )

        connection = Connection(
            uri.host,
            port,
            use_ssl=uri.scheme == "https",
            timeout=Timeout.from_options(
                options.get(Option.TIMEOUT), options.get(Option.CONNECTTIMEOUT)
            ),
            verify=bool(options.get(Option.SSL_VERIFYPEER, True)),
        )

        logger.debug("> %s %s (port %s)", method, url, port)
        try:
            sock = connection.open()
            self._send(sock, head.encode("utf-8") + (payload or b""))
            heads, body = self._receive(SocketReader(sock), head_only)
        except ResolveError as exc:
            return TransportResult.failure(
                ErrorCode.COULDNT_RESOLVE_HOST, str(exc), url
            )
        except TimeoutError as exc:
            return TransportResult.failure(
                ErrorCode.OPERATION_TIMEDOUT, str(exc), url
            )
        except TlsError as exc:
            return TransportResult.failure(ErrorCode.SSL_CONNECT_ERROR, str(exc), url)
        except _SendError as exc:
            return TransportResult.failure(ErrorCode.SEND_ERROR, str(exc), url)
        except _RecvError as exc:
            return TransportResult.failure(exc.errno, str(exc), url)
        except NetworkError as exc:
            return TransportResult.failure(ErrorCode.COULDNT_CONNECT, str(exc), url)
        except EmptyResponseError as exc:
            return TransportResult.failure(ErrorCode.GOT_NOTHING, str(exc), url)
        except ProtocolError as exc:
            return TransportResult.failure(
                ErrorCode.WEIRD_SERVER_REPLY, str(exc), url
            )
        finally:
            connection.close()

        header_bytes = b"".join(raw for raw, _ in heads)
        final = heads[-1][1]
        logger.debug(
            "< %s %s (%d header bytes, %d body bytes)",
            final.status.status_code,
            final.status.reason,
            len(header_bytes),
            len(body),
        )

        if not options.get(Option.HEADER, True):
            header_bytes = b""

        return TransportResult(
            raw=header_bytes + body,
            http_code=final.status.status_code,
            header_size=len(header_bytes),
            size_download=len(body),
            request_header=head if options.get(Option.HEADER_OUT) else "",
            effective_url=url,
        )

    def _send(self, sock: socket.socket, data: bytes) -> None:
        try:
            sock.sendall(data)
        except socket.timeout as exc:
            raise TimeoutError(f"Send timed out: {exc}") from exc
        except OSError as exc:
            raise _SendError(f"Failed sending data to the peer: {exc}") from exc

    def _receive(
        self, reader: SocketReader, head_only: bool
    ) -> Tuple[List[Tuple[bytes, ResponseHead]], bytes]:
        """
        Read every response head and the final body.

        Interim ``1xx`` heads are kept so they end up in the header block,
        the way they appear on the wire.
        """
        heads: List[Tuple[bytes, ResponseHead]] = []
        try:
            while True:
                try:
                    raw_head = reader.read_until(
                        b"\r\n\r\n", self.parser.max_header_size
                    )
                except EOFError as exc:
                    if heads or reader.buffer:
                        raise InvalidResponseError(
                            "Connection closed inside the response head"
                        ) from exc
                    raise EmptyResponseError("Empty reply from server") from exc

                parsed = self.parser.parse_head(raw_head)
                heads.append((raw_head, parsed))
                code = parsed.status.status_code
                if not 100 <= code < 200 or code == 101:
                    break

            if head_only or code in (204, 304):
                return heads, b""

            return heads, self._read_body(reader, parsed)

        except socket.timeout as exc:
            raise ReadTimeout(f"Read timed out: {exc}") from exc
        except OSError as exc:
            raise _RecvError(
                ErrorCode.RECV_ERROR,
                f"Failure when receiving data from the peer: {exc}",
            ) from exc

    def _read_body(self, reader: SocketReader, head: ResponseHead) -> bytes:
        transfer_encoding = ", ".join(head.fields.get("transfer-encoding", [])).lower()
        content_length = head.fields.get("content-length")

        try:
            if "chunked" in transfer_encoding:
                return read_chunked(reader)

            if content_length:
                try:
                    length = int(content_length[-1])
                except ValueError as exc:
                    raise InvalidResponseError(
                        f"Invalid Content-Length: {content_length[-1]!r}"
                    ) from exc
                if length < 0:
                    raise InvalidResponseError(
                        f"Invalid Content-Length: {content_length[-1]!r}"
                    )
                return reader.read_exact(length)

        except EOFError as exc:
            raise _RecvError(
                ErrorCode.PARTIAL_FILE,
                "Transfer closed with outstanding read data remaining",
            ) from exc

        # No CL, no Chunked -> read until connection closes
        return reader.read_to_eof()

