"""src/reqline/transport/connection.py

Single-use TCP and TLS connections for the socket transport.

One :class:`Connection` serves exactly one exchange; the transport never
reuses sockets. Failure messages are what callers eventually read in
:class:`reqline.TransportError`, so they name host and port.
"""

import logging
import socket
import ssl
from typing import Any, Optional

from reqline.exceptions import ConnectTimeout, NetworkError, ResolveError, TlsError
from reqline.transport.tls import create_ssl_context
from reqline.utils.timing import Timeout

logger = logging.getLogger(__name__)


class Connection:
    """
    One outgoing connection, opened once and closed after the exchange.

    Attributes:
        host: Host name or IP literal to connect to.
        port: TCP port.
        use_ssl: Wrap the socket in TLS (``https``).
        verify: Check the peer certificate and host name.
        timeout: Connect and read limits.
        sock: Open socket, ``None`` before :meth:`open` and after :meth:`close`.
    """

    __slots__ = ("host", "port", "use_ssl", "verify", "timeout", "sock")

    def __init__(
        self,
        host: str,
        port: int,
        use_ssl: bool = False,
        timeout: Optional[Timeout] = None,
        verify: bool = True,
    ) -> None:
        self.host = host
        self.port = port
        self.use_ssl = use_ssl
        self.verify = verify
        self.timeout = timeout if timeout is not None else Timeout()
        self.sock: Optional[socket.socket] = None

    def _resolve(self) -> None:
        try:
            socket.getaddrinfo(self.host, self.port, type=socket.SOCK_STREAM)
        except socket.gaierror as e:
            raise ResolveError(f"Could not resolve host: {self.host}") from e

    def _handshake(self, raw_sock: socket.socket) -> socket.socket:
        context = create_ssl_context(self.verify)
        try:
            return context.wrap_socket(raw_sock, server_hostname=self.host)
        except socket.timeout as e:
            raw_sock.close()
            raise ConnectTimeout(
                f"SSL handshake with {self.host} port {self.port} timed out"
            ) from e
        except (ssl.SSLError, ssl.CertificateError) as e:
            raw_sock.close()
            raise TlsError(f"SSL connect error: {e}") from e
        except OSError as e:
            raw_sock.close()
            raise TlsError(f"SSL connection reset during handshake: {e}") from e

    def open(self) -> socket.socket:
        """
        Resolve, connect and, for ``https``, complete the TLS handshake.

        Raises:
            ResolveError: If the host name does not resolve.
            ConnectTimeout: If connecting or the handshake takes too long.
            TlsError: If the handshake fails.
            NetworkError: For any other connection failure.
        """
        self._resolve()
        logger.debug("Connecting to %s:%s (tls=%s)", self.host, self.port, self.use_ssl)

        try:
            raw_sock = socket.create_connection(
                (self.host, self.port), timeout=self.timeout.connect_timeout
            )
        except socket.timeout as e:
            raise ConnectTimeout(
                f"Connection to {self.host} port {self.port} timed out"
            ) from e
        except OSError as e:
            raise NetworkError(
                f"Failed to connect to {self.host} port {self.port}: {e}"
            ) from e

        self.sock = self._handshake(raw_sock) if self.use_ssl else raw_sock
        self.sock.settimeout(self.timeout.read_timeout)
        return self.sock

    def close(self) -> None:
        """Close the socket; safe to call more than once."""
        if self.sock is None:
            return
        try:
            self.sock.close()
        except OSError:
            pass
        self.sock = None

    def __enter__(self) -> "Connection":
        self.open()
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
