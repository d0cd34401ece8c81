"""Unit tests for reqline.transport.connection module.

Test Coverage:
    - Connection initialization and timeout normalisation
    - Host resolution failures
    - TCP connection establishment (with and without TLS)
    - Timeout handling (connect and read timeouts)
    - Error handling (network errors, TLS errors, timeouts)
    - Connection lifecycle (open, close, context manager)

Testing Strategy:
    - Uses unittest.mock to simulate socket operations
    - Validates proper exception raising and error messages
"""

import socket
import ssl
from unittest import mock

import pytest

from reqline.exceptions import ConnectTimeout, NetworkError, ResolveError, TlsError
from reqline.transport.connection import Connection
from reqline.utils.timing import Timeout

# ============================================================================
# FIXTURES
# ============================================================================


@pytest.fixture(autouse=True)
def resolvable():
    """Make every host resolvable unless a test overrides it."""
    with mock.patch("socket.getaddrinfo", return_value=[]) as getaddrinfo:
        yield getaddrinfo


@pytest.fixture
def basic_connection() -> Connection:
    """Plain TCP connection to localhost:80."""
    return Connection("localhost", 80, use_ssl=False)


@pytest.fixture
def ssl_connection() -> Connection:
    """TLS connection to example.com:443."""
    return Connection("example.com", 443, use_ssl=True)


@pytest.fixture
def mock_socket() -> mock.Mock:
    """Mock socket with common methods stubbed."""
    sock = mock.Mock(spec=socket.socket)
    sock.recv = mock.Mock(return_value=b"")
    return sock


# ============================================================================
# TEST CLASS: Connection.__init__()
# ============================================================================


class TestConnectionInit:
    """Tests for Connection.__init__() method."""

    def test_init_basic_parameters(self) -> None:
        conn = Connection("example.com", 8080)

        assert conn.host == "example.com"
        assert conn.port == 8080
        assert conn.use_ssl is False
        assert conn.verify is True
        assert conn.timeout == Timeout()
        assert conn.sock is None

    def test_init_with_timeout_object(self) -> None:
        timeout_obj = Timeout(connect=5.0, read=10.0, total=30.0)
        conn = Connection("example.com", 80, timeout=timeout_obj)
        assert conn.timeout is timeout_obj


# ============================================================================
# TEST CLASS: Connection.open() - Success Cases
# ============================================================================


class TestConnectionOpen:
    """Tests for successful connection establishment."""

    @mock.patch("socket.create_connection")
    def test_open_tcp_connection_success(
        self,
        mock_create: mock.Mock,
        basic_connection: Connection,
        mock_socket: mock.Mock,
        resolvable: mock.Mock,
    ) -> None:
        mock_create.return_value = mock_socket

        result = basic_connection.open()

        resolvable.assert_called_once_with("localhost", 80, type=socket.SOCK_STREAM)
        mock_create.assert_called_once_with(("localhost", 80), timeout=None)
        assert result is mock_socket
        assert basic_connection.sock is mock_socket
        mock_socket.settimeout.assert_called_once_with(None)

    @mock.patch("ssl.create_default_context")
    @mock.patch("socket.create_connection")
    def test_open_tls_connection_success(
        self,
        mock_create: mock.Mock,
        mock_ssl_context: mock.Mock,
        ssl_connection: Connection,
    ) -> None:
        raw_sock = mock.Mock(spec=socket.socket)
        mock_create.return_value = raw_sock
        wrapped_sock = mock.Mock(spec=ssl.SSLSocket)
        mock_context = mock.Mock()
        mock_context.wrap_socket.return_value = wrapped_sock
        mock_ssl_context.return_value = mock_context

        result = ssl_connection.open()

        mock_context.wrap_socket.assert_called_once_with(
            raw_sock, server_hostname="example.com"
        )
        assert result is wrapped_sock
        assert mock_context.verify_mode != ssl.CERT_NONE

    @mock.patch("ssl.create_default_context")
    @mock.patch("socket.create_connection")
    def test_open_tls_without_verification(
        self, mock_create: mock.Mock, mock_ssl_context: mock.Mock
    ) -> None:
        mock_create.return_value = mock.Mock(spec=socket.socket)
        mock_context = mock.Mock()
        mock_ssl_context.return_value = mock_context

        Connection("example.com", 443, use_ssl=True, verify=False).open()

        assert mock_context.check_hostname is False
        assert mock_context.verify_mode == ssl.CERT_NONE

    @mock.patch("socket.create_connection")
    def test_open_with_connect_timeout(
        self, mock_create: mock.Mock, mock_socket: mock.Mock
    ) -> None:
        """Test connect timeout is used to connect, read timeout afterwards."""
        conn = Connection("example.com", 80, timeout=Timeout(connect=5.0, read=30.0))
        mock_create.return_value = mock_socket

        conn.open()

        mock_create.assert_called_once_with(("example.com", 80), timeout=5.0)
        mock_socket.settimeout.assert_called_once_with(30.0)

    @mock.patch("socket.create_connection")
    def test_open_with_total_timeout_only(
        self, mock_create: mock.Mock, mock_socket: mock.Mock
    ) -> None:
        conn = Connection("example.com", 80, timeout=Timeout(total=20.0))
        mock_create.return_value = mock_socket

        conn.open()

        mock_create.assert_called_once_with(("example.com", 80), timeout=20.0)
        mock_socket.settimeout.assert_called_once_with(20.0)


# ============================================================================
# TEST CLASS: Connection.open() - Error Cases
# ============================================================================


class TestConnectionOpenErrors:
    """Tests for connection establishment error handling."""

    @mock.patch("socket.create_connection")
    def test_unresolvable_host(
        self,
        mock_create: mock.Mock,
        basic_connection: Connection,
        resolvable: mock.Mock,
    ) -> None:
        resolvable.side_effect = socket.gaierror(-2, "Name or service not known")

        with pytest.raises(ResolveError) as exc_info:
            basic_connection.open()

        assert str(exc_info.value) == "Could not resolve host: localhost"
        mock_create.assert_not_called()

    @mock.patch("socket.create_connection")
    def test_open_raises_connect_timeout_on_socket_timeout(
        self, mock_create: mock.Mock, basic_connection: Connection
    ) -> None:
        mock_create.side_effect = socket.timeout("Connection timed out")

        with pytest.raises(ConnectTimeout) as exc_info:
            basic_connection.open()

        assert "Connection to localhost port 80 timed out" in str(exc_info.value)

    @mock.patch("socket.create_connection")
    def test_open_raises_network_error_on_socket_error(
        self, mock_create: mock.Mock, basic_connection: Connection
    ) -> None:
        mock_create.side_effect = ConnectionRefusedError("Connection refused")

        with pytest.raises(NetworkError) as exc_info:
            basic_connection.open()

        assert "Failed to connect to localhost port 80" in str(exc_info.value)
        assert not isinstance(exc_info.value, ResolveError)

    @mock.patch("ssl.create_default_context")
    @mock.patch("socket.create_connection")
    def test_open_raises_tls_error_on_ssl_error(
        self, mock_create: mock.Mock, mock_ssl_context: mock.Mock
    ) -> None:
        raw_sock = mock.Mock(spec=socket.socket)
        mock_create.return_value = raw_sock
        mock_context = mock.Mock()
        mock_context.wrap_socket.side_effect = ssl.SSLError("Certificate verify failed")
        mock_ssl_context.return_value = mock_context

        with pytest.raises(TlsError) as exc_info:
            Connection("badssl.com", 443, use_ssl=True).open()

        assert "SSL connect error" in str(exc_info.value)
        raw_sock.close.assert_called_once_with()

    @mock.patch("ssl.create_default_context")
    @mock.patch("socket.create_connection")
    def test_open_raises_connect_timeout_on_tls_handshake_timeout(
        self, mock_create: mock.Mock, mock_ssl_context: mock.Mock
    ) -> None:
        mock_create.return_value = mock.Mock(spec=socket.socket)
        mock_context = mock.Mock()
        mock_context.wrap_socket.side_effect = socket.timeout("TLS handshake timeout")
        mock_ssl_context.return_value = mock_context

        with pytest.raises(ConnectTimeout) as exc_info:
            Connection("example.com", 443, use_ssl=True).open()

        assert "SSL handshake with example.com port 443 timed out" in str(exc_info.value)

    @mock.patch("ssl.create_default_context")
    @mock.patch("socket.create_connection")
    def test_open_raises_tls_error_on_reset_during_handshake(
        self, mock_create: mock.Mock, mock_ssl_context: mock.Mock
    ) -> None:
        mock_create.return_value = mock.Mock(spec=socket.socket)
        mock_context = mock.Mock()
        mock_context.wrap_socket.side_effect = ConnectionResetError("reset")
        mock_ssl_context.return_value = mock_context

        with pytest.raises(TlsError, match="SSL connection reset"):
            Connection("example.com", 443, use_ssl=True).open()


# ============================================================================
# TEST CLASS: Connection lifecycle
# ============================================================================


class TestConnectionLifecycle:
    """Tests for close() and the context manager protocol."""

    def test_close_with_open_socket(
        self, basic_connection: Connection, mock_socket: mock.Mock
    ) -> None:
        basic_connection.sock = mock_socket

        basic_connection.close()

        mock_socket.close.assert_called_once_with()
        assert basic_connection.sock is None

    def test_close_with_no_socket(self, basic_connection: Connection) -> None:
        basic_connection.close()
        assert basic_connection.sock is None

    def test_close_handles_socket_error_gracefully(
        self, basic_connection: Connection, mock_socket: mock.Mock
    ) -> None:
        mock_socket.close.side_effect = OSError("already closed")
        basic_connection.sock = mock_socket

        basic_connection.close()

        assert basic_connection.sock is None

    @mock.patch("socket.create_connection")
    def test_context_manager_opens_and_closes(
        self, mock_create: mock.Mock, mock_socket: mock.Mock
    ) -> None:
        mock_create.return_value = mock_socket

        with Connection("localhost", 80) as conn:
            assert conn.sock is mock_socket

        mock_socket.close.assert_called_once_with()
        assert conn.sock is None

    @mock.patch("socket.create_connection")
    def test_context_manager_closes_even_on_exception(
        self, mock_create: mock.Mock, mock_socket: mock.Mock
    ) -> None:
        mock_create.return_value = mock_socket

        with pytest.raises(RuntimeError):
            with Connection("localhost", 80):
                raise RuntimeError("boom")

        mock_socket.close.assert_called_once_with()
