"""src/reqline/http/body.py

HTTP body framing (chunked, fixed-length, read-to-close) for Reqline.
"""

import socket
from typing import Generator

from reqline.exceptions import InvalidResponseError, ProtocolError

__all__ = ["SocketReader", "iter_read_chunked", "read_chunked"]


class SocketReader:
    """
    Buffered reader over a connected socket.

    Keeps whatever was received past the last request so that heads and
    bodies can be read with different strategies from one stream.
    """

    __slots__ = ("sock", "buffer", "chunk_size")

    def __init__(self, sock: socket.socket, chunk_size: int = 4096):
        self.sock = sock
        self.buffer = b""
        self.chunk_size = chunk_size

    def _fill(self) -> bool:
        chunk = self.sock.recv(self.chunk_size)
        if not chunk:
            return False
        self.buffer += chunk
        return True

    def read_until(self, delimiter: bytes, limit: int) -> bytes:
        """
        Read up to and including ``delimiter``.

        Raises:
            EOFError: If the peer closes first.
            ProtocolError: If more than ``limit`` bytes arrive without it.
        """
        while delimiter not in self.buffer:
            if len(self.buffer) > limit:
                raise ProtocolError(f"No {delimiter!r} within {limit} bytes")
            if not self._fill():
                raise EOFError("Socket closed prematurely")

        end = self.buffer.index(delimiter) + len(delimiter)
        data, self.buffer = self.buffer[:end], self.buffer[end:]
        return data

    def read_exact(self, n: int) -> bytes:
        """Read exactly n bytes from the socket."""
        if n < 0:
            raise ValueError(f"Cannot read a negative number of bytes: {n}")
        while len(self.buffer) < n:
            if not self._fill():
                raise EOFError("Socket closed prematurely")

        data, self.buffer = self.buffer[:n], self.buffer[n:]
        return data

    def read_to_eof(self) -> bytes:
        """Read until the peer closes the connection."""
        while self._fill():
            pass
        data, self.buffer = self.buffer, b""
        return data


def iter_read_chunked(reader: SocketReader) -> Generator[bytes, None, None]:
    """Iterate over chunked transfer-encoded response."""
    while True:
        line = reader.read_until(b"\r\n", 1024)

        try:
            size_hex = line.split(b";")[0].strip()
            size = int(size_hex, 16)

        except ValueError as exc:
            raise InvalidResponseError(f"Invalid chunk size: {line!r}") from exc

        if size == 0:
            # Skip trailer fields up to the final blank line
            while reader.read_until(b"\r\n", 8192) != b"\r\n":
                pass
            break

        yield reader.read_exact(size)

        # Consume chunk trailer CRLF
        reader.read_exact(2)


def read_chunked(reader: SocketReader) -> bytes:
    """Read full chunked body into memory."""
    return b"".join(iter_read_chunked(reader))
