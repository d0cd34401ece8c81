"""src/reqline/message/stream.py

Byte streams used as request and response bodies.
"""

import io
from typing import IO, Optional, Union

__all__ = ["Stream"]


class Stream:
    """
    Thin wrapper around a binary file-like object.

    A stream is seekable when the underlying object is. ``str(stream)``
    rewinds and returns the whole content decoded as UTF-8, which is what
    the client sends as a form payload.
    """

    __slots__ = ("_fileobj",)

    def __init__(self, fileobj: Optional[Union[bytes, str, IO[bytes]]] = None):
        if fileobj is None:
            fileobj = b""
        if isinstance(fileobj, str):
            fileobj = fileobj.encode("utf-8")
        if isinstance(fileobj, (bytes, bytearray)):
            fileobj = io.BytesIO(bytes(fileobj))
        self._fileobj: IO[bytes] = fileobj

    def is_seekable(self) -> bool:
        """Whether the stream can be rewound."""
        seekable = getattr(self._fileobj, "seekable", None)
        return bool(seekable()) if seekable else False

    def is_readable(self) -> bool:
        """Whether the stream can be read."""
        readable = getattr(self._fileobj, "readable", None)
        return bool(readable()) if readable else hasattr(self._fileobj, "read")

    def rewind(self) -> None:
        """Seek back to the start."""
        self.seek(0)

    def seek(self, offset: int, whence: int = io.SEEK_SET) -> int:
        """Move the stream position."""
        if not self.is_seekable():
            raise OSError("Stream is not seekable")
        return self._fileobj.seek(offset, whence)

    def tell(self) -> int:
        """Current position."""
        return self._fileobj.tell()

    def read(self, size: int = -1) -> bytes:
        """Read up to ``size`` bytes from the current position."""
        return self._fileobj.read(size)

    def get_contents(self) -> bytes:
        """Read the remainder of the stream."""
        return self._fileobj.read()

    def getvalue(self) -> bytes:
        """Whole content, regardless of the current position."""
        self.rewind()
        return self.get_contents()

    def get_size(self) -> Optional[int]:
        """Size in bytes, or ``None`` when it cannot be known."""
        if not self.is_seekable():
            return None
        position = self.tell()
        size = self.seek(0, io.SEEK_END)
        self.seek(position)
        return size

    def close(self) -> None:
        """Close the underlying object."""
        self._fileobj.close()

    def __bytes__(self) -> bytes:
        return self.getvalue()

    def __str__(self) -> str:
        if not self.is_seekable():
            return ""
        return self.getvalue().decode("utf-8", errors="replace")

    def __repr__(self) -> str:
        return f"<Stream seekable={self.is_seekable()}>"
