"""src/reqline/message/factories.py

Factories the client uses to build responses and body streams.
"""

from typing import IO, Union

from reqline.message.response import Response
from reqline.message.stream import Stream

__all__ = ["ResponseFactory", "StreamFactory"]


class ResponseFactory:
    """Creates empty responses."""

    def create_response(self, code: int = 200, reason_phrase: str = "") -> Response:
        """Response with the given status, no headers and an empty body."""
        return Response(code, reason_phrase=reason_phrase)


class StreamFactory:
    """Creates body streams."""

    def create_stream(self, content: Union[bytes, str] = b"") -> Stream:
        """Seekable in-memory stream holding ``content``."""
        return Stream(content)

    def create_stream_from_file(self, fileobj: IO[bytes]) -> Stream:
        """Stream over an already open binary file object."""
        return Stream(fileobj)
