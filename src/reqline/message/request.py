"""src/reqline/message/request.py

HTTP request message.
"""

import copy
from typing import IO, Mapping, Optional, Union

from reqline.http.headers import Headers, HeaderValues
from reqline.message.stream import Stream
from reqline.message.uri import Uri

__all__ = ["Request"]

BodyLike = Union[Stream, bytes, str, IO[bytes], None]


def _as_stream(body: BodyLike) -> Stream:
    if isinstance(body, Stream):
        return body
    return Stream(body)


class Request:
    """
    An outgoing HTTP request.

    Instances are treated as values: the ``with_*`` methods return a
    modified copy and leave the original untouched.

    Attributes:
        method: Method token, kept exactly as given (no upper-casing).
        uri: Target :class:`Uri`.
        headers: Request :class:`Headers`.
        body: Request body :class:`Stream`.
    """

    __slots__ = ("method", "uri", "headers", "body")

    def __init__(
        self,
        method: str = "GET",
        uri: Union[str, Uri] = "",
        body: BodyLike = None,
        headers: Optional[Mapping[str, HeaderValues]] = None,
    ) -> None:
        self.method = method
        self.uri = uri if isinstance(uri, Uri) else Uri(uri)
        self.headers = Headers(headers)
        self.body = _as_stream(body)

    def _clone(self) -> "Request":
        clone = copy.copy(self)
        clone.headers = self.headers.copy()
        return clone

    def with_method(self, method: str) -> "Request":
        """Copy with another method."""
        clone = self._clone()
        clone.method = method
        return clone

    def with_uri(self, uri: Union[str, Uri]) -> "Request":
        """Copy targeting another URI."""
        clone = self._clone()
        clone.uri = uri if isinstance(uri, Uri) else Uri(uri)
        return clone

    def with_header(self, name: str, values: HeaderValues) -> "Request":
        """Copy with ``name`` replaced."""
        clone = self._clone()
        clone.headers.set(name, values)
        return clone

    def with_added_header(self, name: str, values: HeaderValues) -> "Request":
        """Copy with values appended to ``name``."""
        clone = self._clone()
        clone.headers.add(name, values)
        return clone

    def without_header(self, name: str) -> "Request":
        """Copy with ``name`` removed."""
        clone = self._clone()
        clone.headers.remove(name)
        return clone

    def with_body(self, body: BodyLike) -> "Request":
        """Copy with another body."""
        clone = self._clone()
        clone.body = _as_stream(body)
        return clone

    def __repr__(self) -> str:
        return f"<Request [{self.method} {self.uri}]>"
