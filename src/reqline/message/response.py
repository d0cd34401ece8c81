"""src/reqline/message/response.py

HTTP Response message.

A response is assembled by :class:`reqline.Client` from the transport's raw
output; this module only holds the resulting value and a few decoding
helpers.
"""

import copy
import json as std_json
from http import HTTPStatus
from typing import Any, Mapping, Optional

from reqline.exceptions import InvalidResponseError
from reqline.http.headers import Headers, HeaderValues
from reqline.message.stream import Stream

__all__ = ["Response"]


def _default_reason(status_code: int) -> str:
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return ""


class Response:
    """
    Represents an HTTP response.

    Attributes:
        status_code: HTTP status code as integer.
        reason_phrase: Reason phrase (defaults to the standard one).
        headers: Response headers, one ordered value list per name.
        body: Response body stream.
    """

    __slots__ = ("status_code", "reason_phrase", "headers", "body")

    def __init__(
        self,
        status_code: int = 200,
        headers: Optional[Mapping[str, HeaderValues]] = None,
        body: Optional[Stream] = None,
        reason_phrase: str = "",
    ) -> None:
        self.status_code: int = status_code
        self.reason_phrase: str = reason_phrase or _default_reason(status_code)
        self.headers: Headers = Headers(headers)
        self.body: Stream = body if body is not None else Stream()

    @property
    def status(self) -> int:
        """Alias for status_code for compatibility."""
        return self.status_code

    def _clone(self) -> "Response":
        clone = copy.copy(self)
        clone.headers = self.headers.copy()
        return clone

    def with_status(self, status_code: int, reason_phrase: str = "") -> "Response":
        """Copy with another status."""
        clone = self._clone()
        clone.status_code = status_code
        clone.reason_phrase = reason_phrase or _default_reason(status_code)
        return clone

    def with_header(self, name: str, values: HeaderValues) -> "Response":
        """Copy with ``name`` replaced."""
        clone = self._clone()
        clone.headers.set(name, values)
        return clone

    def with_added_header(self, name: str, values: HeaderValues) -> "Response":
        """Copy with values appended to ``name``."""
        clone = self._clone()
        clone.headers.add(name, values)
        return clone

    def with_body(self, body: Stream) -> "Response":
        """Copy with another body stream."""
        clone = self._clone()
        clone.body = body
        return clone

    @property
    def content(self) -> bytes:
        """Whole body as bytes."""
        return self.body.getvalue()

    def text(self, encoding: Optional[str] = None) -> str:
        """
        Return decoded text.

        The charset from ``Content-Type`` is used when ``encoding`` is not
        given, falling back to UTF-8.
        """
        if encoding is None:
            content_type = self.headers.line("Content-Type")
            if "charset=" in content_type:
                encoding = content_type.split("charset=")[-1].split(";")[0].strip()
            else:
                encoding = "utf-8"  # default fallback

        try:
            return self.content.decode(encoding, errors="replace")
        except LookupError:
            return self.content.decode("utf-8", errors="replace")

    def json(self) -> Any:
        """
        Returns JSON-decoded body.
        """
        try:
            return std_json.loads(self.text())
        except (std_json.JSONDecodeError, TypeError, ValueError) as exc:
            raise InvalidResponseError("Failed to decode JSON response") from exc

    def __repr__(self) -> str:
        return f"<Response [{self.status_code}]>"
