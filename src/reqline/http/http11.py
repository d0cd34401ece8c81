"""src/reqline/http/http11.py

HTTP/1.1 response head parsing and raw response splitting.
"""

from typing import Dict, List, NamedTuple, Tuple

from reqline.exceptions import InvalidResponseError, ProtocolError

__all__ = ["StatusLine", "ResponseHead", "HttpParser", "split_raw_response"]


class StatusLine(NamedTuple):
    """Parsed ``HTTP/1.1 200 OK`` line."""

    version: str
    status_code: int
    reason: str


class ResponseHead(NamedTuple):
    """Status line plus header fields of one response head."""

    status: StatusLine
    fields: Dict[str, List[str]]


def split_raw_response(
    raw: bytes, header_size: int, size_download: int
) -> Tuple[bytes, bytes]:
    """
    Split a combined ``headers + body`` buffer using transport metadata.

    Args:
        raw: Buffer holding every header block followed by the body.
        header_size: Byte length of the header part, as reported.
        size_download: Byte length of the body, as reported.

    Returns:
        ``(header_block, body)``. The body is empty when ``size_download``
        is zero, whatever else the buffer contains (HEAD responses).
    """
    body = b"" if size_download == 0 else raw[-size_download:]
    header_block = raw[:header_size]
    return header_block, body


class HttpParser:
    """
    HTTP/1.1 response head parser used by the socket transport.

    Handles:
    - Status Line parsing.
    - Header field parsing (lower-cased names, duplicates kept in order).
    - Head size and field count limits.
    """

    def __init__(self, max_header_size: int = 65536, max_field_count: int = 200):
        self.max_header_size = max_header_size
        self.max_field_count = max_field_count

    def check_size(self, head: bytes) -> None:
        """
        Raises:
            ProtocolError: If a head exceeds ``max_header_size``.
        """
        if len(head) > self.max_header_size:
            raise ProtocolError(
                f"Headers exceed maximum size of {self.max_header_size} bytes"
            )

    def parse_status_line(self, line: str) -> StatusLine:
        """
        Parse ``HTTP/x.y CODE [reason]``.

        Raises:
            InvalidResponseError: If the line is not a status line.
        """
        parts = line.strip().split(" ", 2)
        if len(parts) < 2 or not parts[0].startswith("HTTP/"):
            raise InvalidResponseError(f"Invalid status line: {line!r}")
        try:
            status_code = int(parts[1])
        except ValueError as exc:
            raise InvalidResponseError(f"Invalid status line: {line!r}") from exc
        if not 100 <= status_code <= 999:
            raise InvalidResponseError(f"Invalid status code: {status_code}")
        reason = parts[2] if len(parts) > 2 else ""
        return StatusLine(parts[0], status_code, reason)

    def parse_head(self, head: bytes) -> ResponseHead:
        """
        Parse one response head (status line and fields, blank line optional).

        Raises:
            ProtocolError: If the head is oversized.
            InvalidResponseError: If the status line is invalid.
        """
        self.check_size(head)
        text = head.decode("iso-8859-1")

        lines = text.replace("\r\n", "\n").split("\n")
        status = self.parse_status_line(lines[0])
        fields = self._parse_fields(lines[1:])
        return ResponseHead(status, fields)

    def _parse_fields(self, lines: List[str]) -> Dict[str, List[str]]:
        """
        Parse header lines into ``{lower-name: [values]}``.

        Used for framing decisions only, so names are normalised and
        duplicate fields are kept as separate values.
        """
        fields: Dict[str, List[str]] = {}
        count = 0

        for line in lines:
            if not line.strip() or ":" not in line:
                continue

            count += 1
            if count > self.max_field_count:
                raise ProtocolError(
                    f"Too many header fields (max {self.max_field_count})"
                )

            key, value = line.split(":", 1)
            fields.setdefault(key.strip().lower(), []).append(value.strip())

        return fields
