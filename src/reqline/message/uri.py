"""src/reqline/message/uri.py

URI value object for Reqline.
"""

import urllib.parse
from typing import Optional

__all__ = ["Uri"]


class Uri:
    """
    Parsed URI.

    Attributes:
        scheme: Lower-cased scheme (``http``, ``https``...).
        host: Lower-cased host name, without brackets for IPv6 literals.
        port: Explicit port, or ``None`` when the URI carries none.
        user_info: Raw ``user[:password]`` part, ``""`` when absent.
        path: Path component.
        query: Query string without the leading ``?``.
        fragment: Fragment without the leading ``#``.
    """

    __slots__ = ("scheme", "host", "port", "user_info", "path", "query", "fragment")

    def __init__(self, uri: str = ""):
        parsed = urllib.parse.urlsplit(uri)
        self.scheme: str = parsed.scheme.lower()
        self.host: str = (parsed.hostname or "").lower()
        try:
            self.port: Optional[int] = parsed.port
        except ValueError as exc:
            raise ValueError(f"Invalid port in URI: {uri!r}") from exc

        netloc = parsed.netloc
        self.user_info: str = netloc.rsplit("@", 1)[0] if "@" in netloc else ""
        self.path: str = parsed.path
        self.query: str = parsed.query
        self.fragment: str = parsed.fragment

    @property
    def authority(self) -> str:
        """``[user-info@]host[:port]``."""
        if not self.host:
            return ""
        host = f"[{self.host}]" if ":" in self.host else self.host
        authority = host
        if self.user_info:
            authority = f"{self.user_info}@{authority}"
        if self.port is not None:
            authority += f":{self.port}"
        return authority

    @property
    def request_target(self) -> str:
        """Origin-form target used on the request line."""
        target = self.path or "/"
        if self.query:
            target += f"?{self.query}"
        return target

    def __str__(self) -> str:
        uri = ""
        if self.scheme:
            uri += f"{self.scheme}:"
        authority = self.authority
        if authority or self.scheme == "file":
            uri += f"//{authority}"

        path = self.path
        if authority and path and not path.startswith("/"):
            path = f"/{path}"
        uri += path

        if self.query:
            uri += f"?{self.query}"
        if self.fragment:
            uri += f"#{self.fragment}"
        return uri

    def __repr__(self) -> str:
        return f"Uri({str(self)!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Uri):
            return str(self) == str(other)
        if isinstance(other, str):
            return str(self) == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(str(self))
