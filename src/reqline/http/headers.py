"""src/reqline/http/headers.py

HTTP header management and the header codec for Reqline.

``Headers`` stores every header as an ordered list of values behind a
case-insensitive name. ``build_header_lines`` and ``parse_header_block``
convert between that shape and the ``Name: v1, v2`` lines a transport
sends and receives.
"""

from typing import (
    Any,
    Dict,
    Iterable,
    Iterator,
    List,
    Mapping,
    Optional,
    Tuple,
    Union,
    cast,
)

__all__ = ["Headers", "HeaderValues", "build_header_lines", "parse_header_block"]

HeaderValues = Union[str, Iterable[str]]


def _as_list(values: HeaderValues) -> List[str]:
    if isinstance(values, str):
        return [values]
    return [str(v) for v in values]


class Headers(Mapping[str, List[str]]):
    """
    Case-insensitive, order-preserving header mapping.

    Iteration yields header names with the casing they were first set with;
    values are lists. ``line(name)`` gives the comma-joined form.
    """

    __slots__ = ("_headers", "_names")

    def __init__(
        self,
        headers: Optional[
            Union[Mapping[str, HeaderValues], Iterable[Tuple[str, HeaderValues]]]
        ] = None,
    ):
        self._headers: Dict[str, List[str]] = {}
        self._names: Dict[str, str] = {}
        if headers:
            items = headers.items() if isinstance(headers, Mapping) else headers
            for k, v in items:
                self.add(k, v)

    def __getitem__(self, key: str) -> List[str]:
        return self._headers[key.lower()]

    def __iter__(self) -> Iterator[str]:
        return iter(self._names.values())

    def __len__(self) -> int:
        return len(self._headers)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key.lower() in self._headers

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Headers):
            return self.as_dict() == other.as_dict()
        if isinstance(other, Mapping):
            return self.as_dict() == {k: _as_list(v) for k, v in other.items()}
        return NotImplemented

    def __repr__(self) -> str:
        return f"Headers({self.as_dict()!r})"

    def get(self, key: str, default: Any = None) -> Any:
        """Values for ``key`` (case-insensitive) or ``default``."""
        return self._headers.get(key.lower(), default)

    def line(self, key: str) -> str:
        """Comma-joined value of ``key``, ``""`` if missing."""
        return ", ".join(self._headers.get(key.lower(), []))

    def set(self, key: str, values: HeaderValues) -> None:
        """Replace the values of ``key``; the stored casing becomes ``key``."""
        lowered = key.lower()
        self._headers.pop(lowered, None)
        self._names.pop(lowered, None)
        self._headers[lowered] = _as_list(values)
        self._names[lowered] = key

    def add(self, key: str, values: HeaderValues) -> None:
        """Append values to ``key``, keeping the first seen casing."""
        lowered = key.lower()
        if lowered in self._headers:
            self._headers[lowered].extend(_as_list(values))
        else:
            self._headers[lowered] = _as_list(values)
            self._names[lowered] = key

    def remove(self, key: str) -> None:
        """Drop ``key`` if present."""
        lowered = key.lower()
        self._headers.pop(lowered, None)
        self._names.pop(lowered, None)

    def copy(self) -> "Headers":
        """Independent copy."""
        return Headers(self.as_dict())

    def as_dict(self) -> Dict[str, List[str]]:
        """Plain ``{name: [values]}`` dict with original casing."""
        return {self._names[k]: list(v) for k, v in self._headers.items()}


def build_header_lines(headers: Mapping[str, HeaderValues]) -> List[str]:
    """
    Encode a header mapping as transport header lines.

    Each name produces exactly one ``Name: v1, v2`` line.

    Example:
        >>> build_header_lines({"X-Foo": ["a", "b"]})
        ['X-Foo: a, b']
    """
    return [
        f"{name}: {', '.join(_as_list(values))}" for name, values in headers.items()
    ]


def parse_header_block(block: Union[str, bytes]) -> Dict[str, List[str]]:
    """
    Decode a raw header block into ``{name: [values]}``.

    The block may hold a status line, several header blocks (interim
    responses) and blank lines. Lines without ``:`` are skipped and the
    last occurrence of a name wins.

    Every value is split on ``", "``. Headers such as ``Set-Cookie`` or
    ``Date`` whose single value contains that sequence come back split
    into several items; this is a known limitation of the format.
    """
    if isinstance(block, bytes):
        block = block.decode("iso-8859-1")
    text = cast(str, block)

    newline = "\r\n" if "\r\n" in text else "\n"
    headers: Dict[str, List[str]] = {}

    for line in text.split(newline):
        line = line.strip()
        if not line or ":" not in line:
            continue

        if ": " in line:
            name, raw_value = line.split(": ", 1)
        else:
            name, raw_value = line.split(":", 1)

        headers[name] = raw_value.split(", ")

    return headers
