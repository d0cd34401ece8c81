"""src/reqline/transport/options.py

Transport option keys and the fixed defaults every client starts from.
"""

import enum
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Mapping, Optional

__all__ = [
    "Option",
    "OptionSet",
    "DEFAULT_OPTIONS",
    "METHOD_OPTIONS",
    "merge_options",
]


class Option(enum.Enum):
    """
    Keys understood by a transport engine.

    The names follow the long-standing libcurl option names so that option
    sets read the same way as a curl invocation.
    """

    # Output and connection policy
    HEADER = "header"
    HEADER_OUT = "header_out"
    RETURN_TRANSFER = "return_transfer"
    FORBID_REUSE = "forbid_reuse"
    FRESH_CONNECT = "fresh_connect"

    # Method markers
    HTTPGET = "httpget"
    POST = "post"
    POSTFIELDS = "postfields"
    CUSTOMREQUEST = "customrequest"
    NOBODY = "nobody"

    # Target
    URL = "url"
    PORT = "port"
    USERPWD = "userpwd"
    HTTPHEADER = "httpheader"

    # Tuning
    TIMEOUT = "timeout"
    CONNECTTIMEOUT = "connecttimeout"
    SSL_VERIFYPEER = "ssl_verifypeer"
    USERAGENT = "useragent"


OptionSet = Dict[Option, Any]

DEFAULT_OPTIONS: Mapping[Option, Any] = MappingProxyType(
    {
        Option.HEADER: True,
        Option.HEADER_OUT: True,
        Option.RETURN_TRANSFER: True,
        Option.FORBID_REUSE: True,
        Option.FRESH_CONNECT: True,
    }
)

# Cleared before every method resolution.
METHOD_OPTIONS: FrozenSet[Option] = frozenset(
    {
        Option.HTTPGET,
        Option.POST,
        Option.POSTFIELDS,
        Option.CUSTOMREQUEST,
        Option.NOBODY,
    }
)


def merge_options(options: Optional[Mapping[Any, Any]] = None) -> OptionSet:
    """
    Merge caller options over :data:`DEFAULT_OPTIONS`.

    Keys may be :class:`Option` members or their string values
    (``"timeout"``), which makes option sets easy to load from config files.

    Raises:
        ValueError: If a key does not name a known option.
    """
    merged: OptionSet = dict(DEFAULT_OPTIONS)
    for key, value in (options or {}).items():
        if not isinstance(key, Option):
            try:
                key = Option(str(key).lower())
            except ValueError as exc:
                raise ValueError(f"Unknown transport option: {key!r}") from exc
        merged[key] = value
    return merged
