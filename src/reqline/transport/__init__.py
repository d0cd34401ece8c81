"""src/reqline/transport/__init__.py

Transport layer module for Reqline.

This module provides the option keys a transport understands, the result
it returns, and the default blocking socket transport with TLS support.
"""

from .connection import Connection
from .engine import ErrorCode, SocketTransport, Transport, TransportResult
from .options import DEFAULT_OPTIONS, METHOD_OPTIONS, Option, OptionSet, merge_options

__all__ = [
    "Connection",
    "DEFAULT_OPTIONS",
    "ErrorCode",
    "METHOD_OPTIONS",
    "Option",
    "OptionSet",
    "SocketTransport",
    "Transport",
    "TransportResult",
    "merge_options",
]
