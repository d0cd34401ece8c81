"""src/reqline/client/resolver.py

Translation of a :class:`Request` into a transport option set.

Every function here builds new data; the base options handed to
:func:`resolve` are never modified, so resolving one request cannot leak
method markers or headers into the next.
"""

import enum
from typing import Any, Callable, Dict, Mapping

from reqline.exceptions import InvalidBodyError, InvalidMethodError
from reqline.http.headers import build_header_lines
from reqline.message.request import Request
from reqline.message.uri import Uri
from reqline.transport.options import METHOD_OPTIONS, Option, OptionSet

__all__ = [
    "Method",
    "resolve",
    "resolve_method",
    "resolve_headers",
    "resolve_uri",
    "resolve_port",
]


class Method(str, enum.Enum):
    """Request methods the client can send."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    HEAD = "HEAD"


def _seekable_payload(request: Request) -> bytes:
    if not request.body.is_seekable():
        raise InvalidBodyError()
    return request.body.getvalue()


def _get(_: Request) -> OptionSet:
    return {Option.HTTPGET: True}


def _post(request: Request) -> OptionSet:
    payload = _seekable_payload(request)
    return {Option.POST: True, Option.POSTFIELDS: payload}


def _put(request: Request) -> OptionSet:
    # PUT goes out through the POST transfer with the method token overridden.
    payload = _seekable_payload(request)
    return {
        Option.POST: True,
        Option.CUSTOMREQUEST: Method.PUT.value,
        Option.POSTFIELDS: payload,
    }


def _custom(method: Method) -> Callable[[Request], OptionSet]:
    def _resolve(_: Request) -> OptionSet:
        return {Option.CUSTOMREQUEST: method.value}

    return _resolve


def _head(_: Request) -> OptionSet:
    return {Option.CUSTOMREQUEST: Method.HEAD.value, Option.NOBODY: True}


_METHOD_RESOLVERS: Dict[Method, Callable[[Request], OptionSet]] = {
    Method.GET: _get,
    Method.POST: _post,
    Method.PUT: _put,
    Method.PATCH: _custom(Method.PATCH),
    Method.DELETE: _custom(Method.DELETE),
    Method.HEAD: _head,
}


def resolve_method(request: Request) -> OptionSet:
    """
    Method markers for ``request``.

    The method token must match one of :class:`Method` exactly (case
    included).

    Raises:
        InvalidMethodError: For any other token.
        InvalidBodyError: If POST or PUT carry a body that cannot be rewound.
    """
    try:
        method = Method(request.method)
    except ValueError as exc:
        raise InvalidMethodError() from exc
    return _METHOD_RESOLVERS[method](request)


def resolve_headers(request: Request) -> OptionSet:
    """Header lines for ``request``, one ``Name: v1, v2`` line per name."""
    return {Option.HTTPHEADER: build_header_lines(request.headers)}


def resolve_port(uri: Uri) -> int:
    """
    Port to connect to.

    An explicit port always wins. Otherwise the port falls back to 80
    first and is then switched to 443 for ``https``.
    """
    port = uri.port or 80
    if uri.scheme == "https" and not uri.port:
        port = 443
    return port


def resolve_uri(request: Request) -> OptionSet:
    """Target URL, port and credentials for ``request``."""
    uri = request.uri
    options: OptionSet = {}

    if uri.user_info:
        options[Option.USERPWD] = uri.user_info

    options[Option.PORT] = resolve_port(uri)
    options[Option.URL] = str(uri)
    return options


def resolve(base_options: Mapping[Option, Any], request: Request) -> OptionSet:
    """
    Build the option set for one request.

    Method markers present in ``base_options`` are dropped first, then the
    method, header and URI options of ``request`` are layered on top.

    Raises:
        InvalidMethodError: If the method is not supported.
        InvalidBodyError: If the body cannot be re-read for POST/PUT.
    """
    options: OptionSet = {
        key: value for key, value in base_options.items() if key not in METHOD_OPTIONS
    }
    options.update(resolve_method(request))
    options.update(resolve_headers(request))
    options.update(resolve_uri(request))
    return options
