import json
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any, Dict, Iterator, List, Optional

import pytest

from reqline.transport.engine import TransportResult
from reqline.transport.options import Option


class EchoHandler(BaseHTTPRequestHandler):
    """
    Small httpbin-like handler.

    Every route answers with a JSON document describing the request it got,
    so tests can assert on what actually went over the wire.
    """

    protocol_version = "HTTP/1.1"

    def log_message(self, format: str, *args: Any) -> None:
        """Suppress server logs during testing."""

    def _payload(self) -> Dict[str, Any]:
        length = int(self.headers.get("Content-Length", 0))
        data = self.rfile.read(length).decode("utf-8") if length else ""
        form: Dict[str, str] = {}
        if self.headers.get("Content-Type") == "application/x-www-form-urlencoded":
            for pair in filter(None, data.split("&")):
                key, _, value = pair.partition("=")
                form[key] = value
        return {
            "method": self.command,
            "path": self.path,
            "headers": {k: v for k, v in self.headers.items()},
            "data": data,
            "form": form,
        }

    def _send_json(
        self, status: int, document: Dict[str, Any], extra: Optional[List] = None
    ) -> None:
        body = json.dumps(document).encode("utf-8")
        self.send_response(status)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(body)))
        for name, value in extra or []:
            self.send_header(name, value)
        self.end_headers()
        if self.command != "HEAD":
            self.wfile.write(body)

    def _dispatch(self) -> None:
        payload = self._payload()

        if self.path == "/chunked":
            self.send_response(200)
            self.send_header("Content-Type", "text/plain")
            self.send_header("Transfer-Encoding", "chunked")
            self.end_headers()
            for part in (b"Hello, ", b"chunked ", b"world"):
                size_line = f"{len(part):x}\r\n".encode("ascii")
                self.wfile.write(size_line + part + b"\r\n")
            self.wfile.write(b"0\r\n\r\n")
            return

        if self.path == "/multi":
            self._send_json(
                200,
                payload,
                extra=[
                    ("X-Multi", "one"),
                    ("X-Multi", "two"),
                    ("Vary", "Accept, Origin"),
                ],
            )
            return

        if self.path == "/no-content":
            self.send_response(204)
            self.end_headers()
            return

        if self.path.startswith("/status/"):
            self._send_json(int(self.path.rsplit("/", 1)[1]), payload)
            return

        self._send_json(200, payload)

    do_GET = _dispatch
    do_POST = _dispatch
    do_PUT = _dispatch
    do_PATCH = _dispatch
    do_DELETE = _dispatch
    do_HEAD = _dispatch


@pytest.fixture(scope="session")
def http_server() -> Iterator[str]:
    """Run the echo server on a free local port; yields its base URL."""
    server = ThreadingHTTPServer(("127.0.0.1", 0), EchoHandler)
    server.daemon_threads = True
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    host, port = server.server_address[:2]
    try:
        yield f"http://{host}:{port}"
    finally:
        server.shutdown()
        server.server_close()


class RecordingTransport:
    """Transport double that records option sets and replays one result."""

    def __init__(self, result: Optional[TransportResult] = None) -> None:
        head = b"HTTP/1.1 200 OK\r\nContent-Length: 2\r\n\r\n"
        self.result = result or TransportResult(
            raw=head + b"ok",
            http_code=200,
            header_size=len(head),
            size_download=2,
        )
        self.calls: List[Dict[Option, Any]] = []

    def perform(self, options: Dict[Option, Any]) -> TransportResult:
        self.calls.append(dict(options))
        return self.result


@pytest.fixture
def recording_transport() -> RecordingTransport:
    """Transport double returning a small 200 response."""
    return RecordingTransport()
