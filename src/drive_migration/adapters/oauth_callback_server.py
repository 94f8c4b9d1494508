from __future__ import annotations

import http.server
import logging
import socketserver
import threading
from typing import Callable
from urllib.parse import parse_qs, urlparse

from drive_migration.domain.models import SignInResult

LOGGER = logging.getLogger(__name__)

_RESPONSE_BODY = (
    b"<html><body><h3>Authorization received. You can close this tab.</h3></body></html>"
)


class _ReusableTCPServer(socketserver.TCPServer):
    allow_reuse_address = True


def callback_bind_address(redirect_uri: str) -> tuple[str, int]:
    parsed = urlparse(redirect_uri)
    host = parsed.hostname or "localhost"
    port = parsed.port
    if port is None:
        port = 443 if parsed.scheme == "https" else 80
    return host, port


class OAuthCallbackServer:
    """Serves a single OAuth redirect on the loopback address in a daemon thread."""

    def __init__(self, redirect_uri: str) -> None:
        self._host, self._port = callback_bind_address(redirect_uri)
        self._lock = threading.Lock()
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    def start(self, on_result: Callable[[SignInResult], None]) -> bool:
        with self._lock:
            if self._running:
                return False
            self._running = True

        class OAuthHandler(http.server.BaseHTTPRequestHandler):
            def do_GET(self) -> None:
                params = parse_qs(urlparse(self.path).query)
                result = SignInResult(
                    code=params.get("code", [None])[0],
                    state=params.get("state", [None])[0],
                    error=params.get("error", [None])[0],
                )
                self.send_response(200)
                self.send_header("Content-Type", "text/html")
                self.end_headers()
                self.wfile.write(_RESPONSE_BODY)
                on_result(result)

            def log_message(self, format: str, *args: object) -> None:
                return

        def _serve() -> None:
            try:
                with _ReusableTCPServer((self._host, self._port), OAuthHandler) as httpd:
                    httpd.handle_request()
            except OSError as exc:
                LOGGER.warning(
                    "OAuth callback server failed to start on %s:%s", self._host, self._port
                )
                on_result(
                    SignInResult(
                        code=None,
                        state=None,
                        error=f"OAuth callback server failed to start on {self._host}:{self._port}: {exc}",
                    )
                )
            finally:
                with self._lock:
                    self._running = False

        threading.Thread(target=_serve, daemon=True).start()
        return True
