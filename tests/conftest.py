"""Shared fixtures: mock WLED controllers served over local HTTP."""

import socket
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest

from tests.helpers import cfg_body


class _WledServer(ThreadingHTTPServer):
    daemon_threads = True

    def __init__(self, routes):
        super().__init__(("127.0.0.1", 0), _WledHandler)
        self.routes = routes
        self.requests = []

    @property
    def port(self) -> int:
        return self.server_address[1]


class _WledHandler(BaseHTTPRequestHandler):
    def do_GET(self):  # noqa: N802
        self.server.requests.append(self.path)
        route = self.server.routes.get(self.path)
        if route is None:
            status, body = 404, b"not found"
        elif isinstance(route, tuple):
            status, body = route
        else:
            status, body = 200, route
        self.send_response(status)
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format, *args):
        pass


@pytest.fixture
def wled_server():
    """Factory starting a mock WLED: wled_server({'/cfg.json': b'...'})."""
    servers = []

    def _start(routes):
        server = _WledServer(routes)
        threading.Thread(target=server.serve_forever, daemon=True).start()
        servers.append(server)
        return server

    yield _start

    for server in servers:
        server.shutdown()
        server.server_close()


@pytest.fixture
def wled_device(wled_server):
    """Factory starting a mock WLED with cfg.json and presets.json."""

    def _start(name, presets=b"presets data"):
        routes = {"/cfg.json": cfg_body(name)}
        if presets is not None:
            routes["/presets.json"] = presets
        return wled_server(routes)

    return _start


@pytest.fixture
def unused_port():
    """A localhost port with nothing listening on it."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]

