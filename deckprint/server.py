"""
Static file server for the deck tree.

Serves the root directory over HTTP on a background daemon thread so the
headless browser can load decks by URL. Supports clean URLs: a request for
``/presentations/intro`` resolves to ``presentations/intro.html``.
"""

from __future__ import annotations

import contextlib
import http.server
import logging
import os
import threading
from functools import partial
from pathlib import Path
from typing import Iterator

from deckprint.config import HOST, PORT

log = logging.getLogger(__name__)


class ServerBindError(OSError):
    """The static server could not bind its port."""


class StaticServer(http.server.ThreadingHTTPServer):
    daemon_threads = True
    # A second run on the same port must fail to bind
    allow_reuse_port = False


class CleanUrlHandler(http.server.SimpleHTTPRequestHandler):
    """SimpleHTTPRequestHandler that makes the ``.html`` extension optional."""

    def translate_path(self, path: str) -> str:
        fs_path = super().translate_path(path)
        if not os.path.exists(fs_path) and os.path.isfile(fs_path + ".html"):
            return fs_path + ".html"
        return fs_path

    def log_message(self, format, *args):
        log.debug("%s - %s", self.address_string(), format % args)


def start_static_server(
    root: Path, port: int = PORT, host: str = HOST,
) -> StaticServer:
    """Bind *port* and serve *root* on a background daemon thread.

    Raises ServerBindError (an OSError) if the port cannot be bound.
    """
    handler = partial(CleanUrlHandler, directory=str(Path(root).resolve()))
    try:
        server = StaticServer((host, port), handler)
    except OSError as e:
        raise ServerBindError(e.errno, f"Could not bind {host}:{port}: {e.strerror}") from e
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    log.info("Serving %s at %s", Path(root).resolve(), server_url(server, host))
    return server


def stop_static_server(server: StaticServer) -> None:
    """Stop serving and release the listening socket."""
    if server.socket.fileno() == -1:
        return
    server.shutdown()
    server.server_close()
    log.info("Static server stopped")


def server_url(server: StaticServer, host: str = HOST) -> str:
    return f"http://{host}:{server.server_address[1]}"


@contextlib.contextmanager
def serve_static(
    root: Path, port: int = PORT, host: str = HOST,
) -> Iterator[StaticServer]:
    server = start_static_server(root, port, host)
    try:
        yield server
    finally:
        stop_static_server(server)
