"""Embedded web server for the viewer.

Wraps :class:`uvicorn.Server` so the viewer can be started and stopped from
a background thread (for a desktop front end) or run in the foreground
(for ``harview serve``).
"""

from __future__ import annotations

import threading
import time
import webbrowser

import uvicorn
from fastapi import FastAPI

from harview.logging import get_logger

LOG = get_logger(__name__)

STARTUP_TIMEOUT_SECONDS = 10.0


def open_in_browser(url: str) -> bool:
    """Open ``url`` in the default browser.

    Returns:
        True if a browser was launched.
    """
    try:
        opened = webbrowser.open(url)
    except webbrowser.Error as exc:
        LOG.warning("browser_open_failed", url=url, error=str(exc))
        return False
    if not opened:
        LOG.warning("browser_open_failed", url=url, error="no runnable browser")
    return opened


class ViewerServer:
    """Start/stop wrapper around a uvicorn server bound to one host/port."""

    def __init__(self, app: FastAPI, host: str = "127.0.0.1", port: int = 8081) -> None:
        self.app = app
        self.host = host
        self.port = port
        self._server: uvicorn.Server | None = None
        self._thread: threading.Thread | None = None

    @property
    def url(self) -> str:
        """Address the viewer is served at."""
        host = "localhost" if self.host in ("0.0.0.0", "127.0.0.1") else self.host
        return f"http://{host}:{self.port}"

    @property
    def is_running(self) -> bool:
        """True while the background server thread is alive."""
        return self._thread is not None and self._thread.is_alive()

    def _build_server(self) -> uvicorn.Server:
        config = uvicorn.Config(
            self.app,
            host=self.host,
            port=self.port,
            log_level="warning",
            access_log=False,
        )
        return uvicorn.Server(config)

    def run(self) -> None:
        """Serve in the current thread until interrupted."""
        self._server = self._build_server()
        LOG.info("server_started", url=self.url)
        self._server.run()
        LOG.info("server_stopped", url=self.url)

    def start(self) -> None:
        """Serve from a daemon thread and wait until the socket is bound.

        Raises:
            RuntimeError: If the server is already running or did not come up
                within the startup timeout.
        """
        if self.is_running:
            raise RuntimeError(f"Server already running at {self.url}")

        server = self._build_server()
        self._server = server
        self._thread = threading.Thread(target=server.run, name="harview-server", daemon=True)
        self._thread.start()

        deadline = time.monotonic() + STARTUP_TIMEOUT_SECONDS
        while not server.started:
            if not self._thread.is_alive() or time.monotonic() > deadline:
                self._thread = None
                raise RuntimeError(f"Server failed to start at {self.url}")
            time.sleep(0.05)
        LOG.info("server_started", url=self.url)

    def wait(self, timeout: float | None = None) -> None:
        """Block until the server thread exits or ``timeout`` elapses."""
        if self._thread is not None:
            self._thread.join(timeout)

    def stop(self, timeout: float = 5.0) -> None:
        """Ask the server to exit and wait for its thread. No-op if stopped."""
        if self._server is None or self._thread is None:
            return
        self._server.should_exit = True
        self._thread.join(timeout)
        self._thread = None
        self._server = None
        LOG.info("server_stopped", url=self.url)
