"""A threaded HTTP server for a WSGI application, run in the background."""

from __future__ import annotations

import logging
import queue
import threading
from socketserver import ThreadingMixIn
from typing import Any, Callable
from wsgiref.simple_server import WSGIRequestHandler, WSGIServer, make_server

DEFAULT_ADDRESS = ":80"
DEFAULT_READ_TIMEOUT = 5.0
DEFAULT_WRITE_TIMEOUT = 5.0
DEFAULT_IDLE_TIMEOUT = 5.0

_log = logging.getLogger(__name__)


class _ThreadingWSGIServer(ThreadingMixIn, WSGIServer):
    daemon_threads = True
    connection_timeout: float | None = None


class _QuietHandler(WSGIRequestHandler):
    def setup(self) -> None:
        self.timeout = self.server.connection_timeout  # type: ignore[attr-defined]
        super().setup()

    def log_message(self, format: str, *args: Any) -> None:
        """Send request logs to the module logger instead of stderr."""
        _log.debug("%s - %s", self.address_string(), format % args)


class HttpServer:
    """Serves a WSGI application on a background thread.

    Times are in seconds. Each connection gets a socket timeout equal to the
    larger of the read and write timeouts; responses close the connection,
    so no connection stays idle longer than that.
    """

    def __init__(
        self,
        app: Callable[..., Any],
        *,
        port: int | None = None,
        read_timeout: float = DEFAULT_READ_TIMEOUT,
        write_timeout: float = DEFAULT_WRITE_TIMEOUT,
        idle_timeout: float = DEFAULT_IDLE_TIMEOUT,
    ) -> None:
        self.app = app
        self.address = DEFAULT_ADDRESS
        if port is not None:
            if not 0 <= port <= 0xFFFF:
                raise ValueError(f"port {port} is out of range")
            self.address = f":{port}"
        self.read_timeout = read_timeout
        self.write_timeout = write_timeout
        self.idle_timeout = idle_timeout
        self._notify: queue.Queue[BaseException | None] = queue.Queue(maxsize=1)
        self._lock = threading.Lock()
        self._server: _ThreadingWSGIServer | None = None
        self._closed = False

    def start(self) -> None:
        """Begin listening and serving; failures are sent to notify()."""
        threading.Thread(target=self._serve, daemon=True).start()

    def _serve(self) -> None:
        error: BaseException | None = None
        try:
            with self._lock:
                if self._closed:
                    self._notify.put(None)
                    return
                host, _, port = self.address.rpartition(":")
                server = make_server(
                    host,
                    int(port),
                    self.app,
                    server_class=_ThreadingWSGIServer,
                    handler_class=_QuietHandler,
                )
                server.connection_timeout = max(self.read_timeout, self.write_timeout)
                self._server = server
            try:
                server.serve_forever(poll_interval=0.1)
            finally:
                server.server_close()
        except Exception as err:
            error = err
        self._notify.put(error)

    def notify(self) -> queue.Queue[BaseException | None]:
        """The queue that receives the serving error, or None after shutdown."""
        return self._notify

    def shutdown(self) -> None:
        """Stop accepting connections and wait for the serve loop to end."""
        with self._lock:
            self._closed = True
            server = self._server
        if server is not None:
            server.shutdown()