"""A gRPC server that runs until a stop event is set."""

from __future__ import annotations

import threading
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from typing import Any

import grpc

DEFAULT_GRACE = 30.0


class AlreadyStartedError(Exception):
    """start() was called a second time."""

    def __init__(self) -> None:
        super().__init__("already started")


class GrpcServer:
    """Serves gRPC on a port and stops gracefully once `stop` is set."""

    def __init__(
        self,
        stop: threading.Event,
        port: int,
        *,
        handlers: Sequence[Any] = (),
        interceptors: Sequence[Any] = (),
        options: Sequence[tuple[str, Any]] = (),
        max_workers: int | None = None,
        grace: float | None = DEFAULT_GRACE,
    ) -> None:
        self.port = port
        self._stop = stop
        self._handlers = tuple(handlers)
        self._interceptors = tuple(interceptors)
        self._options = tuple(options)
        self._max_workers = max_workers
        self._grace = grace
        self._lock = threading.Lock()
        self._started = False
        self._done = threading.Event()
        self._error: BaseException | None = None
        self._server: grpc.Server | None = None

    def start(self) -> None:
        """Bind the port and begin serving.

        Raises AlreadyStartedError on a second call and OSError when the
        port cannot be bound.
        """
        with self._lock:
            if self._started:
                raise AlreadyStartedError()
            self._started = True

        server = grpc.server(
            ThreadPoolExecutor(max_workers=self._max_workers),
            handlers=self._handlers or None,
            interceptors=self._interceptors or None,
            options=self._options or None,
        )
        try:
            bound = server.add_insecure_port(f"[::]:{self.port}")
        except RuntimeError as err:
            raise OSError(f"cannot listen on port {self.port}") from err
        if bound == 0:
            raise OSError(f"cannot listen on port {self.port}")
        server.start()
        self._server = server
        threading.Thread(target=self._stop_when_asked, daemon=True).start()

    def _stop_when_asked(self) -> None:
        self._stop.wait()
        try:
            if self._server is not None:
                self._server.stop(self._grace).wait()
        except Exception as err:
            self._error = err
        finally:
            self._done.set()

    def wait(self) -> BaseException | None:
        """Block until the server has stopped; return its error, if any."""
        if not self._started:
            raise RuntimeError("server is not started")
        self._done.wait()
        return self._error