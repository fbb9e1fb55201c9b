"""HTTP server with CORS, panic recovery and simple route registration."""

from __future__ import annotations

import logging
import re
import threading
from collections.abc import Awaitable, Callable
from typing import Any

import uvicorn
from starlette.applications import Starlette
from starlette.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.routing import Route
from starlette.types import ASGIApp, Message, Receive, Scope, Send

_log = logging.getLogger(__name__)

SHUTDOWN_TIMEOUT = 10

Handler = Callable[[Request], Response | Awaitable[Response]]

_PARAM = re.compile(r":([A-Za-z_][A-Za-z0-9_]*)")

_CORS_METHODS = ["GET", "HEAD", "PUT", "PATCH", "POST", "DELETE"]


def _route_path(path: str) -> str:
    """Turn ``:name`` parameters and a trailing ``*`` into route placeholders."""
    converted = _PARAM.sub(r"{\1}", path)
    if converted.endswith("*"):
        converted = converted[:-1] + "{path:path}"
    return converted


class _RecoverMiddleware:
    """Turns an unhandled error in a handler into a 500 response."""

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return
        response_started = False

        async def tracking_send(message: Message) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await self.app(scope, receive, tracking_send)
        except Exception as exc:
            _log.error("actor=server/recover event=recovered from handler error error=%s", exc)
            if response_started:
                return
            response = JSONResponse({"message": "Internal Server Error"}, status_code=500)
            await response(scope, receive, send)


class Operations:
    """Middleware and route registration on an application."""

    def __init__(self, app: Starlette) -> None:
        self._app = app

    def use_cors(self) -> None:
        """Allow cross-origin requests from any origin."""
        self._app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_methods=_CORS_METHODS,
        )

    def use_recover(self) -> None:
        """Answer 500 instead of failing when a handler raises."""
        self._app.add_middleware(_RecoverMiddleware)

    def get(self, path: str, handler: Handler) -> None:
        """Register a handler for GET requests on a path."""
        self._add(path, handler, "GET")

    def post(self, path: str, handler: Handler) -> None:
        """Register a handler for POST requests on a path."""
        self._add(path, handler, "POST")

    def _add(self, path: str, handler: Handler, method: str) -> None:
        self._app.router.routes.append(Route(_route_path(path), endpoint=handler, methods=[method]))


class HttpServer:
    """An HTTP server listening on one port."""

    def __init__(self, port: int, host: str = "0.0.0.0") -> None:
        self.port = port
        self.host = host
        self._app = Starlette()
        self._server: uvicorn.Server | None = None
        self._thread: threading.Thread | None = None
        self._finished = threading.Event()
        self._finished.set()
        self._stop_requested = False

    def get_operations(self) -> Operations:
        """Return the operations for registering middleware and routes."""
        return Operations(self._app)

    def app(self) -> Starlette:
        """Return the application the server runs."""
        return self._app

    def start(self) -> None:
        """Serve until stopped; raise OSError if the server cannot start."""
        _log.info("actor=server event=server is starting...")
        config = uvicorn.Config(
            self._app,
            host=self.host,
            port=self.port,
            log_config=None,
            log_level="warning",
            timeout_graceful_shutdown=SHUTDOWN_TIMEOUT,
        )
        server = uvicorn.Server(config)
        self._server = server
        self._thread = threading.current_thread()
        self._stop_requested = False
        self._finished.clear()
        try:
            server.run()
        except SystemExit as exc:
            _log.info("actor=server event=starting the server is failed")
            raise OSError(f"starting the server on port {self.port} failed") from exc
        finally:
            self._server = None
            self._finished.set()
        if not server.started and not self._stop_requested:
            _log.info("actor=server event=starting the server is failed")
            raise OSError(f"starting the server on port {self.port} failed")

    def stop(self) -> None:
        """Shut the server down gracefully, waiting up to ten seconds."""
        _log.info("actor=server event=shutting down the server gracefully...")
        server = self._server
        if server is None:
            _log.info("actor=server event=the server is shut down gracefully")
            return
        self._stop_requested = True
        server.should_exit = True
        if threading.current_thread() is not self._thread:
            if not self._finished.wait(SHUTDOWN_TIMEOUT + 1):
                _log.critical("actor=server event=shutting down the server gracefully failed")
                raise TimeoutError("shutting down the server gracefully failed")
        _log.info("actor=server event=the server is shut down gracefully")

    def __repr__(self) -> str:
        return f"HttpServer(port={self.port!r}, host={self.host!r})"


def _unused(*_: Any) -> None:  # pragma: no cover
    return None