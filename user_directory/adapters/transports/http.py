# user_directory/adapters/transports/http.py
import asyncio
import contextlib
from typing import Generator, Optional

import structlog
import uvicorn
from fastapi import FastAPI

from .base import TransportConfig

logger = structlog.get_logger()


class _EmbeddedServer(uvicorn.Server):
    """uvicorn server that leaves signal handling to the process entry point."""

    def install_signal_handlers(self) -> None:
        pass

    @contextlib.contextmanager
    def capture_signals(self) -> Generator[None, None, None]:
        yield


class HttpTransport:
    """
    Serves the FastAPI app with uvicorn inside the current event loop.
    """

    def __init__(self, config: TransportConfig, app: FastAPI):
        self.config = config
        self.app = app
        self._server: Optional[uvicorn.Server] = None
        self._task: Optional[asyncio.Task] = None

    @property
    def name(self) -> str:
        return self.config.type.value

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def _build_server(self) -> uvicorn.Server:
        uv_config = uvicorn.Config(
            self.app,
            host=self.config.host,
            port=self.config.port,
            log_level=self.config.options.get("log_level", "info"),
            lifespan="on",
        )
        return _EmbeddedServer(uv_config)

    async def _serve(self, server: uvicorn.Server) -> None:
        try:
            await server.serve()
        except SystemExit as exc:
            # uvicorn exits the process when it cannot bind; keep it inside this task.
            raise RuntimeError(f"uvicorn exited with code {exc.code}") from exc

    async def start(self) -> None:
        if self.running:
            logger.warning("transport_already_running", transport=self.name)
            return

        self._server = self._build_server()
        self._task = asyncio.create_task(self._serve(self._server), name="http-transport")

        while not self._server.started:
            if self._task.done():
                # Returned or raised before binding (port in use, lifespan failure)
                exc = self._task.exception()
                self._task = None
                raise RuntimeError(
                    f"HTTP transport failed to start on {self.config.host}:{self.config.port}"
                ) from exc
            await asyncio.sleep(0.05)

        logger.info("transport_started", transport=self.name, host=self.config.host, port=self.config.port)

    async def stop(self) -> None:
        if self._server is None or self._task is None:
            return

        self._server.should_exit = True
        try:
            await self._task
        finally:
            self._server = None
            self._task = None
        logger.info("transport_stopped", transport=self.name)
