# user_directory/adapters/transports/stubs.py
"""
Placeholder transports. They only record their state and log; no listener is
opened.
"""

import structlog

from .base import TransportConfig

logger = structlog.get_logger()


class _StubTransport:
    def __init__(self, config: TransportConfig):
        self.config = config
        self.running = False

    @property
    def name(self) -> str:
        return self.config.type.value

    async def start(self) -> None:
        self.running = True
        logger.info("transport_started", transport=self.name, port=self.config.port, stub=True)

    async def stop(self) -> None:
        self.running = False
        logger.info("transport_stopped", transport=self.name, stub=True)


class WebSocketTransport(_StubTransport):
    pass


class GrpcTransport(_StubTransport):
    pass
