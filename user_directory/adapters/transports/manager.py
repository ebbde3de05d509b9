# user_directory/adapters/transports/manager.py
from typing import List, Sequence

import structlog
from fastapi import FastAPI

from .base import ITransport, TransportConfig, TransportType
from .http import HttpTransport
from .stubs import GrpcTransport, WebSocketTransport

logger = structlog.get_logger()


def create_transport(config: TransportConfig, app: FastAPI) -> ITransport:
    if config.type == TransportType.HTTP:
        return HttpTransport(config, app)
    if config.type == TransportType.WEBSOCKET:
        return WebSocketTransport(config)
    if config.type == TransportType.GRPC:
        return GrpcTransport(config)
    raise ValueError(f"Unsupported transport type: {config.type}")


class TransportManager:
    """
    Starts and stops every enabled transport in declaration order.
    """

    def __init__(self, configs: Sequence[TransportConfig], app: FastAPI):
        self._transports: List[ITransport] = [
            create_transport(config, app) for config in configs if config.enabled
        ]

    @property
    def transports(self) -> List[ITransport]:
        return list(self._transports)

    async def start_all(self) -> None:
        for transport in self._transports:
            try:
                await transport.start()
            except Exception as e:
                logger.error("transport_start_failed", transport=transport.name, error=str(e))
                raise

    async def stop_all(self) -> None:
        for transport in self._transports:
            try:
                await transport.stop()
            except Exception as e:
                logger.error("transport_stop_failed", transport=transport.name, error=str(e))
