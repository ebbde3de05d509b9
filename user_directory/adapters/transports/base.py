# user_directory/adapters/transports/base.py
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Protocol

from user_directory.shared.config import Settings


class TransportType(str, Enum):
    HTTP = "http"
    WEBSOCKET = "websocket"
    GRPC = "grpc"


@dataclass
class TransportConfig:
    type: TransportType
    enabled: bool
    port: int
    host: str = "0.0.0.0"
    options: Dict[str, Any] = field(default_factory=dict)


class ITransport(Protocol):
    """
    Port for anything that exposes the application to the network.
    """

    config: TransportConfig

    @property
    def name(self) -> str:
        ...

    async def start(self) -> None:
        """Begins accepting connections. Raises if the listener cannot start."""
        ...

    async def stop(self) -> None:
        ...


def build_transport_configs(settings: Settings) -> List[TransportConfig]:
    """HTTP is always enabled; the others follow their ENABLE_* flags."""
    return [
        TransportConfig(
            type=TransportType.HTTP,
            enabled=True,
            port=settings.HTTP_PORT,
            host=settings.HTTP_HOST,
            options={"log_level": settings.LOG_LEVEL.lower()},
        ),
        TransportConfig(
            type=TransportType.WEBSOCKET,
            enabled=settings.ENABLE_WEBSOCKET,
            port=settings.WEBSOCKET_PORT,
            host=settings.HTTP_HOST,
        ),
        TransportConfig(
            type=TransportType.GRPC,
            enabled=settings.ENABLE_GRPC,
            port=settings.GRPC_PORT,
            host=settings.HTTP_HOST,
        ),
    ]
