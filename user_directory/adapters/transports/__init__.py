# user_directory/adapters/transports/__init__.py
from .base import ITransport, TransportConfig, TransportType, build_transport_configs
from .http import HttpTransport
from .manager import TransportManager, create_transport
from .stubs import GrpcTransport, WebSocketTransport

__all__ = [
    "ITransport",
    "TransportConfig",
    "TransportType",
    "build_transport_configs",
    "HttpTransport",
    "WebSocketTransport",
    "GrpcTransport",
    "TransportManager",
    "create_transport",
]
