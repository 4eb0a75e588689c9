"""Networking layer: client, configuration and transports."""

from .client import HttpClient
from .config import USER_AGENTS, HttpClientConfig, resolve_user_agent
from .status import parse_http_status, parse_status_line
from .transports import SessionTransport, StreamTransport, Transport
from .types import (
    HttpMethod,
    ResponseRecord,
    SessionResponse,
    TransportRequest,
    TransportResult,
)

__all__ = [
    "HttpClient",
    "HttpClientConfig",
    "HttpMethod",
    "ResponseRecord",
    "SessionResponse",
    "SessionTransport",
    "StreamTransport",
    "Transport",
    "TransportRequest",
    "TransportResult",
    "USER_AGENTS",
    "parse_http_status",
    "parse_status_line",
    "resolve_user_agent",
]
