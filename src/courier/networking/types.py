"""Value types passed between the client and its transports."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"


@dataclass(frozen=True)
class TransportRequest:
    """A fully assembled request handed to a transport."""

    method: HttpMethod
    url: str
    headers: tuple[str, ...]
    body: str | None
    timeout: float


@dataclass(frozen=True)
class TransportResult:
    """Raw outcome of a single transport attempt.

    ``headers`` starts with the status line when anything was received.
    ``connected`` is False when the attempt failed before a response arrived;
    ``error`` carries the exception type name whenever the attempt failed,
    including failures after the status line.
    """

    headers: tuple[str, ...] = ()
    body: bytes | None = None
    connected: bool = False
    encoding: str | None = None
    error: str | None = None


@dataclass(frozen=True)
class ResponseRecord:
    """Normalized response returned by :class:`HttpClient` calls.

    ``status == 0`` means no HTTP exchange took place.
    """

    status: int
    message: str
    body: str | None = None
    raw_response_headers: tuple[str, ...] | None = None
    referrer: str | None = None

    @property
    def connected(self) -> bool:
        return self.status != 0


@dataclass(frozen=True)
class SessionResponse:
    """Response shape of the connection-reuse entry point (no message)."""

    status: int
    response: str | None = None
