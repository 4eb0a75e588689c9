"""Synchronous HTTP client for calling a single base URL.

:class:`HttpClient` builds the outgoing header set, dispatches each call to
exactly one transport, and normalizes whatever came back into a
:class:`ResponseRecord`. Transport failures are never raised to the caller;
a request that produced no HTTP exchange comes back with status 0.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Sequence, Union
from urllib.parse import urlencode

from .config import (
    DEFAULT_USER_AGENT,
    USER_AGENTS,
    HttpClientConfig,
    resolve_user_agent,
)
from .status import parse_status_line
from .transports import SessionTransport, StreamTransport, Transport
from .types import (
    HttpMethod,
    ResponseRecord,
    SessionResponse,
    TransportRequest,
    TransportResult,
)

logger = logging.getLogger(__name__)

UNKNOWN_ERROR = "unknown error"

HeaderSet = Union[Sequence[str], Mapping[str, str]]


def _header_lines(headers: HeaderSet | None) -> list[str]:
    if not headers:
        return []
    if isinstance(headers, Mapping):
        return [f"{name}: {value}" for name, value in headers.items()]
    return list(headers)


def _decode_body(result: TransportResult) -> str | None:
    if result.body is None:
        return None
    try:
        return result.body.decode(result.encoding or "utf-8", errors="replace")
    except LookupError:
        return result.body.decode("utf-8", errors="replace")


class HttpClient:
    """HTTP client bound to one base URL.

    Endpoints are appended verbatim to the base URL. The default transport is
    :class:`StreamTransport`; the connection-reuse transport is only used
    through :meth:`session_request`.
    """

    def __init__(
        self,
        base_url: str,
        context: Mapping[str, Any] | None = None,
        *,
        transport: Transport | None = None,
        session_transport: SessionTransport | None = None,
    ) -> None:
        """Create a new HttpClient.

        Args:
            base_url: Prefix for every endpoint.
            context: Optional mapping with ``api_key``, ``timeout`` and
                ``user_agent`` (one of ``"moz"``, ``"chrome"``, ``"safari"``).
            transport: Override for the default transport.
            session_transport: Override for the connection-reuse transport.
        """
        self._config = HttpClientConfig.from_context(base_url, context)
        self._transport: Transport = (
            transport if transport is not None else StreamTransport()
        )
        self._session_transport = session_transport
        self._referrer: str | None = None
        # An unknown preset leaves this unset; the default applies per call.
        self._user_agent = resolve_user_agent(self._config.user_agent)

    @property
    def context(self) -> HttpClientConfig:
        return self._config

    @property
    def base_url(self) -> str:
        return self._config.base_url

    @property
    def user_agent(self) -> str | None:
        return self._user_agent

    @property
    def referrer(self) -> str | None:
        return self._referrer

    def set_user_agent(self, user_agent: str) -> None:
        self._user_agent = user_agent

    def set_referrer(self, referrer: str) -> None:
        self._referrer = referrer

    def _resolved_user_agent(self) -> str:
        return self._user_agent or USER_AGENTS[DEFAULT_USER_AGENT]

    def build_headers(self, headers: HeaderSet | None = None) -> tuple[str, ...]:
        """Assemble the outgoing header lines for one call."""
        lines: list[str] = []
        if self._config.api_key:
            lines.append(f"Authorization: Bearer {self._config.api_key}")
        lines.extend(_header_lines(headers))
        lines.append(f"User-Agent: {self._resolved_user_agent()}")
        if self._referrer:
            lines.append(f"Referer: {self._referrer}")
        return tuple(lines)

    def _build_request(
        self,
        endpoint: str,
        method: HttpMethod | str,
        fields: Mapping[str, str] | None,
        headers: HeaderSet | None,
    ) -> TransportRequest:
        method = HttpMethod(method.upper())
        body = urlencode(dict(fields or {})) if method is HttpMethod.POST else None
        return TransportRequest(
            method=method,
            url=self._config.base_url + endpoint,
            headers=self.build_headers(headers),
            body=body,
            timeout=self._config.timeout_seconds,
        )

    def execute(
        self,
        endpoint: str,
        method: HttpMethod | str = HttpMethod.GET,
        fields: Mapping[str, str] | None = None,
        headers: HeaderSet | None = None,
    ) -> ResponseRecord:
        """Perform one request through the default transport.

        Args:
            endpoint: Appended to the base URL as-is.
            method: ``GET`` or ``POST``.
            fields: Form fields, URL-encoded as the body of a POST.
            headers: Extra header lines or a name/value mapping.

        Returns:
            A ResponseRecord. Status 0 with message ``"unknown error"`` means
            the endpoint could not be reached.

        Raises:
            ValueError: If ``method`` is not a supported HTTP method.
        """
        request = self._build_request(endpoint, method, fields, headers)
        result = self._transport.perform(request)

        if not result.connected or not result.headers:
            return ResponseRecord(status=0, message=UNKNOWN_ERROR)

        status, message = parse_status_line(result.headers)
        if result.error is not None:
            logger.debug(
                "%s %s returned %s before failing with %s",
                request.method.value,
                request.url,
                status,
                result.error,
            )
            return ResponseRecord(
                status=status,
                message=message,
                raw_response_headers=result.headers,
                referrer=self._referrer,
            )

        return ResponseRecord(
            status=status,
            message=message,
            body=_decode_body(result),
            raw_response_headers=result.headers,
            referrer=self._referrer,
        )

    def get(
        self, endpoint: str, headers: HeaderSet | None = None
    ) -> ResponseRecord:
        """Perform a GET request against ``base_url + endpoint``."""
        return self.execute(endpoint, HttpMethod.GET, None, headers)

    def post(
        self,
        endpoint: str,
        fields: Mapping[str, str] | None = None,
        headers: HeaderSet | None = None,
    ) -> ResponseRecord:
        """Perform a form-encoded POST request against ``base_url + endpoint``."""
        return self.execute(endpoint, HttpMethod.POST, fields, headers)

    def session_request(
        self,
        endpoint: str,
        method: HttpMethod | str = HttpMethod.GET,
        fields: Mapping[str, str] | None = None,
        headers: HeaderSet | None = None,
    ) -> SessionResponse:
        """Perform one request through the connection-reuse transport.

        The returned shape carries only the status code and the body.
        """
        if self._session_transport is None:
            self._session_transport = SessionTransport()
        request = self._build_request(endpoint, method, fields, headers)
        result = self._session_transport.perform(request)

        status = parse_status_line(result.headers)[0] if result.connected else 0
        body = _decode_body(result) if result.error is None else None
        return SessionResponse(status=status, response=body)

    def close(self) -> None:
        """Release pooled connections held by the session transport."""
        if self._session_transport is not None:
            self._session_transport.close()

    def __enter__(self) -> HttpClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
