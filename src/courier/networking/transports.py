"""Transport strategies that perform the network I/O for one request.

Both strategies sit on top of ``requests``. :class:`StreamTransport` issues a
one-shot request per call and never reuses connections;
:class:`SessionTransport` keeps a ``requests.Session`` alive so repeated calls
against the same host share pooled keep-alive connections. Neither raises for
network failures: the outcome is always a :class:`TransportResult`.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol, Sequence, runtime_checkable

import requests

from .types import TransportRequest, TransportResult

logger = logging.getLogger(__name__)

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"

# http.client raises ValueError (UnicodeEncodeError included) for header
# values it cannot put on the wire.
_SEND_ERRORS = (requests.exceptions.RequestException, ValueError)

_HTTP_VERSIONS = {10: "HTTP/1.0", 11: "HTTP/1.1", 20: "HTTP/2"}


@runtime_checkable
class Transport(Protocol):
    """Performs a single request/response exchange."""

    def perform(self, request: TransportRequest) -> TransportResult: ...


def fold_header_lines(
    lines: Sequence[str], *, has_body: bool = False
) -> dict[str, str]:
    """Fold ``"Name: value"`` lines into the mapping ``requests`` expects.

    Repeated names are joined with ``", "`` so no value is lost. A form
    content type is added for bodies sent without one.
    """
    headers: dict[str, str] = {}
    canonical: dict[str, str] = {}
    for line in lines:
        name, sep, value = line.partition(":")
        name = name.strip()
        if not sep or not name:
            logger.debug("Dropping malformed header line %r", line)
            continue
        value = value.strip()
        key = canonical.setdefault(name.lower(), name)
        if key in headers:
            headers[key] = f"{headers[key]}, {value}"
        else:
            headers[key] = value

    if has_body and "content-type" not in canonical:
        headers["Content-Type"] = FORM_CONTENT_TYPE
    return headers


def _status_line(response: requests.Response) -> str:
    version = getattr(response.raw, "version", None)
    protocol = _HTTP_VERSIONS.get(version, "HTTP/1.1")
    reason = response.reason or ""
    return f"{protocol} {response.status_code} {reason}".rstrip()


def response_header_lines(response: requests.Response) -> tuple[str, ...]:
    """Render a response as a status line followed by header lines."""
    lines = [_status_line(response)]
    lines.extend(f"{name}: {value}" for name, value in response.headers.items())
    return tuple(lines)


def _failed_result(request: TransportRequest, error: Exception) -> TransportResult:
    """Map a send failure onto a result, keeping any partial response."""
    logger.debug(
        "%s %s failed: %s", request.method.value, request.url, type(error).__name__
    )
    response = getattr(error, "response", None)
    if response is None:
        return TransportResult(connected=False, error=type(error).__name__)
    return TransportResult(
        headers=response_header_lines(response),
        connected=True,
        error=type(error).__name__,
    )


def _declared_encoding(response: requests.Response) -> str | None:
    """Return the response encoding only when the server named a charset.

    ``requests`` assumes ISO-8859-1 for text/* without one; callers get UTF-8
    instead.
    """
    content_type = response.headers.get("Content-Type") or ""
    if "charset" not in content_type.lower():
        return None
    return response.encoding


def _read_result(
    request: TransportRequest, response: requests.Response
) -> TransportResult:
    """Read the body of a received response into a result."""
    headers = response_header_lines(response)
    try:
        body = response.content
    except requests.exceptions.RequestException as exc:
        logger.debug(
            "%s %s: body read failed after status line: %s",
            request.method.value,
            request.url,
            type(exc).__name__,
        )
        return TransportResult(
            headers=headers, connected=True, error=type(exc).__name__
        )
    finally:
        response.close()
    return TransportResult(
        headers=headers,
        body=body,
        connected=True,
        encoding=_declared_encoding(response),
    )


class StreamTransport:
    """One request, one connection; the default transport."""

    def _send_kwargs(self, request: TransportRequest) -> dict[str, Any]:
        headers = fold_header_lines(
            request.headers, has_body=request.body is not None
        )
        if not any(name.lower() == "connection" for name in headers):
            headers["Connection"] = "close"
        return {
            "headers": headers,
            "data": request.body,
            "timeout": request.timeout,
            "stream": True,
        }

    def perform(self, request: TransportRequest) -> TransportResult:
        logger.debug("%s %s", request.method.value, request.url)
        try:
            response = requests.request(
                request.method.value, request.url, **self._send_kwargs(request)
            )
        except _SEND_ERRORS as exc:
            return _failed_result(request, exc)
        return _read_result(request, response)


class SessionTransport:
    """Connection-reusing transport backed by a ``requests.Session``."""

    def __init__(self, session: requests.Session | None = None) -> None:
        self._session = session if session is not None else requests.Session()

    def perform(self, request: TransportRequest) -> TransportResult:
        logger.debug("%s %s (session)", request.method.value, request.url)
        try:
            response = self._session.request(
                request.method.value,
                request.url,
                headers=fold_header_lines(
                    request.headers, has_body=request.body is not None
                ),
                data=request.body,
                timeout=request.timeout,
            )
        except _SEND_ERRORS as exc:
            return _failed_result(request, exc)
        return _read_result(request, response)

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> SessionTransport:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
