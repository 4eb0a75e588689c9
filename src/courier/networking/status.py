"""Status-line parsing for raw response header sequences."""

from __future__ import annotations

from typing import Sequence


def parse_status_line(header_lines: Sequence[str]) -> tuple[int, str]:
    """Return ``(code, reason)`` from the first header line.

    The line is split on its first two spaces, so
    ``"HTTP/1.1 404 Not Found"`` yields ``(404, "Not Found")``. An empty
    sequence, or a line without a numeric code, yields ``(0, "")``.
    """
    if not header_lines:
        return 0, ""

    parts = header_lines[0].split(" ", 2)
    if len(parts) < 2:
        return 0, ""
    try:
        code = int(parts[1])
    except ValueError:
        return 0, ""
    reason = parts[2] if len(parts) > 2 else ""
    return code, reason


def parse_http_status(header_lines: Sequence[str]) -> int:
    """Return the status code from the first header line, or 0."""
    return parse_status_line(header_lines)[0]
