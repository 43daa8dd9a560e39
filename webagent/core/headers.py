"""Header helpers: name normalization and outgoing request dumps."""

from __future__ import annotations

from typing import Any, Mapping

from requests import PreparedRequest
from requests.structures import CaseInsensitiveDict


def normalize_header_name(name: str) -> str:
    """Turn ``content_type`` or ``CONTENT-TYPE`` into ``Content-Type``."""

    parts = name.strip().replace("_", "-").split("-")
    return "-".join(part[:1].upper() + part[1:].lower() for part in parts)


def build_header_set(headers: Mapping[str, Any]) -> CaseInsensitiveDict:
    """Normalize a caller header mapping into a requests header set.

    Headers whose value is ``None`` are left out.
    """

    normalized: CaseInsensitiveDict = CaseInsensitiveDict()
    for name, value in headers.items():
        if value is None:
            continue
        normalized[normalize_header_name(str(name))] = str(value)
    return normalized


def dump_request(request: PreparedRequest) -> str:
    """Render the request line, headers and body of an outgoing request."""

    lines = [f"{request.method} {request.url}"]
    lines.extend(f"{name}: {value}" for name, value in request.headers.items())
    lines.append("")

    body = request.body
    if isinstance(body, bytes):
        body = body.decode("utf-8", errors="replace")
    if body:
        lines.append(body)
    return "\n".join(lines) + "\n"


__all__ = ["build_header_set", "dump_request", "normalize_header_name"]
