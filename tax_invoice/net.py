"""HTTP response helpers shared by the request handler."""

from __future__ import annotations

import errno
from typing import Dict

DISCONNECT_ERRNOS = {
    errno.EPIPE,
    errno.ECONNRESET,
    errno.ETIMEDOUT,
}
if hasattr(errno, "WSAECONNRESET"):
    DISCONNECT_ERRNOS.add(errno.WSAECONNRESET)  # pragma: no cover

CORS_HEADERS: Dict[str, str] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
    "Access-Control-Expose-Headers": "Content-Disposition",
}


def attachment_header(filename: str) -> str:
    safe_name = filename.replace('"', "").replace("\r", "").replace("\n", "")
    return f'attachment; filename="{safe_name}"'


def is_client_disconnect(exc: BaseException) -> bool:
    """True when ``exc`` only means the client went away mid-response."""
    if isinstance(exc, (BrokenPipeError, ConnectionResetError, TimeoutError)):
        return True
    return isinstance(exc, OSError) and exc.errno in DISCONNECT_ERRNOS
