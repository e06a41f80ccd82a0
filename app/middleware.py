# app/middleware.py
"""Access logging middleware.

Every request appends one line to a plain-text access log::

    2024-05-01T12:30:00.123Z - POST /?origem=site

The append is scheduled as a background task and never awaited by the
request, so a slow or failing disk cannot delay or break a response.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING

from starlette.concurrency import run_in_threadpool
from starlette.middleware.base import BaseHTTPMiddleware

if TYPE_CHECKING:
    from collections.abc import Callable

    from fastapi import Request, Response
    from starlette.types import ASGIApp, Scope


logger = logging.getLogger(__name__)


def format_access_line(method: str, target: str, when: datetime | None = None) -> str:
    """Build a log line with an ISO-8601 UTC timestamp in millisecond precision."""
    if when is None:
        when = datetime.now(timezone.utc)
    timestamp = when.astimezone(timezone.utc).isoformat(timespec="milliseconds")
    timestamp = timestamp.replace("+00:00", "Z")
    return f"{timestamp} - {method} {target}\n"


def request_target(scope: Scope) -> str:
    """Raw request target as sent by the client, percent-encoding intact."""
    raw_path = scope.get("raw_path")
    if raw_path is None:
        raw_path = scope["path"].encode("utf-8")
    # Some servers pass the query string along with raw_path
    target = raw_path.split(b"?", 1)[0].decode("latin-1")
    query = scope.get("query_string", b"")
    if query:
        target = f"{target}?{query.decode('latin-1')}"
    return target


class AccessLog:
    """Fire-and-forget appender for the access log file."""

    def __init__(self, path: Path | str):
        self.path = Path(path)
        self._pending: set[asyncio.Task[None]] = set()

    def record(self, method: str, target: str) -> None:
        """Schedule an append for one request. Must run inside the event loop."""
        line = format_access_line(method, target)
        task = asyncio.get_running_loop().create_task(self._append(line))
        # The loop only keeps weak references to tasks
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _append(self, line: str) -> None:
        try:
            await run_in_threadpool(self._write, line)
        except OSError:
            logger.exception("Failed to write access log entry to %s", self.path)

    def _write(self, line: str) -> None:
        with self.path.open("a", encoding="utf-8") as fh:
            fh.write(line)

    @property
    def pending(self) -> int:
        return len(self._pending)

    async def drain(self) -> None:
        """Wait for scheduled appends to finish."""
        if self._pending:
            await asyncio.gather(*self._pending, return_exceptions=True)


class AccessLogMiddleware(BaseHTTPMiddleware):
    """Record every request in the access log before routing it."""

    def __init__(self, app: ASGIApp, access_log: AccessLog):
        super().__init__(app)
        self.access_log = access_log

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        target = request_target(request.scope)
        self.access_log.record(request.method, target)
        return await call_next(request)
