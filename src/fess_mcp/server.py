"""StdioServer — newline-delimited JSON-RPC over a pair of text streams.

Each input line is one request; each response is written as one line.
Notifications (``notifications/*`` without an ``id``) get no reply.
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import TYPE_CHECKING, Any, TextIO

if TYPE_CHECKING:
    from fess_mcp.protocol.dispatcher import McpDispatcher

logger = logging.getLogger(__name__)

NOTIFICATION_PREFIX = "notifications/"


class StdioServer:
    """Reads requests from *reader* and writes responses to *writer*."""

    def __init__(self, dispatcher: McpDispatcher, reader: TextIO, writer: TextIO) -> None:
        self._dispatcher = dispatcher
        self._reader = reader
        self._writer = writer

    async def serve(self) -> int:
        """Process lines until EOF and return the number of responses written."""
        loop = asyncio.get_running_loop()
        written = 0
        while True:
            line = await loop.run_in_executor(None, self._reader.readline)
            if not line:
                break
            if not line.strip():
                continue
            if _is_notification(line):
                logger.debug("Ignoring notification: %s", line.strip())
                continue
            response = await self._dispatcher.handle(line)
            self._writer.write(response + "\n")
            self._writer.flush()
            written += 1
        return written


def _is_notification(line: str) -> bool:
    try:
        payload: Any = json.loads(line)
    except (ValueError, RecursionError):
        return False
    return (
        isinstance(payload, dict)
        and "id" not in payload
        and isinstance(payload.get("method"), str)
        and payload["method"].startswith(NOTIFICATION_PREFIX)
    )
