"""In-process WebSocket connection manager."""
from __future__ import annotations

import logging
import uuid
from typing import Any

from fastapi import WebSocket

from group_chat.domain.value_objects.ids import ConnectionId
from group_chat.infrastructure.ws.protocol import WsOutbound

logger = logging.getLogger(__name__)


class ConnectionManager:
    """Tracks live WebSocket connections by transport-assigned id.

    Implements application.ports.transport.Transport.
    """

    def __init__(self) -> None:
        self._connections: dict[ConnectionId, WebSocket] = {}

    @property
    def connection_count(self) -> int:
        return len(self._connections)

    async def connect(self, ws: WebSocket) -> ConnectionId:
        await ws.accept()
        connection_id = ConnectionId(uuid.uuid4().hex)
        self._connections[connection_id] = ws
        logger.debug("WS connected: %s (total=%d)", connection_id, len(self._connections))
        return connection_id

    def disconnect(self, connection_id: ConnectionId) -> None:
        if self._connections.pop(connection_id, None) is not None:
            logger.debug("WS disconnected: %s (total=%d)", connection_id, len(self._connections))

    async def send(
        self,
        connection_id: ConnectionId,
        event_type: str,
        data: dict[str, Any],
    ) -> None:
        """Send a WS message to a single connection."""
        ws = self._connections.get(connection_id)
        if ws is None:
            return
        raw = WsOutbound(type=event_type, data=data).model_dump_json()
        await self._send_raw(connection_id, ws, raw)

    async def broadcast(
        self,
        event_type: str,
        data: dict[str, Any],
        *,
        exclude: ConnectionId | None = None,
    ) -> None:
        """Send a WS message to every connection except ``exclude``."""
        raw = WsOutbound(type=event_type, data=data).model_dump_json()
        targets = [
            (cid, ws) for cid, ws in self._connections.items() if cid != exclude
        ]
        for cid, ws in targets:
            await self._send_raw(cid, ws, raw)

    async def _send_raw(self, connection_id: ConnectionId, ws: WebSocket, raw: str) -> None:
        # A dead socket is cleaned up by its own read loop on close.
        try:
            await ws.send_text(raw)
        except Exception:
            logger.warning("WS send to %s failed", connection_id, exc_info=True)
