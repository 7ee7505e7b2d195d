from __future__ import annotations

from typing import Any, Protocol

from group_chat.domain.value_objects.ids import ConnectionId


class Transport(Protocol):
    """Outbound side of the per-connection event channel.

    Implementations must not raise on a failed send to a single recipient.
    """

    async def send(
        self,
        connection_id: ConnectionId,
        event_type: str,
        data: dict[str, Any],
    ) -> None: ...

    async def broadcast(
        self,
        event_type: str,
        data: dict[str, Any],
        *,
        exclude: ConnectionId | None = None,
    ) -> None: ...
