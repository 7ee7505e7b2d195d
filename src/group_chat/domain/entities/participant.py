from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from group_chat.domain.value_objects.ids import ConnectionId


@dataclass(frozen=True, slots=True)
class Participant:
    """A joined connection's display profile."""

    connection_id: ConnectionId
    name: str
    gender_label: str
    region_label: str
    avatar_ref: str | None
    joined_at: datetime
    last_active_at: datetime
