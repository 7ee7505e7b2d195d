from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from group_chat.domain.entities.participant import Participant
from group_chat.domain.value_objects.ids import MessageId


@dataclass(frozen=True, slots=True)
class ChatMessage:
    """Transient chat message; ``sender`` is the registry snapshot at send time."""

    id: MessageId
    text: str
    sender: Participant
    timestamp: datetime
