"""In-process presence registry."""
from __future__ import annotations

import logging

from group_chat.application.repositories.participant import ParticipantMutator
from group_chat.domain.entities.participant import Participant
from group_chat.domain.value_objects.ids import ConnectionId

logger = logging.getLogger(__name__)


class InMemoryPresenceRegistry:
    """Implements application.repositories.participant.PresenceRegistry."""

    def __init__(self) -> None:
        self._participants: dict[ConnectionId, Participant] = {}

    def register(self, connection_id: ConnectionId, participant: Participant) -> Participant:
        self._participants[connection_id] = participant
        logger.debug("Registered %s as %r (online=%d)", connection_id, participant.name, len(self))
        return participant

    def update(self, connection_id: ConnectionId, mutator: ParticipantMutator) -> Participant | None:
        current = self._participants.get(connection_id)
        if current is None:
            return None
        updated = mutator(current)
        self._participants[connection_id] = updated
        return updated

    def remove(self, connection_id: ConnectionId) -> Participant | None:
        participant = self._participants.pop(connection_id, None)
        if participant is not None:
            logger.debug("Removed %s (online=%d)", connection_id, len(self))
        return participant

    def get(self, connection_id: ConnectionId) -> Participant | None:
        return self._participants.get(connection_id)

    def list_all(self) -> list[Participant]:
        return list(self._participants.values())

    def __len__(self) -> int:
        return len(self._participants)
