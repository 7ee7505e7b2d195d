from __future__ import annotations

from typing import Callable, Protocol

from group_chat.domain.entities.participant import Participant
from group_chat.domain.value_objects.ids import ConnectionId

ParticipantMutator = Callable[[Participant], Participant]


class PresenceRegistry(Protocol):
    """Authoritative table of joined participants keyed by connection id.

    Methods are synchronous: callers on the event loop get atomic
    register/update/remove/list without locking.
    """

    def register(self, connection_id: ConnectionId, participant: Participant) -> Participant: ...

    def update(self, connection_id: ConnectionId, mutator: ParticipantMutator) -> Participant | None: ...

    def remove(self, connection_id: ConnectionId) -> Participant | None: ...

    def get(self, connection_id: ConnectionId) -> Participant | None: ...

    def list_all(self) -> list[Participant]: ...

    def __len__(self) -> int: ...
