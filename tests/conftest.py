"""Shared test fixtures."""
from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any

import pytest

from group_chat.application.dto.session import JoinProfileDTO
from group_chat.domain.entities.participant import Participant
from group_chat.domain.value_objects.ids import ConnectionId
from group_chat.infrastructure.presence.registry import InMemoryPresenceRegistry
from group_chat.services.session_service import ChatSession

T0 = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def make_participant(
    *,
    connection_id: str | None = None,
    name: str = "Alice",
    gender_label: str = "F",
    region_label: str = "EU",
    avatar_ref: str | None = None,
) -> Participant:
    return Participant(
        connection_id=ConnectionId(connection_id or uuid.uuid4().hex),
        name=name,
        gender_label=gender_label,
        region_label=region_label,
        avatar_ref=avatar_ref,
        joined_at=T0,
        last_active_at=T0,
    )


def profile(name: str = "Alice", gender_label: str = "F", region_label: str = "EU", **kw: Any) -> JoinProfileDTO:
    return JoinProfileDTO(name=name, gender_label=gender_label, region_label=region_label, **kw)


@dataclass
class FixedClock:
    current: datetime = T0

    def now(self) -> datetime:
        return self.current

    def advance(self, seconds: float) -> None:
        self.current += timedelta(seconds=seconds)


@dataclass
class SentEvent:
    recipient: ConnectionId
    event_type: str
    data: dict[str, Any]


@dataclass
class FakeTransport:
    """Records every delivered event per recipient.

    ``connected`` plays the role of the transport's connection table.
    """

    connected: list[ConnectionId] = field(default_factory=list)
    sent: list[SentEvent] = field(default_factory=list)

    def connect(self, connection_id: str | None = None) -> ConnectionId:
        cid = ConnectionId(connection_id or uuid.uuid4().hex)
        self.connected.append(cid)
        return cid

    def drop(self, connection_id: ConnectionId) -> None:
        if connection_id in self.connected:
            self.connected.remove(connection_id)

    async def send(self, connection_id: ConnectionId, event_type: str, data: dict[str, Any]) -> None:
        if connection_id not in self.connected:
            return
        self._deliver(connection_id, event_type, data)

    async def broadcast(
        self,
        event_type: str,
        data: dict[str, Any],
        *,
        exclude: ConnectionId | None = None,
    ) -> None:
        for cid in list(self.connected):
            if cid == exclude:
                continue
            self._deliver(cid, event_type, data)

    def _deliver(self, connection_id: ConnectionId, event_type: str, data: dict[str, Any]) -> None:
        self.sent.append(SentEvent(connection_id, event_type, data))

    def received(self, connection_id: ConnectionId, event_type: str | None = None) -> list[SentEvent]:
        return [
            e for e in self.sent
            if e.recipient == connection_id and (event_type is None or e.event_type == event_type)
        ]

    def of_type(self, event_type: str) -> list[SentEvent]:
        return [e for e in self.sent if e.event_type == event_type]

    def clear(self) -> None:
        self.sent.clear()


@pytest.fixture
def registry() -> InMemoryPresenceRegistry:
    return InMemoryPresenceRegistry()


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def open_session(registry, transport, clock):
    """Factory: connect a new fake connection and return its ChatSession."""

    def _open(connection_id: str | None = None) -> ChatSession:
        cid = transport.connect(connection_id)
        return ChatSession(cid, registry, transport, clock)

    return _open
