"""Per-connection chat protocol: join, message fan-out, typing, disconnect."""
from __future__ import annotations

import logging
import uuid
from dataclasses import replace
from typing import Any

from group_chat.application.dto.session import JoinProfileDTO, SendMessageDTO
from group_chat.application.exceptions import (
    AlreadyJoinedError,
    AppError,
    NotJoinedError,
    ValidationError,
)
from group_chat.application.ports.clock import Clock, SystemClock
from group_chat.application.ports.transport import Transport
from group_chat.application.repositories.participant import PresenceRegistry
from group_chat.config import settings
from group_chat.domain.entities.message import ChatMessage
from group_chat.domain.entities.participant import Participant
from group_chat.domain.value_objects.enums import OutboundEvent, SessionState
from group_chat.domain.value_objects.ids import ConnectionId, MessageId

logger = logging.getLogger(__name__)


def public_profile(participant: Participant) -> dict[str, Any]:
    """Wire shape of a participant, shared by every profile-carrying event."""
    return {
        "connectionId": participant.connection_id,
        "name": participant.name,
        "genderLabel": participant.gender_label,
        "regionLabel": participant.region_label,
        "avatarRef": participant.avatar_ref,
        "joinedAt": participant.joined_at.isoformat(),
    }


def _required(value: str, field_name: str, max_length: int) -> str:
    value = value.strip()
    if not value:
        raise ValidationError(f"{field_name} is required")
    if len(value) > max_length:
        raise ValidationError(f"{field_name} must be at most {max_length} characters")
    return value


class ChatSession:
    """Protocol state machine for a single connection.

    ``unjoined -> joined -> closed``. Every operation mutates the registry
    before its first ``await``, so concurrent sessions on the same event
    loop always observe a consistent roster.
    """

    def __init__(
        self,
        connection_id: ConnectionId,
        registry: PresenceRegistry,
        transport: Transport,
        clock: Clock | None = None,
    ) -> None:
        self.connection_id = connection_id
        self.state = SessionState.UNJOINED
        self._registry = registry
        self._transport = transport
        self._clock = clock or SystemClock()

    @property
    def is_joined(self) -> bool:
        return self.state == SessionState.JOINED

    async def join(self, profile: JoinProfileDTO) -> Participant | None:
        try:
            participant = self._register(profile)
        except AppError as exc:
            logger.info("Join rejected for %s: %s", self.connection_id, exc.detail)
            await self.reject(OutboundEvent.JOIN_REJECTED, exc.detail)
            return None

        logger.info("Participant joined: %s (%s)", participant.name, self.connection_id)
        data = public_profile(participant)
        await self._transport.send(
            self.connection_id, OutboundEvent.JOIN_ACKNOWLEDGED, {"profile": data},
        )
        await self._transport.broadcast(
            OutboundEvent.PARTICIPANT_JOINED, {"profile": data}, exclude=self.connection_id,
        )
        return participant

    def _register(self, profile: JoinProfileDTO) -> Participant:
        if self.state == SessionState.CLOSED:
            raise NotJoinedError("Connection is closed")
        if self.state == SessionState.JOINED:
            raise AlreadyJoinedError("Already joined")

        now = self._clock.now()
        participant = Participant(
            connection_id=self.connection_id,
            name=_required(profile.name, "name", settings.MAX_NAME_LENGTH),
            gender_label=_required(profile.gender_label, "genderLabel", settings.MAX_LABEL_LENGTH),
            region_label=_required(profile.region_label, "regionLabel", settings.MAX_LABEL_LENGTH),
            avatar_ref=(profile.avatar_ref or "").strip() or None,
            joined_at=now,
            last_active_at=now,
        )
        self._registry.register(self.connection_id, participant)
        self.state = SessionState.JOINED
        return participant

    async def send_message(self, payload: SendMessageDTO) -> ChatMessage | None:
        try:
            message = self._compose(payload)
        except AppError as exc:
            logger.debug("Send rejected for %s: %s", self.connection_id, exc.detail)
            await self.reject(OutboundEvent.SEND_REJECTED, exc.detail)
            return None

        timestamp = message.timestamp.isoformat()
        await self._transport.broadcast(
            OutboundEvent.MESSAGE_RECEIVED,
            {
                "text": message.text,
                "sender": public_profile(message.sender),
                "timestamp": timestamp,
                "messageId": str(message.id),
            },
            exclude=self.connection_id,
        )
        await self._transport.send(
            self.connection_id,
            OutboundEvent.MESSAGE_ACKNOWLEDGED,
            {"messageId": str(message.id), "timestamp": timestamp},
        )
        return message

    def _compose(self, payload: SendMessageDTO) -> ChatMessage:
        if not self.is_joined:
            raise NotJoinedError("Join before sending messages")
        text = _required(payload.text, "text", settings.MAX_MESSAGE_LENGTH)

        # Identity always comes from the registry, never from the payload.
        sender = self._touch()
        if sender is None:
            raise NotJoinedError("Join before sending messages")

        return ChatMessage(
            id=MessageId(uuid.uuid4()),
            text=text,
            sender=sender,
            timestamp=payload.timestamp or self._clock.now(),
        )

    async def typing_start(self) -> None:
        await self._typing(OutboundEvent.TYPING_STARTED)

    async def typing_stop(self) -> None:
        await self._typing(OutboundEvent.TYPING_STOPPED)

    async def _typing(self, event_type: OutboundEvent) -> None:
        if not self.is_joined:
            return
        participant = self._touch()
        if participant is None:
            return
        await self._transport.broadcast(
            event_type,
            {"senderName": participant.name, "connectionId": self.connection_id},
            exclude=self.connection_id,
        )

    def _touch(self) -> Participant | None:
        now = self._clock.now()
        return self._registry.update(
            self.connection_id, lambda p: replace(p, last_active_at=now),
        )

    async def disconnect(self) -> Participant | None:
        """Close the session; safe to call more than once."""
        if self.state == SessionState.CLOSED:
            return None
        self.state = SessionState.CLOSED

        participant = self._registry.remove(self.connection_id)
        if participant is None:
            return None

        logger.info("Participant left: %s (%s)", participant.name, self.connection_id)
        await self._transport.broadcast(
            OutboundEvent.PARTICIPANT_LEFT,
            {"profile": public_profile(participant)},
            exclude=self.connection_id,
        )
        return participant

    async def reject(self, event_type: OutboundEvent, reason: str) -> None:
        await self._transport.send(self.connection_id, event_type, {"reason": reason})
