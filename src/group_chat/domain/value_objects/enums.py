from __future__ import annotations

from enum import StrEnum


class SessionState(StrEnum):
    UNJOINED = "unjoined"
    JOINED = "joined"
    CLOSED = "closed"


class InboundEvent(StrEnum):
    JOIN = "join"
    SEND_MESSAGE = "sendMessage"
    TYPING_START = "typingStart"
    TYPING_STOP = "typingStop"
    PING = "ping"


class OutboundEvent(StrEnum):
    PARTICIPANT_JOINED = "participantJoined"
    JOIN_ACKNOWLEDGED = "joinAcknowledged"
    JOIN_REJECTED = "joinRejected"
    MESSAGE_RECEIVED = "messageReceived"
    MESSAGE_ACKNOWLEDGED = "messageAcknowledged"
    SEND_REJECTED = "sendRejected"
    TYPING_STARTED = "typingStarted"
    TYPING_STOPPED = "typingStopped"
    PARTICIPANT_LEFT = "participantLeft"
    PONG = "pong"
    ERROR = "error"
