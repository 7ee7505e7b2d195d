"""WebSocket message envelope and payload models."""
from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidatorFunctionWrapHandler,
    field_validator,
)
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel


class WsInbound(BaseModel):
    """Client → Server."""

    type: str  # join | sendMessage | typingStart | typingStop | ping
    data: Any = Field(default_factory=dict)


class WsOutbound(BaseModel):
    """Server → Client."""

    type: str
    data: dict[str, Any] = {}


class _Payload(BaseModel):
    # Unknown keys (e.g. a client-asserted ``sender``) are dropped, not trusted.
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class JoinPayload(_Payload):
    name: str
    gender_label: str
    region_label: str
    avatar_ref: str | None = None


class SendMessagePayload(_Payload):
    text: str
    timestamp: datetime | None = None

    @field_validator("timestamp", mode="wrap")
    @classmethod
    def _lenient_timestamp(cls, value: Any, handler: ValidatorFunctionWrapHandler) -> datetime | None:
        # Browser clients send locale strings like "10:32:11 AM"; use server time then.
        try:
            return handler(value)
        except PydanticValidationError:
            return None


def describe_errors(exc: PydanticValidationError) -> str:
    """Flatten a pydantic error into a single rejection reason."""
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err["loc"]) or "data"
        parts.append(f"{loc}: {err['msg']}")
    return "; ".join(parts) or "invalid payload"
