from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ParticipantResponse(BaseModel):
    connection_id: str
    name: str
    gender_label: str
    region_label: str
    avatar_ref: str | None
    joined_at: datetime

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ParticipantListResponse(BaseModel):
    count: int
    items: list[ParticipantResponse]
