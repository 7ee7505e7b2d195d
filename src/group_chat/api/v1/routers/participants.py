from __future__ import annotations

from fastapi import APIRouter

from group_chat.api.deps import RegistryDep
from group_chat.api.v1.schemas.participant import (
    ParticipantListResponse,
    ParticipantResponse,
)

router = APIRouter(prefix="/api/v1/participants", tags=["participants"])


@router.get("", response_model=ParticipantListResponse)
async def list_participants(registry: RegistryDep) -> ParticipantListResponse:
    """Read-only snapshot of who is currently joined."""
    participants = registry.list_all()
    return ParticipantListResponse(
        count=len(participants),
        items=[ParticipantResponse.model_validate(p, from_attributes=True) for p in participants],
    )
