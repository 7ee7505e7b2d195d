from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, slots=True)
class JoinProfileDTO:
    name: str
    gender_label: str
    region_label: str
    avatar_ref: str | None = None


@dataclass(frozen=True, slots=True)
class SendMessageDTO:
    text: str
    timestamp: datetime | None = None
