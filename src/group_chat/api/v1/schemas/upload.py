from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class UploadResponse(BaseModel):
    success: bool = True
    filename: str | None
    file_url: str | None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
