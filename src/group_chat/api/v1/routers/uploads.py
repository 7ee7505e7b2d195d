from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, File, Form, UploadFile

from group_chat.api.deps import FileStoreDep
from group_chat.api.v1.schemas.upload import UploadResponse
from group_chat.application.exceptions import ValidationError

router = APIRouter(prefix="/api/v1/uploads", tags=["uploads"])


@router.post("/profile-picture", response_model=UploadResponse)
async def upload_profile_picture(
    store: FileStoreDep,
    name: Annotated[str, Form()] = "",
    gender_label: Annotated[str, Form(alias="genderLabel")] = "",
    region_label: Annotated[str, Form(alias="regionLabel")] = "",
    profile_picture: Annotated[UploadFile | None, File(alias="profilePicture")] = None,
) -> UploadResponse:
    """Store an optional profile picture; ``fileUrl`` goes into the join payload."""
    if not (name.strip() and gender_label.strip() and region_label.strip()):
        raise ValidationError("Missing user info")

    if profile_picture is None or not profile_picture.filename:
        return UploadResponse(filename=None, file_url=None)

    # One byte past the limit is enough for the store to reject oversize files.
    content = await profile_picture.read(store.max_bytes + 1)
    stored = await store.save(profile_picture.filename, profile_picture.content_type, content)
    return UploadResponse(filename=stored.filename, file_url=stored.url)
