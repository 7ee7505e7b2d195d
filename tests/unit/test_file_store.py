from __future__ import annotations

import pytest

from group_chat.application.exceptions import ValidationError
from group_chat.infrastructure.storage.local import LocalFileStore, safe_filename


@pytest.fixture
def store(tmp_path):
    return LocalFileStore(tmp_path / "uploads", "/uploads/", max_bytes=16)


@pytest.mark.parametrize(
    ("original", "expected"),
    [
        ("avatar.png", "avatar.png"),
        ("../../etc/passwd", "passwd"),
        ("my photo (1).jpg", "my_photo_1_.jpg"),
        ("...", "upload"),
    ],
)
def test_safe_filename(original, expected):
    assert safe_filename(original) == expected


@pytest.mark.asyncio
async def test_save_writes_file_and_builds_url(store):
    stored = await store.save("face.png", "image/png", b"\x89PNG")

    assert stored.filename.endswith("-face.png")
    assert stored.url == f"/uploads/{stored.filename}"
    assert (store.root / stored.filename).read_bytes() == b"\x89PNG"


@pytest.mark.asyncio
async def test_save_rejects_non_images(store):
    with pytest.raises(ValidationError):
        await store.save("notes.txt", "text/plain", b"hello")


@pytest.mark.asyncio
async def test_save_rejects_oversize(store):
    with pytest.raises(ValidationError):
        await store.save("big.png", "image/png", b"x" * 17)


def test_is_writable_after_ensure_root(store):
    assert store.is_writable() is False
    store.ensure_root()
    assert store.is_writable() is True
