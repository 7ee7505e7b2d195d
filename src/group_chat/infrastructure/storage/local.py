"""Local-directory store for profile pictures."""
from __future__ import annotations

import logging
import os
import re
import time
from dataclasses import dataclass
from pathlib import Path

from starlette.concurrency import run_in_threadpool

from group_chat.application.exceptions import ValidationError

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


@dataclass(frozen=True, slots=True)
class StoredFile:
    filename: str
    url: str


def safe_filename(original: str) -> str:
    name = Path(original).name
    name = _UNSAFE_CHARS.sub("_", name).strip("._")
    return name or "upload"


class LocalFileStore:
    def __init__(self, root: str | Path, url_prefix: str, max_bytes: int) -> None:
        self.root = Path(root)
        self.url_prefix = url_prefix.rstrip("/")
        self.max_bytes = max_bytes

    def ensure_root(self) -> None:
        self.root.mkdir(parents=True, exist_ok=True)

    def is_writable(self) -> bool:
        return self.root.is_dir() and os.access(self.root, os.W_OK)

    async def save(self, original_name: str, content_type: str | None, content: bytes) -> StoredFile:
        if not (content_type or "").startswith("image/"):
            raise ValidationError("Profile picture must be an image")
        if len(content) > self.max_bytes:
            raise ValidationError(f"Profile picture exceeds {self.max_bytes} bytes")

        filename = f"{int(time.time() * 1000)}-{safe_filename(original_name)}"
        path = self.root / filename
        await run_in_threadpool(self._write, path, content)
        logger.info("Stored profile picture %s (%d bytes)", filename, len(content))
        return StoredFile(filename=filename, url=f"{self.url_prefix}/{filename}")

    def _write(self, path: Path, content: bytes) -> None:
        self.ensure_root()
        path.write_bytes(content)
