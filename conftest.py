"""Root conftest: loads .env.test before any module imports."""
from __future__ import annotations

import os
import tempfile
from pathlib import Path

_env_test = Path(__file__).resolve().parent / ".env.test"
if _env_test.exists():
    for line in _env_test.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        key, _, value = line.partition("=")
        os.environ.setdefault(key.strip(), value.strip())

# Keep uploads written by the app factory out of the working tree.
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="group-chat-uploads-"))
