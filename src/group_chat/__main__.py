"""Entrypoint: python -m group_chat"""
from __future__ import annotations

import uvicorn

from group_chat.config import settings
from group_chat.log_config import configure_logging


def main() -> None:
    configure_logging(settings.LOG_LEVEL)
    uvicorn.run(
        "group_chat.app:create_app",
        factory=True,
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
