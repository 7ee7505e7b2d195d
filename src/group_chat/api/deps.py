"""FastAPI dependency injection helpers."""
from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from fastapi.requests import HTTPConnection

from group_chat.infrastructure.presence.registry import InMemoryPresenceRegistry
from group_chat.infrastructure.storage.local import LocalFileStore
from group_chat.infrastructure.ws.manager import ConnectionManager


def get_registry(conn: HTTPConnection) -> InMemoryPresenceRegistry:
    return conn.app.state.registry


def get_connection_manager(conn: HTTPConnection) -> ConnectionManager:
    return conn.app.state.connections


def get_file_store(conn: HTTPConnection) -> LocalFileStore:
    return conn.app.state.file_store


RegistryDep = Annotated[InMemoryPresenceRegistry, Depends(get_registry)]
ConnectionsDep = Annotated[ConnectionManager, Depends(get_connection_manager)]
FileStoreDep = Annotated[LocalFileStore, Depends(get_file_store)]
