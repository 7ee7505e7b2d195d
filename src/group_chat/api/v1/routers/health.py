from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from group_chat.api.deps import ConnectionsDep, FileStoreDep, RegistryDep

router = APIRouter(tags=["health"])


@router.get("/healthz")
async def healthz() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/readyz")
async def readyz(
    registry: RegistryDep,
    connections: ConnectionsDep,
    store: FileStoreDep,
) -> JSONResponse:
    errors: list[str] = []

    if not store.is_writable():
        errors.append(f"uploads: {store.root} is not writable")

    if errors:
        return JSONResponse(
            status_code=503,
            content={"status": "unavailable", "errors": errors},
        )
    return JSONResponse(
        content={
            "status": "ready",
            "connections": connections.connection_count,
            "participants": len(registry),
        },
    )
