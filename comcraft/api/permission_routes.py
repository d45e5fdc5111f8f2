"""
Command permission routes.

Routes (prefix /api/guilds/{guild_id}/command-permissions):
  GET  ""       → Every restrictable command with its allowed roles
  PUT  ""       → Replace allowed roles for some commands
  POST /check   → Would this caller be allowed to run the command?

Guild-level authorization is done by the caller's auth layer.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel

from comcraft.exceptions import PersistenceError

permission_router = APIRouter()


class PermissionEntry(BaseModel):
    command_name: str
    label: str = ""
    allowed_role_ids: Optional[list[str]] = None


class PermissionListResponse(BaseModel):
    success: bool = True
    permissions: list[PermissionEntry]


class PermissionUpdateRequest(BaseModel):
    permissions: list[PermissionEntry]


class AccessCheckRequest(BaseModel):
    command_name: str
    role_ids: list[str] = []
    is_administrator: bool = False


class AccessCheckResponse(BaseModel):
    command_name: str
    allowed: bool


@permission_router.get("", response_model=PermissionListResponse)
def list_permissions(request: Request, guild_id: str):
    try:
        entries = request.app.state.access_gate.list_permissions(guild_id)
    except PersistenceError as e:
        raise HTTPException(status_code=503, detail=str(e))
    return PermissionListResponse(permissions=[PermissionEntry(**e) for e in entries])


@permission_router.put("")
def update_permissions(request: Request, guild_id: str, body: PermissionUpdateRequest):
    try:
        written = request.app.state.access_gate.update_permissions(
            guild_id, [p.model_dump() for p in body.permissions]
        )
    except PersistenceError as e:
        raise HTTPException(status_code=503, detail=str(e))
    return {"success": True, "updated": written}


@permission_router.post("/check", response_model=AccessCheckResponse)
def check_access(request: Request, guild_id: str, body: AccessCheckRequest):
    allowed = request.app.state.access_gate.is_allowed(
        guild_id, body.command_name, body.role_ids, body.is_administrator
    )
    return AccessCheckResponse(command_name=body.command_name, allowed=allowed)
