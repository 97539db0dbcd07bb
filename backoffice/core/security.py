from __future__ import annotations

from typing import Literal

from fastapi import Header, HTTPException
from pydantic import BaseModel

from backoffice.core.config import get_settings


ActorRole = Literal["admin", "manager"]


class Actor(BaseModel):
    role: ActorRole
    email: str


def _auth_error(detail: str) -> HTTPException:
    return HTTPException(status_code=401, detail=detail, headers={"WWW-Authenticate": "Bearer"})


def _extract_api_key(authorization: str | None, x_api_key: str | None) -> str | None:
    if authorization:
        scheme, _, token = authorization.partition(" ")
        if scheme.lower() != "bearer" or not token.strip():
            raise _auth_error("invalid authorization header")
        return token.strip()
    if x_api_key and x_api_key.strip():
        return x_api_key.strip()
    return None


def _actor_from_api_key(api_key: str) -> Actor | None:
    settings = get_settings()
    key_map = {
        settings.admin_api_key: Actor(role="admin", email=settings.admin_actor_id),
        settings.manager_api_key: Actor(role="manager", email=settings.manager_actor_id),
    }
    return key_map.get(api_key)


def get_actor(
    authorization: str | None = Header(default=None),
    x_api_key: str | None = Header(default=None),
) -> Actor:
    settings = get_settings()
    if not settings.auth_enabled:
        return Actor(role="admin", email=settings.admin_actor_id)

    api_key = _extract_api_key(authorization, x_api_key)
    if not api_key:
        raise _auth_error("missing api key")

    actor = _actor_from_api_key(api_key)
    if actor is None:
        raise _auth_error("invalid api key")
    return actor


def require_admin(actor: Actor) -> None:
    if actor.role != "admin":
        raise HTTPException(status_code=403, detail="admin access required")


def require_roles(actor: Actor, allowed: set[str], detail: str = "insufficient role") -> None:
    if actor.role not in allowed:
        raise HTTPException(status_code=403, detail=detail)
