# backend/deps.py
from dataclasses import dataclass

import jwt
from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from backend.config import Settings
from backend.models.user import User
from backend.services.auth_service import decode_access_token
from backend.utils.database import get_db
from backend.utils.errors import NotAuthorized

NO_TOKEN = "Not authorized, no token"
TOKEN_FAILED = "Not authorized, token failed"


@dataclass(frozen=True)
class AuthenticatedUser:
    """The verified identity behind a request."""

    id: str
    name: str
    email: str


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


async def get_current_user(
    authorization: str = Header(None),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> AuthenticatedUser:
    """
    Expect Authorization: Bearer <token>
    Returns the acting user or raises 401.
    """
    if not authorization or not authorization.lower().startswith("bearer"):
        raise NotAuthorized(NO_TOKEN)
    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise NotAuthorized(TOKEN_FAILED)

    try:
        payload = decode_access_token(parts[1], settings.jwt_secret, settings.jwt_algorithm)
    except jwt.PyJWTError:
        raise NotAuthorized(TOKEN_FAILED)

    user = await db.get(User, str(payload["id"]))
    if user is None:
        raise NotAuthorized(TOKEN_FAILED)
    return AuthenticatedUser(id=user.id, name=user.name, email=user.email)
