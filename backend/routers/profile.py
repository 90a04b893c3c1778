# backend/routers/profile.py
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request, status
from pydantic import BaseModel
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from backend.config import Settings
from backend.deps import AuthenticatedUser, get_app_settings, get_current_user
from backend.models.user import User
from backend.routers.auth import EMAIL_TAKEN, email_in_use, user_with_token
from backend.utils.database import get_db
from backend.utils.errors import ApiError, ValidationFailed, server_error
from backend.utils.response import send_success
from backend.utils.validation import (
    EMAIL_ERROR,
    NAME_ERROR,
    validate_email,
    validate_name,
    validate_password,
)

# mounted under both /api/users and /api/auth
router = APIRouter(tags=["profile"])
logger = logging.getLogger("backend.profile")

USER_NOT_FOUND = "User not found"


class UpdateProfile(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


@router.get("/me")
async def me(
    request: Request,
    db: AsyncSession = Depends(get_db),
    current_user: AuthenticatedUser = Depends(get_current_user),
):
    try:
        user = await db.get(User, current_user.id)
        if user is None:
            raise ApiError(status.HTTP_404_NOT_FOUND, USER_NOT_FOUND)
        return send_success(status.HTTP_200_OK, user.to_dict(), "Profile retrieved successfully")
    except ApiError:
        raise
    except Exception as e:
        return server_error(request, e)


@router.put("/me")
async def update_profile(
    payload: UpdateProfile,
    request: Request,
    db: AsyncSession = Depends(get_db),
    current_user: AuthenticatedUser = Depends(get_current_user),
    settings: Settings = Depends(get_app_settings),
):
    supplied = payload.model_fields_set

    # validate every supplied field before touching the record
    errors = []
    if "name" in supplied and not validate_name(payload.name):
        errors.append(NAME_ERROR)
    if "email" in supplied and not validate_email(payload.email):
        errors.append(EMAIL_ERROR)
    if "password" in supplied:
        errors.extend(validate_password(payload.password))
    if errors:
        raise ValidationFailed(errors)

    try:
        user = await db.get(User, current_user.id)
        if user is None:
            raise ApiError(status.HTTP_404_NOT_FOUND, USER_NOT_FOUND)

        if "email" in supplied and payload.email != user.email:
            if await email_in_use(db, payload.email):
                raise ApiError(status.HTTP_400_BAD_REQUEST, EMAIL_TAKEN)
            user.email = payload.email
        if "name" in supplied:
            user.name = payload.name
        if "password" in supplied:
            user.password = payload.password

        try:
            await db.commit()
        except IntegrityError:
            await db.rollback()
            raise ApiError(status.HTTP_400_BAD_REQUEST, EMAIL_TAKEN)

        logger.info(f"Profile updated for user {user.id}")
        return send_success(status.HTTP_200_OK, user_with_token(user, settings), "Profile updated successfully")
    except ApiError:
        raise
    except Exception as e:
        await db.rollback()
        return server_error(request, e)
