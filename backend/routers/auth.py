from fastapi import APIRouter, Depends, Request, status
from pydantic import BaseModel
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from typing import Optional
import logging

from backend.config import Settings
from backend.deps import get_app_settings
from backend.models.user import User
from backend.services.auth_service import create_access_token
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

# mounted under both /api/auth and /api/users
router = APIRouter(tags=["auth"])

logger = logging.getLogger("backend.auth")

EMAIL_TAKEN = "Email is already registered"
INVALID_CREDENTIALS = "Invalid email or password"


# ---------------------- MODELS ----------------------
class RegisterIn(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class LoginIn(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


# ---------------------- HELPERS ----------------------
def issue_token(user_id: str, settings: Settings) -> str:
    return create_access_token(user_id, settings.jwt_secret, settings.jwt_expire_days, settings.jwt_algorithm)


def user_with_token(user: User, settings: Settings) -> dict:
    return {**user.to_dict(), "token": issue_token(user.id, settings)}


async def email_in_use(db: AsyncSession, email: str) -> bool:
    q = await db.execute(select(User.id).filter_by(email=email))
    return q.first() is not None


# ---------------------- ROUTES ----------------------
@router.post("/register")
async def register(
    payload: RegisterIn,
    request: Request,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    logger.info(f"POST /register received for email: {payload.email}")
    errors = []
    if not validate_name(payload.name):
        errors.append(NAME_ERROR)
    if not validate_email(payload.email):
        errors.append(EMAIL_ERROR)
    errors.extend(validate_password(payload.password))
    if errors:
        raise ValidationFailed(errors)

    try:
        if await email_in_use(db, payload.email):
            raise ApiError(status.HTTP_400_BAD_REQUEST, EMAIL_TAKEN)

        # plaintext is hashed by the model's pre-save hook
        user = User(name=payload.name, email=payload.email, password=payload.password)
        db.add(user)
        try:
            await db.commit()
        except IntegrityError:
            # lost a race against another registration for the same email
            await db.rollback()
            raise ApiError(status.HTTP_400_BAD_REQUEST, EMAIL_TAKEN)

        logger.info(f"User registered successfully: {user.id}")
        return send_success(status.HTTP_201_CREATED, user_with_token(user, settings), "User registered successfully")
    except ApiError:
        raise
    except Exception as e:
        await db.rollback()
        return server_error(request, e)


@router.post("/login")
async def login(
    payload: LoginIn,
    request: Request,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    logger.info(f"POST /login received for email: {payload.email}")
    if not payload.email or not payload.password:
        raise ApiError(status.HTTP_400_BAD_REQUEST, "Email and password are required")

    try:
        q = await db.execute(select(User).filter_by(email=payload.email))
        user = q.scalars().first()

        # same answer for unknown email and wrong password
        if not user or not user.match_password(payload.password):
            raise ApiError(status.HTTP_401_UNAUTHORIZED, INVALID_CREDENTIALS)

        logger.info(f"User logged in successfully: {user.id}")
        return send_success(status.HTTP_200_OK, user_with_token(user, settings), "Login successful")
    except ApiError:
        raise
    except Exception as e:
        return server_error(request, e)
