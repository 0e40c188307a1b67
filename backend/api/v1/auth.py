from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Response, status
from pydantic import BaseModel, EmailStr, Field
from sqlalchemy.exc import IntegrityError
from sqlmodel import select
from sqlalchemy.ext.asyncio import AsyncSession

from core.config import settings
from core.crypto import hash_password, verify_password
from core.database import get_session
from core.logging import logger
from core.security import get_current_session, get_current_user, open_session
from models.schemas import UserRead
from models.session import UserSession
from models.user import User

router = APIRouter(prefix="/auth", tags=["Auth"])


class SignUpRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6)
    full_name: Optional[str] = None


class SignInRequest(BaseModel):
    email: EmailStr
    password: str


def _set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        settings.SESSION_COOKIE_NAME,
        token,
        httponly=True,
        secure=settings.ENV == "production",
        samesite="lax",
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    )


def _token_payload(user: User, token: str, user_session: UserSession) -> dict:
    return {
        "success": True,
        "access_token": token,
        "token_type": "bearer",
        "expires_at": user_session.expires_at.isoformat(),
        "user": UserRead.model_validate(user).model_dump(mode="json"),
    }


@router.post("/signup", status_code=status.HTTP_201_CREATED)
async def sign_up(
    payload: SignUpRequest,
    response: Response,
    session: AsyncSession = Depends(get_session),
) -> dict:
    """Create an account and sign it in."""
    email = payload.email.lower()
    user = User(email=email, full_name=payload.full_name, password_hash=hash_password(payload.password))
    session.add(user)
    try:
        await session.commit()
    except IntegrityError:
        await session.rollback()
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Email is already registered")
    await session.refresh(user)

    token, user_session = await open_session(session, user)
    _set_session_cookie(response, token)
    logger.info("New user id={} signed up", user.id)
    return _token_payload(user, token, user_session)


@router.post("/signin")
async def sign_in(
    payload: SignInRequest,
    response: Response,
    session: AsyncSession = Depends(get_session),
) -> dict:
    """Password sign-in; returns a bearer token and sets the session cookie."""
    result = await session.execute(select(User).where(User.email == payload.email.lower()))
    user = result.scalar_one_or_none()
    if user is None or not verify_password(payload.password, user.password_hash):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        )

    token, user_session = await open_session(session, user)
    _set_session_cookie(response, token)
    logger.info("User id={} signed in", user.id)
    return _token_payload(user, token, user_session)


@router.post("/signout")
async def sign_out(
    response: Response,
    user_session: UserSession = Depends(get_current_session),
    session: AsyncSession = Depends(get_session),
) -> dict:
    await session.delete(user_session)
    await session.commit()
    response.delete_cookie(settings.SESSION_COOKIE_NAME)
    logger.info("User id={} signed out", user_session.user_id)
    return {"success": True}


@router.get("/user")
async def get_user_profile(
    current_user: User = Depends(get_current_user)
) -> dict:
    """Get the current user's profile information"""
    return UserRead.model_validate(current_user).model_dump(mode="json")


@router.get("/session")
async def get_session_info(
    user_session: UserSession = Depends(get_current_session),
) -> dict:
    return {
        "user_id": user_session.user_id,
        "created_at": user_session.created_at.isoformat(),
        "expires_at": user_session.expires_at.isoformat(),
    }
