"""
JWT + server-side session helpers.

Tokens are signed JWTs whose `jti` must match a live `UserSession` row, so
signing out (deleting the row) invalidates the token before it expires.
The browser may send the token as a Bearer header or as the session cookie.
"""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional, Tuple

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError
from sqlmodel import select
from sqlalchemy.ext.asyncio import AsyncSession

from core.config import settings
from core.database import get_session
from models.session import UserSession
from models.user import User

Algorithm = "HS256"
security = HTTPBearer(auto_error=False)


def create_access_token(
    subject: str,
    token_id: str,
    expires_delta: Optional[timedelta] = None,
) -> Tuple[str, datetime]:
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    to_encode: Dict[str, Any] = {"sub": subject, "jti": token_id, "exp": expire}
    encoded_jwt = jwt.encode(to_encode, settings.SECRET_KEY, algorithm=Algorithm)
    return encoded_jwt, expire


def verify_token(token: str) -> Dict[str, Any]:
    """Verify and decode JWT token"""
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[Algorithm])
        return payload
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )


async def open_session(session: AsyncSession, user: User) -> Tuple[str, UserSession]:
    """Persist a new session row for `user` and return its signed token."""
    token_id = uuid.uuid4().hex
    token, expire = create_access_token(str(user.id), token_id)
    user_session = UserSession(user_id=user.id, token_id=token_id, expires_at=expire)
    session.add(user_session)
    await session.commit()
    await session.refresh(user_session)
    return token, user_session


def _extract_token(request: Request, credentials: Optional[HTTPAuthorizationCredentials]) -> str:
    if credentials is not None:
        return credentials.credentials
    cookie = request.cookies.get(settings.SESSION_COOKIE_NAME)
    if cookie:
        return cookie
    raise HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Not authenticated",
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_session(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    session: AsyncSession = Depends(get_session),
) -> UserSession:
    """Resolve the live session row behind the presented token."""
    payload = verify_token(_extract_token(request, credentials))
    token_id = payload.get("jti")
    if not token_id or payload.get("sub") is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials",
        )

    result = await session.execute(select(UserSession).where(UserSession.token_id == token_id))
    user_session = result.scalar_one_or_none()
    if user_session is None or str(user_session.user_id) != str(payload["sub"]):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Session expired or signed out",
        )
    return user_session


async def get_current_user(
    user_session: UserSession = Depends(get_current_session),
    session: AsyncSession = Depends(get_session),
) -> User:
    """Get current authenticated user from the session token"""
    user = await session.get(User, user_session.user_id)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
        )
    return user
