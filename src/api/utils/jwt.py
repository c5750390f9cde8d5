import hashlib
import secrets
from datetime import UTC, datetime, timedelta
from typing import Optional

from fastapi import Response
from jose import JWTError, jwt

from config import ApplicationConfig
from src.domain.entities import Role, User

ACCESS_COOKIE = "access_token"
REFRESH_COOKIE = "refresh_token"
ALGORITHM = "HS256"


def create_access_token(user: User, expires_delta: Optional[timedelta] = None) -> str:
    """
    Create JWT access token

    Args:
        user: Authenticated user
        expires_delta: Token lifetime, ACCESS_TOKEN_MINUTES by default

    Returns:
        JWT token string (HS256)
    """
    now = datetime.now(UTC)
    expires_delta = expires_delta or timedelta(minutes=ApplicationConfig.ACCESS_TOKEN_MINUTES)
    payload = {
        "user_id": str(user.id),
        "email": user.email,
        "role": Role(user.role).value,
        "organization_id": str(user.organization_id),
        "department_id": str(user.department_id),
        "type": "access",
        "exp": now + expires_delta,
        "iat": now,
    }
    return jwt.encode(payload, ApplicationConfig.JWT_SECRET, algorithm=ALGORITHM)


def create_refresh_token(user: User, expires_delta: Optional[timedelta] = None) -> str:
    """Refresh token carrying only the user id; a random jti keeps each one distinct"""
    now = datetime.now(UTC)
    expires_delta = expires_delta or timedelta(days=ApplicationConfig.REFRESH_TOKEN_DAYS)
    payload = {
        "user_id": str(user.id),
        "type": "refresh",
        "jti": secrets.token_urlsafe(16),
        "exp": now + expires_delta,
        "iat": now,
    }
    return jwt.encode(payload, ApplicationConfig.JWT_SECRET, algorithm=ALGORITHM)


def verify_jwt(token: str, token_type: str = "access") -> Optional[dict]:
    """
    Verify and decode JWT token

    Args:
        token: JWT token string
        token_type: Expected "type" claim

    Returns:
        Decoded payload dict or None if invalid, expired or of another type
    """
    try:
        payload = jwt.decode(token, ApplicationConfig.JWT_SECRET, algorithms=[ALGORITHM])
    except JWTError:
        return None
    if payload.get("type") != token_type:
        return None
    return payload


def hash_token(token: str) -> str:
    """SHA-256 hex digest; only this is stored"""
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


def set_auth_cookies(response: Response, access_token: str, refresh_token: str) -> None:
    options = {
        "httponly": True,
        "secure": ApplicationConfig.COOKIE_SECURE,
        "samesite": ApplicationConfig.COOKIE_SAMESITE,
        "path": "/",
    }
    response.set_cookie(
        ACCESS_COOKIE,
        access_token,
        max_age=ApplicationConfig.ACCESS_TOKEN_MINUTES * 60,
        **options,
    )
    response.set_cookie(
        REFRESH_COOKIE,
        refresh_token,
        max_age=ApplicationConfig.REFRESH_TOKEN_DAYS * 24 * 60 * 60,
        **options,
    )


def clear_auth_cookies(response: Response) -> None:
    response.delete_cookie(ACCESS_COOKIE, path="/")
    response.delete_cookie(REFRESH_COOKIE, path="/")
