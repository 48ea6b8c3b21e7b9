from datetime import datetime, timedelta
from typing import Optional

from fastapi import Depends, Request, HTTPException, status
from jose import JWTError, jwt

from jobboard.config import get_settings

TOKEN_EXPIRE_DAYS = 30
COOKIE_NAME = "session_token"
ADMIN_ROLE = "admin"


def create_session_token(
    user_id: str,
    role: Optional[str] = None,
    expires_days: int = TOKEN_EXPIRE_DAYS,
) -> str:
    settings = get_settings()
    expire = datetime.utcnow() + timedelta(days=expires_days)
    to_encode = {"sub": user_id, "exp": expire}
    if role:
        to_encode["role"] = role
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.jwt_algorithm)


def decode_session_token(token: str) -> Optional[dict]:
    settings = get_settings()
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None
    if not payload.get("sub"):
        return None
    return payload


def _request_token(request: Request) -> Optional[str]:
    header = request.headers.get("Authorization", "")
    scheme, _, credentials = header.partition(" ")
    if scheme.lower() == "bearer" and credentials:
        return credentials.strip()
    return request.cookies.get(COOKIE_NAME)


def get_token_claims(request: Request) -> Optional[dict]:
    token = _request_token(request)
    if not token:
        return None
    return decode_session_token(token)


async def get_current_user_id(request: Request) -> Optional[str]:
    """Signed-in user id, or None for anonymous visitors."""
    claims = get_token_claims(request)
    return claims["sub"] if claims else None


async def require_user(user_id: Optional[str] = Depends(get_current_user_id)) -> str:
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )
    return user_id


async def require_admin(request: Request) -> str:
    claims = get_token_claims(request)
    if not claims:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )
    if claims.get("role") != ADMIN_ROLE:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return claims["sub"]
