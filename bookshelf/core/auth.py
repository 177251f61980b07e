import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from bookshelf.core.exceptions import Unauthorized
from bookshelf.core.settings import settings

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class RequestContext:
    """Identity of the acting user; every core operation is scoped by it."""

    user_id: str

    def __post_init__(self):
        if not self.user_id:
            raise Unauthorized("Missing user identity")


def create_access_token(
    user_id: str, expires_delta: Optional[timedelta] = None
) -> str:
    """
    Mint a token shaped like the identity provider's access tokens.

    Used by tests and local development; production tokens are issued by
    the provider and only verified here.
    """
    now = datetime.now(timezone.utc)
    expire = now + (
        expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    to_encode = {
        "sub": str(user_id),
        "aud": settings.JWT_AUDIENCE,
        "role": "authenticated",
        "iat": int(now.timestamp()),
        "exp": int(expire.timestamp()),
    }
    return jwt.encode(
        to_encode, settings.SUPABASE_JWT_SECRET, algorithm=settings.JWT_ALGORITHM
    )


def decode_access_token(token: str) -> RequestContext:
    try:
        payload = jwt.decode(
            token,
            settings.SUPABASE_JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM],
            audience=settings.JWT_AUDIENCE,
        )
    except JWTError as e:
        logger.warning(f"Rejected access token: {e}")
        raise Unauthorized() from e

    user_id = payload.get("sub")
    if not user_id:
        logger.warning("Access token has no subject")
        raise Unauthorized()
    return RequestContext(user_id=user_id)


def get_request_context(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> RequestContext:
    """FastAPI dependency turning the bearer token into a RequestContext."""
    if credentials is None or not credentials.credentials:
        raise Unauthorized("Not authenticated")
    return decode_access_token(credentials.credentials)
