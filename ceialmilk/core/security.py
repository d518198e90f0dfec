"""
Password hashing and JWT primitives, plus the bearer-token dependency
that guards every route outside /api/auth.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from passlib.context import CryptContext

from ceialmilk.config import settings

logger = logging.getLogger(__name__)

AUTHORITIES_CLAIM = "authorities"

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login")


@dataclass(frozen=True)
class Principal:
    """Authenticated caller derived from a valid token."""
    username: str
    authorities: List[str] = field(default_factory=list)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(
    subject: str,
    authorities: List[str],
    expires_delta: Optional[timedelta] = None,
) -> str:
    """Sign a token carrying the subject and a comma-joined authorities claim."""
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(seconds=settings.JWT_EXPIRATION_SECONDS))
    to_encode = {
        "sub": subject,
        AUTHORITIES_CLAIM: ",".join(authorities),
        "iat": now,
        "exp": expire,
    }
    return jwt.encode(to_encode, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> dict:
    """Return the claims of a token. Raises JWTError on bad signature or expiry."""
    return jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])


def validate_token(token: str) -> bool:
    try:
        decode_access_token(token)
        return True
    except JWTError as e:
        logger.warning(f"Invalid JWT token: {e}")
        return False


def principal_from_claims(claims: dict) -> Principal:
    raw = claims.get(AUTHORITIES_CLAIM) or ""
    authorities = [a.strip() for a in raw.split(",") if a.strip()]
    return Principal(username=claims["sub"], authorities=authorities)


def get_current_principal(token: str = Depends(oauth2_scheme)) -> Principal:
    """Get the authenticated principal from the bearer token."""
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        claims = decode_access_token(token)
    except JWTError:
        raise credentials_exception
    if not claims.get("sub"):
        raise credentials_exception
    return principal_from_claims(claims)
