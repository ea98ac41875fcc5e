"""
Bearer-token identity for the API.

Tokens are HS256 JWTs whose ``sub`` is the user id and which also carry the
global role. Every request re-loads the user, so a role change or a deleted
account takes effect without waiting for the token to expire.
"""
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional
import logging

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from .core.settings import get_settings
from .db import get_db
from .exceptions import AuthenticationError, PermissionDeniedError
from .models import User

logger = logging.getLogger(__name__)

settings = get_settings()

ACCESS_TOKEN_EXPIRE_MINUTES = settings.access_token_expire_minutes

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# auto_error is off so a missing header goes through the same 401 path as a bad token
bearer_scheme = HTTPBearer(auto_error=False)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def password_matches(plain_password: str, password_hash: str) -> bool:
    return pwd_context.verify(plain_password, password_hash)


def create_access_token(user_id: int, role: str, expires_delta: Optional[timedelta] = None) -> str:
    """Sign a token for the user. Defaults to the configured lifetime."""
    issued_at = datetime.now(timezone.utc)
    lifetime = expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    claims = {
        "sub": str(user_id),
        "role": role,
        "iat": issued_at,
        "exp": issued_at + lifetime,
    }
    return jwt.encode(claims, settings.secret_key, algorithm=settings.algorithm)


def decode_access_token(token: str) -> Dict[str, Any]:
    """
    Return the token claims.

    Raises:
        AuthenticationError: the token is expired, tampered with or has no
            usable subject
    """
    try:
        claims = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except ExpiredSignatureError:
        raise AuthenticationError("Token has expired")
    except JWTError:
        raise AuthenticationError("Could not validate credentials")

    try:
        int(claims.get("sub"))
    except (TypeError, ValueError):
        raise AuthenticationError("Could not validate credentials")
    return claims


def authenticate(db: Session, email: str, password: str) -> Optional[User]:
    """The user with these credentials, or None."""
    user = db.query(User).filter(User.email == email).first()
    if user is None or not password_matches(password, user.password_hash):
        return None
    return user


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> User:
    if credentials is None:
        raise AuthenticationError("Missing bearer token")

    claims = decode_access_token(credentials.credentials)
    user = db.get(User, int(claims["sub"]))
    if user is None:
        logger.warning(f"Token for unknown user {claims['sub']}")
        raise AuthenticationError("Could not validate credentials")
    return user


def require_admin(current_user: User = Depends(get_current_user)) -> User:
    """Allow only users whose global role is admin"""
    if not current_user.is_admin:
        raise PermissionDeniedError("Administrator access required")
    return current_user
