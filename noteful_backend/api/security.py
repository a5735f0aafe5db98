"""
Password credentials and bearer-token authentication.

Passwords are hashed with bcrypt through passlib. Access tokens are HS256
JWTs whose `sub` claim carries the user id; `get_current_user_id` is the
only way the routers learn who the caller is.
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from passlib.context import CryptContext

from noteful_database.db import get_db
from noteful_database.models import User

from .config import settings
from .errors import MissingCredential, TooLong, TooShort, TypeMismatch, WhitespaceViolation

logger = logging.getLogger(__name__)

USERNAME_MIN_LENGTH = 1
PASSWORD_MIN_LENGTH = 8
# bcrypt ignores everything past 72 bytes
PASSWORD_MAX_LENGTH = 72

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/login")


# PUBLIC_INTERFACE
def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


# PUBLIC_INTERFACE
def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


# PUBLIC_INTERFACE
def validate_credentials(payload: dict) -> None:
    """
    Check the shape of a registration payload.

    Rules run in a fixed order and the first violation is raised:
    presence, string type, surrounding whitespace, then length bounds.
    The password's upper bound counts UTF-8 bytes, as bcrypt does.
    """
    fields = ("username", "password")

    for field in fields:
        if field not in payload or payload[field] is None:
            raise MissingCredential(field)

    for field in fields:
        if not isinstance(payload[field], str):
            raise TypeMismatch(field)

    for field in fields:
        if payload[field].strip() != payload[field]:
            raise WhitespaceViolation(field)

    if len(payload["username"]) < USERNAME_MIN_LENGTH:
        raise TooShort("username", USERNAME_MIN_LENGTH)
    if len(payload["password"]) < PASSWORD_MIN_LENGTH:
        raise TooShort("password", PASSWORD_MIN_LENGTH)
    if len(payload["password"].encode("utf-8")) > PASSWORD_MAX_LENGTH:
        raise TooLong("password", PASSWORD_MAX_LENGTH)


def authenticate_user(db, username: str, password: str) -> Optional[User]:
    user = db.query(User).filter(User.username == username).first()
    if not user or not verify_password(password, user.hashed_password):
        return None
    return user


# PUBLIC_INTERFACE
def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Generates JWT access token."""
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (
        expires_delta if expires_delta else timedelta(minutes=settings.access_token_expire_minutes)
    )
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)


# PUBLIC_INTERFACE
def get_current_user_id(token: str = Depends(oauth2_scheme), db=Depends(get_db)) -> int:
    """Decodes the bearer token and returns the id of an existing user."""
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Unauthorized",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
        subject = payload.get("sub")
        if subject is None:
            raise credentials_exception
        user_id = int(subject)
    except (JWTError, ValueError):
        logger.info("Rejected bearer token")
        raise credentials_exception
    if db.query(User.id).filter(User.id == user_id).first() is None:
        raise credentials_exception
    return user_id
