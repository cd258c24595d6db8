import logging
from datetime import UTC, datetime, timedelta

import bcrypt
from fastapi import Response
from fastapi.security import OAuth2PasswordBearer
from jose import jwt

from resume_builder.app.core.config import Settings
from resume_builder.app.schemas.user import User
from resume_builder.app.storage.base import Storage

log = logging.getLogger(__name__)

ACCESS_TOKEN_COOKIE = "access_token"

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/token", auto_error=False)


def create_access_token(
    data: dict,
    settings: Settings,
    expires_delta: timedelta | None = None,
) -> str:
    """Create a JWT access token.

    Args:
        data (dict): The claims to encode in the token; `sub` holds the username.
        settings (Settings): The application settings object.
        expires_delta (timedelta | None): Custom expiration time for the token. If None, uses the configured default.

    Returns:
        str: The encoded JWT token as a string.

    Notes:
        1. Copy the data to avoid modifying the original.
        2. Set expiration time based on expires_delta or default.
        3. Encode the data with the secret key and algorithm.
        4. No database or network access in this function.

    """
    _msg = "Creating access token"
    log.debug(_msg)
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.now(UTC) + expires_delta
    else:
        expire = datetime.now(UTC) + timedelta(
            minutes=settings.access_token_expire_minutes,
        )
    to_encode.update({"exp": expire})
    return jwt.encode(
        to_encode,
        settings.secret_key,
        algorithm=settings.algorithm,
    )


def set_access_token_cookie(response: Response, token: str) -> None:
    """Attach the session token to a response as an httponly cookie."""
    response.set_cookie(
        key=ACCESS_TOKEN_COOKIE,
        value=token,
        httponly=True,
        samesite="lax",
        path="/",
        secure=False,  # Should be True in production & depend on settings
    )


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain password against a hashed password.

    Args:
        plain_password (str): The plain text password to verify.
        hashed_password (str): The bcrypt hash to compare against.

    Returns:
        bool: True if the password matches, False otherwise. A stored value
            that is not a bcrypt hash never matches.

    """
    _msg = "Verifying password"
    log.debug(_msg)
    try:
        return bcrypt.checkpw(
            plain_password.encode("utf-8"),
            hashed_password.encode("utf-8"),
        )
    except ValueError:
        _msg = "Stored password is not a valid bcrypt hash"
        log.warning(_msg)
        return False


def get_password_hash(password: str) -> str:
    """Hash a plain password with bcrypt.

    Args:
        password (str): The plain text password to hash.

    Returns:
        str: The hashed password.

    """
    _msg = "Hashing password"
    log.debug(_msg)
    salt = bcrypt.gensalt()
    hashed = bcrypt.hashpw(password.encode("utf-8"), salt)
    return hashed.decode("utf-8")


def authenticate_user(storage: Storage, username: str, password: str) -> User | None:
    """Authenticate a user by username and password.

    Args:
        storage (Storage): Storage used to look up the user.
        username (str): Username to authenticate.
        password (str): Password to verify.

    Returns:
        User | None: The authenticated user if successful, None otherwise.

    Notes:
        1. Look up the user by username.
        2. If the user exists and the password matches the stored hash, return the user.
        3. Otherwise, return None.

    """
    _msg = f"Authenticating user: {username}"
    log.debug(_msg)

    user = storage.get_user_by_username(username)
    if not user:
        return None
    if not verify_password(password, user.password):
        return None
    return user
