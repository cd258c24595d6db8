import logging
from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from jose import JWTError, jwt

from resume_builder.app.api.dependencies import get_app_settings, get_storage
from resume_builder.app.core.config import Settings
from resume_builder.app.core.security import ACCESS_TOKEN_COOKIE, oauth2_scheme
from resume_builder.app.schemas.user import User
from resume_builder.app.storage.base import Storage

log = logging.getLogger(__name__)


def get_current_user(
    request: Request,
    bearer_token: Annotated[str | None, Depends(oauth2_scheme)],
    storage: Annotated[Storage, Depends(get_storage)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> User:
    """Retrieve the authenticated user from the session cookie or bearer token.

    Args:
        request (Request): The request object, used to read the session cookie.
        bearer_token (str | None): Token from an `Authorization: Bearer` header, if present.
        storage (Storage): Storage used to look up the user.
        settings (Settings): Application settings holding the signing key.

    Returns:
        User: The authenticated user.

    Raises:
        HTTPException: 401 when no token is present, the token is invalid or
            expired, or the user no longer exists.

    Notes:
        1. Prefer the `access_token` cookie; fall back to the bearer header.
        2. Decode the JWT and read the username from the `sub` claim.
        3. Look up the user by username.
        4. Raise before any route logic runs, so unauthenticated requests never reach storage writes.

    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Not authenticated",
        headers={"WWW-Authenticate": "Bearer"},
    )

    token = request.cookies.get(ACCESS_TOKEN_COOKIE) or bearer_token
    if not token:
        raise credentials_exception

    try:
        payload = jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.algorithm],
        )
    except JWTError:
        _msg = "Rejected request with an invalid or expired token"
        log.warning(_msg)
        raise credentials_exception

    username = payload.get("sub")
    if username is None:
        raise credentials_exception

    user = storage.get_user_by_username(username)
    if user is None:
        _msg = f"Token subject {username} no longer exists"
        log.warning(_msg)
        raise credentials_exception

    return user
