import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Response, status
from fastapi.security import OAuth2PasswordRequestForm

from resume_builder.app.api.dependencies import get_app_settings, get_storage
from resume_builder.app.core.auth import get_current_user
from resume_builder.app.core.config import Settings
from resume_builder.app.core.security import (
    ACCESS_TOKEN_COOKIE,
    authenticate_user,
    create_access_token,
    get_password_hash,
    set_access_token_cookie,
)
from resume_builder.app.schemas.user import Token, User, UserCreate, UserResponse
from resume_builder.app.storage.base import Storage
from resume_builder.app.storage.errors import UsernameTakenError

log = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["users"])


def _login_failure() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Incorrect username or password",
        headers={"WWW-Authenticate": "Bearer"},
    )


@router.post("/register", status_code=status.HTTP_201_CREATED)
def register_user(
    user: UserCreate,
    response: Response,
    storage: Annotated[Storage, Depends(get_storage)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> UserResponse:
    """Register a new user and start a session for them.

    Args:
        user (UserCreate): Username and plain password for the new user.
        response (Response): The outgoing response, used to set the session cookie.
        storage (Storage): Storage used to persist the user.
        settings (Settings): Application settings used for token creation.

    Returns:
        UserResponse: The created user's data, excluding the password.

    Raises:
        HTTPException: 400 if the username is already registered.

    Notes:
        1. Hash the password with bcrypt.
        2. Store the user; the storage rejects duplicate usernames.
        3. Issue an access token and set it as the session cookie.
        4. Return the new user without the password.

    """
    _msg = f"Starting register_user for username: {user.username}"
    log.debug(_msg)

    try:
        db_user = storage.create_user(
            UserCreate(
                username=user.username,
                password=get_password_hash(user.password),
            ),
        )
    except UsernameTakenError:
        _msg = f"Username {user.username} already registered"
        log.debug(_msg)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Username already exists",
        )

    access_token = create_access_token(data={"sub": db_user.username}, settings=settings)
    set_access_token_cookie(response, access_token)

    _msg = f"Returning registered user: {db_user.username}"
    log.debug(_msg)
    return UserResponse.model_validate(db_user)


@router.post("/login")
def login_user(
    credentials: UserCreate,
    response: Response,
    storage: Annotated[Storage, Depends(get_storage)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> UserResponse:
    """Authenticate a user from a JSON body and start a session.

    Args:
        credentials (UserCreate): Username and password.
        response (Response): The outgoing response, used to set the session cookie.
        storage (Storage): Storage used to verify the credentials.
        settings (Settings): Application settings used for token creation.

    Returns:
        UserResponse: The authenticated user.

    Raises:
        HTTPException: 401 if the username or password is incorrect.

    """
    _msg = f"Starting login_user for username: {credentials.username}"
    log.debug(_msg)

    user = authenticate_user(storage, credentials.username, credentials.password)
    if not user:
        _msg = f"Authentication failed for user: {credentials.username}"
        log.warning(_msg)
        raise _login_failure()

    access_token = create_access_token(data={"sub": user.username}, settings=settings)
    set_access_token_cookie(response, access_token)
    return UserResponse.model_validate(user)


@router.post("/token")
def login_for_access_token(
    form_data: Annotated[OAuth2PasswordRequestForm, Depends()],
    storage: Annotated[Storage, Depends(get_storage)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> Token:
    """Authenticate a user from an OAuth2 password form and return a bearer token.

    Args:
        form_data (OAuth2PasswordRequestForm): Form data containing username and password.
        storage (Storage): Storage used to verify the credentials.
        settings (Settings): Application settings used for token creation.

    Returns:
        Token: An access token for the authenticated user.

    Raises:
        HTTPException: 401 if the username or password is incorrect.

    """
    user = authenticate_user(storage, form_data.username, form_data.password)
    if not user:
        _msg = f"Authentication failed for user: {form_data.username}"
        log.warning(_msg)
        raise _login_failure()

    access_token = create_access_token(data={"sub": user.username}, settings=settings)
    return Token(access_token=access_token, token_type="bearer")


@router.post("/logout")
def logout_user(response: Response) -> dict[str, str]:
    """End the session by clearing the session cookie."""
    response.delete_cookie(key=ACCESS_TOKEN_COOKIE, path="/")
    return {"message": "Logged out"}


@router.get("/user")
def read_current_user(
    current_user: Annotated[User, Depends(get_current_user)],
) -> UserResponse:
    """Return the authenticated user."""
    return UserResponse.model_validate(current_user)
