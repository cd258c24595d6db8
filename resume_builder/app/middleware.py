import logging
from collections.abc import Awaitable, Callable

from fastapi import Request
from fastapi.responses import Response
from jose import JWTError, jwt

from resume_builder.app.core.config import Settings
from resume_builder.app.core.security import (
    ACCESS_TOKEN_COOKIE,
    create_access_token,
    set_access_token_cookie,
)

log = logging.getLogger(__name__)


async def refresh_session_middleware(
    request: Request,
    call_next: Callable[[Request], Awaitable[Response]],
) -> Response:
    """Refreshes session token on each request.

    If a valid, unexpired access token is found in the cookies, a new token
    with a renewed expiration time is issued and set in the response cookies.
    This creates a "sliding session" for active users.

    Args:
        request (Request): The incoming request object.
        call_next: The next middleware or route handler.

    Returns:
        Response: The response from the next middleware or route handler,
                  potentially with a new session cookie.

    Notes:
        1.  Attempt to retrieve the `access_token` from the request cookies.
        2.  If a token is present and decodes with the application's settings,
            create a new token for the same subject.
        3.  Call the next handler.
        4.  Set the new token on the response, unless the handler already set or
            cleared the session cookie itself (login, register, logout).
        5.  If the token is missing, invalid, or expired, do nothing; the auth
            dependency answers with 401.

    """
    log.debug("refresh_session_middleware: starting")
    access_token: str | None = request.cookies.get(ACCESS_TOKEN_COOKIE)

    if not access_token:
        log.debug("refresh_session_middleware: no token, passing through")
        return await call_next(request)

    settings: Settings = request.app.state.settings
    new_token: str | None = None

    try:
        payload = jwt.decode(
            access_token,
            settings.secret_key,
            algorithms=[settings.algorithm],
        )
        subject = payload.get("sub")
        if subject:
            new_token = create_access_token(data={"sub": subject}, settings=settings)
            _msg = "Token refreshed."
            log.debug(_msg)
    except JWTError as e:
        _msg = f"Token decoding failed: {e}. Letting auth dependency handle it."
        log.debug(_msg)

    response = await call_next(request)

    cookie_prefix = f"{ACCESS_TOKEN_COOKIE}="
    handler_set_cookie = any(
        header.startswith(cookie_prefix)
        for header in response.headers.getlist("set-cookie")
    )
    if new_token and not handler_set_cookie:
        set_access_token_cookie(response, new_token)
        _msg = "New session token set in response cookie."
        log.debug(_msg)

    log.debug("refresh_session_middleware: returning")
    return response
