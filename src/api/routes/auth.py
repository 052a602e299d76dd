"""Current-user, login and logout endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Response, status

from src.api.dependencies import get_app_settings, get_auth
from src.api.security import LOGOUT_COOKIES, create_session_token, get_current_actor
from src.application.dto.requests import LoginRequest
from src.application.dto.responses import AppUserResponse, ErrorResponse
from src.config import Settings, get_logger
from src.core.entities.user import Actor
from src.core.exceptions import UnauthorizedError, UserNotFoundError
from src.core.services import AuthService

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["auth"])


@router.get("/me", response_model=AppUserResponse, responses={401: {"model": ErrorResponse}})
async def me(
    actor: Actor = Depends(get_current_actor),
    service: AuthService = Depends(get_auth),
) -> AppUserResponse:
    """Return the logged-in user. A session whose user row is gone is treated as logged out."""
    try:
        user = await service.get_current_user(actor.email)
    except UserNotFoundError as e:
        logger.warning("session_user_missing", email=actor.email)
        raise UnauthorizedError() from e
    return AppUserResponse.from_entity(user)


@router.post("/auth/login", response_model=AppUserResponse)
async def login(
    request: LoginRequest,
    response: Response,
    settings: Settings = Depends(get_app_settings),
    service: AuthService = Depends(get_auth),
) -> AppUserResponse:
    """
    Issue a session for an identity asserted by a trusted upstream.

    Only enabled with AUTH_TRUSTED_LOGIN_ENABLED; production logins arrive
    through the OAuth2 gateway, which calls the same provisioning hook.
    """
    if not settings.auth.trusted_login_enabled:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not Found")

    user = await service.register_login(request.email, request.name)
    response.set_cookie(
        key=settings.auth.session_cookie,
        value=create_session_token(user),
        max_age=settings.auth.session_ttl_minutes * 60,
        httponly=True,
        secure=settings.auth.cookie_secure,
        samesite=settings.auth.cookie_samesite,
        path="/",
    )
    logger.info("session_issued", user_id=user.id, role=user.role.value)
    return AppUserResponse.from_entity(user)


@router.post("/auth/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout() -> Response:
    """Expire the session cookies."""
    response = Response(status_code=status.HTTP_204_NO_CONTENT)
    for name in LOGOUT_COOKIES:
        response.set_cookie(
            key=name,
            value="",
            max_age=0,
            path="/",
            httponly=True,
            secure=True,
            samesite="none",
        )
    return response
