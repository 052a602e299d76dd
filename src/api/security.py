"""
Session-cookie authentication.

The session cookie carries an HS256 JWT (python-jose) with the user's id,
email and role. Route dependencies turn it into an explicit Actor.
"""

from datetime import UTC, datetime, timedelta

from fastapi import Depends, Request
from jose import JWTError, jwt

from src.config import get_logger, get_settings
from src.core.entities.user import Actor, AppUser, Role
from src.core.exceptions import ForbiddenError, UnauthorizedError

logger = get_logger(__name__)

# Cookies expired on logout
LOGOUT_COOKIES = ("SESSION", "JSESSIONID")


def create_session_token(user: AppUser, ttl: timedelta | None = None) -> str:
    """Sign a session token for `user`."""
    auth = get_settings().auth
    now = datetime.now(UTC)
    expire = now + (ttl or timedelta(minutes=auth.session_ttl_minutes))
    payload = {
        "sub": user.email,
        "uid": user.id,
        "role": user.role.value,
        "iat": now,
        "exp": expire,
    }
    return jwt.encode(payload, auth.secret_key, algorithm=auth.algorithm)


def decode_session_token(token: str) -> Actor:
    """Verify a session token; raises UnauthorizedError when it is not usable."""
    auth = get_settings().auth
    try:
        payload = jwt.decode(token, auth.secret_key, algorithms=[auth.algorithm])
    except JWTError as e:
        logger.warning("session_token_rejected", error=str(e))
        raise UnauthorizedError("Invalid or expired session") from e

    email = payload.get("sub")
    user_id = payload.get("uid")
    role = payload.get("role")
    if not email or not user_id or role not in (Role.ADMIN.value, Role.USER.value):
        logger.warning("session_token_incomplete", has_sub=bool(email), role=role)
        raise UnauthorizedError("Invalid session")
    return Actor(id=user_id, email=email, role=Role(role))


async def get_current_actor(request: Request) -> Actor:
    """Dependency: the authenticated caller, or 401."""
    token = request.cookies.get(get_settings().auth.session_cookie)
    if not token:
        raise UnauthorizedError()
    actor = decode_session_token(token)
    request.state.actor_email = actor.email
    return actor


async def require_admin(actor: Actor = Depends(get_current_actor)) -> Actor:
    """Dependency: the authenticated caller if ADMIN, else 403."""
    if not actor.is_admin:
        logger.warning("admin_required", email=actor.email, role=actor.role.value)
        raise ForbiddenError("Admin privileges required", role=actor.role.value)
    return actor
