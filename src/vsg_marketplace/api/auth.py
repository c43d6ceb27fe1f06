"""Bearer-token caller resolution."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from vsg_marketplace.domain.callers import Caller, CallerRole

if TYPE_CHECKING:
    from vsg_marketplace.config import Settings
    from vsg_marketplace.containers import AppContainer

bearer = HTTPBearer(auto_error=False)


def resolve_caller(token: str, settings: Settings) -> Caller:
    """Decode a JWT and build the caller it identifies."""
    claims = jwt.decode(
        token,
        settings.jwt_secret,
        algorithms=[settings.jwt_algorithm],
        options={"verify_aud": False},
    )
    email = claims.get("email") or claims.get("sub")
    if not email:
        raise JWTError("Token has no subject")
    raw_roles = claims.get("roles", claims.get("role", []))
    roles = [raw_roles] if isinstance(raw_roles, str) else list(raw_roles or [])
    role = CallerRole.ADMIN if settings.admin_role in roles else CallerRole.USER
    return Caller(email=str(email), role=role)


async def get_caller(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer),
) -> Caller:
    """Return the authenticated caller or reject the request."""
    if credentials is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)
    container: AppContainer = request.app.state.container
    try:
        return resolve_caller(credentials.credentials, container.settings)
    except JWTError as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED) from exc


async def require_admin(caller: Caller = Depends(get_caller)) -> Caller:
    """Ensure the caller holds the admin role."""
    if not caller.is_admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN)
    return caller
