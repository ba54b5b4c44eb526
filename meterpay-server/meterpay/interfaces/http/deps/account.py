"""Current-user resolution and account service providers."""

from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from meterpay.core.container import ApplicationContainer
from meterpay.core.security import InvalidTokenError, decode_access_token
from meterpay.modules.accounts import User, UserService
from meterpay.modules.common.repository import Repositories

from .database import get_app_container, get_repositories

bearer_scheme = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_user_service(repositories: Repositories = Depends(get_repositories)) -> UserService:
    return UserService.from_repositories(repositories)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    service: UserService = Depends(get_user_service),
    container: ApplicationContainer = Depends(get_app_container),
) -> User:
    if credentials is None:
        if container.settings.security.auth_required:
            raise _unauthorized("Not authenticated")
        return await service.ensure_demo_user(container.settings.demo_user)

    try:
        user_id = decode_access_token(credentials.credentials)
    except InvalidTokenError as exc:
        raise _unauthorized("Could not validate credentials") from exc

    user = await service.get_by_id(user_id)
    if user is None:
        raise _unauthorized("User no longer exists")
    return user


__all__ = ["bearer_scheme", "get_user_service", "get_current_user"]
