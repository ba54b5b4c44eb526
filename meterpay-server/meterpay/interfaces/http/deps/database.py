"""Storage dependency providers."""

from collections.abc import AsyncGenerator

from fastapi import Depends, Request

from meterpay.core.container import ApplicationContainer
from meterpay.infrastructure.database.repositories import sql_repositories
from meterpay.infrastructure.database.session import session_scope
from meterpay.modules.common.repository import Repositories


def get_app_container(request: Request) -> ApplicationContainer:
    return request.app.state.container


async def get_repositories(
    container: ApplicationContainer = Depends(get_app_container),
) -> AsyncGenerator[Repositories, None]:
    """Repositories for one request; the SQL backend shares a single session across them."""
    if container.settings.uses_memory_storage:
        yield container.memory_store.repositories()
        return
    async with session_scope() as session:
        yield sql_repositories(session)


__all__ = ["get_app_container", "get_repositories"]
