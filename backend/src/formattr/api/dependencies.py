"""FastAPI dependency injection functions."""

from typing import Awaitable, Callable

from fastapi import Request

from formattr.uow import UnitOfWork


def get_uow_factory(request: Request) -> Callable[[], Awaitable[UnitOfWork]]:
    """Get UnitOfWork factory from app state.

    Args:
        request: FastAPI Request object (contains app.state)

    Returns:
        UnitOfWork factory function created in the app lifespan

    Example:
        >>> @router.get("/endpoint")
        >>> async def endpoint(uow_factory=Depends(get_uow_factory)):
        ...     async with await uow_factory() as uow:
        ...         await uow.attributes.list_all()
    """
    return request.app.state.uow_factory
