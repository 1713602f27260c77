"""Unit of Work pattern for the attribute service.

Scopes one operation against the document store: provides the repositories and
guarantees that every exit path (success or failure) is logged and that driver
connectivity, authentication and server timeout failures surface as
StoreUnavailableError.
"""

import structlog
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import ConnectionFailure, ExecutionTimeout, OperationFailure

from formattr.repositories.attribute import AttributeRepository
from formattr.services.exceptions import StoreUnavailableError

logger = structlog.get_logger()

# Server error codes reported as an unavailable store: 13 Unauthorized, 18 AuthenticationFailed
STORE_UNAVAILABLE_CODES = frozenset({13, 18})


def is_store_unavailable(exc: BaseException) -> bool:
    """Whether a driver error means the store could not serve the operation at all."""
    if isinstance(exc, (ConnectionFailure, ExecutionTimeout)):
        return True
    return isinstance(exc, OperationFailure) and exc.code in STORE_UNAVAILABLE_CODES


class UnitOfWork:
    """Unit of Work pattern implementation.

    Use as async context manager. Each operation is a single-document or
    single-scan store call, so there is nothing to commit or roll back; the
    scope exists to bound the operation and normalize its failures.

    Example:
        async with await uow_factory() as uow:
            attribute = await uow.attributes.get_by_id(attribute_id)
            # ConnectionFailure, ExecutionTimeout or an auth failure raised inside
            # is re-raised as StoreUnavailableError
    """

    def __init__(self, database: AsyncDatabase, collection_name: str = "attributes"):
        """Initialize UnitOfWork with a store database handle.

        Args:
            database: Async database holding the attribute collection
            collection_name: Name of the attribute collection
        """
        self.database = database
        self.attributes = AttributeRepository(database[collection_name])

    async def __aenter__(self):
        """Enter async context manager.

        Returns:
            self: UnitOfWork instance with all repositories available
        """
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Exit async context manager, translating store availability failures.

        Returns:
            False: Exceptions are always re-raised (translated or as-is)
        """
        if exc_type is None:
            logger.debug("uow.completed")
            return False

        if is_store_unavailable(exc_val):
            logger.error(
                "uow.store_unavailable",
                error=str(exc_val),
                error_type=exc_type.__name__,
            )
            raise StoreUnavailableError(f"Document store unavailable: {exc_val}") from exc_val

        logger.info("uow.failed", exc_type=exc_type.__name__)
        return False


def create_uow_factory(database: AsyncDatabase, collection_name: str = "attributes"):
    """Create a factory function that produces UnitOfWork instances.

    Args:
        database: Async database (its client owns the connection pool)
        collection_name: Name of the attribute collection

    Returns:
        Callable that creates UnitOfWork instances bound to the database

    Example:
        client = setup_db_client(settings.mongodb_url)
        uow_factory = create_uow_factory(client[settings.mongodb_database])

        async with await uow_factory() as uow:
            await uow.attributes.list_all()
    """

    async def _create_uow():
        """Create a new UnitOfWork instance."""
        return UnitOfWork(database, collection_name)

    return _create_uow
