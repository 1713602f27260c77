"""Document store client setup."""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from pymongo import AsyncMongoClient


def setup_db_client(
    db_url: str, max_pool_size: int = 100, timeout_ms: int = 5000
) -> AsyncMongoClient:
    """Create async MongoDB client.

    The client owns a connection pool and is safe to share across requests.
    Connections are opened lazily on first use.

    Args:
        db_url: MongoDB connection URL (mongodb://... or mongodb+srv://...)
        max_pool_size: Maximum number of connections in the pool (default: 100)
        timeout_ms: Server selection and connect timeout in milliseconds (default: 5000)

    Returns:
        PyMongo async client

    Raises:
        pymongo.errors.InvalidURI: If db_url is not a MongoDB connection string
    """
    return AsyncMongoClient(
        db_url,
        maxPoolSize=max_pool_size,
        serverSelectionTimeoutMS=timeout_ms,
        connectTimeoutMS=timeout_ms,
        retryWrites=False,  # No retries below the service layer
        retryReads=False,
    )


@asynccontextmanager
async def scoped_client(
    db_url: str, max_pool_size: int = 100, timeout_ms: int = 5000
) -> AsyncGenerator[AsyncMongoClient, None]:
    """Provide a client for a single invocation and close it on every exit path.

    Used by one-shot hosts (CLI) that must not leave connections open.
    """
    client = setup_db_client(db_url, max_pool_size, timeout_ms)
    try:
        yield client
    finally:
        await client.close()


async def ping(client: AsyncMongoClient) -> None:
    """Round trip to the server; raises pymongo ConnectionFailure if unreachable."""
    await client.admin.command("ping")
