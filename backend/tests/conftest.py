"""pytest fixtures for formattr tests.

Provides:
- test_environment: Autouse fixture forcing APP_ENV=test
- mongo_client: Function-scoped in-memory client with the async driver API (fresh store per test)
- database / collection: Handles on that client
- uow_factory: Function-scoped UnitOfWork factory bound to the test database
- service: AttributeService using the test UoW factory
- unreachable_uow_factory: UoW factory whose store calls fail like a down server
- unauthorized_uow_factory: UoW factory whose store calls fail authentication
- unreachable_client: Client double whose databases are unreachable
"""

import os

# Must be set before formattr.app is imported (module-level create_app()).
os.environ["APP_ENV"] = "test"

import pytest  # noqa: E402
import structlog  # noqa: E402
from mongomock_motor import AsyncMongoMockClient  # noqa: E402
from pymongo.errors import OperationFailure, ServerSelectionTimeoutError  # noqa: E402

from formattr.services.attributes import AttributeService  # noqa: E402
from formattr.uow import create_uow_factory  # noqa: E402

COLLECTION_NAME = "attributes"


class FailingCollection:
    """Collection double: every call raises the given driver error."""

    def __init__(self, error: Exception):
        self.error = error

    def __getattr__(self, name):
        def fail(*args, **kwargs):
            raise self.error

        return fail


class UnreachableDatabase:
    """Database double: every collection call raises error (default: no server answers)."""

    def __init__(self, error: Exception | None = None):
        self.error = error or ServerSelectionTimeoutError(
            "localhost:27017: [Errno 111] Connection refused"
        )

    def __getitem__(self, name):
        return FailingCollection(self.error)


class UnreachableClient:
    def __getitem__(self, name):
        return UnreachableDatabase()


@pytest.fixture(scope="session", autouse=True)
def test_environment():
    """Keep settings validation in test mode and keep log output off stdout."""
    os.environ["APP_ENV"] = "test"
    structlog.configure(logger_factory=structlog.ReturnLoggerFactory())
    yield


@pytest.fixture
def mongo_client():
    """Provide an in-memory client; each test starts with an empty store."""
    return AsyncMongoMockClient()


@pytest.fixture
def database(mongo_client):
    return mongo_client["test_formattr"]


@pytest.fixture
def collection(database):
    """Raw attribute collection, for asserting on stored documents."""
    return database[COLLECTION_NAME]


@pytest.fixture
def uow_factory(database):
    """Provide function-scoped UnitOfWork factory."""
    return create_uow_factory(database, COLLECTION_NAME)


@pytest.fixture
def service(uow_factory):
    return AttributeService(uow_factory)


@pytest.fixture
def unreachable_uow_factory():
    """UnitOfWork factory whose every store call raises ServerSelectionTimeoutError."""
    return create_uow_factory(UnreachableDatabase(), COLLECTION_NAME)


@pytest.fixture
def unauthorized_uow_factory():
    """UnitOfWork factory whose every store call fails authentication (code 18)."""
    error = OperationFailure("Authentication failed.", code=18)
    return create_uow_factory(UnreachableDatabase(error), COLLECTION_NAME)


@pytest.fixture
def unreachable_client():
    return UnreachableClient()
