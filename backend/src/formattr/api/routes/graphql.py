"""GraphQL endpoint.

Mounts the attribute schema at /graphql:
- POST /graphql - execute queries and mutations
- GET /graphql - GraphiQL IDE (when GRAPHIQL_ENABLED)
"""

from typing import Any

from fastapi import Depends
from strawberry.fastapi import GraphQLRouter

from formattr.api.dependencies import get_uow_factory
from formattr.api.schema import schema
from formattr.services.attributes import AttributeService


async def get_context(uow_factory=Depends(get_uow_factory)) -> dict[str, Any]:
    """Build the per-request resolver context.

    A fresh AttributeService is bound to the shared UoW factory; it holds no
    attribute data between requests.
    """
    return {"service": AttributeService(uow_factory)}


def create_router(graphiql_enabled: bool = True) -> GraphQLRouter:
    """Create the GraphQL router.

    Args:
        graphiql_enabled: Serve the GraphiQL IDE on GET requests

    Returns:
        Router to include under the /graphql prefix
    """
    return GraphQLRouter(
        schema,
        context_getter=get_context,
        graphql_ide="graphiql" if graphiql_enabled else None,
    )
