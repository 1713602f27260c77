"""GraphQL schema for the attribute API.

Declares the Attribute output type, the add/update inputs and the five
operations:
- Query.attributes / Query.attribute(id)
- Mutation.addAttribute(input) / updateAttribute(input) / deleteAttribute(id)

Resolvers build an operation variant and hand it to the AttributeService found
in the request context. Service errors are reported as GraphQL errors with
``extensions.code`` (VALIDATION_ERROR, NOT_FOUND, STORE_UNAVAILABLE).
"""

from typing import Any, Callable, Optional

import strawberry
from graphql import GraphQLError
from strawberry.types import Info

from formattr.models.attribute import Attribute
from formattr.services.exceptions import ServiceError, ValidationError
from formattr.services.operations import (
    AddAttribute,
    DeleteAttribute,
    GetAttribute,
    ListAttributes,
    Operation,
    UpdateAttribute,
)


@strawberry.type(description="Form-field descriptor")
class AttributeType:
    id: str
    name: str
    type: str
    placeholder: Optional[str] = None
    options: Optional[list[str]] = None

    @classmethod
    def from_model(cls, attribute: Attribute) -> "AttributeType":
        return cls(
            id=attribute.id,
            name=attribute.name,
            type=attribute.type,
            placeholder=attribute.placeholder,
            options=list(attribute.options) if attribute.options is not None else None,
        )


@strawberry.input
class AttributeAddInput:
    name: str
    type: str
    placeholder: Optional[str] = strawberry.UNSET
    options: Optional[list[str]] = strawberry.UNSET


@strawberry.input(description="Omitted fields are left unchanged; null clears placeholder/options")
class AttributeUpdateInput:
    id: str
    name: Optional[str] = strawberry.UNSET
    type: Optional[str] = strawberry.UNSET
    placeholder: Optional[str] = strawberry.UNSET
    options: Optional[list[str]] = strawberry.UNSET


def _supplied(data: Any, fields: tuple[str, ...]) -> dict[str, Any]:
    """Collect input fields the caller actually sent (UNSET means omitted)."""
    return {
        field: getattr(data, field)
        for field in fields
        if getattr(data, field) is not strawberry.UNSET
    }


def _error_extensions(error: ServiceError) -> dict[str, Any]:
    extensions: dict[str, Any] = {"code": error.code}
    if isinstance(error, ValidationError) and error.errors:
        extensions["fields"] = error.errors
    return extensions


async def _run(info: Info, build: Callable[[], Operation]):
    """Build and execute one operation, reporting service errors as GraphQL errors."""
    try:
        return await info.context["service"].execute(build())
    except ServiceError as e:
        raise GraphQLError(str(e), extensions=_error_extensions(e)) from e


def _to_type(attribute: Attribute | None) -> AttributeType | None:
    return AttributeType.from_model(attribute) if attribute is not None else None


@strawberry.type
class Query:
    @strawberry.field(description="List every attribute")
    async def attributes(self, info: Info) -> Optional[list[Optional[AttributeType]]]:
        attributes = await _run(info, ListAttributes)
        return [AttributeType.from_model(attribute) for attribute in attributes]

    @strawberry.field(description="Fetch one attribute, null if it does not exist")
    async def attribute(self, info: Info, id: str) -> Optional[AttributeType]:
        return _to_type(await _run(info, lambda: GetAttribute(id=id)))


@strawberry.type
class Mutation:
    @strawberry.mutation(description="Create an attribute")
    async def add_attribute(self, info: Info, input: AttributeAddInput) -> Optional[AttributeType]:
        payload = _supplied(input, ("name", "type", "placeholder", "options"))
        return _to_type(await _run(info, lambda: AddAttribute.from_payload(payload)))

    @strawberry.mutation(description="Partially update an attribute")
    async def update_attribute(
        self, info: Info, input: AttributeUpdateInput
    ) -> Optional[AttributeType]:
        payload = _supplied(input, ("id", "name", "type", "placeholder", "options"))
        return _to_type(await _run(info, lambda: UpdateAttribute.from_payload(payload)))

    @strawberry.mutation(description="Delete an attribute, returns its last state")
    async def delete_attribute(self, info: Info, id: str) -> Optional[AttributeType]:
        return _to_type(await _run(info, lambda: DeleteAttribute(id=id)))


schema = strawberry.Schema(query=Query, mutation=Mutation)
