"""Attribute service - single dispatcher for attribute operations.

Each call to ``execute`` opens one Unit of Work and routes the operation to
exactly one handler, which performs one repository call.
"""

from typing import Awaitable, Callable

import structlog

from formattr.models.attribute import Attribute
from formattr.services.exceptions import NotFoundError
from formattr.services.operations import (
    AddAttribute,
    DeleteAttribute,
    GetAttribute,
    ListAttributes,
    Operation,
    UpdateAttribute,
)
from formattr.uow import UnitOfWork

logger = structlog.get_logger()

OperationResult = Attribute | list[Attribute] | None


class AttributeService:
    """Executes attribute operations against the store.

    Args:
        uow_factory: Async callable returning a fresh UnitOfWork (see create_uow_factory)

    Raises (from execute):
        NotFoundError: Update or delete of an unknown id
        StoreUnavailableError: Store could not be reached
    """

    def __init__(self, uow_factory: Callable[[], Awaitable[UnitOfWork]]):
        self.uow_factory = uow_factory
        self._handlers: dict[type, Callable[[UnitOfWork, Operation], Awaitable[OperationResult]]] = {
            ListAttributes: self._list_attributes,
            GetAttribute: self._get_attribute,
            AddAttribute: self._add_attribute,
            UpdateAttribute: self._update_attribute,
            DeleteAttribute: self._delete_attribute,
        }

    async def execute(self, operation: Operation) -> OperationResult:
        """Execute one operation inside its own Unit of Work."""
        handler = self._handlers.get(type(operation))
        if handler is None:
            raise TypeError(f"Unsupported operation: {type(operation).__name__}")

        async with await self.uow_factory() as uow:
            return await handler(uow, operation)

    async def _list_attributes(self, uow: UnitOfWork, operation: ListAttributes) -> list[Attribute]:
        attributes = await uow.attributes.list_all()
        logger.debug("attribute.listed", count=len(attributes))
        return attributes

    async def _get_attribute(self, uow: UnitOfWork, operation: GetAttribute) -> Attribute | None:
        return await uow.attributes.get_by_id(operation.id)

    async def _add_attribute(self, uow: UnitOfWork, operation: AddAttribute) -> Attribute:
        attribute = await uow.attributes.add(operation.input)
        logger.info("attribute.created", attribute_id=attribute.id, type=attribute.type)
        return attribute

    async def _update_attribute(self, uow: UnitOfWork, operation: UpdateAttribute) -> Attribute:
        attribute = await uow.attributes.update(operation.input)
        if attribute is None:
            logger.warning("attribute.update_not_found", attribute_id=operation.input.id)
            raise NotFoundError(operation.input.id)

        logger.info(
            "attribute.updated",
            attribute_id=attribute.id,
            fields=sorted(operation.input.changes()),
        )
        return attribute

    async def _delete_attribute(self, uow: UnitOfWork, operation: DeleteAttribute) -> Attribute:
        attribute = await uow.attributes.delete(operation.id)
        if attribute is None:
            logger.warning("attribute.delete_not_found", attribute_id=operation.id)
            raise NotFoundError(operation.id)

        logger.info("attribute.deleted", attribute_id=attribute.id)
        return attribute
