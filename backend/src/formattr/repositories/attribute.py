"""Attribute repository for the attribute service.

Provides data access methods for Attribute documents. Every method performs at
most one round trip to the store.
"""

from typing import Any

from bson import ObjectId
from pymongo import ReturnDocument
from pymongo.asynchronous.collection import AsyncCollection

from formattr.models.attribute import Attribute, AttributeCreate, AttributeUpdate


def to_object_id(attribute_id: str) -> ObjectId | None:
    """Parse an attribute id into an ObjectId.

    Returns:
        ObjectId if the id is a well-formed 24-character hex string, None otherwise
    """
    if not ObjectId.is_valid(attribute_id):
        return None
    return ObjectId(attribute_id)


class AttributeRepository:
    """Repository for Attribute documents.

    Methods:
    - list_all: All attributes in store-native order
    - get_by_id: Retrieve attribute by id
    - add: Insert new attribute, store assigns the id
    - update: Apply a partial update, returns post-update state
    - delete: Remove attribute, returns pre-deletion state

    Malformed ids can never match a stored document, so they are treated
    exactly like unknown ids (None result, no store call).
    """

    def __init__(self, collection: AsyncCollection):
        """Initialize repository with a store collection.

        Args:
            collection: Async collection holding attribute documents
        """
        self.collection = collection

    async def list_all(self) -> list[Attribute]:
        """Retrieve every attribute.

        Returns:
            List of attributes (empty if none exist), in the order the store yields them
        """
        documents = await self.collection.find({}).to_list(length=None)
        return [Attribute.from_document(document) for document in documents]

    async def get_by_id(self, attribute_id: str) -> Attribute | None:
        """Retrieve attribute by id.

        Args:
            attribute_id: Store-assigned identifier (ObjectId hex string)

        Returns:
            Attribute if found, None otherwise
        """
        object_id = to_object_id(attribute_id)
        if object_id is None:
            return None

        document = await self.collection.find_one({"_id": object_id})
        return Attribute.from_document(document) if document else None

    async def add(self, attribute: AttributeCreate) -> Attribute:
        """Persist new attribute.

        Args:
            attribute: Validated creation input

        Returns:
            Persisted attribute with its store-assigned id
        """
        document = attribute.to_document()
        result = await self.collection.insert_one(document)
        document["_id"] = result.inserted_id
        return Attribute.from_document(document)

    async def update(self, update: AttributeUpdate) -> Attribute | None:
        """Apply a partial update to an existing attribute.

        Supplied values are written with ``$set``; supplied ``None`` values
        (clearing placeholder/options) are removed with ``$unset``. Never
        inserts: a missing document yields None.

        Args:
            update: Validated update input

        Returns:
            Attribute as stored after the update, None if the id does not exist
        """
        object_id = to_object_id(update.id)
        if object_id is None:
            return None

        changes = update.changes()
        if not changes:
            # Nothing to write; report current state
            document = await self.collection.find_one({"_id": object_id})
            return Attribute.from_document(document) if document else None

        operation: dict[str, dict[str, Any]] = {}
        set_fields = {field: value for field, value in changes.items() if value is not None}
        unset_fields = {field: "" for field, value in changes.items() if value is None}
        if set_fields:
            operation["$set"] = set_fields
        if unset_fields:
            operation["$unset"] = unset_fields

        document = await self.collection.find_one_and_update(
            {"_id": object_id},
            operation,
            return_document=ReturnDocument.AFTER,
            upsert=False,
        )
        return Attribute.from_document(document) if document else None

    async def delete(self, attribute_id: str) -> Attribute | None:
        """Delete attribute permanently.

        Args:
            attribute_id: Store-assigned identifier

        Returns:
            Attribute as it was immediately before deletion, None if it did not exist
        """
        object_id = to_object_id(attribute_id)
        if object_id is None:
            return None

        document = await self.collection.find_one_and_delete({"_id": object_id})
        return Attribute.from_document(document) if document else None
