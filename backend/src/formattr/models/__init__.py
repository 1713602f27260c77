"""Pydantic models for the attribute service."""

from formattr.models.attribute import Attribute, AttributeCreate, AttributeUpdate

__all__ = [
    "Attribute",
    "AttributeCreate",
    "AttributeUpdate",
]
