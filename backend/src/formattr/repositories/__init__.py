"""Repository layer for the attribute service.

Provides data access abstractions over the document store.
"""

from formattr.repositories.attribute import AttributeRepository

__all__ = [
    "AttributeRepository",
]
