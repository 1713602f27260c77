"""Attribute entity - form-field descriptor with type tag, placeholder and options."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Fields an update may overwrite; ``id`` is immutable.
MUTABLE_FIELDS = ("name", "type", "placeholder", "options")


def _require_text(v: Optional[str]) -> str:
    if v is None:
        raise ValueError("Field cannot be null")
    if not v.strip():
        raise ValueError("Field cannot be empty")
    return v


class Attribute(BaseModel):
    """Attribute as persisted in the store, with its store-assigned id."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    type: str
    placeholder: Optional[str] = None
    options: Optional[list[str]] = None

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> "Attribute":
        """Build an Attribute from a raw store document.

        The store keeps the identifier under ``_id`` as an ObjectId; it is
        exposed as its hex string.
        """
        return cls(
            id=str(document["_id"]),
            name=document["name"],
            type=document["type"],
            placeholder=document.get("placeholder"),
            options=document.get("options"),
        )


class AttributeCreate(BaseModel):
    """Input for creating an attribute. ``name`` and ``type`` are required."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., description="Label shown next to the form field")
    type: str = Field(..., description="Input kind tag, interpreted by the UI")
    placeholder: Optional[str] = Field(default=None, description="Hint text")
    options: Optional[list[str]] = Field(default=None, description="Allowed values")

    @field_validator("name", "type")
    @classmethod
    def validate_required_text(cls, v: str) -> str:
        """Reject empty or whitespace-only labels and type tags."""
        return _require_text(v)

    def to_document(self) -> dict[str, Any]:
        """Return the document to insert. Unset optional fields are not stored."""
        return self.model_dump(exclude_none=True)


class AttributeUpdate(BaseModel):
    """Partial update input.

    Only fields explicitly supplied are applied; omitted fields are left
    untouched. An explicit ``None`` clears ``placeholder`` or ``options`` but is
    rejected for ``name`` and ``type``, which every persisted attribute must
    keep.
    """

    model_config = ConfigDict(extra="forbid")

    id: str
    name: Optional[str] = None
    type: Optional[str] = None
    placeholder: Optional[str] = None
    options: Optional[list[str]] = None

    @field_validator("name", "type")
    @classmethod
    def validate_required_text(cls, v: Optional[str]) -> str:
        """Only runs for supplied values, so omission stays allowed."""
        return _require_text(v)

    def changes(self) -> dict[str, Any]:
        """Return supplied fields (other than ``id``) mapped to their new values."""
        return {
            field: getattr(self, field) for field in MUTABLE_FIELDS if field in self.model_fields_set
        }
