"""Attribute operations.

The API exposes a closed set of five operations. Each is modelled as a frozen
dataclass carrying already-validated input, so the dispatcher never sees raw
payloads:

- ListAttributes: ``attributes``
- GetAttribute: ``attribute(id)``
- AddAttribute: ``addAttribute(input)``
- UpdateAttribute: ``updateAttribute(input)``
- DeleteAttribute: ``deleteAttribute(id)``

``parse_operation`` builds a variant from a wire operation name and raw
arguments (used by the CLI); GraphQL resolvers construct variants directly.
"""

from dataclasses import dataclass
from typing import Any, Callable, Union

from pydantic import ValidationError as PydanticValidationError

from formattr.models.attribute import AttributeCreate, AttributeUpdate
from formattr.services.exceptions import ValidationError


@dataclass(frozen=True)
class ListAttributes:
    """Fetch every attribute."""


@dataclass(frozen=True)
class GetAttribute:
    """Fetch one attribute by id (absence is a valid result)."""

    id: str


@dataclass(frozen=True)
class AddAttribute:
    """Create an attribute."""

    input: AttributeCreate

    @classmethod
    def from_payload(cls, payload: Any) -> "AddAttribute":
        return cls(input=_validate(AttributeCreate, payload))


@dataclass(frozen=True)
class UpdateAttribute:
    """Partially update an existing attribute."""

    input: AttributeUpdate

    @classmethod
    def from_payload(cls, payload: Any) -> "UpdateAttribute":
        return cls(input=_validate(AttributeUpdate, payload))


@dataclass(frozen=True)
class DeleteAttribute:
    """Delete an existing attribute."""

    id: str


Operation = Union[ListAttributes, GetAttribute, AddAttribute, UpdateAttribute, DeleteAttribute]


def validation_error_from(exc: PydanticValidationError) -> ValidationError:
    """Convert a pydantic validation failure into a service ValidationError."""
    errors = {}
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"]) or "input"
        errors[field] = error["msg"]

    summary = "; ".join(f"{field}: {message}" for field, message in errors.items())
    return ValidationError(f"Invalid input: {summary}", errors)


def _validate(model, payload: Any):
    if not isinstance(payload, dict):
        raise ValidationError("Invalid input: expected an object", {"input": "Expected an object"})
    try:
        return model.model_validate(payload)
    except PydanticValidationError as e:
        raise validation_error_from(e) from e


def _require_id(arguments: dict[str, Any]) -> str:
    attribute_id = arguments.get("id")
    if not isinstance(attribute_id, str):
        raise ValidationError("Invalid input: id is required", {"id": "Field required"})
    return attribute_id


_PARSERS: dict[str, Callable[[dict[str, Any]], Operation]] = {
    "attributes": lambda arguments: ListAttributes(),
    "attribute": lambda arguments: GetAttribute(id=_require_id(arguments)),
    "addAttribute": lambda arguments: AddAttribute.from_payload(arguments.get("input")),
    "updateAttribute": lambda arguments: UpdateAttribute.from_payload(arguments.get("input")),
    "deleteAttribute": lambda arguments: DeleteAttribute(id=_require_id(arguments)),
}

OPERATION_NAMES = tuple(_PARSERS)


def parse_operation(name: str, arguments: dict[str, Any] | None = None) -> Operation:
    """Build an operation variant from its wire name and raw arguments.

    Args:
        name: Operation name (e.g. "addAttribute")
        arguments: Raw arguments, e.g. {"input": {...}} or {"id": "..."}

    Returns:
        Operation variant carrying validated input

    Raises:
        ValidationError: Unknown operation name or invalid arguments
    """
    parser = _PARSERS.get(name)
    if parser is None:
        raise ValidationError(
            f"Unknown operation: {name}",
            {"operation": f"Expected one of: {', '.join(OPERATION_NAMES)}"},
        )
    return parser(arguments or {})
