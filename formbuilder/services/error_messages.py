"""
Error-message resolver.

Produces the single message shown under a field. Nothing is shown until the
user has touched an invalid control.
"""

from typing import Any, Protocol

from formbuilder.models.contracts.templates import FieldConfig, GridColumn
from formbuilder.models.enums import ValidatorName


class ControlLike(Protocol):
    touched: bool

    @property
    def valid(self) -> bool: ...

    @property
    def errors(self) -> dict[str, dict[str, Any]]: ...


def _format_param(value: Any) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def default_message(label: str, errors: dict[str, dict[str, Any]]) -> str:
    """
    Default message for a set of failing checks, by fixed priority.

    Args:
        label: Field label to interpolate
        errors: Failing validator names mapped to failure parameters

    Returns:
        Message for the highest-priority failure, or "Invalid <label>"
    """
    if ValidatorName.REQUIRED.value in errors:
        return f"{label} is required"
    if ValidatorName.MIN_LENGTH.value in errors:
        length = errors[ValidatorName.MIN_LENGTH.value].get("required_length")
        return f"{label} min length {_format_param(length)}"
    if ValidatorName.MAX_LENGTH.value in errors:
        length = errors[ValidatorName.MAX_LENGTH.value].get("required_length")
        return f"{label} max length {_format_param(length)}"
    if ValidatorName.MIN.value in errors:
        return f"{label} min {_format_param(errors[ValidatorName.MIN.value].get('min'))}"
    if ValidatorName.MAX.value in errors:
        return f"{label} max {_format_param(errors[ValidatorName.MAX.value].get('max'))}"
    if ValidatorName.PATTERN.value in errors:
        return f"{label} invalid format"
    if ValidatorName.EMAIL.value in errors:
        return "Invalid email"
    return f"Invalid {label}"


def resolve_error_message(field: FieldConfig, control: ControlLike | None) -> str | None:
    """
    Resolve the message to display for a field.

    Custom messages on the field's declared validators win, in declaration
    order, over the default messages.

    Args:
        field: Field configuration
        control: The field's runtime control (FormControl or GridArray)

    Returns:
        Message string, or None if the control is untouched or valid
    """
    if control is None or not control.touched or control.valid:
        return None

    errors = control.errors
    for descriptor in field.validators or []:
        if descriptor.name in errors and descriptor.message:
            return descriptor.message

    return default_message(field.label, errors)


def resolve_cell_error_message(column: GridColumn, control: ControlLike | None) -> str | None:
    """Resolve the message for a grid cell, labelled by its column header."""
    if control is None or not control.touched or control.valid:
        return None
    return default_message(column.header, control.errors)
