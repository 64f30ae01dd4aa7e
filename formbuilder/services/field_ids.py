"""
Field identifier derivation.

Turns a human label into the control name used as a field's key, and guards
templates against two fields aliasing the same key.
"""

import logging
import re

from formbuilder.core.exceptions import EmptyFieldIdError, FieldIdConflictError
from formbuilder.models.contracts.templates import FormTemplate

logger = logging.getLogger(__name__)

_NON_ALNUM_RUN = re.compile(r"[^a-z0-9]+")
_WHITESPACE = re.compile(r"\s+")


def derive_field_id(label: str) -> str:
    """
    Derive a field id from a label.

    Examples:
        "First Name!" -> "firstname"
        "  E-mail (work) " -> "emailwork"
        "   " -> ""

    Args:
        label: Human-readable field label

    Returns:
        Lowercase alphanumeric id, empty when the label has no [a-z0-9] characters
    """
    field_id = label.strip().lower()
    field_id = _NON_ALNUM_RUN.sub(" ", field_id).strip()
    return _WHITESPACE.sub("", field_id)


def ensure_unique_field_id(
    template: FormTemplate,
    field_id: str,
    *,
    label: str = "",
) -> str:
    """
    Check a candidate field id against the template's existing fields.

    Args:
        template: Template the field will be added to
        field_id: Candidate id
        label: Label the id was derived from (for error reporting)

    Returns:
        The field id, unchanged

    Raises:
        EmptyFieldIdError: If the id is empty
        FieldIdConflictError: If another field already uses the id
    """
    if not field_id:
        raise EmptyFieldIdError(label)

    for index, field in enumerate(template.fields):
        if field.field_id == field_id:
            logger.warning(f"Field id '{field_id}' already used at index {index}")
            raise FieldIdConflictError(field_id)

    return field_id
