"""
Pydantic contract models.
"""

from formbuilder.models.contracts.templates import (
    FieldConfig,
    FormTemplate,
    GridColumn,
    LegacyValidation,
    OptionItem,
    ValidatorDescriptor,
)
from formbuilder.models.contracts.views import CellView, FieldView, RowView

__all__ = [
    "CellView",
    "FieldConfig",
    "FieldView",
    "FormTemplate",
    "GridColumn",
    "LegacyValidation",
    "OptionItem",
    "RowView",
    "ValidatorDescriptor",
]
