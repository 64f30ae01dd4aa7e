"""
Form builder models

Template contracts (serialized form templates):
    from formbuilder.models import FormTemplate, FieldConfig
    from formbuilder.models.contracts.templates import FormTemplate  # Granular access

Render views:
    from formbuilder.models import FieldView

Enums:
    from formbuilder.models import FieldType
    from formbuilder.models.enums import FieldType
"""

from formbuilder.models.contracts import *  # noqa: F401, F403

from formbuilder.models.enums import (
    FieldLayout,
    FieldType,
    GridColumnType,
    GridSeedMode,
    ValidatorName,
    Validity,
)

__all__ = [
    "FieldConfig",
    "FieldLayout",
    "FieldType",
    "FieldView",
    "CellView",
    "FormTemplate",
    "GridColumn",
    "GridColumnType",
    "GridSeedMode",
    "LegacyValidation",
    "OptionItem",
    "RowView",
    "ValidatorDescriptor",
    "ValidatorName",
    "Validity",
]
