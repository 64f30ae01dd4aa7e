"""
Form template contract models.

A FormTemplate is the declarative document the builder console edits and the
renderer compiles. Attributes are snake_case; serialized documents use the
camelCase keys (fieldId, defaultValue, minRows, ...) of the template format.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from formbuilder.models.enums import (
    OPTION_FIELD_TYPES,
    PARAMETERIZED_VALIDATORS,
    FieldLayout,
    FieldType,
    GridColumnType,
)


class TemplateModel(BaseModel):
    """Base for template models: camelCase on the wire, snake_case in Python."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ==================== VALIDATION MODELS ====================


class ValidatorDescriptor(TemplateModel):
    """One declarative validation rule with its optional custom message"""
    name: str = Field(..., min_length=1, description="Validator name (required, minLength, ...)")
    value: int | float | str | None = Field(
        default=None, description="Validator parameter (length, bound or pattern source)")
    message: str | None = Field(default=None, description="Custom error message to display")

    @model_validator(mode='after')
    def validate_parameter(self):
        """Parameterized validators must carry a value"""
        if self.name in {v.value for v in PARAMETERIZED_VALIDATORS}:
            if self.value is None or (isinstance(self.value, str) and not self.value.strip()):
                raise ValueError(f"value is required for {self.name} validators")
        return self


class LegacyValidation(TemplateModel):
    """Flat validation rules accepted alongside the validators list"""
    required: bool | None = None
    email: bool | None = None
    min_length: int | None = None
    max_length: int | None = None
    min: int | float | None = None
    max: int | float | None = None
    pattern: str | None = None


# ==================== FIELD MODELS ====================


class OptionItem(TemplateModel):
    """Option for select dropdowns and radio groups"""
    label: str
    value: str | int | float | bool


class GridColumn(TemplateModel):
    """Column definition for grid fields"""
    column_id: str = Field(..., min_length=1)
    header: str = Field(..., description="Column header text")
    type: GridColumnType = GridColumnType.TEXT
    required: bool = False

    @model_validator(mode='before')
    @classmethod
    def fallback_to_label(cls, data: Any) -> Any:
        """Older templates name the header `label`"""
        if isinstance(data, dict) and not data.get("header") and data.get("label"):
            data = {**data, "header": data["label"]}
        return data


class FieldConfig(TemplateModel):
    """Complete configuration for a single form field"""
    field_id: str = Field(..., min_length=1, description="Form control name, unique per template")
    label: str = Field(..., min_length=1)
    type: FieldType
    placeholder: str | None = None
    required: bool = False
    default_value: Any | None = None

    options: list[OptionItem] | None = Field(
        default=None, description="Options for select/radio fields")
    validators: list[ValidatorDescriptor] | None = None
    validation: LegacyValidation | None = Field(
        default=None, description="Flat validation rules, unioned with validators")

    columns: list[GridColumn] | None = Field(
        default=None, description="Column definitions, grid fields only")
    min_rows: int | None = Field(default=None, ge=0)
    max_rows: int | None = Field(default=None, ge=0)

    layout: FieldLayout = FieldLayout.ONE_COLUMN

    @model_validator(mode='after')
    def validate_field_requirements(self):
        """Validate type-specific requirements"""
        if self.type == FieldType.GRID:
            if not self.columns:
                raise ValueError("columns are required for grid fields")
            column_ids = [column.column_id for column in self.columns]
            if len(column_ids) != len(set(column_ids)):
                raise ValueError("Column ids must be unique")
            if self.min_rows is not None and self.max_rows is not None and self.min_rows > self.max_rows:
                raise ValueError("minRows cannot be greater than maxRows")
        else:
            if self.columns is not None:
                raise ValueError(f"columns are not allowed for {self.type.value} fields")
            if isinstance(self.default_value, list):
                raise ValueError(f"defaultValue cannot be a list for {self.type.value} fields")

        if self.options:
            if self.type not in OPTION_FIELD_TYPES:
                raise ValueError(f"options are not allowed for {self.type.value} fields")
            values = [option.value for option in self.options]
            # 1 and True compare equal, so key on the type as well
            keys = [(type(value), value) for value in values]
            if len(keys) != len(set(keys)):
                raise ValueError("Option values must be unique")

        return self

    @property
    def is_grid(self) -> bool:
        return self.type == FieldType.GRID


class FormTemplate(TemplateModel):
    """Root template: metadata plus the ordered field list"""
    title: str
    version: int = Field(default=1, description="Template version for migration support")
    fields: list[FieldConfig] = Field(default_factory=list)

    @field_validator('fields')
    @classmethod
    def validate_unique_ids(cls, v):
        """Ensure field ids are unique"""
        ids = [field.field_id for field in v]
        if len(ids) != len(set(ids)):
            raise ValueError("Field ids must be unique")
        return v

    def get_field(self, field_id: str) -> FieldConfig | None:
        for field in self.fields:
            if field.field_id == field_id:
                return field
        return None

    @property
    def field_ids(self) -> list[str]:
        return [field.field_id for field in self.fields]
