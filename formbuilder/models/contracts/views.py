"""
Render view contract models.

Read-only snapshot of form state for a presentation layer: everything a
renderer needs per field without reaching into the runtime controls.
"""

from typing import Any

from pydantic import BaseModel, Field

from formbuilder.models.enums import FieldLayout, FieldType


class CellView(BaseModel):
    """State of one grid cell"""
    value: Any = None
    touched: bool = False
    valid: bool = True
    error: str | None = None


class RowView(BaseModel):
    """State of one grid row"""
    index: int
    row_id: str
    cells: dict[str, CellView] = Field(default_factory=dict)


class FieldView(BaseModel):
    """State of one field as a renderer consumes it"""
    field_id: str
    label: str
    type: FieldType
    layout: FieldLayout
    value: Any = None
    touched: bool = False
    valid: bool = True
    error: str | None = Field(default=None, description="Resolved message, only once touched and invalid")

    # Grid fields only
    column_ids: list[str] | None = None
    rows: list[RowView] | None = None
