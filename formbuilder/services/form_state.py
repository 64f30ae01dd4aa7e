"""
Form-state builder.

Compiles a FormTemplate into a runtime control tree:

    FormState
      fieldId -> FormControl          (every non-grid field)
      fieldId -> GridArray            (grid fields)
                   rows -> GridRow
                             columnId -> FormControl

A FormState is never patched in place when the template changes; callers
build a fresh one from the new template.
"""

import logging
from typing import Any, Iterator
from uuid import uuid4

from formbuilder.config import get_settings
from formbuilder.core.exceptions import NotAGridFieldError
from formbuilder.models.contracts.templates import FieldConfig, FormTemplate, GridColumn
from formbuilder.models.enums import FieldType, GridColumnType, GridSeedMode, Validity
from formbuilder.services.validators import (
    CompiledValidator,
    compile_column_validators,
    compile_validators,
    run_validators,
)

logger = logging.getLogger(__name__)

# Value a control starts with when its field has no defaultValue
EMPTY_VALUES: dict[FieldType, Any] = {
    FieldType.TEXT: "",
    FieldType.EMAIL: "",
    FieldType.TEXTAREA: "",
    FieldType.NUMBER: None,
    FieldType.DATE: None,
    FieldType.SELECT: None,
    FieldType.RADIO: None,
    FieldType.CHECKBOX: False,
    FieldType.TOGGLE: False,
}

COLUMN_EMPTY_VALUES: dict[GridColumnType, Any] = {
    GridColumnType.TEXT: "",
    GridColumnType.NUMBER: None,
    GridColumnType.DATE: None,
}

MIN_ROWS = "minRows"


class FormControl:
    """Runtime state of a single scalar input"""

    def __init__(self, value: Any = None, validators: list[CompiledValidator] | None = None):
        self.validators = list(validators or [])
        self.touched = False
        self.errors: dict[str, dict[str, Any]] = {}
        self.value = value
        self.validate()

    def set_value(self, value: Any) -> None:
        self.value = value
        self.validate()

    def validate(self) -> dict[str, dict[str, Any]]:
        self.errors = run_validators(self.validators, self.value)
        return self.errors

    def mark_as_touched(self) -> None:
        self.touched = True

    def mark_all_as_touched(self) -> None:
        self.touched = True

    @property
    def valid(self) -> bool:
        return not self.errors

    @property
    def invalid(self) -> bool:
        return not self.valid

    @property
    def validity(self) -> Validity:
        return Validity.VALID if self.valid else Validity.INVALID

    def __repr__(self) -> str:
        return f"FormControl(value={self.value!r}, validity={self.validity.value}, touched={self.touched})"


class GridRow:
    """One row of a grid: a cell control per column, plus a stable id"""

    def __init__(self, cells: dict[str, FormControl]):
        self.row_id = uuid4().hex
        self.cells = cells

    def __getitem__(self, column_id: str) -> FormControl:
        return self.cells[column_id]

    @property
    def value(self) -> dict[str, Any]:
        return {column_id: cell.value for column_id, cell in self.cells.items()}

    @property
    def valid(self) -> bool:
        return all(cell.valid for cell in self.cells.values())

    @property
    def touched(self) -> bool:
        return any(cell.touched for cell in self.cells.values())

    def mark_all_as_touched(self) -> None:
        for cell in self.cells.values():
            cell.mark_as_touched()


class GridArray:
    """
    Ordered, mutable row collection for a grid field.

    Row-level rules (required, minRows) are evaluated against the current
    row list on demand; cell rules live on the cell controls.
    """

    def __init__(self, field: FieldConfig):
        self.field = field
        self.rows: list[GridRow] = []
        self.touched = False
        self.validators = compile_validators(field)
        if field.min_rows:
            self.validators.append(CompiledValidator(MIN_ROWS, _min_rows_check(field.min_rows), field.min_rows))

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[GridRow]:
        return iter(self.rows)

    @property
    def value(self) -> list[dict[str, Any]]:
        return [row.value for row in self.rows]

    @property
    def errors(self) -> dict[str, dict[str, Any]]:
        return run_validators(self.validators, self.value)

    @property
    def valid(self) -> bool:
        return not self.errors and all(row.valid for row in self.rows)

    @property
    def invalid(self) -> bool:
        return not self.valid

    @property
    def validity(self) -> Validity:
        return Validity.VALID if self.valid else Validity.INVALID

    def mark_as_touched(self) -> None:
        self.touched = True

    def mark_all_as_touched(self) -> None:
        self.touched = True
        for row in self.rows:
            row.mark_all_as_touched()


def _min_rows_check(min_rows: int):
    def check(value: Any) -> dict[str, Any] | None:
        if len(value) < min_rows:
            return {"min_rows": min_rows, "actual_rows": len(value)}
        return None
    return check


class FormState:
    """Runtime control tree for one template, keyed by fieldId in template order"""

    def __init__(self, template: FormTemplate, controls: dict[str, FormControl | GridArray]):
        self.template = template
        self.controls = controls

    def __getitem__(self, field_id: str) -> FormControl | GridArray:
        return self.controls[field_id]

    def __contains__(self, field_id: object) -> bool:
        return field_id in self.controls

    def __iter__(self) -> Iterator[str]:
        return iter(self.controls)

    def __len__(self) -> int:
        return len(self.controls)

    def keys(self) -> list[str]:
        return list(self.controls)

    def get(self, field_id: str) -> FormControl | GridArray | None:
        return self.controls.get(field_id)

    def grid(self, field_id: str) -> GridArray:
        """
        Get the row collection for a grid field.

        Raises:
            NotAGridFieldError: If the field is missing or not a grid
        """
        control = self.controls.get(field_id)
        if not isinstance(control, GridArray):
            raise NotAGridFieldError(field_id)
        return control

    @property
    def value(self) -> dict[str, Any]:
        return {field_id: control.value for field_id, control in self.controls.items()}

    @property
    def valid(self) -> bool:
        return all(control.valid for control in self.controls.values())

    @property
    def invalid(self) -> bool:
        return not self.valid

    def mark_all_as_touched(self) -> None:
        for control in self.controls.values():
            control.mark_all_as_touched()


# ==================== BUILDERS ====================


def build_grid_row(columns: list[GridColumn], values: dict[str, Any] | None = None) -> GridRow:
    """
    Build a grid row with one control per column.

    Args:
        columns: Column definitions of the grid field
        values: Optional initial cell values keyed by columnId; unknown keys are ignored

    Returns:
        New GridRow with typed-empty cells unless a value was supplied
    """
    values = values or {}
    cells = {}
    for column in columns:
        value = values.get(column.column_id, COLUMN_EMPTY_VALUES[column.type])
        cells[column.column_id] = FormControl(value, compile_column_validators(column))
    return GridRow(cells)


def _seed_rows(field: FieldConfig) -> list[GridRow]:
    default = field.default_value
    if not default:
        return []
    if not isinstance(default, list):
        logger.warning(f"Grid '{field.field_id}' defaultValue is not a list, starting empty")
        return []

    entries = default
    if field.max_rows is not None and len(entries) > field.max_rows:
        logger.warning(
            f"Grid '{field.field_id}' defaultValue has {len(entries)} rows, "
            f"keeping the first {field.max_rows}"
        )
        entries = entries[:field.max_rows]

    rows = []
    for entry in entries:
        if not isinstance(entry, dict):
            logger.warning(f"Skipping non-object default row in grid '{field.field_id}'")
            continue
        rows.append(build_grid_row(field.columns or [], entry))
    return rows


def build_control(field: FieldConfig) -> FormControl:
    """Build the leaf control for a non-grid field."""
    value = field.default_value if field.default_value is not None else EMPTY_VALUES[field.type]
    return FormControl(value, compile_validators(field))


def build_grid(field: FieldConfig, seed: GridSeedMode = GridSeedMode.EMPTY) -> GridArray:
    """Build the row collection for a grid field."""
    grid = GridArray(field)
    if seed == GridSeedMode.DEFAULT_VALUE:
        grid.rows.extend(_seed_rows(field))
    return grid


def build_form_state(template: FormTemplate, *, grid_seed: GridSeedMode | None = None) -> FormState:
    """
    Build a fresh runtime form state from a template.

    Args:
        template: Template to compile
        grid_seed: How grid fields start out; defaults to the configured
                   grid_seed_mode setting

    Returns:
        FormState whose keys are the template's fieldIds in template order
    """
    if grid_seed is None:
        grid_seed = get_settings().grid_seed_mode

    controls: dict[str, FormControl | GridArray] = {}
    for field in template.fields:
        if field.type == FieldType.GRID:
            controls[field.field_id] = build_grid(field, grid_seed)
        else:
            controls[field.field_id] = build_control(field)

    logger.debug(f"Built form state for '{template.title}' with {len(controls)} fields")
    return FormState(template, controls)
