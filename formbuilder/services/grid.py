"""
Grid (repeating-row) engine.

Adds and removes rows of a grid field in a FormState and produces the row
snapshot a display table renders from. Row-count bounds from the field's
minRows/maxRows are enforced here.
"""

import logging
from dataclasses import dataclass
from typing import Any

from formbuilder.core.exceptions import CapacityExceededError, IndexOutOfRangeError
from formbuilder.models.contracts.templates import FieldConfig
from formbuilder.services.form_state import FormState, GridRow, build_grid_row

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RowHandle:
    """Position and identity of a grid row at the time it was handed out"""
    index: int
    row_id: str
    row: GridRow


def add_row(state: FormState, field: FieldConfig, values: dict[str, Any] | None = None) -> RowHandle:
    """
    Append a row to a grid field.

    Args:
        state: Form state holding the grid
        field: Grid field configuration
        values: Optional initial cell values keyed by columnId

    Returns:
        Handle for the new row

    Raises:
        NotAGridFieldError: If the field has no row collection in the state
        CapacityExceededError: If the grid already holds maxRows rows
    """
    grid = state.grid(field.field_id)

    if field.max_rows is not None and len(grid.rows) >= field.max_rows:
        logger.info(f"Refusing to add row to '{field.field_id}': at maxRows {field.max_rows}")
        raise CapacityExceededError(field.field_id, "maxRows", field.max_rows)

    row = build_grid_row(field.columns or [], values)
    grid.rows.append(row)
    return RowHandle(len(grid.rows) - 1, row.row_id, row)


def remove_row(state: FormState, field: FieldConfig, index: int) -> GridRow:
    """
    Remove the row at index from a grid field.

    Remaining rows keep their relative order.

    Args:
        state: Form state holding the grid
        field: Grid field configuration
        index: Zero-based index of the row; negative indices are not accepted

    Returns:
        The removed row

    Raises:
        NotAGridFieldError: If the field has no row collection in the state
        IndexOutOfRangeError: If index does not address a current row
        CapacityExceededError: If removal would drop below minRows
    """
    grid = state.grid(field.field_id)

    if index < 0 or index >= len(grid.rows):
        raise IndexOutOfRangeError(index, len(grid.rows))

    if field.min_rows is not None and len(grid.rows) - 1 < field.min_rows:
        logger.info(f"Refusing to remove row from '{field.field_id}': at minRows {field.min_rows}")
        raise CapacityExceededError(field.field_id, "minRows", field.min_rows)

    return grid.rows.pop(index)


def mirror_for_display(state: FormState, field: FieldConfig) -> list[RowHandle]:
    """
    Snapshot the current rows of a grid field for a display table.

    Recompute after every add/remove; handles are not updated in place.

    Raises:
        NotAGridFieldError: If the field has no row collection in the state
    """
    grid = state.grid(field.field_id)
    return [RowHandle(index, row.row_id, row) for index, row in enumerate(grid.rows)]


def column_ids(field: FieldConfig) -> list[str]:
    """Column ids of a grid field, in display order."""
    return [column.column_id for column in field.columns or []]
