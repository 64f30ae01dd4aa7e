"""
Form session.

Owns one template and the form state built from it, the way a renderer or
preview view does: replacing the template rebuilds the state from scratch,
user actions are applied to the current state, and submission is blocked
while any control is invalid.
"""

import logging
from dataclasses import dataclass, field
from typing import Any

from formbuilder.core.exceptions import IndexOutOfRangeError
from formbuilder.models.contracts.templates import FieldConfig, FormTemplate
from formbuilder.models.contracts.views import FieldView
from formbuilder.models.enums import GridSeedMode
from formbuilder.services import grid
from formbuilder.services.form_state import FormControl, FormState, GridArray, GridRow, build_form_state
from formbuilder.services.render_view import build_render_view

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValidationFailure:
    """Failing checks of one control; row_index/column_id are set for grid cells"""
    field_id: str
    errors: dict[str, dict[str, Any]]
    row_index: int | None = None
    column_id: str | None = None


@dataclass
class SubmitResult:
    """Outcome of a submission attempt"""
    accepted: bool
    value: dict[str, Any] | None = None
    failures: list[ValidationFailure] = field(default_factory=list)


def collect_failures(state: FormState) -> list[ValidationFailure]:
    """List every failing control in template order, grid cells included."""
    failures = []
    for field_id, control in state.controls.items():
        errors = control.errors
        if errors:
            failures.append(ValidationFailure(field_id, errors))
        if isinstance(control, GridArray):
            for row_index, row in enumerate(control.rows):
                for column_id, cell in row.cells.items():
                    if cell.errors:
                        failures.append(ValidationFailure(field_id, cell.errors, row_index, column_id))
    return failures


def submit(state: FormState) -> SubmitResult:
    """
    Attempt to submit a form.

    When anything is invalid every control is marked touched, so each failing
    field shows its message, and the submission is refused.
    """
    if state.invalid:
        state.mark_all_as_touched()
        failures = collect_failures(state)
        logger.info(f"Submission blocked by {len(failures)} validation failure(s)")
        return SubmitResult(accepted=False, failures=failures)
    return SubmitResult(accepted=True, value=state.value)


class FormSession:
    """A template and its live form state, owned by a single view"""

    def __init__(self, template: FormTemplate, grid_seed: GridSeedMode | None = None):
        self.grid_seed = grid_seed
        self.template = template
        self.state = build_form_state(template, grid_seed=grid_seed)

    def replace_template(self, template: FormTemplate) -> FormState:
        """Swap in a new template; user input in the old state is discarded."""
        self.template = template
        self.state = build_form_state(template, grid_seed=self.grid_seed)
        return self.state

    def _field(self, field_id: str) -> FieldConfig:
        field_config = self.template.get_field(field_id)
        if field_config is None:
            raise KeyError(f"Unknown field: {field_id}")
        return field_config

    def control(self, field_id: str) -> FormControl | GridArray:
        return self.state[field_id]

    def set_value(self, field_id: str, value: Any) -> FormControl:
        control = self.state[field_id]
        if isinstance(control, GridArray):
            raise TypeError(f"Field '{field_id}' is a grid; set cell values instead")
        control.set_value(value)
        return control

    def set_cell_value(self, field_id: str, row_index: int, column_id: str, value: Any) -> FormControl:
        rows = self.state.grid(field_id).rows
        if row_index < 0 or row_index >= len(rows):
            raise IndexOutOfRangeError(row_index, len(rows))
        cell = rows[row_index][column_id]
        cell.set_value(value)
        return cell

    def touch(self, field_id: str) -> None:
        self.state[field_id].mark_as_touched()

    def add_row(self, field_id: str, values: dict[str, Any] | None = None) -> grid.RowHandle:
        return grid.add_row(self.state, self._field(field_id), values)

    def remove_row(self, field_id: str, index: int) -> GridRow:
        return grid.remove_row(self.state, self._field(field_id), index)

    def rows(self, field_id: str) -> list[grid.RowHandle]:
        return grid.mirror_for_display(self.state, self._field(field_id))

    def view(self) -> list[FieldView]:
        return build_render_view(self.template, self.state)

    def submit(self) -> SubmitResult:
        return submit(self.state)
