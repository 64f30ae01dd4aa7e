"""
Render view builder.

Snapshots a FormState into FieldView models in template order.
"""

from formbuilder.models.contracts.templates import FieldConfig, FormTemplate
from formbuilder.models.contracts.views import CellView, FieldView, RowView
from formbuilder.services.error_messages import resolve_cell_error_message, resolve_error_message
from formbuilder.services.form_state import FormState
from formbuilder.services.grid import column_ids, mirror_for_display


def _grid_rows(state: FormState, field: FieldConfig) -> list[RowView]:
    columns = {column.column_id: column for column in field.columns or []}
    rows = []
    for handle in mirror_for_display(state, field):
        cells = {}
        for column_id, cell in handle.row.cells.items():
            cells[column_id] = CellView(
                value=cell.value,
                touched=cell.touched,
                valid=cell.valid,
                error=resolve_cell_error_message(columns[column_id], cell),
            )
        rows.append(RowView(index=handle.index, row_id=handle.row_id, cells=cells))
    return rows


def build_field_view(state: FormState, field: FieldConfig) -> FieldView:
    control = state[field.field_id]
    view = FieldView(
        field_id=field.field_id,
        label=field.label,
        type=field.type,
        layout=field.layout,
        value=control.value,
        touched=control.touched,
        valid=control.valid,
        error=resolve_error_message(field, control),
    )
    if field.is_grid:
        view.column_ids = column_ids(field)
        view.rows = _grid_rows(state, field)
    return view


def build_render_view(template: FormTemplate, state: FormState) -> list[FieldView]:
    """
    Build the renderer's view of every field.

    Args:
        template: Template the state was built from
        state: Current form state

    Returns:
        One FieldView per template field, in template order
    """
    return [build_field_view(state, field) for field in template.fields]
