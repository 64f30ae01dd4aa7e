"""
Unit tests for error-message resolution.
"""

import pytest

from formbuilder.models.contracts.templates import FieldConfig, GridColumn
from formbuilder.services.error_messages import (
    default_message,
    resolve_cell_error_message,
    resolve_error_message,
)
from formbuilder.services.form_state import FormControl, build_control, build_form_state
from formbuilder.services.grid import add_row
from formbuilder.services.validators import compile_validator


def _touched(field: FieldConfig, value) -> FormControl:
    control = build_control(field)
    control.set_value(value)
    control.mark_as_touched()
    return control


class TestDefaultMessage:
    """Test default_message priority"""

    @pytest.mark.parametrize("errors,expected", [
        ({"required": {}}, "Age is required"),
        ({"minLength": {"required_length": 3, "actual_length": 1}}, "Age min length 3"),
        ({"maxLength": {"required_length": 5, "actual_length": 9}}, "Age max length 5"),
        ({"min": {"min": 18, "actual": 3}}, "Age min 18"),
        ({"max": {"max": 99.0, "actual": 120}}, "Age max 99"),
        ({"max": {"max": 2.5, "actual": 3}}, "Age max 2.5"),
        ({"pattern": {"required_pattern": "x", "actual_value": "y"}}, "Age invalid format"),
        ({"email": {}}, "Invalid email"),
        ({"minRows": {"min_rows": 2, "actual_rows": 0}}, "Invalid Age"),
        ({}, "Invalid Age"),
    ])
    def test_single_failures(self, errors, expected):
        assert default_message("Age", errors) == expected

    def test_required_outranks_everything(self):
        errors = {"pattern": {}, "email": {}, "required": {}}
        assert default_message("Name", errors) == "Name is required"

    def test_min_length_outranks_pattern(self):
        errors = {"pattern": {}, "minLength": {"required_length": 4}}
        assert default_message("Code", errors) == "Code min length 4"


class TestResolveErrorMessage:
    """Test resolve_error_message"""

    def test_untouched_control_shows_nothing(self, sample_template):
        state = build_form_state(sample_template)
        field = sample_template.get_field("firstname")
        assert state["firstname"].invalid
        assert resolve_error_message(field, state["firstname"]) is None

    def test_valid_control_shows_nothing(self, sample_template):
        field = sample_template.get_field("firstname")
        assert resolve_error_message(field, _touched(field, "Jane")) is None

    def test_missing_control(self, sample_template):
        assert resolve_error_message(sample_template.get_field("age"), None) is None

    def test_required_default_message(self, sample_template):
        field = sample_template.get_field("firstname")
        assert resolve_error_message(field, _touched(field, "")) == "First Name is required"

    def test_custom_message_for_declared_validator(self, sample_template):
        field = sample_template.get_field("firstname")
        assert resolve_error_message(field, _touched(field, "J")) == "Name is too short"

    def test_default_message_when_no_custom_message(self, sample_template):
        field = sample_template.get_field("firstname")
        control = _touched(field, "J" * 25)
        assert resolve_error_message(field, control) == "First Name max length 20"

    def test_custom_required_message_wins(self):
        field = FieldConfig.model_validate({
            "fieldId": "name",
            "label": "Name",
            "type": "text",
            "validators": [
                {"name": "required", "message": "Tell us your name"},
                {"name": "minLength", "value": 5, "message": "Too short"},
            ],
        })
        assert resolve_error_message(field, _touched(field, "")) == "Tell us your name"
        assert resolve_error_message(field, _touched(field, "ab")) == "Too short"

    def test_first_declared_failing_validator_wins(self):
        field = FieldConfig.model_validate({
            "fieldId": "code",
            "label": "Code",
            "type": "text",
            "validators": [
                {"name": "pattern", "value": "[0-9]+", "message": "Digits only"},
                {"name": "minLength", "value": 4, "message": "Four digits"},
            ],
        })
        assert resolve_error_message(field, _touched(field, "ab")) == "Digits only"

    def test_email_message(self, sample_template):
        field = sample_template.get_field("email")
        assert resolve_error_message(field, _touched(field, "not-an-email")) == "Invalid email"

    def test_numeric_bound_message(self, sample_template):
        field = sample_template.get_field("age")
        assert resolve_error_message(field, _touched(field, 12)) == "Age min 18"

    def test_grid_with_invalid_cells_falls_back_to_generic(self, sample_template, grid_field):
        state = build_form_state(sample_template)
        add_row(state, grid_field)
        grid = state["items"]
        grid.mark_all_as_touched()
        assert resolve_error_message(grid_field, grid) == "Invalid Items"


class TestResolveCellErrorMessage:
    def test_uses_column_header(self):
        column = GridColumn(column_id="name", header="Name", required=True)
        control = FormControl("", [compile_validator("required")])
        control.mark_as_touched()
        assert resolve_cell_error_message(column, control) == "Name is required"

    def test_untouched_cell(self):
        column = GridColumn(column_id="name", header="Name", required=True)
        control = FormControl("", [compile_validator("required")])
        assert resolve_cell_error_message(column, control) is None
