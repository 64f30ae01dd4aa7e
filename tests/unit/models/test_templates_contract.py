"""
Contract tests for form template models
Tests Pydantic validation rules for templates, fields, columns and validators
"""

import pytest
from pydantic import ValidationError

from formbuilder.models import (
    FieldConfig,
    FieldLayout,
    FieldType,
    FormTemplate,
    GridColumn,
    GridColumnType,
    ValidatorDescriptor,
)


# Note: attributes are snake_case (field_id, default_value, min_rows);
# serialized templates use camelCase (fieldId, defaultValue, minRows)


def _grid(**overrides) -> dict:
    data = {
        "fieldId": "lines",
        "label": "Lines",
        "type": "grid",
        "columns": [{"columnId": "desc", "header": "Description"}],
    }
    data.update(overrides)
    return data


class TestFieldConfig:
    """Test validation for FieldConfig model"""

    def test_accepts_camel_case_keys(self):
        field = FieldConfig.model_validate({
            "fieldId": "firstname",
            "label": "First Name",
            "type": "text",
            "defaultValue": "Jane",
        })
        assert field.field_id == "firstname"
        assert field.default_value == "Jane"
        assert field.layout == FieldLayout.ONE_COLUMN

    def test_accepts_snake_case_names(self):
        field = FieldConfig(field_id="age", label="Age", type=FieldType.NUMBER)
        assert field.field_id == "age"
        assert field.required is False

    @pytest.mark.parametrize("missing_field", ["fieldId", "label", "type"])
    def test_missing_required_field(self, missing_field):
        """Test that each required key is enforced"""
        data = {"fieldId": "a", "label": "A", "type": "text"}
        del data[missing_field]
        with pytest.raises(ValidationError):
            FieldConfig.model_validate(data)

    def test_invalid_field_type(self):
        with pytest.raises(ValidationError) as exc_info:
            FieldConfig.model_validate({"fieldId": "a", "label": "A", "type": "slider"})

        errors = exc_info.value.errors()
        assert any(e["loc"] == ("type",) for e in errors)

    def test_grid_requires_columns(self):
        with pytest.raises(ValidationError) as exc_info:
            FieldConfig.model_validate(_grid(columns=None))

        assert "columns are required" in str(exc_info.value)

    def test_grid_rejects_empty_columns(self):
        with pytest.raises(ValidationError):
            FieldConfig.model_validate(_grid(columns=[]))

    def test_columns_not_allowed_on_non_grid(self):
        with pytest.raises(ValidationError) as exc_info:
            FieldConfig.model_validate({
                "fieldId": "a",
                "label": "A",
                "type": "text",
                "columns": [{"columnId": "x", "header": "X"}],
            })

        assert "columns are not allowed" in str(exc_info.value)

    def test_duplicate_column_ids_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            FieldConfig.model_validate(_grid(columns=[
                {"columnId": "x", "header": "X"},
                {"columnId": "x", "header": "Y"},
            ]))

        assert "Column ids must be unique" in str(exc_info.value)

    def test_min_rows_above_max_rows_rejected(self):
        with pytest.raises(ValidationError):
            FieldConfig.model_validate(_grid(minRows=5, maxRows=2))

    def test_negative_row_bounds_rejected(self):
        with pytest.raises(ValidationError):
            FieldConfig.model_validate(_grid(minRows=-1))

    def test_list_default_rejected_for_non_grid(self):
        with pytest.raises(ValidationError) as exc_info:
            FieldConfig.model_validate({"fieldId": "a", "label": "A", "type": "text", "defaultValue": []})

        assert "defaultValue cannot be a list" in str(exc_info.value)

    def test_options_only_for_select_and_radio(self):
        with pytest.raises(ValidationError):
            FieldConfig.model_validate({
                "fieldId": "a",
                "label": "A",
                "type": "text",
                "options": [{"label": "X", "value": "x"}],
            })

    def test_option_values_must_be_unique(self):
        with pytest.raises(ValidationError) as exc_info:
            FieldConfig.model_validate({
                "fieldId": "a",
                "label": "A",
                "type": "radio",
                "options": [{"label": "X", "value": "x"}, {"label": "Also X", "value": "x"}],
            })

        assert "Option values must be unique" in str(exc_info.value)

    def test_boolean_and_numeric_option_values_are_distinct(self):
        field = FieldConfig.model_validate({
            "fieldId": "a",
            "label": "A",
            "type": "radio",
            "options": [{"label": "Yes", "value": True}, {"label": "One", "value": 1}],
        })
        assert field.options[0].value is True
        assert field.options[1].value == 1


class TestGridColumn:
    """Test validation for GridColumn model"""

    def test_defaults(self):
        column = GridColumn.model_validate({"columnId": "x", "header": "X"})
        assert column.type == GridColumnType.TEXT
        assert column.required is False

    def test_header_falls_back_to_label(self):
        column = GridColumn.model_validate({"columnId": "x", "label": "Legacy Header"})
        assert column.header == "Legacy Header"

    def test_header_preferred_over_label(self):
        column = GridColumn.model_validate({"columnId": "x", "header": "Header", "label": "Label"})
        assert column.header == "Header"

    def test_missing_header_and_label(self):
        with pytest.raises(ValidationError):
            GridColumn.model_validate({"columnId": "x"})


class TestValidatorDescriptor:
    """Test validation for ValidatorDescriptor model"""

    @pytest.mark.parametrize("name", ["minLength", "maxLength", "min", "max", "pattern"])
    def test_parameterized_validators_require_value(self, name):
        with pytest.raises(ValidationError) as exc_info:
            ValidatorDescriptor(name=name)

        assert "value is required" in str(exc_info.value)

    @pytest.mark.parametrize("name", ["required", "email"])
    def test_plain_validators_need_no_value(self, name):
        descriptor = ValidatorDescriptor(name=name)
        assert descriptor.value is None

    def test_zero_is_a_valid_bound(self):
        descriptor = ValidatorDescriptor(name="min", value=0)
        assert descriptor.value == 0

    def test_unknown_names_are_kept(self):
        descriptor = ValidatorDescriptor(name="phone")
        assert descriptor.name == "phone"


class TestFormTemplate:
    """Test validation for FormTemplate model"""

    def test_version_defaults_to_one(self):
        template = FormTemplate(title="T", fields=[])
        assert template.version == 1

    def test_duplicate_field_ids_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            FormTemplate.model_validate({
                "title": "T",
                "fields": [
                    {"fieldId": "a", "label": "A", "type": "text"},
                    {"fieldId": "a", "label": "A again", "type": "number"},
                ],
            })

        assert "Field ids must be unique" in str(exc_info.value)

    def test_field_order_preserved(self, sample_template):
        assert sample_template.field_ids == ["firstname", "email", "age", "color", "subscribe", "items"]

    def test_get_field(self, sample_template):
        assert sample_template.get_field("age").type == FieldType.NUMBER
        assert sample_template.get_field("missing") is None

    def test_dump_uses_camel_case(self, sample_template):
        data = sample_template.model_dump(mode="json", by_alias=True, exclude_none=True)
        grid = data["fields"][-1]
        assert grid["fieldId"] == "items"
        assert grid["maxRows"] == 3
        assert grid["columns"][0]["columnId"] == "name"
        assert data["fields"][2]["layout"] == "2-column"
