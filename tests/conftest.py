"""
Pytest fixtures for formbuilder tests.

This module provides:
1. Test environment settings (fresh Settings per test)
2. Sample template fixtures covering every field type
"""

import pytest

from formbuilder.config import get_settings
from formbuilder.models.contracts.templates import FormTemplate


@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch):
    """Run every test with testing settings and a cleared settings cache."""
    monkeypatch.setenv("FORMBUILDER_ENVIRONMENT", "testing")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def sample_template_data() -> dict:
    """Serialized template with one field of each interesting kind"""
    return {
        "title": "Contact Form",
        "version": 1,
        "fields": [
            {
                "fieldId": "firstname",
                "label": "First Name",
                "type": "text",
                "placeholder": "Jane",
                "required": True,
                "validators": [
                    {"name": "minLength", "value": 2, "message": "Name is too short"},
                    {"name": "maxLength", "value": 20},
                ],
            },
            {
                "fieldId": "email",
                "label": "Email",
                "type": "email",
                "validators": [{"name": "email"}],
            },
            {
                "fieldId": "age",
                "label": "Age",
                "type": "number",
                "validators": [
                    {"name": "min", "value": 18},
                    {"name": "max", "value": 99},
                ],
                "layout": "2-column",
            },
            {
                "fieldId": "color",
                "label": "Color",
                "type": "select",
                "options": [
                    {"label": "Red", "value": "red"},
                    {"label": "Blue", "value": "blue"},
                ],
            },
            {
                "fieldId": "subscribe",
                "label": "Subscribe",
                "type": "checkbox",
            },
            {
                "fieldId": "items",
                "label": "Items",
                "type": "grid",
                "columns": [
                    {"columnId": "name", "header": "Name", "type": "text", "required": True},
                    {"columnId": "qty", "header": "Qty", "type": "number"},
                ],
                "minRows": 0,
                "maxRows": 3,
                "defaultValue": [],
                "layout": "full-width",
            },
        ],
    }


@pytest.fixture
def sample_template(sample_template_data) -> FormTemplate:
    return FormTemplate.model_validate(sample_template_data)


@pytest.fixture
def grid_field(sample_template):
    return sample_template.get_field("items")
