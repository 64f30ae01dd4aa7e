"""
Unit tests for settings loading.
"""

import pytest
from pydantic import ValidationError

from formbuilder.config import Settings, get_settings
from formbuilder.models.enums import GridSeedMode


class TestSettings:
    def test_defaults(self):
        settings = get_settings()
        assert settings.is_testing
        assert settings.max_template_fields == 50
        assert settings.grid_seed_mode == GridSeedMode.EMPTY
        assert settings.fetch_timeout_seconds == 30.0

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("FORMBUILDER_DEFAULT_TEMPLATE_TITLE", "New Intake")
        monkeypatch.setenv("FORMBUILDER_EXPORT_INDENT", "4")
        get_settings.cache_clear()

        settings = get_settings()
        assert settings.default_template_title == "New Intake"
        assert settings.export_indent == 4

    def test_cached(self):
        assert get_settings() is get_settings()

    def test_rejects_invalid_field_limit(self):
        with pytest.raises(ValidationError):
            Settings(max_template_fields=0)
