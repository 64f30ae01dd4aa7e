"""
Unit tests for field id derivation.
"""

import pytest

from formbuilder.core.exceptions import EmptyFieldIdError, FieldIdConflictError
from formbuilder.services.field_ids import derive_field_id, ensure_unique_field_id


class TestDeriveFieldId:
    """Test derive_field_id"""

    @pytest.mark.parametrize("label,expected", [
        ("First Name!", "firstname"),
        ("First Name", "firstname"),
        ("  E-mail (work) ", "emailwork"),
        ("Address Line 2", "addressline2"),
        ("ALLCAPS", "allcaps"),
        ("already_snake_case", "alreadysnakecase"),
        ("Café au lait", "cafaulait"),
        ("tabs\tand\nnewlines", "tabsandnewlines"),
    ])
    def test_examples(self, label, expected):
        assert derive_field_id(label) == expected

    @pytest.mark.parametrize("label", ["", "   ", "!!!", "\t\n", "¿¡"])
    def test_no_usable_characters_gives_empty_string(self, label):
        assert derive_field_id(label) == ""

    @pytest.mark.parametrize("label", [
        "First Name!",
        "  E-mail (work) ",
        "Q3 Revenue ($)",
        "",
        "x",
    ])
    def test_idempotent(self, label):
        once = derive_field_id(label)
        assert derive_field_id(once) == once

    def test_output_is_lowercase_alphanumeric(self):
        result = derive_field_id("Mixed CASE & symbols #42")
        assert result == "mixedcasesymbols42"
        assert result.isalnum() and result == result.lower()


class TestEnsureUniqueFieldId:
    """Test ensure_unique_field_id"""

    def test_unused_id_is_returned(self, sample_template):
        assert ensure_unique_field_id(sample_template, "phone") == "phone"

    def test_existing_id_conflicts(self, sample_template):
        with pytest.raises(FieldIdConflictError) as exc_info:
            ensure_unique_field_id(sample_template, "email")

        assert exc_info.value.field_id == "email"

    def test_empty_id_rejected(self, sample_template):
        with pytest.raises(EmptyFieldIdError):
            ensure_unique_field_id(sample_template, "", label="!!!")
