"""
Enumeration types used across the form builder.

Values match the keys used in serialized form templates.
"""

from enum import Enum


class FieldType(str, Enum):
    """Form field types"""
    TEXT = "text"
    NUMBER = "number"
    EMAIL = "email"
    DATE = "date"
    RADIO = "radio"
    CHECKBOX = "checkbox"
    TOGGLE = "toggle"
    SELECT = "select"
    TEXTAREA = "textarea"
    GRID = "grid"


class ValidatorName(str, Enum):
    """Declarative validator names"""
    REQUIRED = "required"
    MIN_LENGTH = "minLength"
    MAX_LENGTH = "maxLength"
    MIN = "min"
    MAX = "max"
    PATTERN = "pattern"
    EMAIL = "email"


class FieldLayout(str, Enum):
    """Responsive layout slot a field occupies"""
    ONE_COLUMN = "1-column"
    TWO_COLUMN = "2-column"
    THREE_COLUMN = "3-column"
    FULL_WIDTH = "full-width"


class GridColumnType(str, Enum):
    """Cell input types for grid columns"""
    TEXT = "text"
    NUMBER = "number"
    DATE = "date"


class Validity(str, Enum):
    """Runtime validity of a control"""
    VALID = "valid"
    INVALID = "invalid"


class GridSeedMode(str, Enum):
    """
    How grid fields are populated when form state is built.

    - EMPTY: no rows until the user adds one
    - DEFAULT_VALUE: one row per entry in the field's list defaultValue
    """
    EMPTY = "empty"
    DEFAULT_VALUE = "default_value"


# Validators that carry a parameter in ValidatorDescriptor.value
PARAMETERIZED_VALIDATORS = frozenset({
    ValidatorName.MIN_LENGTH,
    ValidatorName.MAX_LENGTH,
    ValidatorName.MIN,
    ValidatorName.MAX,
    ValidatorName.PATTERN,
})

# Field types whose options list is meaningful
OPTION_FIELD_TYPES = frozenset({FieldType.SELECT, FieldType.RADIO})
