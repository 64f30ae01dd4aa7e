"""
Core Exceptions

Typed failures raised by the form builder core. Callers catch them at the
boundary where the action originated (an import, a row button, an editor
action) and refuse the action; the core never leaves partial state behind.
"""


class FormBuilderError(Exception):
    """Base class for all form builder failures."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class TemplateParseError(FormBuilderError):
    """
    Raised when a serialized template cannot be imported.

    Covers malformed JSON, a missing or non-list `fields` array, and
    documents that fail template model validation. The previously loaded
    template is left untouched.
    """

    def __init__(self, message: str = "Invalid template JSON", errors: list[dict] | None = None):
        self.errors = errors or []
        super().__init__(message)


class TemplateLoadError(FormBuilderError):
    """Raised when acquiring a template document fails or yields unusable content."""

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"Failed to load template from {source}: {reason}")


class IndexOutOfRangeError(FormBuilderError):
    """Raised when a row or field index does not address an existing entry."""

    def __init__(self, index: int, size: int, what: str = "row"):
        self.index = index
        self.size = size
        super().__init__(f"{what} index {index} out of range (size {size})")


class CapacityExceededError(FormBuilderError):
    """
    Raised when a grid row operation would violate a row-count bound.

    `bound` is "maxRows" when adding past the cap and "minRows" when removing
    below the floor.
    """

    def __init__(self, field_id: str, bound: str, limit: int):
        self.field_id = field_id
        self.bound = bound
        self.limit = limit
        if bound == "maxRows":
            message = f"Grid '{field_id}' cannot have more than {limit} rows"
        else:
            message = f"Grid '{field_id}' cannot have fewer than {limit} rows"
        super().__init__(message)


class NotAGridFieldError(FormBuilderError):
    """Raised when a grid operation targets a field that has no row collection."""

    def __init__(self, field_id: str):
        self.field_id = field_id
        super().__init__(f"Field '{field_id}' is not a grid field in this form")


class FieldIdConflictError(FormBuilderError):
    """Raised when a new field's identifier is already used in the template."""

    def __init__(self, field_id: str):
        self.field_id = field_id
        super().__init__(f"A field with id '{field_id}' already exists")


class EmptyFieldIdError(FormBuilderError):
    """Raised when a label produces no usable field identifier."""

    def __init__(self, label: str):
        self.label = label
        super().__init__(f"Label {label!r} does not produce a field id")


class TemplateFieldLimitError(FormBuilderError):
    """Raised when adding a field would exceed the configured field limit."""

    def __init__(self, limit: int):
        self.limit = limit
        super().__init__(f"Max {limit} fields per form")
