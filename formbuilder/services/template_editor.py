"""
Template editor operations.

Ordered CRUD over a template's field list, as driven by the builder console,
plus JSON import/export. Every operation returns a new FormTemplate and leaves
its input untouched, so a live preview can simply rebuild from the result.

Editing is modelled as a draft held beside the template: begin_edit() does not
remove the field, and abandoning the draft changes nothing.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from formbuilder.config import get_settings
from formbuilder.core.exceptions import (
    IndexOutOfRangeError,
    TemplateFieldLimitError,
    TemplateParseError,
)
from formbuilder.models.contracts.templates import (
    FieldConfig,
    FormTemplate,
    GridColumn,
    LegacyValidation,
    OptionItem,
    ValidatorDescriptor,
)
from formbuilder.models.enums import (
    OPTION_FIELD_TYPES,
    PARAMETERIZED_VALIDATORS,
    FieldLayout,
    FieldType,
)
from formbuilder.services.field_ids import derive_field_id, ensure_unique_field_id
from formbuilder.services.form_state import FormState, build_form_state
from formbuilder.services.validators import to_number

logger = logging.getLogger(__name__)

DEFAULT_GRID_MIN_ROWS = 0
DEFAULT_GRID_MAX_ROWS = 10


# ==================== DRAFT MODELS ====================


class ValidatorRow(BaseModel):
    """One validator row as entered in the builder console"""
    name: str = "required"
    value: Any = ""
    message: str = ""


class FieldDraft(BaseModel):
    """Field being composed in the builder console, before it has an id"""
    label: str = ""
    type: FieldType = FieldType.TEXT
    placeholder: str = ""
    required: bool = False
    default_value: Any = ""
    layout: FieldLayout = FieldLayout.ONE_COLUMN
    options_text: str = Field(default="", description="Comma-separated options for select/radio")
    validators: list[ValidatorRow] = Field(default_factory=list)
    validation: LegacyValidation | None = Field(
        default=None, description="Flat validation rules carried over from imported templates")

    # Grid fields only; normally supplied by the column dialog
    columns: list[GridColumn] | None = None
    min_rows: int | None = None
    max_rows: int | None = None


@dataclass(frozen=True)
class PendingGridField:
    """A grid field waiting for its column configuration"""
    field_id: str
    draft: FieldDraft


@dataclass(frozen=True)
class FieldEdit:
    """An edit in progress: the field being edited and its pre-filled draft"""
    index: int
    field_id: str
    draft: FieldDraft


# ==================== PARSING HELPERS ====================


def parse_options(text: str) -> list[OptionItem]:
    """
    Parse comma-separated options text.

    Example:
        "Red, Green, , Blue" -> [Red, Green, Blue] with label == value
    """
    values = [part.strip() for part in text.split(",")]
    return [OptionItem(label=value, value=value) for value in values if value]


def options_text(options: list[OptionItem] | None) -> str:
    """Render options back into the comma-separated builder text."""
    return ", ".join(option.label for option in options or [])


def parse_validator_rows(rows: list[ValidatorRow]) -> list[ValidatorDescriptor]:
    """
    Convert builder validator rows into descriptors.

    Empty values and messages are omitted. Rows for parameterized validators
    that have no value are dropped.
    """
    parameterized = {name.value for name in PARAMETERIZED_VALIDATORS}
    descriptors = []
    for row in rows:
        value = None if row.value == "" else row.value
        if row.name in parameterized and value is None:
            logger.warning(f"Dropping {row.name} validator without a value")
            continue
        descriptors.append(ValidatorDescriptor(name=row.name, value=value, message=row.message or None))
    return descriptors


def _default_value(draft: FieldDraft) -> Any:
    value = draft.default_value
    if value == "" or value is None:
        return None
    if draft.type == FieldType.NUMBER and isinstance(value, str):
        number = to_number(value)
        return number if number is not None else value
    return value


def _build_field(
    field_id: str,
    draft: FieldDraft,
    *,
    columns: list[GridColumn] | None = None,
    min_rows: int | None = None,
    max_rows: int | None = None,
    options: list[OptionItem] | None = None,
) -> FieldConfig:
    data: dict[str, Any] = {
        "field_id": field_id,
        "label": draft.label,
        "type": draft.type,
        "placeholder": draft.placeholder,
        "required": draft.required,
        "layout": draft.layout,
    }

    if draft.type in OPTION_FIELD_TYPES:
        data["options"] = options if options is not None else parse_options(draft.options_text)

    validators = parse_validator_rows(draft.validators)
    if validators:
        data["validators"] = validators

    if draft.validation is not None:
        data["validation"] = draft.validation

    if draft.type == FieldType.GRID:
        data["columns"] = columns
        data["min_rows"] = min_rows
        data["max_rows"] = max_rows
        data["default_value"] = []
    else:
        data["default_value"] = _default_value(draft)

    return FieldConfig(**data)


def draft_from_field(field: FieldConfig) -> FieldDraft:
    """Pre-fill a builder draft from an existing field."""
    return FieldDraft(
        label=field.label,
        type=field.type,
        placeholder=field.placeholder or "",
        required=field.required,
        default_value="" if field.default_value is None or field.is_grid else field.default_value,
        layout=field.layout,
        options_text=options_text(field.options),
        validators=[
            ValidatorRow(
                name=descriptor.name,
                value="" if descriptor.value is None else descriptor.value,
                message=descriptor.message or "",
            )
            for descriptor in field.validators or []
        ],
        validation=field.validation,
        columns=field.columns,
        min_rows=field.min_rows,
        max_rows=field.max_rows,
    )


def _with_fields(template: FormTemplate, fields: list[FieldConfig]) -> FormTemplate:
    return template.model_copy(update={"fields": fields})


def _check_index(template: FormTemplate, index: int) -> None:
    if index < 0 or index >= len(template.fields):
        raise IndexOutOfRangeError(index, len(template.fields), what="field")


def _check_field_limit(template: FormTemplate) -> None:
    limit = get_settings().max_template_fields
    if len(template.fields) >= limit:
        raise TemplateFieldLimitError(limit)


# ==================== OPERATIONS ====================


def create_empty_template(title: str | None = None) -> FormTemplate:
    """Create a new template with no fields."""
    settings = get_settings()
    return FormTemplate(
        title=title or settings.default_template_title,
        version=settings.template_version,
        fields=[],
    )


def add_field(template: FormTemplate, draft: FieldDraft) -> FormTemplate | PendingGridField:
    """
    Append a field built from a draft.

    The field id is derived from the draft's label and must not collide with
    an existing field. A grid draft without columns is not appended; the
    caller gets a PendingGridField to complete once the column dialog closes.

    Args:
        template: Template to add to
        draft: Field draft from the builder console

    Returns:
        New template with the field appended, or PendingGridField

    Raises:
        EmptyFieldIdError: If the label yields no id
        FieldIdConflictError: If the id is already used
        TemplateFieldLimitError: If the template is full
    """
    _check_field_limit(template)
    field_id = ensure_unique_field_id(template, derive_field_id(draft.label), label=draft.label)

    if draft.type == FieldType.GRID and not draft.columns:
        logger.debug(f"Grid field '{field_id}' waiting for column configuration")
        return PendingGridField(field_id=field_id, draft=draft)

    field = _build_field(
        field_id,
        draft,
        columns=draft.columns,
        min_rows=draft.min_rows,
        max_rows=draft.max_rows,
    )
    return _with_fields(template, [*template.fields, field])


def build_grid_field(
    pending: PendingGridField,
    columns: list[GridColumn],
    *,
    min_rows: int | None = DEFAULT_GRID_MIN_ROWS,
    max_rows: int | None = DEFAULT_GRID_MAX_ROWS,
) -> FieldConfig:
    """
    Build the completed grid field a column dialog hands back.

    Rows start empty (defaultValue []).
    """
    return _build_field(pending.field_id, pending.draft, columns=columns, min_rows=min_rows, max_rows=max_rows)


def complete_grid_field(
    template: FormTemplate,
    pending: PendingGridField,
    result: FieldConfig | None,
) -> FormTemplate:
    """
    Append a pending grid field once its column dialog has closed.

    Args:
        template: Template to add to
        pending: The pending field returned by add_field()
        result: Completed grid field, or None if the dialog was cancelled

    Returns:
        New template with the grid appended; the input template if cancelled

    Raises:
        ValueError: If the result is not a grid field for the pending id
        FieldIdConflictError: If the id was taken while the dialog was open
        TemplateFieldLimitError: If the template filled up meanwhile
    """
    if result is None:
        logger.debug(f"Column dialog for '{pending.field_id}' cancelled")
        return template

    if result.type != FieldType.GRID:
        raise ValueError(f"Expected a grid field for '{pending.field_id}', got {result.type.value}")
    if result.field_id != pending.field_id:
        raise ValueError(f"Dialog returned field '{result.field_id}' for pending '{pending.field_id}'")

    _check_field_limit(template)
    ensure_unique_field_id(template, result.field_id, label=result.label)
    return _with_fields(template, [*template.fields, result])


def begin_edit(template: FormTemplate, index: int) -> FieldEdit:
    """
    Start editing the field at index.

    The template is not modified; dropping the returned FieldEdit cancels.

    Raises:
        IndexOutOfRangeError: If index does not address a field
    """
    _check_index(template, index)
    field = template.fields[index]
    return FieldEdit(index=index, field_id=field.field_id, draft=draft_from_field(field))


def commit_edit(template: FormTemplate, edit: FieldEdit, draft: FieldDraft) -> FormTemplate:
    """
    Replace the edited field in place with the draft's configuration.

    The field keeps its fieldId and position. Grid columns and row bounds
    carry over from the original field unless the draft provides them, and
    option values are kept while the options text is left as pre-filled.

    Raises:
        IndexOutOfRangeError: If the edited field is no longer in the template
        pydantic.ValidationError: If the draft does not form a valid field
    """
    index = next(
        (i for i, field in enumerate(template.fields) if field.field_id == edit.field_id),
        None,
    )
    if index is None:
        raise IndexOutOfRangeError(edit.index, len(template.fields), what="field")

    original = template.fields[index]
    field = _build_field(
        original.field_id,
        draft,
        columns=draft.columns or original.columns,
        min_rows=draft.min_rows if draft.min_rows is not None else original.min_rows,
        max_rows=draft.max_rows if draft.max_rows is not None else original.max_rows,
        options=original.options if draft.options_text == options_text(original.options) else None,
    )

    fields = list(template.fields)
    fields[index] = field
    return _with_fields(template, fields)


def delete_field(template: FormTemplate, index: int) -> FormTemplate:
    """
    Remove the field at index.

    Raises:
        IndexOutOfRangeError: If index does not address a field
    """
    _check_index(template, index)
    fields = list(template.fields)
    del fields[index]
    return _with_fields(template, fields)


def move_up(template: FormTemplate, index: int) -> FormTemplate:
    """Swap the field at index with its predecessor; no-op for the first field."""
    if index <= 0 or index >= len(template.fields):
        return template
    fields = list(template.fields)
    fields[index - 1], fields[index] = fields[index], fields[index - 1]
    return _with_fields(template, fields)


def move_down(template: FormTemplate, index: int) -> FormTemplate:
    """Swap the field at index with its successor; no-op for the last field."""
    if index < 0 or index >= len(template.fields) - 1:
        return template
    fields = list(template.fields)
    fields[index + 1], fields[index] = fields[index], fields[index + 1]
    return _with_fields(template, fields)


# ==================== IMPORT / EXPORT ====================


def serialize_template(template: FormTemplate, indent: int | None = None) -> str:
    """
    Serialize a template to pretty JSON.

    Keys use the template wire format (camelCase); unset optional values are
    omitted.
    """
    if indent is None:
        indent = get_settings().export_indent
    data = template.model_dump(mode="json", by_alias=True, exclude_none=True)
    return json.dumps(data, indent=indent)


def parse_template_data(data: Any) -> FormTemplate:
    """
    Validate an already-decoded template document.

    Raises:
        TemplateParseError: If the document has no fields array or fails validation
    """
    if not isinstance(data, dict) or not isinstance(data.get("fields"), list):
        raise TemplateParseError("Template must be an object with a fields array")

    try:
        return FormTemplate.model_validate(data)
    except ValidationError as e:
        logger.warning(f"Template failed validation with {e.error_count()} error(s)")
        raise TemplateParseError(
            f"Invalid template: {e.errors()[0]['msg']}",
            errors=e.errors(include_url=False),
        ) from e


def deserialize_template(raw: str | bytes) -> FormTemplate:
    """
    Parse a template from JSON text.

    Raises:
        TemplateParseError: On malformed JSON or an invalid template document
    """
    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise TemplateParseError(f"Invalid JSON: {e}") from e
    return parse_template_data(data)


# ==================== BUILDER CONSOLE ====================


class TemplateEditor:
    """
    Builder-console state: the template under construction plus any pending
    grid field and edit draft.

    Each mutating call replaces `template` with a new instance; a preview
    rebuilds its form state from `template` after every change.
    """

    def __init__(self, template: FormTemplate | None = None):
        self.template = template or create_empty_template()
        self.pending_grid: PendingGridField | None = None
        self.active_edit: FieldEdit | None = None

    def add_field(self, draft: FieldDraft) -> FieldConfig | PendingGridField:
        """Add a field; returns the new field or the pending grid field."""
        result = add_field(self.template, draft)
        if isinstance(result, PendingGridField):
            self.pending_grid = result
            return result
        self.template = result
        return result.fields[-1]

    def complete_grid_field(self, result: FieldConfig | None) -> FormTemplate:
        """Finish the pending grid field with the dialog result (None = cancelled)."""
        if self.pending_grid is None:
            raise ValueError("No grid field is waiting for columns")
        pending, self.pending_grid = self.pending_grid, None
        self.template = complete_grid_field(self.template, pending, result)
        return self.template

    def begin_edit(self, index: int) -> FieldDraft:
        self.active_edit = begin_edit(self.template, index)
        return self.active_edit.draft

    def commit_edit(self, draft: FieldDraft) -> FormTemplate:
        if self.active_edit is None:
            raise ValueError("No field is being edited")
        self.template = commit_edit(self.template, self.active_edit, draft)
        self.active_edit = None
        return self.template

    def cancel_edit(self) -> None:
        self.active_edit = None

    def delete_field(self, index: int) -> FormTemplate:
        self.template = delete_field(self.template, index)
        return self.template

    def move_up(self, index: int) -> FormTemplate:
        self.template = move_up(self.template, index)
        return self.template

    def move_down(self, index: int) -> FormTemplate:
        self.template = move_down(self.template, index)
        return self.template

    def export_json(self) -> str:
        return serialize_template(self.template)

    def import_json(self, raw: str | bytes) -> FormTemplate:
        """
        Replace the template with one parsed from JSON.

        On TemplateParseError the current template, pending grid field and
        edit draft are kept.
        """
        template = deserialize_template(raw)
        self.template = template
        self.pending_grid = None
        self.active_edit = None
        logger.info(f"Imported template '{template.title}' with {len(template.fields)} fields")
        return template

    def preview(self) -> FormState:
        """Build a fresh form state for the live preview."""
        return build_form_state(self.template)
