"""
formbuilder CLI

Command-line helpers for working with form template files.

Commands:
  formbuilder check <template>      - Validate a template and list its fields
  formbuilder export <template>     - Print the template as normalized JSON
  formbuilder derive-id <label>     - Print the field id derived from a label
"""

import logging
import sys

from formbuilder.config import get_settings
from formbuilder.core.exceptions import TemplateLoadError
from formbuilder.models.enums import FieldType
from formbuilder.services.field_ids import derive_field_id
from formbuilder.services.form_state import build_form_state
from formbuilder.services.template_editor import serialize_template
from formbuilder.services.template_sources import read_template_file


def configure_logging() -> None:
    settings = get_settings()
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else settings.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


def main(args: list[str] | None = None) -> int:
    """
    Main CLI entry point.

    Args:
        args: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, 1 for error)
    """
    if args is None:
        args = sys.argv[1:]

    configure_logging()

    if not args:
        print_help()
        return 0

    command = args[0].lower()

    if command in ("help", "-h", "--help"):
        print_help()
        return 0

    if command == "check":
        return handle_check(args[1:])

    if command == "export":
        return handle_export(args[1:])

    if command == "derive-id":
        return handle_derive_id(args[1:])

    print(f"Unknown command: {command}", file=sys.stderr)
    print_help()
    return 1


def print_help() -> None:
    """Print CLI help message."""
    print("""
formbuilder - form template tools

Usage:
  formbuilder <command> [options]

Commands:
  check <template>    Validate a .json/.yaml template and list its fields
  export <template>   Print the template as normalized JSON
  derive-id <label>   Print the field id derived from a label
  help                Show this help message

Examples:
  formbuilder check forms/intake.json
  formbuilder derive-id "First Name"
""".strip())


def handle_check(args: list[str]) -> int:
    """
    Handle 'formbuilder check' command.

    Loads the template, compiles it into form state and prints one line per
    field with its initial validity.
    """
    if len(args) != 1:
        print("Usage: formbuilder check <template>", file=sys.stderr)
        return 1

    try:
        template = read_template_file(args[0])
    except TemplateLoadError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1

    state = build_form_state(template)
    print(f"{template.title} (version {template.version}): {len(template.fields)} fields")
    for field in template.fields:
        control = state[field.field_id]
        detail = field.type.value
        if field.type == FieldType.GRID:
            detail += f", {len(field.columns or [])} columns"
        print(f"  {field.field_id:<24} {detail:<20} {control.validity.value}")
    return 0


def handle_export(args: list[str]) -> int:
    """Handle 'formbuilder export' command."""
    if len(args) != 1:
        print("Usage: formbuilder export <template>", file=sys.stderr)
        return 1

    try:
        template = read_template_file(args[0])
    except TemplateLoadError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1

    print(serialize_template(template))
    return 0


def handle_derive_id(args: list[str]) -> int:
    """Handle 'formbuilder derive-id' command."""
    if not args:
        print("Usage: formbuilder derive-id <label>", file=sys.stderr)
        return 1

    field_id = derive_field_id(" ".join(args))
    if not field_id:
        print("Error: label does not produce a field id", file=sys.stderr)
        return 1

    print(field_id)
    return 0


if __name__ == "__main__":
    sys.exit(main())
