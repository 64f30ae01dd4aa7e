"""
Validator compiler.

Maps declarative validator descriptors onto executable checks. A compiled
check is a pure function of a single control's value: it returns None when
the value passes, or a dict of failure parameters when it does not.

Empty values pass every check except `required`, so a blank optional field
is never reported as too short or badly formatted.
"""

import logging
import math
import re
from dataclasses import dataclass, field
from typing import Any, Callable

from formbuilder.models.contracts.templates import FieldConfig, GridColumn, LegacyValidation
from formbuilder.models.enums import ValidatorName

logger = logging.getLogger(__name__)

Check = Callable[[Any], dict[str, Any] | None]

EMAIL_PATTERN = re.compile(
    r"^(?=.{1,254}$)(?=.{1,64}@)"
    r"[a-zA-Z0-9!#$%&'*+/=?^_`{|}~-]+(?:\.[a-zA-Z0-9!#$%&'*+/=?^_`{|}~-]+)*"
    r"@[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
    r"(?:\.[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)*$"
)


@dataclass(frozen=True)
class CompiledValidator:
    """An executable check plus the tag and parameter it was compiled from"""
    name: str
    check: Check = field(repr=False, compare=False)
    param: Any = None

    def __call__(self, value: Any) -> dict[str, Any] | None:
        return self.check(value)


# ==================== VALUE HELPERS ====================


def is_empty_value(value: Any) -> bool:
    """None, empty strings and empty collections count as "no value"."""
    if value is None:
        return True
    if isinstance(value, (str, list, tuple, dict, set)):
        return len(value) == 0
    return False


def to_number(value: Any) -> int | float | None:
    """
    Coerce a value to a number.

    Numeric strings ("5", " 2.5 ") are accepted because builder inputs arrive
    as text. Booleans, NaN and anything unparseable return None.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return None if math.isnan(value) else value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return int(text)
        except ValueError:
            pass
        try:
            number = float(text)
        except ValueError:
            return None
        return None if math.isnan(number) else number
    return None


def _to_length(value: Any) -> int | None:
    number = to_number(value)
    if number is None or number < 0:
        return None
    if isinstance(number, float) and not number.is_integer():
        return None
    return int(number)


# ==================== CHECK FACTORIES ====================


def required_check() -> Check:
    def check(value: Any) -> dict[str, Any] | None:
        return {} if is_empty_value(value) else None
    return check


def min_length_check(length: int) -> Check:
    def check(value: Any) -> dict[str, Any] | None:
        if is_empty_value(value) or not isinstance(value, (str, list, tuple)):
            return None
        if len(value) < length:
            return {"required_length": length, "actual_length": len(value)}
        return None
    return check


def max_length_check(length: int) -> Check:
    def check(value: Any) -> dict[str, Any] | None:
        if is_empty_value(value) or not isinstance(value, (str, list, tuple)):
            return None
        if len(value) > length:
            return {"required_length": length, "actual_length": len(value)}
        return None
    return check


def min_check(bound: int | float) -> Check:
    def check(value: Any) -> dict[str, Any] | None:
        if is_empty_value(value):
            return None
        number = to_number(value)
        if number is None or number < bound:
            return {"min": bound, "actual": value}
        return None
    return check


def max_check(bound: int | float) -> Check:
    def check(value: Any) -> dict[str, Any] | None:
        if is_empty_value(value):
            return None
        number = to_number(value)
        if number is None or number > bound:
            return {"max": bound, "actual": value}
        return None
    return check


def pattern_check(regex: re.Pattern) -> Check:
    def check(value: Any) -> dict[str, Any] | None:
        if is_empty_value(value):
            return None
        text = value if isinstance(value, str) else str(value)
        if regex.fullmatch(text) is None:
            return {"required_pattern": regex.pattern, "actual_value": value}
        return None
    return check


def email_check() -> Check:
    def check(value: Any) -> dict[str, Any] | None:
        if is_empty_value(value):
            return None
        if not isinstance(value, str) or EMAIL_PATTERN.match(value) is None:
            return {}
        return None
    return check


# ==================== COMPILER ====================


def compile_validator(name: str, value: Any = None) -> CompiledValidator | None:
    """
    Compile one validator by name.

    Args:
        name: Validator name (see ValidatorName)
        value: Validator parameter; ignored for required/email

    Returns:
        The compiled validator, or None when the name is unknown or the
        parameter cannot be used
    """
    if name == ValidatorName.REQUIRED.value:
        return CompiledValidator(name, required_check())

    if name == ValidatorName.EMAIL.value:
        return CompiledValidator(name, email_check())

    if name in (ValidatorName.MIN_LENGTH.value, ValidatorName.MAX_LENGTH.value):
        length = _to_length(value)
        if length is None:
            logger.warning(f"Ignoring {name} validator with invalid length {value!r}")
            return None
        factory = min_length_check if name == ValidatorName.MIN_LENGTH.value else max_length_check
        return CompiledValidator(name, factory(length), length)

    if name in (ValidatorName.MIN.value, ValidatorName.MAX.value):
        bound = to_number(value)
        if bound is None:
            logger.warning(f"Ignoring {name} validator with non-numeric bound {value!r}")
            return None
        factory = min_check if name == ValidatorName.MIN.value else max_check
        return CompiledValidator(name, factory(bound), bound)

    if name == ValidatorName.PATTERN.value:
        try:
            regex = re.compile(str(value))
        except re.error as e:
            logger.warning(f"Ignoring pattern validator with invalid regex {value!r}: {e}")
            return None
        return CompiledValidator(name, pattern_check(regex), regex.pattern)

    logger.debug(f"Ignoring unknown validator '{name}'")
    return None


def _legacy_rules(validation: LegacyValidation) -> list[tuple[str, Any]]:
    rules: list[tuple[str, Any]] = []
    if validation.required:
        rules.append((ValidatorName.REQUIRED.value, None))
    if validation.email:
        rules.append((ValidatorName.EMAIL.value, None))
    if validation.min_length:
        rules.append((ValidatorName.MIN_LENGTH.value, validation.min_length))
    if validation.max_length:
        rules.append((ValidatorName.MAX_LENGTH.value, validation.max_length))
    if validation.min is not None:
        rules.append((ValidatorName.MIN.value, validation.min))
    if validation.max is not None:
        rules.append((ValidatorName.MAX.value, validation.max))
    if validation.pattern:
        rules.append((ValidatorName.PATTERN.value, validation.pattern))
    return rules


def compile_validators(field: FieldConfig) -> list[CompiledValidator]:
    """
    Compile every validation rule declared on a field.

    Order: the field's `required` flag, then `validators` in declaration
    order, then the flat `validation` object. Both rule sources contribute;
    neither replaces the other.

    Args:
        field: Field configuration

    Returns:
        Compiled validators in evaluation order
    """
    rules: list[tuple[str, Any]] = []

    if field.required:
        rules.append((ValidatorName.REQUIRED.value, None))

    for descriptor in field.validators or []:
        rules.append((descriptor.name, descriptor.value))

    if field.validation is not None:
        rules.extend(_legacy_rules(field.validation))

    compiled = []
    for name, value in rules:
        validator = compile_validator(name, value)
        if validator is not None:
            compiled.append(validator)
    return compiled


def compile_column_validators(column: GridColumn) -> list[CompiledValidator]:
    """Compile the checks for cells of a grid column."""
    if column.required:
        return [CompiledValidator(ValidatorName.REQUIRED.value, required_check())]
    return []


def run_validators(validators: list[CompiledValidator], value: Any) -> dict[str, dict[str, Any]]:
    """
    Evaluate validators against a value.

    Returns:
        Failing validator names mapped to their failure parameters. When the
        same name is compiled more than once the first failure is kept.
    """
    errors: dict[str, dict[str, Any]] = {}
    for validator in validators:
        if validator.name in errors:
            continue
        failure = validator(value)
        if failure is not None:
            errors[validator.name] = failure
    return errors
