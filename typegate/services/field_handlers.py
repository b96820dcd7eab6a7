"""Built-in Field Handlers: validation strategies for the stock field types.

Invariants:
    - validate() returns True on success or a message string on failure
    - Handlers read the value via field_settings.name (set per call by the validator)
    - Handlers never mutate the record or the settings
    - Handlers without a validate() method accept every value

Design Decisions:
    - One small class per field type, grouped in one file (each is a few lines)
    - Options (min_length, max, ...) read from FieldSettings extras
"""

import re

from typegate.core.type_schema import FieldSettings, Record

_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class TextField:
    """Strings, with optional min_length / max_length."""
    name = "text"

    def validate(self, field_settings: FieldSettings, record: Record) -> bool | str:
        value = record[field_settings.name]
        if not isinstance(value, str):
            return f"{field_settings.label} must be text."
        min_length = field_settings.option("min_length")
        if min_length is not None and len(value) < min_length:
            return f"{field_settings.label} must be at least {min_length} characters long."
        max_length = field_settings.option("max_length")
        if max_length is not None and len(value) > max_length:
            return f"{field_settings.label} must be at most {max_length} characters long."
        return True


class NumberField:
    """Ints and floats (bools rejected), with optional min / max."""
    name = "number"
    integer_only = False

    def validate(self, field_settings: FieldSettings, record: Record) -> bool | str:
        value = record[field_settings.name]
        allowed = int if self.integer_only else (int, float)
        if isinstance(value, bool) or not isinstance(value, allowed):
            kind = "an integer" if self.integer_only else "a number"
            return f"{field_settings.label} must be {kind}."
        minimum = field_settings.option("min")
        if minimum is not None and value < minimum:
            return f"{field_settings.label} must be at least {minimum}."
        maximum = field_settings.option("max")
        if maximum is not None and value > maximum:
            return f"{field_settings.label} must be at most {maximum}."
        return True


class IntegerField(NumberField):
    name = "integer"
    integer_only = True


class BooleanField:
    name = "boolean"

    def validate(self, field_settings: FieldSettings, record: Record) -> bool | str:
        if not isinstance(record[field_settings.name], bool):
            return f"{field_settings.label} must be true or false."
        return True


class EmailField:
    name = "email"

    def validate(self, field_settings: FieldSettings, record: Record) -> bool | str:
        value = record[field_settings.name]
        if not isinstance(value, str) or not _EMAIL_PATTERN.match(value):
            return f"{field_settings.label} must be a valid email address."
        return True


class ListField:
    """Free-form list. No validate(): accepted unconditionally."""
    name = "list"


class ReferenceField:
    """Id of another resource. No validate(): accepted unconditionally."""
    name = "reference"
