"""Parsing helpers for loosely-typed form payloads."""
from __future__ import annotations

TRUE_TOKENS = frozenset({"true", "on", "yes", "1"})
FALSE_TOKENS = frozenset({"false", "off", "no", "0", ""})


class FormValueError(ValueError):
    """A form value could not be coerced to the expected type."""

    def __init__(self, field: str, value):
        self.field = field
        self.value = value
        super().__init__(f"Invalid value for {field}: {value!r}")


def parse_form_bool(value, field: str = "value") -> bool:
    """Map a checkbox-style form value to a boolean.

    Accepted truthy tokens are ``true``, ``on``, ``yes`` and ``1``; falsy
    tokens are ``false``, ``off``, ``no``, ``0`` and the empty string.
    Matching is case-insensitive after trimming. ``None`` means the field
    was not submitted and parses as ``False``. Real booleans pass through.
    Anything else raises :class:`FormValueError`.
    """
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    token = str(value).strip().lower()
    if token in TRUE_TOKENS:
        return True
    if token in FALSE_TOKENS:
        return False
    raise FormValueError(field, value)


def clean_text(value) -> str:
    """Trim a free-text value; ``None`` becomes the empty string."""
    if value is None:
        return ""
    return str(value).strip()
