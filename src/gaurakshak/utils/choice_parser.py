"""Parsing of enumerated labels typed by users."""

from enum import Enum
from typing import TypeVar

from gaurakshak.domain.errors import ValidationError

E = TypeVar("E", bound=Enum)


def parse_choice(enum_cls: type[E], value: "str | E", label: str) -> E:
    """Match a label against an enum's values, ignoring case and surrounding spaces.

    Args:
        enum_cls: Enum whose values are the accepted labels
        value: User-supplied label or an enum member
        label: Field name used in the error message

    Returns:
        Matching enum member

    Raises:
        ValidationError: If nothing matches
    """
    if isinstance(value, enum_cls):
        return value
    wanted = str(value).strip().lower()
    for member in enum_cls:
        if str(member.value).lower() == wanted:
            return member
    choices = ", ".join(str(m.value) for m in enum_cls)
    raise ValidationError(f"Invalid {label} '{value}'. Expected one of: {choices}")
