"""Identifier validation for view and column names.

Names end up unquoted in generated DDL (table, view, trigger and index
names, and column aliases), so strict mode restricts them to plain SQL
identifiers.
"""

import re

from recordlite.exceptions import InvalidSchemaError


VALID_IDENTIFIER_PATTERN = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


class InvalidNameError(InvalidSchemaError):
    """Raised when a name is not a plain SQL identifier."""

    pass


def validate_identifier(name: str, entity_type: str = "column") -> None:
    """Validate that a name can be used unquoted in generated SQL.

    Valid identifiers must:
    - Be at least 1 character long
    - Contain only letters, digits and underscore (_)
    - Not start with a digit

    Args:
        name: The name to validate
        entity_type: Type of entity (view, column) for error messages

    Raises:
        InvalidNameError: If the name is invalid
    """
    if not name:
        raise InvalidNameError(f"{entity_type.capitalize()} name cannot be empty")

    if not VALID_IDENTIFIER_PATTERN.fullmatch(name):
        raise InvalidNameError(
            f"Invalid {entity_type} name '{name}'. "
            f"{entity_type.capitalize()} names must contain only letters, "
            f"numbers (0-9), and underscore (_), and cannot start with a number."
        )


def is_valid_identifier(name: str) -> bool:
    """Check if a name is a valid identifier without raising an exception."""
    try:
        validate_identifier(name)
        return True
    except InvalidNameError:
        return False
