"""Utility modules for recordlite."""

from recordlite.utils.name_validator import (
    validate_identifier,
    is_valid_identifier,
    InvalidNameError,
)

__all__ = [
    "validate_identifier",
    "is_valid_identifier",
    "InvalidNameError",
]
