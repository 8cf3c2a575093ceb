"""Data models for recordlite."""

from .base import RecordliteBaseModel
from .view import ColumnDef, ViewDef

__all__ = [
    "RecordliteBaseModel",
    "ColumnDef",
    "ViewDef",
]
