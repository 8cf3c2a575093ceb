"""Recordlite - schema-on-read SQLite views over raw record tables."""

from recordlite.compiler import compile_view_def, index_name, index_names
from recordlite.exceptions import CompilationError, InvalidSchemaError
from recordlite.loader import load_view_def, load_view_def_file
from recordlite.models import ColumnDef, ViewDef

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("recordlite")
except PackageNotFoundError:
    # Package metadata is not available (running from a source checkout)
    __version__ = "0.1.0"

__all__ = [
    "compile_view_def",
    "index_name",
    "index_names",
    "load_view_def",
    "load_view_def_file",
    "ColumnDef",
    "ViewDef",
    "CompilationError",
    "InvalidSchemaError",
]
