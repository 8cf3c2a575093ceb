"""SQL compilation of view descriptions.

A view description compiles into one script that, in a single exclusive
transaction, creates the raw table, redefines the view projecting the typed
columns, redefines the write-through triggers and creates the expression
indices. Every statement is guarded (IF EXISTS / IF NOT EXISTS) so the script
can be run repeatedly against the same database.
"""

import hashlib
import logging
from typing import List

from recordlite.exceptions import CompilationError, InvalidSchemaError
from recordlite.models import ColumnDef, ViewDef
from recordlite.utils.name_validator import validate_identifier

logger = logging.getLogger(__name__)


# Namespaces the indices managed by recordlite. Changing it (or the naming
# scheme in index_name) orphans every index built by earlier versions.
INDEX_PREFIX = "_col_expr"

TRIGGERS_BANNER = """--
-- Triggers
--

-- The trigger helpers enable applications to write in the view and avoid
-- the writing in the raw table. The restriction is that they can only reference
-- the 'raw' column.

"""


def index_name(column: ColumnDef) -> str:
    """Return the name of the expression index for a column.

    The name embeds the SHA-1 of the expression's exact text, so any change to
    the expression, cosmetic or not, yields a new index.
    """
    digest = hashlib.sha1(column.expr.encode("utf-8")).hexdigest()
    return f"{INDEX_PREFIX}_{column.name}_{digest}"


def index_names(view: ViewDef) -> List[str]:
    """Return the names of the indices defined by the current columns."""
    return [index_name(column) for column in view.indexed_columns()]


def _quote_literal(value: str) -> str:
    escaped = value.replace("'", "''")
    return f"'{escaped}'"


def build_table_statement(view: ViewDef) -> str:
    """Build the raw table definition."""
    return (
        f"CREATE TABLE IF NOT EXISTS {view.table_name} (\n"
        f"  id INTEGER PRIMARY KEY NOT NULL,\n"
        f"  raw BLOB NOT NULL\n"
        f");"
    )


def build_view_statement(view: ViewDef) -> str:
    """Build the statements dropping and recreating the view.

    The view is always redefined since the column projections may have
    changed since the previous compilation.
    """
    lines = [
        f"DROP VIEW IF EXISTS {view.view_name};",
        f"CREATE VIEW IF NOT EXISTS {view.view_name} AS",
        "SELECT",
        "  id,",
        "  raw," if view.columns else "  raw",
    ]

    n_columns = len(view.columns)
    for i, column in enumerate(view.columns):
        comma = "" if i + 1 == n_columns else ","
        lines.append(f"  {column.expr} AS {column.name}{comma}")

    lines.append(f"FROM {view.table_name};")
    return "\n".join(lines)


def build_trigger_statements(view: ViewDef) -> str:
    """Build the INSTEAD OF triggers redirecting view writes to the raw table.

    Triggers only ever read or write the 'raw' column; projected columns are
    ignored.
    """
    view_name = view.view_name
    table = view.table_name
    actions = [
        ("insert", "INSERT", f"INSERT INTO {table}(raw) VALUES(NEW.raw);"),
        ("update", "UPDATE", f"UPDATE {table} SET raw = NEW.raw WHERE id = OLD.id;"),
        ("delete", "DELETE", f"DELETE FROM {table} WHERE id = OLD.id;"),
    ]

    statements = []
    for suffix, event, body in actions:
        trigger = f"{view_name}_{suffix}"
        statements.append(
            f"DROP TRIGGER IF EXISTS {trigger};\n"
            f"CREATE TRIGGER IF NOT EXISTS {trigger} INSTEAD OF {event} ON {view_name}\n"
            f"BEGIN\n"
            f"  {body}\n"
            f"END;"
        )
    return "\n\n".join(statements)


def build_index_statements(view: ViewDef) -> List[str]:
    """Build one CREATE INDEX statement per indexed column, in column order."""
    return [
        f"CREATE INDEX IF NOT EXISTS {index_name(column)}\n"
        f"  ON {view.table_name}({column.expr});"
        for column in view.indexed_columns()
    ]


def build_orphan_cleanup_statement(view: ViewDef) -> str:
    """Build the statement deleting indices no longer defined by the columns.

    Deletes straight from sqlite_master under writable_schema. The toggle is
    not atomic with respect to concurrent schema changes from other
    connections; callers must hold exclusive access to the database while
    the script runs.
    """
    current = ",\n    ".join(_quote_literal(name) for name in index_names(view))
    return (
        "-- Delete all indices that were previously defined by us, but are not included\n"
        "-- in the latest definition.\n"
        "PRAGMA writable_schema = 1;\n"
        "DELETE FROM sqlite_master\n"
        f"  WHERE type = 'index' AND tbl_name = {_quote_literal(view.table_name)} AND\n"
        f"  (name LIKE '{INDEX_PREFIX}_%' AND name NOT IN ({current}));\n"
        "PRAGMA writable_schema = 0;"
    )


def validate_view_def(view: ViewDef, strict: bool = False) -> None:
    """Check that a view description can be compiled.

    Args:
        view: The view description
        strict: Also require view and column names to be plain SQL identifiers

    Raises:
        InvalidSchemaError: If the description is invalid
    """
    if not view.name:
        raise InvalidSchemaError("View name cannot be empty")
    if strict:
        validate_identifier(view.name, "view")

    seen = set()
    for position, column in enumerate(view.columns):
        if not column.name:
            raise InvalidSchemaError(f"Column #{position + 1} has an empty name")
        if strict:
            validate_identifier(column.name, "column")

        # SQLite identifiers are case-insensitive
        key = column.name.lower()
        if key in seen:
            raise InvalidSchemaError(
                f"Duplicate column name '{column.name}' in view '{view.name}'"
            )
        seen.add(key)


def compile_view_def(view: ViewDef, strict: bool = False) -> str:
    """Compile a view description into a SQL script.

    Args:
        view: The view description
        strict: Also require view and column names to be plain SQL identifiers

    Returns:
        str: Newline-separated SQL statements, wrapped in an exclusive
        transaction, without leading or trailing blank lines

    Raises:
        InvalidSchemaError: If the description is invalid
        CompilationError: If the script could not be assembled
    """
    validate_view_def(view, strict=strict)
    logger.debug(f"Compiling view '{view.name}' with {len(view.columns)} columns")

    try:
        parts = [
            "BEGIN EXCLUSIVE;\n\n",
            build_table_statement(view),
            "\n\n--\n-- View\n--\n\n",
            build_view_statement(view),
            "\n\n",
        ]

        if not view.skip_triggers:
            parts.extend([TRIGGERS_BANNER, build_trigger_statements(view), "\n\n"])

        if not view.skip_indices:
            parts.append("--\n-- Indices\n--\n\n")
            indices = build_index_statements(view)
            parts.extend(f"{statement}\n\n" for statement in indices)
            logger.debug(f"Emitting {len(indices)} indices for '{view.table_name}'")

            if view.unsafe_drop_orphan_indices:
                logger.warning(
                    f"Emitting orphan index cleanup for '{view.table_name}'; "
                    f"this writes to sqlite_master directly"
                )
                parts.append(f"{build_orphan_cleanup_statement(view)}\n")
            parts.append("\n")

        parts.append("COMMIT;")
        script = "".join(parts)
    except (UnicodeError, TypeError) as e:
        raise CompilationError(
            f"Failed compiling view '{view.name}': {e}"
        ) from e

    return script.strip("\n")
