"""View description models for recordlite."""

from typing import Any, Iterator, List
from pydantic import Field, field_validator
from .base import RecordliteBaseModel


class ColumnDef(RecordliteBaseModel):
    """A typed column projected from the raw payload."""

    name: str = Field(default="", description="Column name, used as the alias")
    expr: str = Field(
        default="",
        description="SQL expression evaluated against the raw table's row",
    )
    with_index: bool = Field(
        default=False,
        description="Whether to create an expression index for the column. "
        "The index name embeds a hash of the expression, so any change to "
        "the expression text rebuilds the index.",
    )


class ViewDef(RecordliteBaseModel):
    """A schema-on-read view over a raw record table."""

    name: str = Field(
        default="",
        description="View name. The raw table is named '{name}_raw'",
    )
    columns: List[ColumnDef] = Field(
        default_factory=list, description="Projected columns, in SELECT order"
    )
    skip_triggers: bool = Field(
        default=False, description="Do not generate the write-through triggers"
    )
    skip_indices: bool = Field(
        default=False, description="Do not generate the column indices"
    )
    unsafe_drop_orphan_indices: bool = Field(
        default=False,
        description="Drop previously generated indices that are no longer "
        "defined by the columns",
    )

    @field_validator("columns", mode="before")
    @classmethod
    def null_columns(cls, value: Any) -> Any:
        """Treat an explicit null like a missing column list."""
        return [] if value is None else value

    @property
    def table_name(self) -> str:
        return f"{self.name}_raw"

    @property
    def view_name(self) -> str:
        return self.name

    def indexed_columns(self) -> Iterator[ColumnDef]:
        """Yield the columns requesting an index, in list order."""
        for column in self.columns:
            if column.with_index:
                yield column
