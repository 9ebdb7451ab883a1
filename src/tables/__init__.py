"""Partitioned table configuration and I/O."""

from .table import (
    DATE_PARTITION_COLUMNS,
    Table,
    TableError,
    table_exists,
    save,
    load,
)

__all__ = [
    "DATE_PARTITION_COLUMNS",
    "Table",
    "TableError",
    "table_exists",
    "save",
    "load",
]
