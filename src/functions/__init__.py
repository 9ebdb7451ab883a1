"""Convenience functions layered on top of PySpark."""

from .dates import (
    CalendarDate,
    FormatError,
    parse_date,
    decompose,
    expand_date,
    normalize,
    plus_days,
    date_range,
    today,
    yesterday,
)

from .predicates import (
    compile_date_range,
    compile_exact_date_range,
    date_range_to_sql,
    exact_date_range_to_sql,
    render,
    evaluate,
    to_column,
)

from .columns import nvl, to_date_str
from .dataframe import distinct_rows, add_columns, rename_columns
from .schema import schema_for

__all__ = [
    # Dates
    "CalendarDate",
    "FormatError",
    "parse_date",
    "decompose",
    "expand_date",
    "normalize",
    "plus_days",
    "date_range",
    "today",
    "yesterday",
    # Date-range predicates
    "compile_date_range",
    "compile_exact_date_range",
    "date_range_to_sql",
    "exact_date_range_to_sql",
    "render",
    "evaluate",
    "to_column",
    # Columns and DataFrames
    "nvl",
    "to_date_str",
    "distinct_rows",
    "add_columns",
    "rename_columns",
    # Schemas
    "schema_for",
]
