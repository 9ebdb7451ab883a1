"""Column-level helpers."""

from typing import Any, Union

from pyspark.sql import Column
from pyspark.sql import functions as F

ColumnOrName = Union[Column, str]


def _to_col(c: ColumnOrName) -> Column:
    return F.col(c) if isinstance(c, str) else c


def nvl(c: ColumnOrName, default: Any) -> Column:
    """
    Return a default value for a column if it's null, otherwise the column's value.

    Args:
        c: Column (or column name) to be checked
        default: Literal value or Column to use when c is null

    Returns:
        c if not null and default otherwise
    """
    col = _to_col(c)
    return F.when(col.isNotNull(), col).otherwise(default)


def to_date_str(year: ColumnOrName, month: ColumnOrName, day: ColumnOrName) -> Column:
    """
    Build a 'yyyy-MM-dd' string column from year, month and day columns.

    If one or more of the columns is null, the result is null.
    """
    return F.date_format(
        F.concat(_to_col(year), F.lit("-"), _to_col(month), F.lit("-"), _to_col(day)),
        "yyyy-MM-dd"
    )
