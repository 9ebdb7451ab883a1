"""DataFrame-level helpers: deduplication and bulk column changes."""

from typing import List, Tuple
import logging

from pyspark.sql import Column, DataFrame
from pyspark.sql import functions as F
from pyspark.sql.window import Window

from .columns import ColumnOrName

logger = logging.getLogger(__name__)


def _row_number_column(df: DataFrame) -> str:
    """Pick a free 'rnN' column name for the row number."""
    i = 0
    while f"rn{i}" in df.columns:
        i += 1
    return f"rn{i}"


def distinct_rows(
    df: DataFrame,
    part_cols: List[ColumnOrName],
    order: List[ColumnOrName]
) -> DataFrame:
    """
    Remove duplicate rows using column criteria for grouping and ordering.

    Only one row from each group is kept: the first one by the given order.
    Use Column.desc() in `order` to keep the latest record instead.

    Args:
        df: Input DataFrame with potential duplicates
        part_cols: How to group rows
        order: How to sort rows within a group

    Returns:
        DataFrame with one row per group
    """
    rn = _row_number_column(df)
    window_spec = Window.partitionBy(*part_cols).orderBy(*order)

    return (df
            .withColumn(rn, F.row_number().over(window_spec))
            .filter(F.col(rn) == 1)
            .drop(rn))


def add_columns(df: DataFrame, *new_columns: Tuple[str, Column]) -> DataFrame:
    """
    Add multiple columns to a DataFrame.

    Same as chaining withColumn for each (name, column) pair, left to right,
    so later columns may refer to earlier ones.

    Args:
        df: Input DataFrame
        *new_columns: (column name, column value) pairs

    Returns:
        DataFrame with the new columns added
    """
    for col_name, col_value in new_columns:
        df = df.withColumn(col_name, col_value)
    return df


def rename_columns(df: DataFrame, *renames: Tuple[str, str]) -> DataFrame:
    """
    Rename multiple columns of a DataFrame.

    Args:
        df: Input DataFrame
        *renames: (current name, new name) pairs, applied left to right

    Returns:
        DataFrame with the columns renamed
    """
    for current_name, new_name in renames:
        if current_name not in df.columns:
            logger.warning(f"Column '{current_name}' not found, cannot rename to '{new_name}'")
        df = df.withColumnRenamed(current_name, new_name)
    return df
