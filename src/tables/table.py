"""
Partitioned tables.

A Table describes where a dataset lives and how it is partitioned. It is
the configuration object passed to save() and load():

    events = Table(name="events", base_path="data/warehouse",
                   partitioning=["year", "month", "day"])

    save(df, events)
    load(spark, events, "2019-01-01", "2019-01-31")
    load(spark, events.partition(year=2019))

Partition values can be pinned (left to right, following `partitioning`)
to read a single sub-directory of the table; partition columns are still
returned because the read uses the table root as its basePath.
"""

import os
from typing import Dict, List, Optional, Union
import logging

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pyspark.sql import DataFrame, SparkSession

from src.functions.predicates import exact_date_range_to_sql
from src.utils.s3_utils import build_s3_path, check_path_exists, is_s3_path, parse_s3_path
from src.utils.spark_utils import read_parquet, write_parquet_partitioned

logger = logging.getLogger(__name__)

DATE_PARTITION_COLUMNS = ["year", "month", "day"]

PartitionValue = Union[int, str]


class TableError(ValueError):
    """Raised when a table cannot be saved or loaded as requested."""


class Table(BaseModel):
    """Location and partitioning of a parquet dataset."""
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Table name, used as the directory name")
    base_path: str = Field(..., min_length=1, description="Directory (local or s3://) holding the table")
    partitioning: List[str] = Field(default_factory=list, description="Partition columns, outermost first")
    partition_values: Dict[str, PartitionValue] = Field(
        default_factory=dict, description="Pinned partition values, a prefix of partitioning"
    )

    @field_validator("partitioning")
    @classmethod
    def partition_columns_unique(cls, v):
        duplicates = sorted({c for c in v if v.count(c) > 1})
        if duplicates:
            raise ValueError(f"Duplicate partition columns: {duplicates}")
        return v

    @model_validator(mode="after")
    def pinned_values_form_prefix(self):
        unknown = set(self.partition_values) - set(self.partitioning)
        if unknown:
            raise ValueError(f"Pinned values for non-partition columns: {sorted(unknown)}")

        expected = self.partitioning[:len(self.partition_values)]
        if set(expected) != set(self.partition_values):
            raise ValueError(
                f"Pinned partition values {sorted(self.partition_values)} must cover "
                f"the leading partition columns {expected}"
            )
        return self

    @property
    def path(self) -> str:
        """Root directory of the table."""
        return f"{self.base_path.rstrip('/')}/{self.name}"

    @property
    def full_path(self) -> str:
        """Table root plus the col=value directories of pinned partitions."""
        segments = [f"{col}={self.partition_values[col]}"
                    for col in self.partitioning if col in self.partition_values]
        return "/".join([self.path] + segments)

    @property
    def is_date_partitioned(self) -> bool:
        return all(c in self.partitioning for c in DATE_PARTITION_COLUMNS)

    def partition(self, **values: PartitionValue) -> "Table":
        """Return a copy of this table with more partition values pinned."""
        data = self.model_dump()
        data["partition_values"] = {**self.partition_values, **values}
        return Table(**data)

    @classmethod
    def on_s3(
        cls,
        bucket: str,
        *parts: str,
        name: str,
        partitioning: Optional[List[str]] = None
    ) -> "Table":
        """Build a table stored under s3://bucket/<parts>/<name>."""
        return cls(
            name=name,
            base_path=build_s3_path(bucket, *parts),
            partitioning=partitioning or [],
        )


def table_exists(table: Table) -> bool:
    """Check whether any data exists at the table's full path."""
    if is_s3_path(table.full_path):
        bucket, prefix = parse_s3_path(table.full_path)
        return check_path_exists(bucket, prefix.rstrip("/") + "/")
    return os.path.isdir(table.full_path)


def save(df: DataFrame, table: Table, mode: str = "overwrite") -> None:
    """
    Write a DataFrame as partitioned parquet at the table's root.

    Args:
        df: DataFrame to write
        table: Destination table
        mode: Write mode (overwrite, append, etc.)

    Raises:
        TableError: If df lacks any of the table's partition columns
    """
    missing = [c for c in table.partitioning if c not in df.columns]
    if missing:
        raise TableError(f"Cannot save to table '{table.name}': missing partition columns {missing}")

    write_parquet_partitioned(df, table.path, table.partitioning, mode=mode)


def load(
    spark: SparkSession,
    table: Table,
    start: Optional[str] = None,
    end: Optional[str] = None
) -> DataFrame:
    """
    Read a table, optionally restricted to a date range.

    Args:
        spark: SparkSession
        table: Table to read
        start: Optional first date (yyyy-mm-dd)
        end: Optional last date (yyyy-mm-dd), defaults to start

    Returns:
        DataFrame including the table's partition columns

    Raises:
        TableError: If a date range is given for a table that is not
            partitioned by year, month and day
        FormatError: If start or end is not a valid date
    """
    condition = None
    if start is not None or end is not None:
        if not table.is_date_partitioned:
            raise TableError(
                f"Table '{table.name}' is partitioned by {table.partitioning}, "
                f"a date range needs {DATE_PARTITION_COLUMNS}"
            )
        condition = exact_date_range_to_sql(start or end, end or start)

    df = read_parquet(spark, table.full_path, base_path=table.path)

    if condition is None:
        return df

    logger.info(f"Filtering {table.name} with: {condition}")
    return df.where(condition)
