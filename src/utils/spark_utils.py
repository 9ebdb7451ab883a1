"""Utility functions for Spark sessions and parquet I/O."""

from typing import List, Optional
import logging

from pyspark.sql import DataFrame, SparkSession

logger = logging.getLogger(__name__)


def get_spark_session(app_name: str = "SparkFunctions", master: Optional[str] = None) -> SparkSession:
    """
    Get or create a Spark session.

    In AWS Glue, the session is typically created by the GlueContext,
    but for local development, we create our own.

    Args:
        app_name: Name for the Spark application
        master: Optional master URL, e.g. "local[*]"

    Returns:
        SparkSession instance
    """
    builder = (SparkSession.builder
               .appName(app_name)
               .config("spark.sql.sources.partitionOverwriteMode", "dynamic")
               .config("spark.sql.parquet.compression.codec", "snappy"))

    if master:
        builder = builder.master(master)

    return builder.getOrCreate()


def write_parquet_partitioned(
    df: DataFrame,
    path: str,
    partition_cols: List[str],
    mode: str = "overwrite"
) -> None:
    """
    Write DataFrame to Parquet format with partitioning.

    With dynamic partition overwrite, "overwrite" only replaces the
    partitions present in df.

    Args:
        df: DataFrame to write
        path: Output path (S3 or local)
        partition_cols: Columns to partition by
        mode: Write mode (overwrite, append, etc.)
    """
    writer = df.write.mode(mode)
    if partition_cols:
        writer = writer.partitionBy(*partition_cols)
    writer.parquet(path)

    logger.info(f"Written parquet to {path} with partitions: {partition_cols}")


def read_parquet(spark: SparkSession, path: str, base_path: Optional[str] = None) -> DataFrame:
    """
    Read Parquet files into a DataFrame.

    Args:
        spark: SparkSession
        path: Path to read, may point below the table root
        base_path: Table root, so partition columns above `path` are kept

    Returns:
        DataFrame with parquet data
    """
    reader = spark.read
    if base_path:
        reader = reader.option("basePath", base_path)

    logger.info(f"Reading parquet from {path}")
    return reader.parquet(path)
