"""Utility functions package."""

from .spark_utils import (
    get_spark_session,
    write_parquet_partitioned,
    read_parquet,
)

from .s3_utils import (
    get_s3_client,
    is_s3_path,
    build_s3_path,
    parse_s3_path,
    check_path_exists,
)

__all__ = [
    # Spark utilities
    "get_spark_session",
    "write_parquet_partitioned",
    "read_parquet",
    # S3 utilities
    "get_s3_client",
    "is_s3_path",
    "build_s3_path",
    "parse_s3_path",
    "check_path_exists",
]
