"""Utility functions for S3 operations."""

import os
from typing import Optional, Tuple
import logging

import boto3

logger = logging.getLogger(__name__)

DEFAULT_REGION = "eu-west-1"


def get_s3_client(region: Optional[str] = None):
    """
    Get an S3 client.

    In AWS Glue, credentials are automatically provided via IAM roles.
    For local development, uses credentials from ~/.aws/credentials

    Args:
        region: AWS region, defaults to $AWS_REGION or eu-west-1

    Returns:
        boto3 S3 client
    """
    return boto3.client('s3', region_name=region or os.environ.get("AWS_REGION", DEFAULT_REGION))


def is_s3_path(path: str) -> bool:
    return path.startswith(("s3://", "s3a://"))


def build_s3_path(bucket: str, *parts: str) -> str:
    """
    Build an S3 path from parts.

    Args:
        bucket: S3 bucket name
        *parts: Path components

    Returns:
        Full S3 path (s3://bucket/path/to/object)
    """
    path = "/".join(p.strip("/") for p in parts if p)
    return f"s3://{bucket}/{path}"


def parse_s3_path(path: str) -> Tuple[str, str]:
    """
    Split an S3 path into (bucket, key prefix).

    Raises:
        ValueError: If the path is not an s3:// or s3a:// path
    """
    if not is_s3_path(path):
        raise ValueError(f"Not an S3 path: {path}")

    bucket, _, prefix = path.split("://", 1)[1].partition("/")
    return bucket, prefix


def check_path_exists(bucket: str, prefix: str) -> bool:
    """
    Check if an S3 path exists (has any objects).

    Args:
        bucket: S3 bucket name
        prefix: Prefix to check

    Returns:
        True if any objects exist with the prefix
    """
    s3 = get_s3_client()
    response = s3.list_objects_v2(Bucket=bucket, Prefix=prefix, MaxKeys=1)
    exists = 'Contents' in response
    logger.debug(f"s3://{bucket}/{prefix} exists: {exists}")
    return exists
