"""Data quality validators package."""

from .validators import (
    DataQualityValidator,
    DataQualityError,
    QualityCheckResult,
    CheckSeverity,
    validate_date_partitions,
)

__all__ = [
    "DataQualityValidator",
    "DataQualityError",
    "QualityCheckResult",
    "CheckSeverity",
    "validate_date_partitions",
]
