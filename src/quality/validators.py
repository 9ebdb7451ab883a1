"""
Data Quality Validators

Checks for DataFrames that are about to be written as, or were read from,
partitioned tables. The date-range filters in src.functions.predicates
assume integer year/month/day columns that are never null and stay within
calendar bounds; validate_date_partitions() verifies exactly that.
"""

from typing import List, Optional
from dataclasses import dataclass
from enum import Enum
from pyspark.sql import DataFrame
from pyspark.sql import functions as F
import logging

logger = logging.getLogger(__name__)


class DataQualityError(Exception):
    """Raised when ERROR-severity quality checks fail."""


class CheckSeverity(Enum):
    """Severity levels for data quality issues."""
    WARNING = "warning"   # Log but continue
    ERROR = "error"       # Fail the job
    INFO = "info"         # Informational only


@dataclass
class QualityCheckResult:
    """Result of a data quality check."""
    check_name: str
    passed: bool
    severity: CheckSeverity
    message: str
    failed_count: int = 0
    total_count: int = 0
    failed_percentage: float = 0.0

    def __str__(self):
        status = "PASSED" if self.passed else "FAILED"
        return (f"{status} [{self.severity.value.upper()}] {self.check_name}: "
                f"{self.message} ({self.failed_count}/{self.total_count} = "
                f"{self.failed_percentage:.2f}%)")


class DataQualityValidator:
    """
    Data quality validator for DataFrames.

    Usage:
        validator = DataQualityValidator(df, "events")
        validator.check_not_null(["year", "month", "day"])
        validator.check_range("month", min_value=1, max_value=12)
        validator.raise_for_failures()
    """

    def __init__(self, df: DataFrame, table_name: str = "unknown"):
        self.df = df
        self.table_name = table_name
        self.results: List[QualityCheckResult] = []
        self._total_count = None

    @property
    def total_count(self) -> int:
        """Lazily compute and cache total row count."""
        if self._total_count is None:
            self._total_count = self.df.count()
        return self._total_count

    def _percentage(self, failed: int) -> float:
        return failed / self.total_count * 100 if self.total_count > 0 else 0

    def check_not_null(
        self,
        columns: List[str],
        severity: CheckSeverity = CheckSeverity.ERROR
    ) -> List[QualityCheckResult]:
        """
        Check that specified columns have no null values.

        A column missing from the DataFrame is reported as a failed
        ERROR check regardless of `severity`.

        Args:
            columns: Column names to check
            severity: How to treat failures

        Returns:
            List of check results
        """
        results = []

        for col_name in columns:
            if col_name not in self.df.columns:
                result = QualityCheckResult(
                    check_name=f"not_null_{col_name}",
                    passed=False,
                    severity=CheckSeverity.ERROR,
                    message=f"Column '{col_name}' does not exist in DataFrame"
                )
            else:
                null_count = self.df.filter(F.col(col_name).isNull()).count()
                result = QualityCheckResult(
                    check_name=f"not_null_{col_name}",
                    passed=null_count == 0,
                    severity=severity,
                    message=f"Null check for '{col_name}'",
                    failed_count=null_count,
                    total_count=self.total_count,
                    failed_percentage=self._percentage(null_count)
                )
            results.append(result)
            self.results.append(result)

        return results

    def check_range(
        self,
        column: str,
        min_value: Optional[float] = None,
        max_value: Optional[float] = None,
        severity: CheckSeverity = CheckSeverity.ERROR
    ) -> QualityCheckResult:
        """
        Check that numeric column values fall within a range.

        Nulls are not counted as out of range; use check_not_null for those.

        Args:
            column: Column to check
            min_value: Minimum allowed value (inclusive)
            max_value: Maximum allowed value (inclusive)
            severity: How to treat failures

        Returns:
            Check result
        """
        condition = F.lit(True)

        if min_value is not None:
            condition = condition & (F.col(column) >= min_value)
        if max_value is not None:
            condition = condition & (F.col(column) <= max_value)

        invalid_count = self.df.filter(F.col(column).isNotNull() & ~condition).count()

        result = QualityCheckResult(
            check_name=f"range_{column}",
            passed=invalid_count == 0,
            severity=severity,
            message=f"Values in '{column}' must be in range [{min_value}, {max_value}]",
            failed_count=invalid_count,
            total_count=self.total_count,
            failed_percentage=self._percentage(invalid_count)
        )
        self.results.append(result)
        return result

    def check_row_count(
        self,
        min_count: int = 1,
        max_count: Optional[int] = None,
        severity: CheckSeverity = CheckSeverity.ERROR
    ) -> QualityCheckResult:
        """Check that DataFrame has expected number of rows."""
        count = self.total_count
        passed = count >= min_count
        if max_count is not None:
            passed = passed and count <= max_count

        range_desc = f">= {min_count}"
        if max_count is not None:
            range_desc = f"[{min_count}, {max_count}]"

        result = QualityCheckResult(
            check_name="row_count",
            passed=passed,
            severity=severity,
            message=f"Row count ({count}) must be {range_desc}",
            failed_count=0 if passed else 1,
            total_count=count
        )
        self.results.append(result)
        return result

    def all_passed(self, include_warnings: bool = False) -> bool:
        """
        Check if all quality checks passed.

        Args:
            include_warnings: If True, warnings count as failures

        Returns:
            True if all checks passed
        """
        for result in self.results:
            if not result.passed:
                if result.severity == CheckSeverity.ERROR:
                    return False
                if include_warnings and result.severity == CheckSeverity.WARNING:
                    return False
        return True

    def get_summary(self) -> str:
        """Get a summary of all check results."""
        passed_count = sum(1 for r in self.results if r.passed)

        lines = [f"Data Quality Report for {self.table_name}", "=" * 50]
        lines.append(f"Total rows: {self.total_count}")
        lines.append("")
        lines.append(f"Checks passed: {passed_count}/{len(self.results)}")
        lines.append("")
        lines.extend(str(result) for result in self.results)

        return "\n".join(lines)

    def log_results(self):
        """Log all results using the logging module."""
        logger.info(f"Data Quality Results for {self.table_name}")

        for result in self.results:
            if result.passed:
                logger.info(str(result))
            elif result.severity == CheckSeverity.WARNING:
                logger.warning(str(result))
            else:
                logger.error(str(result))

    def raise_for_failures(self, include_warnings: bool = False) -> None:
        """Raise DataQualityError if any ERROR check (or WARNING, if asked) failed."""
        if not self.all_passed(include_warnings=include_warnings):
            raise DataQualityError(self.get_summary())


def validate_date_partitions(df: DataFrame, table_name: str = "unknown") -> DataQualityValidator:
    """Run the year/month/day partition checks used before saving a date-partitioned table."""
    validator = DataQualityValidator(df, table_name)

    validator.check_not_null(["year", "month", "day"])

    if all(c in df.columns for c in ("year", "month", "day")):
        validator.check_range("month", min_value=1, max_value=12)
        validator.check_range("day", min_value=1, max_value=31)
        validator.check_range("year", min_value=1, max_value=9999)

    validator.check_row_count(min_count=1, severity=CheckSeverity.WARNING)

    return validator
