"""
Pytest configuration and shared fixtures.

The Spark session is created once per test session; tests that only
exercise pure Python (dates, predicate compilation, table config) do not
request it and run without a JVM.
"""

import sys
import pytest
from datetime import date, timedelta
from pathlib import Path

# Add repo root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))


@pytest.fixture(scope="session")
def spark():
    """
    Create a Spark session for testing.

    scope="session" means this fixture is created once per test session,
    not once per test. This is more efficient for Spark.
    """
    from pyspark.sql import SparkSession

    spark = (SparkSession.builder
             .appName("TestSession")
             .master("local[2]")
             .config("spark.sql.shuffle.partitions", "2")
             .config("spark.sql.sources.partitionOverwriteMode", "dynamic")
             .config("spark.driver.memory", "2g")
             .getOrCreate())

    yield spark

    # Cleanup after all tests
    spark.stop()


@pytest.fixture
def sample_daily_rows():
    """One row per day from 2018-11-01 to 2019-02-28, with year/month/day columns."""
    rows = []
    current = date(2018, 11, 1)
    while current <= date(2019, 2, 28):
        rows.append({
            "event_id": f"EVT-{current:%Y%m%d}",
            "amount": float(current.day),
            "year": current.year,
            "month": current.month,
            "day": current.day,
        })
        current += timedelta(days=1)
    return rows


@pytest.fixture
def daily_df(spark, sample_daily_rows):
    """DataFrame of sample_daily_rows."""
    return spark.createDataFrame(sample_daily_rows)


@pytest.fixture
def warehouse_dir(tmp_path):
    """Empty directory to hold tables written by a test."""
    warehouse = tmp_path / "warehouse"
    warehouse.mkdir()
    return warehouse
