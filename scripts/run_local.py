"""
Run the date-partitioned table flow locally

Generates sample events, saves them as a year/month/day partitioned
parquet table and loads a date range back, printing the SQL filter used.
Useful for checking a date range filter against real partition pruning
before using it in a job.

Usage:
    python scripts/run_local.py --start 2018-11-15 --end 2019-02-10
    python scripts/run_local.py --start 2019-03-01 --data-path data --events 5000
    python scripts/run_local.py --start 2019-03-01 --end 2019-03-07 --skip-generate
"""

import os
import sys
import logging
from pathlib import Path

import click

# Add repo root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.data_generator import EventDataGenerator
from src.functions import exact_date_range_to_sql, normalize, nvl, parse_date
from src.quality import validate_date_partitions
from src.tables import DATE_PARTITION_COLUMNS, Table, load, save, table_exists
from src.utils import get_spark_session

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@click.command()
@click.option('--start', required=True, help='First date to load (yyyy-mm-dd)')
@click.option('--end', default=None, help='Last date to load (yyyy-mm-dd), defaults to --start')
@click.option('--data-path', default='data', help='Base path for the table')
@click.option('--events', default=1000, help='Number of events to generate')
@click.option('--skip-generate', is_flag=True, help='Reuse the existing table')
def main(start, end, data_path, events, skip_generate):
    """Save sample events and load a date range back."""
    end = end or start
    table = Table(name="events", base_path=os.path.join(data_path, "warehouse"),
                  partitioning=DATE_PARTITION_COLUMNS)

    logger.info(f"Filter for {start} .. {end}: {exact_date_range_to_sql(start, end)}")

    logger.info("Initializing Spark session...")
    spark = get_spark_session("SparkFunctions-Local", master="local[*]")

    try:
        if not skip_generate:
            lo, hi = normalize(parse_date(start), parse_date(end))
            generator = EventDataGenerator(
                num_events=events,
                start_date=lo.to_date().replace(month=1, day=1),
                end_date=hi.to_date().replace(month=12, day=31),
                seed=42,
            )
            generator.generate()
            df = generator.to_dataframe(spark)

            validator = validate_date_partitions(df, table.name)
            validator.log_results()
            validator.raise_for_failures()

            save(df, table)
        elif not table_exists(table):
            raise click.ClickException(f"No table at {table.full_path}, run without --skip-generate")

        loaded = load(spark, table, start, end)
        logger.info(f"Loaded {loaded.count()} events between {start} and {end}")

        (loaded
         .groupBy("year", "month")
         .agg({"*": "count"})
         .orderBy("year", "month")
         .show(50))

        loaded.select(nvl("amount", 0.0).alias("amount")).groupBy().sum("amount").show()
    finally:
        spark.stop()


if __name__ == "__main__":
    main()
