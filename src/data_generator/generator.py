"""
Event Data Generator

Generates sample user events spread over a date range, for trying out
partitioned saves, date-range loads and the date-range SQL filters
without real data.

Usage:
    python -m src.data_generator.generator --output data/raw --events 10000
"""

import csv
import os
import random
import uuid
from datetime import date
from typing import Dict, List, Optional

import click
from faker import Faker
from pyspark.sql import DataFrame, SparkSession
from tqdm import tqdm

from src.functions.dates import parse_date
from src.functions.schema import schema_for
from .schemas import Event, EventType

fake = Faker()

# Relative frequency of each event type
EVENT_WEIGHTS = {
    EventType.PAGE_VIEW: 60,
    EventType.SEARCH: 20,
    EventType.ADD_TO_CART: 12,
    EventType.PURCHASE: 7,
    EventType.REFUND: 1,
}


class EventDataGenerator:
    """
    Generates Event records for a pool of users.

    Attributes:
        num_events: Number of events to generate
        num_users: Number of distinct users
        start_date: First possible event date
        end_date: Last possible event date
    """

    def __init__(
        self,
        num_events: int = 1000,
        num_users: int = 100,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        seed: Optional[int] = None
    ):
        self.num_events = num_events
        self.num_users = num_users
        self.start_date = start_date or date(2018, 1, 1)
        self.end_date = end_date or date(2019, 12, 31)

        if self.end_date < self.start_date:
            raise ValueError(f"Start date ({self.start_date}) must be before end date ({self.end_date})!")

        self._random = random.Random(seed)
        if seed is not None:
            Faker.seed(seed)

        self.events: List[Event] = []
        self._user_ids: List[str] = []

    def generate(self) -> List[Event]:
        """Generate a fresh set of events; users are created first."""
        self.events = []
        self._user_ids = [fake.unique.user_name() for _ in range(self.num_users)]
        fake.unique.clear()

        event_types = list(EVENT_WEIGHTS)
        weights = list(EVENT_WEIGHTS.values())

        for _ in tqdm(range(self.num_events), desc="Events"):
            event_type = self._random.choices(event_types, weights=weights, k=1)[0]
            event_date = fake.date_between_dates(date_start=self.start_date, date_end=self.end_date)

            amount = None
            if event_type in (EventType.PURCHASE, EventType.REFUND):
                amount = round(self._random.uniform(5, 500), 2)

            self.events.append(Event(
                event_id=f"EVT-{uuid.UUID(int=self._random.getrandbits(128)).hex[:12].upper()}",
                user_id=self._random.choice(self._user_ids),
                event_type=event_type,
                amount=amount,
                event_date=event_date,
                year=event_date.year,
                month=event_date.month,
                day=event_date.day,
            ))

        return self.events

    def to_dataframe(self, spark: SparkSession) -> DataFrame:
        """Create a Spark DataFrame from the generated events."""
        schema = schema_for(Event)
        rows = [event.to_row() for event in self.events]
        return spark.createDataFrame(
            [tuple(row[field.name] for field in schema.fields) for row in rows],
            schema
        )

    def save_to_csv(self, output_dir: str) -> Dict[str, str]:
        """
        Save the generated events to a CSV file.

        Args:
            output_dir: Directory to save the CSV file in

        Returns:
            Dictionary mapping dataset name to file path
        """
        os.makedirs(output_dir, exist_ok=True)
        filepath = os.path.join(output_dir, "events.csv")

        with open(filepath, 'w', newline='', encoding='utf-8') as f:
            writer = csv.DictWriter(f, fieldnames=list(Event.model_fields))
            writer.writeheader()
            writer.writerows(event.to_row() for event in self.events)

        print(f"Saved events.csv ({len(self.events)} records)")
        return {"events": filepath}


# =============================================================================
# CLI Interface
# =============================================================================

@click.command()
@click.option('--output', '-o', default='data/raw', help='Output directory for the CSV file')
@click.option('--events', '-e', default=1000, help='Number of events to generate')
@click.option('--users', '-u', default=100, help='Number of distinct users')
@click.option('--start', default='2018-01-01', help='First event date (yyyy-mm-dd)')
@click.option('--end', default='2019-12-31', help='Last event date (yyyy-mm-dd)')
@click.option('--seed', '-s', default=42, help='Random seed for reproducibility')
def main(output: str, events: int, users: int, start: str, end: str, seed: int):
    """Generate sample event data."""
    generator = EventDataGenerator(
        num_events=events,
        num_users=users,
        start_date=parse_date(start).to_date(),
        end_date=parse_date(end).to_date(),
        seed=seed,
    )

    generator.generate()
    generator.save_to_csv(output)

    print(f"Files saved to: {os.path.abspath(output)}")


if __name__ == '__main__':
    main()
