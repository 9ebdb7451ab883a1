"""
Schema of the sample event dataset.

Events are partitioned by year/month/day, the layout the date-range
filters in src.functions.predicates are written for. The Spark schema
is derived from the Event model with schema_for().
"""

from datetime import date
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field, model_validator


class EventType(str, Enum):
    """Kinds of user events."""
    PAGE_VIEW = "page_view"
    SEARCH = "search"
    ADD_TO_CART = "add_to_cart"
    PURCHASE = "purchase"
    REFUND = "refund"


class Event(BaseModel):
    """
    A single user event.

    year, month and day repeat event_date so the table can be
    partitioned on integer columns.
    """
    event_id: str = Field(..., description="Unique identifier for the event")
    user_id: str = Field(..., description="User who triggered the event")
    event_type: EventType = Field(..., description="What happened")
    amount: Optional[float] = Field(None, ge=0, description="Money involved, purchases and refunds only")
    event_date: date = Field(..., description="Calendar date of the event")
    year: int = Field(..., ge=1, le=9999)
    month: int = Field(..., ge=1, le=12)
    day: int = Field(..., ge=1, le=31)

    @model_validator(mode="after")
    def partition_columns_match_date(self):
        if (self.year, self.month, self.day) != (
                self.event_date.year, self.event_date.month, self.event_date.day):
            raise ValueError(
                f"year/month/day ({self.year}, {self.month}, {self.day}) "
                f"do not match event_date {self.event_date}"
            )
        return self

    def to_row(self) -> dict:
        """Plain dict with the enum flattened to its value."""
        row = self.model_dump()
        row["event_type"] = self.event_type.value
        return row
