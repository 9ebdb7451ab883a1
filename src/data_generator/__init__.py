"""Data generator package for creating sample event data."""

from .generator import EventDataGenerator
from .schemas import Event, EventType

__all__ = [
    "EventDataGenerator",
    "Event",
    "EventType",
]
