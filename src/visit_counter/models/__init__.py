"""Database models for the visit counter."""

from .base import Base
from .day_counter import DayCounter

__all__ = [
    "Base",
    "DayCounter",
]
