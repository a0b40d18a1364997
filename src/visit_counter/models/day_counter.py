"""Daily visit counter model."""

from sqlalchemy import CheckConstraint, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class DayCounter(Base):
    """Persistent visit counter for one calendar day.

    Rows are created by the first visit of a day and only ever incremented
    afterwards. Nothing in the service deletes them.
    """

    __tablename__ = "visits"
    __table_args__ = (
        UniqueConstraint("date_key", name="uq_visits_date_key"),
        CheckConstraint("count >= 0", name="ck_visits_count_non_negative"),
    )

    # YYYY-MM-DD
    date_key: Mapped[str] = mapped_column(String(10), nullable=False, index=True)
    count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    def __repr__(self) -> str:
        return f"<DayCounter(date_key='{self.date_key}', count={self.count})>"
