from __future__ import annotations

from datetime import datetime

from sqlalchemy import Column, DateTime


class TimestampedMixin:
    """`created_at` / `updated_at` columns stamped from an injected clock."""

    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=True)

    def touch(self, now: datetime) -> None:
        # creation time is kept once set; update time always moves
        if self.created_at is None:
            self.created_at = now
        self.updated_at = now
