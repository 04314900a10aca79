# parish/models/donation.py
"""Financial contributions (tithes, offerings, special collections)."""
from __future__ import annotations

from sqlalchemy import CheckConstraint, Column, Date, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship

from parish.db import Base
from parish.models.mixins import TimestampedMixin


class Donation(TimestampedMixin, Base):
    __tablename__ = "donations"

    id = Column(Integer, primary_key=True, index=True)

    faithful_id = Column(Integer, ForeignKey("faithfuls.id"), nullable=False, index=True)

    # year the contribution is designated for (e.g. 2024 annual tithe)
    year = Column(Integer, nullable=False, index=True)
    amount = Column(Numeric(10, 2), nullable=False)
    date = Column(Date, nullable=False)

    # free-text categories: TITHE, OFFERING, ... / CASH, MOBILE_MONEY, ...
    contribution_type = Column(String(50), nullable=True)
    payment_method = Column(String(50), nullable=True)
    reference_number = Column(String(100), nullable=True)

    notes = Column(String(500), nullable=True)
    recorded_by = Column(String(100), nullable=True)

    # always loaded for display
    faithful = relationship("Faithful", lazy="joined")

    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_donations_amount_positive"),
        CheckConstraint("year BETWEEN 1900 AND 2100", name="ck_donations_year_range"),
    )

    def __repr__(self) -> str:  # pragma: no cover
        return (
            f"<Donation(id={self.id}, faithful_id={self.faithful_id}, year={self.year}, "
            f"amount={self.amount})>"
        )
