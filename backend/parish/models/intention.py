from __future__ import annotations

import enum

from sqlalchemy import Boolean, Column, Date, DateTime, Enum, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship

from parish.db import Base


class IntentionType(str, enum.Enum):
    DECEASED = "DECEASED"
    SICK = "SICK"
    THANKSGIVING = "THANKSGIVING"
    SPECIAL_NEED = "SPECIAL_NEED"
    ANNIVERSARY = "ANNIVERSARY"
    BIRTHDAY = "BIRTHDAY"
    PATRON_SAINT = "PATRON_SAINT"
    OTHER = "OTHER"


class Intention(Base):
    __tablename__ = "intentions"

    id = Column(Integer, primary_key=True, index=True)
    intention_type = Column(Enum(IntentionType, name="intention_type"), nullable=False, index=True)
    intention_text = Column(String(1000), nullable=False)
    requested_date = Column(Date, nullable=False, index=True)
    is_paid = Column(Boolean, nullable=False, default=True)
    offering_amount = Column(Numeric(10, 2), nullable=True)

    mass_id = Column(Integer, ForeignKey("masses.event_id"), nullable=True, index=True)

    # requestor: a registered faithful XOR a free-text name
    faithful_id = Column(Integer, ForeignKey("faithfuls.id"), nullable=True, index=True)
    external_faithful_name = Column(String(150), nullable=True)

    created_at = Column(DateTime, nullable=False)

    faithful = relationship("Faithful", lazy="joined")
    mass = relationship("Mass", lazy="joined")

    def stamp(self, now) -> None:
        if self.created_at is None:
            self.created_at = now
        if self.requested_date is None:
            self.requested_date = now.date()
