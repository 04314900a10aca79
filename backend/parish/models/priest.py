from __future__ import annotations

import enum

from sqlalchemy import Boolean, Column, Date, Enum, Integer, String

from parish.db import Base
from parish.models.mixins import TimestampedMixin


class PriestType(str, enum.Enum):
    DIOCESAN = "DIOCESAN"
    RELIGIOUS = "RELIGIOUS"  # religious order (Jesuit, Franciscan, ...)
    EXTERN = "EXTERN"  # priest from another parish
    RETIRED = "RETIRED"
    BISHOP = "BISHOP"
    DEACON = "DEACON"
    SEMINARIAN = "SEMINARIAN"


class Priest(TimestampedMixin, Base):
    __tablename__ = "priests"

    # assigned by the diocese, never generated here
    id = Column(Integer, primary_key=True, autoincrement=False)
    names = Column(String(150), nullable=False)
    priest_type = Column(Enum(PriestType, name="priest_type"), nullable=False, index=True)
    ordination_date = Column(Date, nullable=True)
    birth_date = Column(Date, nullable=True)
    parish_of_origin = Column(String(100), nullable=True)
    email = Column(String(120), unique=True, nullable=True)
    phone = Column(String(50), nullable=True)
    profile_picture_url = Column(String(255), nullable=True)
    is_assigned = Column(Boolean, nullable=False, default=False)
    is_active = Column(Boolean, nullable=False, default=True)

    def __repr__(self) -> str:  # pragma: no cover
        return f"<Priest(id={self.id}, names={self.names!r}, type={self.priest_type})>"
