# parish/models/event.py
"""Events and their Mass extension.

An Event row carries a `category` tag. Rows tagged MASS own exactly one row
in `masses` (keyed by the event id) holding the Mass-only fields; there is
no class inheritance between the two.
"""
from __future__ import annotations

import enum
from datetime import date
from typing import List, Optional

from sqlalchemy import Boolean, Column, Date, Enum, ForeignKey, Integer, String, Table, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from parish.db import Base
from parish.models.mixins import TimestampedMixin
from parish.models.priest import Priest


class EventCategory(str, enum.Enum):
    GENERAL = "GENERAL"
    MASS = "MASS"


class EventType(str, enum.Enum):
    MASS = "MASS"
    FEAST = "FEAST"
    RETREAT = "RETREAT"
    MEETING = "MEETING"
    PILGRIMAGE = "PILGRIMAGE"
    CELEBRATION = "CELEBRATION"
    OTHER = "OTHER"


class MassType(str, enum.Enum):
    SUNDAY = "SUNDAY"
    WEEKDAY = "WEEKDAY"
    SOLEMNITY = "SOLEMNITY"
    FEAST = "FEAST"
    MEMORIAL = "MEMORIAL"
    FUNERAL = "FUNERAL"
    WEDDING = "WEDDING"
    SPECIAL = "SPECIAL"


class LiturgicalSeason(str, enum.Enum):
    ADVENT = "ADVENT"
    CHRISTMAS = "CHRISTMAS"
    ORDINARY_TIME = "ORDINARY_TIME"
    LENT = "LENT"
    EASTER_TRIDUUM = "EASTER_TRIDUUM"
    EASTER = "EASTER"


# composite PK: a priest concelebrates a given Mass at most once
mass_concelebrants = Table(
    "mass_concelebrants",
    Base.metadata,
    Column("mass_id", Integer, ForeignKey("masses.event_id"), primary_key=True),
    Column("priest_id", Integer, ForeignKey("priests.id"), primary_key=True),
)


class Event(TimestampedMixin, Base):
    __tablename__ = "events"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    title: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(String(2000), nullable=True)
    event_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True, index=True)
    location: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    event_type: Mapped[Optional[EventType]] = mapped_column(Enum(EventType, name="event_type"), nullable=True)
    category: Mapped[EventCategory] = mapped_column(
        Enum(EventCategory, name="event_category"), nullable=False, default=EventCategory.GENERAL
    )
    image_url: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    is_public: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    def __repr__(self) -> str:
        return f"<Event id={self.id} title={self.title!r} date={self.event_date} category={self.category}>"


class Mass(Base):
    __tablename__ = "masses"

    event_id: Mapped[int] = mapped_column(Integer, ForeignKey("events.id"), primary_key=True)
    mass_type: Mapped[MassType] = mapped_column(Enum(MassType, name="mass_type"), nullable=False, index=True)
    liturgical_season: Mapped[Optional[LiturgicalSeason]] = mapped_column(
        Enum(LiturgicalSeason, name="liturgical_season"), nullable=True
    )
    readings: Mapped[Optional[str]] = mapped_column(Text(), nullable=True)
    main_celebrant_id: Mapped[int] = mapped_column(Integer, ForeignKey("priests.id"), nullable=False, index=True)

    event: Mapped[Event] = relationship(Event, lazy="joined")
    main_celebrant: Mapped[Priest] = relationship(Priest, lazy="joined")
    concelebrants: Mapped[List[Priest]] = relationship(
        Priest, secondary=mass_concelebrants, lazy="selectin", order_by=Priest.id
    )
    intentions = relationship(
        "Intention",
        primaryjoin="Mass.event_id == foreign(Intention.mass_id)",
        lazy="selectin",
        order_by="Intention.id",
        viewonly=True,
    )

    @property
    def id(self) -> int:
        return self.event_id

    def __repr__(self) -> str:
        return f"<Mass id={self.event_id} type={self.mass_type} celebrant={self.main_celebrant_id}>"
