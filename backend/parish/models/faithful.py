# parish/models/faithful.py
"""SQLAlchemy models for the Faithful registry and its owned children.

Ministry and LapseEvent rows hold only `faithful_id`; the Faithful exposes
one-directional collections for loading. Deleting children is an explicit
service step (see `parish.repositories.faithful`), never an ORM cascade.
"""
from __future__ import annotations

from sqlalchemy import Boolean, Column, Date, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from parish.db import Base
from parish.models.mixins import TimestampedMixin


class Faithful(TimestampedMixin, Base):
    __tablename__ = "faithfuls"

    id = Column(Integer, primary_key=True, index=True)

    # --- identity ---------------------------------------------------------
    firstname = Column(String(100), nullable=True)
    name = Column(String(100), nullable=False, index=True)
    father_name = Column(String(100), nullable=True)
    mother_name = Column(String(100), nullable=True)
    godparent_name = Column(String(100), nullable=True)
    date_of_birth = Column(Date, nullable=True)

    # --- sacraments -------------------------------------------------------
    date_of_baptism = Column(Date, nullable=True)
    baptism_id = Column(String(50), unique=True, nullable=True)
    baptism_minister = Column(String(100), nullable=True)

    date_of_first_communion = Column(Date, nullable=True)

    date_of_confirmation = Column(Date, nullable=True)
    confirmation_id = Column(String(50), unique=True, nullable=True)

    date_of_matrimony = Column(Date, nullable=True)
    matrimony_id = Column(String(50), unique=True, nullable=True)
    spouse_name = Column(String(100), nullable=True)
    spouse_baptism_id = Column(String(50), nullable=True)

    # --- ordination -------------------------------------------------------
    diaconate = Column(Boolean, nullable=False, default=False)
    diaconate_date = Column(Date, nullable=True)
    priesthood = Column(Boolean, nullable=False, default=False)
    priesthood_date = Column(Date, nullable=True)
    episcopate = Column(Boolean, nullable=False, default=False)
    episcopate_date = Column(Date, nullable=True)

    # --- religious profession ---------------------------------------------
    congregation_name = Column(String(100), nullable=True)
    temporal_profession = Column(Boolean, nullable=False, default=False)
    temporal_profession_date = Column(Date, nullable=True)
    permanent_profession = Column(Boolean, nullable=False, default=False)
    permanent_profession_date = Column(Date, nullable=True)

    other_ministry_details = Column(String(255), nullable=True)

    # --- relocation & death -----------------------------------------------
    has_relocated = Column(Boolean, nullable=False, default=False)
    new_parish_name = Column(String(100), nullable=True)
    is_deceased = Column(Boolean, nullable=False, default=False)
    date_of_death = Column(Date, nullable=True)

    # --- territory: diocese > parish > subparish > BEC --------------------
    diocese = Column(String(50), nullable=True)
    parish = Column(String(100), nullable=True, index=True)
    subparish = Column(String(100), nullable=True, index=True)
    basic_ecclesial_community = Column(String(100), nullable=True)

    ministries = relationship(
        "Ministry",
        lazy="selectin",
        order_by="Ministry.id",
        viewonly=True,
    )
    lapse_events = relationship(
        "LapseEvent",
        lazy="selectin",
        order_by="LapseEvent.id",
        viewonly=True,
    )

    @property
    def has_all_sacraments(self) -> bool:
        return (
            self.date_of_baptism is not None
            and self.date_of_first_communion is not None
            and self.date_of_confirmation is not None
        )

    def __repr__(self) -> str:  # pragma: no cover
        return f"<Faithful(id={self.id}, name={self.name!r}, baptism_id={self.baptism_id!r})>"


class Ministry(Base):
    __tablename__ = "ministries"

    id = Column(Integer, primary_key=True, index=True)
    # e.g. 'lector', 'catechist', 'choir_member'
    ministry_type = Column(String(50), nullable=False)
    faithful_id = Column(Integer, ForeignKey("faithfuls.id"), nullable=False, index=True)


class LapseEvent(Base):
    __tablename__ = "lapse_events"

    id = Column(Integer, primary_key=True, index=True)
    # e.g. 'irregular_union', 'divorced_remarried', 'schism'
    lapse_type = Column(String(50), nullable=False)
    lapse_date = Column(Date, nullable=True)
    lapse_reason = Column(String(500), nullable=True)
    # reconciliation / return to full communion
    return_date = Column(Date, nullable=True)
    faithful_id = Column(Integer, ForeignKey("faithfuls.id"), nullable=False, index=True)
