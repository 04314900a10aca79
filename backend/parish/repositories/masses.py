# parish/repositories/masses.py
"""Queries over Masses.

A Mass is an `events` row tagged MASS plus its `masses` extension row; every
date filter here runs against the shared `events.event_date`.
"""
from __future__ import annotations

from datetime import date
from typing import List, Optional, Tuple, Union

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from parish.models.event import Event, Mass, MassType, mass_concelebrants
from parish.models.priest import Priest


def get(db: Session, mass_id: int) -> Optional[Mass]:
    return db.get(Mass, mass_id)


def list_all(db: Session) -> List[Mass]:
    return _many(db)


def save(db: Session, mass: Mass) -> Mass:
    """Insert or update; the event row is flushed first so the Mass can share its id."""
    event = mass.event
    if event.id is None:
        db.add(event)
        db.flush()
        mass.event_id = event.id
    db.add(mass)
    db.flush()
    return mass


def delete(db: Session, mass: Union[Mass, int]) -> None:
    obj = get(db, mass) if isinstance(mass, int) else mass
    if obj is None:
        return
    event = obj.event
    # concelebrant link rows go with the Mass through the secondary table
    db.delete(obj)
    db.flush()
    db.delete(event)
    db.flush()


def exists(db: Session, mass_id: int) -> bool:
    return db.execute(select(Mass.event_id).where(Mass.event_id == mass_id)).first() is not None


def _many(db: Session, *criteria) -> List[Mass]:
    stmt = (
        select(Mass)
        .join(Event, Event.id == Mass.event_id)
        .where(*criteria)
        .order_by(Event.event_date, Mass.event_id)
    )
    return list(db.execute(stmt).scalars().unique().all())


def _in_period(start: date, end: date):
    return Event.event_date.between(start, end)


# ─────────────────────────────────────────────────────────────────────────────
# Named filters
# ─────────────────────────────────────────────────────────────────────────────

def find_by_date_range(db: Session, start: date, end: date) -> List[Mass]:
    return _many(db, _in_period(start, end))


def find_by_mass_type(db: Session, mass_type: MassType) -> List[Mass]:
    return _many(db, Mass.mass_type == mass_type)


def find_by_main_celebrant(db: Session, priest_id: int) -> List[Mass]:
    return _many(db, Mass.main_celebrant_id == priest_id)


# ─────────────────────────────────────────────────────────────────────────────
# Counts & rankings
# ─────────────────────────────────────────────────────────────────────────────

def count_in_period(db: Session, start: date, end: date) -> int:
    stmt = (
        select(func.count(Mass.event_id))
        .join(Event, Event.id == Mass.event_id)
        .where(_in_period(start, end))
    )
    return int(db.execute(stmt).scalar_one())


def count_by_celebrant_in_period(db: Session, priest_id: int, start: date, end: date) -> int:
    stmt = (
        select(func.count(Mass.event_id))
        .join(Event, Event.id == Mass.event_id)
        .where(Mass.main_celebrant_id == priest_id, _in_period(start, end))
    )
    return int(db.execute(stmt).scalar_one())


def count_by_type_in_period(db: Session, start: date, end: date) -> List[Tuple[MassType, int]]:
    stmt = (
        select(Mass.mass_type, func.count(Mass.event_id))
        .join(Event, Event.id == Mass.event_id)
        .where(_in_period(start, end))
        .group_by(Mass.mass_type)
    )
    return [(t, int(n)) for t, n in db.execute(stmt).all()]


def count_by_year(db: Session) -> List[Tuple[int, int]]:
    year = func.extract("year", Event.event_date)
    stmt = (
        select(year, func.count(Mass.event_id))
        .join(Event, Event.id == Mass.event_id)
        .where(Event.event_date.isnot(None))
        .group_by(year)
        .order_by(year)
    )
    return [(int(y), int(n)) for y, n in db.execute(stmt).all()]


def celebrant_ranking_in_period(db: Session, start: date, end: date) -> List[Tuple[Priest, int]]:
    """(priest, masses as main celebrant) in the period, busiest first."""
    n = func.count(Mass.event_id).label("mass_count")
    stmt = (
        select(Priest, n)
        .join(Mass, Mass.main_celebrant_id == Priest.id)
        .join(Event, Event.id == Mass.event_id)
        .where(_in_period(start, end))
        .group_by(Priest.id)
        .order_by(n.desc(), Priest.id)
    )
    return [(p, int(c)) for p, c in db.execute(stmt).all()]


def celebrant_ranking(db: Session) -> List[Tuple[int, int]]:
    """(priest id, masses as main celebrant) across all time, busiest first."""
    n = func.count(Mass.event_id).label("mass_count")
    stmt = (
        select(Mass.main_celebrant_id, n)
        .group_by(Mass.main_celebrant_id)
        .order_by(n.desc(), Mass.main_celebrant_id)
    )
    return [(int(pid), int(c)) for pid, c in db.execute(stmt).all()]
