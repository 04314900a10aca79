# parish/repositories/events.py
"""Queries over general (non-Mass) events."""
from __future__ import annotations

from datetime import date
from typing import List, Optional, Union

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from parish.models.event import Event, EventCategory, EventType

GENERAL = Event.category == EventCategory.GENERAL


def get(db: Session, event_id: int) -> Optional[Event]:
    ev = db.get(Event, event_id)
    return ev if ev is not None and ev.category == EventCategory.GENERAL else None


def list_all(db: Session) -> List[Event]:
    return _many(db)


def save(db: Session, event: Event) -> Event:
    db.add(event)
    db.flush()
    return event


def delete(db: Session, event: Union[Event, int]) -> None:
    obj = get(db, event) if isinstance(event, int) else event
    if obj is not None:
        db.delete(obj)
        db.flush()


def exists(db: Session, event_id: int) -> bool:
    return get(db, event_id) is not None


def _many(db: Session, *criteria) -> List[Event]:
    stmt = select(Event).where(GENERAL, *criteria).order_by(Event.event_date, Event.id)
    return list(db.execute(stmt).scalars().all())


def find_by_date_range(db: Session, start: date, end: date) -> List[Event]:
    return _many(db, Event.event_date.between(start, end))


def find_by_type(db: Session, event_type: EventType) -> List[Event]:
    return _many(db, Event.event_type == event_type)


def find_public(db: Session) -> List[Event]:
    return _many(db, Event.is_public.is_(True))


def find_by_year(db: Session, year: int) -> List[Event]:
    return _many(db, func.extract("year", Event.event_date) == year)


def find_by_month_and_year(db: Session, month: int, year: int) -> List[Event]:
    return _many(
        db,
        func.extract("month", Event.event_date) == month,
        func.extract("year", Event.event_date) == year,
    )


def count_in_period(db: Session, start: date, end: date) -> int:
    stmt = select(func.count(Event.id)).where(GENERAL, Event.event_date.between(start, end))
    return int(db.execute(stmt).scalar_one())
