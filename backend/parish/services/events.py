# parish/services/events.py
from __future__ import annotations

import logging
from datetime import date
from typing import List

from sqlalchemy.orm import Session

from parish.dependencies import Clock
from parish.exceptions import NotFoundError, ValidationFailedError
from parish.mappers import event_to_read
from parish.models.event import Event, EventCategory, EventType
from parish.repositories import events as repo
from parish.schemas.event import EventCreate, EventRead

logger = logging.getLogger(__name__)

_WRITABLE = tuple(EventCreate.model_fields)


def _require(db: Session, event_id: int) -> Event:
    event = repo.get(db, event_id)
    if event is None:
        raise NotFoundError(f"Event not found with ID: {event_id}")
    return event


def _check_type(payload: EventCreate) -> None:
    # Masses are created through the Mass endpoints, which record the celebrants
    if payload.event_type == EventType.MASS:
        raise ValidationFailedError(
            "Use the Mass endpoints to schedule a Mass",
            field_errors={"event_type": "MASS events must be created as Masses"},
        )


def create(db: Session, payload: EventCreate, clock: Clock) -> EventRead:
    _check_type(payload)
    event = Event(category=EventCategory.GENERAL)
    for name in _WRITABLE:
        setattr(event, name, getattr(payload, name))
    event.touch(clock())
    try:
        repo.save(db, event)
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(event)
    logger.info("Event %s created: %s on %s", event.id, event.title, event.event_date)
    return event_to_read(event)


def get(db: Session, event_id: int) -> EventRead:
    return event_to_read(_require(db, event_id))


def list_all(db: Session) -> List[EventRead]:
    return [event_to_read(e) for e in repo.list_all(db)]


def update(db: Session, event_id: int, payload: EventCreate, clock: Clock) -> EventRead:
    event = _require(db, event_id)
    _check_type(payload)
    try:
        for name in _WRITABLE:
            setattr(event, name, getattr(payload, name))
        event.touch(clock())
        repo.save(db, event)
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(event)
    logger.info("Event %s updated", event_id)
    return event_to_read(event)


def delete(db: Session, event_id: int) -> None:
    event = _require(db, event_id)
    try:
        repo.delete(db, event)
        db.commit()
    except Exception:
        db.rollback()
        raise
    logger.info("Event %s deleted", event_id)


def by_date_range(db: Session, start: date, end: date) -> List[EventRead]:
    if end < start:
        raise ValidationFailedError("End date must be after start date")
    return [event_to_read(e) for e in repo.find_by_date_range(db, start, end)]


def by_type(db: Session, event_type: EventType) -> List[EventRead]:
    return [event_to_read(e) for e in repo.find_by_type(db, event_type)]


def public(db: Session) -> List[EventRead]:
    return [event_to_read(e) for e in repo.find_public(db)]


def by_year(db: Session, year: int) -> List[EventRead]:
    return [event_to_read(e) for e in repo.find_by_year(db, year)]


def by_month(db: Session, year: int, month: int) -> List[EventRead]:
    if not 1 <= month <= 12:
        raise ValidationFailedError("Month must be between 1 and 12", field_errors={"month": "must be 1-12"})
    return [event_to_read(e) for e in repo.find_by_month_and_year(db, month, year)]
