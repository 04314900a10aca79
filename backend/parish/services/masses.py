# parish/services/masses.py
from __future__ import annotations

import logging
from datetime import date
from typing import List

from sqlalchemy.orm import Session

from parish.dependencies import Clock
from parish.exceptions import NotFoundError, ValidationFailedError
from parish.mappers import mass_to_list_item, mass_to_read
from parish.models.event import Event, EventCategory, EventType, Mass, MassType
from parish.models.priest import Priest
from parish.repositories import intentions as intention_repo
from parish.repositories import masses as repo
from parish.repositories import priests as priest_repo
from parish.schemas.event import MassListItem, MassRead, MassRequest

logger = logging.getLogger(__name__)


def _not_found(mass_id: int) -> NotFoundError:
    return NotFoundError(f"Mass not found with ID: {mass_id}")


def _validate_request(payload: MassRequest) -> None:
    errors = []
    ids = payload.concelebrant_ids
    if payload.main_celebrant_id in ids:
        errors.append("Main celebrant cannot also be a concelebrant")
    if len(set(ids)) != len(ids):
        errors.append("Duplicate concelebrants are not allowed")
    if errors:
        raise ValidationFailedError("Mass validation failed: " + ", ".join(errors))


def validate_date_range(start: date, end: date) -> None:
    if end < start:
        raise ValidationFailedError("End date must be after start date")


def _resolve_main_celebrant(db: Session, priest_id: int) -> Priest:
    priest = priest_repo.get(db, priest_id)
    if priest is None:
        raise NotFoundError(f"Main celebrant not found with ID: {priest_id}")
    return priest


def _resolve_concelebrants(db: Session, ids: List[int]) -> List[Priest]:
    priests = priest_repo.find_many(db, ids)
    if len(priests) != len(ids):
        raise NotFoundError("One or more concelebrants not found")
    return priests


def _default_title(payload: MassRequest) -> str:
    label = payload.mass_type.value.replace("_", " ").title()
    return f"{label} Mass"


def _apply_event_fields(event: Event, payload: MassRequest) -> None:
    event.title = payload.title or _default_title(payload)
    event.description = payload.description
    event.event_date = payload.mass_date
    event.location = payload.location
    event.is_public = payload.is_public
    event.event_type = EventType.MASS
    event.category = EventCategory.MASS


def _apply_mass_fields(mass: Mass, payload: MassRequest) -> None:
    mass.mass_type = payload.mass_type
    mass.liturgical_season = payload.liturgical_season
    mass.readings = payload.readings


# ─────────────────────────────────────────────────────────────────────────────
# CRUD
# ─────────────────────────────────────────────────────────────────────────────

def create(db: Session, payload: MassRequest, clock: Clock) -> MassRead:
    logger.info("Creating new mass of type %s on %s", payload.mass_type.value, payload.mass_date)

    _validate_request(payload)
    main = _resolve_main_celebrant(db, payload.main_celebrant_id)
    concelebrants = _resolve_concelebrants(db, payload.concelebrant_ids)

    event = Event()
    _apply_event_fields(event, payload)
    event.touch(clock())
    mass = Mass(event=event, main_celebrant=main, concelebrants=concelebrants)
    _apply_mass_fields(mass, payload)

    try:
        repo.save(db, mass)
        db.commit()
    except Exception:
        db.rollback()
        raise
    logger.info("Mass created successfully with ID: %s", mass.event_id)
    return get(db, mass.event_id)


def get(db: Session, mass_id: int) -> MassRead:
    mass = repo.get(db, mass_id)
    if mass is None:
        raise _not_found(mass_id)
    return mass_to_read(mass)


def list_all(db: Session) -> List[MassListItem]:
    return [mass_to_list_item(m) for m in repo.list_all(db)]


def update(db: Session, mass_id: int, payload: MassRequest, clock: Clock) -> MassRead:
    logger.info("Updating mass with ID: %s", mass_id)

    mass = repo.get(db, mass_id)
    if mass is None:
        raise _not_found(mass_id)
    _validate_request(payload)
    main = mass.main_celebrant
    if main.id != payload.main_celebrant_id:
        main = _resolve_main_celebrant(db, payload.main_celebrant_id)
    concelebrants = _resolve_concelebrants(db, payload.concelebrant_ids)

    try:
        mass.main_celebrant = main
        mass.concelebrants = concelebrants
        _apply_mass_fields(mass, payload)
        _apply_event_fields(mass.event, payload)
        mass.event.touch(clock())
        repo.save(db, mass)
        db.commit()
    except Exception:
        db.rollback()
        raise
    logger.info("Mass updated successfully with ID: %s", mass_id)
    return get(db, mass_id)


def delete(db: Session, mass_id: int) -> None:
    """Delete a Mass; its intentions stay on record, unscheduled."""
    logger.info("Deleting mass with ID: %s", mass_id)
    mass = repo.get(db, mass_id)
    if mass is None:
        raise _not_found(mass_id)

    try:
        intention_repo.detach_mass(db, mass_id)
        repo.delete(db, mass)
        db.commit()
    except Exception:
        db.rollback()
        raise
    logger.info("Mass deleted successfully with ID: %s", mass_id)


# ─────────────────────────────────────────────────────────────────────────────
# Queries
# ─────────────────────────────────────────────────────────────────────────────

def by_date_range(db: Session, start: date, end: date) -> List[MassListItem]:
    logger.debug("Fetching masses between %s and %s", start, end)
    validate_date_range(start, end)
    return [mass_to_list_item(m) for m in repo.find_by_date_range(db, start, end)]


def by_date(db: Session, day: date) -> List[MassListItem]:
    return [mass_to_list_item(m) for m in repo.find_by_date_range(db, day, day)]


def by_type(db: Session, mass_type: MassType) -> List[MassListItem]:
    return [mass_to_list_item(m) for m in repo.find_by_mass_type(db, mass_type)]


def by_priest(db: Session, priest_id: int) -> List[MassListItem]:
    if not priest_repo.exists(db, priest_id):
        raise NotFoundError(f"Priest not found with ID: {priest_id}")
    return [mass_to_list_item(m) for m in repo.find_by_main_celebrant(db, priest_id)]
