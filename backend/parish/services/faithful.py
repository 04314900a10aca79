# parish/services/faithful.py
from __future__ import annotations

import logging
from datetime import date
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from parish.dependencies import Clock
from parish.exceptions import DuplicateIdentifierError, NotFoundError, ValidationFailedError
from parish.mappers import (
    apply_faithful_request,
    faithful_from_request,
    faithful_to_read,
    lapse_events_from_request,
)
from parish.models.faithful import Faithful
from parish.repositories import donations as donation_repo
from parish.repositories import faithful as repo
from parish.repositories import intentions as intention_repo
from parish.schemas.faithful import FaithfulRead, FaithfulRequest

logger = logging.getLogger(__name__)

# (request field, finder, label used in the error message)
_UNIQUE_IDS = (
    ("baptism_id", repo.find_by_baptism_id, "Baptism ID"),
    ("confirmation_id", repo.find_by_confirmation_id, "Confirmation ID"),
    ("matrimony_id", repo.find_by_matrimony_id, "Matrimony ID"),
)


def _not_found(faithful_id: int) -> NotFoundError:
    return NotFoundError(f"Faithful not found with id: {faithful_id}")


def _check_unique_ids(db: Session, payload: FaithfulRequest, own_id: Optional[int] = None) -> None:
    """An absent id is unconstrained; a present one must not belong to another record."""
    for field, finder, label in _UNIQUE_IDS:
        value = getattr(payload, field)
        if value is None:
            continue
        holder = finder(db, value)
        if holder is not None and holder.id != own_id:
            raise DuplicateIdentifierError(label, value, field)


def _check_dates(payload: FaithfulRequest, today: date) -> None:
    errors = {}
    if payload.date_of_birth is not None and payload.date_of_birth >= today:
        errors["date_of_birth"] = "Date of birth must be in the past"
    if payload.date_of_baptism is not None and payload.date_of_baptism > today:
        errors["date_of_baptism"] = "Baptism date cannot be in the future"
    if errors:
        raise ValidationFailedError("Invalid faithful dates", field_errors=errors)


def _replace_children(db: Session, faithful: Faithful, payload: FaithfulRequest) -> None:
    repo.delete_ministries_for(db, faithful.id)
    repo.delete_lapse_events_for(db, faithful.id)
    repo.add_ministries(db, faithful.id, payload.ministry)
    repo.add_lapse_events(db, faithful.id, lapse_events_from_request(payload))


def _to_list(rows: List[Faithful]) -> List[FaithfulRead]:
    return [faithful_to_read(f) for f in rows]


# ─────────────────────────────────────────────────────────────────────────────
# CRUD
# ─────────────────────────────────────────────────────────────────────────────

def create(db: Session, payload: FaithfulRequest, clock: Clock) -> FaithfulRead:
    now = clock()
    _check_dates(payload, now.date())
    _check_unique_ids(db, payload)

    faithful = faithful_from_request(payload)
    faithful.touch(now)
    try:
        repo.save(db, faithful)
        _replace_children(db, faithful, payload)
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(faithful)
    logger.info("Faithful %s registered (%s)", faithful.id, faithful.name)
    return faithful_to_read(faithful)


def get(db: Session, faithful_id: int) -> FaithfulRead:
    faithful = repo.get(db, faithful_id)
    if faithful is None:
        raise _not_found(faithful_id)
    return faithful_to_read(faithful)


def list_all(db: Session) -> List[FaithfulRead]:
    return _to_list(repo.list_all(db))


def update(db: Session, faithful_id: int, payload: FaithfulRequest, clock: Clock) -> FaithfulRead:
    faithful = repo.get(db, faithful_id)
    if faithful is None:
        raise _not_found(faithful_id)
    now = clock()
    _check_dates(payload, now.date())
    _check_unique_ids(db, payload, own_id=faithful_id)

    try:
        apply_faithful_request(faithful, payload)
        faithful.touch(now)
        repo.save(db, faithful)
        _replace_children(db, faithful, payload)
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(faithful)
    logger.info("Faithful %s updated", faithful_id)
    return faithful_to_read(faithful)


def delete(db: Session, faithful_id: int) -> None:
    """Remove a record with its ministries, lapse events and donations.

    Intentions survive: they are unlinked and keep the name as free text.
    """
    faithful = repo.get(db, faithful_id)
    if faithful is None:
        raise _not_found(faithful_id)

    try:
        repo.delete_ministries_for(db, faithful_id)
        repo.delete_lapse_events_for(db, faithful_id)
        donation_repo.delete_for_faithful(db, faithful_id)
        intention_repo.detach_faithful(db, faithful_id, faithful.name)
        repo.delete(db, faithful)
        db.commit()
    except Exception:
        db.rollback()
        raise
    logger.info("Faithful %s deleted", faithful_id)


# ─────────────────────────────────────────────────────────────────────────────
# Searches
# ─────────────────────────────────────────────────────────────────────────────

def find_by_name(db: Session, name: str) -> List[FaithfulRead]:
    return _to_list(repo.find_by_name(db, name))


def search_by_name(db: Session, term: str) -> List[FaithfulRead]:
    logger.debug("Searching faithful by name %r", term)
    return _to_list(repo.search_by_name(db, term))


def find_by_parish(db: Session, parish: str) -> List[FaithfulRead]:
    return _to_list(repo.find_by_parish(db, parish))


def find_by_subparish(db: Session, subparish: str) -> List[FaithfulRead]:
    return _to_list(repo.find_by_subparish(db, subparish))


def find_by_basic_ecclesial_community(db: Session, community: str) -> List[FaithfulRead]:
    return _to_list(repo.find_by_basic_ecclesial_community(db, community))


def _by_sacrament_id(finder, db: Session, value: str, label: str) -> FaithfulRead:
    faithful = finder(db, value)
    if faithful is None:
        raise NotFoundError(f"No faithful found with {label}: {value}")
    return faithful_to_read(faithful)


def find_by_baptism_id(db: Session, baptism_id: str) -> FaithfulRead:
    return _by_sacrament_id(repo.find_by_baptism_id, db, baptism_id, "baptism ID")


def find_by_confirmation_id(db: Session, confirmation_id: str) -> FaithfulRead:
    return _by_sacrament_id(repo.find_by_confirmation_id, db, confirmation_id, "confirmation ID")


def find_by_matrimony_id(db: Session, matrimony_id: str) -> FaithfulRead:
    return _by_sacrament_id(repo.find_by_matrimony_id, db, matrimony_id, "matrimony ID")


def born_between(db: Session, start: date, end: date) -> List[FaithfulRead]:
    if end < start:
        raise ValidationFailedError("End date must be after start date")
    return _to_list(repo.find_born_between(db, start, end))


def relocated(db: Session) -> List[FaithfulRead]:
    return _to_list(repo.find_by_relocated(db, True))


def deceased(db: Session) -> List[FaithfulRead]:
    return _to_list(repo.find_by_deceased(db, True))


def with_all_sacraments(db: Session) -> List[FaithfulRead]:
    return _to_list(repo.find_with_all_sacraments(db))


# ─────────────────────────────────────────────────────────────────────────────
# Counts
# ─────────────────────────────────────────────────────────────────────────────

def count_all(db: Session) -> int:
    return repo.count_all(db)


def count_in_parish(db: Session, parish: str) -> int:
    return repo.count_in_parish(db, parish)


def _as_dict(rows) -> Dict[str, int]:
    # rows without a territory are reported under "Unspecified"
    out: Dict[str, int] = {}
    for key, n in rows:
        label = key if key else "Unspecified"
        out[label] = out.get(label, 0) + n
    return out


def counts_by_parish(db: Session) -> Dict[str, int]:
    return _as_dict(repo.count_by_parish(db))


def counts_by_subparish(db: Session) -> Dict[str, int]:
    return _as_dict(repo.count_by_subparish(db))


def counts_by_basic_ecclesial_community(db: Session) -> Dict[str, int]:
    return _as_dict(repo.count_by_basic_ecclesial_community(db))
