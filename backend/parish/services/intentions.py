# parish/services/intentions.py
from __future__ import annotations

import logging
from datetime import date
from typing import List

from sqlalchemy.orm import Session

from parish.dependencies import Clock
from parish.exceptions import NotFoundError, ValidationFailedError
from parish.mappers import intention_to_list_item, intention_to_read
from parish.models.intention import Intention, IntentionType
from parish.repositories import faithful as faithful_repo
from parish.repositories import intentions as repo
from parish.repositories import masses as mass_repo
from parish.schemas.intention import IntentionListItem, IntentionRead, IntentionRequest

logger = logging.getLogger(__name__)


def _require(db: Session, intention_id: int) -> Intention:
    intention = repo.get(db, intention_id)
    if intention is None:
        raise NotFoundError(f"Intention not found with ID: {intention_id}")
    return intention


def _validate(db: Session, payload: IntentionRequest) -> None:
    has_faithful = payload.faithful_id is not None
    has_name = payload.external_faithful_name is not None
    if has_faithful == has_name:
        raise ValidationFailedError(
            "An intention needs exactly one requestor: a registered faithful or an external name",
            field_errors={
                "faithful_id": "provide either faithfulId or externalFaithfulName",
                "external_faithful_name": "provide either faithfulId or externalFaithfulName",
            },
        )
    if has_faithful and not faithful_repo.exists(db, payload.faithful_id):
        raise NotFoundError(f"Faithful not found with id: {payload.faithful_id}")
    if payload.mass_id is not None and not mass_repo.exists(db, payload.mass_id):
        raise NotFoundError(f"Mass not found with ID: {payload.mass_id}")


def _apply(intention: Intention, payload: IntentionRequest) -> None:
    intention.intention_type = payload.intention_type
    intention.intention_text = payload.intention_text
    intention.requested_date = payload.requested_date
    intention.is_paid = True if payload.is_paid is None else payload.is_paid
    intention.offering_amount = payload.offering_amount
    intention.mass_id = payload.mass_id
    intention.faithful_id = payload.faithful_id
    intention.external_faithful_name = payload.external_faithful_name


def create(db: Session, payload: IntentionRequest, clock: Clock) -> IntentionRead:
    _validate(db, payload)
    intention = Intention()
    _apply(intention, payload)
    intention.stamp(clock())
    try:
        repo.save(db, intention)
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(intention)
    logger.info("Intention %s recorded (%s)", intention.id, intention.intention_type.value)
    return intention_to_read(intention)


def get(db: Session, intention_id: int) -> IntentionRead:
    return intention_to_read(_require(db, intention_id))


def list_all(db: Session) -> List[IntentionListItem]:
    return [intention_to_list_item(i) for i in repo.list_all(db)]


def update(db: Session, intention_id: int, payload: IntentionRequest, clock: Clock) -> IntentionRead:
    intention = _require(db, intention_id)
    _validate(db, payload)
    try:
        _apply(intention, payload)
        intention.stamp(clock())
        repo.save(db, intention)
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(intention)
    logger.info("Intention %s updated", intention_id)
    return intention_to_read(intention)


def mark_paid(db: Session, intention_id: int) -> IntentionRead:
    intention = _require(db, intention_id)
    try:
        intention.is_paid = True
        repo.save(db, intention)
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(intention)
    logger.info("Intention %s marked paid", intention_id)
    return intention_to_read(intention)


def delete(db: Session, intention_id: int) -> None:
    intention = _require(db, intention_id)
    try:
        repo.delete(db, intention)
        db.commit()
    except Exception:
        db.rollback()
        raise
    logger.info("Intention %s deleted", intention_id)


def by_period(db: Session, start: date, end: date) -> List[IntentionListItem]:
    if end < start:
        raise ValidationFailedError("End date must be after start date")
    return [intention_to_list_item(i) for i in repo.find_by_requested_date_range(db, start, end)]


def by_type(db: Session, intention_type: IntentionType) -> List[IntentionListItem]:
    return [intention_to_list_item(i) for i in repo.find_by_type(db, intention_type)]


def by_mass(db: Session, mass_id: int) -> List[IntentionListItem]:
    if not mass_repo.exists(db, mass_id):
        raise NotFoundError(f"Mass not found with ID: {mass_id}")
    return [intention_to_list_item(i) for i in repo.find_by_mass(db, mass_id)]


def by_faithful(db: Session, faithful_id: int) -> List[IntentionListItem]:
    if not faithful_repo.exists(db, faithful_id):
        raise NotFoundError(f"Faithful not found with id: {faithful_id}")
    return [intention_to_list_item(i) for i in repo.find_by_faithful(db, faithful_id)]


def unpaid(db: Session) -> List[IntentionListItem]:
    return [intention_to_list_item(i) for i in repo.find_unpaid(db)]


def deceased_in_period(db: Session, start: date, end: date) -> List[IntentionListItem]:
    rows = repo.find_by_requested_date_range(db, start, end)
    return [intention_to_list_item(i) for i in rows if i.intention_type == IntentionType.DECEASED]


def counts_by_type(db: Session, start: date, end: date):
    return {t.value: n for t, n in repo.count_by_type_in_period(db, start, end)}
