# parish/services/priests.py
from __future__ import annotations

import logging
from typing import List, Union

from sqlalchemy.orm import Session

from parish.dependencies import Clock
from parish.exceptions import DuplicateIdentifierError, NotFoundError, ValidationFailedError
from parish.mappers import priest_to_read
from parish.models.priest import Priest, PriestType
from parish.repositories import priests as repo
from parish.schemas.priest import PriestCreate, PriestRead, PriestUpdate

logger = logging.getLogger(__name__)

_WRITABLE = tuple(f for f in PriestUpdate.model_fields)


def _require(db: Session, priest_id: int) -> Priest:
    priest = repo.get(db, priest_id)
    if priest is None:
        raise NotFoundError(f"Priest not found with ID: {priest_id}")
    return priest


def _check_email(db: Session, email, own_id=None) -> None:
    if email is None:
        return
    holder = repo.find_by_email(db, email)
    if holder is not None and holder.id != own_id:
        raise DuplicateIdentifierError("Email", email, "email")


def _apply(priest: Priest, payload: Union[PriestCreate, PriestUpdate]) -> None:
    for name in _WRITABLE:
        setattr(priest, name, getattr(payload, name))


def create(db: Session, payload: PriestCreate, clock: Clock) -> PriestRead:
    if repo.exists(db, payload.id):
        raise DuplicateIdentifierError("Priest ID", payload.id, "id")
    _check_email(db, payload.email)

    priest = Priest(id=payload.id)
    _apply(priest, payload)
    priest.touch(clock())
    try:
        repo.save(db, priest)
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(priest)
    logger.info("Priest %s registered (%s)", priest.id, priest.priest_type.value)
    return priest_to_read(priest)


def get(db: Session, priest_id: int) -> PriestRead:
    return priest_to_read(_require(db, priest_id))


def list_all(db: Session) -> List[PriestRead]:
    return [priest_to_read(p) for p in repo.list_all(db)]


def update(db: Session, priest_id: int, payload: PriestUpdate, clock: Clock) -> PriestRead:
    priest = _require(db, priest_id)
    _check_email(db, payload.email, own_id=priest_id)

    try:
        _apply(priest, payload)
        priest.touch(clock())
        repo.save(db, priest)
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(priest)
    logger.info("Priest %s updated", priest_id)
    return priest_to_read(priest)


def delete(db: Session, priest_id: int) -> None:
    priest = _require(db, priest_id)
    if repo.is_main_celebrant(db, priest_id):
        raise ValidationFailedError(
            f"Priest {priest_id} is the main celebrant of at least one Mass and cannot be deleted"
        )

    try:
        repo.remove_from_concelebrations(db, priest_id)
        repo.delete(db, priest)
        db.commit()
    except Exception:
        db.rollback()
        raise
    logger.info("Priest %s deleted", priest_id)


def active(db: Session) -> List[PriestRead]:
    return [priest_to_read(p) for p in repo.find_active(db)]


def assigned(db: Session) -> List[PriestRead]:
    return [priest_to_read(p) for p in repo.find_assigned(db)]


def by_type(db: Session, priest_type: PriestType) -> List[PriestRead]:
    return [priest_to_read(p) for p in repo.find_by_type(db, priest_type)]
