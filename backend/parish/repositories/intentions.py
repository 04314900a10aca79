# parish/repositories/intentions.py
from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import List, Optional, Tuple, Union

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session

from parish.models.intention import Intention, IntentionType


def get(db: Session, intention_id: int) -> Optional[Intention]:
    return db.get(Intention, intention_id)


def list_all(db: Session) -> List[Intention]:
    return _many(db)


def save(db: Session, intention: Intention) -> Intention:
    db.add(intention)
    db.flush()
    return intention


def delete(db: Session, intention: Union[Intention, int]) -> None:
    obj = get(db, intention) if isinstance(intention, int) else intention
    if obj is not None:
        db.delete(obj)
        db.flush()


def exists(db: Session, intention_id: int) -> bool:
    return db.execute(select(Intention.id).where(Intention.id == intention_id)).first() is not None


def _many(db: Session, *criteria) -> List[Intention]:
    stmt = select(Intention).where(*criteria).order_by(Intention.requested_date, Intention.id)
    return list(db.execute(stmt).scalars().unique().all())


def _count(db: Session, *criteria) -> int:
    return int(db.execute(select(func.count(Intention.id)).where(*criteria)).scalar_one())


def _in_period(start: date, end: date):
    return Intention.requested_date.between(start, end)


# ─────────────────────────────────────────────────────────────────────────────
# Named filters
# ─────────────────────────────────────────────────────────────────────────────

def find_by_requested_date_range(db: Session, start: date, end: date) -> List[Intention]:
    return _many(db, _in_period(start, end))


def find_by_type(db: Session, intention_type: IntentionType) -> List[Intention]:
    return _many(db, Intention.intention_type == intention_type)


def find_by_mass(db: Session, mass_id: int) -> List[Intention]:
    return _many(db, Intention.mass_id == mass_id)


def find_by_faithful(db: Session, faithful_id: int) -> List[Intention]:
    return _many(db, Intention.faithful_id == faithful_id)


def find_unpaid(db: Session) -> List[Intention]:
    return _many(db, Intention.is_paid.is_(False))


# ─────────────────────────────────────────────────────────────────────────────
# Counts
# ─────────────────────────────────────────────────────────────────────────────

def count_in_period(db: Session, start: date, end: date) -> int:
    return _count(db, _in_period(start, end))


def count_unpaid(db: Session) -> int:
    return _count(db, Intention.is_paid.is_(False))


def count_by_type_in_period(db: Session, start: date, end: date) -> List[Tuple[IntentionType, int]]:
    stmt = (
        select(Intention.intention_type, func.count(Intention.id))
        .where(_in_period(start, end))
        .group_by(Intention.intention_type)
    )
    return [(t, int(n)) for t, n in db.execute(stmt).all()]


def count_deceased_in_period(db: Session, start: date, end: date) -> int:
    return _count(db, _in_period(start, end), Intention.intention_type == IntentionType.DECEASED)


def monthly_offerings_for_year(db: Session, year: int) -> List[Tuple[int, Decimal]]:
    """(month, total offering) over paid intentions requested in `year`."""
    month = func.extract("month", Intention.requested_date)
    stmt = (
        select(month, func.sum(Intention.offering_amount))
        .where(
            func.extract("year", Intention.requested_date) == year,
            Intention.is_paid.is_(True),
            Intention.offering_amount.isnot(None),
        )
        .group_by(month)
        .order_by(month)
    )
    return [(int(m), Decimal(str(total))) for m, total in db.execute(stmt).all()]


# ─────────────────────────────────────────────────────────────────────────────
# Detaching
# ─────────────────────────────────────────────────────────────────────────────

def detach_faithful(db: Session, faithful_id: int, name: Optional[str]) -> int:
    """Unlink a faithful from their intentions, keeping `name` as the requestor."""
    stmt = (
        update(Intention)
        .where(Intention.faithful_id == faithful_id)
        .values(faithful_id=None, external_faithful_name=name)
        .execution_options(synchronize_session="fetch")
    )
    return db.execute(stmt).rowcount or 0


def detach_mass(db: Session, mass_id: int) -> int:
    stmt = (
        update(Intention)
        .where(Intention.mass_id == mass_id)
        .values(mass_id=None)
        .execution_options(synchronize_session="fetch")
    )
    return db.execute(stmt).rowcount or 0
