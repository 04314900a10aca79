# parish/repositories/donations.py
from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import List, Optional, Tuple, Union

from sqlalchemy import delete as sa_delete, func, select
from sqlalchemy.orm import Session

from parish.models.donation import Donation
from parish.models.faithful import Faithful

ZERO = Decimal("0")


def get(db: Session, donation_id: int) -> Optional[Donation]:
    return db.get(Donation, donation_id)


def list_all(db: Session) -> List[Donation]:
    return _many(db, order=(Donation.id,))


def save(db: Session, donation: Donation) -> Donation:
    db.add(donation)
    db.flush()
    return donation


def delete(db: Session, donation: Union[Donation, int]) -> None:
    obj = get(db, donation) if isinstance(donation, int) else donation
    if obj is not None:
        db.delete(obj)
        db.flush()


def exists(db: Session, donation_id: int) -> bool:
    return db.execute(select(Donation.id).where(Donation.id == donation_id)).first() is not None


def _many(db: Session, *criteria, order=None) -> List[Donation]:
    order = order or (Donation.date.desc(), Donation.id.desc())
    stmt = select(Donation).where(*criteria).order_by(*order)
    return list(db.execute(stmt).scalars().unique().all())


def _dec(v) -> Decimal:
    # SQLite may hand back floats for SUM over Numeric
    return Decimal(str(v)) if v is not None else ZERO


def _sum(db: Session, *criteria) -> Decimal:
    total = db.execute(select(func.sum(Donation.amount)).where(*criteria)).scalar()
    return _dec(total)


# ─────────────────────────────────────────────────────────────────────────────
# Named filters
# ─────────────────────────────────────────────────────────────────────────────

def find_by_faithful(db: Session, faithful_id: int, ordered: bool = True) -> List[Donation]:
    """Donations of one faithful, newest first unless `ordered` is False."""
    order = None if ordered else (Donation.id,)
    return _many(db, Donation.faithful_id == faithful_id, order=order)


def find_by_year(db: Session, year: int) -> List[Donation]:
    return _many(db, Donation.year == year)


def find_by_faithful_and_year(db: Session, faithful_id: int, year: int) -> List[Donation]:
    return _many(db, Donation.faithful_id == faithful_id, Donation.year == year)


def find_by_date_range(
    db: Session, start: date, end: date, faithful_id: Optional[int] = None
) -> List[Donation]:
    criteria = [Donation.date.between(start, end)]
    if faithful_id is not None:
        criteria.append(Donation.faithful_id == faithful_id)
    return _many(db, *criteria)


def find_by_contribution_type(
    db: Session,
    contribution_type: str,
    start: Optional[date] = None,
    end: Optional[date] = None,
) -> List[Donation]:
    criteria = [Donation.contribution_type == contribution_type]
    if start is not None and end is not None:
        criteria.append(Donation.date.between(start, end))
    return _many(db, *criteria)


def find_by_payment_method(db: Session, payment_method: str) -> List[Donation]:
    return _many(db, Donation.payment_method == payment_method)


def find_by_min_amount(db: Session, amount: Decimal) -> List[Donation]:
    return _many(db, Donation.amount >= amount)


def search_by_reference_number(db: Session, term: str) -> List[Donation]:
    return _many(db, Donation.reference_number.ilike(f"%{term}%"))


# ─────────────────────────────────────────────────────────────────────────────
# Aggregates
# ─────────────────────────────────────────────────────────────────────────────

def sum_by_faithful(db: Session, faithful_id: int) -> Decimal:
    return _sum(db, Donation.faithful_id == faithful_id)


def sum_by_year(db: Session, year: int) -> Decimal:
    return _sum(db, Donation.year == year)


def sum_by_date_range(db: Session, start: date, end: date) -> Decimal:
    return _sum(db, Donation.date.between(start, end))


def sum_all(db: Session) -> Decimal:
    return _sum(db)


def count_by_faithful(db: Session, faithful_id: int) -> int:
    stmt = select(func.count(Donation.id)).where(Donation.faithful_id == faithful_id)
    return int(db.execute(stmt).scalar_one())


def totals_by_type_for_year(db: Session, year: int) -> List[Tuple[Optional[str], Decimal]]:
    stmt = (
        select(Donation.contribution_type, func.sum(Donation.amount))
        .where(Donation.year == year)
        .group_by(Donation.contribution_type)
    )
    return [(t, _dec(total)) for t, total in db.execute(stmt).all()]


def monthly_totals_for_year(db: Session, year: int) -> List[Tuple[int, Decimal]]:
    month = func.extract("month", Donation.date)
    stmt = (
        select(month, func.sum(Donation.amount))
        .where(Donation.year == year)
        .group_by(month)
        .order_by(month)
    )
    return [(int(m), _dec(total)) for m, total in db.execute(stmt).all()]


def top_donors_for_year(db: Session, year: int, limit: Optional[int] = None) -> List[Tuple[Faithful, Decimal]]:
    """(faithful, total) pairs for `year`, largest total first."""
    total = func.sum(Donation.amount).label("total")
    stmt = (
        select(Faithful, total)
        .join(Donation, Donation.faithful_id == Faithful.id)
        .where(Donation.year == year)
        .group_by(Faithful.id)
        .order_by(total.desc(), Faithful.id)
    )
    if limit is not None:
        stmt = stmt.limit(limit)
    return [(f, _dec(t)) for f, t in db.execute(stmt).all()]


def distinct_years(db: Session) -> List[int]:
    stmt = select(Donation.year).distinct().order_by(Donation.year.desc())
    return [int(y) for y in db.execute(stmt).scalars().all()]


def delete_for_faithful(db: Session, faithful_id: int) -> int:
    res = db.execute(sa_delete(Donation).where(Donation.faithful_id == faithful_id))
    return res.rowcount or 0
