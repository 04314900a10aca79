# parish/services/donations.py
from __future__ import annotations

import logging
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from parish.dependencies import Clock
from parish.exceptions import NotFoundError, ValidationFailedError
from parish.mappers import apply_donation_update, donation_to_read
from parish.models.donation import Donation
from parish.repositories import donations as repo
from parish.repositories import faithful as faithful_repo
from parish.schemas.donation import DonationCreate, DonationRead, DonationSummary, DonationUpdate, TopDonor

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
CENTS = Decimal("0.01")


def _require(db: Session, donation_id: int) -> Donation:
    donation = repo.get(db, donation_id)
    if donation is None:
        raise NotFoundError(f"Ituro ntiribonetse (ID: {donation_id})")
    return donation


def _check_date(day: Optional[date], today: date) -> None:
    if day is not None and day > today:
        message = "Date cannot be in the future"
        raise ValidationFailedError(message, field_errors={"date": message})


def _to_list(rows: List[Donation]) -> List[DonationRead]:
    return [donation_to_read(d) for d in rows]


# ─────────────────────────────────────────────────────────────────────────────
# CRUD
# ─────────────────────────────────────────────────────────────────────────────

def create(db: Session, payload: DonationCreate, clock: Clock) -> DonationRead:
    if not faithful_repo.exists(db, payload.faithful_id):
        raise NotFoundError(f"Umukristu ntabwo abonetse (ID: {payload.faithful_id})")
    now = clock()
    _check_date(payload.date, now.date())

    donation = Donation(**payload.model_dump())
    donation.touch(now)
    try:
        repo.save(db, donation)
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(donation)
    logger.info(
        "Donation %s recorded: %s for faithful %s (%s)",
        donation.id, donation.amount, donation.faithful_id, donation.year,
    )
    return donation_to_read(donation)


def get(db: Session, donation_id: int) -> DonationRead:
    return donation_to_read(_require(db, donation_id))


def list_all(db: Session) -> List[DonationRead]:
    return _to_list(repo.list_all(db))


def filter_donations(
    db: Session,
    faithful_id: Optional[int] = None,
    year: Optional[int] = None,
    contribution_type: Optional[str] = None,
    start: Optional[date] = None,
    end: Optional[date] = None,
) -> List[DonationRead]:
    """First matching filter wins: faithful, year, date range, type, else everything."""
    if faithful_id is not None:
        return by_faithful(db, faithful_id)
    if year is not None:
        return by_year(db, year)
    if start is not None and end is not None:
        return by_date_range(db, start, end)
    if contribution_type:
        return _to_list(repo.find_by_contribution_type(db, contribution_type))
    return list_all(db)


def by_faithful(db: Session, faithful_id: int) -> List[DonationRead]:
    return _to_list(repo.find_by_faithful(db, faithful_id, ordered=True))


def by_year(db: Session, year: int) -> List[DonationRead]:
    return _to_list(repo.find_by_year(db, year))


def by_date_range(db: Session, start: date, end: date) -> List[DonationRead]:
    return _to_list(repo.find_by_date_range(db, start, end))


def update(db: Session, donation_id: int, payload: DonationUpdate, clock: Clock) -> DonationRead:
    donation = _require(db, donation_id)
    now = clock()
    _check_date(payload.date, now.date())
    try:
        apply_donation_update(donation, payload)
        donation.touch(now)
        repo.save(db, donation)
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(donation)
    logger.info("Donation %s updated", donation_id)
    return donation_to_read(donation)


def delete(db: Session, donation_id: int) -> None:
    donation = _require(db, donation_id)
    try:
        repo.delete(db, donation)
        db.commit()
    except Exception:
        db.rollback()
        raise
    logger.info("Donation %s deleted", donation_id)


# ─────────────────────────────────────────────────────────────────────────────
# Totals & summaries
# ─────────────────────────────────────────────────────────────────────────────

def total_by_faithful(db: Session, faithful_id: int) -> Decimal:
    return repo.sum_by_faithful(db, faithful_id)


def total_by_year(db: Session, year: int) -> Decimal:
    return repo.sum_by_year(db, year)


def total_all(db: Session) -> Decimal:
    return repo.sum_all(db)


def total_by_date_range(db: Session, start: date, end: date) -> Decimal:
    return repo.sum_by_date_range(db, start, end)


def summary(db: Session, start: date, end: date, period: Optional[str] = None) -> DonationSummary:
    """Total, count, average (2 dp, half-up), max and min over [start, end]."""
    amounts = [d.amount for d in repo.find_by_date_range(db, start, end)]
    if not amounts:
        return DonationSummary(
            total_amount=ZERO,
            donation_count=0,
            average_amount=ZERO,
            max_amount=ZERO,
            min_amount=ZERO,
            period=period,
        )

    total = sum(amounts, ZERO)
    average = (total / len(amounts)).quantize(CENTS, rounding=ROUND_HALF_UP)
    return DonationSummary(
        total_amount=total,
        donation_count=len(amounts),
        average_amount=average,
        max_amount=max(amounts),
        min_amount=min(amounts),
        period=period,
    )


def available_years(db: Session) -> List[int]:
    return repo.distinct_years(db)


def totals_by_type(db: Session, year: int) -> Dict[str, Decimal]:
    out: Dict[str, Decimal] = {}
    for ctype, total in repo.totals_by_type_for_year(db, year):
        key = ctype if ctype is not None else "Unspecified"
        out[key] = out.get(key, ZERO) + total
    return out


def monthly_totals(db: Session, year: int) -> Dict[int, Decimal]:
    return dict(repo.monthly_totals_for_year(db, year))


def top_donors(db: Session, year: int, limit: int = 10) -> List[TopDonor]:
    return [
        TopDonor(faithful_id=f.id, faithful_name=f.name, total_amount=total)
        for f, total in repo.top_donors_for_year(db, year, limit=limit)
    ]


# Subparish/BEC groupings read every donation in scope into memory; fine for a
# single parish, revisit before sharing a database across parishes.

def totals_by_subparish(db: Session, year: Optional[int] = None) -> Dict[str, Decimal]:
    donations = repo.find_by_year(db, year) if year is not None else repo.list_all(db)
    totals: Dict[str, Decimal] = {}
    for d in donations:
        subparish = d.faithful.subparish if d.faithful is not None else None
        if subparish:
            totals[subparish] = totals.get(subparish, ZERO) + d.amount
    return totals


def totals_by_bec(db: Session, subparish: str, year: Optional[int] = None) -> Dict[str, Decimal]:
    donations = repo.find_by_year(db, year) if year is not None else repo.list_all(db)
    totals: Dict[str, Decimal] = {}
    for d in donations:
        f = d.faithful
        if f is None or f.subparish != subparish or not f.basic_ecclesial_community:
            continue
        bec = f.basic_ecclesial_community
        totals[bec] = totals.get(bec, ZERO) + d.amount
    return totals
