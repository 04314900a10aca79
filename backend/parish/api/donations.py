# parish/api/donations.py
from __future__ import annotations

import logging
from datetime import date
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from parish.dependencies import Clock, get_clock, get_db
from parish.schemas.common import money
from parish.schemas.donation import DonationCreate, DonationRead, DonationSummary, DonationUpdate, TopDonor
from parish.services import donations as svc

router = APIRouter(prefix="/api/donations", tags=["Donations"])
logger = logging.getLogger(__name__)


def _amounts(totals: Dict) -> Dict:
    return {k: money(v) for k, v in totals.items()}


@router.post("", response_model=DonationRead, status_code=201)
def create_donation(
    payload: DonationCreate,
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    logger.info("POST /api/donations faithful=%s amount=%s", payload.faithful_id, payload.amount)
    return svc.create(db, payload, clock)


@router.get("", response_model=List[DonationRead])
def list_donations(
    faithful_id: Optional[int] = Query(None, alias="faithfulId"),
    year: Optional[int] = Query(None),
    contribution_type: Optional[str] = Query(None, alias="contributionType"),
    start: Optional[date] = Query(None, alias="startDate"),
    end: Optional[date] = Query(None, alias="endDate"),
    db: Session = Depends(get_db),
):
    return svc.filter_donations(db, faithful_id, year, contribution_type, start, end)


@router.get("/faithful/{faithful_id}", response_model=List[DonationRead])
def donations_by_faithful(faithful_id: int, db: Session = Depends(get_db)):
    return svc.by_faithful(db, faithful_id)


@router.get("/year/{year}", response_model=List[DonationRead])
def donations_by_year(year: int, db: Session = Depends(get_db)):
    return svc.by_year(db, year)


# ─────────────────────────────────────────────────────────────────────────────
# Statistics
# ─────────────────────────────────────────────────────────────────────────────

@router.get("/statistics/faithful/{faithful_id}/total")
def total_by_faithful(faithful_id: int, db: Session = Depends(get_db)):
    return {"total": money(svc.total_by_faithful(db, faithful_id))}


@router.get("/statistics/year/{year}/total")
def total_by_year(year: int, db: Session = Depends(get_db)):
    return {"total": money(svc.total_by_year(db, year)), "year": year}


@router.get("/statistics/total")
def total_all(db: Session = Depends(get_db)):
    return {"total": money(svc.total_all(db))}


@router.get("/statistics/date-range/total")
def total_by_date_range(
    start: date = Query(..., alias="startDate"),
    end: date = Query(..., alias="endDate"),
    db: Session = Depends(get_db),
):
    return {"total": money(svc.total_by_date_range(db, start, end))}


@router.get("/statistics/summary", response_model=DonationSummary)
def summary(
    start: date = Query(..., alias="startDate"),
    end: date = Query(..., alias="endDate"),
    period: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    label = period if period is not None else f"{start} - {end}"
    return svc.summary(db, start, end, label)


@router.get("/statistics/available-years", response_model=List[int])
def available_years(db: Session = Depends(get_db)):
    return svc.available_years(db)


@router.get("/statistics/year/{year}/by-type")
def totals_by_type(year: int, db: Session = Depends(get_db)):
    return _amounts(svc.totals_by_type(db, year))


@router.get("/statistics/year/{year}/monthly")
def monthly_totals(year: int, db: Session = Depends(get_db)):
    return _amounts(svc.monthly_totals(db, year))


@router.get("/statistics/year/{year}/top-donors", response_model=List[TopDonor])
def top_donors(year: int, limit: int = Query(10, ge=1, le=100), db: Session = Depends(get_db)):
    return svc.top_donors(db, year, limit)


@router.get("/statistics/by-subparish")
def totals_by_subparish(year: Optional[int] = Query(None), db: Session = Depends(get_db)):
    return _amounts(svc.totals_by_subparish(db, year))


@router.get("/statistics/by-bec")
def totals_by_bec(
    subparish: str = Query(..., alias="subParish"),
    year: Optional[int] = Query(None),
    db: Session = Depends(get_db),
):
    return _amounts(svc.totals_by_bec(db, subparish, year))


# ─────────────────────────────────────────────────────────────────────────────
# By id
# ─────────────────────────────────────────────────────────────────────────────

@router.get("/{donation_id}", response_model=DonationRead)
def get_donation(donation_id: int, db: Session = Depends(get_db)):
    return svc.get(db, donation_id)


@router.put("/{donation_id}", response_model=DonationRead)
def update_donation(
    donation_id: int,
    payload: DonationUpdate,
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    logger.info("PUT /api/donations/%s", donation_id)
    return svc.update(db, donation_id, payload, clock)


@router.delete("/{donation_id}")
def delete_donation(donation_id: int, db: Session = Depends(get_db)):
    logger.info("DELETE /api/donations/%s", donation_id)
    svc.delete(db, donation_id)
    return {"message": "Ituro ryasibwe neza"}
