# parish/api/statistics.py
from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from parish.dependencies import Clock, get_clock, get_db
from parish.services import masses as mass_svc
from parish.services import statistics as svc

router = APIRouter(prefix="/api/statistics", tags=["Statistics"])


def period(
    start: date = Query(..., alias="startDate"),
    end: date = Query(..., alias="endDate"),
):
    mass_svc.validate_date_range(start, end)
    return start, end


@router.get("/masses")
def mass_statistics(p=Depends(period), db: Session = Depends(get_db)):
    return svc.mass_statistics(db, *p)


@router.get("/masses/by-type")
def mass_type_distribution(p=Depends(period), db: Session = Depends(get_db)):
    return svc.mass_type_distribution(db, *p)


@router.get("/masses/yearly")
def yearly_mass_counts(db: Session = Depends(get_db)):
    return svc.yearly_mass_counts(db)


@router.get("/masses/priest/{priest_id}/count", response_model=int)
def masses_by_priest(priest_id: int, p=Depends(period), db: Session = Depends(get_db)):
    return svc.count_masses_by_priest(db, priest_id, *p)


@router.get("/priests/top")
def top_priests(limit: int = Query(5, ge=1, le=100), db: Session = Depends(get_db)):
    return svc.top_celebrating_priests(db, limit)


@router.get("/priests/celebrating")
def all_celebrating_priests(db: Session = Depends(get_db)):
    return svc.all_celebrating_priests(db)


@router.get("/priests/celebrating/period")
def celebrating_in_period(p=Depends(period), db: Session = Depends(get_db)):
    return svc.celebrating_priests_in_period(db, *p)


@router.get("/priests/workload")
def priest_workload(p=Depends(period), db: Session = Depends(get_db)):
    return svc.priest_workload(db, *p)


@router.get("/priests")
def priest_statistics(db: Session = Depends(get_db), clock: Clock = Depends(get_clock)):
    return svc.priest_statistics(db, clock().date())


@router.get("/priests/type-breakdown")
def priest_type_breakdown(db: Session = Depends(get_db)):
    return svc.priest_type_breakdown(db)


@router.get("/intentions")
def intention_statistics(p=Depends(period), db: Session = Depends(get_db)):
    return svc.intention_statistics(db, *p)


@router.get("/intentions/by-type")
def intention_counts_by_type(p=Depends(period), db: Session = Depends(get_db)):
    return svc.intention_counts_by_type(db, *p)


@router.get("/intentions/unpaid")
def unpaid_intentions(db: Session = Depends(get_db)):
    return svc.unpaid_intention_details(db)


@router.get("/intentions/deceased/count", response_model=int)
def deceased_count(p=Depends(period), db: Session = Depends(get_db)):
    return svc.deceased_intentions_count(db, *p)


@router.get("/dashboard")
def dashboard(p=Depends(period), db: Session = Depends(get_db), clock: Clock = Depends(get_clock)):
    return svc.dashboard(db, *p, today=clock().date())


@router.get("/year/{year}")
def period_statistics(year: int, db: Session = Depends(get_db)):
    return svc.period_statistics(db, year)


@router.get("/compare")
def compare(
    period1_start: date = Query(..., alias="period1Start"),
    period1_end: date = Query(..., alias="period1End"),
    period2_start: date = Query(..., alias="period2Start"),
    period2_end: date = Query(..., alias="period2End"),
    db: Session = Depends(get_db),
):
    mass_svc.validate_date_range(period1_start, period1_end)
    mass_svc.validate_date_range(period2_start, period2_end)
    return svc.comparison(db, period1_start, period1_end, period2_start, period2_end)


@router.get("/current-month")
def current_month(db: Session = Depends(get_db), clock: Clock = Depends(get_clock)):
    return svc.current_month_summary(db, clock().date())


@router.get("/current-week")
def current_week(db: Session = Depends(get_db), clock: Clock = Depends(get_clock)):
    return svc.current_week_summary(db, clock().date())
