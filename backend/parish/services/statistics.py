# parish/services/statistics.py
"""Read-only reports across Masses, Intentions, Priests and Events.

Every function returns plain dicts/lists ready for JSON; keys are camelCase to
match the rest of the API. Percentages are strings like ``"42.50%"``, or
``"N/A"`` when the base is zero.
"""
from __future__ import annotations

import calendar
import logging
from datetime import date, timedelta
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from parish.mappers import requestor_name
from parish.repositories import events as event_repo
from parish.repositories import intentions as intention_repo
from parish.repositories import masses as mass_repo
from parish.repositories import priests as priest_repo

logger = logging.getLogger(__name__)

NA = "N/A"


def _percent(part: float, whole: float) -> Optional[str]:
    if not whole:
        return None
    return f"{part / whole * 100:.2f}%"


def _month_bounds(day: date):
    start = day.replace(day=1)
    last = calendar.monthrange(day.year, day.month)[1]
    return start, day.replace(day=last)


def _week_bounds(day: date):
    start = day - timedelta(days=day.weekday())
    return start, start + timedelta(days=6)


# ─────────────────────────────────────────────────────────────────────────────
# Masses
# ─────────────────────────────────────────────────────────────────────────────

def mass_type_distribution(db: Session, start: date, end: date) -> Dict[str, int]:
    logger.debug("Fetching mass type distribution between %s and %s", start, end)
    return {t.value: n for t, n in mass_repo.count_by_type_in_period(db, start, end)}


def mass_statistics(db: Session, start: date, end: date) -> Dict[str, Any]:
    logger.debug("Fetching mass statistics between %s and %s", start, end)
    top = [
        {
            "priestId": p.id,
            "priestName": p.names,
            "priestType": p.priest_type.value,
            "massCount": n,
        }
        for p, n in mass_repo.celebrant_ranking_in_period(db, start, end)
    ]
    return {
        "totalMasses": mass_repo.count_in_period(db, start, end),
        "massesByType": mass_type_distribution(db, start, end),
        "topCelebratingPriests": top,
    }


def count_masses_by_priest(db: Session, priest_id: int, start: date, end: date) -> int:
    return mass_repo.count_by_celebrant_in_period(db, priest_id, start, end)


def yearly_mass_counts(db: Session) -> List[Dict[str, int]]:
    return [{"year": y, "count": n} for y, n in mass_repo.count_by_year(db)]


def top_celebrating_priests(db: Session, limit: int = 5) -> List[Dict[str, Any]]:
    """All-time busiest main celebrants, ranked from 1."""
    out: List[Dict[str, Any]] = []
    for priest_id, n in mass_repo.celebrant_ranking(db)[:limit]:
        priest = priest_repo.get(db, priest_id)
        if priest is None:
            continue
        out.append(
            {
                "rank": len(out) + 1,
                "priestId": priest.id,
                "priestName": priest.names,
                "priestType": priest.priest_type.value,
                "email": priest.email,
                "massCount": n,
            }
        )
    return out


def all_celebrating_priests(db: Session) -> List[Dict[str, Any]]:
    out = []
    for priest_id, n in mass_repo.celebrant_ranking(db):
        priest = priest_repo.get(db, priest_id)
        if priest is None:
            continue
        out.append(
            {
                "priestId": priest.id,
                "priestName": priest.names,
                "priestType": priest.priest_type.value,
                "massCount": n,
            }
        )
    return out


# ─────────────────────────────────────────────────────────────────────────────
# Intentions
# ─────────────────────────────────────────────────────────────────────────────

def intention_counts_by_type(db: Session, start: date, end: date) -> Dict[str, int]:
    return {t.value: n for t, n in intention_repo.count_by_type_in_period(db, start, end)}


def intention_statistics(db: Session, start: date, end: date) -> Dict[str, Any]:
    logger.debug("Fetching intention statistics between %s and %s", start, end)
    total = intention_repo.count_in_period(db, start, end)
    unpaid = intention_repo.count_unpaid(db)
    return {
        "totalIntentions": total,
        "intentionsByType": intention_counts_by_type(db, start, end),
        "deceasedIntentions": intention_repo.count_deceased_in_period(db, start, end),
        "unpaidIntentionsCount": unpaid,
        # unpaid is counted across all time, as on the unpaid listing
        "paymentRate": _percent(total - unpaid, total) or NA,
    }


def unpaid_intention_details(db: Session) -> List[Dict[str, Any]]:
    out = []
    for i in intention_repo.find_unpaid(db):
        row: Dict[str, Any] = {
            "intentionId": i.id,
            "intentionType": i.intention_type.value,
            "intentionText": i.intention_text,
            "requestedDate": i.requested_date,
            "requestorName": requestor_name(i),
        }
        if i.mass is not None:
            row["massId"] = i.mass.event_id
            row["massDate"] = i.mass.event.event_date
        out.append(row)
    return out


def deceased_intentions_count(db: Session, start: date, end: date) -> int:
    return intention_repo.count_deceased_in_period(db, start, end)


# ─────────────────────────────────────────────────────────────────────────────
# Priests
# ─────────────────────────────────────────────────────────────────────────────

def priest_statistics(db: Session, today: date) -> Dict[str, Any]:
    logger.debug("Fetching priest statistics")
    total = priest_repo.count_all(db)
    assigned = len(priest_repo.find_assigned(db))
    month_start, month_end = _month_bounds(today)
    return {
        "totalPriests": total,
        "priestsByType": {t.value: n for t, n in priest_repo.count_by_type(db)},
        "activePriests": assigned,
        "inactivePriests": total - assigned,
        "priestsCelebratingThisMonth": len(priest_repo.celebrating_in_period(db, month_start, month_end)),
    }


def celebrating_priests_in_period(db: Session, start: date, end: date) -> List[Dict[str, Any]]:
    return [
        {
            "priestId": p.id,
            "priestName": p.names,
            "priestType": p.priest_type.value,
            "email": p.email,
            "phone": p.phone,
            "massCount": mass_repo.count_by_celebrant_in_period(db, p.id, start, end),
        }
        for p in priest_repo.celebrating_in_period(db, start, end)
    ]


def priest_workload(db: Session, start: date, end: date) -> List[Dict[str, Any]]:
    return [
        {
            "priestId": p.id,
            "priestName": p.names,
            "priestType": p.priest_type.value,
            "massCount": n,
            "isAssigned": p.is_assigned,
        }
        for p, n in mass_repo.celebrant_ranking_in_period(db, start, end)
    ]


def priest_type_breakdown(db: Session) -> Dict[str, Any]:
    total = priest_repo.count_all(db)
    rows = []
    for t, n in priest_repo.count_by_type(db):
        row: Dict[str, Any] = {"priestType": t.value, "count": n}
        pct = _percent(n, total)
        if pct is not None:
            row["percentage"] = pct
        rows.append(row)
    return {"totalPriests": total, "typeBreakdown": rows}


# ─────────────────────────────────────────────────────────────────────────────
# Dashboard & periods
# ─────────────────────────────────────────────────────────────────────────────

def dashboard(db: Session, start: date, end: date, today: date) -> Dict[str, Any]:
    logger.debug("Fetching dashboard statistics between %s and %s", start, end)
    return {
        "startDate": start,
        "endDate": end,
        "totalMasses": mass_repo.count_in_period(db, start, end),
        "totalIntentions": intention_repo.count_in_period(db, start, end),
        "totalEvents": event_repo.count_in_period(db, start, end),
        "totalPriests": priest_repo.count_all(db),
        "deceasedIntentions": intention_repo.count_deceased_in_period(db, start, end),
        "unpaidIntentions": intention_repo.count_unpaid(db),
        "massTypeBreakdown": mass_type_distribution(db, start, end),
        "massesToday": mass_repo.count_in_period(db, today, today),
    }


def period_statistics(db: Session, year: int) -> Dict[str, Any]:
    """Twelve monthly Mass counts plus paid offerings per month for `year`."""
    logger.debug("Fetching period statistics for year %s", year)
    monthly_masses = []
    for month in range(1, 13):
        start, end = _month_bounds(date(year, month, 1))
        monthly_masses.append(
            {
                "month": month,
                "monthName": calendar.month_name[month].upper(),
                "massCount": mass_repo.count_in_period(db, start, end),
            }
        )
    offerings = [
        {"month": m, "offeringTotal": float(total)}
        for m, total in intention_repo.monthly_offerings_for_year(db, year)
    ]
    year_start, year_end = date(year, 1, 1), date(year, 12, 31)
    return {
        "year": year,
        "monthlyMasses": monthly_masses,
        "monthlyOfferings": offerings,
        "totalMassesForYear": mass_repo.count_in_period(db, year_start, year_end),
        "totalIntentionsForYear": intention_repo.count_in_period(db, year_start, year_end),
    }


def comparison(
    db: Session,
    period1_start: date,
    period1_end: date,
    period2_start: date,
    period2_end: date,
) -> Dict[str, Any]:
    def _period(start: date, end: date) -> Dict[str, Any]:
        return {
            "startDate": start,
            "endDate": end,
            "masses": mass_repo.count_in_period(db, start, end),
            "intentions": intention_repo.count_in_period(db, start, end),
        }

    p1 = _period(period1_start, period1_end)
    p2 = _period(period2_start, period2_end)
    mass_delta = p2["masses"] - p1["masses"]
    intention_delta = p2["intentions"] - p1["intentions"]
    return {
        "period1": p1,
        "period2": p2,
        "changes": {
            "massChange": mass_delta,
            "intentionChange": intention_delta,
            "massPercentChange": _percent(mass_delta, p1["masses"]) or NA,
            "intentionPercentChange": _percent(intention_delta, p1["intentions"]) or NA,
        },
    }


def current_month_summary(db: Session, today: date) -> Dict[str, Any]:
    start, end = _month_bounds(today)
    return dashboard(db, start, end, today)


def current_week_summary(db: Session, today: date) -> Dict[str, Any]:
    start, end = _week_bounds(today)
    return dashboard(db, start, end, today)
