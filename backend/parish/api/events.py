# parish/api/events.py
from __future__ import annotations

import logging
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from parish.dependencies import Clock, get_clock, get_db
from parish.models.event import EventType
from parish.schemas.event import EventCreate, EventRead
from parish.services import events as svc

router = APIRouter(prefix="/api/events", tags=["Events"])
logger = logging.getLogger(__name__)


@router.post("", response_model=EventRead, status_code=201)
def create_event(payload: EventCreate, db: Session = Depends(get_db), clock: Clock = Depends(get_clock)):
    logger.info("POST /api/events title=%s", payload.title)
    return svc.create(db, payload, clock)


@router.get("", response_model=List[EventRead])
def list_events(db: Session = Depends(get_db)):
    return svc.list_all(db)


@router.get("/public", response_model=List[EventRead])
def public_events(db: Session = Depends(get_db)):
    return svc.public(db)


@router.get("/date-range", response_model=List[EventRead])
def events_by_date_range(
    start: date = Query(..., alias="startDate"),
    end: date = Query(..., alias="endDate"),
    db: Session = Depends(get_db),
):
    return svc.by_date_range(db, start, end)


@router.get("/type/{event_type}", response_model=List[EventRead])
def events_by_type(event_type: EventType, db: Session = Depends(get_db)):
    return svc.by_type(db, event_type)


@router.get("/year/{year}", response_model=List[EventRead])
def events_by_year(year: int, month: Optional[int] = Query(None), db: Session = Depends(get_db)):
    """All events of a year, or of one month when `month` is given."""
    if month is not None:
        return svc.by_month(db, year, month)
    return svc.by_year(db, year)


@router.get("/{event_id}", response_model=EventRead)
def get_event(event_id: int, db: Session = Depends(get_db)):
    return svc.get(db, event_id)


@router.put("/{event_id}", response_model=EventRead)
def update_event(
    event_id: int,
    payload: EventCreate,
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    logger.info("PUT /api/events/%s", event_id)
    return svc.update(db, event_id, payload, clock)


@router.delete("/{event_id}", status_code=204)
def delete_event(event_id: int, db: Session = Depends(get_db)):
    logger.info("DELETE /api/events/%s", event_id)
    svc.delete(db, event_id)
    return Response(status_code=204)
