# parish/api/intentions.py
from __future__ import annotations

import logging
from datetime import date
from typing import Dict, List

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from parish.dependencies import Clock, get_clock, get_db
from parish.models.intention import IntentionType
from parish.schemas.intention import IntentionListItem, IntentionRead, IntentionRequest
from parish.services import intentions as svc

router = APIRouter(prefix="/api/intentions", tags=["Intentions"])
logger = logging.getLogger(__name__)


@router.post("", response_model=IntentionRead, status_code=201)
def create_intention(
    payload: IntentionRequest,
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    logger.info("POST /api/intentions type=%s", payload.intention_type.value)
    return svc.create(db, payload, clock)


@router.get("", response_model=List[IntentionListItem])
def list_intentions(db: Session = Depends(get_db)):
    return svc.list_all(db)


@router.get("/unpaid", response_model=List[IntentionListItem])
def unpaid_intentions(db: Session = Depends(get_db)):
    return svc.unpaid(db)


@router.get("/period", response_model=List[IntentionListItem])
def intentions_in_period(
    start: date = Query(..., alias="startDate"),
    end: date = Query(..., alias="endDate"),
    db: Session = Depends(get_db),
):
    return svc.by_period(db, start, end)


@router.get("/deceased", response_model=List[IntentionListItem])
def deceased_intentions(
    start: date = Query(..., alias="startDate"),
    end: date = Query(..., alias="endDate"),
    db: Session = Depends(get_db),
):
    return svc.deceased_in_period(db, start, end)


@router.get("/counts-by-type", response_model=Dict[str, int])
def counts_by_type(
    start: date = Query(..., alias="startDate"),
    end: date = Query(..., alias="endDate"),
    db: Session = Depends(get_db),
):
    return svc.counts_by_type(db, start, end)


@router.get("/type/{intention_type}", response_model=List[IntentionListItem])
def intentions_by_type(intention_type: IntentionType, db: Session = Depends(get_db)):
    return svc.by_type(db, intention_type)


@router.get("/mass/{mass_id}", response_model=List[IntentionListItem])
def intentions_by_mass(mass_id: int, db: Session = Depends(get_db)):
    return svc.by_mass(db, mass_id)


@router.get("/faithful/{faithful_id}", response_model=List[IntentionListItem])
def intentions_by_faithful(faithful_id: int, db: Session = Depends(get_db)):
    return svc.by_faithful(db, faithful_id)


@router.get("/{intention_id}", response_model=IntentionRead)
def get_intention(intention_id: int, db: Session = Depends(get_db)):
    return svc.get(db, intention_id)


@router.put("/{intention_id}", response_model=IntentionRead)
def update_intention(
    intention_id: int,
    payload: IntentionRequest,
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    logger.info("PUT /api/intentions/%s", intention_id)
    return svc.update(db, intention_id, payload, clock)


@router.post("/{intention_id}/mark-paid", response_model=IntentionRead)
def mark_paid(intention_id: int, db: Session = Depends(get_db)):
    return svc.mark_paid(db, intention_id)


@router.delete("/{intention_id}", status_code=204)
def delete_intention(intention_id: int, db: Session = Depends(get_db)):
    logger.info("DELETE /api/intentions/%s", intention_id)
    svc.delete(db, intention_id)
    return Response(status_code=204)
