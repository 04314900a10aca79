# parish/api/masses.py
from __future__ import annotations

import logging
from datetime import date
from typing import List

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from parish.dependencies import Clock, get_clock, get_db
from parish.models.event import MassType
from parish.schemas.event import MassListItem, MassRead, MassRequest
from parish.services import masses as svc

router = APIRouter(prefix="/api/masses", tags=["Masses"])
logger = logging.getLogger(__name__)

CREATE_EXAMPLE = {
    "massType": "SUNDAY",
    "liturgicalSeason": "ORDINARY_TIME",
    "massDate": "2024-06-09",
    "location": "Main Church",
    "mainCelebrantId": 101,
    "concelebrantIds": [102, 103],
}


@router.post(
    "",
    response_model=MassRead,
    status_code=201,
    openapi_extra={"requestBody": {"content": {"application/json": {"example": CREATE_EXAMPLE}}}},
)
def create_mass(payload: MassRequest, db: Session = Depends(get_db), clock: Clock = Depends(get_clock)):
    return svc.create(db, payload, clock)


@router.get("", response_model=List[MassListItem])
def list_masses(db: Session = Depends(get_db)):
    return svc.list_all(db)


@router.get("/date-range", response_model=List[MassListItem])
def masses_by_date_range(
    start: date = Query(..., alias="startDate"),
    end: date = Query(..., alias="endDate"),
    db: Session = Depends(get_db),
):
    return svc.by_date_range(db, start, end)


@router.get("/date/{day}", response_model=List[MassListItem])
def masses_on_date(day: date, db: Session = Depends(get_db)):
    return svc.by_date(db, day)


@router.get("/type/{mass_type}", response_model=List[MassListItem])
def masses_by_type(mass_type: MassType, db: Session = Depends(get_db)):
    return svc.by_type(db, mass_type)


@router.get("/priest/{priest_id}", response_model=List[MassListItem])
def masses_by_priest(priest_id: int, db: Session = Depends(get_db)):
    return svc.by_priest(db, priest_id)


@router.get("/{mass_id}", response_model=MassRead)
def get_mass(mass_id: int, db: Session = Depends(get_db)):
    return svc.get(db, mass_id)


@router.put("/{mass_id}", response_model=MassRead)
def update_mass(
    mass_id: int,
    payload: MassRequest,
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    return svc.update(db, mass_id, payload, clock)


@router.delete("/{mass_id}", status_code=204)
def delete_mass(mass_id: int, db: Session = Depends(get_db)):
    logger.info("DELETE /api/masses/%s", mass_id)
    svc.delete(db, mass_id)
    return Response(status_code=204)
