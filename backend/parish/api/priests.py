# parish/api/priests.py
from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from parish.dependencies import Clock, get_clock, get_db
from parish.models.priest import PriestType
from parish.schemas.priest import PriestCreate, PriestRead, PriestUpdate
from parish.services import priests as svc

router = APIRouter(prefix="/api/priests", tags=["Priests"])
logger = logging.getLogger(__name__)


@router.post("", response_model=PriestRead, status_code=201)
def create_priest(payload: PriestCreate, db: Session = Depends(get_db), clock: Clock = Depends(get_clock)):
    logger.info("POST /api/priests id=%s", payload.id)
    return svc.create(db, payload, clock)


@router.get("", response_model=List[PriestRead])
def list_priests(db: Session = Depends(get_db)):
    return svc.list_all(db)


@router.get("/active", response_model=List[PriestRead])
def active_priests(db: Session = Depends(get_db)):
    return svc.active(db)


@router.get("/assigned", response_model=List[PriestRead])
def assigned_priests(db: Session = Depends(get_db)):
    return svc.assigned(db)


@router.get("/type/{priest_type}", response_model=List[PriestRead])
def priests_by_type(priest_type: PriestType, db: Session = Depends(get_db)):
    return svc.by_type(db, priest_type)


@router.get("/{priest_id}", response_model=PriestRead)
def get_priest(priest_id: int, db: Session = Depends(get_db)):
    return svc.get(db, priest_id)


@router.put("/{priest_id}", response_model=PriestRead)
def update_priest(
    priest_id: int,
    payload: PriestUpdate,
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    logger.info("PUT /api/priests/%s", priest_id)
    return svc.update(db, priest_id, payload, clock)


@router.delete("/{priest_id}", status_code=204)
def delete_priest(priest_id: int, db: Session = Depends(get_db)):
    logger.info("DELETE /api/priests/%s", priest_id)
    svc.delete(db, priest_id)
    return Response(status_code=204)
