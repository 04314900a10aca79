# parish/api/sacrament_info.py
from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from parish.dependencies import get_db
from parish.schemas.faithful import FaithfulSacramentInfo
from parish.services import sacrament_info as svc

# shares the /api/faithful prefix; included ahead of the Faithful router so
# /search is not read as an id
router = APIRouter(prefix="/api/faithful", tags=["Sacrament info"])


@router.get("/search", response_model=List[FaithfulSacramentInfo])
def search_sacrament_info(name: str = Query(..., min_length=1), db: Session = Depends(get_db)):
    return svc.search(db, name)


@router.get("/{faithful_id}/sacrament-info", response_model=FaithfulSacramentInfo)
def get_sacrament_info(faithful_id: int, db: Session = Depends(get_db)):
    return svc.get(db, faithful_id)
