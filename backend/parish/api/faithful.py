# parish/api/faithful.py
from __future__ import annotations

import logging
from datetime import date
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from parish.dependencies import Clock, get_clock, get_db
from parish.schemas.common import ApiResponse
from parish.schemas.faithful import FaithfulRead, FaithfulRequest
from parish.services import faithful as svc

router = APIRouter(prefix="/api/faithful", tags=["Faithful"])
logger = logging.getLogger(__name__)


@router.post("", response_model=ApiResponse[FaithfulRead], status_code=201)
def create_faithful(
    payload: FaithfulRequest,
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    logger.info("POST /api/faithful name=%s", payload.name)
    return ApiResponse.ok(svc.create(db, payload, clock), "Faithful created successfully")


@router.get("", response_model=ApiResponse[List[FaithfulRead]])
def list_faithful(db: Session = Depends(get_db)):
    return ApiResponse.ok(svc.list_all(db))


# ─────────────────────────────────────────────────────────────────────────────
# Searches (declared before /{faithful_id})
# ─────────────────────────────────────────────────────────────────────────────

@router.get("/search/name", response_model=ApiResponse[List[FaithfulRead]])
def search_by_name(name: str = Query(..., min_length=1), db: Session = Depends(get_db)):
    return ApiResponse.ok(svc.search_by_name(db, name))


@router.get("/search/exact-name", response_model=ApiResponse[List[FaithfulRead]])
def find_by_exact_name(name: str = Query(..., min_length=1), db: Session = Depends(get_db)):
    return ApiResponse.ok(svc.find_by_name(db, name))


@router.get("/search/parish", response_model=ApiResponse[List[FaithfulRead]])
def search_by_parish(parish: str = Query(...), db: Session = Depends(get_db)):
    return ApiResponse.ok(svc.find_by_parish(db, parish))


@router.get("/search/subparish", response_model=ApiResponse[List[FaithfulRead]])
def search_by_subparish(subparish: str = Query(...), db: Session = Depends(get_db)):
    return ApiResponse.ok(svc.find_by_subparish(db, subparish))


@router.get("/search/bec", response_model=ApiResponse[List[FaithfulRead]])
def search_by_bec(community: str = Query(..., alias="basicEcclesialCommunity"), db: Session = Depends(get_db)):
    return ApiResponse.ok(svc.find_by_basic_ecclesial_community(db, community))


@router.get("/search/baptism", response_model=ApiResponse[FaithfulRead])
def search_by_baptism_id(baptism_id: str = Query(..., alias="baptismId"), db: Session = Depends(get_db)):
    return ApiResponse.ok(svc.find_by_baptism_id(db, baptism_id))


@router.get("/search/confirmation", response_model=ApiResponse[FaithfulRead])
def search_by_confirmation_id(
    confirmation_id: str = Query(..., alias="confirmationId"), db: Session = Depends(get_db)
):
    return ApiResponse.ok(svc.find_by_confirmation_id(db, confirmation_id))


@router.get("/search/matrimony", response_model=ApiResponse[FaithfulRead])
def search_by_matrimony_id(matrimony_id: str = Query(..., alias="matrimonyId"), db: Session = Depends(get_db)):
    return ApiResponse.ok(svc.find_by_matrimony_id(db, matrimony_id))


@router.get("/born-between", response_model=ApiResponse[List[FaithfulRead]])
def born_between(
    start: date = Query(..., alias="startDate"),
    end: date = Query(..., alias="endDate"),
    db: Session = Depends(get_db),
):
    return ApiResponse.ok(svc.born_between(db, start, end))


@router.get("/relocated", response_model=ApiResponse[List[FaithfulRead]])
def relocated(db: Session = Depends(get_db)):
    return ApiResponse.ok(svc.relocated(db))


@router.get("/deceased", response_model=ApiResponse[List[FaithfulRead]])
def deceased(db: Session = Depends(get_db)):
    return ApiResponse.ok(svc.deceased(db))


@router.get("/sacraments/completed", response_model=ApiResponse[List[FaithfulRead]])
def with_all_sacraments(db: Session = Depends(get_db)):
    return ApiResponse.ok(svc.with_all_sacraments(db), "Faithful with all sacraments completed")


# ─────────────────────────────────────────────────────────────────────────────
# Stats
# ─────────────────────────────────────────────────────────────────────────────

@router.get("/stats/count", response_model=ApiResponse[int])
def count(parish: Optional[str] = Query(None), db: Session = Depends(get_db)):
    """Total registry size, or the size of one parish when `parish` is given."""
    if parish:
        return ApiResponse.ok(svc.count_in_parish(db, parish))
    return ApiResponse.ok(svc.count_all(db))


@router.get("/stats/by-parish", response_model=ApiResponse[Dict[str, int]])
def counts_by_parish(db: Session = Depends(get_db)):
    return ApiResponse.ok(svc.counts_by_parish(db))


@router.get("/stats/by-subparish", response_model=ApiResponse[Dict[str, int]])
def counts_by_subparish(db: Session = Depends(get_db)):
    return ApiResponse.ok(svc.counts_by_subparish(db))


@router.get("/stats/by-bec", response_model=ApiResponse[Dict[str, int]])
def counts_by_bec(db: Session = Depends(get_db)):
    return ApiResponse.ok(svc.counts_by_basic_ecclesial_community(db))


# ─────────────────────────────────────────────────────────────────────────────
# By id
# ─────────────────────────────────────────────────────────────────────────────

@router.get("/{faithful_id}", response_model=ApiResponse[FaithfulRead])
def get_faithful(faithful_id: int, db: Session = Depends(get_db)):
    return ApiResponse.ok(svc.get(db, faithful_id))


@router.put("/{faithful_id}", response_model=ApiResponse[FaithfulRead])
def update_faithful(
    faithful_id: int,
    payload: FaithfulRequest,
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    logger.info("PUT /api/faithful/%s", faithful_id)
    return ApiResponse.ok(svc.update(db, faithful_id, payload, clock), "Faithful updated successfully")


@router.delete("/{faithful_id}", response_model=ApiResponse)
def delete_faithful(faithful_id: int, db: Session = Depends(get_db)):
    logger.info("DELETE /api/faithful/%s", faithful_id)
    svc.delete(db, faithful_id)
    return ApiResponse.ok(None, "Faithful deleted successfully")
