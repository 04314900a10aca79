# parish/services/sacrament_info.py
"""Sacrament-focused lookups used for certificates and quick searches."""
from __future__ import annotations

import logging
from typing import List

from sqlalchemy.orm import Session

from parish.exceptions import NotFoundError
from parish.mappers import sacrament_info_from_faithful
from parish.repositories import faithful as repo
from parish.schemas.faithful import FaithfulSacramentInfo

logger = logging.getLogger(__name__)


def search(db: Session, name: str) -> List[FaithfulSacramentInfo]:
    logger.debug("Sacrament info search for %r", name)
    return [sacrament_info_from_faithful(f) for f in repo.search_by_name(db, name)]


def get(db: Session, faithful_id: int) -> FaithfulSacramentInfo:
    faithful = repo.get(db, faithful_id)
    if faithful is None:
        raise NotFoundError(f"Faithful not found with id: {faithful_id}")
    return sacrament_info_from_faithful(faithful)
