# parish/repositories/faithful.py
from __future__ import annotations

from datetime import date
from typing import List, Optional, Sequence, Tuple, Union

from sqlalchemy import delete as sa_delete, func, select
from sqlalchemy.orm import Session

from parish.models.faithful import Faithful, LapseEvent, Ministry


def get(db: Session, faithful_id: int) -> Optional[Faithful]:
    return db.get(Faithful, faithful_id)


def list_all(db: Session) -> List[Faithful]:
    return list(db.execute(select(Faithful).order_by(Faithful.id)).scalars().all())


def save(db: Session, faithful: Faithful) -> Faithful:
    db.add(faithful)
    db.flush()
    return faithful


def delete(db: Session, faithful: Union[Faithful, int]) -> None:
    obj = get(db, faithful) if isinstance(faithful, int) else faithful
    if obj is not None:
        db.delete(obj)
        db.flush()


def exists(db: Session, faithful_id: int) -> bool:
    return db.execute(select(Faithful.id).where(Faithful.id == faithful_id)).first() is not None


# ─────────────────────────────────────────────────────────────────────────────
# Named filters
# ─────────────────────────────────────────────────────────────────────────────

def _many(db: Session, *criteria) -> List[Faithful]:
    stmt = select(Faithful).where(*criteria).order_by(Faithful.name, Faithful.id)
    return list(db.execute(stmt).scalars().all())


def _one(db: Session, *criteria) -> Optional[Faithful]:
    return db.execute(select(Faithful).where(*criteria).limit(1)).scalars().first()


def find_by_name(db: Session, name: str) -> List[Faithful]:
    return _many(db, Faithful.name == name)


def search_by_name(db: Session, term: str) -> List[Faithful]:
    """Case-insensitive substring match on the family name."""
    return _many(db, Faithful.name.ilike(f"%{term}%"))


def find_by_baptism_id(db: Session, baptism_id: str) -> Optional[Faithful]:
    return _one(db, Faithful.baptism_id == baptism_id)


def find_by_confirmation_id(db: Session, confirmation_id: str) -> Optional[Faithful]:
    return _one(db, Faithful.confirmation_id == confirmation_id)


def find_by_matrimony_id(db: Session, matrimony_id: str) -> Optional[Faithful]:
    return _one(db, Faithful.matrimony_id == matrimony_id)


def find_by_spouse_baptism_id(db: Session, spouse_baptism_id: str) -> Optional[Faithful]:
    return _one(db, Faithful.spouse_baptism_id == spouse_baptism_id)


def find_by_parish(db: Session, parish: str) -> List[Faithful]:
    return _many(db, Faithful.parish == parish)


def find_by_subparish(db: Session, subparish: str) -> List[Faithful]:
    return _many(db, Faithful.subparish == subparish)


def find_by_basic_ecclesial_community(db: Session, community: str) -> List[Faithful]:
    return _many(db, Faithful.basic_ecclesial_community == community)


def find_born_between(db: Session, start: date, end: date) -> List[Faithful]:
    return _many(db, Faithful.date_of_birth.between(start, end))


def find_by_relocated(db: Session, relocated: bool = True) -> List[Faithful]:
    return _many(db, Faithful.has_relocated.is_(relocated))


def find_by_deceased(db: Session, deceased: bool = True) -> List[Faithful]:
    return _many(db, Faithful.is_deceased.is_(deceased))


def find_with_all_sacraments(db: Session) -> List[Faithful]:
    return _many(
        db,
        Faithful.date_of_baptism.isnot(None),
        Faithful.date_of_first_communion.isnot(None),
        Faithful.date_of_confirmation.isnot(None),
    )


# ─────────────────────────────────────────────────────────────────────────────
# Counts
# ─────────────────────────────────────────────────────────────────────────────

def count_all(db: Session) -> int:
    return int(db.execute(select(func.count(Faithful.id))).scalar_one())


def count_in_parish(db: Session, parish: str) -> int:
    stmt = select(func.count(Faithful.id)).where(Faithful.parish == parish)
    return int(db.execute(stmt).scalar_one())


def _grouped(db: Session, column) -> List[Tuple[Optional[str], int]]:
    stmt = select(column, func.count(Faithful.id)).group_by(column).order_by(column)
    return [(key, int(n)) for key, n in db.execute(stmt).all()]


def count_by_parish(db: Session) -> List[Tuple[Optional[str], int]]:
    return _grouped(db, Faithful.parish)


def count_by_subparish(db: Session) -> List[Tuple[Optional[str], int]]:
    return _grouped(db, Faithful.subparish)


def count_by_basic_ecclesial_community(db: Session) -> List[Tuple[Optional[str], int]]:
    return _grouped(db, Faithful.basic_ecclesial_community)


# ─────────────────────────────────────────────────────────────────────────────
# Owned children
# ─────────────────────────────────────────────────────────────────────────────

def add_ministries(db: Session, faithful_id: int, ministry_types: Sequence[str]) -> None:
    db.add_all(Ministry(ministry_type=m, faithful_id=faithful_id) for m in ministry_types)


def add_lapse_events(db: Session, faithful_id: int, events: Sequence[LapseEvent]) -> None:
    for ev in events:
        ev.faithful_id = faithful_id
        db.add(ev)


def delete_ministries_for(db: Session, faithful_id: int) -> int:
    res = db.execute(sa_delete(Ministry).where(Ministry.faithful_id == faithful_id))
    return res.rowcount or 0


def delete_lapse_events_for(db: Session, faithful_id: int) -> int:
    res = db.execute(sa_delete(LapseEvent).where(LapseEvent.faithful_id == faithful_id))
    return res.rowcount or 0
