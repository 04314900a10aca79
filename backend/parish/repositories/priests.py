# parish/repositories/priests.py
from __future__ import annotations

from datetime import date, datetime, time
from typing import Iterable, List, Optional, Tuple, Union

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

from parish.models.event import Event, Mass, mass_concelebrants
from parish.models.priest import Priest, PriestType


def get(db: Session, priest_id: int) -> Optional[Priest]:
    return db.get(Priest, priest_id)


def list_all(db: Session) -> List[Priest]:
    return _many(db)


def save(db: Session, priest: Priest) -> Priest:
    db.add(priest)
    db.flush()
    return priest


def delete(db: Session, priest: Union[Priest, int]) -> None:
    obj = get(db, priest) if isinstance(priest, int) else priest
    if obj is not None:
        db.delete(obj)
        db.flush()


def exists(db: Session, priest_id: int) -> bool:
    return db.execute(select(Priest.id).where(Priest.id == priest_id)).first() is not None


def _many(db: Session, *criteria) -> List[Priest]:
    stmt = select(Priest).where(*criteria).order_by(Priest.names, Priest.id)
    return list(db.execute(stmt).scalars().all())


def find_active(db: Session) -> List[Priest]:
    return _many(db, Priest.is_active.is_(True))


def find_by_type(db: Session, priest_type: PriestType) -> List[Priest]:
    return _many(db, Priest.priest_type == priest_type)


def find_assigned(db: Session) -> List[Priest]:
    return _many(db, Priest.is_assigned.is_(True))


def find_by_email(db: Session, email: str) -> Optional[Priest]:
    return db.execute(select(Priest).where(Priest.email == email).limit(1)).scalars().first()


def find_many(db: Session, ids: Iterable[int]) -> List[Priest]:
    """Priests for `ids`, in the order the ids were given; unknown ids are skipped."""
    ids = list(ids)
    if not ids:
        return []
    found = {p.id: p for p in db.execute(select(Priest).where(Priest.id.in_(ids))).scalars().all()}
    return [found[i] for i in ids if i in found]


def count_all(db: Session) -> int:
    return int(db.execute(select(func.count(Priest.id))).scalar_one())


def count_by_type(db: Session) -> List[Tuple[PriestType, int]]:
    stmt = select(Priest.priest_type, func.count(Priest.id)).group_by(Priest.priest_type)
    return [(t, int(n)) for t, n in db.execute(stmt).all()]


def count_by_ordination_year(db: Session) -> List[Tuple[int, int]]:
    year = func.extract("year", Priest.ordination_date)
    stmt = (
        select(year, func.count(Priest.id))
        .where(Priest.ordination_date.isnot(None))
        .group_by(year)
        .order_by(year)
    )
    return [(int(y), int(n)) for y, n in db.execute(stmt).all()]


def celebrating_in_period(db: Session, start: date, end: date) -> List[Priest]:
    """Distinct priests who celebrated (main or concelebrant) a Mass dated in [start, end]."""
    in_period = Event.event_date.between(start, end)
    main_ids = select(Mass.main_celebrant_id).join(Event, Event.id == Mass.event_id).where(in_period)
    concelebrant_ids = (
        select(mass_concelebrants.c.priest_id)
        .join(Event, Event.id == mass_concelebrants.c.mass_id)
        .where(in_period)
    )
    return _many(db, or_(Priest.id.in_(main_ids), Priest.id.in_(concelebrant_ids)))


def count_created_between(db: Session, start: date, end: date) -> int:
    lo = datetime.combine(start, time.min)
    hi = datetime.combine(end, time.max)
    stmt = select(func.count(Priest.id)).where(Priest.created_at.between(lo, hi))
    return int(db.execute(stmt).scalar_one())


def is_main_celebrant(db: Session, priest_id: int) -> bool:
    stmt = select(Mass.event_id).where(Mass.main_celebrant_id == priest_id).limit(1)
    return db.execute(stmt).first() is not None


def remove_from_concelebrations(db: Session, priest_id: int) -> None:
    db.execute(mass_concelebrants.delete().where(mass_concelebrants.c.priest_id == priest_id))
