"""
Shared FastAPI dependency helpers.

`get_db` provides a SQLAlchemy session to each request and makes sure it's
closed afterward. `get_clock` provides the time source every write path
stamps `created_at` / `updated_at` with; tests override it with a fixed clock.
"""

from datetime import datetime
from typing import Callable, Generator

from sqlalchemy.orm import Session

from parish.db import SessionLocal

Clock = Callable[[], datetime]


def system_clock() -> datetime:
    """Current local time, truncated to whole seconds."""
    return datetime.now().replace(microsecond=0)


def get_db() -> Generator[Session, None, None]:
    """Yield a database session and close it after the request."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_clock() -> Clock:
    return system_clock
