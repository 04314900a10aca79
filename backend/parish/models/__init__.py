# parish/models/__init__.py
"""
Central model registry.

Import this once at startup (e.g., in main.py) so SQLAlchemy sees all mapped
classes before relationships between them are resolved.
"""
from parish.db import Base  # re-export Base

from .faithful import Faithful, LapseEvent, Ministry  # noqa: F401
from .priest import Priest, PriestType  # noqa: F401
from .event import (  # noqa: F401
    Event,
    EventCategory,
    EventType,
    LiturgicalSeason,
    Mass,
    MassType,
    mass_concelebrants,
)
from .intention import Intention, IntentionType  # noqa: F401
from .donation import Donation  # noqa: F401
