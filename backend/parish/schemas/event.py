# parish/schemas/event.py
from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import List, Optional

from pydantic import Field, field_serializer

from parish.models.event import EventCategory, EventType, LiturgicalSeason, MassType
from parish.models.intention import IntentionType
from parish.schemas.common import CamelModel, TimestampedRead, money
from parish.schemas.priest import PriestSummary


# ---------- Events ----------

class EventBase(CamelModel):
    title: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=2000)
    event_date: Optional[date] = None
    location: Optional[str] = Field(None, max_length=200)
    event_type: Optional[EventType] = None
    image_url: Optional[str] = Field(None, max_length=255)
    is_public: bool = False


class EventCreate(EventBase):
    """Payload for creating or fully replacing a general (non-Mass) event."""


class EventRead(EventBase, TimestampedRead):
    id: int
    category: EventCategory


# ---------- Masses ----------

class MassRequest(CamelModel):
    mass_type: MassType
    liturgical_season: Optional[LiturgicalSeason] = None
    readings: Optional[str] = None
    main_celebrant_id: int
    concelebrant_ids: List[int] = Field(default_factory=list)

    # shared event fields
    title: Optional[str] = Field(None, max_length=100)
    description: Optional[str] = Field(None, max_length=2000)
    mass_date: Optional[date] = None
    location: Optional[str] = Field(None, max_length=200)
    is_public: bool = True


class IntentionSummary(CamelModel):
    id: int
    intention_type: IntentionType
    intention_text: str
    is_paid: bool
    offering_amount: Optional[Decimal] = None
    requestor_name: Optional[str] = None

    @field_serializer("offering_amount")
    def _serialize_amount(self, v: Optional[Decimal]):
        return money(v)


class MassRead(TimestampedRead):
    id: int
    title: str
    description: Optional[str] = None
    mass_type: MassType
    liturgical_season: Optional[LiturgicalSeason] = None
    readings: Optional[str] = None
    mass_date: Optional[date] = None
    location: Optional[str] = None
    is_public: bool = True

    main_celebrant: PriestSummary
    concelebrants: List[PriestSummary] = Field(default_factory=list)
    intentions: List[IntentionSummary] = Field(default_factory=list)


class MassListItem(CamelModel):
    """Lightweight row for list views."""

    id: int
    title: str
    mass_type: MassType
    mass_date: Optional[date] = None
    location: Optional[str] = None
    main_celebrant_name: str
    concelebrant_count: int = 0
    intention_count: int = 0
    liturgical_season: Optional[LiturgicalSeason] = None
