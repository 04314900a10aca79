from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from pydantic import Field, field_serializer, field_validator

from parish.models.event import MassType
from parish.models.intention import IntentionType
from parish.schemas.common import TIMESTAMP_FORMAT, CamelModel, blank_to_none, money


class IntentionRequest(CamelModel):
    intention_type: IntentionType
    intention_text: str = Field(..., min_length=1, max_length=1000)
    requested_date: Optional[date] = None
    is_paid: Optional[bool] = None
    offering_amount: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)
    mass_id: Optional[int] = None

    # exactly one of these identifies the requestor
    faithful_id: Optional[int] = None
    external_faithful_name: Optional[str] = Field(None, max_length=150)

    @field_validator("external_faithful_name", mode="before")
    @classmethod
    def _blank_name(cls, v):
        return blank_to_none(v)


class MassSummary(CamelModel):
    id: int
    mass_date: Optional[date] = None
    mass_type: MassType
    main_celebrant_name: Optional[str] = None


class IntentionRead(CamelModel):
    id: int
    intention_type: IntentionType
    intention_text: str
    requested_date: Optional[date] = None
    is_paid: bool
    offering_amount: Optional[Decimal] = None
    created_at: Optional[datetime] = None

    mass: Optional[MassSummary] = None

    requestor_name: Optional[str] = None
    faithful_id: Optional[int] = None
    external_faithful_name: Optional[str] = None

    @field_serializer("offering_amount")
    def _serialize_amount(self, v: Optional[Decimal]):
        return money(v)

    @field_serializer("created_at")
    def _serialize_created(self, v: Optional[datetime]):
        return v.strftime(TIMESTAMP_FORMAT) if v is not None else None


class IntentionListItem(CamelModel):
    id: int
    intention_type: IntentionType
    intention_text: str
    requested_date: Optional[date] = None
    is_paid: bool
    requestor_name: Optional[str] = None
    mass_id: Optional[int] = None
    mass_date: Optional[date] = None
