# parish/schemas/donation.py
from __future__ import annotations

import datetime as dt
from decimal import Decimal
from typing import Optional

from pydantic import Field, field_serializer

from parish.schemas.common import CamelModel, TimestampedRead, money

_AMOUNT = dict(gt=0, max_digits=12, decimal_places=2)


class DonationCreate(CamelModel):
    faithful_id: int = Field(..., gt=0)
    year: int = Field(..., ge=1900, le=2100)
    amount: Decimal = Field(..., **_AMOUNT)
    date: dt.date
    contribution_type: Optional[str] = Field(None, max_length=50)
    payment_method: Optional[str] = Field(None, max_length=50)
    reference_number: Optional[str] = Field(None, max_length=100)
    notes: Optional[str] = Field(None, max_length=500)
    recorded_by: Optional[str] = Field(None, max_length=100)


class DonationUpdate(CamelModel):
    """Partial update: only the fields that are sent (and non-null) change."""

    year: Optional[int] = Field(None, ge=1900, le=2100)
    amount: Optional[Decimal] = Field(None, **_AMOUNT)
    date: Optional[dt.date] = None
    contribution_type: Optional[str] = Field(None, max_length=50)
    payment_method: Optional[str] = Field(None, max_length=50)
    reference_number: Optional[str] = Field(None, max_length=100)
    notes: Optional[str] = Field(None, max_length=500)
    recorded_by: Optional[str] = Field(None, max_length=100)


class DonationRead(TimestampedRead):
    id: int
    faithful_id: int
    faithful_name: Optional[str] = None
    year: int
    amount: Decimal
    date: dt.date
    contribution_type: Optional[str] = None
    payment_method: Optional[str] = None
    reference_number: Optional[str] = None
    notes: Optional[str] = None
    recorded_by: Optional[str] = None

    # ensure JSON returns a number, not a string
    @field_serializer("amount")
    def _serialize_amount(self, v: Decimal):
        return money(v)


class DonationSummary(CamelModel):
    total_amount: Decimal
    donation_count: int
    average_amount: Decimal
    max_amount: Decimal
    min_amount: Decimal
    period: Optional[str] = None

    @field_serializer("total_amount", "average_amount", "max_amount", "min_amount")
    def _serialize_amounts(self, v: Decimal):
        return money(v)


class TopDonor(CamelModel):
    faithful_id: int
    faithful_name: Optional[str] = None
    total_amount: Decimal

    @field_serializer("total_amount")
    def _serialize_amount(self, v: Decimal):
        return money(v)
