from __future__ import annotations

import re
from datetime import date
from typing import Optional

from pydantic import Field, field_validator

from parish.models.priest import PriestType
from parish.schemas.common import CamelModel, TimestampedRead, blank_to_none

PHONE_RE = re.compile(r"^\+?[0-9\s\-()]{10,}$")
EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class PriestBase(CamelModel):
    names: str = Field(..., min_length=1, max_length=150)
    priest_type: PriestType
    ordination_date: Optional[date] = None
    birth_date: Optional[date] = None
    parish_of_origin: Optional[str] = Field(None, max_length=100)
    email: Optional[str] = Field(None, max_length=120)
    phone: Optional[str] = Field(None, max_length=50)
    profile_picture_url: Optional[str] = Field(None, max_length=255)
    is_assigned: bool = False
    is_active: bool = True

    @field_validator("email", mode="before")
    @classmethod
    def _check_email(cls, v):
        v = blank_to_none(v)
        if v is not None and not EMAIL_RE.match(v):
            raise ValueError("Invalid email format")
        return v

    @field_validator("phone", mode="before")
    @classmethod
    def _check_phone(cls, v):
        v = blank_to_none(v)
        if v is not None and not PHONE_RE.match(v):
            raise ValueError("Invalid phone number")
        return v


class PriestCreate(PriestBase):
    # diocesan registry number, assigned outside this system
    id: int = Field(..., gt=0)


class PriestUpdate(PriestBase):
    pass


class PriestRead(PriestBase, TimestampedRead):
    id: int


class PriestSummary(CamelModel):
    """Flattened celebrant details embedded in Mass responses."""

    id: int
    names: str
    priest_type: PriestType
    email: Optional[str] = None
    phone: Optional[str] = None
    profile_picture_url: Optional[str] = None
