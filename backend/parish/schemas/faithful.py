# parish/schemas/faithful.py
from __future__ import annotations

from datetime import date
from typing import List, Optional

from pydantic import Field, field_validator

from parish.schemas.common import CamelModel, TimestampedRead, blank_to_none


class LapseEventIn(CamelModel):
    lapse_type: str = Field(..., min_length=1, max_length=50)
    lapse_date: Optional[date] = None
    lapse_reason: Optional[str] = Field(None, max_length=500)
    return_date: Optional[date] = None


class FaithfulRequest(CamelModel):
    """Registration and full-record update payload.

    Updates replace every writable field with what is sent here, including
    the ministry and lapse-history lists; missing optional fields clear the
    stored value.
    """

    # --- identity ---
    firstname: str = Field(..., min_length=2, max_length=100)
    name: str = Field(..., min_length=2, max_length=100)
    father_name: str = Field(..., min_length=1, max_length=100)
    mother_name: str = Field(..., min_length=1, max_length=100)
    godparent_name: Optional[str] = Field(None, max_length=100)
    baptism_minister: Optional[str] = Field(None, max_length=100)
    date_of_birth: Optional[date] = None

    # --- sacraments ---
    date_of_baptism: Optional[date] = None
    baptism_id: Optional[str] = Field(None, max_length=50)
    date_of_first_communion: Optional[date] = None
    date_of_confirmation: Optional[date] = None
    confirmation_id: Optional[str] = Field(None, max_length=50)
    date_of_matrimony: Optional[date] = None
    matrimony_id: Optional[str] = Field(None, max_length=50)
    spouse_name: Optional[str] = Field(None, max_length=100)
    spouse_baptism_id: Optional[str] = Field(None, max_length=50)

    # --- ordination ---
    diaconate: bool = False
    diaconate_date: Optional[date] = None
    priesthood: bool = False
    priesthood_date: Optional[date] = None
    episcopate: bool = False
    episcopate_date: Optional[date] = None

    # --- religious profession ---
    congregation_name: Optional[str] = Field(None, max_length=100)
    temporal_profession: bool = False
    temporal_profession_date: Optional[date] = None
    permanent_profession: bool = False
    permanent_profession_date: Optional[date] = None

    # --- ministry / lapse history ---
    ministry: List[str] = Field(default_factory=list)
    other_ministry_details: Optional[str] = Field(None, max_length=255)
    lapse_history: List[LapseEventIn] = Field(default_factory=list)

    # --- relocation & death ---
    has_relocated: bool = False
    new_parish_name: Optional[str] = Field(None, max_length=100)
    is_deceased: bool = False
    date_of_death: Optional[date] = None

    # --- territory ---
    diocese: str = Field(..., min_length=1, max_length=50)
    parish: str = Field(..., min_length=1, max_length=100)
    subparish: Optional[str] = Field(None, max_length=100)
    basic_ecclesial_community: Optional[str] = Field(None, max_length=100)

    @field_validator("baptism_id", "confirmation_id", "matrimony_id", "spouse_baptism_id", mode="before")
    @classmethod
    def _empty_id_is_absent(cls, v):
        # an identifier is either absent or a real value, never ""
        return blank_to_none(v)

    @field_validator("ministry")
    @classmethod
    def _clean_ministries(cls, v: List[str]) -> List[str]:
        return [m.strip() for m in v if m and m.strip()]


class MinistryRead(CamelModel):
    id: int
    ministry_type: str


class LapseEventRead(CamelModel):
    id: int
    lapse_type: str
    lapse_date: Optional[date] = None
    lapse_reason: Optional[str] = None
    return_date: Optional[date] = None


class FaithfulRead(TimestampedRead):
    id: int

    firstname: Optional[str] = None
    name: str
    father_name: Optional[str] = None
    mother_name: Optional[str] = None
    godparent_name: Optional[str] = None
    baptism_minister: Optional[str] = None
    date_of_birth: Optional[date] = None

    date_of_baptism: Optional[date] = None
    baptism_id: Optional[str] = None
    date_of_first_communion: Optional[date] = None
    date_of_confirmation: Optional[date] = None
    confirmation_id: Optional[str] = None
    date_of_matrimony: Optional[date] = None
    matrimony_id: Optional[str] = None
    spouse_name: Optional[str] = None
    spouse_baptism_id: Optional[str] = None

    diaconate: bool = False
    diaconate_date: Optional[date] = None
    priesthood: bool = False
    priesthood_date: Optional[date] = None
    episcopate: bool = False
    episcopate_date: Optional[date] = None

    congregation_name: Optional[str] = None
    temporal_profession: bool = False
    temporal_profession_date: Optional[date] = None
    permanent_profession: bool = False
    permanent_profession_date: Optional[date] = None

    ministries: List[MinistryRead] = Field(default_factory=list)
    other_ministry_details: Optional[str] = None
    lapse_events: List[LapseEventRead] = Field(default_factory=list)

    has_relocated: bool = False
    new_parish_name: Optional[str] = None
    is_deceased: bool = False
    date_of_death: Optional[date] = None

    diocese: Optional[str] = None
    parish: Optional[str] = None
    subparish: Optional[str] = None
    basic_ecclesial_community: Optional[str] = None


class FaithfulSacramentInfo(CamelModel):
    """Sacrament-focused read view (certificates, quick lookups)."""

    id: int
    firstname: Optional[str] = None
    name: str
    father_name: Optional[str] = None
    mother_name: Optional[str] = None
    godparent_name: Optional[str] = None
    date_of_birth: Optional[date] = None

    diocese: Optional[str] = None
    parish: Optional[str] = None
    subparish: Optional[str] = None
    basic_ecclesial_community: Optional[str] = None

    date_of_baptism: Optional[date] = None
    baptism_id: Optional[str] = None
    baptism_minister: Optional[str] = None
    date_of_first_communion: Optional[date] = None
    date_of_confirmation: Optional[date] = None
    confirmation_id: Optional[str] = None
    date_of_matrimony: Optional[date] = None
    matrimony_id: Optional[str] = None
    spouse_name: Optional[str] = None
    spouse_baptism_id: Optional[str] = None
