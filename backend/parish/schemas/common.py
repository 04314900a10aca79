# parish/schemas/common.py
from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, field_serializer
from pydantic.alias_generators import to_camel

T = TypeVar("T")

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


class CamelModel(BaseModel):
    """Snake_case in Python, camelCase on the wire; accepts either on input."""

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class TimestampedRead(CamelModel):
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_serializer("created_at", "updated_at")
    def _serialize_timestamp(self, v: Optional[datetime]):
        return v.strftime(TIMESTAMP_FORMAT) if v is not None else None


class ApiResponse(BaseModel, Generic[T]):
    """Envelope used by the Faithful registry endpoints."""

    success: bool = True
    message: Optional[str] = None
    data: Optional[T] = None

    @classmethod
    def ok(cls, data=None, message: Optional[str] = None):
        return cls(success=True, message=message, data=data)


def money(v: Optional[Decimal]):
    """Amounts go out as JSON numbers, not strings."""
    return float(v) if v is not None else None


def blank_to_none(v):
    if isinstance(v, str) and not v.strip():
        return None
    return v.strip() if isinstance(v, str) else v
