"""Domain errors raised by the service layer.

The API layer never catches these; `parish.main` maps them to HTTP responses.
"""
from __future__ import annotations

from typing import Dict, Optional


class ParishError(Exception):
    """Base class for every error the services signal on purpose."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(ParishError):
    """A referenced id does not exist."""


class ValidationFailedError(ParishError):
    """A business rule was violated; nothing has been written."""

    def __init__(self, message: str, field_errors: Optional[Dict[str, str]] = None) -> None:
        super().__init__(message)
        self.field_errors = field_errors or {}


class DuplicateIdentifierError(ValidationFailedError):
    """A unique sacrament/registry identifier already belongs to another record."""

    def __init__(self, label: str, value: str, field: str) -> None:
        super().__init__(f"{label} already exists: {value}", {field: f"{label} already exists: {value}"})
        self.value = value
