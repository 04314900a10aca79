# parish/mappers.py
"""Entity <-> request/response conversion.

Responses are built from plain fields only, so no model back-reference ever
reaches the serializer. `apply_faithful_request` is a full replacement;
`apply_donation_update` is the only partial (skip-if-null) update shape.
"""
from __future__ import annotations

from typing import List, Optional

from parish.models.donation import Donation
from parish.models.event import Event, Mass
from parish.models.faithful import Faithful, LapseEvent
from parish.models.intention import Intention
from parish.models.priest import Priest
from parish.schemas.donation import DonationRead, DonationUpdate
from parish.schemas.event import EventRead, IntentionSummary, MassListItem, MassRead
from parish.schemas.faithful import FaithfulRead, FaithfulRequest, FaithfulSacramentInfo
from parish.schemas.intention import IntentionListItem, IntentionRead, MassSummary
from parish.schemas.priest import PriestRead, PriestSummary

# request fields that map 1:1 onto Faithful columns
_FAITHFUL_SCALARS = tuple(
    name for name in FaithfulRequest.model_fields if name not in ("ministry", "lapse_history")
)

_DONATION_FIELDS = (
    "year",
    "amount",
    "date",
    "contribution_type",
    "payment_method",
    "reference_number",
    "notes",
    "recorded_by",
)


# ─────────────────────────────────────────────────────────────────────────────
# Faithful
# ─────────────────────────────────────────────────────────────────────────────

def faithful_from_request(payload: FaithfulRequest) -> Faithful:
    entity = Faithful()
    apply_faithful_request(entity, payload)
    return entity


def apply_faithful_request(entity: Faithful, payload: FaithfulRequest) -> None:
    """Overwrite every writable scalar; absent optionals clear the column."""
    for name in _FAITHFUL_SCALARS:
        setattr(entity, name, getattr(payload, name))


def lapse_events_from_request(payload: FaithfulRequest) -> List[LapseEvent]:
    return [
        LapseEvent(
            lapse_type=ev.lapse_type,
            lapse_date=ev.lapse_date,
            lapse_reason=ev.lapse_reason,
            return_date=ev.return_date,
        )
        for ev in payload.lapse_history
    ]


def faithful_to_read(entity: Faithful) -> FaithfulRead:
    return FaithfulRead.model_validate(entity)


def sacrament_info_from_faithful(entity: Faithful) -> FaithfulSacramentInfo:
    return FaithfulSacramentInfo.model_validate(entity)


# ─────────────────────────────────────────────────────────────────────────────
# Priests
# ─────────────────────────────────────────────────────────────────────────────

def priest_to_read(entity: Priest) -> PriestRead:
    return PriestRead.model_validate(entity)


def priest_to_summary(entity: Priest) -> PriestSummary:
    return PriestSummary.model_validate(entity)


# ─────────────────────────────────────────────────────────────────────────────
# Events & Masses
# ─────────────────────────────────────────────────────────────────────────────

def event_to_read(entity: Event) -> EventRead:
    return EventRead.model_validate(entity)


def requestor_name(intention: Intention, faithful: Optional[Faithful] = None) -> Optional[str]:
    """The linked faithful's registered name, else the stored external name."""
    faithful = faithful if faithful is not None else intention.faithful
    if faithful is not None:
        return faithful.name
    return intention.external_faithful_name


def intention_to_summary(entity: Intention) -> IntentionSummary:
    return IntentionSummary(
        id=entity.id,
        intention_type=entity.intention_type,
        intention_text=entity.intention_text,
        is_paid=entity.is_paid,
        offering_amount=entity.offering_amount,
        requestor_name=requestor_name(entity),
    )


def mass_to_read(mass: Mass) -> MassRead:
    event = mass.event
    return MassRead(
        id=mass.event_id,
        title=event.title,
        description=event.description,
        mass_type=mass.mass_type,
        liturgical_season=mass.liturgical_season,
        readings=mass.readings,
        mass_date=event.event_date,
        location=event.location,
        is_public=event.is_public,
        created_at=event.created_at,
        updated_at=event.updated_at,
        main_celebrant=priest_to_summary(mass.main_celebrant),
        concelebrants=[priest_to_summary(p) for p in mass.concelebrants],
        intentions=[intention_to_summary(i) for i in mass.intentions],
    )


def mass_to_list_item(mass: Mass) -> MassListItem:
    event = mass.event
    return MassListItem(
        id=mass.event_id,
        title=event.title,
        mass_type=mass.mass_type,
        mass_date=event.event_date,
        location=event.location,
        main_celebrant_name=mass.main_celebrant.names,
        concelebrant_count=len(mass.concelebrants),
        intention_count=len(mass.intentions),
        liturgical_season=mass.liturgical_season,
    )


# ─────────────────────────────────────────────────────────────────────────────
# Intentions
# ─────────────────────────────────────────────────────────────────────────────

def _mass_summary(mass: Optional[Mass]) -> Optional[MassSummary]:
    if mass is None:
        return None
    return MassSummary(
        id=mass.event_id,
        mass_date=mass.event.event_date,
        mass_type=mass.mass_type,
        main_celebrant_name=mass.main_celebrant.names if mass.main_celebrant else None,
    )


def intention_to_read(entity: Intention) -> IntentionRead:
    return IntentionRead(
        id=entity.id,
        intention_type=entity.intention_type,
        intention_text=entity.intention_text,
        requested_date=entity.requested_date,
        is_paid=entity.is_paid,
        offering_amount=entity.offering_amount,
        created_at=entity.created_at,
        mass=_mass_summary(entity.mass),
        requestor_name=requestor_name(entity),
        faithful_id=entity.faithful_id,
        external_faithful_name=entity.external_faithful_name,
    )


def intention_to_list_item(entity: Intention) -> IntentionListItem:
    return IntentionListItem(
        id=entity.id,
        intention_type=entity.intention_type,
        intention_text=entity.intention_text,
        requested_date=entity.requested_date,
        is_paid=entity.is_paid,
        requestor_name=requestor_name(entity),
        mass_id=entity.mass_id,
        mass_date=entity.mass.event.event_date if entity.mass is not None else None,
    )


# ─────────────────────────────────────────────────────────────────────────────
# Donations
# ─────────────────────────────────────────────────────────────────────────────

def apply_donation_update(entity: Donation, payload: DonationUpdate) -> None:
    """Partial update: fields that are missing or null keep their stored value."""
    for name in _DONATION_FIELDS:
        value = getattr(payload, name)
        if value is not None:
            setattr(entity, name, value)


def donation_to_read(entity: Donation) -> DonationRead:
    return DonationRead(
        id=entity.id,
        faithful_id=entity.faithful_id,
        faithful_name=entity.faithful.name if entity.faithful is not None else None,
        year=entity.year,
        amount=entity.amount,
        date=entity.date,
        contribution_type=entity.contribution_type,
        payment_method=entity.payment_method,
        reference_number=entity.reference_number,
        notes=entity.notes,
        recorded_by=entity.recorded_by,
        created_at=entity.created_at,
        updated_at=entity.updated_at,
    )
