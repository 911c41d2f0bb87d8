from __future__ import annotations

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status

from src.talent_portal.api.v1.schemas import FormModel, JourneyView
from src.talent_portal.domain.models.identity import Identity
from src.talent_portal.domain.models.journey import Journey
from src.talent_portal.errors import ValidationError
from src.talent_portal.infra.db.bootstrap import get_store
from src.talent_portal.infra.db.repositories import Store
from src.talent_portal.security import require_owner
from src.talent_portal.services.journeys.service import JourneyService

router = APIRouter(
    prefix="/owner/journeys",
    tags=["owner", "journeys"],
    dependencies=[Depends(require_owner)],
)

CREATE_FAILED_MESSAGE = "Could not create journey. Check your input."
UPDATE_FAILED_MESSAGE = "Could not update journey. Check your input."


class JourneyCreateForm(FormModel):
    clinic_id: UUID
    candidate_id: UUID
    stage: Optional[str] = None
    scheduled_at: Optional[str] = None
    notes: Optional[str] = None


class JourneyUpdateForm(FormModel):
    stage: str
    scheduled_at: Optional[str] = None
    notes: Optional[str] = None


def _view(store: Store, journey: Journey) -> JourneyView:
    return JourneyView.build(
        journey,
        clinic=store.clinics.get(journey.clinic_id),
        candidate=store.candidates.get(journey.candidate_id),
    )


@router.get("", response_model=List[JourneyView])
async def list_journeys(store: Store = Depends(get_store)) -> List[JourneyView]:
    return [_view(store, j) for j in JourneyService(store).list_journeys()]


@router.post("/new", response_model=JourneyView, status_code=status.HTTP_201_CREATED)
async def create_journey(
    payload: JourneyCreateForm,
    identity: Identity = Depends(require_owner),
    store: Store = Depends(get_store),
) -> JourneyView:
    try:
        journey = JourneyService(store).create_journey(
            clinic_id=payload.clinic_id,
            candidate_id=payload.candidate_id,
            stage=payload.stage,
            scheduled_at=payload.scheduled_at,
            notes=payload.notes,
            created_by_user_id=identity.user_id,
        )
    except ValidationError as exc:
        raise ValidationError(CREATE_FAILED_MESSAGE, values=payload.model_dump(mode="json", by_alias=True)) from exc
    return _view(store, journey)


@router.post("/{journey_id}/update", response_model=JourneyView)
async def update_journey(
    journey_id: UUID,
    payload: JourneyUpdateForm,
    store: Store = Depends(get_store),
) -> JourneyView:
    try:
        journey = JourneyService(store).update_journey(
            journey_id,
            stage=payload.stage,
            scheduled_at=payload.scheduled_at,
            notes=payload.notes,
        )
    except ValidationError as exc:
        raise ValidationError(UPDATE_FAILED_MESSAGE, values=payload.model_dump(mode="json", by_alias=True)) from exc
    return _view(store, journey)
