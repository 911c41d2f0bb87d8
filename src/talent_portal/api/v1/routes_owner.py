from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from src.talent_portal.infra.db.bootstrap import get_store
from src.talent_portal.infra.db.repositories import Store
from src.talent_portal.api.v1.schemas import UserSummary
from src.talent_portal.security import require_owner
from src.talent_portal.services.users.service import UserService

router = APIRouter(
    prefix="/owner",
    tags=["owner"],
    dependencies=[Depends(require_owner)],
)


class OwnerStats(BaseModel):
    clinics: int
    candidates: int
    journeys: int


@router.get("", response_model=OwnerStats)
async def owner_dashboard(store: Store = Depends(get_store)) -> OwnerStats:
    return OwnerStats(
        clinics=store.clinics.count(),
        candidates=store.candidates.count(),
        journeys=store.journeys.count(),
    )


@router.post("/users/{user_id}/toggle-active", response_model=UserSummary)
async def toggle_user_active(user_id: UUID, store: Store = Depends(get_store)) -> UserSummary:
    """Activate or deactivate a login. Users are never deleted."""

    user = UserService(store).toggle_active(user_id)
    return UserSummary.from_user(user)
