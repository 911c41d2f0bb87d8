from __future__ import annotations

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from src.talent_portal.domain.models.user import User, UserRole


class Identity(BaseModel):
    """The acting user as resolved for a single request."""

    model_config = ConfigDict(frozen=True)

    user_id: UUID
    role: UserRole
    is_active: bool = True
    clinic_id: Optional[UUID] = None
    candidate_id: Optional[UUID] = None

    @classmethod
    def from_user(cls, user: User) -> "Identity":
        return cls(
            user_id=user.id,
            role=user.role,
            is_active=user.is_active,
            clinic_id=user.clinic_id,
            candidate_id=user.candidate_id,
        )
