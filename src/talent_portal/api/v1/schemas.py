from __future__ import annotations

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from src.talent_portal.domain.models.candidate import Candidate
from src.talent_portal.domain.models.clinic import Clinic
from src.talent_portal.domain.models.document import CandidateDocument, ClinicDocument
from src.talent_portal.domain.models.journey import Journey
from src.talent_portal.domain.models.user import User, UserRole
from src.talent_portal.services.journeys.state_machine import stage_label


class FormModel(BaseModel):
    """Request body accepting the portal's camelCase form field names.

    snake_case keys are accepted as well.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class UserSummary(BaseModel):
    """Public view of a login, without the password hash."""

    id: UUID
    email: str
    role: UserRole
    is_active: bool
    clinic_id: Optional[UUID] = None
    candidate_id: Optional[UUID] = None
    created_at: datetime

    @classmethod
    def from_user(cls, user: User) -> "UserSummary":
        return cls.model_validate(user.model_dump(exclude={"password_hash"}))


class JourneyView(BaseModel):
    journey: Journey
    stage_label: str
    clinic: Optional[Clinic] = None
    candidate: Optional[Candidate] = None

    @classmethod
    def build(
        cls,
        journey: Journey,
        *,
        clinic: Optional[Clinic] = None,
        candidate: Optional[Candidate] = None,
    ) -> "JourneyView":
        return cls(journey=journey, stage_label=stage_label(journey.stage), clinic=clinic, candidate=candidate)


class LoginCreatedResponse(BaseModel):
    user: UserSummary
    # Shown once; only the hash is stored.
    password: str


class ClinicDetailResponse(BaseModel):
    clinic: Clinic
    users: List[UserSummary]
    documents: List[ClinicDocument]
    journeys: List[JourneyView]


class CandidateDetailResponse(BaseModel):
    candidate: Candidate
    placed_clinic: Optional[Clinic] = None
    users: List[UserSummary]
    documents: List[CandidateDocument]
    journeys: List[JourneyView]
