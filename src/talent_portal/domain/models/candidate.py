from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, EmailStr


class CandidateStatus(str, Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"


class Candidate(BaseModel):
    """A job seeker tracked by the agency.

    ``placed_clinic_id`` and ``placed_at`` are a denormalized copy of the most
    recent journey that was moved to PLACED. They are never cleared when a
    journey later leaves PLACED.
    """

    id: UUID
    first_name: str
    last_name: str
    email: EmailStr
    phone: Optional[str] = None
    location: str
    job_wishes: str
    salary_rate: str
    availability: Optional[str] = None
    notes: Optional[str] = None
    status: CandidateStatus = CandidateStatus.ACTIVE
    placed_clinic_id: Optional[UUID] = None
    placed_at: Optional[datetime] = None
    created_at: datetime

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
