from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional
from uuid import UUID

from pydantic import BaseModel


class JourneyStage(str, Enum):
    FIRST_INTERVIEW = "FIRST_INTERVIEW"
    TRIAL_DAY = "TRIAL_DAY"
    FINAL_OFFER = "FINAL_OFFER"
    PLACED = "PLACED"
    REJECTED = "REJECTED"
    WITHDRAWN = "WITHDRAWN"


class Journey(BaseModel):
    """A tracked recruitment pipeline between one clinic and one candidate.

    The same clinic and candidate may share several journeys (re-engagement);
    each one progresses independently and none is ever deleted.
    """

    id: UUID
    clinic_id: UUID
    candidate_id: UUID
    stage: JourneyStage = JourneyStage.FIRST_INTERVIEW
    scheduled_at: Optional[datetime] = None
    notes: Optional[str] = None
    created_by_user_id: Optional[UUID] = None
    created_at: datetime
