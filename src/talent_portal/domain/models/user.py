from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, model_validator


class UserRole(str, Enum):
    OWNER = "OWNER"
    CLIENT = "CLIENT"
    CANDIDATE = "CANDIDATE"


class User(BaseModel):
    """A login for one of the three portal roles.

    CLIENT users belong to exactly one clinic and CANDIDATE users to exactly
    one candidate record; OWNER users belong to neither. Users are never
    deleted, only deactivated.
    """

    id: UUID
    email: EmailStr
    # API responses use UserSummary, which leaves this out.
    password_hash: str = Field(repr=False)
    role: UserRole
    is_active: bool = True
    clinic_id: Optional[UUID] = None
    candidate_id: Optional[UUID] = None
    created_at: datetime

    @model_validator(mode="after")
    def _check_relation(self) -> "User":
        if self.role == UserRole.OWNER and (self.clinic_id or self.candidate_id):
            raise ValueError("OWNER users cannot belong to a clinic or candidate")
        if self.role == UserRole.CLIENT and (self.clinic_id is None or self.candidate_id is not None):
            raise ValueError("CLIENT users must belong to exactly one clinic")
        if self.role == UserRole.CANDIDATE and (self.candidate_id is None or self.clinic_id is not None):
            raise ValueError("CANDIDATE users must belong to exactly one candidate")
        return self
