from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, EmailStr


class Clinic(BaseModel):
    """A hiring organization (client of the agency)."""

    id: UUID
    name: str
    address: str
    # Chamber of commerce (KvK) registration number; unique per clinic.
    registration_number: str
    contact_name: str
    contact_email: EmailStr
    contact_phone: Optional[str] = None
    notes: Optional[str] = None
    created_at: datetime
