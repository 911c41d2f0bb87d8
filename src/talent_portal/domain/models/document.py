from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel


class StoredFile(BaseModel):
    """Metadata shared by every uploaded document."""

    id: UUID
    original_name: str
    stored_name: str
    mime_type: str
    size_bytes: int
    # Path relative to the working directory, or absolute.
    storage_path: str
    uploaded_by_user_id: Optional[UUID] = None
    created_at: datetime


class ClinicDocument(StoredFile):
    clinic_id: UUID


class CandidateDocument(StoredFile):
    candidate_id: UUID
    # Free-form category tag, e.g. "CV".
    kind: str = "CV"
