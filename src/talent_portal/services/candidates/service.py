from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List
from uuid import UUID, uuid4

from pydantic import ValidationError as PydanticValidationError

from src.talent_portal.domain.models.candidate import Candidate
from src.talent_portal.errors import NotFound, ValidationError
from src.talent_portal.infra.db.repositories import Store

logger = logging.getLogger(__name__)

# Only the owner-editable profile fields; placement is written by journeys.
_PROTECTED_FIELDS = {"id", "created_at", "placed_clinic_id", "placed_at"}


class CandidateService:
    def __init__(self, store: Store) -> None:
        self._store = store

    def list_candidates(self) -> List[Candidate]:
        return list(self._store.candidates.list_all())

    def get_candidate(self, candidate_id: UUID) -> Candidate:
        candidate = self._store.candidates.get(candidate_id)
        if candidate is None:
            raise NotFound(f"candidate {candidate_id}")
        return candidate

    def create_candidate(self, fields: Dict[str, Any]) -> Candidate:
        editable = {k: v for k, v in fields.items() if k not in _PROTECTED_FIELDS}
        try:
            candidate = Candidate(id=uuid4(), created_at=datetime.now(timezone.utc), **editable)
        except PydanticValidationError as exc:
            raise ValidationError("Validation failed.", values=fields) from exc
        self._save(candidate, fields)
        logger.info("Created candidate %s", candidate.id)
        return candidate

    def update_candidate(self, candidate_id: UUID, fields: Dict[str, Any]) -> Candidate:
        current = self.get_candidate(candidate_id)
        editable = {k: v for k, v in fields.items() if k not in _PROTECTED_FIELDS}
        try:
            candidate = Candidate.model_validate({**current.model_dump(), **editable})
        except PydanticValidationError as exc:
            raise ValidationError("Validation failed.", values=fields) from exc
        self._save(candidate, fields)
        logger.info("Updated candidate %s", candidate.id)
        return candidate

    def _save(self, candidate: Candidate, fields: Dict[str, Any]) -> None:
        try:
            self._store.candidates.save(candidate)
        except ValidationError as exc:
            exc.values = fields
            raise
