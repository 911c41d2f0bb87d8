from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List
from uuid import UUID, uuid4

from pydantic import ValidationError as PydanticValidationError

from src.talent_portal.domain.models.clinic import Clinic
from src.talent_portal.errors import NotFound, ValidationError
from src.talent_portal.infra.db.repositories import Store

logger = logging.getLogger(__name__)


class ClinicService:
    def __init__(self, store: Store) -> None:
        self._store = store

    def list_clinics(self) -> List[Clinic]:
        return list(self._store.clinics.list_all())

    def get_clinic(self, clinic_id: UUID) -> Clinic:
        clinic = self._store.clinics.get(clinic_id)
        if clinic is None:
            raise NotFound(f"clinic {clinic_id}")
        return clinic

    def create_clinic(self, fields: Dict[str, Any]) -> Clinic:
        try:
            clinic = Clinic(id=uuid4(), created_at=datetime.now(timezone.utc), **fields)
        except PydanticValidationError as exc:
            raise ValidationError("Validation failed.", values=fields) from exc
        self._save(clinic, fields)
        logger.info("Created clinic %s", clinic.id)
        return clinic

    def update_clinic(self, clinic_id: UUID, fields: Dict[str, Any]) -> Clinic:
        current = self.get_clinic(clinic_id)
        try:
            clinic = Clinic.model_validate({**current.model_dump(), **fields})
        except PydanticValidationError as exc:
            raise ValidationError("Validation failed.", values=fields) from exc
        self._save(clinic, fields)
        logger.info("Updated clinic %s", clinic.id)
        return clinic

    def _save(self, clinic: Clinic, fields: Dict[str, Any]) -> None:
        try:
            self._store.clinics.save(clinic)
        except ValidationError as exc:
            exc.values = fields
            raise
