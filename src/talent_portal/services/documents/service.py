from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import List, Optional
from uuid import UUID, uuid4

from src.talent_portal.domain.models.document import CandidateDocument, ClinicDocument
from src.talent_portal.errors import NotFound, StorageError, ValidationError
from src.talent_portal.infra.db.repositories import Store
from src.talent_portal.infra.storage.documents import DocumentStorageBackend

logger = logging.getLogger(__name__)

DEFAULT_CANDIDATE_DOCUMENT_KIND = "CV"
DEFAULT_MIME_TYPE = "application/octet-stream"


class DocumentService:
    """Stores uploaded files and records their metadata.

    Who may upload is decided by the routes: the owner for any clinic or
    candidate, a candidate for their own record only.
    """

    def __init__(self, store: Store, storage: DocumentStorageBackend) -> None:
        self._store = store
        self._storage = storage

    def upload_clinic_document(
        self,
        clinic_id: UUID,
        *,
        original_name: Optional[str],
        content: bytes,
        mime_type: Optional[str],
        uploaded_by_user_id: Optional[UUID],
    ) -> ClinicDocument:
        if self._store.clinics.get(clinic_id) is None:
            raise NotFound(f"clinic {clinic_id}")
        name = self._require_name(original_name)
        stored_name, storage_path = self._storage.save_file(content, category="clinic", original_name=name)
        document = ClinicDocument(
            id=uuid4(),
            clinic_id=clinic_id,
            original_name=name,
            stored_name=stored_name,
            mime_type=mime_type or DEFAULT_MIME_TYPE,
            size_bytes=len(content),
            storage_path=storage_path,
            uploaded_by_user_id=uploaded_by_user_id,
            created_at=datetime.now(timezone.utc),
        )
        self._store.clinic_documents.save(document)
        logger.info("Stored clinic document %s for clinic %s (%d bytes)", document.id, clinic_id, len(content))
        return document

    def upload_candidate_document(
        self,
        candidate_id: UUID,
        *,
        original_name: Optional[str],
        content: bytes,
        mime_type: Optional[str],
        uploaded_by_user_id: Optional[UUID],
        kind: Optional[str] = None,
    ) -> CandidateDocument:
        if self._store.candidates.get(candidate_id) is None:
            raise NotFound(f"candidate {candidate_id}")
        name = self._require_name(original_name)
        stored_name, storage_path = self._storage.save_file(content, category="candidate", original_name=name)
        document = CandidateDocument(
            id=uuid4(),
            candidate_id=candidate_id,
            kind=(kind or "").strip() or DEFAULT_CANDIDATE_DOCUMENT_KIND,
            original_name=name,
            stored_name=stored_name,
            mime_type=mime_type or DEFAULT_MIME_TYPE,
            size_bytes=len(content),
            storage_path=storage_path,
            uploaded_by_user_id=uploaded_by_user_id,
            created_at=datetime.now(timezone.utc),
        )
        self._store.candidate_documents.save(document)
        logger.info("Stored candidate document %s for candidate %s (%d bytes)", document.id, candidate_id, len(content))
        return document

    def list_clinic_documents(self, clinic_id: UUID) -> List[ClinicDocument]:
        return list(self._store.clinic_documents.list_for_clinic(clinic_id))

    def list_candidate_documents(self, candidate_id: UUID, *, kind: Optional[str] = None) -> List[CandidateDocument]:
        return list(self._store.candidate_documents.list_for_candidate(candidate_id, kind=kind))

    def file_path(self, storage_path: str):
        """Return the on-disk path of a stored document or raise StorageError."""

        if not self._storage.exists(storage_path):
            logger.warning("Document file missing on disk: %s", storage_path)
            raise StorageError(storage_path)
        return self._storage.resolve(storage_path)

    @staticmethod
    def _require_name(original_name: Optional[str]) -> str:
        if not original_name:
            raise ValidationError("No file chosen.")
        return original_name
