from __future__ import annotations

import logging
from typing import Optional, Union
from uuid import UUID

from src.talent_portal.domain.models.document import CandidateDocument, ClinicDocument
from src.talent_portal.domain.models.identity import Identity
from src.talent_portal.errors import Forbidden, NotFound
from src.talent_portal.infra.db.repositories import Store
from src.talent_portal.services.authorization.gate import (
    AccessDecision,
    DocumentKind,
    DocumentRef,
    decide_document_access,
)

logger = logging.getLogger(__name__)

Document = Union[ClinicDocument, CandidateDocument]


class DocumentAccessService:
    """Loads a document record and applies the access rules to it."""

    def __init__(self, store: Store) -> None:
        self._store = store

    def _load(self, kind: DocumentKind, document_id: UUID) -> Optional[Document]:
        if kind == DocumentKind.CLINIC:
            return self._store.clinic_documents.get(document_id)
        return self._store.candidate_documents.get(document_id)

    def authorize(self, identity: Optional[Identity], kind: DocumentKind, document_id: UUID) -> Document:
        """Return the document if ``identity`` may read it.

        Raises NotFound for a missing record and Forbidden otherwise.
        """

        document = self._load(kind, document_id)
        ref: Optional[DocumentRef] = None
        if isinstance(document, ClinicDocument):
            ref = DocumentRef(kind=kind, owner_id=document.clinic_id)
        elif isinstance(document, CandidateDocument):
            ref = DocumentRef(kind=kind, owner_id=document.candidate_id)

        decision = decide_document_access(identity, ref, self._store.journeys.exists_for)
        if decision == AccessDecision.NOT_FOUND:
            raise NotFound(f"{kind.value} document {document_id}")
        if decision == AccessDecision.DENY:
            logger.info(
                "Denied %s document %s to %s",
                kind.value,
                document_id,
                identity.role.value if identity else "anonymous",
            )
            raise Forbidden(f"{kind.value} document {document_id}")
        return document  # type: ignore[return-value]
