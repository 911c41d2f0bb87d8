from __future__ import annotations

from typing import Optional, Union
from urllib.parse import quote
from uuid import UUID

from fastapi import APIRouter, Depends
from fastapi.responses import FileResponse

from src.talent_portal.domain.models.document import CandidateDocument, ClinicDocument
from src.talent_portal.domain.models.identity import Identity
from src.talent_portal.infra.db.bootstrap import get_store
from src.talent_portal.infra.db.repositories import Store
from src.talent_portal.infra.storage.documents import DocumentStorageBackend, get_document_storage
from src.talent_portal.security import get_identity
from src.talent_portal.services.authorization.gate import DocumentKind
from src.talent_portal.services.authorization.service import DocumentAccessService
from src.talent_portal.services.documents.service import DocumentService

router = APIRouter(prefix="/files", tags=["files"])


def _serve(
    document: Union[ClinicDocument, CandidateDocument],
    store: Store,
    storage: DocumentStorageBackend,
) -> FileResponse:
    path = DocumentService(store, storage).file_path(document.storage_path)
    return FileResponse(
        path,
        media_type=document.mime_type,
        headers={"Content-Disposition": f'inline; filename="{quote(document.original_name)}"'},
    )


@router.get("/clinic/{doc_id}")
async def get_clinic_document(
    doc_id: UUID,
    identity: Optional[Identity] = Depends(get_identity),
    store: Store = Depends(get_store),
    storage: DocumentStorageBackend = Depends(get_document_storage),
) -> FileResponse:
    """Serve a clinic document to the owner or to the clinic's own users."""

    document = DocumentAccessService(store).authorize(identity, DocumentKind.CLINIC, doc_id)
    return _serve(document, store, storage)


@router.get("/candidate/{doc_id}")
async def get_candidate_document(
    doc_id: UUID,
    identity: Optional[Identity] = Depends(get_identity),
    store: Store = Depends(get_store),
    storage: DocumentStorageBackend = Depends(get_document_storage),
) -> FileResponse:
    """Serve a candidate document.

    Besides the owner and the candidate themselves, users of any clinic that
    shares a journey with the candidate may read it, whatever that journey's
    stage.
    """

    document = DocumentAccessService(store).authorize(identity, DocumentKind.CANDIDATE, doc_id)
    return _serve(document, store, storage)
