from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from pydantic import BaseModel

from src.talent_portal.api.v1.schemas import JourneyView
from src.talent_portal.api.v1.uploads import read_upload
from src.talent_portal.domain.models.candidate import Candidate
from src.talent_portal.domain.models.document import CandidateDocument
from src.talent_portal.domain.models.identity import Identity
from src.talent_portal.infra.db.bootstrap import get_store
from src.talent_portal.infra.db.repositories import Store
from src.talent_portal.infra.storage.documents import DocumentStorageBackend, get_document_storage
from src.talent_portal.security import require_candidate
from src.talent_portal.services.candidates.service import CandidateService
from src.talent_portal.services.documents.service import DocumentService
from src.talent_portal.services.journeys.service import JourneyService

router = APIRouter(prefix="/candidate", tags=["candidate"])


class CandidateDashboardResponse(BaseModel):
    candidate: Candidate
    documents: List[CandidateDocument]
    journeys: List[JourneyView]


@router.get("", response_model=CandidateDashboardResponse)
async def candidate_dashboard(
    identity: Identity = Depends(require_candidate),
    store: Store = Depends(get_store),
) -> CandidateDashboardResponse:
    candidate = CandidateService(store).get_candidate(identity.candidate_id)
    journeys = [
        JourneyView.build(journey, clinic=store.clinics.get(journey.clinic_id))
        for journey in JourneyService(store).list_journeys(candidate_id=candidate.id)
    ]
    return CandidateDashboardResponse(
        candidate=candidate,
        documents=list(store.candidate_documents.list_for_candidate(candidate.id)),
        journeys=journeys,
    )


@router.post("/documents", response_model=CandidateDocument, status_code=status.HTTP_201_CREATED)
async def upload_own_document(
    file: UploadFile = File(...),
    kind: Optional[str] = Form(None),
    identity: Identity = Depends(require_candidate),
    store: Store = Depends(get_store),
    storage: DocumentStorageBackend = Depends(get_document_storage),
) -> CandidateDocument:
    """Upload a document to the caller's own candidate record."""

    content = await read_upload(file)
    return DocumentService(store, storage).upload_candidate_document(
        identity.candidate_id,
        original_name=file.filename,
        content=content,
        mime_type=file.content_type,
        uploaded_by_user_id=identity.user_id,
        kind=kind,
    )
