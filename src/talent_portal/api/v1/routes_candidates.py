from __future__ import annotations

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from pydantic import EmailStr, Field

from src.talent_portal.api.v1.routes_clinics import CreateLoginForm
from src.talent_portal.api.v1.schemas import (
    CandidateDetailResponse,
    FormModel,
    JourneyView,
    LoginCreatedResponse,
    UserSummary,
)
from src.talent_portal.api.v1.uploads import read_upload
from src.talent_portal.domain.models.candidate import Candidate, CandidateStatus
from src.talent_portal.domain.models.document import CandidateDocument
from src.talent_portal.domain.models.identity import Identity
from src.talent_portal.domain.models.user import UserRole
from src.talent_portal.infra.db.bootstrap import get_store
from src.talent_portal.infra.db.repositories import Store
from src.talent_portal.infra.storage.documents import DocumentStorageBackend, get_document_storage
from src.talent_portal.security import require_owner
from src.talent_portal.services.candidates.service import CandidateService
from src.talent_portal.services.documents.service import DocumentService
from src.talent_portal.services.journeys.service import JourneyService
from src.talent_portal.services.users.service import UserService

router = APIRouter(
    prefix="/owner/candidates",
    tags=["owner", "candidates"],
    dependencies=[Depends(require_owner)],
)


class CandidateForm(FormModel):
    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    email: EmailStr
    phone: Optional[str] = None
    location: str = Field(min_length=2)
    job_wishes: str = Field(min_length=2)
    salary_rate: str = Field(min_length=1)
    availability: Optional[str] = None
    notes: Optional[str] = None

    def to_fields(self) -> dict:
        fields = self.model_dump()
        for optional in ("phone", "availability", "notes"):
            fields[optional] = fields[optional] or None
        return fields


class CandidateEditForm(CandidateForm):
    status: CandidateStatus


@router.get("", response_model=List[Candidate])
async def list_candidates(store: Store = Depends(get_store)) -> List[Candidate]:
    return CandidateService(store).list_candidates()


@router.post("/new", response_model=Candidate, status_code=status.HTTP_201_CREATED)
async def create_candidate(payload: CandidateForm, store: Store = Depends(get_store)) -> Candidate:
    return CandidateService(store).create_candidate(payload.to_fields())


@router.get("/{candidate_id}", response_model=CandidateDetailResponse)
async def get_candidate(candidate_id: UUID, store: Store = Depends(get_store)) -> CandidateDetailResponse:
    candidate = CandidateService(store).get_candidate(candidate_id)
    journeys = [
        JourneyView.build(journey, clinic=store.clinics.get(journey.clinic_id))
        for journey in JourneyService(store).list_journeys(candidate_id=candidate_id)
    ]
    placed_clinic = store.clinics.get(candidate.placed_clinic_id) if candidate.placed_clinic_id else None
    return CandidateDetailResponse(
        candidate=candidate,
        placed_clinic=placed_clinic,
        users=[UserSummary.from_user(u) for u in store.users.list_by_filters(candidate_id=candidate_id)],
        documents=list(store.candidate_documents.list_for_candidate(candidate_id)),
        journeys=journeys,
    )


@router.post("/{candidate_id}/edit", response_model=Candidate)
async def edit_candidate(
    candidate_id: UUID,
    payload: CandidateEditForm,
    store: Store = Depends(get_store),
) -> Candidate:
    return CandidateService(store).update_candidate(candidate_id, payload.to_fields())


@router.post("/{candidate_id}/create-login", response_model=LoginCreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_candidate_login(
    candidate_id: UUID,
    payload: CreateLoginForm,
    store: Store = Depends(get_store),
) -> LoginCreatedResponse:
    user, password = UserService(store).create_login(
        role=UserRole.CANDIDATE,
        email=payload.email,
        password=payload.password or None,
        candidate_id=candidate_id,
    )
    return LoginCreatedResponse(user=UserSummary.from_user(user), password=password)


@router.post("/{candidate_id}/documents", response_model=CandidateDocument, status_code=status.HTTP_201_CREATED)
async def upload_candidate_document(
    candidate_id: UUID,
    file: UploadFile = File(...),
    kind: Optional[str] = Form(None),
    identity: Identity = Depends(require_owner),
    store: Store = Depends(get_store),
    storage: DocumentStorageBackend = Depends(get_document_storage),
) -> CandidateDocument:
    content = await read_upload(file)
    return DocumentService(store, storage).upload_candidate_document(
        candidate_id,
        original_name=file.filename,
        content=content,
        mime_type=file.content_type,
        uploaded_by_user_id=identity.user_id,
        kind=kind,
    )
