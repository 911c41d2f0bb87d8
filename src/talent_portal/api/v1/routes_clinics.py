from __future__ import annotations

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, File, UploadFile, status
from pydantic import EmailStr, Field

from src.talent_portal.api.v1.schemas import ClinicDetailResponse, FormModel, JourneyView, LoginCreatedResponse, UserSummary
from src.talent_portal.api.v1.uploads import read_upload
from src.talent_portal.domain.models.clinic import Clinic
from src.talent_portal.domain.models.document import ClinicDocument
from src.talent_portal.domain.models.identity import Identity
from src.talent_portal.domain.models.user import UserRole
from src.talent_portal.infra.db.bootstrap import get_store
from src.talent_portal.infra.db.repositories import Store
from src.talent_portal.infra.storage.documents import DocumentStorageBackend, get_document_storage
from src.talent_portal.security import require_owner
from src.talent_portal.services.clinics.service import ClinicService
from src.talent_portal.services.documents.service import DocumentService
from src.talent_portal.services.journeys.service import JourneyService
from src.talent_portal.services.users.service import UserService

router = APIRouter(
    prefix="/owner/clinics",
    tags=["owner", "clinics"],
    dependencies=[Depends(require_owner)],
)


class ClinicForm(FormModel):
    name: str = Field(min_length=2)
    address: str = Field(min_length=5)
    # Submitted as "kvkNumber" by the portal forms.
    registration_number: str = Field(min_length=4, alias="kvkNumber")
    contact_name: str = Field(min_length=2)
    contact_email: EmailStr
    contact_phone: Optional[str] = None
    notes: Optional[str] = None

    def to_fields(self) -> dict:
        fields = self.model_dump()
        fields["contact_phone"] = fields["contact_phone"] or None
        fields["notes"] = fields["notes"] or None
        return fields


class CreateLoginForm(FormModel):
    email: EmailStr
    password: Optional[str] = None


@router.get("", response_model=List[Clinic])
async def list_clinics(store: Store = Depends(get_store)) -> List[Clinic]:
    return ClinicService(store).list_clinics()


@router.post("/new", response_model=Clinic, status_code=status.HTTP_201_CREATED)
async def create_clinic(payload: ClinicForm, store: Store = Depends(get_store)) -> Clinic:
    return ClinicService(store).create_clinic(payload.to_fields())


@router.get("/{clinic_id}", response_model=ClinicDetailResponse)
async def get_clinic(clinic_id: UUID, store: Store = Depends(get_store)) -> ClinicDetailResponse:
    clinic = ClinicService(store).get_clinic(clinic_id)
    journeys = [
        JourneyView.build(journey, candidate=store.candidates.get(journey.candidate_id))
        for journey in JourneyService(store).list_journeys(clinic_id=clinic_id)
    ]
    return ClinicDetailResponse(
        clinic=clinic,
        users=[UserSummary.from_user(u) for u in store.users.list_by_filters(clinic_id=clinic_id)],
        documents=list(store.clinic_documents.list_for_clinic(clinic_id)),
        journeys=journeys,
    )


@router.post("/{clinic_id}/edit", response_model=Clinic)
async def edit_clinic(clinic_id: UUID, payload: ClinicForm, store: Store = Depends(get_store)) -> Clinic:
    return ClinicService(store).update_clinic(clinic_id, payload.to_fields())


@router.post("/{clinic_id}/create-login", response_model=LoginCreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_clinic_login(
    clinic_id: UUID,
    payload: CreateLoginForm,
    store: Store = Depends(get_store),
) -> LoginCreatedResponse:
    user, password = UserService(store).create_login(
        role=UserRole.CLIENT,
        email=payload.email,
        password=payload.password or None,
        clinic_id=clinic_id,
    )
    return LoginCreatedResponse(user=UserSummary.from_user(user), password=password)


@router.post("/{clinic_id}/documents", response_model=ClinicDocument, status_code=status.HTTP_201_CREATED)
async def upload_clinic_document(
    clinic_id: UUID,
    file: UploadFile = File(...),
    identity: Identity = Depends(require_owner),
    store: Store = Depends(get_store),
    storage: DocumentStorageBackend = Depends(get_document_storage),
) -> ClinicDocument:
    content = await read_upload(file)
    return DocumentService(store, storage).upload_clinic_document(
        clinic_id,
        original_name=file.filename,
        content=content,
        mime_type=file.content_type,
        uploaded_by_user_id=identity.user_id,
    )
