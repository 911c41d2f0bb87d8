from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from src.talent_portal.api.v1.schemas import JourneyView
from src.talent_portal.domain.models.clinic import Clinic
from src.talent_portal.domain.models.document import CandidateDocument, ClinicDocument
from src.talent_portal.domain.models.identity import Identity
from src.talent_portal.infra.db.bootstrap import get_store
from src.talent_portal.infra.db.repositories import Store
from src.talent_portal.security import require_client
from src.talent_portal.services.clinics.service import ClinicService
from src.talent_portal.services.journeys.service import JourneyService

router = APIRouter(prefix="/client", tags=["client"])


class ClientJourneyView(JourneyView):
    cv_documents: List[CandidateDocument]


class ClientDashboardResponse(BaseModel):
    clinic: Clinic
    documents: List[ClinicDocument]
    journeys: List[ClientJourneyView]


@router.get("", response_model=ClientDashboardResponse)
async def client_dashboard(
    identity: Identity = Depends(require_client),
    store: Store = Depends(get_store),
) -> ClientDashboardResponse:
    """The clinic's own documents and every journey it takes part in.

    Each journey carries the candidate's CV documents, which the clinic can
    open through /files/candidate/{id}.
    """

    clinic = ClinicService(store).get_clinic(identity.clinic_id)
    journeys = []
    for journey in JourneyService(store).list_journeys(clinic_id=clinic.id):
        view = JourneyView.build(journey, candidate=store.candidates.get(journey.candidate_id))
        journeys.append(
            ClientJourneyView(
                **view.model_dump(),
                cv_documents=list(store.candidate_documents.list_for_candidate(journey.candidate_id, kind="CV")),
            )
        )
    return ClientDashboardResponse(
        clinic=clinic,
        documents=list(store.clinic_documents.list_for_clinic(clinic.id)),
        journeys=journeys,
    )
