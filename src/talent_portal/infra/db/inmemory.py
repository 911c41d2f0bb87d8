from __future__ import annotations

from typing import Dict, Generic, Iterable, List, Optional, TypeVar
from uuid import UUID

from pydantic import BaseModel

from src.talent_portal.domain.models.candidate import Candidate
from src.talent_portal.domain.models.clinic import Clinic
from src.talent_portal.domain.models.document import CandidateDocument, ClinicDocument
from src.talent_portal.domain.models.journey import Journey, JourneyStage
from src.talent_portal.domain.models.user import User
from src.talent_portal.errors import ValidationError
from src.talent_portal.infra.db.repositories import (
    CandidateDocumentRepository,
    CandidateRepository,
    ClinicDocumentRepository,
    ClinicRepository,
    JourneyRepository,
    Store,
    UserRepository,
)

ModelT = TypeVar("ModelT", bound=BaseModel)


class _InMemoryTable(Generic[ModelT]):
    """Dict keyed by id. Stores and returns copies so callers cannot mutate
    stored state without going through ``save``."""

    def __init__(self) -> None:
        self._rows: Dict[UUID, ModelT] = {}

    def get(self, row_id: UUID) -> Optional[ModelT]:
        row = self._rows.get(row_id)
        if row is None:
            return None
        return row.model_copy(deep=True)

    def put(self, row: ModelT) -> None:
        self._rows[row.id] = row.model_copy(deep=True)  # type: ignore[attr-defined]

    def rows(self) -> List[ModelT]:
        return [row.model_copy(deep=True) for row in self._rows.values()]

    def newest_first(self) -> List[ModelT]:
        return sorted(self.rows(), key=lambda r: r.created_at, reverse=True)  # type: ignore[attr-defined]

    def __len__(self) -> int:
        return len(self._rows)


class InMemoryUserRepository(UserRepository):
    def __init__(self) -> None:
        self._table: _InMemoryTable[User] = _InMemoryTable()

    def get(self, user_id: UUID) -> Optional[User]:
        return self._table.get(user_id)

    def get_by_email(self, email: str) -> Optional[User]:
        wanted = email.lower()
        for user in self._table.rows():
            if user.email.lower() == wanted:
                return user
        return None

    def list_by_filters(
        self,
        *,
        clinic_id: Optional[UUID] = None,
        candidate_id: Optional[UUID] = None,
    ) -> Iterable[User]:
        for user in self._table.newest_first():
            if clinic_id is not None and user.clinic_id != clinic_id:
                continue
            if candidate_id is not None and user.candidate_id != candidate_id:
                continue
            yield user

    def save(self, user: User) -> None:
        existing = self.get_by_email(user.email)
        if existing is not None and existing.id != user.id:
            raise ValidationError("Email already exists.")
        self._table.put(user)


class InMemoryClinicRepository(ClinicRepository):
    def __init__(self) -> None:
        self._table: _InMemoryTable[Clinic] = _InMemoryTable()

    def get(self, clinic_id: UUID) -> Optional[Clinic]:
        return self._table.get(clinic_id)

    def list_all(self) -> Iterable[Clinic]:
        return self._table.newest_first()

    def count(self) -> int:
        return len(self._table)

    def save(self, clinic: Clinic) -> None:
        for other in self._table.rows():
            if other.id != clinic.id and other.registration_number == clinic.registration_number:
                raise ValidationError("Registration number already exists.")
        self._table.put(clinic)


class InMemoryCandidateRepository(CandidateRepository):
    def __init__(self) -> None:
        self._table: _InMemoryTable[Candidate] = _InMemoryTable()

    def get(self, candidate_id: UUID) -> Optional[Candidate]:
        return self._table.get(candidate_id)

    def list_all(self) -> Iterable[Candidate]:
        return self._table.newest_first()

    def count(self) -> int:
        return len(self._table)

    def save(self, candidate: Candidate) -> None:
        for other in self._table.rows():
            if other.id != candidate.id and other.email.lower() == candidate.email.lower():
                raise ValidationError("Email already exists.")
        self._table.put(candidate)


class InMemoryJourneyRepository(JourneyRepository):
    def __init__(self) -> None:
        self._table: _InMemoryTable[Journey] = _InMemoryTable()

    def get(self, journey_id: UUID) -> Optional[Journey]:
        return self._table.get(journey_id)

    def list_by_filters(
        self,
        *,
        clinic_id: Optional[UUID] = None,
        candidate_id: Optional[UUID] = None,
        stage: Optional[JourneyStage] = None,
    ) -> Iterable[Journey]:
        for journey in self._table.newest_first():
            if clinic_id is not None and journey.clinic_id != clinic_id:
                continue
            if candidate_id is not None and journey.candidate_id != candidate_id:
                continue
            if stage is not None and journey.stage != stage:
                continue
            yield journey

    def exists_for(self, clinic_id: UUID, candidate_id: UUID) -> bool:
        return any(True for _ in self.list_by_filters(clinic_id=clinic_id, candidate_id=candidate_id))

    def count(self) -> int:
        return len(self._table)

    def save(self, journey: Journey) -> None:
        self._table.put(journey)


class InMemoryClinicDocumentRepository(ClinicDocumentRepository):
    def __init__(self) -> None:
        self._table: _InMemoryTable[ClinicDocument] = _InMemoryTable()

    def get(self, document_id: UUID) -> Optional[ClinicDocument]:
        return self._table.get(document_id)

    def list_for_clinic(self, clinic_id: UUID) -> Iterable[ClinicDocument]:
        return [d for d in self._table.newest_first() if d.clinic_id == clinic_id]

    def save(self, document: ClinicDocument) -> None:
        self._table.put(document)


class InMemoryCandidateDocumentRepository(CandidateDocumentRepository):
    def __init__(self) -> None:
        self._table: _InMemoryTable[CandidateDocument] = _InMemoryTable()

    def get(self, document_id: UUID) -> Optional[CandidateDocument]:
        return self._table.get(document_id)

    def list_for_candidate(self, candidate_id: UUID, *, kind: Optional[str] = None) -> Iterable[CandidateDocument]:
        return [
            d
            for d in self._table.newest_first()
            if d.candidate_id == candidate_id and (kind is None or d.kind == kind)
        ]

    def save(self, document: CandidateDocument) -> None:
        self._table.put(document)


def build_inmemory_store() -> Store:
    return Store(
        users=InMemoryUserRepository(),
        clinics=InMemoryClinicRepository(),
        candidates=InMemoryCandidateRepository(),
        journeys=InMemoryJourneyRepository(),
        clinic_documents=InMemoryClinicDocumentRepository(),
        candidate_documents=InMemoryCandidateDocumentRepository(),
    )
