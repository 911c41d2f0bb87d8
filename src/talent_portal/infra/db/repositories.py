from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterable, Optional
from uuid import UUID

from src.talent_portal.domain.models.candidate import Candidate
from src.talent_portal.domain.models.clinic import Clinic
from src.talent_portal.domain.models.document import CandidateDocument, ClinicDocument
from src.talent_portal.domain.models.journey import Journey, JourneyStage
from src.talent_portal.domain.models.user import User


class UserRepository(ABC):
    @abstractmethod
    def get(self, user_id: UUID) -> Optional[User]:
        raise NotImplementedError

    @abstractmethod
    def get_by_email(self, email: str) -> Optional[User]:
        raise NotImplementedError

    @abstractmethod
    def list_by_filters(
        self,
        *,
        clinic_id: Optional[UUID] = None,
        candidate_id: Optional[UUID] = None,
    ) -> Iterable[User]:
        raise NotImplementedError

    @abstractmethod
    def save(self, user: User) -> None:
        """Insert or update. Raises ValidationError when the email is taken."""
        raise NotImplementedError


class ClinicRepository(ABC):
    @abstractmethod
    def get(self, clinic_id: UUID) -> Optional[Clinic]:
        raise NotImplementedError

    @abstractmethod
    def list_all(self) -> Iterable[Clinic]:
        """Yield clinics newest first."""
        raise NotImplementedError

    @abstractmethod
    def count(self) -> int:
        raise NotImplementedError

    @abstractmethod
    def save(self, clinic: Clinic) -> None:
        """Insert or update. Raises ValidationError on a duplicate registration number."""
        raise NotImplementedError


class CandidateRepository(ABC):
    @abstractmethod
    def get(self, candidate_id: UUID) -> Optional[Candidate]:
        raise NotImplementedError

    @abstractmethod
    def list_all(self) -> Iterable[Candidate]:
        """Yield candidates newest first."""
        raise NotImplementedError

    @abstractmethod
    def count(self) -> int:
        raise NotImplementedError

    @abstractmethod
    def save(self, candidate: Candidate) -> None:
        """Insert or update. Raises ValidationError on a duplicate email."""
        raise NotImplementedError


class JourneyRepository(ABC):
    @abstractmethod
    def get(self, journey_id: UUID) -> Optional[Journey]:
        raise NotImplementedError

    @abstractmethod
    def list_by_filters(
        self,
        *,
        clinic_id: Optional[UUID] = None,
        candidate_id: Optional[UUID] = None,
        stage: Optional[JourneyStage] = None,
    ) -> Iterable[Journey]:
        """Yield journeys newest first."""
        raise NotImplementedError

    @abstractmethod
    def exists_for(self, clinic_id: UUID, candidate_id: UUID) -> bool:
        """Return True if any journey links the clinic and candidate, whatever its stage."""
        raise NotImplementedError

    @abstractmethod
    def count(self) -> int:
        raise NotImplementedError

    @abstractmethod
    def save(self, journey: Journey) -> None:
        raise NotImplementedError


class ClinicDocumentRepository(ABC):
    @abstractmethod
    def get(self, document_id: UUID) -> Optional[ClinicDocument]:
        raise NotImplementedError

    @abstractmethod
    def list_for_clinic(self, clinic_id: UUID) -> Iterable[ClinicDocument]:
        raise NotImplementedError

    @abstractmethod
    def save(self, document: ClinicDocument) -> None:
        raise NotImplementedError


class CandidateDocumentRepository(ABC):
    @abstractmethod
    def get(self, document_id: UUID) -> Optional[CandidateDocument]:
        raise NotImplementedError

    @abstractmethod
    def list_for_candidate(self, candidate_id: UUID, *, kind: Optional[str] = None) -> Iterable[CandidateDocument]:
        raise NotImplementedError

    @abstractmethod
    def save(self, document: CandidateDocument) -> None:
        raise NotImplementedError


@dataclass
class Store:
    """Bundle of repositories handed explicitly to services and routes."""

    users: UserRepository
    clinics: ClinicRepository
    candidates: CandidateRepository
    journeys: JourneyRepository
    clinic_documents: ClinicDocumentRepository
    candidate_documents: CandidateDocumentRepository
