from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional
from uuid import UUID

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, Text, Uuid
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from src.talent_portal.domain.models.candidate import Candidate, CandidateStatus
from src.talent_portal.domain.models.clinic import Clinic
from src.talent_portal.domain.models.document import CandidateDocument, ClinicDocument
from src.talent_portal.domain.models.journey import Journey, JourneyStage
from src.talent_portal.domain.models.user import User, UserRole


class Base(DeclarativeBase):
    pass


def _aware(value: Optional[datetime]) -> Optional[datetime]:
    # SQLite drops tzinfo on the way back; every stored timestamp is UTC.
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class ClinicORM(Base):
    __tablename__ = "clinics"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    address: Mapped[str] = mapped_column(String, nullable=False)
    registration_number: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    contact_name: Mapped[str] = mapped_column(String, nullable=False)
    contact_email: Mapped[str] = mapped_column(String, nullable=False)
    contact_phone: Mapped[str | None] = mapped_column(String, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    @classmethod
    def from_domain(cls, clinic: Clinic) -> "ClinicORM":
        return cls(
            id=clinic.id,
            name=clinic.name,
            address=clinic.address,
            registration_number=clinic.registration_number,
            contact_name=clinic.contact_name,
            contact_email=clinic.contact_email,
            contact_phone=clinic.contact_phone,
            notes=clinic.notes,
            created_at=clinic.created_at,
        )

    def to_domain(self) -> Clinic:
        return Clinic(
            id=self.id,
            name=self.name,
            address=self.address,
            registration_number=self.registration_number,
            contact_name=self.contact_name,
            contact_email=self.contact_email,
            contact_phone=self.contact_phone,
            notes=self.notes,
            created_at=_aware(self.created_at),
        )


class CandidateORM(Base):
    __tablename__ = "candidates"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    first_name: Mapped[str] = mapped_column(String, nullable=False)
    last_name: Mapped[str] = mapped_column(String, nullable=False)
    email: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    phone: Mapped[str | None] = mapped_column(String, nullable=True)
    location: Mapped[str] = mapped_column(String, nullable=False)
    job_wishes: Mapped[str] = mapped_column(Text, nullable=False)
    salary_rate: Mapped[str] = mapped_column(String, nullable=False)
    availability: Mapped[str | None] = mapped_column(String, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(String, nullable=False)
    placed_clinic_id: Mapped[UUID | None] = mapped_column(Uuid, ForeignKey("clinics.id"), nullable=True)
    placed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    @classmethod
    def from_domain(cls, candidate: Candidate) -> "CandidateORM":
        return cls(
            id=candidate.id,
            first_name=candidate.first_name,
            last_name=candidate.last_name,
            email=candidate.email,
            phone=candidate.phone,
            location=candidate.location,
            job_wishes=candidate.job_wishes,
            salary_rate=candidate.salary_rate,
            availability=candidate.availability,
            notes=candidate.notes,
            status=candidate.status.value,
            placed_clinic_id=candidate.placed_clinic_id,
            placed_at=candidate.placed_at,
            created_at=candidate.created_at,
        )

    def to_domain(self) -> Candidate:
        return Candidate(
            id=self.id,
            first_name=self.first_name,
            last_name=self.last_name,
            email=self.email,
            phone=self.phone,
            location=self.location,
            job_wishes=self.job_wishes,
            salary_rate=self.salary_rate,
            availability=self.availability,
            notes=self.notes,
            status=CandidateStatus(self.status),
            placed_clinic_id=self.placed_clinic_id,
            placed_at=_aware(self.placed_at),
            created_at=_aware(self.created_at),
        )


class UserORM(Base):
    __tablename__ = "users"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    email: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    password_hash: Mapped[str] = mapped_column(String, nullable=False)
    role: Mapped[str] = mapped_column(String, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    clinic_id: Mapped[UUID | None] = mapped_column(Uuid, ForeignKey("clinics.id"), nullable=True)
    candidate_id: Mapped[UUID | None] = mapped_column(Uuid, ForeignKey("candidates.id"), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    @classmethod
    def from_domain(cls, user: User) -> "UserORM":
        return cls(
            id=user.id,
            email=user.email,
            password_hash=user.password_hash,
            role=user.role.value,
            is_active=user.is_active,
            clinic_id=user.clinic_id,
            candidate_id=user.candidate_id,
            created_at=user.created_at,
        )

    def to_domain(self) -> User:
        return User(
            id=self.id,
            email=self.email,
            password_hash=self.password_hash,
            role=UserRole(self.role),
            is_active=self.is_active,
            clinic_id=self.clinic_id,
            candidate_id=self.candidate_id,
            created_at=_aware(self.created_at),
        )


class JourneyORM(Base):
    __tablename__ = "journeys"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    clinic_id: Mapped[UUID] = mapped_column(Uuid, ForeignKey("clinics.id"), nullable=False, index=True)
    candidate_id: Mapped[UUID] = mapped_column(Uuid, ForeignKey("candidates.id"), nullable=False, index=True)
    stage: Mapped[str] = mapped_column(String, nullable=False)
    scheduled_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_by_user_id: Mapped[UUID | None] = mapped_column(Uuid, ForeignKey("users.id"), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    @classmethod
    def from_domain(cls, journey: Journey) -> "JourneyORM":
        return cls(
            id=journey.id,
            clinic_id=journey.clinic_id,
            candidate_id=journey.candidate_id,
            stage=journey.stage.value,
            scheduled_at=journey.scheduled_at,
            notes=journey.notes,
            created_by_user_id=journey.created_by_user_id,
            created_at=journey.created_at,
        )

    def to_domain(self) -> Journey:
        return Journey(
            id=self.id,
            clinic_id=self.clinic_id,
            candidate_id=self.candidate_id,
            stage=JourneyStage(self.stage),
            scheduled_at=_aware(self.scheduled_at),
            notes=self.notes,
            created_by_user_id=self.created_by_user_id,
            created_at=_aware(self.created_at),
        )


class ClinicDocumentORM(Base):
    __tablename__ = "clinic_documents"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    clinic_id: Mapped[UUID] = mapped_column(Uuid, ForeignKey("clinics.id"), nullable=False, index=True)
    original_name: Mapped[str] = mapped_column(String, nullable=False)
    stored_name: Mapped[str] = mapped_column(String, nullable=False)
    mime_type: Mapped[str] = mapped_column(String, nullable=False)
    size_bytes: Mapped[int] = mapped_column(Integer, nullable=False)
    storage_path: Mapped[str] = mapped_column(String, nullable=False)
    uploaded_by_user_id: Mapped[UUID | None] = mapped_column(Uuid, ForeignKey("users.id"), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    @classmethod
    def from_domain(cls, document: ClinicDocument) -> "ClinicDocumentORM":
        return cls(
            id=document.id,
            clinic_id=document.clinic_id,
            original_name=document.original_name,
            stored_name=document.stored_name,
            mime_type=document.mime_type,
            size_bytes=document.size_bytes,
            storage_path=document.storage_path,
            uploaded_by_user_id=document.uploaded_by_user_id,
            created_at=document.created_at,
        )

    def to_domain(self) -> ClinicDocument:
        return ClinicDocument(
            id=self.id,
            clinic_id=self.clinic_id,
            original_name=self.original_name,
            stored_name=self.stored_name,
            mime_type=self.mime_type,
            size_bytes=self.size_bytes,
            storage_path=self.storage_path,
            uploaded_by_user_id=self.uploaded_by_user_id,
            created_at=_aware(self.created_at),
        )


class CandidateDocumentORM(Base):
    __tablename__ = "candidate_documents"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    candidate_id: Mapped[UUID] = mapped_column(Uuid, ForeignKey("candidates.id"), nullable=False, index=True)
    kind: Mapped[str] = mapped_column(String, nullable=False, default="CV")
    original_name: Mapped[str] = mapped_column(String, nullable=False)
    stored_name: Mapped[str] = mapped_column(String, nullable=False)
    mime_type: Mapped[str] = mapped_column(String, nullable=False)
    size_bytes: Mapped[int] = mapped_column(Integer, nullable=False)
    storage_path: Mapped[str] = mapped_column(String, nullable=False)
    uploaded_by_user_id: Mapped[UUID | None] = mapped_column(Uuid, ForeignKey("users.id"), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    @classmethod
    def from_domain(cls, document: CandidateDocument) -> "CandidateDocumentORM":
        return cls(
            id=document.id,
            candidate_id=document.candidate_id,
            kind=document.kind,
            original_name=document.original_name,
            stored_name=document.stored_name,
            mime_type=document.mime_type,
            size_bytes=document.size_bytes,
            storage_path=document.storage_path,
            uploaded_by_user_id=document.uploaded_by_user_id,
            created_at=document.created_at,
        )

    def to_domain(self) -> CandidateDocument:
        return CandidateDocument(
            id=self.id,
            candidate_id=self.candidate_id,
            kind=self.kind,
            original_name=self.original_name,
            stored_name=self.stored_name,
            mime_type=self.mime_type,
            size_bytes=self.size_bytes,
            storage_path=self.storage_path,
            uploaded_by_user_id=self.uploaded_by_user_id,
            created_at=_aware(self.created_at),
        )
