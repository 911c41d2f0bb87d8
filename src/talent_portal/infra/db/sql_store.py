from __future__ import annotations

import logging
from typing import Generic, Iterable, List, Optional, Type, TypeVar
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from src.talent_portal.domain.models.candidate import Candidate
from src.talent_portal.domain.models.clinic import Clinic
from src.talent_portal.domain.models.document import CandidateDocument, ClinicDocument
from src.talent_portal.domain.models.journey import Journey, JourneyStage
from src.talent_portal.domain.models.user import User
from src.talent_portal.errors import PersistenceError, ValidationError
from src.talent_portal.infra.db.models import (
    CandidateDocumentORM,
    CandidateORM,
    ClinicDocumentORM,
    ClinicORM,
    JourneyORM,
    UserORM,
)
from src.talent_portal.infra.db.repositories import (
    CandidateDocumentRepository,
    CandidateRepository,
    ClinicDocumentRepository,
    ClinicRepository,
    JourneyRepository,
    Store,
    UserRepository,
)
from src.talent_portal.infra.db.session import SessionFactory

logger = logging.getLogger(__name__)

OrmT = TypeVar("OrmT")


class _SqlTable(Generic[OrmT]):
    """Shared get/save/query plumbing over one ORM class.

    Each call opens and closes its own session; there is no unit of work
    spanning several repository calls.
    """

    def __init__(self, session_factory: SessionFactory, orm_cls: Type[OrmT], duplicate_message: str) -> None:
        self._session_factory = session_factory
        self._orm_cls = orm_cls
        self._duplicate_message = duplicate_message

    def get(self, row_id: UUID):
        session = self._session_factory()
        try:
            orm = session.get(self._orm_cls, row_id)
            return None if orm is None else orm.to_domain()  # type: ignore[attr-defined]
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Failed to load {self._orm_cls.__tablename__} {row_id}") from exc  # type: ignore[attr-defined]
        finally:
            session.close()

    def query(self, statement) -> List:
        session = self._session_factory()
        try:
            return [orm.to_domain() for orm in session.scalars(statement).all()]
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Failed to query {self._orm_cls.__tablename__}") from exc  # type: ignore[attr-defined]
        finally:
            session.close()

    def scalar(self, statement):
        session = self._session_factory()
        try:
            return session.scalar(statement)
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Failed to query {self._orm_cls.__tablename__}") from exc  # type: ignore[attr-defined]
        finally:
            session.close()

    def save(self, model) -> None:
        session = self._session_factory()
        try:
            session.merge(self._orm_cls.from_domain(model))  # type: ignore[attr-defined]
            session.commit()
        except IntegrityError as exc:
            session.rollback()
            logger.info("Rejected duplicate %s %s: %s", self._orm_cls.__tablename__, model.id, exc.orig)  # type: ignore[attr-defined]
            raise ValidationError(self._duplicate_message) from exc
        except SQLAlchemyError as exc:
            session.rollback()
            raise PersistenceError(f"Failed to save {self._orm_cls.__tablename__} {model.id}") from exc  # type: ignore[attr-defined]
        finally:
            session.close()


class SqlUserRepository(UserRepository):
    def __init__(self, session_factory: SessionFactory) -> None:
        self._table = _SqlTable(session_factory, UserORM, "Email already exists.")

    def get(self, user_id: UUID) -> Optional[User]:
        return self._table.get(user_id)

    def get_by_email(self, email: str) -> Optional[User]:
        rows = self._table.query(select(UserORM).where(func.lower(UserORM.email) == email.lower()))
        return rows[0] if rows else None

    def list_by_filters(
        self,
        *,
        clinic_id: Optional[UUID] = None,
        candidate_id: Optional[UUID] = None,
    ) -> Iterable[User]:
        statement = select(UserORM).order_by(UserORM.created_at.desc())
        if clinic_id is not None:
            statement = statement.where(UserORM.clinic_id == clinic_id)
        if candidate_id is not None:
            statement = statement.where(UserORM.candidate_id == candidate_id)
        return self._table.query(statement)

    def save(self, user: User) -> None:
        existing = self.get_by_email(user.email)
        if existing is not None and existing.id != user.id:
            raise ValidationError("Email already exists.")
        self._table.save(user)


class SqlClinicRepository(ClinicRepository):
    def __init__(self, session_factory: SessionFactory) -> None:
        self._table = _SqlTable(session_factory, ClinicORM, "Registration number already exists.")

    def get(self, clinic_id: UUID) -> Optional[Clinic]:
        return self._table.get(clinic_id)

    def list_all(self) -> Iterable[Clinic]:
        return self._table.query(select(ClinicORM).order_by(ClinicORM.created_at.desc()))

    def count(self) -> int:
        return self._table.scalar(select(func.count()).select_from(ClinicORM)) or 0

    def save(self, clinic: Clinic) -> None:
        self._table.save(clinic)


class SqlCandidateRepository(CandidateRepository):
    def __init__(self, session_factory: SessionFactory) -> None:
        self._table = _SqlTable(session_factory, CandidateORM, "Email already exists.")

    def get(self, candidate_id: UUID) -> Optional[Candidate]:
        return self._table.get(candidate_id)

    def list_all(self) -> Iterable[Candidate]:
        return self._table.query(select(CandidateORM).order_by(CandidateORM.created_at.desc()))

    def count(self) -> int:
        return self._table.scalar(select(func.count()).select_from(CandidateORM)) or 0

    def save(self, candidate: Candidate) -> None:
        rows = self._table.query(select(CandidateORM).where(func.lower(CandidateORM.email) == candidate.email.lower()))
        if any(row.id != candidate.id for row in rows):
            raise ValidationError("Email already exists.")
        self._table.save(candidate)


class SqlJourneyRepository(JourneyRepository):
    def __init__(self, session_factory: SessionFactory) -> None:
        self._table = _SqlTable(session_factory, JourneyORM, "Journey already exists.")

    def get(self, journey_id: UUID) -> Optional[Journey]:
        return self._table.get(journey_id)

    def list_by_filters(
        self,
        *,
        clinic_id: Optional[UUID] = None,
        candidate_id: Optional[UUID] = None,
        stage: Optional[JourneyStage] = None,
    ) -> Iterable[Journey]:
        statement = select(JourneyORM).order_by(JourneyORM.created_at.desc())
        if clinic_id is not None:
            statement = statement.where(JourneyORM.clinic_id == clinic_id)
        if candidate_id is not None:
            statement = statement.where(JourneyORM.candidate_id == candidate_id)
        if stage is not None:
            statement = statement.where(JourneyORM.stage == stage.value)
        return self._table.query(statement)

    def exists_for(self, clinic_id: UUID, candidate_id: UUID) -> bool:
        statement = (
            select(JourneyORM.id)
            .where(JourneyORM.clinic_id == clinic_id, JourneyORM.candidate_id == candidate_id)
            .limit(1)
        )
        return self._table.scalar(statement) is not None

    def count(self) -> int:
        return self._table.scalar(select(func.count()).select_from(JourneyORM)) or 0

    def save(self, journey: Journey) -> None:
        self._table.save(journey)


class SqlClinicDocumentRepository(ClinicDocumentRepository):
    def __init__(self, session_factory: SessionFactory) -> None:
        self._table = _SqlTable(session_factory, ClinicDocumentORM, "Document already exists.")

    def get(self, document_id: UUID) -> Optional[ClinicDocument]:
        return self._table.get(document_id)

    def list_for_clinic(self, clinic_id: UUID) -> Iterable[ClinicDocument]:
        statement = (
            select(ClinicDocumentORM)
            .where(ClinicDocumentORM.clinic_id == clinic_id)
            .order_by(ClinicDocumentORM.created_at.desc())
        )
        return self._table.query(statement)

    def save(self, document: ClinicDocument) -> None:
        self._table.save(document)


class SqlCandidateDocumentRepository(CandidateDocumentRepository):
    def __init__(self, session_factory: SessionFactory) -> None:
        self._table = _SqlTable(session_factory, CandidateDocumentORM, "Document already exists.")

    def get(self, document_id: UUID) -> Optional[CandidateDocument]:
        return self._table.get(document_id)

    def list_for_candidate(self, candidate_id: UUID, *, kind: Optional[str] = None) -> Iterable[CandidateDocument]:
        statement = (
            select(CandidateDocumentORM)
            .where(CandidateDocumentORM.candidate_id == candidate_id)
            .order_by(CandidateDocumentORM.created_at.desc())
        )
        if kind is not None:
            statement = statement.where(CandidateDocumentORM.kind == kind)
        return self._table.query(statement)

    def save(self, document: CandidateDocument) -> None:
        self._table.save(document)


def build_sql_store(session_factory: SessionFactory) -> Store:
    return Store(
        users=SqlUserRepository(session_factory),
        clinics=SqlClinicRepository(session_factory),
        candidates=SqlCandidateRepository(session_factory),
        journeys=SqlJourneyRepository(session_factory),
        clinic_documents=SqlClinicDocumentRepository(session_factory),
        candidate_documents=SqlCandidateDocumentRepository(session_factory),
    )
