from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from uuid import uuid4

from src.talent_portal.domain.models.candidate import Candidate, CandidateStatus
from src.talent_portal.domain.models.clinic import Clinic
from src.talent_portal.domain.models.journey import JourneyStage
from src.talent_portal.domain.models.user import User, UserRole
from src.talent_portal.infra.db.repositories import Store
from src.talent_portal.services.journeys.service import JourneyService
from src.talent_portal.services.users.service import hash_password

logger = logging.getLogger(__name__)

DEMO_PASSWORD = "Zovea!12345"
DEMO_REGISTRATION_NUMBER = "12345678"
OWNER_EMAIL = "eigenaar@zovea.nl"
CLIENT_EMAIL = "client@voorbeeldkliniek.nl"
CANDIDATE_EMAIL = "kandidaat@zovea.nl"


def _upsert_user(store: Store, *, email: str, role: UserRole, clinic=None, candidate=None) -> User:
    existing = store.users.get_by_email(email)
    user = User(
        id=existing.id if existing else uuid4(),
        email=email,
        password_hash=hash_password(DEMO_PASSWORD),
        role=role,
        is_active=True,
        clinic_id=clinic.id if clinic else None,
        candidate_id=candidate.id if candidate else None,
        created_at=existing.created_at if existing else datetime.now(timezone.utc),
    )
    store.users.save(user)
    return user


def seed_demo_data(store: Store) -> None:
    """Create a demo owner, clinic and candidate with logins.

    Safe to run repeatedly: existing records are reused and the demo logins are
    re-activated with the demo password. The sample journey is only created
    on the first run.
    """

    now = datetime.now(timezone.utc)

    clinic = next(
        (c for c in store.clinics.list_all() if c.registration_number == DEMO_REGISTRATION_NUMBER),
        None,
    )
    if clinic is None:
        clinic = Clinic(
            id=uuid4(),
            name="Voorbeeld Kliniek B.V.",
            address="Hoofdstraat 1, 1234 AB Amsterdam",
            registration_number=DEMO_REGISTRATION_NUMBER,
            contact_name="Sanne de Vries",
            contact_email="contact@voorbeeldkliniek.nl",
            contact_phone="+31 6 12345678",
            notes="Demo-kliniek voor Zovea Talent.",
            created_at=now,
        )
        store.clinics.save(clinic)

    candidate = next((c for c in store.candidates.list_all() if c.email == CANDIDATE_EMAIL), None)
    created_candidate = candidate is None
    if candidate is None:
        candidate = Candidate(
            id=uuid4(),
            first_name="Noor",
            last_name="Jansen",
            email=CANDIDATE_EMAIL,
            phone="+31 6 87654321",
            location="Utrecht (en omgeving)",
            job_wishes="Tandartsassistent, 32 uur, voorkeur voor moderne praktijk met doorgroeimogelijkheden.",
            salary_rate="€ 3.200 p/m (indicatie) / € 35 p/u (zzp)",
            availability="Beschikbaar op dinsdagen en donderdagen; overige dagen in overleg.",
            status=CandidateStatus.ACTIVE,
            notes="Kandidaat zoekt korte reistijd en vaste vrije vrijdag.",
            created_at=now,
        )
        store.candidates.save(candidate)

    owner = _upsert_user(store, email=OWNER_EMAIL, role=UserRole.OWNER)
    _upsert_user(store, email=CLIENT_EMAIL, role=UserRole.CLIENT, clinic=clinic)
    _upsert_user(store, email=CANDIDATE_EMAIL, role=UserRole.CANDIDATE, candidate=candidate)

    if created_candidate:
        JourneyService(store).create_journey(
            clinic_id=clinic.id,
            candidate_id=candidate.id,
            stage=JourneyStage.FIRST_INTERVIEW,
            scheduled_at=now + timedelta(days=3),
            notes="Eerste kennismaking gepland via Teams.",
            created_by_user_id=owner.id,
        )

    logger.info("Seed complete: owner=%s client=%s candidate=%s", OWNER_EMAIL, CLIENT_EMAIL, CANDIDATE_EMAIL)
