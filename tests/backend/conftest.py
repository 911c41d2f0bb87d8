from datetime import datetime, timezone
from uuid import uuid4

import pytest
from httpx import ASGITransport, AsyncClient

from src.talent_portal.config import settings
from src.talent_portal.domain.models.candidate import Candidate
from src.talent_portal.domain.models.clinic import Clinic
from src.talent_portal.domain.models.document import CandidateDocument, ClinicDocument
from src.talent_portal.domain.models.user import User, UserRole
from src.talent_portal.infra.db.bootstrap import set_store
from src.talent_portal.infra.db.inmemory import build_inmemory_store
from src.talent_portal.infra.storage.documents import LocalDocumentStorageBackend, set_document_storage
from src.talent_portal.main import app
from src.talent_portal.services.users.service import hash_password

PASSWORD = "correct-horse-battery"


@pytest.fixture(autouse=True)
def store(monkeypatch):
    # Minimum bcrypt cost keeps the suite fast.
    monkeypatch.setattr(settings, "bcrypt_rounds", 4)
    return set_store(build_inmemory_store())


@pytest.fixture(autouse=True)
def storage(tmp_path):
    return set_document_storage(LocalDocumentStorageBackend(tmp_path / "uploads"))


@pytest.fixture
async def client():
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as ac:
        yield ac


@pytest.fixture
def make_clinic(store):
    def _make(name="Kliniek Noord", registration_number=None):
        clinic = Clinic(
            id=uuid4(),
            name=name,
            address="Hoofdstraat 1, Amsterdam",
            registration_number=registration_number or uuid4().hex[:8],
            contact_name="Sanne de Vries",
            contact_email="contact@kliniek.example.com",
            created_at=datetime.now(timezone.utc),
        )
        store.clinics.save(clinic)
        return clinic

    return _make


@pytest.fixture
def make_candidate(store):
    def _make(first_name="Noor", email=None):
        candidate = Candidate(
            id=uuid4(),
            first_name=first_name,
            last_name="Jansen",
            email=email or f"{uuid4().hex[:8]}@candidates.example.com",
            location="Utrecht",
            job_wishes="Tandartsassistent, 32 uur",
            salary_rate="35 p/u",
            created_at=datetime.now(timezone.utc),
        )
        store.candidates.save(candidate)
        return candidate

    return _make


@pytest.fixture
def make_user(store):
    def _make(role, *, clinic=None, candidate=None, email=None, is_active=True):
        user = User(
            id=uuid4(),
            email=email or f"{role.value.lower()}-{uuid4().hex[:8]}@example.com",
            password_hash=hash_password(PASSWORD),
            role=role,
            is_active=is_active,
            clinic_id=clinic.id if clinic else None,
            candidate_id=candidate.id if candidate else None,
            created_at=datetime.now(timezone.utc),
        )
        store.users.save(user)
        return user

    return _make


@pytest.fixture
def owner(make_user):
    return make_user(UserRole.OWNER)


@pytest.fixture
def make_clinic_document(store, storage):
    def _make(clinic, *, content=b"%PDF-1.4 clinic", write_file=True):
        name = "contract.pdf"
        if write_file:
            stored_name, path = storage.save_file(content, category="clinic", original_name=name)
        else:
            stored_name, path = "missing.pdf", str(storage.base / "clinic" / "missing.pdf")
        document = ClinicDocument(
            id=uuid4(),
            clinic_id=clinic.id,
            original_name=name,
            stored_name=stored_name,
            mime_type="application/pdf",
            size_bytes=len(content),
            storage_path=path,
            created_at=datetime.now(timezone.utc),
        )
        store.clinic_documents.save(document)
        return document

    return _make


@pytest.fixture
def make_candidate_document(store, storage):
    def _make(candidate, *, kind="CV", content=b"%PDF-1.4 cv", write_file=True):
        name = "cv noor.pdf"
        if write_file:
            stored_name, path = storage.save_file(content, category="candidate", original_name=name)
        else:
            stored_name, path = "missing.pdf", str(storage.base / "candidate" / "missing.pdf")
        document = CandidateDocument(
            id=uuid4(),
            candidate_id=candidate.id,
            kind=kind,
            original_name=name,
            stored_name=stored_name,
            mime_type="application/pdf",
            size_bytes=len(content),
            storage_path=path,
            created_at=datetime.now(timezone.utc),
        )
        store.candidate_documents.save(document)
        return document

    return _make


@pytest.fixture
def login(client):
    async def _login(user, password=PASSWORD):
        response = await client.post("/login", json={"email": user.email, "password": password})
        assert response.status_code == 200, response.text
        return response

    return _login


@pytest.fixture
def password():
    return PASSWORD
