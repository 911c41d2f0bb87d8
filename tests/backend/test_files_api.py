from uuid import uuid4

from fastapi import status

from src.talent_portal.domain.models.user import UserRole
from src.talent_portal.services.journeys.service import JourneyService


async def test_client_sees_cv_only_of_linked_candidates(
    client, login, store, make_clinic, make_candidate, make_user, make_candidate_document
):
    c1, c2, k1 = make_clinic(), make_clinic(name="Kliniek Zuid"), make_candidate()
    JourneyService(store).create_journey(clinic_id=c1.id, candidate_id=k1.id, stage="FIRST_INTERVIEW")
    cv = make_candidate_document(k1)

    await login(make_user(UserRole.CLIENT, clinic=c1))
    allowed = await client.get(f"/files/candidate/{cv.id}")
    assert allowed.status_code == status.HTTP_200_OK
    assert allowed.content == b"%PDF-1.4 cv"
    assert allowed.headers["content-type"] == "application/pdf"
    assert allowed.headers["content-disposition"] == 'inline; filename="cv%20noor.pdf"'

    await login(make_user(UserRole.CLIENT, clinic=c2))
    denied = await client.get(f"/files/candidate/{cv.id}")
    assert denied.status_code == status.HTTP_403_FORBIDDEN
    assert denied.json() == {"error": {"code": "forbidden", "message": "Access denied."}}


async def test_rejected_journey_still_grants_access(
    client, login, store, make_clinic, make_candidate, make_user, make_candidate_document
):
    clinic, candidate = make_clinic(), make_candidate()
    service = JourneyService(store)
    journey = service.create_journey(clinic_id=clinic.id, candidate_id=candidate.id)
    service.update_journey(journey.id, stage="REJECTED")
    cv = make_candidate_document(candidate)

    await login(make_user(UserRole.CLIENT, clinic=clinic))
    response = await client.get(f"/files/candidate/{cv.id}")

    assert response.status_code == status.HTTP_200_OK


async def test_clinic_documents(client, login, make_clinic, make_user, make_clinic_document):
    own_clinic, other_clinic = make_clinic(), make_clinic(name="Kliniek Oost")
    own_doc, other_doc = make_clinic_document(own_clinic), make_clinic_document(other_clinic)

    await login(make_user(UserRole.CLIENT, clinic=own_clinic))
    assert (await client.get(f"/files/clinic/{own_doc.id}")).status_code == status.HTTP_200_OK
    assert (await client.get(f"/files/clinic/{other_doc.id}")).status_code == status.HTTP_403_FORBIDDEN


async def test_candidate_documents_for_candidate_users(
    client, login, make_candidate, make_user, make_candidate_document, make_clinic, make_clinic_document
):
    me, someone_else = make_candidate(), make_candidate(first_name="Lotte")
    mine, theirs = make_candidate_document(me), make_candidate_document(someone_else)
    clinic_doc = make_clinic_document(make_clinic())

    await login(make_user(UserRole.CANDIDATE, candidate=me))
    assert (await client.get(f"/files/candidate/{mine.id}")).status_code == status.HTTP_200_OK
    assert (await client.get(f"/files/candidate/{theirs.id}")).status_code == status.HTTP_403_FORBIDDEN
    assert (await client.get(f"/files/clinic/{clinic_doc.id}")).status_code == status.HTTP_403_FORBIDDEN


async def test_owner_reads_everything(
    client, login, owner, make_clinic, make_candidate, make_clinic_document, make_candidate_document
):
    clinic_doc = make_clinic_document(make_clinic())
    cv = make_candidate_document(make_candidate())

    await login(owner)
    assert (await client.get(f"/files/clinic/{clinic_doc.id}")).status_code == status.HTTP_200_OK
    assert (await client.get(f"/files/candidate/{cv.id}")).status_code == status.HTTP_200_OK


async def test_anonymous_is_forbidden(client, make_clinic, make_clinic_document):
    document = make_clinic_document(make_clinic())

    response = await client.get(f"/files/clinic/{document.id}")

    assert response.status_code == status.HTTP_403_FORBIDDEN


async def test_missing_record_is_not_found_even_for_anonymous(client):
    assert (await client.get(f"/files/clinic/{uuid4()}")).status_code == status.HTTP_404_NOT_FOUND
    assert (await client.get(f"/files/candidate/{uuid4()}")).status_code == status.HTTP_404_NOT_FOUND


async def test_missing_file_on_disk_is_not_found(client, login, owner, make_clinic, make_clinic_document):
    document = make_clinic_document(make_clinic(), write_file=False)

    await login(owner)
    response = await client.get(f"/files/clinic/{document.id}")

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["error"]["code"] == "file_not_found"


async def test_deactivated_client_loses_access_mid_session(
    client, login, store, owner, make_clinic, make_user, make_clinic_document
):
    clinic = make_clinic()
    document = make_clinic_document(clinic)
    user = make_user(UserRole.CLIENT, clinic=clinic)

    await login(user)
    assert (await client.get(f"/files/clinic/{document.id}")).status_code == status.HTTP_200_OK

    stored = store.users.get(user.id)
    stored.is_active = False
    store.users.save(stored)

    assert (await client.get(f"/files/clinic/{document.id}")).status_code == status.HTTP_403_FORBIDDEN
