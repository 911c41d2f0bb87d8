from fastapi import status

from src.talent_portal.domain.models.user import UserRole
from src.talent_portal.services.journeys.service import JourneyService


async def test_client_dashboard_lists_journeys_with_cvs(
    client, login, store, make_clinic, make_candidate, make_user, make_clinic_document, make_candidate_document
):
    clinic, other_clinic = make_clinic(), make_clinic(name="Kliniek Zuid")
    linked, unlinked = make_candidate(), make_candidate(first_name="Lotte")
    JourneyService(store).create_journey(clinic_id=clinic.id, candidate_id=linked.id, stage="TRIAL_DAY")
    JourneyService(store).create_journey(clinic_id=other_clinic.id, candidate_id=unlinked.id)
    contract = make_clinic_document(clinic)
    cv = make_candidate_document(linked)
    make_candidate_document(linked, kind="DIPLOMA")

    await login(make_user(UserRole.CLIENT, clinic=clinic))
    response = await client.get("/client")

    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert body["clinic"]["id"] == str(clinic.id)
    assert [d["id"] for d in body["documents"]] == [str(contract.id)]
    assert len(body["journeys"]) == 1
    journey = body["journeys"][0]
    assert journey["candidate"]["id"] == str(linked.id)
    assert journey["stage_label"] == "Meeloopdag"
    assert [d["id"] for d in journey["cv_documents"]] == [str(cv.id)]


async def test_candidate_dashboard_and_own_upload(client, login, store, make_clinic, make_candidate, make_user):
    clinic, candidate = make_clinic(), make_candidate()
    JourneyService(store).create_journey(clinic_id=clinic.id, candidate_id=candidate.id)
    user = make_user(UserRole.CANDIDATE, candidate=candidate)
    await login(user)

    upload = await client.post("/candidate/documents", files={"file": ("cv.pdf", b"%PDF-1.4 mijn cv", "application/pdf")})
    assert upload.status_code == status.HTTP_201_CREATED
    assert upload.json()["kind"] == "CV"
    assert upload.json()["candidate_id"] == str(candidate.id)

    dashboard = await client.get("/candidate")
    body = dashboard.json()
    assert body["candidate"]["id"] == str(candidate.id)
    assert [d["id"] for d in body["documents"]] == [upload.json()["id"]]
    assert body["journeys"][0]["clinic"]["id"] == str(clinic.id)
    assert body["journeys"][0]["stage_label"] == "1e gesprek"

    served = await client.get(f"/files/candidate/{upload.json()['id']}")
    assert served.content == b"%PDF-1.4 mijn cv"


async def test_upload_without_file_is_rejected(client, login, make_candidate, make_user):
    await login(make_user(UserRole.CANDIDATE, candidate=make_candidate()))

    response = await client.post("/candidate/documents", data={"kind": "CV"})

    assert response.status_code == status.HTTP_400_BAD_REQUEST


async def test_portals_are_role_bound(client, login, owner, make_clinic, make_user):
    assert (await client.get("/client")).status_code == status.HTTP_401_UNAUTHORIZED
    assert (await client.get("/candidate")).status_code == status.HTTP_401_UNAUTHORIZED

    await login(owner)
    assert (await client.get("/client")).status_code == status.HTTP_403_FORBIDDEN
    assert (await client.get("/candidate")).status_code == status.HTTP_403_FORBIDDEN

    await login(make_user(UserRole.CLIENT, clinic=make_clinic()))
    assert (await client.get("/client")).status_code == status.HTTP_200_OK
