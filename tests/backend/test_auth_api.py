from fastapi import status

from src.talent_portal.domain.models.user import UserRole


async def test_login_me_logout(client, login, make_clinic, make_user):
    clinic = make_clinic()
    user = make_user(UserRole.CLIENT, clinic=clinic)

    login_resp = await login(user)
    assert login_resp.json()["role"] == "CLIENT"

    me = await client.get("/me")
    assert me.status_code == status.HTTP_200_OK
    assert me.json()["user_id"] == str(user.id)
    assert me.json()["clinic_id"] == str(clinic.id)

    assert (await client.post("/logout")).status_code == status.HTTP_200_OK
    assert (await client.get("/me")).status_code == status.HTTP_401_UNAUTHORIZED


async def test_login_rejects_bad_credentials(client, owner):
    response = await client.post("/login", json={"email": owner.email, "password": "nope-nope"})

    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json()["error"]["code"] == "invalid_credentials"
    assert (await client.get("/me")).status_code == status.HTTP_401_UNAUTHORIZED


async def test_login_rejects_deactivated_user(client, make_user, password):
    user = make_user(UserRole.OWNER, is_active=False)

    response = await client.post("/login", json={"email": user.email, "password": password})

    assert response.status_code == status.HTTP_401_UNAUTHORIZED


async def test_deactivated_session_stays_anonymous(client, login, store, make_candidate, make_user):
    user = make_user(UserRole.CANDIDATE, candidate=make_candidate())
    await login(user)

    stored = store.users.get(user.id)
    stored.is_active = False
    store.users.save(stored)
    assert (await client.get("/me")).status_code == status.HTTP_401_UNAUTHORIZED

    # Reactivation does not revive the invalidated session.
    stored.is_active = True
    store.users.save(stored)
    assert (await client.get("/me")).status_code == status.HTTP_401_UNAUTHORIZED


async def test_owner_toggles_user_active(client, login, store, owner, make_candidate, make_user):
    user = make_user(UserRole.CANDIDATE, candidate=make_candidate())
    await login(owner)

    response = await client.post(f"/owner/users/{user.id}/toggle-active")

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["is_active"] is False
    assert "password_hash" not in response.json()
    assert store.users.get(user.id).is_active is False

    again = await client.post(f"/owner/users/{user.id}/toggle-active")
    assert again.json()["is_active"] is True
