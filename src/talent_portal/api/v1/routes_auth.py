from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, EmailStr

from src.talent_portal.domain.models.identity import Identity
from src.talent_portal.errors import NotAuthenticated
from src.talent_portal.infra.db.bootstrap import get_store
from src.talent_portal.infra.db.repositories import Store
from src.talent_portal.security import require_identity
from src.talent_portal.services.identity.service import authenticate, end_session, start_session

router = APIRouter(prefix="", tags=["auth"])


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class LoginFailed(NotAuthenticated):
    code = "invalid_credentials"
    public_message = "Invalid credentials."


@router.post("/login", response_model=Identity)
async def login(payload: LoginRequest, request: Request, store: Store = Depends(get_store)) -> Identity:
    user = authenticate(store.users, payload.email, payload.password)
    if user is None:
        raise LoginFailed()
    start_session(request.session, user)
    return Identity.from_user(user)


@router.post("/logout")
async def logout(request: Request) -> dict:
    end_session(request.session)
    return {"status": "ok"}


@router.get("/me", response_model=Identity)
async def me(identity: Identity = Depends(require_identity)) -> Identity:
    return identity
