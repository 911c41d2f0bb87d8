from __future__ import annotations

from typing import Callable, Optional

from fastapi import Depends, Request

from src.talent_portal.domain.models.identity import Identity
from src.talent_portal.domain.models.user import UserRole
from src.talent_portal.errors import Forbidden, NotAuthenticated
from src.talent_portal.infra.db.bootstrap import get_store
from src.talent_portal.infra.db.repositories import Store
from src.talent_portal.services.identity.service import resolve_identity


async def get_identity(request: Request, store: Store = Depends(get_store)) -> Optional[Identity]:
    """Resolve the caller from the session cookie; ``None`` when anonymous."""

    return resolve_identity(request.session, store.users)


async def require_identity(identity: Optional[Identity] = Depends(get_identity)) -> Identity:
    if identity is None:
        raise NotAuthenticated()
    return identity


def require_role(role: UserRole) -> Callable[..., Identity]:
    """Build a dependency that admits only ``role``.

    Anonymous callers get 401; logged-in callers with another role get 403.
    """

    async def _dependency(identity: Identity = Depends(require_identity)) -> Identity:
        if identity.role != role:
            raise Forbidden(f"{identity.role.value} attempted {role.value}-only resource")
        return identity

    return _dependency


require_owner = require_role(UserRole.OWNER)
require_client = require_role(UserRole.CLIENT)
require_candidate = require_role(UserRole.CANDIDATE)
