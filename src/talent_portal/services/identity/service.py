from __future__ import annotations

import logging
from typing import MutableMapping, Optional
from uuid import UUID

from src.talent_portal.domain.models.identity import Identity
from src.talent_portal.domain.models.user import User
from src.talent_portal.infra.db.repositories import UserRepository
from src.talent_portal.services.users.service import verify_password

logger = logging.getLogger(__name__)

# Key under which the logged-in user's id is kept in the cookie session.
SESSION_USER_KEY = "user_id"


def resolve_identity(session: MutableMapping[str, object], users: UserRepository) -> Optional[Identity]:
    """Resolve the acting identity for a request, or ``None`` for anonymous.

    A session pointing at a user that no longer exists or has been
    deactivated is invalidated, so the stale id is not looked up again on
    later requests. Absence is never an error.
    """

    raw_user_id = session.get(SESSION_USER_KEY)
    if not raw_user_id:
        return None

    user = None
    try:
        user = users.get(_as_uuid(raw_user_id))
    except ValueError:
        logger.warning("Discarding session with malformed user id")

    if user is None or not user.is_active:
        session.pop(SESSION_USER_KEY, None)
        if user is not None:
            logger.info("Invalidated session of deactivated user %s", user.id)
        return None

    return Identity.from_user(user)


def authenticate(users: UserRepository, email: str, password: str) -> Optional[User]:
    """Return the active user matching the credentials, else ``None``."""

    user = users.get_by_email(email)
    if user is None or not user.is_active:
        logger.info("Rejected login for unknown or inactive account")
        return None
    if not verify_password(password, user.password_hash):
        logger.info("Rejected login for user %s: wrong password", user.id)
        return None
    logger.info("User %s logged in as %s", user.id, user.role.value)
    return user


def start_session(session: MutableMapping[str, object], user: User) -> None:
    session.clear()
    session[SESSION_USER_KEY] = str(user.id)


def end_session(session: MutableMapping[str, object]) -> None:
    session.clear()


def _as_uuid(value: object) -> UUID:
    return value if isinstance(value, UUID) else UUID(str(value))
