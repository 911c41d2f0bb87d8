from __future__ import annotations

import logging
import secrets
from datetime import datetime, timezone
from typing import Optional, Tuple
from uuid import UUID, uuid4

import bcrypt

from src.talent_portal.config import settings
from src.talent_portal.domain.models.user import User, UserRole
from src.talent_portal.errors import NotFound, ValidationError
from src.talent_portal.infra.db.repositories import Store

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 8


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=settings.bcrypt_rounds)).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Malformed stored hash.
        return False


def generate_password() -> str:
    return f"Zovea!{secrets.randbelow(90000) + 10000}"


class UserService:
    """Provisioning of portal logins by the owner."""

    def __init__(self, store: Store) -> None:
        self._store = store

    def create_login(
        self,
        *,
        role: UserRole,
        email: str,
        password: Optional[str] = None,
        clinic_id: Optional[UUID] = None,
        candidate_id: Optional[UUID] = None,
    ) -> Tuple[User, str]:
        """Create a CLIENT or CANDIDATE login attached to its clinic or candidate.

        When no password is supplied one is generated. Returns the user and
        the plain password, which is not stored anywhere.
        """

        if role == UserRole.CLIENT and (clinic_id is None or self._store.clinics.get(clinic_id) is None):
            raise NotFound(f"clinic {clinic_id}")
        if role == UserRole.CANDIDATE and (candidate_id is None or self._store.candidates.get(candidate_id) is None):
            raise NotFound(f"candidate {candidate_id}")
        if password is not None and len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters.",
                values={"email": email},
            )

        plain = password or generate_password()
        try:
            user = User(
                id=uuid4(),
                email=email,
                password_hash=hash_password(plain),
                role=role,
                is_active=True,
                clinic_id=clinic_id if role == UserRole.CLIENT else None,
                candidate_id=candidate_id if role == UserRole.CANDIDATE else None,
                created_at=datetime.now(timezone.utc),
            )
        except ValueError as exc:
            raise ValidationError("Could not create login.", values={"email": email}) from exc

        self._store.users.save(user)
        logger.info("Created %s login %s", role.value, user.id)
        return user, plain

    def toggle_active(self, user_id: UUID) -> User:
        user = self._store.users.get(user_id)
        if user is None:
            raise NotFound(f"user {user_id}")
        user.is_active = not user.is_active
        self._store.users.save(user)
        logger.info("User %s is now %s", user.id, "active" if user.is_active else "inactive")
        return user
