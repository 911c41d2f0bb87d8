"""Decision procedure for document access.

The rules are keyed by ``(role, document kind)``. Every rule is a plain
function of the identity, the document reference and a link-existence
capability, so the whole table can be exercised without a store.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Optional, Tuple
from uuid import UUID

from src.talent_portal.domain.models.identity import Identity
from src.talent_portal.domain.models.user import UserRole


class DocumentKind(str, Enum):
    CLINIC = "clinic"
    CANDIDATE = "candidate"


class AccessDecision(str, Enum):
    ALLOW = "allow"
    DENY = "deny"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class DocumentRef:
    kind: DocumentKind
    owner_id: UUID


# (clinic_id, candidate_id) -> does at least one journey link them?
LinkExists = Callable[[UUID, UUID], bool]

Rule = Callable[[Identity, DocumentRef, LinkExists], AccessDecision]


def _allow(identity: Identity, document: DocumentRef, link_exists: LinkExists) -> AccessDecision:
    return AccessDecision.ALLOW


def _client_own_clinic(identity: Identity, document: DocumentRef, link_exists: LinkExists) -> AccessDecision:
    if identity.clinic_id is not None and identity.clinic_id == document.owner_id:
        return AccessDecision.ALLOW
    return AccessDecision.DENY


def _candidate_own_record(identity: Identity, document: DocumentRef, link_exists: LinkExists) -> AccessDecision:
    if identity.candidate_id is not None and identity.candidate_id == document.owner_id:
        return AccessDecision.ALLOW
    return AccessDecision.DENY


def _client_linked_candidate(identity: Identity, document: DocumentRef, link_exists: LinkExists) -> AccessDecision:
    # Any journey counts, including rejected and withdrawn ones.
    if identity.clinic_id is None:
        return AccessDecision.DENY
    if link_exists(identity.clinic_id, document.owner_id):
        return AccessDecision.ALLOW
    return AccessDecision.DENY


_RULES: Dict[Tuple[UserRole, DocumentKind], Rule] = {
    (UserRole.OWNER, DocumentKind.CLINIC): _allow,
    (UserRole.OWNER, DocumentKind.CANDIDATE): _allow,
    (UserRole.CLIENT, DocumentKind.CLINIC): _client_own_clinic,
    (UserRole.CANDIDATE, DocumentKind.CANDIDATE): _candidate_own_record,
    (UserRole.CLIENT, DocumentKind.CANDIDATE): _client_linked_candidate,
}


def decide_document_access(
    identity: Optional[Identity],
    document: Optional[DocumentRef],
    link_exists: LinkExists,
) -> AccessDecision:
    """Decide whether ``identity`` may read ``document``.

    ``document`` is ``None`` when the record could not be loaded. Role and
    kind combinations without a rule are denied.
    """

    if document is None:
        return AccessDecision.NOT_FOUND
    if identity is None or not identity.is_active:
        return AccessDecision.DENY
    rule = _RULES.get((identity.role, document.kind))
    if rule is None:
        return AccessDecision.DENY
    return rule(identity, document, link_exists)


def can_access_document(
    identity: Optional[Identity],
    document: DocumentRef,
    link_exists: LinkExists,
) -> bool:
    return decide_document_access(identity, document, link_exists) == AccessDecision.ALLOW
