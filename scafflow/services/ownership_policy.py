"""Ownership policy: who may read or write a project and its child records"""

import enum
from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from scafflow.models.user import UserRole


@dataclass(frozen=True)
class Identity:
    """Authenticated caller as established by the auth gate"""
    id: UUID
    role: str
    email: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value


class AccessDecision(str, enum.Enum):
    """Outcome of an ownership check; WRITE_ALLOWED implies read access"""
    READ_ALLOWED = "read_allowed"
    WRITE_ALLOWED = "write_allowed"
    DENY = "deny"


def decide(identity: Optional[Identity], project_owner_id: Optional[UUID]) -> AccessDecision:
    """
    Decide access for an identity against a project's owner.

    Rules, first match wins:
        1. no identity                -> DENY (callers report it as unauthenticated)
        2. admin                      -> READ_ALLOWED, never write, even for own projects
        3. identity owns the project  -> WRITE_ALLOWED
        4. anyone else                -> DENY

    Args:
        identity: Caller identity, or None when no valid credential was presented
        project_owner_id: owner_id of the project the record belongs to

    Returns:
        AccessDecision
    """
    if identity is None:
        return AccessDecision.DENY
    if identity.is_admin:
        return AccessDecision.READ_ALLOWED
    if project_owner_id is not None and identity.id == project_owner_id:
        return AccessDecision.WRITE_ALLOWED
    return AccessDecision.DENY


def can_read(decision: AccessDecision) -> bool:
    return decision in (AccessDecision.READ_ALLOWED, AccessDecision.WRITE_ALLOWED)


def can_write(decision: AccessDecision) -> bool:
    return decision == AccessDecision.WRITE_ALLOWED
