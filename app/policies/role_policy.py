"""Role-based authorization rules."""

from collections.abc import Iterable
from typing import Optional

from app.models.user import UserRole

from .base_policy import BasePolicy, Decision, DecisionReason, Principal, ResourceOwnership, RuleKind


class RoleAllowlistPolicy(BasePolicy):
    """Allow only principals whose role is in a fixed set."""

    kind = RuleKind.ROLE_ALLOWLIST

    def __init__(self, allowed_roles: Iterable[UserRole]):
        self.allowed_roles = frozenset(UserRole(role) for role in allowed_roles)

    def check(
        self,
        principal: Principal,
        ownership: Optional[ResourceOwnership],
        changes: frozenset[str],
    ) -> Decision:
        if principal.role in self.allowed_roles:
            return Decision.allow(self.kind, DecisionReason.ROLE_ALLOWED)
        return Decision.deny(self.kind, DecisionReason.ROLE_NOT_ALLOWED)


class ElevatedFieldPolicy(BasePolicy):
    """
    Field-level guard: only administrators may set elevated fields.

    Ownership is ignored on purpose; an owner who may update a resource still
    cannot change its role or verification flag.
    """

    kind = RuleKind.ELEVATED_FIELD

    def __init__(self, fields: Iterable[str] = ("role", "verified")):
        self.fields = frozenset(fields)

    def check(
        self,
        principal: Principal,
        ownership: Optional[ResourceOwnership],
        changes: frozenset[str],
    ) -> Decision:
        touched = self.fields & changes
        if not touched:
            return Decision.allow(self.kind, DecisionReason.NO_ELEVATED_FIELDS)

        if principal.is_admin:
            return Decision.allow(self.kind, DecisionReason.ADMIN)

        return Decision.deny(self.kind, DecisionReason.ELEVATED_FIELD_REQUIRES_ADMIN, touched)
