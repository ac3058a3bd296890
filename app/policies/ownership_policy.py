"""Ownership-based authorization rules."""

from typing import Optional

from .base_policy import BasePolicy, Decision, DecisionReason, Principal, ResourceOwnership, RuleKind


class SelfOrAdminPolicy(BasePolicy):
    """
    Allow the user the resource belongs to, or any administrator.

    Used for user profiles, favorites and saved searches.
    """

    kind = RuleKind.SELF_OR_ADMIN

    def check(
        self,
        principal: Principal,
        ownership: Optional[ResourceOwnership],
        changes: frozenset[str],
    ) -> Decision:
        owner_id = ownership.owner_id if ownership else None

        if owner_id is not None and principal.id == owner_id:
            return Decision.allow(self.kind, DecisionReason.SELF)

        if principal.is_admin:
            return Decision.allow(self.kind, DecisionReason.ADMIN)

        return Decision.deny(self.kind, DecisionReason.NOT_SELF)


class OwnerOrAdminPolicy(BasePolicy):
    """
    Allow the owner of the parent property, or any administrator.

    Used for property update/delete and for media upload, update and delete.
    """

    kind = RuleKind.OWNER_OR_ADMIN

    def check(
        self,
        principal: Principal,
        ownership: Optional[ResourceOwnership],
        changes: frozenset[str],
    ) -> Decision:
        parent_owner_id = ownership.parent_owner_id if ownership else None

        if parent_owner_id is not None and principal.id == parent_owner_id:
            return Decision.allow(self.kind, DecisionReason.OWNER)

        if principal.is_admin:
            return Decision.allow(self.kind, DecisionReason.ADMIN)

        return Decision.deny(self.kind, DecisionReason.NOT_OWNER)
