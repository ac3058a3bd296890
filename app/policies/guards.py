"""Guard helpers for authorization checks."""

import logging
from typing import Optional

from app.models.user import UserRole
from app.utils.exceptions import InsufficientPermissionsError

from .base_policy import BasePolicy, Decision, Principal, ResourceOwnership
from .ownership_policy import OwnerOrAdminPolicy, SelfOrAdminPolicy
from .role_policy import ElevatedFieldPolicy, RoleAllowlistPolicy

logger = logging.getLogger(__name__)

# Rule instances shared by every endpoint
SELF_OR_ADMIN = SelfOrAdminPolicy()
OWNER_OR_ADMIN = OwnerOrAdminPolicy()
ADMIN_ONLY = RoleAllowlistPolicy({UserRole.ADMIN})
ELEVATED_FIELDS = ElevatedFieldPolicy({"role", "verified"})


def evaluate(
    principal: Principal,
    ownership: Optional[ResourceOwnership],
    rule: BasePolicy,
    changes: Optional[set[str]] = None,
) -> Decision:
    """
    Evaluate a single rule.

    Pure function of its inputs: it performs no I/O and never raises for a
    denial. `changes` is the set of field names the request attempts to set
    and only matters to the elevated field rule.

    Usage:
        evaluate(principal, ResourceOwnership.of_property(prop), OWNER_OR_ADMIN)
        evaluate(principal, None, ELEVATED_FIELDS, changes={"verified"})
    """
    return rule.check(principal, ownership, frozenset(changes or ()))


def can(
    principal: Principal,
    ownership: Optional[ResourceOwnership],
    rule: BasePolicy,
    changes: Optional[set[str]] = None,
) -> bool:
    """
    Check if principal passes the rule.

    Usage:
        can(principal, ResourceOwnership.of_user(user_id), SELF_OR_ADMIN)
    """
    return evaluate(principal, ownership, rule, changes).allowed


def require(
    principal: Principal,
    ownership: Optional[ResourceOwnership],
    rule: BasePolicy,
    message: str,
    changes: Optional[set[str]] = None,
) -> Decision:
    """
    Require that principal passes the rule.
    Raises InsufficientPermissionsError with `message` if not allowed.

    The caller must already have confirmed the resource exists.

    Usage:
        require(principal, ResourceOwnership.of_property(prop), OWNER_OR_ADMIN,
                "Not authorized to update this property")
    """
    decision = evaluate(principal, ownership, rule, changes)

    if not decision.allowed:
        logger.warning(
            "Authorization denied",
            extra={
                "principal_id": principal.id,
                "principal_role": principal.role.value,
                "rule": decision.rule.value,
                "reason": decision.reason.value,
                "fields": sorted(decision.fields),
            },
        )
        raise InsufficientPermissionsError(
            message,
            details={
                "rule": decision.rule.value,
                "reason": decision.reason.value,
                "fields": sorted(decision.fields),
            },
        )

    return decision
