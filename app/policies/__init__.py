"""Authorization policies system."""

from .base_policy import BasePolicy, Decision, DecisionReason, Principal, ResourceOwnership, RuleKind
from .guards import ADMIN_ONLY, ELEVATED_FIELDS, OWNER_OR_ADMIN, SELF_OR_ADMIN, can, evaluate, require
from .ownership_policy import OwnerOrAdminPolicy, SelfOrAdminPolicy
from .role_policy import ElevatedFieldPolicy, RoleAllowlistPolicy

__all__ = [
    "BasePolicy",
    "Decision",
    "DecisionReason",
    "Principal",
    "ResourceOwnership",
    "RuleKind",
    "SelfOrAdminPolicy",
    "OwnerOrAdminPolicy",
    "RoleAllowlistPolicy",
    "ElevatedFieldPolicy",
    "SELF_OR_ADMIN",
    "OWNER_OR_ADMIN",
    "ADMIN_ONLY",
    "ELEVATED_FIELDS",
    "evaluate",
    "can",
    "require",
]
