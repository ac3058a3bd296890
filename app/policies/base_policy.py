"""Base policy classes and types."""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from app.models.user import User, UserRole


class RuleKind(str, Enum):
    """Tag identifying which authorization rule produced a decision."""

    SELF_OR_ADMIN = "self_or_admin"
    OWNER_OR_ADMIN = "owner_or_admin"
    ROLE_ALLOWLIST = "role_allowlist"
    ELEVATED_FIELD = "elevated_field"


class DecisionReason(str, Enum):
    """Why a rule allowed or denied an operation."""

    # Allow
    SELF = "self"
    OWNER = "owner"
    ADMIN = "admin"
    ROLE_ALLOWED = "role_allowed"
    NO_ELEVATED_FIELDS = "no_elevated_fields"

    # Deny
    NOT_SELF = "not_self"
    NOT_OWNER = "not_owner"
    ROLE_NOT_ALLOWED = "role_not_allowed"
    ELEVATED_FIELD_REQUIRES_ADMIN = "elevated_field_requires_admin"


@dataclass(frozen=True)
class Principal:
    """Authenticated identity making the request."""

    id: int
    role: UserRole

    @classmethod
    def from_user(cls, user: User) -> "Principal":
        """Build a principal from a loaded user row."""
        return cls(id=user.id, role=UserRole(user.role))

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


@dataclass(frozen=True)
class ResourceOwnership:
    """
    Minimal ownership fact needed to evaluate a rule.

    owner_id is the user that *is* or directly owns the resource (a user
    profile, a favorite, a saved search). parent_owner_id is the owner of the
    property a resource hangs off (the property itself, or its media).
    """

    owner_id: Optional[int] = None
    parent_owner_id: Optional[int] = None

    @classmethod
    def of_user(cls, user_id: int) -> "ResourceOwnership":
        return cls(owner_id=user_id)

    @classmethod
    def of_property(cls, property: Any) -> "ResourceOwnership":
        return cls(owner_id=property.owner_id, parent_owner_id=property.owner_id)

    @classmethod
    def of_media(cls, media: Any) -> "ResourceOwnership":
        """Media is owned through its property; the property must be loaded."""
        return cls(parent_owner_id=media.property.owner_id)

    @classmethod
    def of_record(cls, record: Any) -> "ResourceOwnership":
        """Ownership of a per-user record such as a favorite or saved search."""
        return cls(owner_id=record.user_id)


@dataclass(frozen=True)
class Decision:
    """Result of policy evaluation."""

    allowed: bool
    reason: DecisionReason
    rule: RuleKind
    fields: frozenset[str] = field(default_factory=frozenset)

    @classmethod
    def allow(cls, rule: RuleKind, reason: DecisionReason) -> "Decision":
        """Create an allow result."""
        return cls(allowed=True, reason=reason, rule=rule)

    @classmethod
    def deny(
        cls, rule: RuleKind, reason: DecisionReason, fields: Iterable[str] = ()
    ) -> "Decision":
        """Create a deny result."""
        return cls(allowed=False, reason=reason, rule=rule, fields=frozenset(fields))


class BasePolicy(ABC):
    """Base class for all authorization rules."""

    kind: RuleKind

    @abstractmethod
    def check(
        self,
        principal: Principal,
        ownership: Optional[ResourceOwnership],
        changes: frozenset[str],
    ) -> Decision:
        """Decide whether the principal may proceed."""

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(kind='{self.kind.value}')>"
