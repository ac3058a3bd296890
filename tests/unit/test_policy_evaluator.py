"""Unit tests for the authorization rules and evaluator."""

import itertools

import pytest

from app.models.user import UserRole
from app.policies import (
    ADMIN_ONLY,
    ELEVATED_FIELDS,
    OWNER_OR_ADMIN,
    SELF_OR_ADMIN,
    Decision,
    DecisionReason,
    Principal,
    ResourceOwnership,
    RoleAllowlistPolicy,
    RuleKind,
    can,
    evaluate,
)

pytestmark = pytest.mark.unit

ROLES = list(UserRole)
IDS = [1, 2, 3]


class TestSelfOrAdmin:
    """Self-or-admin: allowed iff principal is the owner or an administrator."""

    def test_self_allowed(self):
        decision = evaluate(Principal(1, UserRole.USER), ResourceOwnership.of_user(1), SELF_OR_ADMIN)

        assert decision.allowed
        assert decision.reason == DecisionReason.SELF
        assert decision.rule == RuleKind.SELF_OR_ADMIN

    def test_other_user_denied(self):
        decision = evaluate(Principal(2, UserRole.AGENT), ResourceOwnership.of_user(1), SELF_OR_ADMIN)

        assert not decision.allowed
        assert decision.reason == DecisionReason.NOT_SELF

    def test_admin_allowed_for_anyone(self):
        decision = evaluate(Principal(9, UserRole.ADMIN), ResourceOwnership.of_user(1), SELF_OR_ADMIN)

        assert decision.allowed
        assert decision.reason == DecisionReason.ADMIN

    @pytest.mark.parametrize(
        "principal_id,role,owner_id", list(itertools.product(IDS, ROLES, IDS))
    )
    def test_shape(self, principal_id, role, owner_id):
        expected = principal_id == owner_id or role == UserRole.ADMIN

        assert can(Principal(principal_id, role), ResourceOwnership.of_user(owner_id), SELF_OR_ADMIN) is expected


class TestOwnerOrAdmin:
    """Owner-or-admin: allowed iff principal owns the parent property or is an administrator."""

    def test_owner_may_update_property(self):
        ownership = ResourceOwnership(owner_id=1, parent_owner_id=1)

        assert can(Principal(1, UserRole.USER), ownership, OWNER_OR_ADMIN)

    def test_non_owner_denied(self):
        decision = evaluate(
            Principal(2, UserRole.USER), ResourceOwnership(parent_owner_id=1), OWNER_OR_ADMIN
        )

        assert not decision.allowed
        assert decision.reason == DecisionReason.NOT_OWNER
        assert decision.rule == RuleKind.OWNER_OR_ADMIN

    def test_agent_role_grants_nothing_extra(self):
        assert not can(Principal(2, UserRole.AGENT), ResourceOwnership(parent_owner_id=1), OWNER_OR_ADMIN)

    def test_missing_ownership_only_admin_passes(self):
        assert not can(Principal(1, UserRole.USER), None, OWNER_OR_ADMIN)
        assert can(Principal(1, UserRole.ADMIN), None, OWNER_OR_ADMIN)

    @pytest.mark.parametrize(
        "principal_id,role,owner_id", list(itertools.product(IDS, ROLES, IDS))
    )
    def test_shape(self, principal_id, role, owner_id):
        expected = principal_id == owner_id or role == UserRole.ADMIN

        assert can(Principal(principal_id, role), ResourceOwnership(parent_owner_id=owner_id), OWNER_OR_ADMIN) is expected


class TestRoleAllowlist:
    """Role allowlist: ownership is irrelevant."""

    @pytest.mark.parametrize("role", ROLES)
    def test_admin_only(self, role):
        decision = evaluate(Principal(1, role), ResourceOwnership.of_user(1), ADMIN_ONLY)

        assert decision.allowed is (role == UserRole.ADMIN)
        assert decision.rule == RuleKind.ROLE_ALLOWLIST

    def test_custom_allowlist(self):
        agents_and_admins = RoleAllowlistPolicy({UserRole.AGENT, UserRole.ADMIN})

        assert can(Principal(1, UserRole.AGENT), None, agents_and_admins)
        assert not can(Principal(1, UserRole.USER), None, agents_and_admins)


class TestElevatedFields:
    """Elevated fields: only administrators may set role or verified."""

    def test_admin_may_set_verified(self):
        decision = evaluate(
            Principal(2, UserRole.ADMIN),
            ResourceOwnership(owner_id=1, parent_owner_id=1),
            ELEVATED_FIELDS,
            changes={"verified"},
        )

        assert decision.allowed

    def test_agent_setting_verified_forbidden(self):
        decision = evaluate(
            Principal(2, UserRole.AGENT),
            ResourceOwnership(owner_id=2, parent_owner_id=2),
            ELEVATED_FIELDS,
            changes={"title", "verified"},
        )

        assert not decision.allowed
        assert decision.reason == DecisionReason.ELEVATED_FIELD_REQUIRES_ADMIN
        assert decision.fields == frozenset({"verified"})

    def test_owner_cannot_change_own_role(self):
        # Ownership would allow the base update; the field guard still denies
        ownership = ResourceOwnership.of_user(5)
        principal = Principal(5, UserRole.USER)

        assert can(principal, ownership, SELF_OR_ADMIN)
        assert not can(principal, ownership, ELEVATED_FIELDS, changes={"role"})

    def test_plain_changes_allowed(self):
        decision = evaluate(Principal(1, UserRole.USER), None, ELEVATED_FIELDS, changes={"first_name"})

        assert decision.allowed
        assert decision.reason == DecisionReason.NO_ELEVATED_FIELDS

    def test_no_changes_allowed(self):
        assert can(Principal(1, UserRole.USER), None, ELEVATED_FIELDS)

    @pytest.mark.parametrize("role", ROLES)
    @pytest.mark.parametrize("changes", [set(), {"title"}, {"role"}, {"verified"}, {"role", "price"}])
    def test_shape(self, role, changes):
        expected = not (changes & {"role", "verified"}) or role == UserRole.ADMIN

        assert can(Principal(1, role), ResourceOwnership.of_user(1), ELEVATED_FIELDS, changes=changes) is expected


class TestEvaluatorProperties:
    """Determinism and purity of the evaluator."""

    def test_deterministic(self):
        principal = Principal(2, UserRole.AGENT)
        ownership = ResourceOwnership(parent_owner_id=1)

        decisions = {evaluate(principal, ownership, OWNER_OR_ADMIN) for _ in range(5)}

        assert len(decisions) == 1

    def test_does_not_mutate_changes(self):
        changes = {"verified", "title"}

        evaluate(Principal(1, UserRole.USER), None, ELEVATED_FIELDS, changes=changes)

        assert changes == {"verified", "title"}

    def test_inputs_are_immutable(self):
        principal = Principal(1, UserRole.USER)

        with pytest.raises(AttributeError):
            principal.role = UserRole.ADMIN  # type: ignore[misc]

    def test_decision_constructors(self):
        allow = Decision.allow(RuleKind.SELF_OR_ADMIN, DecisionReason.SELF)
        deny = Decision.deny(RuleKind.ELEVATED_FIELD, DecisionReason.ELEVATED_FIELD_REQUIRES_ADMIN, ["role"])

        assert allow.allowed and allow.fields == frozenset()
        assert not deny.allowed and deny.fields == frozenset({"role"})


class TestOwnershipFactories:
    def test_of_property_uses_owner_for_both(self):
        class FakeProperty:
            owner_id = 7

        ownership = ResourceOwnership.of_property(FakeProperty())

        assert ownership == ResourceOwnership(owner_id=7, parent_owner_id=7)

    def test_of_media_uses_parent_property_owner(self):
        class FakeProperty:
            owner_id = 7

        class FakeMedia:
            property = FakeProperty()

        assert ResourceOwnership.of_media(FakeMedia()) == ResourceOwnership(parent_owner_id=7)

    def test_of_record_uses_user_id(self):
        class FakeSavedSearch:
            user_id = 3

        assert ResourceOwnership.of_record(FakeSavedSearch()) == ResourceOwnership(owner_id=3)

    def test_principal_from_user_role_string(self):
        class FakeUser:
            id = 4
            role = "AGENT"

        principal = Principal.from_user(FakeUser())

        assert principal == Principal(4, UserRole.AGENT)
        assert not principal.is_admin

    def test_admin_flag_drives_rules(self):
        admin = Principal(9, UserRole.ADMIN)

        assert admin.is_admin
        assert evaluate(admin, ResourceOwnership.of_user(1), SELF_OR_ADMIN).reason == DecisionReason.ADMIN
        assert evaluate(admin, None, ELEVATED_FIELDS, changes={"role"}).reason == DecisionReason.ADMIN
