"""Unit tests for the require/can guard helpers."""

import logging

import pytest

from app.constants import messages
from app.models.user import UserRole
from app.policies import ELEVATED_FIELDS, OWNER_OR_ADMIN, Principal, ResourceOwnership, require
from app.utils.exceptions import AuthorizationError, InsufficientPermissionsError

pytestmark = pytest.mark.unit


class TestRequire:
    def test_allowed_returns_decision(self):
        decision = require(
            Principal(1, UserRole.USER),
            ResourceOwnership(parent_owner_id=1),
            OWNER_OR_ADMIN,
            messages.NOT_AUTHORIZED_UPDATE_PROPERTY,
        )

        assert decision.allowed

    def test_denied_raises_with_message(self):
        with pytest.raises(InsufficientPermissionsError) as exc_info:
            require(
                Principal(2, UserRole.USER),
                ResourceOwnership(parent_owner_id=1),
                OWNER_OR_ADMIN,
                messages.NOT_AUTHORIZED_DELETE_PROPERTY,
            )

        exc = exc_info.value
        assert isinstance(exc, AuthorizationError)
        assert exc.message == "Not authorized to delete this property"
        assert exc.error_code == "INSUFFICIENT_PERMISSIONS"
        assert exc.details == {"rule": "owner_or_admin", "reason": "not_owner", "fields": []}

    def test_denied_elevated_field_lists_fields(self):
        with pytest.raises(InsufficientPermissionsError) as exc_info:
            require(
                Principal(1, UserRole.AGENT),
                ResourceOwnership(parent_owner_id=1),
                ELEVATED_FIELDS,
                messages.NOT_AUTHORIZED_UPDATE_VERIFICATION,
                changes={"price", "verified"},
            )

        assert exc_info.value.message == "Not authorized to update verification status"
        assert exc_info.value.details["fields"] == ["verified"]

    def test_denial_is_logged(self, caplog):
        with caplog.at_level(logging.WARNING, logger="app.policies.guards"):
            with pytest.raises(InsufficientPermissionsError):
                require(
                    Principal(7, UserRole.USER),
                    ResourceOwnership(parent_owner_id=1),
                    OWNER_OR_ADMIN,
                    messages.NOT_AUTHORIZED_UPDATE_MEDIA,
                )

        record = next(r for r in caplog.records if r.message == "Authorization denied")
        assert record.principal_id == 7
        assert record.principal_role == "USER"
        assert record.reason == "not_owner"
