"""Unit tests for input validators and request schemas."""

import pydantic
import pytest

from app.schemas.property import PropertyCreate, PropertySearchParams, PropertyUpdate
from app.schemas.user import UserUpdate
from app.utils.exceptions import ValidationError
from app.utils.validators import validate_password, validate_phone_number, validate_price_range

pytestmark = pytest.mark.unit


class TestValidators:
    def test_password_too_short(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_password("abc")

        assert exc_info.value.details["errors"]

    def test_password_over_bcrypt_limit(self):
        with pytest.raises(ValidationError):
            validate_password("ñ" * 40)  # 80 bytes

    def test_password_ok(self):
        validate_password("user123")

    @pytest.mark.parametrize("phone", ["+52 55 1234 5678", "5512345", None, ""])
    def test_phone_ok(self, phone):
        validate_phone_number(phone)

    @pytest.mark.parametrize("phone", ["123", "1" * 16])
    def test_phone_rejected(self, phone):
        with pytest.raises(ValidationError):
            validate_phone_number(phone)

    def test_price_range(self):
        validate_price_range(None, 10)
        validate_price_range(1, 10)
        with pytest.raises(ValidationError):
            validate_price_range(10, 10)


class TestSchemas:
    def test_create_rejects_verified(self):
        with pytest.raises(pydantic.ValidationError):
            PropertyCreate(title="t", description="d", price=1, type="HOUSE", verified=True)

    def test_create_rejects_future_year(self):
        with pytest.raises(pydantic.ValidationError):
            PropertyCreate(title="t", description="d", price=1, type="HOUSE", construction_year=3000)

    def test_update_requires_a_field(self):
        with pytest.raises(pydantic.ValidationError):
            PropertyUpdate()
        with pytest.raises(pydantic.ValidationError):
            UserUpdate()

    def test_update_tracks_explicit_fields(self):
        update = PropertyUpdate(verified=True)
        assert update.model_dump(exclude_unset=True) == {"verified": True}

    def test_search_defaults(self):
        params = PropertySearchParams()
        assert params.status == "ACTIVE"
        assert (params.page, params.limit) == (1, 10)

    def test_search_inverted_price_range(self):
        with pytest.raises(pydantic.ValidationError):
            PropertySearchParams(min_price=500, max_price=100)
