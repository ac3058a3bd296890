"""Property listing endpoints: search, CRUD, verification and favorites."""

import pytest
from fastapi import status
from httpx import AsyncClient

pytestmark = [pytest.mark.asyncio, pytest.mark.integration]

MISSING_ID = 99999


class TestSearch:
    async def test_public_search(self, async_client: AsyncClient, agent_user, create_property):
        await create_property(agent_user, with_main_image=True)

        response = await async_client.get("/api/properties")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["message"] == "Properties retrieved successfully"
        assert data["pagination"] == {"total": 1, "page": 1, "limit": 10, "pages": 1}
        listing = data["properties"][0]
        assert listing["address"]["city"] == "Ciudad de México"
        assert listing["main_image"]["url"] == "https://example.com/main.jpg"
        assert "description" not in listing

    async def test_only_active_by_default(self, async_client: AsyncClient, agent_user, create_property):
        await create_property(agent_user)
        await create_property(agent_user, status="SOLD")

        active = await async_client.get("/api/properties")
        sold = await async_client.get("/api/properties?status=SOLD")

        assert active.json()["pagination"]["total"] == 1
        assert sold.json()["pagination"]["total"] == 1
        assert sold.json()["properties"][0]["status"] == "SOLD"

    async def test_filters(self, async_client: AsyncClient, agent_user, create_property):
        cheap = await create_property(agent_user, price=800_000, bedrooms=1, type="APARTMENT")
        await create_property(agent_user, price=5_000_000, bedrooms=4)
        await create_property(agent_user, price=900_000, bedrooms=2, city="Guadalajara")

        response = await async_client.get(
            "/api/properties",
            params={"max_price": 1_000_000, "city": "Ciudad de México", "type": "APARTMENT"},
        )
        assert [p["id"] for p in response.json()["properties"]] == [cheap]

        response = await async_client.get("/api/properties", params={"bedrooms": 2})
        assert response.json()["pagination"]["total"] == 2

    async def test_newest_first_and_paginated(self, async_client: AsyncClient, agent_user, create_property):
        ids = [await create_property(agent_user, title=f"Casa {i}") for i in range(3)]

        response = await async_client.get("/api/properties", params={"limit": 2, "page": 2})

        data = response.json()
        assert data["pagination"] == {"total": 3, "page": 2, "limit": 2, "pages": 2}
        assert [p["id"] for p in data["properties"]] == [ids[0]]

    async def test_verified_filter(self, async_client: AsyncClient, agent_user, create_property):
        verified = await create_property(agent_user, verified=True)
        await create_property(agent_user)

        response = await async_client.get("/api/properties", params={"verified": "true"})

        assert [p["id"] for p in response.json()["properties"]] == [verified]

    @pytest.mark.parametrize(
        "params",
        [
            {"min_price": 500, "max_price": 100},
            {"limit": 101},
            {"page": 0},
            {"type": "CASTLE"},
        ],
    )
    async def test_invalid_filters(self, async_client: AsyncClient, database, params):
        response = await async_client.get("/api/properties", params=params)

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


class TestGetProperty:
    async def test_detail_counts_views(self, async_client: AsyncClient, agent_user, create_property):
        property_id = await create_property(agent_user)

        first = await async_client.get(f"/api/properties/{property_id}")
        second = await async_client.get(f"/api/properties/{property_id}")

        assert first.status_code == status.HTTP_200_OK
        assert first.json()["property"]["views"] == 1
        assert second.json()["property"]["views"] == 2
        detail = second.json()["property"]
        assert detail["owner"]["id"] == agent_user.id
        assert detail["features"][0]["name"] == "Jardín"
        assert "password_hash" not in detail["owner"]

    async def test_missing(self, async_client: AsyncClient, database):
        response = await async_client.get(f"/api/properties/{MISSING_ID}")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["message"] == "Property not found"


class TestCreateProperty:
    async def test_create(self, async_client: AsyncClient, agent_user, agent_headers, property_payload):
        response = await async_client.post("/api/properties", json=property_payload, headers=agent_headers)

        assert response.status_code == status.HTTP_201_CREATED
        prop = response.json()["property"]
        assert prop["owner_id"] == agent_user.id
        assert prop["verified"] is False
        assert prop["views"] == 0
        assert prop["currency"] == "MXN"
        assert prop["address"]["neighborhood"] == "Roma Norte"
        assert prop["main_image"]["url"] == "https://example.com/a.jpg"
        assert len(prop["features"]) == 1

    async def test_any_role_may_create(self, async_client: AsyncClient, regular_user, user_headers, property_payload):
        response = await async_client.post("/api/properties", json=property_payload, headers=user_headers)

        assert response.status_code == status.HTTP_201_CREATED
        assert response.json()["property"]["owner_id"] == regular_user.id

    @pytest.mark.security
    async def test_verified_cannot_be_set_at_creation(self, async_client: AsyncClient, admin_headers, property_payload):
        property_payload["verified"] = True

        response = await async_client.post("/api/properties", json=property_payload, headers=admin_headers)

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    async def test_single_main_image(self, async_client: AsyncClient, agent_headers, property_payload):
        property_payload["media"] = [
            {"type": "IMAGE", "url": "https://example.com/1.jpg", "is_main": True},
            {"type": "IMAGE", "url": "https://example.com/2.jpg", "is_main": True},
            {"type": "FLOOR_PLAN", "url": "https://example.com/plan.pdf", "is_main": True},
        ]

        response = await async_client.post("/api/properties", json=property_payload, headers=agent_headers)

        media = response.json()["property"]["media"]
        assert sum(m["is_main"] for m in media) == 1

    async def test_requires_authentication(self, async_client: AsyncClient, database, property_payload):
        response = await async_client.post("/api/properties", json=property_payload)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    @pytest.mark.parametrize(
        "overrides",
        [{"price": 0}, {"type": "CASTLE"}, {"construction_year": 3000}, {"title": ""}],
    )
    async def test_invalid_payload(self, async_client: AsyncClient, agent_headers, property_payload, overrides):
        property_payload.update(overrides)

        response = await async_client.post("/api/properties", json=property_payload, headers=agent_headers)

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


class TestUpdateProperty:
    async def test_owner_updates(self, async_client: AsyncClient, agent_user, agent_headers, create_property):
        property_id = await create_property(agent_user)

        response = await async_client.put(
            f"/api/properties/{property_id}",
            json={"title": "Casa renovada", "price": 1_750_000, "address": {"postal_code": "06140"}},
            headers=agent_headers,
        )

        assert response.status_code == status.HTTP_200_OK
        prop = response.json()["property"]
        assert prop["title"] == "Casa renovada"
        assert prop["price"] == 1_750_000
        assert prop["address"]["postal_code"] == "06140"
        assert prop["address"]["neighborhood"] == "Condesa"

    async def test_features_are_replaced(self, async_client: AsyncClient, agent_user, agent_headers, create_property):
        property_id = await create_property(agent_user)

        response = await async_client.put(
            f"/api/properties/{property_id}",
            json={"features": [{"name": "Alberca"}, {"name": "Gimnasio"}]},
            headers=agent_headers,
        )

        assert sorted(f["name"] for f in response.json()["property"]["features"]) == ["Alberca", "Gimnasio"]

    async def test_non_owner_forbidden(self, async_client: AsyncClient, agent_user, user_headers, create_property):
        property_id = await create_property(agent_user)

        response = await async_client.put(
            f"/api/properties/{property_id}", json={"title": "Mía"}, headers=user_headers
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.json()["message"] == "Not authorized to update this property"
        assert response.json()["details"]["reason"] == "not_owner"

    async def test_ownership_checked_before_verification(
        self, async_client: AsyncClient, agent_user, user_headers, create_property
    ):
        property_id = await create_property(agent_user)

        response = await async_client.put(
            f"/api/properties/{property_id}", json={"verified": True}, headers=user_headers
        )

        assert response.json()["message"] == "Not authorized to update this property"

    @pytest.mark.security
    async def test_owner_cannot_verify(self, async_client: AsyncClient, agent_user, agent_headers, create_property):
        property_id = await create_property(agent_user)

        response = await async_client.put(
            f"/api/properties/{property_id}", json={"title": "Nuevo", "verified": True}, headers=agent_headers
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.json()["message"] == "Not authorized to update verification status"

        # Nothing was written
        detail = await async_client.get(f"/api/properties/{property_id}")
        assert detail.json()["property"]["title"] == "Casa en Condesa"
        assert detail.json()["property"]["verified"] is False

    @pytest.mark.security
    async def test_owner_cannot_clear_verification(
        self, async_client: AsyncClient, agent_user, agent_headers, create_property
    ):
        property_id = await create_property(agent_user, verified=True)

        response = await async_client.put(
            f"/api/properties/{property_id}", json={"verified": None}, headers=agent_headers
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.json()["message"] == "Not authorized to update verification status"
        assert response.json()["details"]["fields"] == ["verified"]

    async def test_admin_verifies(self, async_client: AsyncClient, agent_user, admin_headers, create_property):
        property_id = await create_property(agent_user)

        response = await async_client.put(
            f"/api/properties/{property_id}", json={"verified": True}, headers=admin_headers
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["property"]["verified"] is True
        assert response.json()["property"]["owner_id"] == agent_user.id

    async def test_missing_is_404_before_authorization(self, async_client: AsyncClient, user_headers):
        response = await async_client.put(
            f"/api/properties/{MISSING_ID}", json={"title": "x"}, headers=user_headers
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND

    async def test_unknown_field_rejected(self, async_client: AsyncClient, agent_user, agent_headers, create_property):
        property_id = await create_property(agent_user)

        response = await async_client.put(
            f"/api/properties/{property_id}", json={"owner_id": 1}, headers=agent_headers
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


class TestDeleteProperty:
    async def test_owner_deletes(self, async_client: AsyncClient, agent_user, agent_headers, create_property):
        property_id = await create_property(agent_user, with_main_image=True)

        response = await async_client.delete(f"/api/properties/{property_id}", headers=agent_headers)

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["message"] == "Property deleted successfully"
        assert (await async_client.get(f"/api/properties/{property_id}")).status_code == 404

    async def test_non_owner_forbidden(self, async_client: AsyncClient, agent_user, other_headers, create_property):
        property_id = await create_property(agent_user)

        response = await async_client.delete(f"/api/properties/{property_id}", headers=other_headers)

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.json()["message"] == "Not authorized to delete this property"

    async def test_admin_deletes_any(self, async_client: AsyncClient, agent_user, admin_headers, create_property):
        property_id = await create_property(agent_user)

        response = await async_client.delete(f"/api/properties/{property_id}", headers=admin_headers)

        assert response.status_code == status.HTTP_200_OK

    async def test_missing(self, async_client: AsyncClient, user_headers):
        response = await async_client.delete(f"/api/properties/{MISSING_ID}", headers=user_headers)

        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestFavorites:
    async def test_add_and_remove(self, async_client: AsyncClient, agent_user, user_headers, create_property):
        property_id = await create_property(agent_user)

        added = await async_client.post(f"/api/properties/{property_id}/favorite", headers=user_headers)
        assert added.status_code == status.HTTP_201_CREATED
        assert added.json()["favorite"]["property_id"] == property_id

        removed = await async_client.delete(f"/api/properties/{property_id}/favorite", headers=user_headers)
        assert removed.status_code == status.HTTP_200_OK
        assert removed.json()["message"] == "Property removed from favorites"

    async def test_duplicate(self, async_client: AsyncClient, agent_user, user_headers, create_property):
        property_id = await create_property(agent_user)
        await async_client.post(f"/api/properties/{property_id}/favorite", headers=user_headers)

        response = await async_client.post(f"/api/properties/{property_id}/favorite", headers=user_headers)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["message"] == "Property already in favorites"

    async def test_missing_property(self, async_client: AsyncClient, user_headers):
        response = await async_client.post(f"/api/properties/{MISSING_ID}/favorite", headers=user_headers)

        assert response.status_code == status.HTTP_404_NOT_FOUND

    async def test_remove_not_favorited(self, async_client: AsyncClient, agent_user, user_headers, create_property):
        property_id = await create_property(agent_user)

        response = await async_client.delete(f"/api/properties/{property_id}/favorite", headers=user_headers)

        assert response.status_code == status.HTTP_404_NOT_FOUND

    async def test_favorites_are_per_user(
        self, async_client: AsyncClient, agent_user, user_headers, other_headers, create_property
    ):
        property_id = await create_property(agent_user)
        await async_client.post(f"/api/properties/{property_id}/favorite", headers=user_headers)

        # Another user's removal only looks at their own favorites
        response = await async_client.delete(f"/api/properties/{property_id}/favorite", headers=other_headers)
        assert response.status_code == status.HTTP_404_NOT_FOUND

        again = await async_client.post(f"/api/properties/{property_id}/favorite", headers=user_headers)
        assert again.status_code == status.HTTP_400_BAD_REQUEST

    async def test_deleting_property_removes_favorites(
        self, async_client: AsyncClient, agent_user, regular_user, agent_headers, user_headers, create_property
    ):
        property_id = await create_property(agent_user)
        await async_client.post(f"/api/properties/{property_id}/favorite", headers=user_headers)

        await async_client.delete(f"/api/properties/{property_id}", headers=agent_headers)

        favorites = await async_client.get(f"/api/users/{regular_user.id}/favorites", headers=user_headers)
        assert favorites.json()["favorites"] == []
