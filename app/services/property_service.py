"""Property listing service: search, CRUD, view counter and favorites."""

import logging
import math

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.constants import messages
from app.models.favorite import Favorite
from app.models.media import Media, MediaType
from app.models.property import Address, Property, PropertyFeature
from app.policies import ELEVATED_FIELDS, OWNER_OR_ADMIN, Principal, ResourceOwnership, require
from app.schemas.property import PropertyCreate, PropertySearchParams, PropertyUpdate
from app.utils.exceptions import FavoriteNotFoundError, PropertyNotFoundError, ValidationError
from app.utils.transaction_manager import atomic_operation

from .storage import LocalMediaStorage

logger = logging.getLogger(__name__)

# Columns that may be copied straight from a create/update payload
SCALAR_FIELDS = (
    "title",
    "title_en",
    "description",
    "description_en",
    "price",
    "currency",
    "type",
    "status",
    "bedrooms",
    "bathrooms",
    "building_size",
    "land_size",
    "construction_year",
    "verified",
)

NULLABLE_FIELDS = frozenset(
    {
        "title_en",
        "description_en",
        "bedrooms",
        "bathrooms",
        "building_size",
        "land_size",
        "construction_year",
    }
)

REQUIRED_ADDRESS_FIELDS = ("neighborhood", "city", "state")


def property_detail_options():
    """Eager loads needed to serialize a full listing."""
    return (
        selectinload(Property.address),
        selectinload(Property.features),
        selectinload(Property.media),
        selectinload(Property.owner),
    )


def property_summary_options():
    """Eager loads needed to serialize a listing in search results."""
    return (
        selectinload(Property.address),
        selectinload(Property.media),
    )


def _db_value(value):
    # Enum members are stored by value in string columns
    return getattr(value, "value", value)


class PropertyService:
    """Service for property listing operations."""

    def __init__(self, db: AsyncSession, storage: LocalMediaStorage):
        self.db = db
        self.storage = storage

    async def get_by_id(self, property_id: int, for_update: bool = False) -> Property:
        """Load a property with its children, or raise PropertyNotFoundError."""
        query = (
            select(Property)
            .where(Property.id == property_id)
            .options(*property_detail_options())
            .execution_options(populate_existing=True)
        )
        if for_update:
            query = query.with_for_update()

        result = await self.db.execute(query)
        prop = result.scalar_one_or_none()

        if not prop:
            raise PropertyNotFoundError()

        return prop

    async def search_properties(self, params: PropertySearchParams) -> tuple[list[Property], int]:
        """Filter listings; newest first. Returns the page and the total match count."""

        query = select(Property).where(Property.status == params.status.value)

        if params.type:
            query = query.where(Property.type == params.type.value)
        if params.min_price is not None:
            query = query.where(Property.price >= params.min_price)
        if params.max_price is not None:
            query = query.where(Property.price <= params.max_price)
        if params.bedrooms is not None:
            query = query.where(Property.bedrooms >= params.bedrooms)
        if params.bathrooms is not None:
            query = query.where(Property.bathrooms >= params.bathrooms)
        if params.verified is not None:
            query = query.where(Property.verified == params.verified)

        if params.city or params.state:
            query = query.join(Property.address)
            if params.city:
                query = query.where(Address.city == params.city)
            if params.state:
                query = query.where(Address.state == params.state)

        # Count total for pagination
        count_result = await self.db.execute(select(func.count()).select_from(query.subquery()))
        total = count_result.scalar_one()

        query = (
            query.options(*property_summary_options())
            .order_by(Property.created_at.desc(), Property.id.desc())
            .offset((params.page - 1) * params.limit)
            .limit(params.limit)
        )

        result = await self.db.execute(query)
        return list(result.scalars().all()), total

    @staticmethod
    def pagination(total: int, page: int, limit: int) -> dict:
        return {
            "total": total,
            "page": page,
            "limit": limit,
            "pages": math.ceil(total / limit) if limit else 0,
        }

    async def view_property(self, property_id: int) -> Property:
        """Return a listing and count the view."""

        await self.get_by_id(property_id)

        # SQL side increment so concurrent views are never lost
        await self.db.execute(
            update(Property)
            .where(Property.id == property_id)
            .values(views=Property.views + 1)
            .execution_options(synchronize_session=False)
        )
        await self.db.commit()

        return await self.get_by_id(property_id)

    async def create_property(self, principal: Principal, data: PropertyCreate) -> Property:
        """Create a listing owned by the principal."""

        payload = data.model_dump(exclude={"address", "features", "media"})

        async with atomic_operation(self.db):
            prop = Property(
                **{field: _db_value(value) for field, value in payload.items()},
                owner_id=principal.id,
                verified=False,
                views=0,
            )

            if data.address:
                prop.address = Address(**data.address.model_dump())

            prop.features = [PropertyFeature(**feature.model_dump()) for feature in data.features]

            # Only one main image per listing
            has_main = False
            media = []
            for link in data.media:
                is_main = link.is_main and link.type == MediaType.IMAGE and not has_main
                has_main = has_main or is_main
                media.append(Media(type=link.type.value, url=link.url, is_main=is_main))
            prop.media = media

            self.db.add(prop)
            await self.db.flush()
            property_id = prop.id

        logger.info(
            "Property created",
            extra={"property_id": property_id, "owner_id": principal.id},
        )
        return await self.get_by_id(property_id)

    async def update_property(
        self, principal: Principal, property_id: int, data: PropertyUpdate
    ) -> Property:
        """Update a listing. Ownership is checked before the verification flag."""

        changes = data.model_dump(exclude_unset=True)

        async with atomic_operation(self.db):
            prop = await self.get_by_id(property_id, for_update=True)

            require(
                principal,
                ResourceOwnership.of_property(prop),
                OWNER_OR_ADMIN,
                messages.NOT_AUTHORIZED_UPDATE_PROPERTY,
            )
            require(
                principal,
                ResourceOwnership.of_property(prop),
                ELEVATED_FIELDS,
                messages.NOT_AUTHORIZED_UPDATE_VERIFICATION,
                changes=set(changes),
            )

            for field in SCALAR_FIELDS:
                if field not in changes:
                    continue
                value = changes[field]
                if value is None and field not in NULLABLE_FIELDS:
                    continue
                setattr(prop, field, _db_value(value))

            if data.address is not None:
                self._upsert_address(prop, data.address.model_dump(exclude_unset=True))

            if data.features is not None:
                prop.features = [PropertyFeature(**feature.model_dump()) for feature in data.features]

        logger.info(
            "Property updated",
            extra={"property_id": property_id, "principal_id": principal.id, "fields": sorted(changes)},
        )
        return await self.get_by_id(property_id)

    def _upsert_address(self, prop: Property, address_data: dict) -> None:
        if prop.address is not None:
            for field, value in address_data.items():
                if field in REQUIRED_ADDRESS_FIELDS and value is None:
                    continue
                setattr(prop.address, field, value)
            return

        missing = [f for f in REQUIRED_ADDRESS_FIELDS if not address_data.get(f)]
        if missing:
            raise ValidationError(
                "New address requires neighborhood, city and state",
                details={"missing": missing},
            )
        prop.address = Address(**address_data)

    async def delete_property(self, principal: Principal, property_id: int) -> None:
        """Delete a listing with its children, favorites and stored files."""

        async with atomic_operation(self.db):
            prop = await self.get_by_id(property_id, for_update=True)

            require(
                principal,
                ResourceOwnership.of_property(prop),
                OWNER_OR_ADMIN,
                messages.NOT_AUTHORIZED_DELETE_PROPERTY,
            )

            stored_paths = await self.delete_property_rows(prop)

        # Rows are gone; file cleanup failures are only logged
        await self.storage.delete_many(stored_paths)

        logger.info(
            "Property deleted",
            extra={"property_id": property_id, "principal_id": principal.id},
        )

    async def delete_property_rows(self, prop: Property) -> list[str]:
        """
        Delete a loaded property and everything hanging off it.

        Must run inside a transaction with address, features and media loaded.
        Returns the storage paths of uploaded files to remove afterwards.
        """
        stored_paths = [m.storage_path for m in prop.media if m.storage_path]

        await self.db.execute(delete(Favorite).where(Favorite.property_id == prop.id))
        await self.db.delete(prop)
        await self.db.flush()

        return stored_paths

    async def add_favorite(self, principal: Principal, property_id: int) -> Favorite:
        """Bookmark a listing for the principal."""

        async with atomic_operation(self.db):
            result = await self.db.execute(select(Property.id).where(Property.id == property_id))
            if result.scalar_one_or_none() is None:
                raise PropertyNotFoundError()

            result = await self.db.execute(
                select(Favorite.id).where(
                    Favorite.user_id == principal.id,
                    Favorite.property_id == property_id,
                )
            )
            if result.scalar_one_or_none() is not None:
                raise ValidationError(messages.ALREADY_FAVORITE, error_code="ALREADY_FAVORITE")

            favorite = Favorite(user_id=principal.id, property_id=property_id)
            self.db.add(favorite)
            await self.db.flush()
            favorite_id = favorite.id

        return await self.get_favorite(favorite_id)

    async def get_favorite(self, favorite_id: int) -> Favorite:
        result = await self.db.execute(
            select(Favorite)
            .where(Favorite.id == favorite_id)
            .options(
                selectinload(Favorite.property).selectinload(Property.address),
                selectinload(Favorite.property).selectinload(Property.media),
            )
            .execution_options(populate_existing=True)
        )
        return result.scalar_one()

    async def remove_favorite(self, principal: Principal, property_id: int) -> None:
        """Remove a listing from the principal's favorites."""

        async with atomic_operation(self.db):
            result = await self.db.execute(
                select(Favorite).where(
                    Favorite.user_id == principal.id,
                    Favorite.property_id == property_id,
                )
            )
            favorite = result.scalar_one_or_none()

            if not favorite:
                raise FavoriteNotFoundError()

            await self.db.delete(favorite)
