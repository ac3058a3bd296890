"""User management service: profiles, favorites and saved searches."""

import logging
import math

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.constants import messages
from app.models.favorite import Favorite, SavedSearch
from app.models.property import Property
from app.models.user import User
from app.policies import (
    ADMIN_ONLY,
    ELEVATED_FIELDS,
    SELF_OR_ADMIN,
    Principal,
    ResourceOwnership,
    require,
)
from app.schemas.user import SavedSearchCreate, UserUpdate
from app.utils.exceptions import SavedSearchNotFoundError, UserNotFoundError
from app.utils.security import hash_password
from app.utils.transaction_manager import atomic_operation

from .property_service import PropertyService, property_detail_options
from .storage import LocalMediaStorage

logger = logging.getLogger(__name__)


class UserService:
    """Service for user management operations."""

    def __init__(self, db: AsyncSession, storage: LocalMediaStorage):
        self.db = db
        self.storage = storage

    async def get_user_by_id(self, user_id: int, for_update: bool = False) -> User:
        """Get user by ID."""
        query = select(User).where(User.id == user_id).execution_options(populate_existing=True)
        if for_update:
            query = query.with_for_update()

        result = await self.db.execute(query)
        user = result.scalar_one_or_none()

        if not user:
            raise UserNotFoundError()

        return user

    async def get_users(
        self, principal: Principal, page: int = 1, per_page: int = 20
    ) -> tuple[list[User], int]:
        """Get users list with pagination. Administrators only."""

        require(principal, None, ADMIN_ONLY, messages.NOT_AUTHORIZED_RESOURCE)

        count_result = await self.db.execute(select(func.count()).select_from(User))
        total = count_result.scalar_one()

        result = await self.db.execute(
            select(User)
            .order_by(User.created_at.desc(), User.id.desc())
            .offset((page - 1) * per_page)
            .limit(per_page)
        )
        return list(result.scalars().all()), total

    @staticmethod
    def page_count(total: int, per_page: int) -> int:
        return math.ceil(total / per_page) if per_page else 0

    async def get_user(self, principal: Principal, user_id: int) -> User:
        """Get a profile the principal may see."""
        user = await self.get_user_by_id(user_id)

        require(
            principal,
            ResourceOwnership.of_user(user.id),
            SELF_OR_ADMIN,
            messages.NOT_AUTHORIZED_ACCESS_USER,
        )
        return user

    async def update_user(self, principal: Principal, user_id: int, data: UserUpdate) -> User:
        """Update user. The role guard runs before the ownership check."""

        changes = data.model_dump(exclude_unset=True)

        async with atomic_operation(self.db):
            user = await self.get_user_by_id(user_id, for_update=True)

            require(
                principal,
                ResourceOwnership.of_user(user.id),
                ELEVATED_FIELDS,
                messages.NOT_AUTHORIZED_UPDATE_ROLE,
                changes={field for field, value in changes.items() if value is not None},
            )
            require(
                principal,
                ResourceOwnership.of_user(user.id),
                SELF_OR_ADMIN,
                messages.NOT_AUTHORIZED_UPDATE_USER,
            )

            for field, value in changes.items():
                if field == "password":
                    if value is not None:
                        user.password_hash = hash_password(value)
                elif field == "phone":
                    user.phone = value or None
                elif value is not None:
                    setattr(user, field, getattr(value, "value", value))

        logger.info(
            "User updated",
            extra={"user_id": user_id, "principal_id": principal.id, "fields": sorted(changes)},
        )
        return await self.get_user_by_id(user_id)

    async def delete_user(self, principal: Principal, user_id: int) -> None:
        """Delete a user with their listings, favorites and saved searches."""

        property_service = PropertyService(self.db, self.storage)
        stored_paths: list[str] = []

        async with atomic_operation(self.db):
            user = await self.get_user_by_id(user_id, for_update=True)

            require(
                principal,
                ResourceOwnership.of_user(user.id),
                SELF_OR_ADMIN,
                messages.NOT_AUTHORIZED_DELETE_USER,
            )

            result = await self.db.execute(
                select(Property).where(Property.owner_id == user.id).options(*property_detail_options())
            )
            for prop in result.scalars().all():
                stored_paths.extend(await property_service.delete_property_rows(prop))

            await self.db.execute(delete(Favorite).where(Favorite.user_id == user.id))
            await self.db.execute(delete(SavedSearch).where(SavedSearch.user_id == user.id))
            await self.db.delete(user)

        await self.storage.delete_many(stored_paths)

        logger.info("User deleted", extra={"user_id": user_id, "principal_id": principal.id})

    async def get_favorites(self, principal: Principal, user_id: int) -> list[Favorite]:
        """List a user's favorites with the bookmarked listings."""
        user = await self.get_user_by_id(user_id)

        require(
            principal,
            ResourceOwnership.of_user(user.id),
            SELF_OR_ADMIN,
            messages.NOT_AUTHORIZED_ACCESS_USER,
        )

        result = await self.db.execute(
            select(Favorite)
            .where(Favorite.user_id == user.id)
            .options(
                selectinload(Favorite.property).selectinload(Property.address),
                selectinload(Favorite.property).selectinload(Property.media),
            )
            .order_by(Favorite.created_at.desc(), Favorite.id.desc())
        )
        return list(result.scalars().all())

    async def get_saved_searches(self, principal: Principal, user_id: int) -> list[SavedSearch]:
        user = await self.get_user_by_id(user_id)

        require(
            principal,
            ResourceOwnership.of_user(user.id),
            SELF_OR_ADMIN,
            messages.NOT_AUTHORIZED_ACCESS_USER,
        )

        result = await self.db.execute(
            select(SavedSearch)
            .where(SavedSearch.user_id == user.id)
            .order_by(SavedSearch.created_at.desc(), SavedSearch.id.desc())
        )
        return list(result.scalars().all())

    async def create_saved_search(
        self, principal: Principal, user_id: int, data: SavedSearchCreate
    ) -> SavedSearch:
        async with atomic_operation(self.db):
            user = await self.get_user_by_id(user_id)

            require(
                principal,
                ResourceOwnership.of_user(user.id),
                SELF_OR_ADMIN,
                messages.NOT_AUTHORIZED_MODIFY_USER_DATA,
            )

            saved_search = SavedSearch(user_id=user.id, name=data.name, criteria=data.criteria)
            self.db.add(saved_search)
            await self.db.flush()

        return saved_search

    async def delete_saved_search(self, principal: Principal, user_id: int, search_id: int) -> None:
        """Delete a saved search; it must belong to the given user."""
        async with atomic_operation(self.db):
            user = await self.get_user_by_id(user_id)

            require(
                principal,
                ResourceOwnership.of_user(user.id),
                SELF_OR_ADMIN,
                messages.NOT_AUTHORIZED_MODIFY_USER_DATA,
            )

            result = await self.db.execute(
                select(SavedSearch).where(
                    SavedSearch.id == search_id,
                    SavedSearch.user_id == user.id,
                )
            )
            saved_search = result.scalar_one_or_none()

            if not saved_search:
                raise SavedSearchNotFoundError()

            require(
                principal,
                ResourceOwnership.of_record(saved_search),
                SELF_OR_ADMIN,
                messages.NOT_AUTHORIZED_MODIFY_USER_DATA,
            )

            await self.db.delete(saved_search)
