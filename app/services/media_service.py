"""Media service: uploads, listing, main image selection and deletion."""

import logging
from dataclasses import dataclass

from fastapi import UploadFile
from sqlalchemy import case, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.config.settings import settings
from app.constants import messages
from app.models.media import Media, MediaType
from app.models.property import Property
from app.policies import OWNER_OR_ADMIN, Principal, ResourceOwnership, require
from app.utils.exceptions import (
    MediaNotFoundError,
    PropertyNotFoundError,
    StorageError,
    UploadRejectedError,
    ValidationError,
)
from app.utils.transaction_manager import atomic_operation

from .storage import LocalMediaStorage

logger = logging.getLogger(__name__)


@dataclass
class PendingUpload:
    """An upload that passed validation and is ready to store."""

    filename: str | None
    content_type: str
    data: bytes


class MediaService:
    """Service for property media operations."""

    def __init__(self, db: AsyncSession, storage: LocalMediaStorage):
        self.db = db
        self.storage = storage

    async def _get_property(self, property_id: int, for_update: bool = False) -> Property:
        query = select(Property).where(Property.id == property_id)
        if for_update:
            query = query.with_for_update()

        result = await self.db.execute(query)
        prop = result.scalar_one_or_none()

        if not prop:
            raise PropertyNotFoundError()

        return prop

    async def get_by_id(self, media_id: int, for_update: bool = False) -> Media:
        """Load media with its property, or raise MediaNotFoundError."""
        query = (
            select(Media)
            .where(Media.id == media_id)
            .options(selectinload(Media.property))
            .execution_options(populate_existing=True)
        )
        if for_update:
            query = query.with_for_update()

        result = await self.db.execute(query)
        media = result.scalar_one_or_none()

        if not media:
            raise MediaNotFoundError()

        return media

    async def read_uploads(self, files: list[UploadFile]) -> list[PendingUpload]:
        """Validate count, content type and size of every file before any is stored."""

        if not files:
            raise UploadRejectedError(messages.NO_FILES_UPLOADED, error_code="NO_FILES_UPLOADED")

        if len(files) > settings.MAX_FILES_PER_UPLOAD:
            raise UploadRejectedError(
                messages.TOO_MANY_FILES,
                details={"max_files": settings.MAX_FILES_PER_UPLOAD},
            )

        pending = []
        for upload in files:
            content_type = (upload.content_type or "").lower().strip()
            if content_type not in settings.ALLOWED_MEDIA_TYPES:
                raise UploadRejectedError(
                    messages.INVALID_FILE_TYPE,
                    details={"filename": upload.filename, "content_type": content_type},
                )

            data = await upload.read()
            if len(data) > settings.MAX_FILE_SIZE:
                raise UploadRejectedError(
                    messages.FILE_TOO_LARGE,
                    details={"filename": upload.filename, "max_size": settings.MAX_FILE_SIZE},
                )

            pending.append(PendingUpload(upload.filename, content_type, data))

        return pending

    async def upload_media(
        self,
        principal: Principal,
        property_id: int,
        files: list[UploadFile],
        media_type: MediaType = MediaType.IMAGE,
        is_main: bool | None = None,
    ) -> list[Media]:
        """
        Store uploaded files for a property.

        Order of checks: property exists, owner or admin, then file validation.
        Nothing reaches the media store until all three pass.

        Main image selection applies to images only. With is_main true the
        first uploaded file becomes main and any other main image is unset.
        With is_main omitted the first file becomes main only when the
        property has none yet.
        """
        stored_paths: list[str] = []

        try:
            async with atomic_operation(self.db):
                prop = await self._get_property(property_id, for_update=True)

                require(
                    principal,
                    ResourceOwnership.of_property(prop),
                    OWNER_OR_ADMIN,
                    messages.NOT_AUTHORIZED_UPLOAD_MEDIA,
                )

                pending = await self.read_uploads(files)

                first_is_main = False
                if media_type == MediaType.IMAGE:
                    if is_main:
                        await self._unset_main(property_id)
                        first_is_main = True
                    elif is_main is None:
                        first_is_main = not await self._has_main_image(property_id)

                created = []
                for index, upload in enumerate(pending):
                    path = self.storage.build_path(property_id, upload.filename, upload.content_type)
                    stored = await self.storage.save(path, upload.data)
                    stored_paths.append(stored.path)

                    media = Media(
                        property_id=property_id,
                        type=media_type.value,
                        url=stored.url,
                        storage_path=stored.path,
                        is_main=first_is_main and index == 0,
                    )
                    self.db.add(media)
                    created.append(media)

                await self.db.flush()
        except Exception:
            # Files written before the failure have no rows pointing at them
            await self.storage.delete_many(stored_paths)
            raise

        logger.info(
            "Media uploaded",
            extra={
                "property_id": property_id,
                "principal_id": principal.id,
                "count": len(created),
                "media_type": media_type.value,
            },
        )
        return created

    async def list_media(self, property_id: int) -> list[Media]:
        """Public media listing: main first, then by type, newest first."""

        await self._get_property(property_id)

        result = await self.db.execute(
            select(Media)
            .where(Media.property_id == property_id)
            .order_by(
                case((Media.is_main.is_(True), 0), else_=1),
                Media.type.asc(),
                Media.created_at.desc(),
                Media.id.desc(),
            )
        )
        return list(result.scalars().all())

    async def update_media(self, principal: Principal, media_id: int, is_main: bool) -> Media:
        """Change the main flag. Making an image main unsets every other main image."""

        async with atomic_operation(self.db):
            media = await self.get_by_id(media_id, for_update=True)

            require(
                principal,
                ResourceOwnership.of_media(media),
                OWNER_OR_ADMIN,
                messages.NOT_AUTHORIZED_UPDATE_MEDIA,
            )

            if is_main and media.type != MediaType.IMAGE.value:
                raise ValidationError("Only images can be the main media")

            if is_main:
                await self._unset_main(media.property_id, exclude_id=media.id)

            media.is_main = is_main

        logger.info(
            "Media updated",
            extra={"media_id": media_id, "principal_id": principal.id, "is_main": is_main},
        )
        return await self.get_by_id(media_id)

    async def delete_media(self, principal: Principal, media_id: int) -> None:
        """
        Delete media and its stored file.

        If it was the main image the newest remaining image is promoted. A
        failure removing the file is logged and does not undo the deletion.
        """

        async with atomic_operation(self.db):
            media = await self.get_by_id(media_id, for_update=True)

            require(
                principal,
                ResourceOwnership.of_media(media),
                OWNER_OR_ADMIN,
                messages.NOT_AUTHORIZED_DELETE_MEDIA,
            )

            property_id = media.property_id
            storage_path = media.storage_path
            was_main = media.is_main

            await self.db.delete(media)
            await self.db.flush()

            if was_main:
                await self._promote_newest_image(property_id)

        if storage_path:
            try:
                await self.storage.delete(storage_path)
            except StorageError:
                logger.error(
                    "Failed to delete media file",
                    extra={"media_id": media_id, "path": storage_path},
                    exc_info=True,
                )

        logger.info("Media deleted", extra={"media_id": media_id, "principal_id": principal.id})

    async def _has_main_image(self, property_id: int) -> bool:
        result = await self.db.execute(
            select(Media.id)
            .where(Media.property_id == property_id, Media.is_main.is_(True))
            .limit(1)
        )
        return result.scalar_one_or_none() is not None

    async def _unset_main(self, property_id: int, exclude_id: int | None = None) -> None:
        query = (
            update(Media)
            .where(Media.property_id == property_id, Media.is_main.is_(True))
            .values(is_main=False)
            .execution_options(synchronize_session="fetch")
        )
        if exclude_id is not None:
            query = query.where(Media.id != exclude_id)
        await self.db.execute(query)

    async def _promote_newest_image(self, property_id: int) -> None:
        result = await self.db.execute(
            select(Media)
            .where(Media.property_id == property_id, Media.type == MediaType.IMAGE.value)
            .order_by(Media.created_at.desc(), Media.id.desc())
            .limit(1)
        )
        newest = result.scalar_one_or_none()
        if newest:
            newest.is_main = True
            logger.debug("Promoted main image", extra={"media_id": newest.id})
