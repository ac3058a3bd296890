"""Service dependency injection."""

from collections.abc import AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.config.settings import settings
from app.dependencies.database import get_db
from app.services.auth_service import AuthService
from app.services.media_service import MediaService
from app.services.property_service import PropertyService
from app.services.storage import LocalMediaStorage
from app.services.user_service import UserService


def get_media_storage() -> LocalMediaStorage:
    """Get the media store configured for this process."""
    return LocalMediaStorage(
        upload_dir=settings.UPLOAD_DIR,
        base_url=settings.MEDIA_BASE_URL,
        url_path=settings.MEDIA_URL_PATH,
    )


async def get_auth_service(db: AsyncSession = Depends(get_db)) -> AsyncGenerator[AuthService, None]:
    """Get AuthService instance."""
    yield AuthService(db)


async def get_user_service(
    db: AsyncSession = Depends(get_db),
    storage: LocalMediaStorage = Depends(get_media_storage),
) -> AsyncGenerator[UserService, None]:
    """Get UserService instance."""
    yield UserService(db, storage)


async def get_property_service(
    db: AsyncSession = Depends(get_db),
    storage: LocalMediaStorage = Depends(get_media_storage),
) -> AsyncGenerator[PropertyService, None]:
    """Get PropertyService instance."""
    yield PropertyService(db, storage)


async def get_media_service(
    db: AsyncSession = Depends(get_db),
    storage: LocalMediaStorage = Depends(get_media_storage),
) -> AsyncGenerator[MediaService, None]:
    """Get MediaService instance."""
    yield MediaService(db, storage)
