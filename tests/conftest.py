"""Test configuration and fixtures."""

import uuid
from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.config.settings import settings
from app.dependencies.services import get_media_storage
from app.main import app
from app.models import Address, Media, MediaType, Property, PropertyFeature, User, UserRole
from app.services.jwt_service import JWTService
from app.services.storage import LocalMediaStorage
from app.utils.security import hash_password

TEST_PASSWORD = "TestPassword123"


# Test settings
@pytest.fixture(autouse=True)
def setup_test_settings(tmp_path, monkeypatch):
    """Point the app at a fresh SQLite file and upload directory for every test."""
    from app.config.database import reset_engines

    monkeypatch.setattr(settings, "TESTING", True)
    monkeypatch.setattr(settings, "DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    monkeypatch.setattr(settings, "UPLOAD_DIR", str(tmp_path / "uploads"))

    # Reset engines to pick up new settings
    reset_engines()

    yield

    reset_engines()


@pytest.fixture
def upload_dir(tmp_path):
    return tmp_path / "uploads"


@pytest.fixture
def media_storage(upload_dir) -> LocalMediaStorage:
    return LocalMediaStorage(str(upload_dir), "http://test", "/uploads")


# Setup database tables for tests
@pytest_asyncio.fixture
async def database():
    """Create all tables in the per-test database."""
    from app.config.database import dispose_engine, init_models

    await init_models()

    yield

    await dispose_engine()


# Database session for tests
@pytest_asyncio.fixture
async def db_session(database):
    """Create async database session for testing."""
    from app.config.database import get_async_session_local

    session_local = get_async_session_local()
    async with session_local() as session:
        yield session


# Async test client
@pytest_asyncio.fixture
async def async_client(database, media_storage) -> AsyncGenerator[AsyncClient, None]:
    """Create async test client."""
    app.dependency_overrides[get_media_storage] = lambda: media_storage

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


async def _create_user(role: UserRole, first_name: str) -> User:
    from app.config.database import get_async_session_local

    unique_id = str(uuid.uuid4())[:8]
    session_local = get_async_session_local()
    async with session_local() as session:
        user = User(
            email=f"{first_name.lower()}_{unique_id}@example.com",
            password_hash=hash_password(TEST_PASSWORD),
            first_name=first_name,
            last_name="Tester",
            role=role.value,
        )
        session.add(user)
        await session.commit()
        await session.refresh(user)

    # Add original password for testing
    user.original_password = TEST_PASSWORD
    return user


@pytest_asyncio.fixture
async def regular_user(database) -> User:
    return await _create_user(UserRole.USER, "Regular")


@pytest_asyncio.fixture
async def other_user(database) -> User:
    return await _create_user(UserRole.USER, "Other")


@pytest_asyncio.fixture
async def agent_user(database) -> User:
    return await _create_user(UserRole.AGENT, "Agent")


@pytest_asyncio.fixture
async def admin_user(database) -> User:
    return await _create_user(UserRole.ADMIN, "Admin")


def bearer(user: User) -> dict[str, str]:
    token = JWTService().create_access_token(user_id=user.id, email=user.email, role=user.role)
    return {"Authorization": f"Bearer {token}"}


# Authentication helpers
@pytest.fixture
def user_headers(regular_user):
    return bearer(regular_user)


@pytest.fixture
def other_headers(other_user):
    return bearer(other_user)


@pytest.fixture
def agent_headers(agent_user):
    return bearer(agent_user)


@pytest.fixture
def admin_headers(admin_user):
    return bearer(admin_user)


@pytest.fixture
def create_property(database):
    """Factory inserting a listing directly in the database; returns its id."""
    from app.config.database import get_async_session_local

    async def _create(owner: User, with_main_image: bool = False, **overrides) -> int:
        data = {
            "title": "Casa en Condesa",
            "description": "Casa con jardín",
            "price": 1_500_000.0,
            "currency": "MXN",
            "type": "HOUSE",
            "status": "ACTIVE",
            "bedrooms": 3,
            "bathrooms": 2,
            "verified": False,
            "views": 0,
        }
        data.update(overrides)
        city = data.pop("city", "Ciudad de México")

        session_local = get_async_session_local()
        async with session_local() as session:
            prop = Property(**data, owner_id=owner.id)
            prop.address = Address(neighborhood="Condesa", city=city, state="CDMX")
            prop.features = [PropertyFeature(name="Jardín", name_en="Garden")]
            if with_main_image:
                prop.media = [
                    Media(type=MediaType.IMAGE.value, url="https://example.com/main.jpg", is_main=True)
                ]
            session.add(prop)
            await session.commit()
            return prop.id

    return _create


@pytest.fixture
def property_payload():
    return {
        "title": "Departamento en Roma",
        "title_en": "Apartment in Roma",
        "description": "Departamento luminoso",
        "price": 2_500_000,
        "type": "APARTMENT",
        "bedrooms": 2,
        "bathrooms": 1,
        "address": {
            "street": "Calle Colima",
            "neighborhood": "Roma Norte",
            "city": "Ciudad de México",
            "state": "CDMX",
            "latitude": 19.41,
            "longitude": -99.16,
        },
        "features": [{"name": "Terraza", "name_en": "Terrace"}],
        "media": [{"type": "IMAGE", "url": "https://example.com/a.jpg", "is_main": True}],
    }
