"""
Seed the database with demo accounts and a sample listing.

Usage:
    python -m app.seed

Safe to run repeatedly: accounts are matched by email and the sample
listing is only created when the agent has no listings yet.
"""

import asyncio
import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.config.database import dispose_engine, get_async_session_local, init_models
from app.config.settings import settings
from app.models import (
    Address,
    Language,
    Media,
    MediaType,
    Property,
    PropertyFeature,
    PropertyStatus,
    PropertyType,
    User,
    UserRole,
)
from app.utils.security import hash_password
from app.utils.transaction_manager import atomic_operation

logger = logging.getLogger(__name__)

SEED_USERS = [
    {
        "email": "admin@example.com",
        "password": "admin123",
        "first_name": "Admin",
        "last_name": "User",
        "phone": "+52 123 456 7890",
        "role": UserRole.ADMIN,
        "language": Language.SPANISH,
    },
    {
        "email": "user@example.com",
        "password": "user123",
        "first_name": "Regular",
        "last_name": "User",
        "phone": "+52 098 765 4321",
        "role": UserRole.USER,
        "language": Language.ENGLISH,
    },
    {
        "email": "agent@example.com",
        "password": "agent123",
        "first_name": "Agent",
        "last_name": "Realtor",
        "phone": "+52 555 555 5555",
        "role": UserRole.AGENT,
        "language": Language.SPANISH,
    },
]


async def get_or_create_user(db: AsyncSession, data: dict) -> User:
    result = await db.execute(select(User).where(User.email == data["email"]))
    user = result.scalar_one_or_none()
    if user:
        logger.info("User already exists", extra={"email": data["email"]})
        return user

    user = User(
        email=data["email"],
        password_hash=hash_password(data["password"]),
        first_name=data["first_name"],
        last_name=data["last_name"],
        phone=data["phone"],
        role=data["role"].value,
        language=data["language"].value,
    )
    db.add(user)
    await db.flush()
    logger.info("User created", extra={"email": user.email, "role": user.role})
    return user


def sample_property(owner_id: int) -> Property:
    prop = Property(
        title="Casa Moderna en Condesa",
        title_en="Modern House in Condesa",
        description=(
            "Hermosa casa moderna con jardín en el corazón de la Condesa. "
            "Cerca de restaurantes y parques."
        ),
        description_en=(
            "Beautiful modern house with garden in the heart of Condesa. "
            "Close to restaurants and parks."
        ),
        price=5_000_000,
        currency="MXN",
        type=PropertyType.HOUSE.value,
        status=PropertyStatus.ACTIVE.value,
        bedrooms=3,
        bathrooms=2,
        building_size=180,
        land_size=250,
        construction_year=2018,
        verified=True,
        views=0,
        owner_id=owner_id,
    )
    prop.address = Address(
        street="Calle Ozuluama",
        street_number="12",
        neighborhood="Condesa",
        postal_code="06140",
        city="Ciudad de México",
        state="MEXICO_CITY",
        latitude=19.4137,
        longitude=-99.1726,
    )
    prop.features = [
        PropertyFeature(name="Jardín", name_en="Garden"),
        PropertyFeature(name="Estacionamiento", name_en="Parking"),
        PropertyFeature(name="Seguridad 24/7", name_en="24/7 Security"),
    ]
    prop.media = [
        Media(type=MediaType.IMAGE.value, url="https://example.com/house1.jpg", is_main=True),
        Media(type=MediaType.IMAGE.value, url="https://example.com/house2.jpg", is_main=False),
        Media(type=MediaType.FLOOR_PLAN.value, url="https://example.com/floorplan.jpg", is_main=False),
    ]
    return prop


async def seed() -> None:
    await init_models()

    session_local = get_async_session_local()
    async with session_local() as db:
        async with atomic_operation(db):
            users = {}
            for data in SEED_USERS:
                user = await get_or_create_user(db, data)
                users[data["role"]] = user

            agent = users[UserRole.AGENT]
            result = await db.execute(select(Property.id).where(Property.owner_id == agent.id).limit(1))
            if result.scalar_one_or_none() is None:
                db.add(sample_property(agent.id))
                logger.info("Sample property created", extra={"owner_id": agent.id})

    await dispose_engine()
    logger.info("Database seeding completed", extra={"database_url": settings.DATABASE_URL})


if __name__ == "__main__":
    logging.basicConfig(level=settings.LOG_LEVEL, format="%(asctime)s %(levelname)s [%(name)s] %(message)s")
    asyncio.run(seed())
