from datetime import datetime, timezone

import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.db.base import Base
from app.db.session import get_db
from app.main import app
from app.models.garden import Garden
from app.models.plant import Plant
from app.models.task import UserPlant

TEST_DATABASE_URL = "sqlite+aiosqlite://"

USER_PLANT_ID = "8d0f6a52-3c1e-4f7b-9a0e-2b5c7d9e1f34"


# One in-memory database per test. StaticPool keeps the single connection alive
# for the lifetime of the engine so every session sees the same schema.
@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def client(db: AsyncSession):
    async def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def user_plant(db: AsyncSession) -> UserPlant:
    """A Piedmont garden (no county → default climate) holding one medium-maintenance shrub."""
    plant = Plant(
        id=1,
        common_name="Oakleaf Hydrangea",
        scientific_name="Hydrangea quercifolia",
        maintenance="Medium",
        growth_rate="Slow",
        prefers_cool_season=False,
        bloom_months=["May", "June"],
        harvest_months=[],
        propagation_methods=["Cuttings", "Division"],
        problems=[],
    )
    garden = Garden(
        id=1,
        name="Back yard",
        soil_texture="Loam",
        elevation_ft=0.0,
        urban_index=0.0,
        maintenance="Medium",
        county=None,
    )
    db.add_all([plant, garden])
    await db.flush()

    record = UserPlant(
        id=USER_PLANT_ID,
        garden_id=garden.id,
        plant_id=plant.id,
        nickname="Big Leaf",
        created_at=datetime(2025, 1, 1, tzinfo=timezone.utc),
    )
    db.add(record)
    await db.commit()
    return record
