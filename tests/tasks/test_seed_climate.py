import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.climate import CountyClimate
from app.services.care_rules import Region
from app.services.climate import resolve_climate
from app.tasks import seed_climate


@pytest.fixture
def seed_sessions(monkeypatch, session_factory):
    monkeypatch.setattr(seed_climate, "AsyncSessionLocal", session_factory)


async def test_seed_climate_writes_every_county(seed_sessions, db: AsyncSession):
    written = await seed_climate.seed_climate({})

    assert written == len(seed_climate._COUNTY_CLIMATES)
    assert await db.scalar(select(func.count()).select_from(CountyClimate)) == written


async def test_seed_climate_is_rerunnable(seed_sessions, db: AsyncSession):
    await seed_climate.seed_climate({})
    await seed_climate.seed_climate({})

    assert await db.scalar(select(func.count()).select_from(CountyClimate)) == len(seed_climate._COUNTY_CLIMATES)


async def test_seeded_county_resolves(seed_sessions, db: AsyncSession):
    await seed_climate.seed_climate({})

    profile = await resolve_climate(db, "wake")

    assert profile.region is Region.piedmont
    assert profile.last_frost_doy == 98
    assert profile.first_frost_doy == 302
    assert (profile.usda_zone_min, profile.usda_zone_max) == ("7b", "8a")
