from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.climate import CountyClimate
from app.services.care_rules import Region
from app.services.climate import DEFAULT_CLIMATE, resolve_climate


async def _add_county(db: AsyncSession, **fields) -> None:
    values = {
        "county": "Dare",
        "region": "Coastal",
        "last_frost_doy": 79,
        "first_frost_doy": 327,
        "avg_annual_precip_mm": 1320.0,
        "usda_zone_min": "8a",
        "usda_zone_max": "8b",
    }
    values.update(fields)
    db.add(CountyClimate(**values))
    await db.commit()


def test_default_climate_values():
    assert DEFAULT_CLIMATE.region is Region.piedmont
    assert DEFAULT_CLIMATE.last_frost_doy == 110
    assert DEFAULT_CLIMATE.first_frost_doy == 300
    assert DEFAULT_CLIMATE.avg_annual_precip_mm == 1200.0
    assert (DEFAULT_CLIMATE.usda_zone_min, DEFAULT_CLIMATE.usda_zone_max) == ("7a", "8a")
    assert DEFAULT_CLIMATE.avg_monthly_precip_mm == 100.0


async def test_no_county_uses_default(db: AsyncSession):
    assert await resolve_climate(db, None) is DEFAULT_CLIMATE
    assert await resolve_climate(db, "   ") is DEFAULT_CLIMATE


async def test_county_lookup_is_case_insensitive(db: AsyncSession):
    await _add_county(db)

    profile = await resolve_climate(db, "  dare ")

    assert profile.region is Region.coastal
    assert profile.last_frost_doy == 79
    assert profile.first_frost_doy == 327
    assert profile.county == "Dare"


async def test_unknown_county_uses_default(db: AsyncSession):
    await _add_county(db)
    assert await resolve_climate(db, "Atlantis") is DEFAULT_CLIMATE


async def test_incomplete_profile_uses_default(db: AsyncSession):
    await _add_county(db, county="Hyde", first_frost_doy=None)
    assert await resolve_climate(db, "Hyde") is DEFAULT_CLIMATE


async def test_lookup_failure_uses_default_and_keeps_session_usable(db: AsyncSession, monkeypatch):
    async def failing_scalar(*args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("connection refused"))

    monkeypatch.setattr(db, "scalar", failing_scalar)
    assert await resolve_climate(db, "Wake") is DEFAULT_CLIMATE
    monkeypatch.undo()

    await _add_county(db, county="Wake", region="Piedmont", last_frost_doy=98, first_frost_doy=302)
    profile = await resolve_climate(db, "wake")

    assert profile.county == "Wake"
    assert profile.last_frost_doy == 98
