"""
ARQ task: seed the county climate store.

Upserts one CountyClimate row per entry in _COUNTY_CLIMATES, keyed by county
name. Frost dates are 50%-probability averages expressed as day-of-year.
Safe to re-run; existing rows are overwritten with the table values.
"""
import logging

from sqlalchemy import select

from app.db.session import AsyncSessionLocal
from app.models.climate import CountyClimate

logger = logging.getLogger(__name__)

# county, region, last spring frost DOY, first fall frost DOY, precip mm, zone min, zone max
_COUNTY_CLIMATES: list[tuple[str, str, int, int, float, str, str]] = [
    # ── Coastal ───────────────────────────────────────────────────────────────
    ("Dare", "Coastal", 79, 327, 1320.0, "8a", "8b"),
    ("New Hanover", "Coastal", 84, 318, 1450.0, "8a", "8b"),
    ("Carteret", "Coastal", 86, 316, 1400.0, "8a", "8a"),
    ("Pitt", "Coastal", 96, 306, 1230.0, "7b", "8a"),
    # ── Piedmont ──────────────────────────────────────────────────────────────
    ("Wake", "Piedmont", 98, 302, 1120.0, "7b", "8a"),
    ("Durham", "Piedmont", 101, 299, 1150.0, "7b", "7b"),
    ("Guilford", "Piedmont", 104, 297, 1090.0, "7a", "7b"),
    ("Mecklenburg", "Piedmont", 97, 304, 1110.0, "7b", "8a"),
    # ── Mountains ─────────────────────────────────────────────────────────────
    ("Buncombe", "Mountains", 115, 288, 1190.0, "6b", "7a"),
    ("Watauga", "Mountains", 130, 276, 1350.0, "6a", "6b"),
    ("Jackson", "Mountains", 118, 287, 1600.0, "6b", "7a"),
]


async def seed_climate(ctx: dict) -> int:
    """Upsert the county climate table. Returns the number of rows written."""
    logger.info("seed_climate: starting")
    records = 0

    async with AsyncSessionLocal() as db:
        for county, region, last_frost, first_frost, precip, zone_min, zone_max in _COUNTY_CLIMATES:
            row = await db.scalar(select(CountyClimate).where(CountyClimate.county == county))
            if row is None:
                row = CountyClimate(county=county)
                db.add(row)

            row.region = region
            row.last_frost_doy = last_frost
            row.first_frost_doy = first_frost
            row.avg_annual_precip_mm = precip
            row.usda_zone_min = zone_min
            row.usda_zone_max = zone_max
            records += 1

        await db.commit()

    logger.info("seed_climate: complete — %d county profiles written", records)
    return records
