"""
Climate resolver.

Looks up a garden's regional climate profile by county name. Falls back to
DEFAULT_CLIMATE when the garden has no county, the county is unknown, the
stored row is incomplete, or the lookup itself fails.
Never raises; always returns a usable profile.
"""
import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.climate import CountyClimate
from app.services.care_rules import DEFAULT_REGION, Region

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClimateProfile:
    region: Region
    last_frost_doy: int
    first_frost_doy: int
    avg_annual_precip_mm: float
    usda_zone_min: Optional[str]
    usda_zone_max: Optional[str]
    county: Optional[str] = None

    @property
    def avg_monthly_precip_mm(self) -> float:
        return self.avg_annual_precip_mm / 12


DEFAULT_CLIMATE = ClimateProfile(
    region=Region.piedmont,
    last_frost_doy=110,
    first_frost_doy=300,
    avg_annual_precip_mm=1200.0,
    usda_zone_min="7a",
    usda_zone_max="8a",
)


def profile_from_record(record: CountyClimate) -> Optional[ClimateProfile]:
    """Map a stored row to a ClimateProfile. Returns None if required fields are missing or out of range."""
    if record.last_frost_doy is None or record.first_frost_doy is None:
        return None
    if record.avg_annual_precip_mm is None:
        return None
    if not (1 <= record.last_frost_doy <= 366 and 1 <= record.first_frost_doy <= 366):
        return None

    return ClimateProfile(
        region=Region.parse(record.region, DEFAULT_REGION),
        last_frost_doy=record.last_frost_doy,
        first_frost_doy=record.first_frost_doy,
        avg_annual_precip_mm=float(record.avg_annual_precip_mm),
        usda_zone_min=record.usda_zone_min,
        usda_zone_max=record.usda_zone_max,
        county=record.county,
    )


async def resolve_climate(db: AsyncSession, county: Optional[str]) -> ClimateProfile:
    if not county or not county.strip():
        logger.info("resolve_climate: no county on garden, using default profile")
        return DEFAULT_CLIMATE

    normalized = county.strip().lower()
    # A failed lookup must not abort the caller's transaction or expire its loaded rows.
    try:
        async with db.begin_nested():
            record = await db.scalar(
                select(CountyClimate).where(func.lower(CountyClimate.county) == normalized)
            )
    except SQLAlchemyError as exc:
        logger.warning("resolve_climate: lookup failed for county %r: %s", county, exc)
        return DEFAULT_CLIMATE

    if record is None:
        logger.info("resolve_climate: no climate profile for county %r, using default", county)
        return DEFAULT_CLIMATE

    profile = profile_from_record(record)
    if profile is None:
        logger.warning("resolve_climate: incomplete climate profile for county %r, using default", county)
        return DEFAULT_CLIMATE
    return profile
