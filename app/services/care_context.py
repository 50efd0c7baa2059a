"""
Input resolution for the care-task generators.

Turns the raw plant, garden and climate records into one frozen CareContext.
Every optional field is defaulted here, once; generators read resolved values
only and never fall back on their own.
"""
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Iterable, Optional

from app.models.garden import Garden
from app.models.plant import Plant
from app.schemas.task import UserPlantIn
from app.services.care_rules import (
    DEFAULT_GROWTH_RATE,
    DEFAULT_MAINTENANCE,
    DEFAULT_SOIL_TEXTURE,
    HORIZON_DAYS,
    GrowthRate,
    MaintenanceLevel,
    SoilTexture,
    parse_month,
    parse_zone_number,
)
from app.services.climate import ClimateProfile
from app.services.seasons import SeasonWindows, compute_season_windows, micro_adjustment_days

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlantCareTraits:
    maintenance: MaintenanceLevel
    growth_rate: GrowthRate
    bloom_months: tuple[int, ...]
    harvest_months: tuple[int, ...]
    propagation_methods: tuple[str, ...]
    problems: tuple[str, ...]
    prefers_cool_season: bool


@dataclass(frozen=True)
class GardenSite:
    soil_texture: SoilTexture
    elevation_ft: float
    urban_index: float
    maintenance: MaintenanceLevel
    county: Optional[str]


@dataclass(frozen=True)
class CareContext:
    user_plant_id: str
    planted_at: datetime
    today: datetime
    horizon: datetime
    plant: PlantCareTraits
    garden: GardenSite
    climate: ClimateProfile
    windows: SeasonWindows
    micro_adjustment: timedelta
    zone_numbers: tuple[int, ...]

    def adjust(self, moment: datetime) -> datetime:
        return moment + self.micro_adjustment

    def is_future(self, moment: datetime) -> bool:
        return moment > self.today


# ── Resolution helpers ────────────────────────────────────────────────────────


def as_utc(moment: datetime) -> datetime:
    """Naive datetimes are taken to be UTC."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def _months(names: Optional[Iterable[str]], field: str) -> tuple[int, ...]:
    months: list[int] = []
    for name in names or []:
        month = parse_month(str(name))
        if month is None:
            logger.warning("resolve_context: ignoring unrecognized %s month %r", field, name)
            continue
        if month not in months:
            months.append(month)
    return tuple(months)


def _strings(values: Optional[Iterable[str]]) -> tuple[str, ...]:
    return tuple(str(v).strip() for v in values or [] if v is not None and str(v).strip())


def resolve_plant(plant: Plant) -> PlantCareTraits:
    return PlantCareTraits(
        maintenance=MaintenanceLevel.parse(plant.maintenance, DEFAULT_MAINTENANCE),
        growth_rate=GrowthRate.parse(plant.growth_rate, DEFAULT_GROWTH_RATE),
        bloom_months=_months(plant.bloom_months, "bloom"),
        harvest_months=_months(plant.harvest_months, "harvest"),
        propagation_methods=_strings(plant.propagation_methods),
        problems=_strings(plant.problems),
        prefers_cool_season=bool(plant.prefers_cool_season),
    )


def resolve_garden(garden: Garden) -> GardenSite:
    urban_index = float(garden.urban_index or 0.0)
    if not 0.0 <= urban_index <= 1.0:
        logger.warning(
            "resolve_context: urban_index %.3f out of range for garden %s, clamping", urban_index, garden.id
        )
        urban_index = min(max(urban_index, 0.0), 1.0)

    return GardenSite(
        soil_texture=SoilTexture.parse(garden.soil_texture, DEFAULT_SOIL_TEXTURE),
        elevation_ft=float(garden.elevation_ft or 0.0),
        urban_index=urban_index,
        maintenance=MaintenanceLevel.parse(garden.maintenance, DEFAULT_MAINTENANCE),
        county=garden.county.strip() if garden.county and garden.county.strip() else None,
    )


def resolve_context(
    user_plant: UserPlantIn,
    plant: Plant,
    garden: Garden,
    climate: ClimateProfile,
    today: datetime,
) -> CareContext:
    today = as_utc(today)
    plant_traits = resolve_plant(plant)
    site = resolve_garden(garden)
    zones = tuple(
        n for n in (parse_zone_number(climate.usda_zone_min), parse_zone_number(climate.usda_zone_max))
        if n is not None
    )

    return CareContext(
        user_plant_id=user_plant.id,
        planted_at=as_utc(user_plant.created_at),
        today=today,
        horizon=today + timedelta(days=HORIZON_DAYS),
        plant=plant_traits,
        garden=site,
        climate=climate,
        windows=compute_season_windows(climate, today.year),
        micro_adjustment=timedelta(days=micro_adjustment_days(site.elevation_ft, site.urban_index)),
        zone_numbers=zones,
    )
