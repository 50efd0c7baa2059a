"""
Care-task rule tables.

Every table is keyed by a closed enumeration and covers every member, so a
lookup can never fall through. Raw strings from the plant, garden and climate
stores are parsed once via the ``parse`` classmethods; unrecognized values map
to an explicit default.
"""
import logging
from enum import Enum
from typing import Optional

from app.schemas.task import TaskType

logger = logging.getLogger(__name__)


class _ParsableEnum(str, Enum):
    @classmethod
    def parse(cls, raw: Optional[str], default: "_ParsableEnum") -> "_ParsableEnum":
        if raw is None:
            return default
        normalized = str(raw).strip().lower()
        for member in cls:
            if member.value.lower() == normalized:
                return member
        logger.warning("%s.parse: unrecognized value %r, using %s", cls.__name__, raw, default.value)
        return default


class MaintenanceLevel(_ParsableEnum):
    low = "Low"
    medium = "Medium"
    high = "High"


class GrowthRate(_ParsableEnum):
    fast = "Fast"
    slow = "Slow"


class Region(_ParsableEnum):
    coastal = "Coastal"
    mountains = "Mountains"
    piedmont = "Piedmont"
    unknown = "Unknown"


class SoilTexture(_ParsableEnum):
    clay = "Clay"
    loam = "Loam"
    sand = "Sand"
    silt = "Silt"
    high_organic = "High Organic Matter"


class SeasonName(str, Enum):
    spring_cool = "springCool"
    warm = "warm"
    fall_cool = "fallCool"
    dormant = "dormant"


# ── Defaults for missing or unrecognized inputs ───────────────────────────────

DEFAULT_MAINTENANCE = MaintenanceLevel.medium
DEFAULT_GROWTH_RATE = GrowthRate.slow
DEFAULT_SOIL_TEXTURE = SoilTexture.loam
DEFAULT_REGION = Region.unknown


# ── Water ─────────────────────────────────────────────────────────────────────

WATER_INTERVAL_DAYS: dict[MaintenanceLevel, int] = {
    MaintenanceLevel.low: 7,
    MaintenanceLevel.medium: 4,
    MaintenanceLevel.high: 2,
}

DRY_MONTH_PRECIP_MM = 80.0    # below → +1 day
WET_MONTH_PRECIP_MM = 120.0   # above → −1 day

WARM_SEASON_WATER_ADJUST: dict[Region, int] = {
    Region.coastal: 2,
    Region.mountains: 1,
    Region.piedmont: 1,
    Region.unknown: 1,
}
COOL_SEASON_WATER_ADJUST = -1

# ── Fertilize ─────────────────────────────────────────────────────────────────

FERTILIZE_FREQ_MONTHS: dict[GrowthRate, int] = {
    GrowthRate.fast: 1,
    GrowthRate.slow: 3,
}

FERTILIZE_START_DELAY_DAYS: dict[Region, int] = {
    Region.coastal: 14,
    Region.mountains: 28,
    Region.piedmont: 21,
    Region.unknown: 14,
}

# ── Prune ─────────────────────────────────────────────────────────────────────

POST_BLOOM_PRUNE_DAYS = 7
PRE_FROST_PRUNE_DAYS = 30
PRE_FROST_PRUNE_MIN_ZONE = 7

# ── Inspect ───────────────────────────────────────────────────────────────────

INSPECT_INTERVAL_WITH_PROBLEMS = 7
INSPECT_INTERVAL_GROWING = 10
INSPECT_INTERVAL_DEFAULT = 14
INSPECT_GROWING_SEASON_END = (9, 30)  # (month, day)

# ── Mulch ─────────────────────────────────────────────────────────────────────

# Equal to the 10-day fertilizer frost spacing. Kept as its own constant until
# product confirms whether mulch timing is meant to follow that spacing.
MULCH_FROST_BUFFER_DAYS = 10
SUMMER_MULCH_MONTH = 7

# ── Propagate ─────────────────────────────────────────────────────────────────

PROPAGATION_SEASONS: dict[str, SeasonName] = {
    "division": SeasonName.spring_cool,
    "cuttings": SeasonName.warm,
}
DEFAULT_PROPAGATION_SEASON = SeasonName.fall_cool

# ── Transplant / Log ──────────────────────────────────────────────────────────

TRANSPLANT_SETTLE_DAYS = 28
NEXT_SEASON_DEFER_DAYS = 365
FIRST_LOG_DAYS = 7

# ── Weed ──────────────────────────────────────────────────────────────────────

WEED_INTERVAL_DAYS: dict[MaintenanceLevel, int] = {
    MaintenanceLevel.low: 21,
    MaintenanceLevel.medium: 14,
    MaintenanceLevel.high: 7,
}
WARM_SEASON_WEED_FACTOR = 0.75
MIN_WEED_INTERVAL_DAYS = 3

# ── Horizon ───────────────────────────────────────────────────────────────────

HORIZON_DAYS = 365


# ── Task type catalogue ───────────────────────────────────────────────────────

TASK_TYPE_DESCRIPTIONS: dict[TaskType, str] = {
    TaskType.water: "Give your plant the recommended amount of water.",
    TaskType.fertilize: "Apply fertilizer as directed for healthy growth.",
    TaskType.harvest: "Pick ripe fruit, flowers or foliage at their peak.",
    TaskType.prune: "Trim dead or overgrown parts to encourage new growth.",
    TaskType.inspect: "Check for pests, disease, or other issues.",
    TaskType.mulch: "Add or refresh mulch to retain moisture and suppress weeds.",
    TaskType.propagate: "Start new plants from cuttings, seeds, or divisions.",
    TaskType.transplant: "Move your plant to a new location or container.",
    TaskType.log: "Record notes or observations about your plant.",
    TaskType.weed: "Remove unwanted plants from your garden.",
}


# ── Month names ───────────────────────────────────────────────────────────────

_MONTHS = [
    "january", "february", "march", "april", "may", "june",
    "july", "august", "september", "october", "november", "december",
]


def parse_month(name: str) -> Optional[int]:
    """Return 1–12 for a full or three-letter month name, None if unrecognized."""
    normalized = name.strip().lower()
    if len(normalized) < 3:
        return None
    for idx, month in enumerate(_MONTHS, start=1):
        if month == normalized or (len(normalized) == 3 and month.startswith(normalized)):
            return idx
    return None


def parse_zone_number(zone: Optional[str]) -> Optional[int]:
    """'7a' → 7, '10b' → 10. Returns None when no leading digits are present."""
    if not zone:
        return None
    digits = ""
    for ch in zone.strip():
        if not ch.isdigit():
            break
        digits += ch
    return int(digits) if digits else None
