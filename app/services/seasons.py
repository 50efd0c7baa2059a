"""
Season windows, micro-adjustment, and the calendar helpers shared by the task
generators.

All values are timezone-aware UTC datetimes. datetime is immutable, so every
helper returns a new instant and the windows can be shared freely across
generators.
"""
import calendar
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from app.services.care_rules import SeasonName
from app.services.climate import ClimateProfile

# Days from the frost dates to each window boundary
SPRING_COOL_LEAD_DAYS = 45
SPRING_COOL_TAIL_DAYS = 30
WARM_LEAD_DAYS = 31
WARM_TAIL_DAYS = 45
FALL_COOL_LEAD_DAYS = 44
FALL_COOL_TAIL_DAYS = 15
DORMANT_LEAD_DAYS = 16
DORMANT_TAIL_DAYS = 46
DORMANT_YEAR_DAYS = 365

ELEVATION_DAYS_PER_1000_FT = 3
URBAN_HEAT_DAYS = 5

MID_MONTH_DAY = 15
MID_MONTH_HOUR = 10


# ── Calendar helpers ──────────────────────────────────────────────────────────


def frost_date(year: int, doy: int) -> datetime:
    """Midnight UTC of day-of-year ``doy`` in ``year``."""
    return datetime(year, 1, 1, tzinfo=timezone.utc) + timedelta(days=doy - 1)


def mid_month(year: int, month: int) -> datetime:
    return datetime(year, month, MID_MONTH_DAY, MID_MONTH_HOUR, tzinfo=timezone.utc)


def add_months(moment: datetime, months: int) -> datetime:
    """Shift by whole calendar months, clamping the day to the target month's length."""
    month_index = moment.month - 1 + months
    year = moment.year + month_index // 12
    month = month_index % 12 + 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


# ── Season windows ────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class SeasonWindow:
    start: datetime
    end: datetime

    def contains(self, moment: datetime) -> bool:
        """Calendar-day containment, inclusive at both ends."""
        return self.start.date() <= moment.date() <= self.end.date()

    @property
    def midpoint(self) -> datetime:
        return self.start + (self.end - self.start) / 2


@dataclass(frozen=True)
class SeasonWindows:
    spring_cool: SeasonWindow
    warm: SeasonWindow
    fall_cool: SeasonWindow
    dormant: SeasonWindow

    def get(self, name: SeasonName) -> SeasonWindow:
        return {
            SeasonName.spring_cool: self.spring_cool,
            SeasonName.warm: self.warm,
            SeasonName.fall_cool: self.fall_cool,
            SeasonName.dormant: self.dormant,
        }[name]


def compute_season_windows(climate: ClimateProfile, year: int) -> SeasonWindows:
    last_frost = frost_date(year, climate.last_frost_doy)
    first_frost = frost_date(year, climate.first_frost_doy)

    def days(n: int) -> timedelta:
        return timedelta(days=n)

    return SeasonWindows(
        spring_cool=SeasonWindow(
            start=last_frost - days(SPRING_COOL_LEAD_DAYS),
            end=last_frost + days(SPRING_COOL_TAIL_DAYS),
        ),
        warm=SeasonWindow(
            start=last_frost + days(WARM_LEAD_DAYS),
            end=first_frost - days(WARM_TAIL_DAYS),
        ),
        fall_cool=SeasonWindow(
            start=first_frost - days(FALL_COOL_LEAD_DAYS),
            end=first_frost + days(FALL_COOL_TAIL_DAYS),
        ),
        # The upper bound is last frost of *this* year shifted by a flat 365
        # days, not next year's frost date. Keep the arithmetic literal.
        dormant=SeasonWindow(
            start=first_frost + days(DORMANT_LEAD_DAYS),
            end=last_frost - days(DORMANT_TAIL_DAYS) + days(DORMANT_YEAR_DAYS),
        ),
    )


# ── Micro-adjustment ──────────────────────────────────────────────────────────


def micro_adjustment_days(elevation_ft: float, urban_index: float) -> float:
    """Elevation cooling lag plus urban heat-island offset, in (possibly fractional) days."""
    return (elevation_ft / 1000) * ELEVATION_DAYS_PER_1000_FT + urban_index * URBAN_HEAT_DAYS
