"""
Care-task generators.

One pure function per task type, all sharing the TaskGenerator signature:
take a resolved CareContext, return candidate tasks. Generators never read the
database, never mutate the context, and may return dates the assembler later
drops (past or beyond the 365-day horizon).

The micro-adjustment is applied before any "is future" or "inside window"
check, so those checks see the date the user will actually be shown.
"""
import math
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable

from app.schemas.task import TaskType
from app.services.care_context import CareContext
from app.services.care_rules import (
    COOL_SEASON_WATER_ADJUST,
    DEFAULT_PROPAGATION_SEASON,
    DRY_MONTH_PRECIP_MM,
    FERTILIZE_FREQ_MONTHS,
    FERTILIZE_START_DELAY_DAYS,
    FIRST_LOG_DAYS,
    INSPECT_GROWING_SEASON_END,
    INSPECT_INTERVAL_DEFAULT,
    INSPECT_INTERVAL_GROWING,
    INSPECT_INTERVAL_WITH_PROBLEMS,
    MIN_WEED_INTERVAL_DAYS,
    MULCH_FROST_BUFFER_DAYS,
    NEXT_SEASON_DEFER_DAYS,
    POST_BLOOM_PRUNE_DAYS,
    PRE_FROST_PRUNE_DAYS,
    PRE_FROST_PRUNE_MIN_ZONE,
    PROPAGATION_SEASONS,
    SUMMER_MULCH_MONTH,
    TRANSPLANT_SETTLE_DAYS,
    WARM_SEASON_WATER_ADJUST,
    WARM_SEASON_WEED_FACTOR,
    WATER_INTERVAL_DAYS,
    WEED_INTERVAL_DAYS,
    WET_MONTH_PRECIP_MM,
    Region,
    SoilTexture,
)
from app.services.seasons import add_months, frost_date, mid_month


@dataclass(frozen=True)
class CandidateTask:
    user_plant_id: str
    task_type: TaskType
    due_date: datetime


TaskGenerator = Callable[[CareContext], list[CandidateTask]]


# ── Shared helpers ────────────────────────────────────────────────────────────


def _task(ctx: CareContext, task_type: TaskType, due: datetime) -> CandidateTask:
    return CandidateTask(user_plant_id=ctx.user_plant_id, task_type=task_type, due_date=due)


def _every_n_days(ctx: CareContext, task_type: TaskType, interval_days: int) -> list[CandidateTask]:
    """today + interval + micro-adjustment, then every interval days up to the horizon."""
    step = timedelta(days=interval_days)
    due = ctx.adjust(ctx.today + step)
    tasks = []
    while due <= ctx.horizon:
        tasks.append(_task(ctx, task_type, due))
        due += step
    return tasks


def _monthly_from(ctx: CareContext, task_type: TaskType, first: datetime, months: int) -> list[CandidateTask]:
    tasks = []
    k = 0
    due = first
    while due <= ctx.horizon:
        tasks.append(_task(ctx, task_type, due))
        k += 1
        due = add_months(first, k * months)
    return tasks


# ── Water ─────────────────────────────────────────────────────────────────────


def water_interval_days(ctx: CareContext) -> int:
    interval = WATER_INTERVAL_DAYS[ctx.plant.maintenance]

    monthly_precip = ctx.climate.avg_monthly_precip_mm
    if monthly_precip < DRY_MONTH_PRECIP_MM:
        interval += 1
    elif monthly_precip > WET_MONTH_PRECIP_MM:
        interval -= 1

    if ctx.garden.soil_texture is SoilTexture.sand:
        interval += 1

    # Days no window of this year covers (early January) get no seasonal shift.
    windows = ctx.windows
    if windows.warm.contains(ctx.today):
        interval += WARM_SEASON_WATER_ADJUST[ctx.climate.region]
    elif any(w.contains(ctx.today) for w in (windows.spring_cool, windows.fall_cool, windows.dormant)):
        interval += COOL_SEASON_WATER_ADJUST

    return max(1, interval)


def water_tasks(ctx: CareContext) -> list[CandidateTask]:
    return _every_n_days(ctx, TaskType.water, water_interval_days(ctx))


# ── Fertilize ─────────────────────────────────────────────────────────────────


def fertilize_tasks(ctx: CareContext) -> list[CandidateTask]:
    freq_months = FERTILIZE_FREQ_MONTHS[ctx.plant.growth_rate]
    delay = timedelta(days=FERTILIZE_START_DELAY_DAYS[ctx.climate.region])
    anchor = ctx.adjust(ctx.windows.spring_cool.start + delay)

    # Never emit past-dated applications: roll forward until strictly after today.
    k = 0
    while add_months(anchor, k * freq_months) <= ctx.today:
        k += 1

    tasks = []
    due = add_months(anchor, k * freq_months)
    while due <= ctx.horizon:
        # Cool-season plants skip warm-window feedings; the cadence keeps running.
        if not (ctx.plant.prefers_cool_season and ctx.windows.warm.contains(due)):
            tasks.append(_task(ctx, TaskType.fertilize, due))
        k += 1
        due = add_months(anchor, k * freq_months)
    return tasks


# ── Harvest ───────────────────────────────────────────────────────────────────


def harvest_tasks(ctx: CareContext) -> list[CandidateTask]:
    tasks = []
    for month in ctx.plant.harvest_months:
        due = ctx.adjust(mid_month(ctx.today.year, month))
        if ctx.is_future(due):
            tasks.append(_task(ctx, TaskType.harvest, due))
    return tasks


# ── Prune ─────────────────────────────────────────────────────────────────────


def prune_tasks(ctx: CareContext) -> list[CandidateTask]:
    tasks = []
    windows = ctx.windows

    # Post-bloom
    for month in ctx.plant.bloom_months:
        due = ctx.adjust(mid_month(ctx.today.year, month) + timedelta(days=POST_BLOOM_PRUNE_DAYS))
        if windows.warm.contains(due) and ctx.is_future(due):
            tasks.append(_task(ctx, TaskType.prune, due))

    # Pre-frost
    if any(zone >= PRE_FROST_PRUNE_MIN_ZONE for zone in ctx.zone_numbers):
        first_frost = frost_date(ctx.today.year, ctx.climate.first_frost_doy)
        due = ctx.adjust(first_frost - timedelta(days=PRE_FROST_PRUNE_DAYS))
        if ctx.is_future(due):
            tasks.append(_task(ctx, TaskType.prune, due))

    # Dormant structural
    due = ctx.adjust(mid_month(ctx.today.year + 1, 1))
    if ctx.is_future(due) and windows.dormant.contains(due):
        tasks.append(_task(ctx, TaskType.prune, due))

    return tasks


# ── Inspect ───────────────────────────────────────────────────────────────────


def inspect_interval_days(ctx: CareContext) -> int:
    if ctx.plant.problems:
        return INSPECT_INTERVAL_WITH_PROBLEMS

    month, day = INSPECT_GROWING_SEASON_END
    today = ctx.today.date()
    if ctx.windows.warm.start.date() <= today <= today.replace(month=month, day=day):
        return INSPECT_INTERVAL_GROWING
    return INSPECT_INTERVAL_DEFAULT


def inspect_tasks(ctx: CareContext) -> list[CandidateTask]:
    return _every_n_days(ctx, TaskType.inspect, inspect_interval_days(ctx))


# ── Mulch ─────────────────────────────────────────────────────────────────────


def mulch_tasks(ctx: CareContext) -> list[CandidateTask]:
    year = ctx.today.year
    buffer = timedelta(days=MULCH_FROST_BUFFER_DAYS)
    candidates = [
        ctx.adjust(frost_date(year, ctx.climate.last_frost_doy) + buffer),
        ctx.adjust(frost_date(year, ctx.climate.first_frost_doy) - buffer),
    ]
    tasks = [_task(ctx, TaskType.mulch, due) for due in candidates if ctx.is_future(due)]

    # Summer top-up for fast-draining coastal sand
    if ctx.climate.region is Region.coastal and ctx.garden.soil_texture is SoilTexture.sand:
        due = ctx.adjust(mid_month(year, SUMMER_MULCH_MONTH))
        if ctx.is_future(due) and ctx.windows.warm.contains(due):
            tasks.append(_task(ctx, TaskType.mulch, due))

    return tasks


# ── Propagate ─────────────────────────────────────────────────────────────────


def propagate_tasks(ctx: CareContext) -> list[CandidateTask]:
    tasks = []
    for method in ctx.plant.propagation_methods:
        season = PROPAGATION_SEASONS.get(method.lower(), DEFAULT_PROPAGATION_SEASON)
        due = ctx.adjust(ctx.windows.get(season).midpoint)
        if ctx.is_future(due):
            tasks.append(_task(ctx, TaskType.propagate, due))
    return tasks


# ── Transplant ────────────────────────────────────────────────────────────────


def transplant_tasks(ctx: CareContext) -> list[CandidateTask]:
    windows = ctx.windows
    base = ctx.planted_at + timedelta(days=TRANSPLANT_SETTLE_DAYS)
    if base < windows.spring_cool.start:
        base = windows.spring_cool.start
    elif base > windows.warm.end:
        base = windows.spring_cool.start + timedelta(days=NEXT_SEASON_DEFER_DAYS)
    return [_task(ctx, TaskType.transplant, ctx.adjust(base))]


# ── Log ───────────────────────────────────────────────────────────────────────


def log_tasks(ctx: CareContext) -> list[CandidateTask]:
    first = ctx.adjust(ctx.today + timedelta(days=FIRST_LOG_DAYS))
    return _monthly_from(ctx, TaskType.log, first, 1)


# ── Weed ──────────────────────────────────────────────────────────────────────


def weed_interval_days(ctx: CareContext) -> int:
    interval = WEED_INTERVAL_DAYS[ctx.garden.maintenance]
    if ctx.windows.warm.contains(ctx.today):
        interval = max(MIN_WEED_INTERVAL_DAYS, math.floor(interval * WARM_SEASON_WEED_FACTOR))
    return interval


def weed_tasks(ctx: CareContext) -> list[CandidateTask]:
    return _every_n_days(ctx, TaskType.weed, weed_interval_days(ctx))


# ── Registry ──────────────────────────────────────────────────────────────────

GENERATORS: dict[TaskType, TaskGenerator] = {
    TaskType.water: water_tasks,
    TaskType.fertilize: fertilize_tasks,
    TaskType.harvest: harvest_tasks,
    TaskType.prune: prune_tasks,
    TaskType.inspect: inspect_tasks,
    TaskType.mulch: mulch_tasks,
    TaskType.propagate: propagate_tasks,
    TaskType.transplant: transplant_tasks,
    TaskType.log: log_tasks,
    TaskType.weed: weed_tasks,
}
