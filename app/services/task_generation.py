"""
Care-task batch generation for one user plant.

Pipeline: check user plant → load plant + garden → resolve climate →
resolve context → run every generator → assemble (horizon filter, dedupe, sort) → validate → persist.

A batch is all-or-nothing: any validation or storage failure aborts it before
or during the single commit. Dedup is within the batch only; previously
persisted tasks are not consulted.
"""
import logging
from datetime import datetime, timezone
from typing import Iterable, Optional

from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import MissingRecordError, PersistenceError, SchemaValidationError
from app.models.garden import Garden
from app.models.plant import Plant
from app.models.task import PlantTask, UserPlant
from app.schemas.task import TaskBatch, TaskCreate, UserPlantIn, format_due_date, parse_due_date
from app.services.care_context import CareContext, resolve_context
from app.services.climate import resolve_climate
from app.services.task_generators import GENERATORS, CandidateTask

logger = logging.getLogger(__name__)


# ── Assembler ─────────────────────────────────────────────────────────────────


def collect_candidates(ctx: CareContext) -> list[CandidateTask]:
    candidates: list[CandidateTask] = []
    for task_type, generator in GENERATORS.items():
        produced = generator(ctx)
        logger.debug("collect_candidates: %s produced %d candidates", task_type.value, len(produced))
        candidates.extend(produced)
    return candidates


def _dedupe_key(task: CandidateTask) -> tuple[str, str, str]:
    return (task.user_plant_id, task.task_type.value, format_due_date(task.due_date))


def dedupe_tasks(tasks: Iterable[CandidateTask]) -> list[CandidateTask]:
    """Keep the first of each (user_plant_id, task_type, due_date) triple, preserving order."""
    seen: set[tuple[str, str, str]] = set()
    unique = []
    for task in tasks:
        key = _dedupe_key(task)
        if key in seen:
            continue
        seen.add(key)
        unique.append(task)
    return unique


def assemble_tasks(
    candidates: Iterable[CandidateTask], today: datetime, horizon: datetime
) -> list[CandidateTask]:
    candidates = list(candidates)
    in_horizon = [t for t in candidates if today < t.due_date <= horizon]
    dropped = len(candidates) - len(in_horizon)
    if dropped:
        logger.debug("assemble_tasks: dropped %d candidates outside (%s, %s]", dropped, today, horizon)

    unique = dedupe_tasks(in_horizon)
    return sorted(unique, key=lambda t: t.due_date)


# ── Validator ─────────────────────────────────────────────────────────────────


def validate_tasks(tasks: Iterable[CandidateTask]) -> list[TaskCreate]:
    payload = {
        "tasks": [
            {
                "user_plant_id": t.user_plant_id,
                "task_type": t.task_type.value,
                "due_date": format_due_date(t.due_date),
                "completed": False,
            }
            for t in tasks
        ]
    }
    try:
        batch = TaskBatch.model_validate(payload)
    except ValidationError as exc:
        logger.error("validate_tasks: batch rejected with %d errors", exc.error_count())
        raise SchemaValidationError(
            "Generated tasks failed schema validation",
            details=exc.errors(include_url=False, include_context=False),
        ) from exc
    return batch.tasks


def build_task_batch(ctx: CareContext) -> list[TaskCreate]:
    """Pure part of the pipeline: generate, assemble and validate one batch."""
    assembled = assemble_tasks(collect_candidates(ctx), ctx.today, ctx.horizon)
    return validate_tasks(assembled)


# ── Persistence sink ──────────────────────────────────────────────────────────


async def persist_tasks(db: AsyncSession, tasks: list[TaskCreate]) -> list[PlantTask]:
    rows = [
        PlantTask(
            user_plant_id=t.user_plant_id,
            task_type=t.task_type.value,
            due_date=parse_due_date(t.due_date),
            completed=t.completed,
        )
        for t in tasks
    ]
    try:
        db.add_all(rows)
        await db.flush()
        await db.commit()
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.error("persist_tasks: insert of %d tasks failed: %s", len(rows), exc)
        raise PersistenceError("Failed to store tasks", details=str(exc)) from exc
    return rows


# ── Orchestration ─────────────────────────────────────────────────────────────


async def _require_user_plant(db: AsyncSession, user_plant_id: str) -> None:
    exists = await db.scalar(select(UserPlant.id).where(UserPlant.id == user_plant_id))
    if exists is None:
        raise MissingRecordError("User plant not found", details={"user_plant_id": user_plant_id})


async def _load_plant(db: AsyncSession, plant_id: int) -> Plant:
    plant = await db.scalar(select(Plant).where(Plant.id == plant_id))
    if plant is None:
        raise MissingRecordError("Plant not found", details={"plant_id": plant_id})
    return plant


async def _load_garden(db: AsyncSession, garden_id: int) -> Garden:
    garden = await db.scalar(select(Garden).where(Garden.id == garden_id))
    if garden is None:
        raise MissingRecordError("Garden not found", details={"garden_id": garden_id})
    return garden


async def generate_plant_tasks(
    user_plant: UserPlantIn,
    db: AsyncSession,
    today: Optional[datetime] = None,
) -> list[PlantTask]:
    """
    Generate, validate and store the 365-day care-task batch for one user plant.

    The user plant row must already exist.

    Raises MissingRecordError, SchemaValidationError or PersistenceError; on
    any of them nothing is stored.
    """
    if today is None:
        today = datetime.now(timezone.utc)

    await _require_user_plant(db, user_plant.id)
    plant = await _load_plant(db, user_plant.plant_id)
    garden = await _load_garden(db, user_plant.garden_id)
    climate = await resolve_climate(db, garden.county)

    ctx = resolve_context(user_plant, plant, garden, climate, today)
    tasks = build_task_batch(ctx)
    logger.info(
        "generate_plant_tasks: %d tasks for user plant %s (region=%s, micro_adj=%.2fd)",
        len(tasks),
        user_plant.id,
        climate.region.value,
        ctx.micro_adjustment.total_seconds() / 86400,
    )

    return await persist_tasks(db, tasks)
