"""
ARQ task: generate the care-task batch for a newly added user plant.

Enqueue once per plant addition:
    await redis.enqueue_job("generate_tasks_for_user_plant", user_plant_id)

Re-running for the same plant creates a second batch; tasks are only
deduplicated within one batch.
"""
import logging

from sqlalchemy import select

from app.core.errors import MissingRecordError
from app.db.session import AsyncSessionLocal
from app.models.task import UserPlant
from app.schemas.task import UserPlantIn
from app.services.task_generation import generate_plant_tasks

logger = logging.getLogger(__name__)


async def generate_tasks_for_user_plant(ctx: dict, user_plant_id: str) -> int:
    """Load the user plant row and store its 365-day task batch. Returns the number of tasks stored."""
    logger.info("generate_tasks_for_user_plant: starting for %s", user_plant_id)

    async with AsyncSessionLocal() as db:
        record = await db.scalar(select(UserPlant).where(UserPlant.id == user_plant_id))
        if record is None:
            raise MissingRecordError("User plant not found", details={"user_plant_id": user_plant_id})

        user_plant = UserPlantIn.model_validate(record)
        try:
            tasks = await generate_plant_tasks(user_plant, db)
        except Exception:
            logger.exception("generate_tasks_for_user_plant: failed for %s", user_plant_id)
            raise

    logger.info("generate_tasks_for_user_plant: complete — %d tasks stored for %s", len(tasks), user_plant_id)
    return len(tasks)
