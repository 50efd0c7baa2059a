from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.session import get_db
from app.models.task import PlantTask
from app.schemas.task import (
    GenerateTasksRequest,
    GenerateTasksResponse,
    TaskRead,
    TaskType,
    TaskTypeInfo,
)
from app.services.care_rules import TASK_TYPE_DESCRIPTIONS
from app.services.task_generation import generate_plant_tasks

router = APIRouter(prefix="/tasks", tags=["tasks"])
user_plant_tasks_router = APIRouter(prefix="/user-plants", tags=["tasks"])


# ── Generation ────────────────────────────────────────────────────────────────


@router.post("/generate", response_model=GenerateTasksResponse)
async def generate_tasks(data: GenerateTasksRequest, db: AsyncSession = Depends(get_db)):
    tasks = await generate_plant_tasks(data.user_plant, db)
    return GenerateTasksResponse(tasks=[TaskRead.model_validate(t) for t in tasks])


# ── Catalogue ─────────────────────────────────────────────────────────────────


@router.get("/types", response_model=list[TaskTypeInfo])
async def list_task_types():
    return [
        TaskTypeInfo(task_type=t, label=t.value, description=TASK_TYPE_DESCRIPTIONS[t])
        for t in TaskType
    ]


# ── Per-plant task list ───────────────────────────────────────────────────────


@user_plant_tasks_router.get("/{user_plant_id}/tasks", response_model=list[TaskRead])
async def list_user_plant_tasks(
    user_plant_id: str,
    db: AsyncSession = Depends(get_db),
    completed: Optional[bool] = Query(None),
):
    q = select(PlantTask).where(PlantTask.user_plant_id == user_plant_id)
    if completed is not None:
        q = q.where(PlantTask.completed == completed)
    result = await db.execute(q.order_by(PlantTask.due_date, PlantTask.id))
    return result.scalars().all()
