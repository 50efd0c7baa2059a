import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import MissingRecordError
from app.models.task import PlantTask, UserPlant
from app.tasks import generate_tasks


@pytest.fixture
def job_sessions(monkeypatch, session_factory):
    monkeypatch.setattr(generate_tasks, "AsyncSessionLocal", session_factory)


async def test_job_stores_tasks(job_sessions, db: AsyncSession, user_plant: UserPlant):
    stored = await generate_tasks.generate_tasks_for_user_plant({}, user_plant.id)

    assert stored > 0
    count = await db.scalar(
        select(func.count()).select_from(PlantTask).where(PlantTask.user_plant_id == user_plant.id)
    )
    assert count == stored


async def test_job_missing_user_plant(job_sessions):
    with pytest.raises(MissingRecordError):
        await generate_tasks.generate_tasks_for_user_plant({}, "no-such-plant")
