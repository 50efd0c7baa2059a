import re

from httpx import AsyncClient
from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.task import PlantTask, UserPlant
from app.schemas.task import DUE_DATE_PATTERN


def _payload(user_plant: UserPlant, **overrides) -> dict:
    body = {
        "id": user_plant.id,
        "garden_id": user_plant.garden_id,
        "plant_id": user_plant.plant_id,
        "nickname": user_plant.nickname,
        "created_at": "2025-01-01T00:00:00Z",
    }
    body.update(overrides)
    return {"userPlant": body}


async def _generate(client: AsyncClient, user_plant: UserPlant) -> list[dict]:
    res = await client.post("/api/v1/tasks/generate", json=_payload(user_plant))
    assert res.status_code == 200
    return res.json()["tasks"]


async def test_health(client: AsyncClient):
    res = await client.get("/api/health")
    assert res.status_code == 200
    assert res.json() == {"status": "ok"}


async def test_generate_tasks(client: AsyncClient, user_plant: UserPlant):
    tasks = await _generate(client, user_plant)

    assert tasks
    assert {t["task_type"] for t in tasks} >= {"Water", "Inspect", "Log", "Weed"}
    for task in tasks:
        assert task["user_plant_id"] == user_plant.id
        assert task["completed"] is False
        assert re.match(DUE_DATE_PATTERN, task["due_date"])
    due_dates = [t["due_date"] for t in tasks]
    assert due_dates == sorted(due_dates)


async def test_generate_tasks_missing_plant(client: AsyncClient, user_plant: UserPlant):
    res = await client.post("/api/v1/tasks/generate", json=_payload(user_plant, plant_id=999))

    assert res.status_code == 400
    data = res.json()
    assert data["code"] == "missing_record"
    assert data["error"] == "Plant not found"
    assert data["details"] == {"plant_id": 999}


async def test_generate_tasks_unknown_user_plant(client: AsyncClient, user_plant: UserPlant):
    res = await client.post("/api/v1/tasks/generate", json=_payload(user_plant, id="not-stored"))

    assert res.status_code == 400
    data = res.json()
    assert data["code"] == "missing_record"
    assert data["details"] == {"user_plant_id": "not-stored"}


async def test_generate_tasks_missing_garden(client: AsyncClient, user_plant: UserPlant):
    res = await client.post("/api/v1/tasks/generate", json=_payload(user_plant, garden_id=999))

    assert res.status_code == 400
    assert res.json()["code"] == "missing_record"


async def test_generate_tasks_invalid_body(client: AsyncClient):
    res = await client.post("/api/v1/tasks/generate", json={"userPlant": {"id": "abc"}})

    assert res.status_code == 400
    data = res.json()
    assert data["code"] == "invalid_request"
    assert data["details"]


async def test_list_user_plant_tasks(client: AsyncClient, user_plant: UserPlant):
    generated = await _generate(client, user_plant)

    res = await client.get(f"/api/v1/user-plants/{user_plant.id}/tasks")

    assert res.status_code == 200
    listed = res.json()
    assert len(listed) == len(generated)
    assert listed[0]["due_date"] == generated[0]["due_date"]


async def test_list_user_plant_tasks_completed_filter(
    client: AsyncClient, db: AsyncSession, user_plant: UserPlant
):
    generated = await _generate(client, user_plant)
    await db.execute(update(PlantTask).where(PlantTask.id == generated[0]["id"]).values(completed=True))
    await db.commit()

    done = await client.get(f"/api/v1/user-plants/{user_plant.id}/tasks", params={"completed": "true"})
    open_ = await client.get(f"/api/v1/user-plants/{user_plant.id}/tasks", params={"completed": "false"})

    assert [t["id"] for t in done.json()] == [generated[0]["id"]]
    assert len(open_.json()) == len(generated) - 1


async def test_list_tasks_unknown_user_plant(client: AsyncClient):
    res = await client.get("/api/v1/user-plants/does-not-exist/tasks")
    assert res.status_code == 200
    assert res.json() == []


async def test_task_types(client: AsyncClient):
    res = await client.get("/api/v1/tasks/types")

    assert res.status_code == 200
    types = res.json()
    assert [t["task_type"] for t in types] == [
        "Water", "Fertilize", "Harvest", "Prune", "Inspect",
        "Mulch", "Propagate", "Transplant", "Log", "Weed",
    ]
    assert all(t["description"] for t in types)
