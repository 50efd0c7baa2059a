from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer

# Strict ISO-8601 UTC with millisecond precision, e.g. 2025-01-05T00:00:00.000Z
DUE_DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z$"


class TaskType(str, Enum):
    water = "Water"
    fertilize = "Fertilize"
    harvest = "Harvest"
    prune = "Prune"
    inspect = "Inspect"
    mulch = "Mulch"
    propagate = "Propagate"
    transplant = "Transplant"
    log = "Log"
    weed = "Weed"


def format_due_date(value: datetime) -> str:
    """Render an instant as UTC ISO-8601 with milliseconds and a Z suffix."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_due_date(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


# ── Request ───────────────────────────────────────────────────────────────────


class UserPlantIn(BaseModel):
    id: str
    garden_id: int
    plant_id: int
    nickname: str
    created_at: datetime

    model_config = {"from_attributes": True}


class GenerateTasksRequest(BaseModel):
    user_plant: UserPlantIn = Field(alias="userPlant")

    model_config = ConfigDict(populate_by_name=True)


# ── Validation ────────────────────────────────────────────────────────────────


class TaskCreate(BaseModel):
    user_plant_id: str
    task_type: TaskType
    due_date: str = Field(pattern=DUE_DATE_PATTERN)
    completed: bool = False

    model_config = ConfigDict(extra="forbid")


class TaskBatch(BaseModel):
    tasks: list[TaskCreate]


# ── Response ──────────────────────────────────────────────────────────────────


class TaskRead(BaseModel):
    id: int
    user_plant_id: str
    task_type: TaskType
    due_date: datetime
    completed: bool

    model_config = {"from_attributes": True}

    @field_serializer("due_date")
    def serialize_due_date(self, value: datetime) -> str:
        return format_due_date(value)


class GenerateTasksResponse(BaseModel):
    tasks: list[TaskRead]


class TaskTypeInfo(BaseModel):
    task_type: TaskType
    label: str
    description: str


class ErrorResponse(BaseModel):
    error: str
    code: str
    details: Optional[Any] = None
    stack: Optional[str] = None
