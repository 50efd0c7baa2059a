from datetime import datetime, timezone
from typing import Optional

import pytest

from app.models.garden import Garden
from app.models.plant import Plant
from app.schemas.task import UserPlantIn
from app.services.care_context import CareContext, resolve_context
from app.services.climate import DEFAULT_CLIMATE, ClimateProfile

PLANT_ID = "0b8e2f4c-5d6a-4e1b-8c7f-9a3d2e1f0c5b"
NEW_YEAR_2025 = datetime(2025, 1, 1, tzinfo=timezone.utc)


def build_context(
    today: datetime = NEW_YEAR_2025,
    climate: ClimateProfile = DEFAULT_CLIMATE,
    created_at: Optional[datetime] = None,
    plant: Optional[dict] = None,
    garden: Optional[dict] = None,
) -> CareContext:
    plant_fields = {
        "id": 1,
        "common_name": "Test plant",
        "maintenance": "Medium",
        "growth_rate": "Slow",
        "prefers_cool_season": False,
        "bloom_months": [],
        "harvest_months": [],
        "propagation_methods": [],
        "problems": [],
    }
    plant_fields.update(plant or {})
    garden_fields = {
        "id": 1,
        "name": "Test garden",
        "soil_texture": "Loam",
        "elevation_ft": 0.0,
        "urban_index": 0.0,
        "maintenance": "Medium",
        "county": None,
    }
    garden_fields.update(garden or {})

    user_plant = UserPlantIn(
        id=PLANT_ID,
        garden_id=1,
        plant_id=1,
        nickname="Fern",
        created_at=created_at or today,
    )
    return resolve_context(user_plant, Plant(**plant_fields), Garden(**garden_fields), climate, today)


@pytest.fixture
def make_context():
    return build_context
