from app.models.garden import Garden
from app.models.plant import Plant
from app.models.climate import CountyClimate
from app.models.task import UserPlant, PlantTask

__all__ = [
    "Garden",
    "Plant",
    "CountyClimate",
    "UserPlant",
    "PlantTask",
]
