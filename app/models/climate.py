from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, Enum, Float, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class CountyClimate(Base):
    """Regional climate profile keyed by county name."""

    __tablename__ = "county_climates"

    id: Mapped[int] = mapped_column(primary_key=True)
    county: Mapped[str] = mapped_column(String(100), unique=True, index=True)
    region: Mapped[str] = mapped_column(
        Enum("Coastal", "Mountains", "Piedmont", name="climate_region_enum")
    )

    # Frost dates as day-of-year (1–366)
    last_frost_doy: Mapped[Optional[int]] = mapped_column(Integer)
    first_frost_doy: Mapped[Optional[int]] = mapped_column(Integer)

    avg_annual_precip_mm: Mapped[Optional[float]] = mapped_column(Float)
    usda_zone_min: Mapped[Optional[str]] = mapped_column(String(5))
    usda_zone_max: Mapped[Optional[str]] = mapped_column(String(5))

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
