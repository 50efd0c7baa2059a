from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import JSON, Boolean, DateTime, Enum, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base


class Plant(Base):
    """Botanical traits consumed read-only by the care-task scheduler."""

    __tablename__ = "plants"

    id: Mapped[int] = mapped_column(primary_key=True)
    common_name: Mapped[str] = mapped_column(String(200), index=True)
    scientific_name: Mapped[Optional[str]] = mapped_column(String(200), index=True)
    description: Mapped[Optional[str]] = mapped_column(Text)

    # Care traits
    maintenance: Mapped[Optional[str]] = mapped_column(
        Enum("Low", "Medium", "High", name="maintenance_level_enum")
    )
    growth_rate: Mapped[Optional[str]] = mapped_column(
        Enum("Fast", "Slow", name="growth_rate_enum")
    )
    prefers_cool_season: Mapped[bool] = mapped_column(Boolean, default=False)

    # Calendars (month names, e.g. ["May", "June"])
    bloom_months: Mapped[Optional[list[str]]] = mapped_column(JSON)
    harvest_months: Mapped[Optional[list[str]]] = mapped_column(JSON)

    propagation_methods: Mapped[Optional[list[str]]] = mapped_column(JSON)
    problems: Mapped[Optional[list[str]]] = mapped_column(JSON)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    user_plants: Mapped[list["UserPlant"]] = relationship(back_populates="plant")
