from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, Enum, Float, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base


class Garden(Base):
    __tablename__ = "gardens"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(100))
    description: Mapped[Optional[str]] = mapped_column(Text)

    # Site attributes
    soil_texture: Mapped[Optional[str]] = mapped_column(String(50))
    elevation_ft: Mapped[Optional[float]] = mapped_column(Float)
    urban_index: Mapped[Optional[float]] = mapped_column(Float)  # 0 (rural) – 1 (dense urban)
    maintenance: Mapped[Optional[str]] = mapped_column(
        Enum("Low", "Medium", "High", name="maintenance_level_enum")
    )
    county: Mapped[Optional[str]] = mapped_column(String(100))

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    user_plants: Mapped[list["UserPlant"]] = relationship(
        back_populates="garden", cascade="all, delete-orphan"
    )
