from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, Enum, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base


class UserPlant(Base):
    __tablename__ = "user_plants"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)  # UUID
    garden_id: Mapped[int] = mapped_column(ForeignKey("gardens.id", ondelete="CASCADE"), index=True)
    plant_id: Mapped[int] = mapped_column(ForeignKey("plants.id"), index=True)
    nickname: Mapped[str] = mapped_column(String(100))

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )

    # Relationships
    garden: Mapped["Garden"] = relationship(back_populates="user_plants")
    plant: Mapped["Plant"] = relationship(back_populates="user_plants")
    tasks: Mapped[list["PlantTask"]] = relationship(
        back_populates="user_plant", cascade="all, delete-orphan"
    )


class PlantTask(Base):
    __tablename__ = "plant_tasks"

    id: Mapped[int] = mapped_column(primary_key=True)
    user_plant_id: Mapped[str] = mapped_column(
        ForeignKey("user_plants.id", ondelete="CASCADE"), index=True
    )

    task_type: Mapped[str] = mapped_column(
        Enum(
            "Water", "Fertilize", "Harvest", "Prune", "Inspect",
            "Mulch", "Propagate", "Transplant", "Log", "Weed",
            name="task_type_enum",
        )
    )
    due_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), index=True)
    completed: Mapped[bool] = mapped_column(Boolean, default=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )

    # Relationships
    user_plant: Mapped["UserPlant"] = relationship(back_populates="tasks")
