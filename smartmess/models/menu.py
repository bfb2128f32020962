"""
Menu model: one row per calendar date with four meal-slot item lists.
"""

from datetime import date
from typing import TYPE_CHECKING, Dict, List, Optional

from sqlalchemy import JSON, Date, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from smartmess.models.base import BaseModel, TimestampMixin
from smartmess.models.enums import MealType

if TYPE_CHECKING:
    from smartmess.models.rating import Rating

__all__ = ["Menu", "DEFAULT_MEAL_TIMINGS"]

DEFAULT_MEAL_TIMINGS: Dict[MealType, str] = {
    MealType.BREAKFAST: "7:00 AM - 9:00 AM",
    MealType.LUNCH: "12:00 PM - 2:00 PM",
    MealType.SNACKS: "4:00 PM - 5:00 PM",
    MealType.DINNER: "7:00 PM - 9:00 PM",
}


class Menu(BaseModel, TimestampMixin):
    """
    Daily mess menu.

    The unique constraint on ``date`` is what keeps one menu per day;
    writes go through an upsert keyed on it.
    """

    __tablename__ = "menus"

    menu_date: Mapped[date] = mapped_column("date", Date, nullable=False, unique=True, index=True)
    day_of_week: Mapped[str] = mapped_column(String(10), nullable=False)

    # JSON keeps the lists portable between PostgreSQL and SQLite
    breakfast: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    lunch: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    snacks: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    dinner: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)

    breakfast_time: Mapped[str] = mapped_column(
        String(40), nullable=False, default=DEFAULT_MEAL_TIMINGS[MealType.BREAKFAST]
    )
    lunch_time: Mapped[str] = mapped_column(
        String(40), nullable=False, default=DEFAULT_MEAL_TIMINGS[MealType.LUNCH]
    )
    snacks_time: Mapped[str] = mapped_column(
        String(40), nullable=False, default=DEFAULT_MEAL_TIMINGS[MealType.SNACKS]
    )
    dinner_time: Mapped[str] = mapped_column(
        String(40), nullable=False, default=DEFAULT_MEAL_TIMINGS[MealType.DINNER]
    )

    special_note: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    added_by: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("admins.id", ondelete="SET NULL"), nullable=True
    )

    ratings: Mapped[List["Rating"]] = relationship(back_populates="menu", cascade="all, delete-orphan")

    def items_for(self, meal_type: MealType) -> List[str]:
        """Return the item list of one meal slot."""
        return list(getattr(self, MealType(meal_type).value) or [])
