"""
Rating repository: per-meal scores and their aggregates.
"""

from datetime import datetime
from typing import Dict, List, Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.orm import Session, joinedload

from smartmess.models import Menu, Rating, Student
from smartmess.models.enums import MealType
from smartmess.repositories.base_repository import BaseRepository


class RatingRepository(BaseRepository[Rating]):
    conflict_message = "Rating could not be saved"

    def __init__(self, db: Session):
        super().__init__(Rating, db)

    def upsert_rating(
        self,
        student_id: str,
        menu_id: str,
        meal_type: MealType,
        rating: int,
        comment: Optional[str],
    ) -> Tuple[Rating, bool]:
        """Store the student's rating for one meal, replacing an earlier one."""
        return self.upsert(
            {
                "student_id": student_id,
                "menu_id": menu_id,
                "meal_type": meal_type,
                "rating": rating,
                "comment": comment,
            },
            conflict_columns=["student_id", "menu_id", "meal_type"],
            update_columns=["rating", "comment"],
        )

    def list_for_student(self, student_id: str) -> List[Rating]:
        """The student's ratings with their menus loaded, newest first."""
        stmt = (
            select(Rating)
            .options(joinedload(Rating.menu))
            .where(Rating.student_id == student_id)
            .order_by(Rating.created_at.desc())
        )
        with self._translate_errors("List"):
            return list(self.db.scalars(stmt).all())

    def list_for_meal(self, menu_id: str, meal_type: MealType) -> List[Rating]:
        stmt = (
            select(Rating)
            .options(joinedload(Rating.student))
            .where(Rating.menu_id == menu_id, Rating.meal_type == meal_type)
            .order_by(Rating.created_at.desc())
        )
        with self._translate_errors("List"):
            return list(self.db.scalars(stmt).all())

    def list_detailed(
        self,
        meal_type: Optional[MealType] = None,
        created_from: Optional[datetime] = None,
        created_before: Optional[datetime] = None,
        limit: Optional[int] = None,
    ) -> List[Rating]:
        """Ratings joined with student and menu, newest first."""
        stmt = select(Rating).options(joinedload(Rating.student), joinedload(Rating.menu))
        if meal_type is not None:
            stmt = stmt.where(Rating.meal_type == meal_type)
        if created_from is not None:
            stmt = stmt.where(Rating.created_at >= created_from)
        if created_before is not None:
            stmt = stmt.where(Rating.created_at < created_before)
        stmt = stmt.order_by(Rating.created_at.desc())
        if limit is not None:
            stmt = stmt.limit(limit)
        with self._translate_errors("List"):
            return list(self.db.scalars(stmt).all())

    def average_for_meal(self, menu_id: str, meal_type: MealType) -> Tuple[float, int]:
        """Average and count for one meal; the average of no ratings is 0."""
        stmt = select(func.avg(Rating.rating), func.count(Rating.id)).where(
            Rating.menu_id == menu_id, Rating.meal_type == meal_type
        )
        with self._translate_errors("Aggregate"):
            average, count = self.db.execute(stmt).one()
        return float(average or 0), int(count or 0)

    def overall_average(self) -> float:
        with self._translate_errors("Aggregate"):
            return float(self.db.scalar(select(func.avg(Rating.rating))) or 0)

    def distribution_by_meal(self) -> Dict[MealType, Dict[int, int]]:
        """Counts per (meal type, rating value) across all history."""
        stmt = select(Rating.meal_type, Rating.rating, func.count(Rating.id)).group_by(
            Rating.meal_type, Rating.rating
        )
        distribution: Dict[MealType, Dict[int, int]] = {
            meal: {value: 0 for value in range(1, 6)} for meal in MealType
        }
        with self._translate_errors("Aggregate"):
            for meal_type, value, count in self.db.execute(stmt).all():
                distribution[MealType(meal_type)][int(value)] = int(count)
        return distribution

    def count_created_between(self, start: datetime, end: datetime) -> int:
        return self.count(Rating.created_at >= start, Rating.created_at < end)
