"""
Rating service: submission, ownership-checked edits and analytics.
"""

import logging
from datetime import date
from typing import List, Optional, Tuple, Union

from sqlalchemy.orm import Session

from smartmess.config.settings import Settings
from smartmess.core.exceptions import ConflictError, NotFoundError
from smartmess.models import Admin, Rating, Student
from smartmess.models.enums import MealType
from smartmess.repositories import MenuRepository, RatingRepository
from smartmess.schemas.rating import (
    MealRatingOut,
    MealRatingsOut,
    MealRatingStats,
    MyRatingOut,
    RatingDetailOut,
    RatingSubmit,
    RatingUpdate,
)
from smartmess.utils.date_utils import day_bounds_utc

logger = logging.getLogger(__name__)


class RatingService:
    """
    Ratings are unique per (student, menu, meal type). Submitting again
    overwrites the earlier score in a single upsert.

    A student asking for a rating they do not own gets the same 404 as for
    a rating that does not exist.
    """

    def __init__(self, db: Session, settings: Settings):
        self.db = db
        self.settings = settings
        self.ratings = RatingRepository(db)
        self.menus = MenuRepository(db)

    def submit(self, student_id: str, data: RatingSubmit) -> Tuple[Rating, bool]:
        """
        Create or replace the student's rating for one meal.

        Returns:
            The stored rating and whether it was newly created

        Raises:
            NotFoundError: If the menu does not exist
        """
        if self.menus.get(data.menu_id) is None:
            raise NotFoundError("Menu")

        try:
            rating, created = self.ratings.upsert_rating(
                student_id=student_id,
                menu_id=data.menu_id,
                meal_type=data.meal_type,
                rating=data.rating,
                comment=data.comment or None,
            )
        except ConflictError as e:
            # The menu can disappear between the lookup and the insert
            if self.menus.get(data.menu_id) is None:
                raise NotFoundError("Menu") from e
            raise
        return rating, created

    def list_mine(self, student_id: str) -> List[MyRatingOut]:
        return [MyRatingOut.from_rating(r) for r in self.ratings.list_for_student(student_id)]

    def get(self, rating_id: str, principal: Union[Student, Admin]) -> Rating:
        """Fetch a rating; students only see their own."""
        rating = self.ratings.get(rating_id)
        if rating is None or (isinstance(principal, Student) and rating.student_id != principal.id):
            raise NotFoundError("Rating")
        return rating

    def _get_owned(self, rating_id: str, student_id: str) -> Rating:
        rating = self.ratings.get(rating_id)
        if rating is None or rating.student_id != student_id:
            raise NotFoundError("Rating")
        return rating

    def update(self, rating_id: str, student_id: str, data: RatingUpdate) -> Rating:
        rating = self._get_owned(rating_id, student_id)
        return self.ratings.update(rating, {"rating": data.rating, "comment": data.comment or None})

    def delete(self, rating_id: str, student_id: str) -> None:
        self.ratings.delete(self._get_owned(rating_id, student_id))

    def meal_ratings(self, menu_id: str, meal_type: MealType) -> MealRatingsOut:
        """Ratings for one meal with student names, plus average and count."""
        ratings = [MealRatingOut.from_rating(r) for r in self.ratings.list_for_meal(menu_id, meal_type)]
        average, count = self.ratings.average_for_meal(menu_id, meal_type)
        return MealRatingsOut(ratings=ratings, average=round(average, 1), count=count)

    def analytics(self) -> List[MealRatingStats]:
        """Average, count and 1-5 distribution per meal type over all history."""
        stats = []
        for meal_type, distribution in self.ratings.distribution_by_meal().items():
            count = sum(distribution.values())
            total = sum(value * n for value, n in distribution.items())
            stats.append(
                MealRatingStats(
                    meal_type=meal_type,
                    average=round(total / count, 1) if count else 0.0,
                    count=count,
                    distribution={str(value): n for value, n in distribution.items()},
                )
            )
        return stats

    def list_detailed(
        self,
        meal_type: Optional[MealType] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        limit: Optional[int] = None,
    ) -> List[RatingDetailOut]:
        """
        Ratings joined with student and menu, newest first.

        The date bounds are inclusive calendar days of submission.
        """
        created_from = day_bounds_utc(start_date, self.settings.TIMEZONE)[0] if start_date else None
        created_before = day_bounds_utc(end_date, self.settings.TIMEZONE)[1] if end_date else None
        ratings = self.ratings.list_detailed(
            meal_type=meal_type,
            created_from=created_from,
            created_before=created_before,
            limit=limit,
        )
        return [RatingDetailOut.from_rating(r) for r in ratings]
