"""
Admin dashboard counters.
"""

from sqlalchemy.orm import Session

from smartmess.config.settings import Settings
from smartmess.models import Student
from smartmess.models.enums import ComplaintStatus
from smartmess.repositories import ComplaintRepository, MenuRepository, RatingRepository, StudentRepository
from smartmess.schemas.dashboard import DashboardStats
from smartmess.utils.date_utils import day_bounds_utc, local_today


class DashboardService:
    def __init__(self, db: Session, settings: Settings):
        self.db = db
        self.settings = settings
        self.students = StudentRepository(db)
        self.ratings = RatingRepository(db)
        self.complaints = ComplaintRepository(db)
        self.menus = MenuRepository(db)

    def stats(self) -> DashboardStats:
        """Headline numbers; "today" is the calendar day in TIMEZONE."""
        today_start, today_end = day_bounds_utc(local_today(self.settings.TIMEZONE), self.settings.TIMEZONE)
        return DashboardStats(
            total_students=self.students.count(),
            verified_students=self.students.count(Student.is_verified.is_(True)),
            total_ratings=self.ratings.count(),
            avg_rating=round(self.ratings.overall_average(), 1),
            today_ratings=self.ratings.count_created_between(today_start, today_end),
            pending_complaints=self.complaints.count(status=ComplaintStatus.PENDING),
            total_menus=self.menus.count(),
        )
