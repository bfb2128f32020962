"""
Admin dashboard schema.
"""

from smartmess.schemas.common import BaseSchema

__all__ = ["DashboardStats"]


class DashboardStats(BaseSchema):
    total_students: int
    verified_students: int
    total_ratings: int
    avg_rating: float
    today_ratings: int
    pending_complaints: int
    total_menus: int
