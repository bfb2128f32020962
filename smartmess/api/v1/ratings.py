"""
Rating endpoints.
"""

from typing import List

from fastapi import APIRouter, Depends, Response, status

from smartmess.api.deps import get_current_principal, get_rating_service, require_admin, require_student
from smartmess.models import Admin, Student
from smartmess.models.enums import MealType
from smartmess.schemas.common import MessageResponse, SuccessResponse
from smartmess.schemas.rating import (
    MealRatingsOut,
    MealRatingStats,
    MyRatingOut,
    RatingDetailOut,
    RatingOut,
    RatingSubmit,
    RatingUpdate,
)
from smartmess.services import Principal, RatingService

router = APIRouter(prefix="/ratings", tags=["Ratings"])


@router.post("", response_model=SuccessResponse[RatingOut])
def submit_rating(
    payload: RatingSubmit,
    response: Response,
    student: Student = Depends(require_student),
    rating_service: RatingService = Depends(get_rating_service),
):
    """Rate a meal. Rating the same meal again replaces the earlier rating."""
    rating, created = rating_service.submit(student.id, payload)
    response.status_code = status.HTTP_201_CREATED if created else status.HTTP_200_OK
    return SuccessResponse.create(
        data=RatingOut.model_validate(rating),
        message="Rating submitted successfully" if created else "Rating updated successfully",
    )


@router.get("/my-ratings", response_model=SuccessResponse[List[MyRatingOut]])
def my_ratings(
    student: Student = Depends(require_student),
    rating_service: RatingService = Depends(get_rating_service),
):
    return SuccessResponse.create(data=rating_service.list_mine(student.id))


@router.get("/all", response_model=SuccessResponse[List[RatingDetailOut]])
def all_ratings(
    admin: Admin = Depends(require_admin),
    rating_service: RatingService = Depends(get_rating_service),
):
    return SuccessResponse.create(data=rating_service.list_detailed())


@router.get("/analytics/average", response_model=SuccessResponse[List[MealRatingStats]])
def average_ratings(
    admin: Admin = Depends(require_admin),
    rating_service: RatingService = Depends(get_rating_service),
):
    return SuccessResponse.create(data=rating_service.analytics())


@router.get("/meal/{menu_id}/{meal_type}", response_model=SuccessResponse[MealRatingsOut])
def meal_ratings(
    menu_id: str,
    meal_type: MealType,
    principal: Principal = Depends(get_current_principal),
    rating_service: RatingService = Depends(get_rating_service),
):
    return SuccessResponse.create(data=rating_service.meal_ratings(menu_id, meal_type))


@router.get("/{rating_id}", response_model=SuccessResponse[RatingOut])
def get_rating(
    rating_id: str,
    principal: Principal = Depends(get_current_principal),
    rating_service: RatingService = Depends(get_rating_service),
):
    rating = rating_service.get(rating_id, principal)
    return SuccessResponse.create(data=RatingOut.model_validate(rating))


@router.put("/{rating_id}", response_model=SuccessResponse[RatingOut])
def update_rating(
    rating_id: str,
    payload: RatingUpdate,
    student: Student = Depends(require_student),
    rating_service: RatingService = Depends(get_rating_service),
):
    rating = rating_service.update(rating_id, student.id, payload)
    return SuccessResponse.create(data=RatingOut.model_validate(rating), message="Rating updated successfully")


@router.delete("/{rating_id}", response_model=MessageResponse)
def delete_rating(
    rating_id: str,
    student: Student = Depends(require_student),
    rating_service: RatingService = Depends(get_rating_service),
):
    rating_service.delete(rating_id, student.id)
    return MessageResponse.create("Rating deleted successfully")
