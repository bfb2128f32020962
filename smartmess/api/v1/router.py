"""
API v1 router: aggregates the SmartMess endpoint modules.
"""

from fastapi import APIRouter

from smartmess.api.v1 import admin, auth, complaints, menu, ratings, student
from smartmess.schemas.common import ErrorResponse

router = APIRouter(
    responses={
        400: {"model": ErrorResponse, "description": "Bad Request"},
        401: {"model": ErrorResponse, "description": "Unauthorized"},
        403: {"model": ErrorResponse, "description": "Forbidden"},
        404: {"model": ErrorResponse, "description": "Not Found"},
        500: {"model": ErrorResponse, "description": "Internal Server Error"},
    }
)

router.include_router(auth.router)
router.include_router(menu.router)
router.include_router(ratings.router)
router.include_router(complaints.router)
router.include_router(student.router)
router.include_router(admin.router)
