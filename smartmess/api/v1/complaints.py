"""
Complaint endpoints for students.
"""

from typing import List

from fastapi import APIRouter, Depends, status

from smartmess.api.deps import get_complaint_service, require_student
from smartmess.models import Student
from smartmess.schemas.common import SuccessResponse
from smartmess.schemas.complaint import ComplaintCreate, ComplaintOut
from smartmess.services import ComplaintService

router = APIRouter(prefix="/complaints", tags=["Complaints"])


@router.post("", response_model=SuccessResponse[ComplaintOut], status_code=status.HTTP_201_CREATED)
def submit_complaint(
    payload: ComplaintCreate,
    student: Student = Depends(require_student),
    complaint_service: ComplaintService = Depends(get_complaint_service),
):
    complaint = complaint_service.submit(student.id, payload)
    return SuccessResponse.create(
        data=ComplaintOut.model_validate(complaint),
        message="Complaint submitted successfully",
    )


@router.get("/my-complaints", response_model=SuccessResponse[List[ComplaintOut]])
def my_complaints(
    student: Student = Depends(require_student),
    complaint_service: ComplaintService = Depends(get_complaint_service),
):
    complaints = complaint_service.list_mine(student.id)
    return SuccessResponse.create(data=[ComplaintOut.model_validate(c) for c in complaints])


@router.get("/{complaint_id}", response_model=SuccessResponse[ComplaintOut])
def get_complaint(
    complaint_id: str,
    student: Student = Depends(require_student),
    complaint_service: ComplaintService = Depends(get_complaint_service),
):
    complaint = complaint_service.get_mine(complaint_id, student.id)
    return SuccessResponse.create(data=ComplaintOut.model_validate(complaint))
