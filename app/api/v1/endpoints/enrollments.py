from fastapi import APIRouter, Depends
from typing import List

from app.api.dependencies import get_enrollment_service
from app.schemas.enrollment import (
    EnrollmentCreate,
    EnrollmentCreateResponse,
    EnrollmentDetailResponse,
    EnrollmentResponse,
    EnrollmentUpdate,
    EnrollmentWithCourse,
    UnenrollResponse
)
from app.schemas.progress import EnrollmentProgressResponse, LessonProgressResponse, LessonProgressUpdate
from app.services.enrollment_service import EnrollmentService

router = APIRouter()

@router.post("", response_model=EnrollmentCreateResponse)
def create_enrollment(
    payload: EnrollmentCreate,
    service: EnrollmentService = Depends(get_enrollment_service)
):
    """Записать пользователя на курс"""
    enrollment, created = service.enroll(user_id=payload.user_id, course_id=payload.course_id)
    return EnrollmentCreateResponse(
        success=True,
        message="Enrollment successful" if created else "Already enrolled",
        course_id=enrollment.course_id,
        user_id=enrollment.user_id,
        enrollment_id=enrollment.id
    )

@router.get("/user/{user_id}", response_model=List[EnrollmentWithCourse])
def read_user_enrollments(
    user_id: str,
    service: EnrollmentService = Depends(get_enrollment_service)
):
    """Записи пользователя с курсами"""
    return service.get_user_enrollments(user_id)

@router.get("/{enrollment_id}", response_model=EnrollmentDetailResponse)
def read_enrollment(
    enrollment_id: str,
    service: EnrollmentService = Depends(get_enrollment_service)
):
    """Запись с уроками и пересчитанным прогрессом"""
    return service.get_enrollment_with_progress(enrollment_id)

@router.put("/{enrollment_id}", response_model=EnrollmentResponse)
def update_enrollment(
    enrollment_id: str,
    patch: EnrollmentUpdate,
    service: EnrollmentService = Depends(get_enrollment_service)
):
    """Частичное обновление записи"""
    return service.update_enrollment(enrollment_id, patch)

@router.get("/{enrollment_id}/progress", response_model=EnrollmentProgressResponse)
def read_enrollment_progress(
    enrollment_id: str,
    service: EnrollmentService = Depends(get_enrollment_service)
):
    """Подробный прогресс по урокам"""
    return service.get_progress_detail(enrollment_id)

@router.put("/{enrollment_id}/lessons/{lesson_id}/progress", response_model=LessonProgressResponse)
def update_lesson_progress(
    enrollment_id: str,
    lesson_id: str,
    patch: LessonProgressUpdate,
    service: EnrollmentService = Depends(get_enrollment_service)
):
    """Отметить просмотр/завершение урока"""
    return service.record_lesson_progress(enrollment_id, lesson_id, patch)

@router.delete("/{enrollment_id}", response_model=UnenrollResponse)
def delete_enrollment(
    enrollment_id: str,
    service: EnrollmentService = Depends(get_enrollment_service)
):
    """Отписаться от курса"""
    deleted_id = service.unenroll(enrollment_id)
    return UnenrollResponse(success=True, deleted_id=deleted_id)
