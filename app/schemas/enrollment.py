from pydantic import Field, field_validator
from typing import List, Optional
from datetime import datetime
from app.schemas.base import CamelModel
from app.schemas.course import CourseResponse
from app.schemas.lesson import LessonResponse

class EnrollmentCreate(CamelModel):
    # Оба поля необязательны на уровне схемы: отсутствие проверяется
    # сервисом, чтобы вернуть 400 с понятным сообщением
    user_id: Optional[str] = None
    course_id: Optional[str] = None

class EnrollmentCreateResponse(CamelModel):
    success: bool
    message: str
    course_id: str
    user_id: str
    enrollment_id: str

class EnrollmentUpdate(CamelModel):
    progress: Optional[int] = Field(None, ge=0, le=100)
    completed_at: Optional[datetime] = None

    @field_validator("progress")
    def progress_not_null(cls, v):
        if v is None:
            raise ValueError("progress cannot be null")
        return v

class EnrollmentResponse(CamelModel):
    id: str
    user_id: str
    course_id: str
    progress: int
    enrolled_at: datetime
    last_accessed_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

class EnrollmentWithCourse(EnrollmentResponse):
    course: CourseResponse

class EnrollmentDetailResponse(EnrollmentResponse):
    course: CourseResponse
    lessons: List[LessonResponse] = []
    completed_lessons: List[str] = []

class UnenrollResponse(CamelModel):
    success: bool
    deleted_id: str
